from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from storefront.health import service as health_service
from storefront.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"message": "health OK!"}

@router.get("/supabase")
def health_supabase(request: Request):
    info = health_service.health_supabase_info()
    info["rate_limit"] = rate_limit_health_info(request)
    return JSONResponse(info)
