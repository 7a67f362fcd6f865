"""
Gestionnaires d'exceptions de l'API.
- HTTPException (et erreurs métier de storefront.utils.errors): JSON {detail, message}
- Erreur de validation pydantic: 400 au lieu du 422 par défaut
- Toute autre exception: 500 générique, détail uniquement dans les logs
"""
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Enregistre les handlers; le frontend lit la clé 'message', 'detail' reste
    disponible pour les clients FastAPI habituels.
    """
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        detail = exc.detail
        message = detail if isinstance(detail, str) else "Erreur"
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": detail, "message": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"detail": jsonable_encoder(exc.errors()), "message": "Requête invalide"},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Erreur non gérée %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Erreur interne du serveur"})
