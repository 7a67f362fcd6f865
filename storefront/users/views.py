# module storefront.users.views

"""Endpoints du profil de l'utilisateur connecté.
- GET /api/my/user: profil miroir du sujet du jeton (404 si absent).
- POST /api/my/user: crée le profil s'il n'existe pas (201), sinon le renvoie (200).
Ces routes n'exigent que l'identité (jeton valide), pas un profil existant.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from storefront.utils.security import require_identity
from storefront.utils.errors import NotFoundError
from storefront.users import service as users_service
from storefront.users.models import UserCreate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/my/user", tags=["My User API"])


@router.get("")
def get_current_user_profile(identity: Dict[str, Any] = Depends(require_identity)):
    user = users_service.get_user(identity["sub"])
    if not user:
        raise NotFoundError("Utilisateur introuvable")
    return user


@router.post("")
def create_current_user_profile(body: Optional[UserCreate] = None, identity: Dict[str, Any] = Depends(require_identity)):
    """Crée le profil courant.
    - email/name du corps prioritaires, sinon ceux du fournisseur d'identité.
    """
    body = body or UserCreate()
    user, created = users_service.create_current_user(
        identity["sub"],
        body.email or identity.get("email"),
        body.name or identity.get("name"),
    )
    return JSONResponse(user, status_code=201 if created else 200)
