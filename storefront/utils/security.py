import logging
from fastapi import Request, HTTPException, Depends
from typing import Dict, Any

from storefront.utils.errors import AuthenticationError

logger = logging.getLogger(__name__)


def _bearer_token(request: Request) -> str:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:].strip()
    return ""


def get_current_identity(request: Request) -> Dict[str, Any]:
    """Vérifie le Bearer JWT auprès du fournisseur d'identité et retourne {sub, email, name, token}."""
    token = _bearer_token(request)
    if not token:
        raise AuthenticationError("Non authentifié")

    try:
        # Délégué au service Auth
        from storefront.auth.service import get_identity_from_token as _svc_get_identity
        identity = _svc_get_identity(token)
    except HTTPException:
        raise
    except Exception:
        logger.warning("Validation du jeton impossible", exc_info=True)
        raise AuthenticationError("Session expirée, veuillez vous connecter")

    if not identity.get("sub"):
        raise AuthenticationError("Session expirée, veuillez vous connecter")
    return identity


def get_current_user(identity: Dict[str, Any] = Depends(get_current_identity)) -> Dict[str, Any]:
    """Résout l'identité vers l'utilisateur interne; le profil est créé à la première requête."""
    try:
        from storefront.users.service import get_or_create_user
        user = get_or_create_user(identity["sub"], identity.get("email"), identity.get("name"))
    except HTTPException:
        raise
    except Exception:
        logger.exception("Résolution de l'utilisateur impossible sub=%s", identity.get("sub"))
        raise AuthenticationError("Utilisateur inconnu")

    if not user or not user.get("id"):
        raise AuthenticationError("Utilisateur inconnu")
    return user


def require_identity(identity: Dict[str, Any] = Depends(get_current_identity)) -> Dict[str, Any]:
    return identity


def require_user(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    return user
