"""Couche service du domaine Utilisateurs.
- get_or_create_user: création paresseuse du profil au premier appel authentifié.
- create_current_user: création explicite (POST /api/my/user), idempotente.
"""
import logging
from typing import Any, Dict, Optional, Tuple

from storefront.users import repository
from storefront.users.models import user_from_row

logger = logging.getLogger(__name__)


def get_user(external_id: str) -> Optional[Dict[str, Any]]:
    row = repository.get_user_by_external_id(external_id)
    return user_from_row(row) if row else None


def create_current_user(external_id: str, email: Optional[str], name: Optional[str] = None) -> Tuple[Dict[str, Any], bool]:
    """Retourne (utilisateur, créé?). Un profil existant est renvoyé tel quel."""
    existing = repository.get_user_by_external_id(external_id)
    if existing:
        return user_from_row(existing), False
    row = repository.insert_user(external_id, email, name)
    if not row:
        raise RuntimeError("Impossible de créer l'utilisateur")
    logger.info("users.create external_id=%s", external_id)
    return user_from_row(row), True


def get_or_create_user(external_id: str, email: Optional[str], name: Optional[str] = None) -> Dict[str, Any]:
    user, _ = create_current_user(external_id, email, name)
    return user
