"""Couche d'accès aux données (Supabase) pour le domaine Utilisateurs.
Table users: profil miroir du fournisseur d'identité, clé external_id (sujet du jeton).
"""
import logging
from typing import Any, Dict, Optional
from storefront.infra.supabase_client import get_service_supabase

logger = logging.getLogger(__name__)


def get_user_by_external_id(external_id: str) -> Optional[dict]:
    """Récupère un utilisateur par external_id (sujet du jeton).
    - Retour: dict utilisateur ou None si introuvable/erreur
    """
    if not external_id:
        return None
    try:
        res = (
            get_service_supabase()
            .table("users")
            .select("*")
            .eq("external_id", external_id)
            .limit(1)
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("users.repository.get_user_by_external_id failed external_id=%s", external_id)
        return None


def insert_user(external_id: str, email: Optional[str], name: Optional[str] = None) -> Optional[dict]:
    """Crée le profil (is_admin=False). Retour: la ligne créée ou None en cas d'erreur."""
    payload: Dict[str, Any] = {"external_id": external_id, "email": email or "", "is_admin": False}
    if name:
        payload["name"] = name
    try:
        res = get_service_supabase().table("users").insert(payload).execute()
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("users.repository.insert_user failed external_id=%s", external_id)
        return None
