"""
Accès aux données pour la feature 'orders' (table orders, lignes en JSON).
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

from postgrest.exceptions import APIError

from storefront.infra.supabase_client import get_service_supabase
from storefront.orders.models import OrderStatus

logger = logging.getLogger(__name__)

INVALID_TEXT_REPRESENTATION = "22P02"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# module storefront.orders.repository
def insert_order(data: Dict[str, Any]) -> Optional[dict]:
    """Insère une commande; retourne la ligne créée ou None en cas d'erreur."""
    try:
        now = _now_iso()
        payload = {**data, "created_at": now, "updated_at": now}
        res = get_service_supabase().table("orders").insert(payload).execute()
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("orders.repository.insert_order failed order_number=%s", data.get("order_number"))
        return None


def get_order(order_id: str) -> Optional[dict]:
    """
    Commande par id.
    - None si introuvable ou si l'id n'est pas un uuid (code Postgres 22P02)
    - Les autres erreurs Supabase sont journalisées puis propagées (500)
    """
    if not order_id:
        return None
    try:
        res = (
            get_service_supabase()
            .table("orders")
            .select("*")
            .eq("id", order_id)
            .limit(1)
            .execute()
        )
    except APIError as e:
        if getattr(e, "code", None) == INVALID_TEXT_REPRESENTATION:
            return None
        logger.exception("orders.repository.get_order failed id=%s", order_id)
        raise
    rows = res.data or []
    return rows[0] if rows else None


def list_orders_for_user(user_id: str) -> List[dict]:
    """Commandes d'un utilisateur, les plus récentes d'abord."""
    if not user_id:
        return []
    try:
        res = (
            get_service_supabase()
            .table("orders")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("orders.repository.list_orders_for_user failed user_id=%s", user_id)
        return []


def set_payment_session(order_id: str, payment_session_id: str) -> Optional[dict]:
    """Rattache l'identifiant de session de paiement à la commande."""
    try:
        res = (
            get_service_supabase()
            .table("orders")
            .update({"payment_session_id": payment_session_id, "updated_at": _now_iso()})
            .eq("id", order_id)
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("orders.repository.set_payment_session failed id=%s", order_id)
        return None


def transition_order(order_id: str, data: Dict[str, Any]) -> Optional[dict]:
    """
    Mise à jour conditionnelle: appliquée seulement si la commande est encore PENDING.
    - Retourne la ligne mise à jour, ou None si la commande n'existe pas ou est déjà terminale.
    - Deux livraisons concurrentes ne peuvent pas écraser un statut terminal.
    """
    res = (
        get_service_supabase()
        .table("orders")
        .update({**data, "updated_at": _now_iso()})
        .eq("id", order_id)
        .eq("status", OrderStatus.PENDING.value)
        .execute()
    )
    rows = res.data or []
    return rows[0] if rows else None
