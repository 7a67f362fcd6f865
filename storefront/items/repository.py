from typing import Iterable, List, Optional, Dict, Any
from storefront.infra.supabase_client import get_supabase, get_service_supabase
import logging

logger = logging.getLogger(__name__)

def list_items() -> List[dict]:
    try:
        res = get_supabase().table("items").select("*").order("item_number", desc=False).execute()
        return res.data or []
    except Exception:
        logger.exception("items.repository.list_items failed")
        return []

def get_item(item_number: int) -> Optional[dict]:
    try:
        res = (
            get_supabase()
            .table("items")
            .select("*")
            .eq("item_number", item_number)
            .limit(1)
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("items.repository.get_item failed item_number=%s", item_number)
        return None

def fetch_items_by_numbers(item_numbers: List[int]) -> List[dict]:
    """
    Récupère les articles par numéro (table 'items').
    - Retourne [] si la liste est vide ou en cas d'erreur.
    """
    if not item_numbers:
        return []
    try:
        res = (
            get_supabase()
            .table("items")
            .select("*")
            .in_("item_number", list(item_numbers))
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("items.repository.fetch_items_by_numbers failed numbers=%s", item_numbers)
        return []

def get_items_map(item_numbers: Iterable[int]) -> Dict[int, Dict[str, Any]]:
    """Retourne un dict {item_number: article} à partir d'une liste de numéros."""
    items = fetch_items_by_numbers(list(item_numbers))
    return {int(i.get("item_number")): i for i in items}

def get_max_item_number() -> int:
    """Plus grand item_number existant (0 si catalogue vide)."""
    res = (
        get_service_supabase()
        .table("items")
        .select("item_number")
        .order("item_number", desc=True)
        .limit(1)
        .execute()
    )
    rows = res.data or []
    return int(rows[0].get("item_number") or 0) if rows else 0

def insert_item(data: Dict[str, Any]) -> Optional[dict]:
    try:
        res = get_service_supabase().table("items").insert(data).execute()
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("items.repository.insert_item failed data=%s", data)
        return None

def update_item(item_number: int, data: Dict[str, Any]) -> Optional[dict]:
    """Met à jour l'article; None si aucune ligne ne correspond (ou erreur)."""
    try:
        res = (
            get_service_supabase()
            .table("items")
            .update(data)
            .eq("item_number", item_number)
            .execute()
        )
        rows = res.data or []
        return rows[0] if rows else None
    except Exception:
        logger.exception("items.repository.update_item failed item_number=%s data=%s", item_number, data)
        return None

def delete_item(item_number: int) -> bool:
    """True si une ligne a été supprimée."""
    try:
        res = get_service_supabase().table("items").delete().eq("item_number", item_number).execute()
        return bool(res.data)
    except Exception:
        logger.exception("items.repository.delete_item failed item_number=%s", item_number)
        return False
