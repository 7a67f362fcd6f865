# module storefront.items.service
from typing import Any, Dict, List, Optional
import logging

from storefront.items import repository
from storefront.items.models import ItemCreate, ItemUpdate, item_from_row, item_to_row
from storefront.utils.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def parse_item_number(raw: Any) -> Optional[int]:
    """Numéro d'article depuis un chemin/corps ("3" ou 3); None si non entier positif."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def list_items() -> List[Dict[str, Any]]:
    return [item_from_row(r) for r in repository.list_items()]


def get_item(raw_number: Any) -> Dict[str, Any]:
    number = parse_item_number(raw_number)
    row = repository.get_item(number) if number else None
    if not row:
        raise NotFoundError("Article introuvable")
    return item_from_row(row)


def create_item(payload: ItemCreate) -> Dict[str, Any]:
    """Crée un article; itemNumber = max(existants) + 1, attribué ici et jamais fourni par le client."""
    row = item_to_row(payload.model_dump())
    row["item_number"] = repository.get_max_item_number() + 1
    created = repository.insert_item(row)
    if not created:
        raise RuntimeError("Echec de création de l'article")
    logger.info("items.create item_number=%s", row["item_number"])
    return item_from_row(created)


def update_item(raw_number: Any, payload: ItemUpdate) -> Dict[str, Any]:
    number = parse_item_number(raw_number)
    if not number:
        raise NotFoundError("Article introuvable")
    data = item_to_row(payload.model_dump(exclude_unset=True, exclude_none=True))
    if not data:
        raise ValidationError("Aucune donnée à mettre à jour")
    updated = repository.update_item(number, data)
    if not updated:
        raise NotFoundError("Article introuvable")
    return item_from_row(updated)


def delete_item(raw_number: Any) -> None:
    number = parse_item_number(raw_number)
    if not number or not repository.delete_item(number):
        raise NotFoundError("Article introuvable")
    logger.info("items.delete item_number=%s", number)
