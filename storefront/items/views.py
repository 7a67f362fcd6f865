"""Endpoints API du catalogue.
- Lecture publique: liste et détail par itemNumber.
- Écriture (création, mise à jour, suppression): utilisateur authentifié, sans contrôle de rôle.
- Erreurs: 404 quand introuvable, 400 pour validations.
"""
from typing import Any, Dict, List
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from storefront.utils.security import require_user
from storefront.items import service as items_service
from storefront.items.models import ItemCreate, ItemUpdate

router = APIRouter(prefix="/api/items", tags=["Items API"])


@router.get("")
def list_items() -> List[Dict[str, Any]]:
    return items_service.list_items()


@router.get("/{item_number}")
def get_item(item_number: str):
    """Détail d'un article par son numéro (404 si introuvable)."""
    return items_service.get_item(item_number)


@router.post("", dependencies=[Depends(require_user)])
def create_item(payload: ItemCreate):
    """Crée un article (authentifié). Le numéro est attribué par le serveur."""
    created = items_service.create_item(payload)
    return JSONResponse(created, status_code=201)


@router.put("/{item_number}", dependencies=[Depends(require_user)])
def update_item(item_number: str, payload: ItemUpdate):
    """Met à jour les champs fournis; itemNumber reste inchangé."""
    return items_service.update_item(item_number, payload)


@router.delete("/{item_number}", dependencies=[Depends(require_user)])
def delete_item(item_number: str):
    items_service.delete_item(item_number)
    return {"message": "Article supprimé"}
