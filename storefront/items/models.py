# module storefront.items.models
"""Modèles du catalogue (maillots).
Stockage snake_case (item_number, kit_type), exposition camelCase (itemNumber, kitType).
"""
from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class ItemCountry(str, Enum):
    England = "England"
    Spain = "Spain"
    Germany = "Germany"
    Italy = "Italy"
    Brazil = "Brazil"
    Argentina = "Argentina"
    France = "France"
    Portugal = "Portugal"
    Netherlands = "Netherlands"
    Belgium = "Belgium"
    Israel = "Israel"


class KitType(str, Enum):
    Home = "Home"
    Away = "Away"
    Third = "Third"


class ItemCreate(BaseModel):
    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    description: Optional[str] = None
    country: ItemCountry
    kitType: KitType
    season: str = Field(min_length=1)


class ItemUpdate(BaseModel):
    # itemNumber volontairement absent: immuable après création
    name: Optional[str] = Field(default=None, min_length=1)
    price: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    country: Optional[ItemCountry] = None
    kitType: Optional[KitType] = None
    season: Optional[str] = Field(default=None, min_length=1)


_API_TO_DB = {
    "name": "name",
    "price": "price",
    "description": "description",
    "country": "country",
    "kitType": "kit_type",
    "season": "season",
}


def item_to_row(data: Dict[str, Any]) -> Dict[str, Any]:
    """Champs API présents -> colonnes de la table items (les enums sont sérialisés en str)."""
    row: Dict[str, Any] = {}
    for key, column in _API_TO_DB.items():
        if key in data:
            value = data[key]
            row[column] = value.value if isinstance(value, Enum) else value
    return row


def item_from_row(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "_id": row.get("id"),
        "itemNumber": row.get("item_number"),
        "name": row.get("name"),
        "price": float(row.get("price") or 0),
        "description": row.get("description"),
        "country": row.get("country"),
        "kitType": row.get("kit_type"),
        "season": row.get("season"),
    }
