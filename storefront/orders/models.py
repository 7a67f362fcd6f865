# module storefront.orders.models
"""Modèles des commandes.
- OrderStatus: PENDING -> PAID | FAILED, ces deux statuts sont terminaux.
- Les lignes sont un instantané du catalogue au moment de la commande (colonne JSON items).
"""
import random
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"


TERMINAL_STATUSES = frozenset({OrderStatus.PAID.value, OrderStatus.FAILED.value})


class OrderLineIn(BaseModel):
    itemNumber: Union[str, int]
    quantity: int = Field(ge=1)


class OrderCreate(BaseModel):
    # Optionnel pour renvoyer un 400 explicite plutôt qu'une erreur de schéma
    items: Optional[List[OrderLineIn]] = None


class CheckoutSessionRequest(BaseModel):
    orderId: Optional[str] = None
    customerEmail: Optional[str] = None


class PaymentFailureRequest(BaseModel):
    reason: Optional[str] = None


def generate_order_number(now: Optional[datetime] = None) -> str:
    """ORD-<année>-<5 chiffres aléatoires>."""
    year = (now or datetime.now(timezone.utc)).year
    return f"ORD-{year}-{random.randint(10000, 99999)}"


def order_from_row(row: Dict[str, Any]) -> Dict[str, Any]:
    """Ligne orders -> représentation API (camelCase) attendue par le SPA."""
    return {
        "_id": row.get("id"),
        "orderNumber": row.get("order_number"),
        "user": row.get("user_id"),
        "status": row.get("status"),
        "items": row.get("items") or [],
        "subtotal": float(row.get("subtotal") or 0),
        "tax": float(row.get("tax") or 0),
        "total": float(row.get("total") or 0),
        "paymentId": row.get("payment_id"),
        "paymentSessionId": row.get("payment_session_id"),
        "failureReason": row.get("failure_reason"),
        "createdAt": row.get("created_at"),
        "updatedAt": row.get("updated_at"),
    }
