# module storefront.orders.views

"""Endpoints de l'user story Commandes.
- GET/POST /api/orders: liste et création des commandes de l'utilisateur.
- GET /api/orders/{order_id}: détail (403 si la commande appartient à un autre utilisateur).
- /simulate-payment et /simulate-payment-failure: transitions directes sans API de paiement.
Sécurité:
- require_user: toutes les routes exigent un utilisateur authentifié et vérifient la propriété.
"""
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from storefront.utils.security import require_user
from storefront.orders import service as orders_service
from storefront.orders.models import OrderCreate, PaymentFailureRequest

router = APIRouter(prefix="/api/orders", tags=["Orders API"])


@router.get("")
def list_my_orders(user: Dict[str, Any] = Depends(require_user)) -> List[Dict[str, Any]]:
    return orders_service.list_my_orders(user["id"])


@router.post("")
def create_order(payload: OrderCreate, user: Dict[str, Any] = Depends(require_user)):
    """Crée une commande PENDING à partir de {items: [{itemNumber, quantity}]}."""
    order = orders_service.create_order(user["id"], payload)
    return JSONResponse(order, status_code=201)


@router.get("/{order_id}")
def get_order(order_id: str, user: Dict[str, Any] = Depends(require_user)):
    return orders_service.get_order_for_user(order_id, user["id"])


@router.post("/simulate-payment/{order_id}")
def simulate_payment(order_id: str, user: Dict[str, Any] = Depends(require_user)):
    return orders_service.simulate_payment_success(order_id, user["id"])


@router.post("/simulate-payment-failure/{order_id}")
def simulate_payment_failure(
    order_id: str,
    body: Optional[PaymentFailureRequest] = None,
    user: Dict[str, Any] = Depends(require_user),
):
    reason = body.reason if body else None
    return orders_service.simulate_payment_failure(order_id, user["id"], reason)
