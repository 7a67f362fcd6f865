"""Couche service de l'user story Commandes.
Rôles:
- Créer une commande « PENDING » à partir d'un instantané du panier (totaux + taxe 7 %).
- Lire les commandes de l'utilisateur (contrôle de propriété: 404 puis 403).
- Appliquer les transitions PENDING -> PAID / FAILED (webhook ou simulation).
Les statuts PAID et FAILED sont terminaux: aucune transition n'en sort.
"""
import logging
import time
from typing import Any, Dict, List, Optional

from storefront.items import repository as items_repository
from storefront.orders import pricing
from storefront.orders import repository
from storefront.orders.models import OrderCreate, OrderStatus, generate_order_number, order_from_row
from storefront.utils.errors import ForbiddenError, InvalidStateError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_SIMULATED_FAILURE_REASON = "Payment was declined"
_ORDER_NUMBER_ATTEMPTS = 3


def _millis() -> int:
    return int(time.time() * 1000)


def create_order(user_id: str, payload: OrderCreate) -> Dict[str, Any]:
    """Crée une commande PENDING.
    - 400 si le panier est vide/absent ou si un article est inconnu.
    - Pas de protection anti double-soumission: deux appels => deux commandes.
    """
    lines = payload.items or []
    if not lines:
        raise ValidationError("La commande doit contenir au moins un article")

    numbers = pricing.requested_item_numbers(lines)
    items_by_number = items_repository.get_items_map(numbers)
    missing = [n for n in numbers if n not in items_by_number]
    if missing:
        raise ValidationError(f"Article(s) introuvable(s): {', '.join(str(n) for n in missing)}")

    snapshot = pricing.build_order_lines(lines, items_by_number)
    totals = pricing.compute_totals(snapshot)
    logger.info(
        "orders.create user_id=%s lines=%s subtotal=%.2f tax=%.2f total=%.2f",
        user_id, len(snapshot), totals["subtotal"], totals["tax"], totals["total"],
    )

    # Numéro aléatoire: on retente en cas de collision sur la contrainte d'unicité
    for _ in range(_ORDER_NUMBER_ATTEMPTS):
        row = repository.insert_order({
            "order_number": generate_order_number(),
            "user_id": user_id,
            "status": OrderStatus.PENDING.value,
            "items": snapshot,
            **totals,
        })
        if row:
            return order_from_row(row)
    raise RuntimeError("Impossible de créer la commande")


def list_my_orders(user_id: str) -> List[Dict[str, Any]]:
    return [order_from_row(r) for r in repository.list_orders_for_user(user_id)]


def load_owned_order(order_id: str, user_id: str) -> Dict[str, Any]:
    """Ligne brute de la commande si elle appartient à l'appelant (404 sinon 403)."""
    row = repository.get_order(order_id)
    if not row:
        raise NotFoundError("Commande introuvable")
    if str(row.get("user_id")) != str(user_id):
        raise ForbiddenError("Accès non autorisé à cette commande")
    return row


def get_order_for_user(order_id: str, user_id: str) -> Dict[str, Any]:
    return order_from_row(load_owned_order(order_id, user_id))


def ensure_pending(row: Dict[str, Any]) -> None:
    if row.get("status") != OrderStatus.PENDING.value:
        raise InvalidStateError("La commande n'est pas au statut PENDING")


# --- Transitions ---

def mark_paid(order_id: str, payment_id: str) -> Optional[Dict[str, Any]]:
    """PENDING -> PAID. None si la commande est introuvable ou déjà terminale."""
    return repository.transition_order(order_id, {
        "status": OrderStatus.PAID.value,
        "payment_id": payment_id,
    })


def mark_failed(order_id: str, reason: str) -> Optional[Dict[str, Any]]:
    """PENDING -> FAILED. None si la commande est introuvable ou déjà terminale."""
    return repository.transition_order(order_id, {
        "status": OrderStatus.FAILED.value,
        "failure_reason": reason,
    })


def simulate_payment_success(order_id: str, user_id: str) -> Dict[str, Any]:
    """Paiement simulé (API de paiement injoignable): la commande passe PAID."""
    row = load_owned_order(order_id, user_id)
    ensure_pending(row)
    updated = mark_paid(order_id, f"simulated_payment_{_millis()}")
    if not updated:
        raise InvalidStateError("La commande n'est pas au statut PENDING")
    logger.info("orders.simulate_payment order_id=%s status=PAID", order_id)
    return {
        "message": "Paiement simulé avec succès",
        "order": {
            "id": updated.get("id"),
            "orderNumber": updated.get("order_number"),
            "status": updated.get("status"),
            "total": float(updated.get("total") or 0),
        },
    }


def simulate_payment_failure(order_id: str, user_id: str, reason: Optional[str] = None) -> Dict[str, Any]:
    """Échec de paiement simulé: la commande passe FAILED avec un motif."""
    reason = (reason or "").strip() or DEFAULT_SIMULATED_FAILURE_REASON
    row = load_owned_order(order_id, user_id)
    ensure_pending(row)
    updated = mark_failed(order_id, reason)
    if not updated:
        raise InvalidStateError("La commande n'est pas au statut PENDING")
    logger.info("orders.simulate_payment_failure order_id=%s reason=%s", order_id, reason)
    return {
        "message": "Échec de paiement simulé",
        "order": {
            "id": updated.get("id"),
            "orderNumber": updated.get("order_number"),
            "status": updated.get("status"),
            "failureReason": updated.get("failure_reason"),
            "total": float(updated.get("total") or 0),
        },
    }
