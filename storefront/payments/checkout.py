"""
Cas d'usage 'checkout': orchestre commandes, client UniPaas et mode simulation.

Si l'API de paiement échoue, pour quelque raison que ce soit, la requête ne
renvoie pas d'erreur: une URL de simulation locale est générée (aucun paiement
réel) et la commande reste PENDING.
"""
import logging
import time
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from storefront import config
from storefront.orders import repository as orders_repository
from storefront.orders import service as orders_service
from storefront.payments import unipaas_client
from storefront.utils.errors import UpstreamError, ValidationError

logger = logging.getLogger(__name__)


def build_checkout_payload(order: Dict[str, Any], user: Dict[str, Any], customer_email: Optional[str] = None) -> Dict[str, Any]:
    """
    Corps de la requête UniPaas pour une commande (ligne brute de la table orders).
    metadata.orderId permet au webhook de retrouver la commande.
    """
    order_id = str(order.get("id"))
    order_number = order.get("order_number")
    return {
        "amount": float(order.get("total") or 0),
        "currency": config.PAYMENT_CURRENCY,
        "country": config.PAYMENT_COUNTRY,
        "reference": order_number,
        "email": customer_email or user.get("email"),
        "description": f"Order {order_number}",
        "success_url": f"{config.FRONTEND_URL}/order-confirmation/{order_id}",
        "cancel_url": f"{config.FRONTEND_URL}/cart",
        "consumer": {
            "name": user.get("name") or "Customer",
            "reference": str(user.get("id")),
        },
        "metadata": {"orderId": order_id},
    }


def simulation_checkout_url(order: Dict[str, Any]) -> str:
    query = urlencode({
        "orderId": order.get("id"),
        "amount": f"{float(order.get('total') or 0):.2f}",
        "reference": order.get("order_number"),
    })
    return f"{config.FRONTEND_URL}/payment-simulation?{query}"


def _attach_session(order_id: str, session_id: str) -> None:
    if not orders_repository.set_payment_session(order_id, session_id):
        raise RuntimeError("Impossible d'enregistrer la session de paiement")


def create_checkout_session(order_id: Optional[str], user: Dict[str, Any], customer_email: Optional[str] = None) -> Dict[str, Any]:
    """
    Initie le paiement d'une commande PENDING de l'appelant.
    - 400 si orderId manquant, 404 si commande introuvable, 403 si elle appartient
      à un autre utilisateur, 400 si elle n'est plus PENDING.
    - Succès UniPaas: {sessionToken, sessionId, shortLink}
    - Échec UniPaas: {checkoutUrl, sessionId: direct_<ms>, fallbackMode: true}
    Une commande PENDING peut être soumise plusieurs fois (nouvelle session à chaque appel).
    """
    if not order_id:
        raise ValidationError("orderId requis")

    order = orders_service.load_owned_order(order_id, user["id"])
    orders_service.ensure_pending(order)
    logger.info(
        "checkout order_id=%s order_number=%s total=%s",
        order.get("id"), order.get("order_number"), order.get("total"),
    )

    try:
        session = unipaas_client.create_checkout(build_checkout_payload(order, user, customer_email))
    except UpstreamError as e:
        logger.warning("Échec API UniPaas: %s (status=%s body=%s), bascule en mode simulation", e, e.status_code, e.body)
        session_id = f"direct_{int(time.time() * 1000)}"
        _attach_session(order_id, session_id)
        checkout_url = simulation_checkout_url(order)
        logger.info("checkout fallback url=%s", checkout_url)
        return {"checkoutUrl": checkout_url, "sessionId": session_id, "fallbackMode": True}

    session_id = str(session.get("id"))
    _attach_session(order_id, session_id)
    return {
        "sessionToken": session.get("sessionToken"),
        "sessionId": session_id,
        "shortLink": session.get("shortLink"),
    }
