"""
Traitement des notifications asynchrones UniPaas.

Étapes:
  1) parse du corps brut (JSON objet attendu, sinon 400)
  2) vérification de la signature x-hmac-sha256 (consultative, imposée si
     UNIPAAS_ENFORCE_WEBHOOK_SIGNATURE=true)
  3) classification du type d'événement (alias historiques inclus) puis
     dispatch via HANDLERS; les types inconnus sont journalisés et ignorés
  4) réponse 200 {"received": true} dans tous les autres cas, y compris en
     cas d'erreur de traitement, pour éviter les relivraisons du fournisseur

Les transitions passent par orders.service (mise à jour conditionnelle sur
PENDING): une relivraison ne modifie pas une commande déjà terminale.
"""
import json
import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from storefront import config
from storefront.orders import service as orders_service
from storefront.payments import metadata
from storefront.payments.signature import SignatureCheck, verify_signature

logger = logging.getLogger(__name__)


class WebhookEventKind(str, Enum):
    PAYMENT_SUCCEEDED = "payment_succeeded"
    PAYMENT_FAILED = "payment_failed"
    UNKNOWN = "unknown"


EVENT_ALIASES: Dict[str, WebhookEventKind] = {
    "payment/succeeded": WebhookEventKind.PAYMENT_SUCCEEDED,
    "payment.succeeded": WebhookEventKind.PAYMENT_SUCCEEDED,
    "Charge": WebhookEventKind.PAYMENT_SUCCEEDED,
    "payment/failed": WebhookEventKind.PAYMENT_FAILED,
    "payment.failed": WebhookEventKind.PAYMENT_FAILED,
}


class InvalidPayload(ValueError):
    pass


def parse_payload(raw_body: bytes) -> Dict[str, Any]:
    try:
        event = json.loads(raw_body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidPayload(str(e)) from e
    if not isinstance(event, dict):
        raise InvalidPayload("Objet JSON attendu")
    return event


def classify_event(event: Dict[str, Any]) -> Tuple[WebhookEventKind, str]:
    """Retourne (type normalisé, type brut). Le type est lu dans 'type' puis 'event'."""
    raw_type = str(event.get("type") or event.get("event") or "")
    return EVENT_ALIASES.get(raw_type, WebhookEventKind.UNKNOWN), raw_type


# --- Handlers ---

def _handle_payment_succeeded(event: Dict[str, Any]) -> Dict[str, Any]:
    order_id = metadata.extract_order_id(event)
    if not order_id:
        logger.error("webhook.payment_succeeded sans orderId dans metadata")
        return {"action": "ignored", "reason": "missing_order_id"}
    payment_id = metadata.extract_payment_id(event)
    updated = orders_service.mark_paid(order_id, payment_id)
    if not updated:
        logger.warning("webhook.payment_succeeded order_id=%s introuvable ou déjà terminale", order_id)
        return {"action": "ignored", "orderId": order_id}
    logger.info("webhook.payment_succeeded order_id=%s payment_id=%s -> PAID", order_id, payment_id)
    return {"action": "paid", "orderId": order_id}


def _handle_payment_failed(event: Dict[str, Any]) -> Dict[str, Any]:
    order_id = metadata.extract_order_id(event)
    if not order_id:
        logger.error("webhook.payment_failed sans orderId dans metadata")
        return {"action": "ignored", "reason": "missing_order_id"}
    reason = metadata.extract_failure_reason(event)
    updated = orders_service.mark_failed(order_id, reason)
    if not updated:
        logger.warning("webhook.payment_failed order_id=%s introuvable ou déjà terminale", order_id)
        return {"action": "ignored", "orderId": order_id}
    logger.info("webhook.payment_failed order_id=%s reason=%s -> FAILED", order_id, reason)
    return {"action": "failed", "orderId": order_id}


def _handle_unknown(event: Dict[str, Any]) -> Dict[str, Any]:
    logger.info("webhook type non géré: %s", event.get("type") or event.get("event"))
    return {"action": "ignored", "reason": "unknown_type"}


HANDLERS: Dict[WebhookEventKind, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    WebhookEventKind.PAYMENT_SUCCEEDED: _handle_payment_succeeded,
    WebhookEventKind.PAYMENT_FAILED: _handle_payment_failed,
    WebhookEventKind.UNKNOWN: _handle_unknown,
}


def dispatch(event: Dict[str, Any]) -> Dict[str, Any]:
    kind, raw_type = classify_event(event)
    logger.info("webhook.dispatch type=%s kind=%s", raw_type, kind.value)
    return HANDLERS[kind](event)


def handle_webhook(raw_body: bytes, signature_header: Optional[str]) -> Tuple[int, Dict[str, Any]]:
    """
    Point d'entrée du webhook; retourne (status HTTP, corps JSON).
    - 400: corps illisible
    - 401: signature invalide, seulement si la vérification est imposée
    - 200: dans tous les autres cas (erreurs de traitement journalisées)
    """
    try:
        event = parse_payload(raw_body)
    except InvalidPayload:
        logger.exception("webhook payload invalide")
        return 400, {"error": "Invalid JSON payload"}

    check = verify_signature(raw_body, signature_header, config.UNIPAAS_SECRET_KEY)
    if check is SignatureCheck.INVALID:
        logger.warning("webhook signature invalide (enforce=%s)", config.UNIPAAS_ENFORCE_WEBHOOK_SIGNATURE)
    elif check is SignatureCheck.SKIPPED:
        logger.warning("webhook signature non vérifiée (en-tête ou secret absent)")
    else:
        logger.info("webhook signature vérifiée")
    if config.UNIPAAS_ENFORCE_WEBHOOK_SIGNATURE and check is not SignatureCheck.VALID:
        return 401, {"error": "Invalid webhook signature"}

    try:
        result = dispatch(event)
    except Exception:
        logger.exception("Erreur de traitement du webhook type=%s", event.get("type"))
        return 200, {"received": True, "error": "Error processing webhook, but acknowledged receipt"}
    return 200, {"received": True, **result}
