"""
Lecture des champs utiles d'un événement webhook UniPaas (orderId, paymentId, motif d'échec).
Le fournisseur place ces champs à des profondeurs variables: chaque extracteur essaie
plusieurs chemins dans un ordre fixe.
"""
import time
from typing import Any, Dict, Optional, Sequence, Tuple

ORDER_ID_PATHS: Tuple[Sequence[str], ...] = (
    ("data", "metadata", "orderId"),
    ("metadata", "orderId"),
    ("data", "object", "metadata", "orderId"),
    ("data", "payment", "metadata", "orderId"),
)
PAYMENT_ID_PATHS: Tuple[Sequence[str], ...] = (
    ("payment_id",),
    ("data", "id"),
    ("data", "paymentId"),
)
FAILURE_REASON_PATHS: Tuple[Sequence[str], ...] = (
    ("reason",),
    ("data", "reason"),
)
DEFAULT_FAILURE_REASON = "Payment processing failed"

# module storefront.payments.metadata
def _dig(obj: Any, path: Sequence[str]) -> Any:
    for key in path:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj

def _first(event: Dict[str, Any], paths: Tuple[Sequence[str], ...]) -> Optional[str]:
    for path in paths:
        value = _dig(event, path)
        if value not in (None, ""):
            return str(value)
    return None

def extract_order_id(event: Dict[str, Any]) -> Optional[str]:
    """orderId injecté dans metadata lors de la création du checkout; None si absent."""
    return _first(event or {}, ORDER_ID_PATHS)

def extract_payment_id(event: Dict[str, Any]) -> str:
    """Identifiant du paiement, sinon webhook_<ms>."""
    return _first(event or {}, PAYMENT_ID_PATHS) or f"webhook_{int(time.time() * 1000)}"

def extract_failure_reason(event: Dict[str, Any]) -> str:
    return _first(event or {}, FAILURE_REASON_PATHS) or DEFAULT_FAILURE_REASON
