import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Request, Depends, HTTPException
from fastapi.responses import JSONResponse

from storefront.config import UNIPAAS_API_URL
from storefront.utils.security import require_user
from storefront.utils.rate_limit import optional_rate_limit
from storefront.orders.models import CheckoutSessionRequest
from storefront.payments import checkout as payments_checkout
from storefront.payments import unipaas_client
from storefront.payments import webhook as payments_webhook
from storefront.payments.signature import SIGNATURE_HEADER

logger = logging.getLogger(__name__)
# Monté sous /api/orders: enregistré avant le router orders pour que /test-unipaas
# ne soit pas capturé par /api/orders/{order_id}
router = APIRouter(prefix="/api/orders", tags=["Payments API"])

# module storefront.payments.views
@router.post("/checkout/create-checkout-session", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def create_checkout_session(body: Optional[CheckoutSessionRequest] = None, user: Dict[str, Any] = Depends(require_user)):
    """
    Crée une session de paiement UniPaas pour une commande PENDING de l'utilisateur.
    - Entrée JSON: { "orderId": "<id>", "customerEmail": "<optionnel>" }
    - Sécurité: require_user + rate limit (10 req / 60s)
    - Erreurs: 400 (orderId manquant / statut), 403 (autre utilisateur), 404 (introuvable)
    - API UniPaas indisponible: 200 avec checkoutUrl de simulation et fallbackMode=true
    """
    body = body or CheckoutSessionRequest()
    return payments_checkout.create_checkout_session(body.orderId, user, body.customerEmail)

@router.post("/checkout/webhook", include_in_schema=False)
async def webhook_unipaas(request: Request):
    """
    Webhook UniPaas: met à jour le statut de la commande (PAID / FAILED).
    - Signature: x-hmac-sha256 sur le corps brut (consultative par défaut)
    - Réponses: 200 {"received": true, ...}, même en cas d'erreur de traitement
    - Erreurs: 400 si le corps n'est pas du JSON, 401 si signature imposée et invalide
    """
    try:
        raw_body = await request.body()
        status_code, payload = payments_webhook.handle_webhook(raw_body, request.headers.get(SIGNATURE_HEADER))
    except Exception:
        logger.exception("Erreur webhook_unipaas")
        status_code, payload = 200, {"received": True, "error": "Error processing webhook, but acknowledged receipt"}
    return JSONResponse(payload, status_code=status_code)

@router.get("/test-unipaas")
def test_unipaas_connection():
    """Vérifie la connectivité vers l'API UniPaas (diagnostic sandbox)."""
    try:
        status = unipaas_client.ping()
    except Exception as e:
        logger.exception("Erreur test_unipaas_connection")
        raise HTTPException(status_code=500, detail=f"Erreur de connexion à UniPaas: {e}")
    return {"message": "Connexion à la sandbox UniPaas testée", "status": status, "endpoint": UNIPAAS_API_URL}
