"""
Adaptateur UniPaas: centralise les appels HTTP et la configuration de l'API de paiement.
Toute erreur (transport, statut non 2xx, réponse illisible) est convertie en UpstreamError,
que le checkout transforme en mode simulation.
"""
import logging
from typing import Any, Dict

import httpx

from storefront.config import UNIPAAS_API_URL, UNIPAAS_API_KEY, UNIPAAS_TIMEOUT
from storefront.utils.errors import UpstreamError

logger = logging.getLogger(__name__)

CHECKOUT_PATH = "/platform/pay-ins/checkout"

# module storefront.payments.unipaas_client
def _mask(key: str) -> str:
    return f"{key[:5]}..." if key else "Not set"

def _headers() -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {UNIPAAS_API_KEY}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }

def create_checkout(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Crée une session de checkout UniPaas.
    - payload: montant, devise, référence, URLs de retour, metadata.orderId
    Retour: dict réponse (ex: {"id": "...", "sessionToken": "...", "shortLink": "https://..."})
    """
    if not UNIPAAS_API_KEY:
        raise UpstreamError("UNIPAAS_API_KEY manquant")

    url = f"{UNIPAAS_API_URL}{CHECKOUT_PATH}"
    logger.info("Création de session UniPaas url=%s api_key=%s reference=%s", url, _mask(UNIPAAS_API_KEY), payload.get("reference"))
    try:
        resp = httpx.post(url, json=payload, headers=_headers(), timeout=UNIPAAS_TIMEOUT)
    except httpx.HTTPError as e:
        raise UpstreamError(f"Appel UniPaas impossible: {e}") from e

    if not 200 <= resp.status_code < 300:
        try:
            body = resp.json()
        except ValueError:
            body = resp.text
        raise UpstreamError(f"UniPaas a répondu {resp.status_code}", status_code=resp.status_code, body=body)

    try:
        data = resp.json()
    except ValueError as e:
        raise UpstreamError("Réponse UniPaas illisible", status_code=resp.status_code) from e
    if not isinstance(data, dict) or not data.get("id"):
        raise UpstreamError("Réponse UniPaas sans identifiant de session", status_code=resp.status_code, body=data)
    return data

def ping() -> int:
    """Teste la connectivité vers l'API UniPaas; retourne le code HTTP obtenu."""
    logger.info("Test de connexion UniPaas endpoint=%s", UNIPAAS_API_URL)
    resp = httpx.get(UNIPAAS_API_URL, headers=_headers(), timeout=UNIPAAS_TIMEOUT)
    return resp.status_code
