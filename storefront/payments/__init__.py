"""
Module 'payments' (feature-first): point d'entrée public.
Réunit client UniPaas, checkout (avec mode simulation), signature et webhook.
"""

from .unipaas_client import create_checkout, ping
from .signature import SignatureCheck, compute_signature, verify_signature
from .metadata import extract_order_id, extract_payment_id, extract_failure_reason
from .checkout import build_checkout_payload, simulation_checkout_url, create_checkout_session
from .webhook import WebhookEventKind, EVENT_ALIASES, HANDLERS, classify_event, handle_webhook

__all__ = [
    # unipaas
    "create_checkout",
    "ping",
    # signature
    "SignatureCheck",
    "compute_signature",
    "verify_signature",
    # metadata
    "extract_order_id",
    "extract_payment_id",
    "extract_failure_reason",
    # checkout
    "build_checkout_payload",
    "simulation_checkout_url",
    "create_checkout_session",
    # webhook
    "WebhookEventKind",
    "EVENT_ALIASES",
    "HANDLERS",
    "classify_event",
    "handle_webhook",
]
