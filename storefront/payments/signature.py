"""
Signature des webhooks UniPaas (en-tête x-hmac-sha256).
La valeur attendue est le base64 du condensat HMAC-SHA256 hexadécimal du corps brut,
calculé avec le secret partagé UNIPAAS_SECRET_KEY.
"""
import base64
import hashlib
import hmac
from enum import Enum
from typing import Optional

SIGNATURE_HEADER = "x-hmac-sha256"


class SignatureCheck(str, Enum):
    VALID = "valid"
    INVALID = "invalid"
    SKIPPED = "skipped"  # en-tête ou secret absent


def compute_signature(raw_body: bytes, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()
    return base64.b64encode(digest.encode("ascii")).decode("ascii")


def verify_signature(raw_body: bytes, header_value: Optional[str], secret: str) -> SignatureCheck:
    if not header_value or not secret:
        return SignatureCheck.SKIPPED
    expected = compute_signature(raw_body, secret)
    if hmac.compare_digest(expected, header_value.strip()):
        return SignatureCheck.VALID
    return SignatureCheck.INVALID
