"""
Erreurs métier de l'API.
- Sous-classes de HTTPException: les services et les vues les lèvent directement,
  le code HTTP est porté par la classe.
- UpstreamError n'est pas une erreur HTTP: l'échec de l'API de paiement est
  rattrapé par le checkout et bascule en mode simulation.
"""
from typing import Any, Optional
from fastapi import HTTPException


class ValidationError(HTTPException):
    def __init__(self, detail: Any = "Requête invalide"):
        super().__init__(status_code=400, detail=detail)


class InvalidStateError(HTTPException):
    def __init__(self, detail: Any = "Commande hors statut PENDING"):
        super().__init__(status_code=400, detail=detail)


class AuthenticationError(HTTPException):
    def __init__(self, detail: Any = "Non authentifié"):
        super().__init__(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(HTTPException):
    def __init__(self, detail: Any = "Accès interdit"):
        super().__init__(status_code=403, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: Any = "Ressource introuvable"):
        super().__init__(status_code=404, detail=detail)


class UpstreamError(Exception):
    """Échec d'appel à l'API de paiement (transport, statut non 2xx, réponse invalide)."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
