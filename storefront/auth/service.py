"""Cas d'usage Auth.
Le fournisseur d'identité externe fait foi pour l'authentification; l'API ne fait
que résoudre le sujet du jeton (sub) vers le profil miroir de la table users.
"""
from typing import Dict, Any
from .repository import get_user_from_access_token as _repo_get_user_from_token


def get_identity_from_token(access_token: str) -> Dict[str, Any]:
    """Normalise l'identité issue du fournisseur:
    - Retourne {sub, email, name, token}
    - sub vide si le jeton n'a pas été reconnu
    """
    raw = _repo_get_user_from_token(access_token)
    metadata = raw.get("user_metadata") or {}
    name = metadata.get("full_name") or metadata.get("name")
    return {
        "sub": raw.get("id") or "",
        "email": raw.get("email"),
        "name": name,
        "token": access_token,
    }
