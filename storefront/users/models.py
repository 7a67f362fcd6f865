# module storefront.users.models
from typing import Any, Dict, Optional
from pydantic import BaseModel


class UserCreate(BaseModel):
    """Corps de POST /api/my/user. L'external_id vient toujours du jeton, jamais du corps."""
    email: Optional[str] = None
    name: Optional[str] = None


def user_from_row(row: Dict[str, Any]) -> Dict[str, Any]:
    """Ligne users (snake_case) -> représentation API (camelCase) attendue par le SPA."""
    return {
        "_id": row.get("id"),
        "id": row.get("id"),
        "externalId": row.get("external_id"),
        "email": row.get("email"),
        "name": row.get("name"),
        "isAdmin": bool(row.get("is_admin")),
    }
