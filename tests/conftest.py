import os

# Avant l'import de l'app: pas de Redis pendant les tests
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import copy
import uuid
import pytest
from typing import Generator, Dict, Any, List, Optional
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from storefront.app import app as fastapi_app
from storefront.utils.security import require_user, require_identity
from storefront.orders.models import OrderStatus

TEST_USER: Dict[str, Any] = {
    "_id": "user-1",
    "id": "user-1",
    "externalId": "auth0|user-1",
    "email": "test@example.com",
    "name": "Test User",
    "isAdmin": False,
}
TEST_IDENTITY: Dict[str, Any] = {
    "sub": "auth0|user-1",
    "email": "test@example.com",
    "name": "Test User",
    "token": "fake-token",
}

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

# Simuler un utilisateur authentifié pour les endpoints protégés
@pytest.fixture(autouse=True)
def _override_auth(app):
    app.dependency_overrides[require_user] = lambda: dict(TEST_USER)
    app.dependency_overrides[require_identity] = lambda: dict(TEST_IDENTITY)
    try:
        yield
    finally:
        app.dependency_overrides.pop(require_user, None)
        app.dependency_overrides.pop(require_identity, None)

# Aucun accès réseau à Supabase pendant les tests
@pytest.fixture(scope="function", autouse=True)
def mock_supabase(monkeypatch):
    for target in (
        "storefront.items.repository.get_supabase",
        "storefront.items.repository.get_service_supabase",
        "storefront.users.repository.get_service_supabase",
        "storefront.orders.repository.get_service_supabase",
        "storefront.health.service.get_service_supabase",
        "storefront.auth.repository.get_supabase",
    ):
        monkeypatch.setattr(target, lambda: MagicMock())


class InMemoryStore:
    """Remplace les repositories Supabase (items, users, orders) par des dicts."""

    def __init__(self):
        self.items: Dict[int, dict] = {}
        self.users: Dict[str, dict] = {}
        self.orders: Dict[str, dict] = {}
        self.fail_order_inserts = 0

    # --- helpers de test ---
    def add_item(self, item_number: int, name: str = "Maillot", price: float = 50.0, **extra) -> dict:
        row = {
            "id": str(uuid.uuid4()),
            "item_number": item_number,
            "name": name,
            "price": price,
            "description": extra.get("description"),
            "country": extra.get("country", "France"),
            "kit_type": extra.get("kit_type", "Home"),
            "season": extra.get("season", "2024/25"),
        }
        self.items[item_number] = row
        return row

    def add_order(self, user_id: str = "user-1", status: str = OrderStatus.PENDING.value, total: float = 107.0, **extra) -> dict:
        row = {
            "id": extra.get("id", str(uuid.uuid4())),
            "order_number": extra.get("order_number", "ORD-2024-12345"),
            "user_id": user_id,
            "status": status,
            "items": extra.get("items", []),
            "subtotal": extra.get("subtotal", 100.0),
            "tax": extra.get("tax", 7.0),
            "total": total,
            "payment_id": extra.get("payment_id"),
            "payment_session_id": None,
            "failure_reason": extra.get("failure_reason"),
            "created_at": extra.get("created_at", "2024-01-01T00:00:00+00:00"),
            "updated_at": extra.get("created_at", "2024-01-01T00:00:00+00:00"),
        }
        self.orders[row["id"]] = row
        return row

    # --- items ---
    def list_items(self) -> List[dict]:
        return [copy.deepcopy(self.items[k]) for k in sorted(self.items)]

    def get_item(self, item_number: int) -> Optional[dict]:
        row = self.items.get(item_number)
        return copy.deepcopy(row) if row else None

    def fetch_items_by_numbers(self, item_numbers: List[int]) -> List[dict]:
        return [copy.deepcopy(self.items[n]) for n in item_numbers if n in self.items]

    def get_max_item_number(self) -> int:
        return max(self.items) if self.items else 0

    def insert_item(self, data: Dict[str, Any]) -> dict:
        row = {"id": str(uuid.uuid4()), "description": None, **data}
        self.items[row["item_number"]] = row
        return copy.deepcopy(row)

    def update_item(self, item_number: int, data: Dict[str, Any]) -> Optional[dict]:
        row = self.items.get(item_number)
        if not row:
            return None
        row.update(data)
        return copy.deepcopy(row)

    def delete_item(self, item_number: int) -> bool:
        return self.items.pop(item_number, None) is not None

    # --- users ---
    def get_user_by_external_id(self, external_id: str) -> Optional[dict]:
        row = self.users.get(external_id)
        return copy.deepcopy(row) if row else None

    def insert_user(self, external_id: str, email: Optional[str], name: Optional[str] = None) -> dict:
        row = {"id": str(uuid.uuid4()), "external_id": external_id, "email": email or "", "name": name, "is_admin": False}
        self.users[external_id] = row
        return copy.deepcopy(row)

    # --- orders ---
    def insert_order(self, data: Dict[str, Any]) -> Optional[dict]:
        if self.fail_order_inserts > 0:
            self.fail_order_inserts -= 1
            return None
        row = {
            "id": str(uuid.uuid4()),
            "payment_id": None,
            "payment_session_id": None,
            "failure_reason": None,
            "created_at": "2024-01-01T00:00:00+00:00",
            "updated_at": "2024-01-01T00:00:00+00:00",
            **copy.deepcopy(data),
        }
        self.orders[row["id"]] = row
        return copy.deepcopy(row)

    def get_order(self, order_id: str) -> Optional[dict]:
        row = self.orders.get(order_id)
        return copy.deepcopy(row) if row else None

    def list_orders_for_user(self, user_id: str) -> List[dict]:
        rows = [copy.deepcopy(r) for r in self.orders.values() if r["user_id"] == user_id]
        return sorted(rows, key=lambda r: r["created_at"], reverse=True)

    def set_payment_session(self, order_id: str, payment_session_id: str) -> Optional[dict]:
        row = self.orders.get(order_id)
        if not row:
            return None
        row["payment_session_id"] = payment_session_id
        return copy.deepcopy(row)

    def transition_order(self, order_id: str, data: Dict[str, Any]) -> Optional[dict]:
        row = self.orders.get(order_id)
        if not row or row["status"] != OrderStatus.PENDING.value:
            return None
        row.update(data)
        return copy.deepcopy(row)


@pytest.fixture()
def store(monkeypatch) -> InMemoryStore:
    s = InMemoryStore()
    for name in ("list_items", "get_item", "fetch_items_by_numbers", "get_max_item_number",
                 "insert_item", "update_item", "delete_item"):
        monkeypatch.setattr(f"storefront.items.repository.{name}", getattr(s, name))
    for name in ("get_user_by_external_id", "insert_user"):
        monkeypatch.setattr(f"storefront.users.repository.{name}", getattr(s, name))
    for name in ("insert_order", "get_order", "list_orders_for_user", "set_payment_session", "transition_order"):
        monkeypatch.setattr(f"storefront.orders.repository.{name}", getattr(s, name))
    return s
