import os

# Avant tout import de bistro: bistro.config lit l'environnement à l'import
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-secret-for-jwt-signing-0123456789")
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import pytest
from typing import Any, Dict, Generator
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from bistro.app_setup.factory import create_app
from bistro.infra.dependencies import get_gateway
from bistro.utils.security import require_user, require_admin

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)


class FakeGateway:
    """Passerelle de paiement en mémoire: enregistre les montants demandés."""

    def __init__(self):
        self.calls = []
        self.error = None

    def create_intent(self, amount_minor: int, currency: str = None) -> Dict[str, Any]:
        self.calls.append(amount_minor)
        if self.error:
            raise self.error
        n = len(self.calls)
        return {"id": f"pi_test_{n}", "client_secret": f"pi_test_{n}_secret_abc"}


@pytest.fixture
def fake_store() -> MagicMock:
    return MagicMock(name="store")


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


# Évite toute connexion Supabase réelle pendant le lifespan
@pytest.fixture(autouse=True)
def _mock_store_opening(monkeypatch, fake_store):
    monkeypatch.setattr("bistro.infra.supabase_client.open_store", lambda *a, **kw: fake_store)


@pytest.fixture
def app(fake_gateway):
    application = create_app()
    application.dependency_overrides[get_gateway] = lambda: fake_gateway
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def user_client(app, client):
    """Client avec une identité vérifiée (utilisateur simple)."""
    fake_user: Dict[str, Any] = {"email": "test@example.com"}
    app.dependency_overrides[require_user] = lambda: fake_user
    yield client
    app.dependency_overrides.pop(require_user, None)


@pytest.fixture
def authenticated_admin_client(app, client):
    def _override_require_admin():
        return {"email": "admin@example.com"}
    app.dependency_overrides[require_admin] = _override_require_admin
    yield client
    app.dependency_overrides.pop(require_admin, None)
