"""
Shared test configuration.

Environment is set before anything from `fleet` is imported: settings are
read once at import time and the app module builds its facade on import.
"""

import os
import tempfile

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["DATABASE_URL"] = ""
os.environ["APP_DEBUG"] = "false"
os.environ["FALLBACK_STORE_DIR"] = tempfile.mkdtemp(prefix="fleet-test-")

import pytest
from fastapi.testclient import TestClient

from fleet.config import settings
from fleet.data.fallback_store import PersistenceFallbackStore
from fleet.data.facade import DataAccessFacade
from fleet.data.remote_gateway import RemoteDataGateway
from fleet.data.sample_data import SampleDataProvider
from fleet.database import build_engine
from fleet.main import create_app
from fleet.schemas.auth import SessionIdentity, RoleName
from fleet.utils.exceptions import BackendUnavailableException
from fleet.utils.security import create_access_token, hash_password

ADMIN_PASSWORD = "admin-pass-123"


# ─── Data Layer ───────────────────────────────────────────────────────────────
@pytest.fixture
def store(tmp_path):
    return PersistenceFallbackStore(tmp_path / "store")


@pytest.fixture
def sample(store):
    return SampleDataProvider(store)


@pytest.fixture
def facade(sample):
    """Facade latched into sample-data mode."""
    f = DataAccessFacade(sample, force_sample_data=True, init_timeout=1.0)
    f.initialize()
    return f


@pytest.fixture
def gateway():
    """Remote gateway over an in-memory SQLite database with the schema created."""
    engine = build_engine("sqlite://")
    gw = RemoteDataGateway(engine)
    gw.create_schema()
    yield gw
    engine.dispose()


@pytest.fixture
def remote_facade(sample, gateway):
    """Facade latched into remote mode against the SQLite gateway."""
    f = DataAccessFacade(sample, gateway, init_timeout=1.0)
    f.initialize()
    assert not f.is_using_sample_data()
    return f


class FlakyGateway:
    """Probe succeeds; every data call fails as if the network dropped."""

    def __init__(self, probe_ok=True):
        self.probe_ok = probe_ok
        self.probes = 0

    def probe(self):
        self.probes += 1
        if not self.probe_ok:
            raise BackendUnavailableException()
        return True

    def _fail(self, *args, **kwargs):
        raise BackendUnavailableException()

    list_all = get = insert = update = conditional_update = _fail
    change_balance = insert_with_debit = _fail


@pytest.fixture
def flaky_gateway():
    return FlakyGateway


# ─── Identities ───────────────────────────────────────────────────────────────
@pytest.fixture
def admin_identity():
    return SessionIdentity(
        id="admin-admin", email=settings.ADMIN_EMAIL, role=RoleName.ADMIN, name="Admin",
    )


@pytest.fixture
def smith_identity():
    return SessionIdentity(
        id="driver-1", email="john.smith@energy.go.ke", role=RoleName.DRIVER,
        name="John Smith", driverId="driver-1",
    )


@pytest.fixture
def wanjiku_identity():
    return SessionIdentity(
        id="driver-2", email="mary.wanjiku@energy.go.ke", role=RoleName.DRIVER,
        name="Mary Wanjiku", driverId="driver-2",
    )


# ─── HTTP ─────────────────────────────────────────────────────────────────────
@pytest.fixture(scope="session")
def admin_password_hash():
    return hash_password(ADMIN_PASSWORD)


@pytest.fixture
def client(facade, monkeypatch, admin_password_hash):
    monkeypatch.setattr(settings, "ADMIN_PASSWORD_HASH", admin_password_hash)
    app = create_app(facade)
    with TestClient(app) as c:
        yield c


def _auth(identity: SessionIdentity) -> dict:
    token = create_access_token(identity.model_dump(mode="json"))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_password():
    return ADMIN_PASSWORD


@pytest.fixture
def admin_headers(admin_identity):
    return _auth(admin_identity)


@pytest.fixture
def driver_headers(smith_identity):
    return _auth(smith_identity)
