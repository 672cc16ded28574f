"""
Shared fixtures.

Every test gets its own in-memory SQLite database (aiosqlite) and an app
built around it; the geocoder talks to a fake Nominatim through
httpx.MockTransport.
"""

import os

# Must be set before anything imports app.core.config
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "10"

from types import SimpleNamespace  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402

from app.core.config import settings  # noqa: E402
from app.db.session import Database  # noqa: E402
from app.models import FacilityType, Kommun, User  # noqa: E402
from app.services.geocoding_service import GeocodingService  # noqa: E402
from main import create_application  # noqa: E402


class FakeNominatim:
    """Callable MockTransport handler that records requests."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.results: list[dict] = []
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.results)


@pytest.fixture
async def database():
    db = Database("sqlite+aiosqlite:///:memory:")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
async def session(database):
    async with database.session() as s:
        yield s


@pytest.fixture
def nominatim() -> FakeNominatim:
    return FakeNominatim()


@pytest.fixture
def geocoder(nominatim) -> GeocodingService:
    return GeocodingService(settings, transport=httpx.MockTransport(nominatim))


@pytest.fixture
def app(database, geocoder):
    return create_application(database=database, geocoder=geocoder)


@pytest.fixture
async def client(app):
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://test"
    ) as c:
        yield c


@pytest.fixture
async def lookups(database):
    """Seed the lookup tables the way they are provisioned out of band."""
    async with database.session() as s:
        simhall = FacilityType(code="SIM", label="Simhall", description="Inomhusbad")
        ishall = FacilityType(code="ISH", label="Ishall")
        stockholm = Kommun(kommun_kod="0180", kommun_namn="Stockholm")
        goteborg = Kommun(kommun_kod="1480", kommun_namn="Göteborg")
        s.add_all([simhall, ishall, stockholm, goteborg])
        await s.flush()
        ids = SimpleNamespace(
            simhall=simhall.id,
            ishall=ishall.id,
            stockholm=stockholm.id,
            goteborg=goteborg.id,
        )
    return ids


@pytest.fixture
async def owners(session):
    """Two users for repository-level tests."""
    alice = User(email="alice@example.se", password_hash="x")
    bob = User(email="bob@example.se", password_hash="x")
    session.add_all([alice, bob])
    await session.flush()
    return SimpleNamespace(alice=alice.id, bob=bob.id)


@pytest.fixture
def register_user(client):
    """Register through the API and return (auth headers, user dict)."""

    async def _register(email: str = "a@b.se", password: str = "secret1"):
        response = await client.post(
            "/auth/register", json={"email": email, "password": password}
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return {"Authorization": f"Bearer {data['access_token']}"}, data["user"]

    return _register
