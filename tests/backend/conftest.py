import os
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from furniture_store.api.v1.deps import get_image_store, get_token_codec
from furniture_store.core import db as db_module
from furniture_store.core.security import TokenCodec, TokenConfig, hash_password
from furniture_store.main import app
from furniture_store.models.admin import Admin
from furniture_store.models.user import User
from furniture_store.services.images import ImageStore


TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL
db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL

API = "/api/v1"

TEST_TOKEN_CONFIG = TokenConfig(access_secret="test-access-secret-0123456789abcdef", refresh_secret="test-refresh-secret-0123456789abcdef")


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def db():
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest.fixture
def codec():
    return TokenCodec(TEST_TOKEN_CONFIG)


@pytest.fixture
def image_store(tmp_path):
    store = ImageStore(tmp_path, "uploads")
    store.ensure_directory()
    return store


@pytest_asyncio.fixture
async def client(db, codec, image_store):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB,
    a temp-dir image store and fixed token secrets.
    """
    app.dependency_overrides[get_token_codec] = lambda: codec
    app.dependency_overrides[get_image_store] = lambda: image_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def create_admin(db):
    """
    Factory fixture to create admin accounts directly via ORM for privileged endpoints.
    """

    async def _create_admin(password: str = "AdminPass!23") -> tuple[Admin, str]:
        admin = await Admin.create(
            name="Store Admin",
            email=f"admin_{uuid.uuid4().hex[:6]}@example.com",
            password_hash=hash_password(password),
        )
        return admin, password

    return _create_admin


@pytest_asyncio.fixture
async def create_user(db):
    """
    Factory fixture to create regular users directly.
    """

    async def _create_user(password: str = "UserPass!23", role: str = "user") -> tuple[User, str]:
        user = await User.create(
            name="Regular User",
            email=f"user_{uuid.uuid4().hex[:6]}@example.com",
            password_hash=hash_password(password),
            role=role,
        )
        return user, password

    return _create_user


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Helper fixture to obtain Authorization headers via the login endpoint.
    """

    async def _get_headers(email: str, password: str) -> dict[str, str]:
        resp = await client.post(f"{API}/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['accessToken']}"}

    return _get_headers


@pytest_asyncio.fixture
async def admin_headers(create_admin, auth_header_factory):
    admin, password = await create_admin()
    return await auth_header_factory(admin.email, password)
