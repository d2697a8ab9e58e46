import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from bookstore.database import Base, enable_sqlite_foreign_keys, get_session
from bookstore.app import create_app
from bookstore.services.store import CatalogStore
import bookstore.models  # noqa: F401

TEST_DB_URL = "sqlite+aiosqlite://"  # in-memory

engine = create_async_engine(TEST_DB_URL, echo=False)
enable_sqlite_foreign_keys(engine)
TestSession = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(autouse=True)
async def setup_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def session():
    async with TestSession() as s:
        yield s


@pytest.fixture
async def store(session):
    return CatalogStore(session)


@pytest.fixture
async def client():
    app = create_app()

    async def override_session():
        async with TestSession() as s:
            yield s

    app.dependency_overrides[get_session] = override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def make_author(client):
    async def _make_author(name="Frank Herbert", email="frank@dune.org"):
        resp = await client.post("/authors", json={"name": name, "email": email})
        assert resp.status_code == 201
        return resp.json()

    return _make_author


@pytest.fixture
def make_book(client):
    async def _make_book(author_id, title="Dune", isbn="9780441013593", price=9.99):
        resp = await client.post(
            "/books", json={"title": title, "isbn": isbn, "price": price, "authorId": author_id}
        )
        assert resp.status_code == 201
        return resp.json()

    return _make_book


@pytest.fixture
async def author(make_author):
    """Frank Herbert, created through the API."""
    return await make_author()
