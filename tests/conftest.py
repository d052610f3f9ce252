"""
Test infrastructure for the blog GraphQL API.

Strategy
--------
- Each test gets a fresh SQLite database file (aiosqlite) under pytest's
  ``tmp_path``.  A file rather than ``:memory:`` is used because every
  resolver opens its own session: sibling fields resolved concurrently
  need independent connections onto the same database.
- The app's ``get_session_factory`` dependency is overridden so the
  GraphQL context hands resolvers the test session factory.
- bcrypt runs at its minimum cost so signup/login tests stay fast.
"""
import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DEBUG", "false")

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession

from blog_api.database import Base, get_session_factory
from blog_api.main import app
from blog_api.middleware import install_query_counter


SIGNUP = """
mutation Signup($name: String!, $email: String!, $password: String!) {
  signup(name: $name, email: $email, password: $password)
}
"""

LOGIN = """
mutation Login($email: String!, $password: String!) {
  login(email: $email, password: $password) {
    token
    user { id name email }
  }
}
"""


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """Create all tables in a throwaway database and route the app to it."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'blog.db'}")
    install_query_counter(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    app.dependency_overrides[get_session_factory] = lambda: factory
    yield factory

    app.dependency_overrides.pop(get_session_factory, None)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncSession:
    """
    Yield a live AsyncSession for tests that talk to the service layer
    directly.  Nothing is committed unless the test commits.
    """
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def async_client(session_factory) -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def graphql(async_client):
    """
    Return a coroutine function posting one operation to ``/graphql``.

    ``await graphql(query, variables, token=...)`` returns the httpx
    response; pass ``token`` to send an ``Authorization: Bearer`` header.
    """

    async def execute(query: str, variables: dict | None = None, token: str | None = None):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        return await async_client.post(
            "/graphql",
            json={"query": query, "variables": variables or {}},
            headers=headers,
        )

    return execute


@pytest_asyncio.fixture
async def register(graphql):
    """
    Sign a user up, log them in and return ``(user_id, token)``.
    """

    async def _register(email: str, name: str = "Tester", password: str = "s3cret-pass"):
        resp = await graphql(SIGNUP, {"name": name, "email": email, "password": password})
        assert resp.json()["data"]["signup"] is True
        resp = await graphql(LOGIN, {"email": email, "password": password})
        login = resp.json()["data"]["login"]
        return login["user"]["id"], login["token"]

    return _register
