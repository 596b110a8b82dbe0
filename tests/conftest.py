"""Shared fixtures and factory helpers.

Each test gets its own SQLite database file. The API client and the ``db``
fixture use separate sessions on the same engine, so tests commit their
setup before calling the API and re-read (or use the API) afterwards.
"""

import uuid
from datetime import UTC, datetime

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from stackroast.app.api.ai import get_ai_roaster
from stackroast.app.db import build_engine, get_db, get_engine, init_db
from stackroast.app.main import app
from stackroast.app.models.roast import Roast
from stackroast.app.models.stack import Stack
from stackroast.app.models.vote import Vote
from stackroast.app.services.ai_roaster import AIRoaster


def _now() -> str:
    return datetime.now(UTC).isoformat()


@pytest.fixture
async def engine(tmp_path):
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory) -> AsyncSession:
    async with session_factory() as session:
        yield session


@pytest.fixture
def ai_roaster() -> AIRoaster:
    """Unconfigured by default; tests swap in a roaster with a mock transport."""
    return AIRoaster(api_key=None)


@pytest.fixture
async def client(engine, session_factory, ai_roaster) -> AsyncClient:
    async def _override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_ai_roaster] = lambda: ai_roaster
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def mock_roaster(handler, api_key: str = "test-key") -> AIRoaster:
    """An AIRoaster whose HTTP calls go to ``handler`` instead of the network."""
    return AIRoaster(api_key=api_key, transport=httpx.MockTransport(handler))


def gemini_reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


# ---------------------------------------------------------------------------
# Factory helpers
# ---------------------------------------------------------------------------


async def create_stack(
    db: AsyncSession,
    title: str = "My SaaS",
    frontend: str = "React",
    backend: str = "Node",
    database: str = "Postgres",
    hosting: str = "Vercel",
    other_tools: list[str] | None = None,
    description: str | None = None,
    author_name: str | None = None,
    is_anonymous: bool = False,
    roast_count: int = 0,
    created_at: str | None = None,
) -> Stack:
    stack = Stack(
        id=str(uuid.uuid4()),
        title=title,
        frontend=frontend,
        backend=backend,
        database=database,
        hosting=hosting,
        other_tools=other_tools or [],
        description=description,
        author_name=author_name,
        is_anonymous=is_anonymous,
        roast_count=roast_count,
        created_at=created_at or _now(),
    )
    db.add(stack)
    await db.flush()
    return stack


async def create_roast(
    db: AsyncSession,
    stack_id: str,
    content: str = "Nice resume-driven development.",
    roast_type: str = "brutal",
    author_name: str | None = None,
    upvotes: int = 0,
    downvotes: int = 0,
    created_at: str | None = None,
) -> Roast:
    roast = Roast(
        id=str(uuid.uuid4()),
        stack_id=stack_id,
        content=content,
        roast_type=roast_type,
        author_name=author_name,
        upvotes=upvotes,
        downvotes=downvotes,
        created_at=created_at or _now(),
    )
    db.add(roast)
    await db.flush()
    return roast


async def create_vote(
    db: AsyncSession,
    roast_id: str,
    voter_ip: str = "203.0.113.7",
    vote_type: str = "up",
) -> Vote:
    vote = Vote(
        id=str(uuid.uuid4()),
        roast_id=roast_id,
        voter_ip=voter_ip,
        vote_type=vote_type,
        created_at=_now(),
    )
    db.add(vote)
    await db.flush()
    return vote
