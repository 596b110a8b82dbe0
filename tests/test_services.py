"""Direct service-layer tests.

Calls the stack, roast and vote services with the test session, covering
behaviour that is awkward to reach through HTTP: counter maintenance,
partial failures and the storage-level vote constraint.
"""

import logging

import pytest
from sqlalchemy import Update, select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from stackroast.app.errors import DuplicateVoteError, NotFoundError, ValidationError
from stackroast.app.models.roast import Roast
from stackroast.app.models.vote import Vote
from stackroast.app.schemas.stack import StackCreate
from stackroast.app.services import roast_service, stack_service
from stackroast.app.services.vote_service import UNKNOWN_VOTER, cast_vote, derive_voter_ip
from tests.conftest import create_roast, create_stack, create_vote

# ---------------------------------------------------------------------------
# stack_service
# ---------------------------------------------------------------------------


async def test_create_stack_assigns_id_and_timestamp(db: AsyncSession):
    stack = await stack_service.create_stack(
        db,
        StackCreate(
            title="Blog", frontend="Hugo", backend="none", database="none", hosting="S3"
        ),
    )
    assert stack.id
    assert stack.created_at
    assert stack.roast_count == 0
    assert stack.other_tools == []
    assert stack.is_anonymous is False


async def test_create_stack_reports_every_missing_field(db: AsyncSession):
    with pytest.raises(ValidationError) as exc_info:
        await stack_service.create_stack(db, StackCreate(title="Only a title"))
    assert "frontend, backend, database, hosting" in exc_info.value.message


async def test_get_stack_with_roasts_not_found(db: AsyncSession):
    with pytest.raises(NotFoundError):
        await stack_service.get_stack_with_roasts(db, "missing")


@pytest.mark.parametrize(
    ("preset", "expected"),
    [
        (None, ["B", "C", "A"]),
        ("recent", ["B", "C", "A"]),
        ("most_roasted", ["C", "A", "B"]),
        ("least_roasted", ["B", "A", "C"]),
    ],
)
async def test_sort_presets(db: AsyncSession, preset: str | None, expected: list[str]):
    await create_stack(db, title="A", roast_count=2, created_at="2024-01-01T00:00:00+00:00")
    await create_stack(db, title="B", roast_count=0, created_at="2024-01-03T00:00:00+00:00")
    await create_stack(db, title="C", roast_count=5, created_at="2024-01-02T00:00:00+00:00")

    field, order = stack_service.resolve_sort_preset(preset)
    stacks = await stack_service.list_stacks(db, field, order)
    assert [s.title for s in stacks] == expected


def test_unknown_sort_preset():
    with pytest.raises(ValidationError):
        stack_service.resolve_sort_preset("hottest")


# ---------------------------------------------------------------------------
# roast_service
# ---------------------------------------------------------------------------


async def test_create_roast_increments_roast_count(db: AsyncSession):
    stack = await create_stack(db)

    await roast_service.create_roast(db, stack.id, "Serverless monolith?", "brutal")
    await roast_service.create_roast(db, stack.id, "Consider a queue.", "constructive")
    await db.commit()
    await db.refresh(stack)

    assert stack.roast_count == 2


async def test_roast_survives_counter_failure(
    db: AsyncSession, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
):
    """If the roast_count UPDATE fails the roast is still created and the error logged."""
    stack = await create_stack(db)
    await db.commit()

    real_execute = db.execute

    async def failing_execute(statement, *args, **kwargs):
        if isinstance(statement, Update) and statement.table.name == "stacks":
            raise OperationalError("UPDATE stacks", {}, Exception("database is locked"))
        return await real_execute(statement, *args, **kwargs)

    monkeypatch.setattr(db, "execute", failing_execute)
    with caplog.at_level(logging.ERROR, logger="stackroast.app.services.roast_service"):
        roast = await roast_service.create_roast(db, stack.id, "still here", "meme")
    monkeypatch.undo()
    await db.commit()

    stored = await db.execute(select(Roast.content).where(Roast.id == roast.id))
    assert stored.scalar_one() == "still here"
    await db.refresh(stack)
    assert stack.roast_count == 0
    assert "Failed to update roast_count" in caplog.text


async def test_increment_roast_count_reports_success(db: AsyncSession):
    stack = await create_stack(db)
    assert await roast_service.increment_roast_count(db, stack.id) is True
    await db.refresh(stack)
    assert stack.roast_count == 1


# ---------------------------------------------------------------------------
# vote_service
# ---------------------------------------------------------------------------


async def test_cast_vote_updates_matching_counter(db: AsyncSession):
    stack = await create_stack(db)
    roast = await create_roast(db, stack.id)

    await cast_vote(db, roast.id, "up", "10.0.0.1")
    await cast_vote(db, roast.id, "down", "10.0.0.2")
    await cast_vote(db, roast.id, "down", "10.0.0.3")
    await db.refresh(roast)

    assert (roast.upvotes, roast.downvotes) == (1, 2)


async def test_duplicate_vote_leaves_counters_alone(db: AsyncSession):
    stack = await create_stack(db)
    roast = await create_roast(db, stack.id, upvotes=4, downvotes=1)
    await create_vote(db, roast.id, voter_ip="10.9.9.9", vote_type="up")
    await db.commit()

    with pytest.raises(DuplicateVoteError):
        await cast_vote(db, roast.id, "down", "10.9.9.9")
    await db.refresh(roast)

    assert (roast.upvotes, roast.downvotes) == (4, 1)


async def test_votes_table_rejects_duplicate_pair(db: AsyncSession):
    """The (roast_id, voter_ip) pair is unique at the storage level."""
    stack = await create_stack(db)
    roast = await create_roast(db, stack.id)
    await create_vote(db, roast.id, voter_ip="10.1.1.1")

    with pytest.raises(IntegrityError):
        await create_vote(db, roast.id, voter_ip="10.1.1.1", vote_type="down")
    await db.rollback()


async def test_same_voter_can_vote_on_different_roasts(db: AsyncSession):
    stack = await create_stack(db)
    first = await create_roast(db, stack.id)
    second = await create_roast(db, stack.id)

    await cast_vote(db, first.id, "up", "10.2.2.2")
    await cast_vote(db, second.id, "up", "10.2.2.2")

    result = await db.execute(select(Vote).where(Vote.voter_ip == "10.2.2.2"))
    assert len(result.scalars().all()) == 2


@pytest.mark.parametrize(
    ("headers", "client_host", "use_client", "expected"),
    [
        ({"x-forwarded-for": "1.1.1.1, 2.2.2.2"}, None, False, "1.1.1.1"),
        ({"x-forwarded-for": " 3.3.3.3 "}, None, False, "3.3.3.3"),
        ({"x-real-ip": "4.4.4.4"}, None, False, "4.4.4.4"),
        ({"x-forwarded-for": "5.5.5.5", "x-real-ip": "6.6.6.6"}, None, False, "5.5.5.5"),
        ({"x-forwarded-for": ""}, None, False, UNKNOWN_VOTER),
        ({}, "127.0.0.1", False, UNKNOWN_VOTER),
        ({}, "127.0.0.1", True, "127.0.0.1"),
        ({}, None, True, UNKNOWN_VOTER),
    ],
)
def test_derive_voter_ip(headers, client_host, use_client, expected):
    assert derive_voter_ip(headers, client_host, use_client) == expected
