"""Vote operations: one vote per voter per roast, with tally maintenance."""

import logging
import uuid
from collections.abc import Mapping
from datetime import UTC, datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from stackroast.app.errors import DuplicateVoteError, NotFoundError, ValidationError
from stackroast.app.models.roast import Roast
from stackroast.app.models.vote import VOTE_TYPES, Vote

logger = logging.getLogger(__name__)

UNKNOWN_VOTER = "unknown"


def derive_voter_ip(
    headers: Mapping[str, str],
    client_host: str | None = None,
    use_client_host: bool = False,
) -> str:
    """Identify the voter from proxy headers.

    Uses the first ``x-forwarded-for`` entry, then ``x-real-ip``. Without
    either, every client shares the ``"unknown"`` slot unless
    ``use_client_host`` is set and the socket peer address is known.
    """
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = (headers.get("x-real-ip") or "").strip()
    if real_ip:
        return real_ip

    if use_client_host and client_host:
        return client_host
    return UNKNOWN_VOTER


async def cast_vote(
    db: AsyncSession,
    roast_id: str | None,
    vote_type: str | None,
    voter_ip: str,
) -> Vote:
    if not roast_id or vote_type not in VOTE_TYPES:
        raise ValidationError("Missing or invalid fields")

    roast_result = await db.execute(select(Roast.id).where(Roast.id == roast_id))
    if roast_result.scalar_one_or_none() is None:
        raise NotFoundError("Roast not found")

    if await has_voted(db, roast_id, voter_ip):
        raise DuplicateVoteError()

    vote = Vote(
        id=str(uuid.uuid4()),
        roast_id=roast_id,
        voter_ip=voter_ip,
        vote_type=vote_type,
        created_at=datetime.now(UTC).isoformat(),
    )
    db.add(vote)
    try:
        await db.flush()
    except IntegrityError:
        # A concurrent request inserted the same (roast, voter) pair first.
        await db.rollback()
        logger.info("Duplicate vote rejected by constraint: roast=%s voter=%s", roast_id, voter_ip)
        raise DuplicateVoteError() from None

    await increment_tally(db, roast_id, vote_type)
    return vote


async def has_voted(db: AsyncSession, roast_id: str, voter_ip: str) -> bool:
    existing = await db.execute(
        select(Vote.id).where(Vote.roast_id == roast_id, Vote.voter_ip == voter_ip).limit(1)
    )
    return existing.scalar_one_or_none() is not None


async def increment_tally(db: AsyncSession, roast_id: str, vote_type: str) -> None:
    """Bump ``upvotes`` or ``downvotes`` by one in a single UPDATE."""
    column = Roast.upvotes if vote_type == "up" else Roast.downvotes
    await db.execute(update(Roast).where(Roast.id == roast_id).values({column: column + 1}))
