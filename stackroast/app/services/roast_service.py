"""Roast repository operations and the stack roast-count counter."""

import logging
import uuid
from datetime import UTC, datetime

from sqlalchemy import desc, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from stackroast.app.errors import ValidationError
from stackroast.app.models.roast import ROAST_TYPES, Roast
from stackroast.app.models.stack import Stack
from stackroast.app.services.stack_service import get_stack

logger = logging.getLogger(__name__)


def _validate_roast_type(roast_type: str | None) -> str:
    if not roast_type or roast_type not in ROAST_TYPES:
        raise ValidationError(f"roast_type must be one of: {', '.join(ROAST_TYPES)}")
    return roast_type


async def create_roast(
    db: AsyncSession,
    stack_id: str | None,
    content: str | None,
    roast_type: str | None,
    author_name: str | None = None,
) -> Roast:
    content = content.strip() if content else ""
    if not stack_id or not content or not roast_type:
        raise ValidationError("Missing required fields")
    _validate_roast_type(roast_type)

    await get_stack(db, stack_id)

    roast = Roast(
        id=str(uuid.uuid4()),
        stack_id=stack_id,
        content=content,
        roast_type=roast_type,
        author_name=(author_name or "").strip() or None,
        upvotes=0,
        downvotes=0,
        created_at=datetime.now(UTC).isoformat(),
    )
    db.add(roast)
    await db.flush()

    await increment_roast_count(db, stack_id)
    return roast


async def increment_roast_count(db: AsyncSession, stack_id: str) -> bool:
    """Bump ``stacks.roast_count`` by one in a single UPDATE.

    Runs in a savepoint so a failure leaves the roast insert intact; the
    error is logged and ``False`` returned.
    """
    try:
        async with db.begin_nested():
            await db.execute(
                update(Stack)
                .where(Stack.id == stack_id)
                .values(roast_count=Stack.roast_count + 1)
            )
    except SQLAlchemyError:
        logger.exception("Failed to update roast_count for stack %s", stack_id)
        return False
    return True


async def list_roasts(
    db: AsyncSession, stack_id: str | None, roast_type: str | None = None
) -> list[Roast]:
    if not stack_id:
        raise ValidationError("Missing stack_id")

    query = select(Roast).where(Roast.stack_id == stack_id)
    if roast_type and roast_type != "all":
        query = query.where(Roast.roast_type == _validate_roast_type(roast_type))

    result = await db.execute(query.order_by(desc(Roast.created_at)))
    return list(result.scalars().all())
