"""Stack repository operations."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import asc, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from stackroast.app.errors import NotFoundError, ValidationError
from stackroast.app.models.roast import Roast
from stackroast.app.models.stack import Stack
from stackroast.app.schemas.stack import StackCreate

REQUIRED_FIELDS = ("title", "frontend", "backend", "database", "hosting")

# Accepts both the column names and the camelCase JSON keys.
SORT_FIELDS = {
    "created_at": Stack.created_at,
    "createdAt": Stack.created_at,
    "roast_count": Stack.roast_count,
    "roastCount": Stack.roast_count,
    "title": Stack.title,
}

# Named orderings offered on the listing page.
SORT_PRESETS = {
    "recent": ("created_at", "desc"),
    "most_roasted": ("roast_count", "desc"),
    "least_roasted": ("roast_count", "asc"),
}


def _clean(value: str | None) -> str | None:
    """Trim a free-text field; blank becomes ``None``."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def resolve_sort_preset(preset: str | None) -> tuple[str, str]:
    """Map a listing preset name to a ``(field, order)`` pair."""
    if not preset:
        return SORT_PRESETS["recent"]
    if preset not in SORT_PRESETS:
        raise ValidationError(f"Unknown sort preset: {preset}")
    return SORT_PRESETS[preset]


async def create_stack(db: AsyncSession, data: StackCreate) -> Stack:
    required = {name: _clean(getattr(data, name)) for name in REQUIRED_FIELDS}
    missing = [name for name, value in required.items() if value is None]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    tools = [tool.strip() for tool in (data.other_tools or []) if tool and tool.strip()]

    stack = Stack(
        id=str(uuid.uuid4()),
        **required,
        other_tools=tools,
        description=_clean(data.description),
        author_name=_clean(data.author_name),
        is_anonymous=bool(data.is_anonymous),
        created_at=datetime.now(UTC).isoformat(),
        roast_count=0,
    )
    db.add(stack)
    await db.flush()
    return stack


async def list_stacks(
    db: AsyncSession,
    sort_field: str | None = None,
    sort_order: str | None = None,
) -> list[Stack]:
    sort_field = sort_field or "created_at"
    sort_order = (sort_order or "desc").lower()

    column = SORT_FIELDS.get(sort_field)
    if column is None:
        raise ValidationError(f"Cannot sort by {sort_field}")
    if sort_order not in ("asc", "desc"):
        raise ValidationError("order must be 'asc' or 'desc'")

    direction = asc if sort_order == "asc" else desc
    query = select(Stack).order_by(direction(column), desc(Stack.created_at))
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_stack(db: AsyncSession, stack_id: str) -> Stack:
    result = await db.execute(select(Stack).where(Stack.id == stack_id))
    stack = result.scalar_one_or_none()
    if stack is None:
        raise NotFoundError("Stack not found")
    return stack


async def get_stack_with_roasts(db: AsyncSession, stack_id: str) -> tuple[Stack, list[Roast]]:
    stack = await get_stack(db, stack_id)
    result = await db.execute(
        select(Roast).where(Roast.stack_id == stack_id).order_by(desc(Roast.created_at))
    )
    return stack, list(result.scalars().all())
