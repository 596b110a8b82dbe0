"""Server-rendered pages: listing, stack detail and the submission form.

Pages call the same service operations as the JSON API. Form errors are
rendered back into the page instead of returned as JSON.
"""

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import Response

from stackroast.app.api.ai import get_ai_roaster
from stackroast.app.api.votes import voter_ip
from stackroast.app.db import get_db
from stackroast.app.errors import StackRoastError, ValidationError
from stackroast.app.models.roast import ROAST_TYPES
from stackroast.app.models.stack import Stack
from stackroast.app.schemas.stack import StackCreate
from stackroast.app.services import roast_service, stack_service
from stackroast.app.services.ai_roaster import AIRoaster, build_roast_prompt
from stackroast.app.services.vote_service import cast_vote
from stackroast.app.templating import render_template

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"], include_in_schema=False)


def split_tools(raw: str | None) -> list[str]:
    """Comma-separated form input to a clean list of tool names."""
    if not raw:
        return []
    return [tool.strip() for tool in raw.split(",") if tool.strip()]


def listing_stats(stacks: list[Stack]) -> dict[str, int]:
    """Headline figures for the listing page, from the cached roast counts."""
    counts = [stack.roast_count for stack in stacks]
    return {
        "stacks": len(stacks),
        "total_roasts": sum(counts),
        "most_roasted": max(counts, default=0),
    }


async def _render_stack(
    request: Request,
    db: AsyncSession,
    stack_id: str,
    status_code: int = 200,
    roast_type: str | None = None,
    **extra,
) -> Response:
    stack = await stack_service.get_stack(db, stack_id)
    roasts = await roast_service.list_roasts(db, stack_id, roast_type)
    context = {
        "stack": stack,
        "roasts": roasts,
        "roast_types": ROAST_TYPES,
        "active_filter": roast_type or "all",
        "error": None,
        "draft": "",
        "draft_type": "brutal",
    }
    context.update(extra)
    return render_template(request, "stack.html", context, status_code=status_code)


@router.get("/")
async def index(
    request: Request,
    sort: str | None = None,
    db: AsyncSession = Depends(get_db),
) -> Response:
    field, order = stack_service.resolve_sort_preset(sort)
    stacks = await stack_service.list_stacks(db, field, order)
    return render_template(
        request,
        "index.html",
        {
            "stacks": stacks,
            "stats": listing_stats(stacks),
            "sort": sort or "recent",
            "presets": stack_service.SORT_PRESETS,
        },
    )


@router.get("/submit")
async def submit_form(request: Request) -> Response:
    return render_template(request, "submit.html", {"form": {}, "error": None})


@router.post("/submit")
async def submit_stack(
    request: Request,
    title: str = Form(""),
    frontend: str = Form(""),
    backend: str = Form(""),
    database: str = Form(""),
    hosting: str = Form(""),
    other_tools: str = Form(""),
    description: str = Form(""),
    author_name: str = Form(""),
    is_anonymous: bool = Form(False),
    db: AsyncSession = Depends(get_db),
) -> Response:
    data = StackCreate(
        title=title,
        frontend=frontend,
        backend=backend,
        database=database,
        hosting=hosting,
        other_tools=split_tools(other_tools),
        description=description,
        author_name=author_name,
        is_anonymous=is_anonymous,
    )
    try:
        stack = await stack_service.create_stack(db, data)
    except ValidationError as exc:
        form = data.model_dump()
        form["other_tools"] = other_tools
        return render_template(
            request, "submit.html", {"form": form, "error": exc.message}, status_code=400
        )
    return RedirectResponse(f"/stack/{stack.id}", status_code=303)


@router.get("/stack/{stack_id}")
async def stack_detail(
    request: Request,
    stack_id: str,
    roast_type: str | None = None,
    db: AsyncSession = Depends(get_db),
) -> Response:
    return await _render_stack(request, db, stack_id, roast_type=roast_type)


@router.post("/stack/{stack_id}/roasts")
async def submit_roast(
    request: Request,
    stack_id: str,
    content: str = Form(""),
    roast_type: str = Form("brutal"),
    author_name: str = Form(""),
    db: AsyncSession = Depends(get_db),
) -> Response:
    try:
        await roast_service.create_roast(db, stack_id, content, roast_type, author_name)
    except ValidationError as exc:
        return await _render_stack(
            request,
            db,
            stack_id,
            status_code=400,
            error=exc.message,
            draft=content,
            draft_type=roast_type,
        )
    return RedirectResponse(f"/stack/{stack_id}", status_code=303)


@router.post("/stack/{stack_id}/roasts/{roast_id}/vote")
async def submit_vote(
    request: Request,
    stack_id: str,
    roast_id: str,
    vote_type: str = Form(""),
    ip: str = Depends(voter_ip),
    db: AsyncSession = Depends(get_db),
) -> Response:
    try:
        await cast_vote(db, roast_id, vote_type, ip)
    except StackRoastError as exc:
        if exc.status_code != 400:
            raise
        return await _render_stack(request, db, stack_id, status_code=400, error=exc.message)
    return RedirectResponse(f"/stack/{stack_id}", status_code=303)


@router.post("/stack/{stack_id}/ai-draft")
async def ai_draft(
    request: Request,
    stack_id: str,
    roast_type: str = Form("brutal"),
    roaster: AIRoaster = Depends(get_ai_roaster),
    db: AsyncSession = Depends(get_db),
) -> Response:
    stack = await stack_service.get_stack(db, stack_id)
    try:
        draft = await roaster.generate(build_roast_prompt(stack, roast_type))
    except StackRoastError as exc:
        logger.warning("AI draft failed for stack %s: %s", stack_id, exc.message)
        return await _render_stack(
            request, db, stack_id, status_code=exc.status_code, error=exc.message
        )
    return await _render_stack(request, db, stack_id, draft=draft, draft_type=roast_type)
