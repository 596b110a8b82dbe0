"""Stack endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stackroast.app.db import get_db
from stackroast.app.schemas.stack import (
    StackCreate,
    StackCreatedResponse,
    StackDetailResponse,
    StackListResponse,
)
from stackroast.app.services import stack_service

router = APIRouter(prefix="/stacks", tags=["stacks"])


@router.get("", response_model=StackListResponse)
async def list_stacks(
    sort: str | None = None,
    order: str | None = None,
    db: AsyncSession = Depends(get_db),
) -> dict:
    stacks = await stack_service.list_stacks(db, sort, order)
    return {"stacks": stacks}


@router.post("", response_model=StackCreatedResponse, status_code=201)
async def create_stack(data: StackCreate, db: AsyncSession = Depends(get_db)) -> dict:
    stack = await stack_service.create_stack(db, data)
    return {"message": "Stack created successfully", "stack": stack}


@router.get("/{stack_id}", response_model=StackDetailResponse)
async def get_stack(stack_id: str, db: AsyncSession = Depends(get_db)) -> dict:
    stack, roasts = await stack_service.get_stack_with_roasts(db, stack_id)
    return {"stack": stack, "roasts": roasts}
