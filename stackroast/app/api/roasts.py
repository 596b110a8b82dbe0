"""Roast endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stackroast.app.db import get_db
from stackroast.app.schemas.roast import RoastCreate, RoastCreatedResponse, RoastListResponse
from stackroast.app.services import roast_service

router = APIRouter(prefix="/roasts", tags=["roasts"])


@router.get("", response_model=RoastListResponse)
async def list_roasts(
    stack_id: str | None = None,
    roast_type: str | None = None,
    db: AsyncSession = Depends(get_db),
) -> dict:
    roasts = await roast_service.list_roasts(db, stack_id, roast_type)
    return {"roasts": roasts}


@router.post("", response_model=RoastCreatedResponse)
async def create_roast(data: RoastCreate, db: AsyncSession = Depends(get_db)) -> dict:
    roast = await roast_service.create_roast(
        db,
        stack_id=data.stack_id,
        content=data.content,
        roast_type=data.roast_type,
        author_name=data.author_name,
    )
    return {"roast": roast}
