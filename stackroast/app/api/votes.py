"""Vote endpoint. Voters are identified by IP, there are no accounts."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from stackroast.app.config import settings
from stackroast.app.db import get_db
from stackroast.app.schemas.vote import VoteCreate, VoteResult
from stackroast.app.services.vote_service import cast_vote, derive_voter_ip

router = APIRouter(prefix="/votes", tags=["votes"])


def voter_ip(request: Request) -> str:
    """FastAPI dependency resolving the caller's voter identity."""
    return derive_voter_ip(
        request.headers,
        client_host=request.client.host if request.client else None,
        use_client_host=settings.voter_ip_from_client,
    )


@router.post("", response_model=VoteResult)
async def vote(
    data: VoteCreate,
    ip: str = Depends(voter_ip),
    db: AsyncSession = Depends(get_db),
) -> dict:
    await cast_vote(db, data.roast_id, data.vote_type, ip)
    return {"success": True}
