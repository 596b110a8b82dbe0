"""AI roast generation endpoint."""

from fastapi import APIRouter, Depends

from stackroast.app.config import settings
from stackroast.app.schemas.roast import AiRoastRequest, AiRoastResponse
from stackroast.app.services.ai_roaster import AIRoaster

router = APIRouter(tags=["ai"])


def get_ai_roaster() -> AIRoaster:
    """FastAPI dependency; overridden in tests with a mocked transport."""
    return AIRoaster.from_settings(settings)


@router.post("/aiRoast", response_model=AiRoastResponse)
async def ai_roast(
    data: AiRoastRequest,
    roaster: AIRoaster = Depends(get_ai_roaster),
) -> dict:
    return {"roast": await roaster.generate(data.prompt)}
