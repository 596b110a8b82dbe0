from stackroast.app.schemas.roast import (
    AiRoastRequest,
    AiRoastResponse,
    RoastCreate,
    RoastCreatedResponse,
    RoastListResponse,
    RoastResponse,
)
from stackroast.app.schemas.stack import (
    StackCreate,
    StackCreatedResponse,
    StackDetailResponse,
    StackListResponse,
    StackResponse,
)
from stackroast.app.schemas.vote import VoteCreate, VoteResult

__all__ = [
    "StackCreate",
    "StackResponse",
    "StackListResponse",
    "StackCreatedResponse",
    "StackDetailResponse",
    "RoastCreate",
    "RoastResponse",
    "RoastListResponse",
    "RoastCreatedResponse",
    "AiRoastRequest",
    "AiRoastResponse",
    "VoteCreate",
    "VoteResult",
]
