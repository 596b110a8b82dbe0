"""Roast schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RoastCreate(BaseModel):
    stack_id: str | None = None
    content: str | None = None
    roast_type: str | None = None
    author_name: str | None = None


class RoastResponse(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: str
    stack_id: str
    content: str
    roast_type: str
    author_name: str | None = None
    upvotes: int = 0
    downvotes: int = 0
    created_at: str


class RoastListResponse(BaseModel):
    roasts: list[RoastResponse]


class RoastCreatedResponse(BaseModel):
    roast: RoastResponse


class AiRoastRequest(BaseModel):
    prompt: str | None = None


class AiRoastResponse(BaseModel):
    roast: str
