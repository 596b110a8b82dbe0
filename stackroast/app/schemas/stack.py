"""Stack schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from stackroast.app.schemas.roast import RoastResponse


class StackCreate(BaseModel):
    """Submission body. Keys are camelCase (``otherTools``, ``authorName``, ...).

    Required fields are optional here so that a missing one is reported by
    the service as a validation error, after trimming.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str | None = None
    frontend: str | None = None
    backend: str | None = None
    database: str | None = None
    hosting: str | None = None
    other_tools: list[str] | None = None
    description: str | None = None
    author_name: str | None = None
    is_anonymous: bool | None = None


class StackResponse(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: str
    title: str
    frontend: str
    backend: str
    database: str
    hosting: str
    other_tools: list[str] = []
    description: str | None = None
    author_name: str | None = None
    is_anonymous: bool = False
    created_at: str
    roast_count: int = 0


class StackListResponse(BaseModel):
    stacks: list[StackResponse]


class StackCreatedResponse(BaseModel):
    message: str
    stack: StackResponse


class StackDetailResponse(BaseModel):
    stack: StackResponse
    roasts: list[RoastResponse]
