from pydantic import BaseModel


class VoteCreate(BaseModel):
    roast_id: str | None = None
    vote_type: str | None = None


class VoteResult(BaseModel):
    success: bool = True
