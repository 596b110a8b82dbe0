from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stackroast.app.db import Base

ROAST_TYPES = ("brutal", "constructive", "meme")


class Roast(Base):
    __tablename__ = "roasts"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    stack_id: Mapped[str] = mapped_column(
        String, ForeignKey("stacks.id"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    roast_type: Mapped[str] = mapped_column(String, nullable=False)  # one of ROAST_TYPES
    author_name: Mapped[str | None] = mapped_column(String, nullable=True, default=None)
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[str] = mapped_column(String, nullable=False)

    stack: Mapped[Stack] = relationship("Stack", back_populates="roasts")
