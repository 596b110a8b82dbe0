from __future__ import annotations

from sqlalchemy import JSON, Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stackroast.app.db import Base


class Stack(Base):
    __tablename__ = "stacks"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    frontend: Mapped[str] = mapped_column(String, nullable=False)
    backend: Mapped[str] = mapped_column(String, nullable=False)
    database: Mapped[str] = mapped_column(String, nullable=False)
    hosting: Mapped[str] = mapped_column(String, nullable=False)
    other_tools: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    description: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    author_name: Mapped[str | None] = mapped_column(String, nullable=True, default=None)
    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # ISO 8601 UTC strings, same as every other timestamp in the schema.
    created_at: Mapped[str] = mapped_column(String, nullable=False, index=True)
    # Cached count of roasts; only ever changed by an atomic increment.
    roast_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    roasts: Mapped[list[Roast]] = relationship("Roast", back_populates="stack")
