from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from stackroast.app.db import Base

VOTE_TYPES = ("up", "down")


class Vote(Base):
    __tablename__ = "votes"
    # One vote per voter per roast; the database rejects the second insert.
    __table_args__ = (UniqueConstraint("roast_id", "voter_ip", name="uq_votes_roast_voter"),)

    id: Mapped[str] = mapped_column(String, primary_key=True)
    roast_id: Mapped[str] = mapped_column(String, ForeignKey("roasts.id"), nullable=False)
    voter_ip: Mapped[str] = mapped_column(String, nullable=False)
    vote_type: Mapped[str] = mapped_column(String, nullable=False)  # "up" or "down"
    created_at: Mapped[str] = mapped_column(String, nullable=False)
