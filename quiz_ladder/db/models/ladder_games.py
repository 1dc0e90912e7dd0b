from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from quiz_ladder.db.models.base import Base


class LadderGame(Base):
    __tablename__ = "ladder_games"
    __table_args__ = (
        CheckConstraint(
            "status IN ('in_progress','won','fail','timeout','money')",
            name="ck_ladder_games_status",
        ),
        CheckConstraint("current_level >= 0", name="ck_ladder_games_current_level_non_negative"),
        CheckConstraint("prize >= 0", name="ck_ladder_games_prize_non_negative"),
        CheckConstraint(
            "(status = 'in_progress') = (finished_at IS NULL)",
            name="ck_ladder_games_finished_at_consistency",
        ),
        Index("idx_ladder_games_user_created", "user_id", "created_at"),
        Index(
            "uq_ladder_games_user_in_progress",
            "user_id",
            unique=True,
            postgresql_where=text("status = 'in_progress'"),
        ),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    current_level: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    prize: Mapped[int] = mapped_column(BigInteger, nullable=False, server_default=text("0"))
    used_lifelines: Mapped[list[str]] = mapped_column(
        JSONB,
        nullable=False,
        server_default=text("'[]'::jsonb"),
    )
    questions: Mapped[list[dict[str, object]]] = mapped_column(JSONB, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    finished_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
