"""
Kindred — MoodEntry model (per-message mood history).
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import UUID as PgUUID
from sqlalchemy.orm import Mapped, mapped_column

from kindred.database import Base


class MoodEntry(Base):
    __tablename__ = "mood_entries"
    __table_args__ = (
        Index(
            "ix_mood_entries_user_companion_created",
            "user_id",
            "companion_id",
            "created_at",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        PgUUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(PgUUID(as_uuid=True), nullable=False)
    companion_id: Mapped[uuid.UUID] = mapped_column(
        PgUUID(as_uuid=True),
        ForeignKey("companions.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_companion_id: Mapped[uuid.UUID] = mapped_column(
        PgUUID(as_uuid=True),
        ForeignKey("user_companions.id", ondelete="CASCADE"),
        nullable=False,
    )
    mood_type: Mapped[str] = mapped_column(
        String, nullable=False, comment="happy / sad / ... / neutral"
    )
    intensity: Mapped[int] = mapped_column(Integer, nullable=False, comment="1-10")
    message_context: Mapped[str | None] = mapped_column(Text, nullable=True)
    detected_automatically: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default="true", nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<MoodEntry user={self.user_id} mood={self.mood_type!r} "
            f"intensity={self.intensity}>"
        )
