"""
Kindred — Companion and UserCompanion models.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import ARRAY, UUID as PgUUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kindred.database import Base


class Companion(Base):
    __tablename__ = "companions"

    id: Mapped[uuid.UUID] = mapped_column(
        PgUUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    gender: Mapped[str] = mapped_column(String, nullable=False)
    bio: Mapped[str] = mapped_column(Text, nullable=False)
    hobbies: Mapped[list[str] | None] = mapped_column(ARRAY(String), nullable=True)
    personality: Mapped[list[str] | None] = mapped_column(
        ARRAY(String), nullable=True
    )
    likes: Mapped[list[str] | None] = mapped_column(ARRAY(String), nullable=True)
    dislikes: Mapped[list[str] | None] = mapped_column(ARRAY(String), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    location: Mapped[str | None] = mapped_column(
        String, nullable=True, comment="Usually 'City, Region'"
    )
    race: Mapped[str | None] = mapped_column(String, nullable=True)
    is_prebuilt: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false", nullable=False
    )
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        PgUUID(as_uuid=True), nullable=True, comment="Owner of a custom companion"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # ── Relationships ──────────────────────────────────────────────
    user_links: Mapped[list["UserCompanion"]] = relationship(
        "UserCompanion", back_populates="companion", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Companion {self.name!r} age={self.age} id={self.id}>"


class UserCompanion(Base):
    __tablename__ = "user_companions"

    id: Mapped[uuid.UUID] = mapped_column(
        PgUUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        PgUUID(as_uuid=True), index=True, nullable=False
    )
    companion_id: Mapped[uuid.UUID] = mapped_column(
        PgUUID(as_uuid=True),
        ForeignKey("companions.id", ondelete="CASCADE"),
        nullable=False,
    )
    relationship_type: Mapped[str | None] = mapped_column(
        String, nullable=True, comment="romantic / friendship / support / exploration"
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default="true", nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), onupdate=func.now(), nullable=True
    )

    # ── Relationships ──────────────────────────────────────────────
    companion: Mapped["Companion"] = relationship(
        "Companion", back_populates="user_links", lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<UserCompanion user={self.user_id} companion={self.companion_id}>"
