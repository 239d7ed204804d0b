# src/devspark/models/channel.py
"""SQLAlchemy model for channels."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from devspark.db.ids import new_id
from devspark.db.session import Base, utcnow

from .visibility import Visibility

VISIBILITY_TYPE = Enum(
    Visibility,
    native_enum=False,
    length=16,
    values_callable=lambda members: [member.value for member in members],
)


class Channel(Base):
    """A named container of posts owned by exactly one user."""

    __tablename__ = "channel"
    __table_args__ = (Index("ix_channel_owner_id", "owner_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    # Set once at creation and never reassigned.
    owner_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("app_user.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    visibility: Mapped[Visibility] = mapped_column(
        VISIBILITY_TYPE, nullable=False, default=Visibility.PUBLIC
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    def is_owned_by(self, user_id: str | None) -> bool:
        """Return True when ``user_id`` is the channel owner."""
        return user_id is not None and self.owner_id == user_id

    @property
    def is_visible(self) -> bool:
        """Return True when the channel is public."""
        return self.visibility == Visibility.PUBLIC
