# src/devspark/models/user.py
"""SQLAlchemy model for registered users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from devspark.db.ids import new_id
from devspark.db.session import Base, utcnow


class User(Base):
    """Identity row from which a request's actor is built."""

    __tablename__ = "app_user"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    display_name: Mapped[str] = mapped_column(Text, nullable=False)
    banned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Permission tokens granted to this user, see devspark.core.permissions.
    permissions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
