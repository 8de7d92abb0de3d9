"""SQLAlchemy ORM model for the items table.

Maps to the table created by alembic/versions/002. DO NOT add/remove columns here
without a corresponding migration.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from src.rw_common.database import Base


class ItemORM(Base):
    __tablename__ = "items"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    points: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    size: Mapped[str] = mapped_column(String(20), nullable=False)
    condition: Mapped[str] = mapped_column(String(20), nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    images: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    watcher_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    exchange_state: Mapped[str] = mapped_column(String(20), nullable=False)
    under_review: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    swap_requester_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    swap_status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    swap_requested_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
