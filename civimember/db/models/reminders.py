"""SQLAlchemy ORM models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Index, Integer, String, Text, func, true
from sqlalchemy.orm import Mapped, mapped_column

from civimember.db.base import Base


class ActionSchedule(Base):
    """
    Administrator-configured scheduled reminder.

    entity_value and entity_status are padded multi-value lists whose meaning
    depends on the mapping (for memberships: membership type ids and
    auto-renew options). start_action_date names the trigger date field.
    When absolute_date is set the reminder goes out on that date instead of
    an offset from the trigger date.
    """

    __tablename__ = "action_schedules"
    __table_args__ = (
        Index("idx_action_schedules_mapping_active", "mapping_id", "is_active"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(64), nullable=False)
    mapping_id: Mapped[int] = mapped_column(Integer, nullable=False)

    entity_value: Mapped[str | None] = mapped_column(String(255), nullable=True)
    entity_status: Mapped[str | None] = mapped_column(String(64), nullable=True)

    start_action_date: Mapped[str | None] = mapped_column(String(64), nullable=True)
    start_action_offset: Mapped[int | None] = mapped_column(Integer, nullable=True)
    start_action_unit: Mapped[str | None] = mapped_column(String(8), nullable=True)  # hour, day, week, month, year
    start_action_condition: Mapped[str | None] = mapped_column(String(64), nullable=True)  # before, after
    absolute_date: Mapped[datetime | None] = mapped_column(nullable=True)

    # Padded list of extra contact ids notified alongside the entity contacts
    recipient_manual: Mapped[str | None] = mapped_column(Text, nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, server_default=true(), nullable=False)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now(), nullable=False)
