"""Pydantic schemas for action mappings and reminder recipients."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from civimember.db.enums import RecipientPhase


class ActionMappingRead(BaseModel):
    """Action mapping response schema."""
    id: int
    entity: str
    entity_label: str
    entity_value: str | None
    entity_value_label: str | None
    entity_status: str | None
    entity_status_label: str | None
    date_fields: dict[str, str]


class RecipientRead(BaseModel):
    """Scheduled reminder recipient."""
    model_config = ConfigDict(from_attributes=True)

    contact_id: int
    entity_id: int | None
    trigger_date: date | datetime | None
    reminder_date: datetime | None
    is_due: bool
    phase: RecipientPhase


class RecipientPreview(BaseModel):
    """Recipients of one scheduled reminder."""
    schedule_id: int
    mapping_id: int
    reset_on_trigger_date_change: bool
    recipients: list[RecipientRead]
