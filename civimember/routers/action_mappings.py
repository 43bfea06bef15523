"""Action mappings router - reminder targets and recipient previews."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from civimember.core.deps import get_db, get_mapping_registry
from civimember.schemas.action_mapping import (
    ActionMappingRead,
    RecipientPreview,
    RecipientRead,
)
from civimember.services import action_schedule_service, recipient_builder
from civimember.services.action_mapping import ActionMappingNotFoundError, MappingRegistry

router = APIRouter(tags=["action-mappings"])


@router.get("/action-mappings", response_model=list[ActionMappingRead])
def list_action_mappings(registry: MappingRegistry = Depends(get_mapping_registry)):
    """List the entities scheduled reminders can target."""
    return [mapping.to_dict() for mapping in registry.all()]


@router.get("/action-schedules/{schedule_id}/recipients", response_model=RecipientPreview)
def preview_recipients(
    schedule_id: int,
    due_only: bool = False,
    db: Session = Depends(get_db),
    registry: MappingRegistry = Depends(get_mapping_registry),
):
    """Preview who a scheduled reminder would go to."""
    try:
        schedule = action_schedule_service.get_schedule(db, schedule_id)
        mapping = registry.get(schedule.mapping_id)
    except action_schedule_service.ActionScheduleNotFoundError:
        raise HTTPException(status_code=404, detail="Scheduled reminder not found")
    except ActionMappingNotFoundError:
        raise HTTPException(status_code=422, detail="Scheduled reminder uses an unknown mapping")

    if due_only:
        recipients = recipient_builder.find_due_recipients(db, schedule, registry)
    else:
        recipients = recipient_builder.find_recipients(db, schedule, registry)

    return RecipientPreview(
        schedule_id=schedule.id,
        mapping_id=mapping.id,
        reset_on_trigger_date_change=mapping.reset_on_trigger_date_change(schedule),
        recipients=[RecipientRead.model_validate(r) for r in recipients],
    )
