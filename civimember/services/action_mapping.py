"""Action mappings: which entities scheduled reminders can target.

A mapping tells the reminder scheduler which entity a schedule points at,
which date fields can trigger it, and how to query candidate recipients.
Mappings are registered at boot through a MappingRegistry handed to each
registration hook.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Mapping, Sequence

from civimember.services.recipient_query import RecipientQuery

logger = logging.getLogger(__name__)

# Resolves the membership status ids eligible for reminders
StatusResolver = Callable[[], Sequence[int]]


class ActionMappingError(Exception):
    """Base exception for action mapping errors."""

    pass


class ActionMappingNotFoundError(ActionMappingError):
    """No mapping registered under the requested id."""

    pass


class DuplicateActionMappingError(ActionMappingError, ValueError):
    """A mapping with the same id is already registered."""

    pass


class ActionMapping(ABC):
    """Base class for reminder mappings."""

    def __init__(
        self,
        *,
        id: int,
        entity: str,
        entity_label: str,
        entity_value: str | None = None,
        entity_value_label: str | None = None,
        entity_status: str | None = None,
        entity_status_label: str | None = None,
        status_resolver: StatusResolver | None = None,
    ) -> None:
        self.id = id
        self.entity = entity
        self.entity_label = entity_label
        self.entity_value = entity_value
        self.entity_value_label = entity_value_label
        self.entity_status = entity_status
        self.entity_status_label = entity_status_label
        self.status_resolver = status_resolver

    @classmethod
    def create(cls, values: Mapping[str, Any], **kwargs: Any) -> "ActionMapping":
        return cls(**values, **kwargs)

    @abstractmethod
    def get_date_fields(self) -> dict[str, str]:
        """Date fields a schedule can trigger on, as {field_name: label}."""

    @abstractmethod
    def create_query(
        self, schedule: Any, phase: Any, default_params: Mapping[str, Any]
    ) -> RecipientQuery:
        """Build the query locating recipients who match the schedule."""

    def reset_on_trigger_date_change(self, schedule: Any) -> bool:
        """Whether editing the trigger date restarts reminder tracking."""
        return True

    def send_to_additional(self, entity_id: Any) -> bool:
        """Whether schedules may also notify additional recipients."""
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "entity": self.entity,
            "entity_label": self.entity_label,
            "entity_value": self.entity_value,
            "entity_value_label": self.entity_value_label,
            "entity_status": self.entity_status,
            "entity_status_label": self.entity_status_label,
            "date_fields": self.get_date_fields(),
        }


class MappingRegistry:
    """Registration event passed to mapping hooks, and the resulting lookup."""

    def __init__(self, status_resolver: StatusResolver | None = None) -> None:
        self.status_resolver = status_resolver
        self._mappings: dict[int, ActionMapping] = {}

    def register(self, mapping: ActionMapping) -> None:
        if mapping.id in self._mappings:
            raise DuplicateActionMappingError(f"Action mapping {mapping.id} already registered")
        self._mappings[mapping.id] = mapping
        logger.debug("Registered action mapping %s (%s)", mapping.id, mapping.entity)

    def get(self, mapping_id: int) -> ActionMapping:
        mapping = self._mappings.get(mapping_id)
        if mapping is None:
            raise ActionMappingNotFoundError(f"Unknown action mapping: {mapping_id}")
        return mapping

    def all(self) -> list[ActionMapping]:
        return sorted(self._mappings.values(), key=lambda m: m.id)


RegistrationHook = Callable[[MappingRegistry], None]


def default_hooks() -> list[RegistrationHook]:
    from civimember.services.member_action_mapping import MembershipActionMapping

    return [MembershipActionMapping.on_register_action_mappings]


def build_mapping_registry(
    status_resolver: StatusResolver | None = None,
    hooks: Iterable[RegistrationHook] | None = None,
) -> MappingRegistry:
    """Fire every registration hook against a fresh registry."""
    registry = MappingRegistry(status_resolver=status_resolver)
    for hook in default_hooks() if hooks is None else hooks:
        hook(registry)
    return registry
