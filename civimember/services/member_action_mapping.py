"""Scheduled reminders for memberships.

Targets reminders at memberships by join, start or end date, filtered by
membership type and auto-renew option.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from sqlalchemy import and_, literal_column, not_, or_
from sqlalchemy.orm import aliased

from civimember.db.enums import AutoRenewOption, RelationshipPermission
from civimember.db.models import ContactRelationship, Membership
from civimember.services.action_mapping import ActionMapping, MappingRegistry
from civimember.services.recipient_query import RecipientQuery
from civimember.utils.padded import explode_padded

MEMBERSHIP_ALIAS = "e"
DATE_FIELD_PREFIX = "membership_"


def _contains_marker(values: Iterable[Any], marker: int) -> bool:
    """Loose numeric membership test; non-numeric values never match."""
    for value in values:
        try:
            if float(str(value).strip()) == marker:
                return True
        except ValueError:
            continue
    return False


def _coerce_id(value: Any) -> Any:
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return value


class MembershipActionMapping(ActionMapping):
    """Membership-type mapping for scheduled reminders."""

    # Matches the legacy mapping id stored on existing schedules
    MEMBERSHIP_TYPE_MAPPING_ID = 4

    @classmethod
    def on_register_action_mappings(cls, registrations: MappingRegistry) -> None:
        registrations.register(
            cls.create(
                {
                    "id": cls.MEMBERSHIP_TYPE_MAPPING_ID,
                    "entity": Membership.__tablename__,
                    "entity_label": "Membership",
                    "entity_value": "membership_types",
                    "entity_value_label": "Membership Type",
                    "entity_status": "auto_renew_options",
                    "entity_status_label": "Auto Renew Options",
                },
                status_resolver=registrations.status_resolver,
            )
        )

    def get_date_fields(self) -> dict[str, str]:
        return {
            "join_date": "Member Since",
            "start_date": "Membership Start Date",
            "end_date": "Membership Expiration Date",
        }

    def create_query(
        self, schedule: Any, phase: Any, default_params: Mapping[str, Any]
    ) -> RecipientQuery:
        """
        Build the query locating memberships that match the schedule.

        phase is accepted for interface compatibility; membership reminders
        use the same query in every phase.
        """
        selected_values = explode_padded(schedule.entity_value) or []
        selected_statuses = explode_padded(schedule.entity_status) or []

        e = aliased(Membership, name=MEMBERSHIP_ALIAS)
        query = (
            RecipientQuery.from_entity_alias(e)
            .param(default_params or {})
            .with_options(
                addl_check_from=f"{Membership.__tablename__} {MEMBERSHIP_ALIAS}",
                contact_id_field=e.contact_id,
                entity_id_field=e.id,
                contact_table_alias=None,
                date_field=self._resolve_date_field(e, schedule.start_action_date),
            )
        )

        # Auto-renew wins when both options are selected
        if _contains_marker(selected_statuses, AutoRenewOption.AUTO_RENEW):
            query = query.where(e.contribution_recur_id.is_not(None))
        elif _contains_marker(selected_statuses, AutoRenewOption.NON_AUTO_RENEW):
            query = query.where(e.contribution_recur_id.is_(None))

        if selected_values:
            query = query.where(
                e.membership_type_id.in_([_coerce_id(v) for v in selected_values])
            )
        else:
            # membership_type_id is required, so no types selected matches nothing
            query = query.where(e.membership_type_id.is_(None))

        # Members with status overrides are excluded from every reminder
        query = query.where(or_(e.is_override.is_(None), e.is_override.is_(False)))

        query = query.merge(self.prepare_membership_permissions_filter(e))

        status_ids = list(self.status_resolver()) if self.status_resolver else []
        query = query.where(e.status_id.in_(status_ids)).param("memberStatus", status_ids)

        return query

    def _resolve_date_field(self, e: Any, start_action_date: str | None) -> Any:
        field_name = (start_action_date or "").replace(DATE_FIELD_PREFIX, f"{MEMBERSHIP_ALIAS}.")
        if not field_name.startswith(f"{MEMBERSHIP_ALIAS}."):
            field_name = f"{MEMBERSHIP_ALIAS}.{field_name}"
        column_name = field_name[len(MEMBERSHIP_ALIAS) + 1:]
        if column_name in self.get_date_fields():
            return getattr(e, column_name)
        # Legacy schedules may name fields we don't know; pass them through
        return literal_column(field_name)

    def prepare_membership_permissions_filter(self, e: Any) -> RecipientQuery:
        """
        Drop inherited memberships unless the recipient can edit the owner.

        A membership without an owner always passes. An inherited one passes
        when a relationship grants edit permission in either direction
        between the member and the owner's contact.
        """
        cm = aliased(Membership, name="cm")
        rela = aliased(ContactRelationship, name="rela")
        relb = aliased(ContactRelationship, name="relb")
        edit = RelationshipPermission.EDIT.value

        return (
            RecipientQuery.fragment()
            .join("cm", cm, cm.id == e.owner_membership_id)
            .join(
                "rela",
                rela,
                and_(
                    rela.contact_id_a == e.contact_id,
                    rela.contact_id_b == cm.contact_id,
                    rela.is_permission_a_b == edit,
                ),
            )
            .join(
                "relb",
                relb,
                and_(
                    relb.contact_id_a == cm.contact_id,
                    relb.contact_id_b == e.contact_id,
                    relb.is_permission_b_a == edit,
                ),
            )
            .param("editPerm", edit)
            .where(
                not_(
                    and_(
                        e.owner_membership_id.is_not(None),
                        rela.id.is_(None),
                        relb.id.is_(None),
                    )
                )
            )
        )

    def reset_on_trigger_date_change(self, schedule: Any) -> bool:
        """A fixed absolute date keeps already-sent reminder tracking on edit."""
        if schedule.absolute_date is not None:
            return False
        return True

    def send_to_additional(self, entity_id: Any) -> bool:
        return True
