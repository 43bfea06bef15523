"""Immutable select fragments for scheduled reminder recipient queries.

A RecipientQuery collects a base entity, named left joins, WHERE clauses and
bound parameters. Every builder method returns a new instance, so fragments
can be shared and merged freely. Rendering to an executable statement
happens in to_select().
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, NamedTuple

from sqlalchemy import ColumnElement, Select, inspect, select


class JoinSpec(NamedTuple):
    """A named LEFT JOIN; the name is the alias of the joined entity."""

    name: str
    target: Any
    onclause: ColumnElement[bool]


def _empty_params() -> Mapping[str, Any]:
    return MappingProxyType({})


def _compile(clause: Any) -> str:
    if hasattr(clause, "__clause_element__"):
        clause = clause.__clause_element__()
    return str(clause.compile(compile_kwargs={"literal_binds": True}))


@dataclass(frozen=True, eq=False)
class RecipientQuery:
    """Query description consumed by the recipient builder."""

    from_entity: Any = None
    joins: tuple[JoinSpec, ...] = ()
    wheres: tuple[ColumnElement[bool], ...] = ()
    params: Mapping[str, Any] = field(default_factory=_empty_params)

    # Columns the recipient builder reads from each row
    contact_id_field: Any = None
    entity_id_field: Any = None
    date_field: Any = None
    # Table expression used when checking for additional recipients
    addl_check_from: str | None = None
    contact_table_alias: str | None = None

    @classmethod
    def from_entity_alias(cls, entity: Any) -> "RecipientQuery":
        return cls(from_entity=entity)

    @classmethod
    def fragment(cls) -> "RecipientQuery":
        """A partial query (joins/wheres/params only) meant to be merged."""
        return cls()

    def where(self, *clauses: ColumnElement[bool]) -> "RecipientQuery":
        return replace(self, wheres=self.wheres + tuple(clauses))

    def join(self, name: str, target: Any, onclause: ColumnElement[bool]) -> "RecipientQuery":
        """Add a LEFT JOIN; a join with an existing name replaces it in place."""
        joins = dict((spec.name, spec) for spec in self.joins)
        joins[name] = JoinSpec(name, target, onclause)
        return replace(self, joins=tuple(joins.values()))

    def param(self, key: str | Mapping[str, Any], value: Any = None) -> "RecipientQuery":
        """Bind one parameter, or every item of a mapping."""
        updates = dict(key) if isinstance(key, Mapping) else {key: value}
        return replace(self, params=MappingProxyType({**self.params, **updates}))

    def with_options(self, **options: Any) -> "RecipientQuery":
        return replace(self, **options)

    def merge(self, other: "RecipientQuery") -> "RecipientQuery":
        """Fold another fragment's joins, wheres and params into this query."""
        merged = self
        for spec in other.joins:
            merged = merged.join(spec.name, spec.target, spec.onclause)
        return merged.where(*other.wheres).param(other.params)

    def to_select(self, *columns: Any) -> Select:
        """Render an executable SELECT over the base entity and joins."""
        if self.from_entity is None:
            raise ValueError("Query fragment has no base entity to select from")
        if not columns:
            columns = tuple(
                col
                for col in (self.contact_id_field, self.entity_id_field, self.date_field)
                if col is not None
            )
        stmt = select(*columns).select_from(self.from_entity)
        for spec in self.joins:
            stmt = stmt.join(spec.target, spec.onclause, isouter=True)
        if self.wheres:
            stmt = stmt.where(*self.wheres)
        return stmt

    def describe(self) -> dict[str, Any]:
        """Plain structural description (rendered SQL fragments and params)."""
        return {
            "from": inspect(self.from_entity).name if self.from_entity is not None else None,
            "joins": [(spec.name, _compile(spec.onclause)) for spec in self.joins],
            "where": [_compile(clause) for clause in self.wheres],
            "params": dict(self.params),
            "contact_id_field": _compile(self.contact_id_field) if self.contact_id_field is not None else None,
            "entity_id_field": _compile(self.entity_id_field) if self.entity_id_field is not None else None,
            "date_field": _compile(self.date_field) if self.date_field is not None else None,
            "addl_check_from": self.addl_check_from,
            "contact_table_alias": self.contact_table_alias,
        }
