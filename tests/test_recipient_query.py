import pytest
from sqlalchemy.orm import aliased

from civimember.db.models import Contact, Membership
from civimember.services.recipient_query import RecipientQuery


def _membership_alias():
    return aliased(Membership, name="e")


def test_builder_methods_return_new_instances():
    e = _membership_alias()
    base = RecipientQuery.from_entity_alias(e)

    filtered = base.where(e.contact_id == 1)
    with_param = filtered.param("foo", "bar")

    assert base.wheres == ()
    assert len(filtered.wheres) == 1
    assert dict(filtered.params) == {}
    assert dict(with_param.params) == {"foo": "bar"}


def test_params_are_read_only():
    query = RecipientQuery.fragment().param({"a": 1})
    with pytest.raises(TypeError):
        query.params["a"] = 2


def test_join_with_same_name_replaces_existing():
    e = _membership_alias()
    c = aliased(Contact, name="c")
    query = (
        RecipientQuery.from_entity_alias(e)
        .join("c", c, c.id == e.contact_id)
        .join("c", c, c.id == e.owner_membership_id)
    )

    assert [spec.name for spec in query.joins] == ["c"]
    assert "owner_membership_id" in query.describe()["joins"][0][1]


def test_merge_folds_fragment_into_query():
    e = _membership_alias()
    c = aliased(Contact, name="c")
    fragment = (
        RecipientQuery.fragment()
        .join("c", c, c.id == e.contact_id)
        .where(c.is_deleted.is_(False))
        .param("editPerm", 1)
    )
    query = RecipientQuery.from_entity_alias(e).where(e.id > 0).param("x", 1).merge(fragment)

    description = query.describe()
    assert description["from"] == "e"
    assert [name for name, _ in description["joins"]] == ["c"]
    assert len(description["where"]) == 2
    assert description["params"] == {"x": 1, "editPerm": 1}


def test_to_select_requires_base_entity():
    with pytest.raises(ValueError):
        RecipientQuery.fragment().to_select()


def test_to_select_defaults_to_recipient_columns():
    e = _membership_alias()
    query = RecipientQuery.from_entity_alias(e).with_options(
        contact_id_field=e.contact_id, entity_id_field=e.id, date_field=e.end_date
    )

    sql = str(query.to_select())
    assert "e.contact_id" in sql
    assert "e.end_date" in sql
    assert "memberships AS e" in sql
