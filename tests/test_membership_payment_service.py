from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from civimember.db.models import Contribution, MembershipPayment
from civimember.services import membership_payment_service


@pytest.fixture
def make_contribution(db):
    def _make(contact_id: int, amount: str = "50.00") -> Contribution:
        contribution = Contribution(contact_id=contact_id, total_amount=Decimal(amount))
        db.add(contribution)
        db.flush()
        return contribution

    return _make


def test_record_payment_links_contribution(db, make_membership, make_contribution):
    membership = make_membership()
    contribution = make_contribution(membership.contact_id)

    payment = membership_payment_service.record_payment(db, membership.id, contribution.id)

    assert payment.id is not None
    assert payment.membership_id == membership.id
    assert payment.contribution_id == contribution.id
    assert membership_payment_service.list_payments_for_membership(db, membership.id) == [payment]


def test_record_payment_is_idempotent(db, make_membership, make_contribution):
    membership = make_membership()
    contribution = make_contribution(membership.contact_id)

    first = membership_payment_service.record_payment(db, membership.id, contribution.id)
    second = membership_payment_service.record_payment(db, membership.id, contribution.id)

    assert first.id == second.id
    assert len(membership_payment_service.list_payments_for_membership(db, membership.id)) == 1


def test_duplicate_link_rejected_by_unique_index(db, make_membership, make_contribution):
    membership = make_membership()
    contribution = make_contribution(membership.contact_id)
    db.add(MembershipPayment(membership_id=membership.id, contribution_id=contribution.id))
    db.flush()

    db.add(MembershipPayment(membership_id=membership.id, contribution_id=contribution.id))
    with pytest.raises(IntegrityError):
        db.flush()
    db.rollback()


def test_contribution_can_pay_for_several_memberships(db, make_contact, make_membership, make_contribution):
    contact = make_contact()
    first = make_membership(contact=contact)
    second = make_membership(contact=contact, membership_type="Student")
    contribution = make_contribution(contact.id)

    membership_payment_service.record_payment(db, first.id, contribution.id)
    membership_payment_service.record_payment(db, second.id, contribution.id)

    assert membership_payment_service.get_membership_for_contribution(db, contribution.id).id == first.id


def test_record_payment_without_contribution(db, make_membership):
    membership = make_membership()

    payment = membership_payment_service.record_payment(db, membership.id, None)

    assert payment.contribution_id is None
    assert membership_payment_service.get_payment(db, membership.id, None).id == payment.id


def test_record_payment_unknown_membership(db, statuses):
    with pytest.raises(membership_payment_service.MembershipNotFoundError):
        membership_payment_service.record_payment(db, 12345, None)


def test_delete_payment(db, make_membership, make_contribution):
    membership = make_membership()
    contribution = make_contribution(membership.contact_id)
    payment = membership_payment_service.record_payment(db, membership.id, contribution.id)

    assert membership_payment_service.delete_payment(db, payment.id) is True
    assert membership_payment_service.delete_payment(db, payment.id) is False
    assert membership_payment_service.get_membership_for_contribution(db, contribution.id) is None


def test_entity_metadata():
    assert MembershipPayment.get_entity_title() == "Membership Payment"
    assert MembershipPayment.get_entity_title(plural=True) == "Membership Payments"
    assert MembershipPayment.get_reference_columns() == [
        ("membership_payment_link", "membership_id", "memberships", "id"),
        ("membership_payment_link", "contribution_id", "contributions", "id"),
    ]
