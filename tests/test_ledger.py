"""
PaymentLedger 테스트.
- 첫 청구서 생성, 부분 납부 / 완납, 완납 시 다음 청구서 1건 생성,
  실패 시 원장 불변(전부 아니면 전무), 조회 결과 복사본, ID 발급, 연체 일괄 갱신 확인.
"""

from datetime import date

import pytest

from swimclub.core.exceptions import BillNotFound, InvalidAmount, InvalidBilling
from swimclub.models.billing import BillingStatus, PaymentStatus


def test_create_initial_bill_defaults_due_date(ledger):
    bill = ledger.create_initial_bill(1, 1600, date(2024, 1, 1))
    assert bill.id == 1
    assert bill.status == BillingStatus.NOT_PAID
    assert bill.due_date == date(2025, 1, 1)
    assert ledger.find_bills_by_member(1) == [bill]


def test_create_initial_bill_invalid_does_not_consume_id(ledger):
    with pytest.raises(InvalidBilling):
        ledger.create_initial_bill(1, 0, date(2024, 1, 1))
    with pytest.raises(InvalidBilling):
        ledger.create_initial_bill(1, 1600, None)

    assert ledger.find_all_bills() == []
    assert ledger.create_initial_bill(1, 1600, date(2024, 1, 1)).id == 1


def test_partial_then_full_payment_creates_successor(ledger, clock):
    bill = ledger.create_initial_bill(1, 1600, date(2024, 1, 1), date(2025, 1, 1))

    clock.set(date(2024, 6, 1))
    first = ledger.apply_payment(bill.id, 800, 1)
    assert first.status == BillingStatus.PARTIALLY_PAID
    assert first.missing_amount == 800
    assert first.next_bill is None
    assert first.payment.payment_date == date(2024, 6, 1)
    assert first.payment.status == PaymentStatus.COMPLETE

    clock.set(date(2024, 7, 1))
    second = ledger.apply_payment(bill.id, 800, 1)
    assert second.status == BillingStatus.PAID
    assert second.missing_amount is None

    nxt = second.next_bill
    assert nxt is not None
    assert nxt.id != bill.id
    assert nxt.member_id == 1
    assert nxt.due_amount == 1600
    assert nxt.billing_date == date(2025, 1, 1)
    assert nxt.due_date == date(2026, 1, 1)
    assert nxt.status == BillingStatus.NOT_PAID

    bills = ledger.find_bills_by_member(1)
    assert [b.status for b in bills] == [BillingStatus.PAID, BillingStatus.NOT_PAID]
    assert bills[0].payment_ids == [first.payment.id, second.payment.id]


def test_successor_created_only_once(ledger):
    bill = ledger.create_initial_bill(1, 1000, date(2024, 1, 1))
    assert ledger.apply_payment(bill.id, 1000, 1).next_bill is not None

    # 이미 완납된 청구서에 추가 납부
    extra = ledger.apply_payment(bill.id, 50, 1)
    assert extra.status == BillingStatus.PAID
    assert extra.next_bill is None
    assert len(ledger.find_bills_by_member(1)) == 2
    assert ledger.find_bill(bill.id).amount_paid == 1050


def test_amount_paid_never_decreases(ledger):
    bill = ledger.create_initial_bill(1, 1600, date(2024, 1, 1))
    seen = []
    for amount in [100, 250, 1, 400]:
        seen.append(ledger.apply_payment(bill.id, amount, 1).billing.amount_paid)
    assert seen == sorted(seen)
    assert seen[-1] == 751
    assert ledger.find_bill(bill.id).missing_amount() == 1600 - 751


def test_unknown_bill_rejected(ledger):
    with pytest.raises(BillNotFound):
        ledger.apply_payment(99, 100, 1)
    assert ledger.find_all_payments() == []


def test_discard_unpaid_bill(ledger):
    kept = ledger.create_initial_bill(1, 1600, date(2024, 1, 1))
    dropped = ledger.create_initial_bill(2, 1000, date(2024, 1, 1))

    ledger.discard_unpaid_bill(dropped.id)

    assert ledger.find_all_bills() == [kept]
    with pytest.raises(BillNotFound):
        ledger.discard_unpaid_bill(dropped.id)


def test_discard_refuses_bill_with_payments(ledger):
    bill = ledger.create_initial_bill(1, 1600, date(2024, 1, 1))
    ledger.apply_payment(bill.id, 100, 1)

    with pytest.raises(ValueError):
        ledger.discard_unpaid_bill(bill.id)
    assert ledger.find_bill(bill.id).amount_paid == 100


@pytest.mark.parametrize("amount", [0, -200])
def test_invalid_amount_changes_nothing(ledger, amount):
    bill = ledger.create_initial_bill(1, 1600, date(2024, 1, 1))
    ledger.apply_payment(bill.id, 100, 1)

    with pytest.raises(InvalidAmount):
        ledger.apply_payment(bill.id, amount, 1)

    stored = ledger.find_bill(bill.id)
    assert stored.amount_paid == 100
    assert stored.status == BillingStatus.PARTIALLY_PAID
    assert len(ledger.find_all_payments()) == 1
    # 실패한 요청은 납부 ID 를 소모하지 않음
    assert ledger.apply_payment(bill.id, 100, 1).payment.id == 2


def test_queries_return_copies(ledger):
    bill = ledger.create_initial_bill(1, 1600, date(2024, 1, 1))
    ledger.apply_payment(bill.id, 100, 1)

    copy_ = ledger.find_bill(bill.id)
    copy_.amount_paid = 9999
    copy_.status = BillingStatus.PAID
    copy_.payment_ids.append(42)

    listed = ledger.find_bills_by_member(1)
    listed.clear()

    stored = ledger.find_bill(bill.id)
    assert stored.amount_paid == 100
    assert stored.status == BillingStatus.PARTIALLY_PAID
    assert stored.payment_ids == [1]
    assert len(ledger.find_all_bills()) == 1


def test_ids_are_sequential_per_entity(ledger):
    a = ledger.create_initial_bill(1, 500, date(2024, 1, 1))
    b = ledger.create_initial_bill(2, 500, date(2024, 1, 1))
    p1 = ledger.apply_payment(a.id, 500, 1)
    p2 = ledger.apply_payment(b.id, 100, 2)

    assert (a.id, b.id) == (1, 2)
    assert p1.next_bill.id == 3
    assert (p1.payment.id, p2.payment.id) == (1, 2)


def test_payments_by_member_and_bill(ledger):
    a = ledger.create_initial_bill(1, 1600, date(2024, 1, 1))
    b = ledger.create_initial_bill(2, 1600, date(2024, 1, 1))
    ledger.apply_payment(a.id, 100, 1)
    ledger.apply_payment(b.id, 200, 2)
    ledger.apply_payment(a.id, 300, 1)

    assert [p.amount for p in ledger.find_payments_by_member(1)] == [100, 300]
    assert [p.amount for p in ledger.find_payments_for_bill(b.id)] == [200]
    with pytest.raises(BillNotFound):
        ledger.find_payments_for_bill(99)


def test_refresh_overdue(ledger, clock):
    a = ledger.create_initial_bill(1, 1600, date(2024, 1, 1), date(2025, 1, 1))
    b = ledger.create_initial_bill(2, 1600, date(2024, 1, 1), date(2025, 1, 1))
    paid = ledger.create_initial_bill(3, 500, date(2024, 1, 1), date(2025, 1, 1))
    ledger.apply_payment(paid.id, 500, 3)

    assert ledger.refresh_overdue() == []

    clock.set(date(2025, 2, 1))
    changed = ledger.refresh_overdue(member_id=1)
    assert [c.id for c in changed] == [a.id]
    assert ledger.find_bill(b.id).status == BillingStatus.NOT_PAID

    changed = ledger.refresh_overdue()
    assert [c.id for c in changed] == [b.id]
    assert ledger.find_bill(a.id).status == BillingStatus.OVERDUE
    assert ledger.find_bill(paid.id).status == BillingStatus.PAID


def test_payment_after_due_date_is_overdue(ledger, clock):
    bill = ledger.create_initial_bill(1, 1600, date(2024, 1, 1), date(2025, 1, 1))
    clock.set(date(2025, 3, 1))
    outcome = ledger.apply_payment(bill.id, 600, 1)
    assert outcome.status == BillingStatus.OVERDUE
    assert outcome.missing_amount is None
    assert outcome.billing.missing_amount() == 1000
