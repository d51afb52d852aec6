"""
billing.py

회비 청구서(Billing) / 납부(Payment) 엔티티 정의 파일.

이 파일의 엔티티는 DB 테이블이 아니라 PaymentLedger 가
메모리에서 소유하는 레코드이다. 외부에서는 Ledger 메서드를 통해서만
변경되며, 조회 결과는 항상 복사본으로 전달된다.

청구서 상태 전이:
- NOT_PAID (초기) -> PARTIALLY_PAID -> PAID (종료)
- 납부기한이 지난 미완납 청구서는 OVERDUE
- PAID 가 되면 다시 미완납 상태로 돌아가지 않음

관련 파일:
- swimclub.services.ledger         : 청구서/납부 생성 및 납부 적용
- swimclub.services.payment_status : 회원별 납부 상태 집계

"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from dateutil.relativedelta import relativedelta

from swimclub.core.exceptions import InvalidAmount, InvalidBilling


# 청구 주기: 청구일 + 1년 = 납부기한, 완납 시 다음 청구서도 1년 뒤
BILLING_PERIOD = relativedelta(years=1)


class BillingStatus(str, Enum):
    NOT_PAID = "NOT_PAID"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    PAID = "PAID"
    OVERDUE = "OVERDUE"


class PaymentStatus(str, Enum):
    COMPLETE = "COMPLETE"
    PENDING = "PENDING"
    FAILED = "FAILED"


"""
회원 단위 납부 상태 (회원이 가진 모든 청구서 기준으로 집계)

- ALL_BILLS_PAID  : 모든 청구서 완납 (청구서 없음 포함)
- OVERDUE_BILLS   : 연체 청구서 존재
- MISSING_PAYMENT : 미납/부분납 청구서 존재
- PENDING_PAYMENT : MISSING_PAYMENT 와 같은 회원 집합의 대시보드 "Pending" 표기

"""

class MemberPaymentStatus(str, Enum):
    ALL_BILLS_PAID = "ALL_BILLS_PAID"
    MISSING_PAYMENT = "MISSING_PAYMENT"
    OVERDUE_BILLS = "OVERDUE_BILLS"
    PENDING_PAYMENT = "PENDING_PAYMENT"


@dataclass(frozen=True)
class Payment:
    """납부 1건. 생성 후 변경되지 않는다."""

    id: int
    member_id: int
    billing_id: int
    amount: int
    payment_date: date
    status: PaymentStatus = PaymentStatus.COMPLETE

    def __post_init__(self):
        if self.amount is None or self.amount <= 0:
            raise InvalidAmount(self.amount)
        if self.payment_date is None:
            # 청구서 오류가 아니라 납부 입력 오류
            raise ValueError("payment date cannot be null")


@dataclass
class Billing:
    """한 청구 주기의 회비 청구서.

    amount_paid 는 납부가 적용될 때마다 증가만 한다.
    due_amount 를 초과 납부해도 그대로 받아들이고 상태는 PAID 가 된다.
    """

    id: int
    member_id: int
    due_amount: int
    billing_date: date
    due_date: date
    amount_paid: int = 0
    status: BillingStatus = BillingStatus.NOT_PAID
    payment_ids: list[int] = field(default_factory=list)

    def __post_init__(self):
        if self.due_amount is None or self.due_amount <= 0:
            raise InvalidBilling("due amount must be positive")
        if self.billing_date is None or self.due_date is None:
            raise InvalidBilling("billing date and due date cannot be null")

    def missing_amount(self) -> int:
        return max(self.due_amount - self.amount_paid, 0)

    def is_overdue(self, today: date) -> bool:
        return today > self.due_date and self.status != BillingStatus.PAID

    def current_status(self, today: date) -> BillingStatus:
        # refresh_overdue() 를 호출했을 때의 상태 (변경 없음)
        if self.is_overdue(today):
            return BillingStatus.OVERDUE
        return self.status

    def refresh_overdue(self, today: date) -> bool:
        if self.is_overdue(today) and self.status != BillingStatus.OVERDUE:
            self.status = BillingStatus.OVERDUE
            return True
        return False

    def apply_payment(self, payment: Payment, today: date) -> BillingStatus:
        """납부 1건을 적용하고 갱신된 상태를 반환한다.

        금액이 0 이하이면 InvalidAmount, 청구서는 변경되지 않는다.
        """
        if payment.amount <= 0:
            raise InvalidAmount(payment.amount)

        self.payment_ids.append(payment.id)
        self.amount_paid += payment.amount

        if self.amount_paid >= self.due_amount:
            self.status = BillingStatus.PAID
            return self.status

        if self.amount_paid > 0:
            self.status = BillingStatus.PARTIALLY_PAID

        self.refresh_overdue(today)
        return self.status

    def next_period(self, billing_id: int) -> "Billing":
        """같은 금액으로 1년 뒤 청구서를 만든다 (완납 후 다음 주기)."""
        return Billing(
            id=billing_id,
            member_id=self.member_id,
            due_amount=self.due_amount,
            billing_date=self.billing_date + BILLING_PERIOD,
            due_date=self.due_date + BILLING_PERIOD,
        )
