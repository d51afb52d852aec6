"""
services/payment_status.py

회원 단위 납부 상태(MemberPaymentStatus) 집계.

회원이 가진 모든 청구서의 상태를 보고 한 가지 상태로 분류한다.
청구서 상태는 저장된 값이 아니라 오늘 날짜 기준 current_status 로 판단하므로
연체 갱신(refresh_overdue) 호출 여부와 관계없이 같은 결과가 나온다.

우선순위:
1. 모든 청구서 PAID (청구서가 없는 회원 포함) -> ALL_BILLS_PAID
2. OVERDUE 청구서가 하나라도 있음             -> OVERDUE_BILLS
3. 미납/부분납 청구서가 있음                   -> MISSING_PAYMENT
   (대시보드 "Pending" 보기에서는 PENDING_PAYMENT)

관련 파일:
- swimclub.services.ledger  : 회원별 청구서 조회
- swimclub.services.reports : 상태별 회원 목록

"""

from swimclub.models.billing import BillingStatus, MemberPaymentStatus
from swimclub.services.ledger import PaymentLedger


class MemberPaymentStatusAggregator:
    def __init__(self, ledger: PaymentLedger):
        self._ledger = ledger

    @property
    def ledger(self) -> PaymentLedger:
        return self._ledger

    def classify(self, member, pending_view: bool = False) -> MemberPaymentStatus:
        member_id = getattr(member, "id", member)
        today = self._ledger.today()
        statuses = [b.current_status(today) for b in self._ledger.find_bills_by_member(member_id)]

        if all(s == BillingStatus.PAID for s in statuses):
            return MemberPaymentStatus.ALL_BILLS_PAID

        if BillingStatus.OVERDUE in statuses:
            return MemberPaymentStatus.OVERDUE_BILLS

        if pending_view:
            return MemberPaymentStatus.PENDING_PAYMENT
        return MemberPaymentStatus.MISSING_PAYMENT
