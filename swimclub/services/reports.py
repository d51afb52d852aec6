"""
services/reports.py

회계 담당자(treasurer) 대시보드용 집계.

- total_expected      : 전체 회원 연회비 합계 (실제 청구/납부와 무관한 예상 수입)
- members_with_status : 납부 상태별 회원 필터
- members_with_bill_status : 특정 상태의 청구서를 가진 회원 필터
- status_rows         : 회원별 회비 / 납부 상태 / 미납 잔액 표 (목록, CSV, xlsx 공용)

상태를 따로 저장하지 않으며 FeeCalculator 와
MemberPaymentStatusAggregator 를 조합만 한다.

"""

from swimclub.models.billing import BillingStatus, MemberPaymentStatus
from swimclub.services.fees import FeeCalculator
from swimclub.services.payment_status import MemberPaymentStatusAggregator


class BillingReportEngine:
    def __init__(self, fee_calculator: FeeCalculator, aggregator: MemberPaymentStatusAggregator):
        self._fees = fee_calculator
        self._aggregator = aggregator

    def total_expected(self, members) -> int:
        return sum(self._fees.compute_fee(m) for m in members)

    def members_with_status(self, members, status: MemberPaymentStatus) -> list:
        pending_view = status == MemberPaymentStatus.PENDING_PAYMENT
        return [m for m in members if self._aggregator.classify(m, pending_view=pending_view) == status]

    def outstanding_amount(self, member) -> int:
        # 완납되지 않은 청구서들의 남은 금액 합
        bills = self._aggregator.ledger.find_bills_by_member(member.id)
        return sum(b.missing_amount() for b in bills if b.status != BillingStatus.PAID)

    def members_with_bill_status(self, members, status: BillingStatus) -> list:
        # 오늘 기준 상태 (OVERDUE 갱신 여부와 무관)
        ledger = self._aggregator.ledger
        today = ledger.today()
        return [
            m for m in members
            if any(b.current_status(today) == status for b in ledger.find_bills_by_member(m.id))
        ]

    def status_rows(self, members, pending_view: bool = False) -> list[dict]:
        rows = []
        for m in members:
            rows.append(
                {
                    "member": m,
                    "fee": self._fees.compute_fee(m),
                    "status": self._aggregator.classify(m, pending_view=pending_view),
                    "outstanding": self.outstanding_amount(m),
                }
            )
        return rows
