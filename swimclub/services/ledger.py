"""
services/ledger.py

회비 청구서(Billing) / 납부(Payment) 원장(PaymentLedger).

이 파일은 모든 회원의 청구서와 납부 기록을 메모리에서 단일 소유하며,
청구서 생성, 납부 적용, 완납 시 다음 주기 청구서 생성을 담당한다.

주요 기능:
- 회원 등록 시 첫 청구서 생성
- 납부 적용 (부분 납부 / 완납 / 연체 판정)
- 완납 즉시 1년 뒤 청구서 자동 생성
- 회원별 / 전체 청구서, 납부 내역 조회
- 연체(OVERDUE) 상태 일괄 갱신

설계 원칙:
- 청구서/납부 변경은 이 클래스의 메서드를 통해서만 수행
- 조회 결과는 항상 복사본 (호출 측에서 원장 상태 변경 불가)
- 납부 적용은 전부 아니면 전무 (실패 시 아무 것도 기록하지 않음)
- ID 는 엔티티별 증가 카운터로 발급, 삭제/개수와 무관
- 변경 작업은 lock 으로 직렬화 (FastAPI 스레드풀 동시 요청 대비)

관련 파일:
- swimclub.models.billing          : Billing / Payment 엔티티
- swimclub.core.clock              : 오늘 날짜 주입
- swimclub.routers.billing         : 납부/조회 API

"""

import copy
import itertools
import threading
from dataclasses import dataclass
from datetime import date

from swimclub.core.clock import Clock
from swimclub.core.exceptions import BillNotFound, InvalidAmount
from swimclub.core.logging import get_logger
from swimclub.models.billing import BILLING_PERIOD, Billing, BillingStatus, Payment, PaymentStatus

logger = get_logger(__name__)


@dataclass
class PaymentOutcome:
    """납부 적용 결과.

    - missing_amount : PARTIALLY_PAID 일 때 남은 금액
    - next_bill      : PAID 가 되어 새로 생성된 다음 주기 청구서
    """

    payment: Payment
    billing: Billing
    status: BillingStatus
    missing_amount: int | None = None
    next_bill: Billing | None = None


class PaymentLedger:
    def __init__(self, clock: Clock):
        self._clock = clock
        self._bills: dict[int, Billing] = {}
        self._payments: dict[int, Payment] = {}
        self._bill_ids = itertools.count(1)
        self._payment_ids = itertools.count(1)
        self._lock = threading.RLock()

    @property
    def clock(self) -> Clock:
        return self._clock

    def today(self) -> date:
        return self._clock.today()

    # ------------------------------------------------------------------
    # 청구서 생성
    # ------------------------------------------------------------------

    def create_initial_bill(
        self,
        member_id: int,
        amount: int,
        billing_date: date,
        due_date: date | None = None,
    ) -> Billing:
        with self._lock:
            if due_date is None and billing_date is not None:
                due_date = billing_date + BILLING_PERIOD

            # 검증 실패 시 ID 를 소모하지 않도록 임시 ID 로 먼저 생성
            bill = Billing(
                id=0,
                member_id=member_id,
                due_amount=amount,
                billing_date=billing_date,
                due_date=due_date,
            )
            bill.id = next(self._bill_ids)
            self._bills[bill.id] = bill

            logger.info(
                "bill %s created for member %s: amount=%s due=%s",
                bill.id, member_id, amount, bill.due_date,
            )
            return copy.deepcopy(bill)

    def create_next_bill(self, paid_billing: Billing) -> Billing:
        with self._lock:
            bill = paid_billing.next_period(next(self._bill_ids))
            self._bills[bill.id] = bill

            logger.info(
                "next bill %s created for member %s after bill %s was paid: due=%s",
                bill.id, bill.member_id, paid_billing.id, bill.due_date,
            )
            return copy.deepcopy(bill)

    def discard_unpaid_bill(self, billing_id: int) -> None:
        """회원 등록 트랜잭션이 실패했을 때 방금 만든 첫 청구서를 되돌린다.

        납부가 하나라도 적용된 청구서는 이력이므로 삭제하지 않는다 (ValueError).
        """
        with self._lock:
            bill = self._bills.get(billing_id)
            if bill is None:
                raise BillNotFound(billing_id)
            if bill.payment_ids:
                raise ValueError(f"billing {billing_id} already has payments")

            del self._bills[billing_id]
            logger.info("bill %s for member %s discarded", billing_id, bill.member_id)

    # ------------------------------------------------------------------
    # 납부
    # ------------------------------------------------------------------

    def apply_payment(self, billing_id: int, amount: int, member_id: int) -> PaymentOutcome:
        with self._lock:
            bill = self._bills.get(billing_id)
            if bill is None:
                logger.warning("payment rejected: billing %s not found", billing_id)
                raise BillNotFound(billing_id)

            if amount is None or amount <= 0:
                logger.warning("payment rejected for bill %s: amount=%s", billing_id, amount)
                raise InvalidAmount(amount)

            today = self.today()
            payment = Payment(
                id=next(self._payment_ids),
                member_id=member_id,
                billing_id=billing_id,
                amount=amount,
                payment_date=today,
                status=PaymentStatus.COMPLETE,
            )
            was_paid = bill.status == BillingStatus.PAID

            status = bill.apply_payment(payment, today)
            self._payments[payment.id] = payment

            logger.info(
                "payment %s of %s applied to bill %s (member %s): status=%s paid=%s/%s",
                payment.id, amount, billing_id, member_id, status.value, bill.amount_paid, bill.due_amount,
            )

            outcome = PaymentOutcome(payment=payment, billing=copy.deepcopy(bill), status=status)

            if status == BillingStatus.PAID:
                # 이미 완납된 청구서에 대한 추가 납부는 다음 청구서를 또 만들지 않음
                if not was_paid:
                    outcome.next_bill = self.create_next_bill(bill)
            elif status == BillingStatus.PARTIALLY_PAID:
                outcome.missing_amount = bill.missing_amount()

            return outcome

    def refresh_overdue(self, member_id: int | None = None) -> list[Billing]:
        """납부기한이 지난 미완납 청구서를 OVERDUE 로 갱신하고, 바뀐 청구서 목록을 반환한다."""
        with self._lock:
            today = self.today()
            changed = []
            for bill in self._bills.values():
                if member_id is not None and bill.member_id != member_id:
                    continue
                if bill.refresh_overdue(today):
                    logger.info("bill %s of member %s is overdue (due %s)", bill.id, bill.member_id, bill.due_date)
                    changed.append(copy.deepcopy(bill))
            return changed

    # ------------------------------------------------------------------
    # 조회 (항상 복사본 반환)
    # ------------------------------------------------------------------

    def find_bill(self, billing_id: int) -> Billing:
        with self._lock:
            bill = self._bills.get(billing_id)
            if bill is None:
                raise BillNotFound(billing_id)
            return copy.deepcopy(bill)

    def find_all_bills(self) -> list[Billing]:
        with self._lock:
            return [copy.deepcopy(b) for b in self._bills.values()]

    def find_bills_by_member(self, member_id: int) -> list[Billing]:
        with self._lock:
            return [copy.deepcopy(b) for b in self._bills.values() if b.member_id == member_id]

    def find_all_payments(self) -> list[Payment]:
        with self._lock:
            return list(self._payments.values())

    def find_payments_by_member(self, member_id: int) -> list[Payment]:
        # Payment 는 frozen 이므로 리스트만 새로 만든다
        with self._lock:
            return [p for p in self._payments.values() if p.member_id == member_id]

    def find_payments_for_bill(self, billing_id: int) -> list[Payment]:
        with self._lock:
            bill = self._bills.get(billing_id)
            if bill is None:
                raise BillNotFound(billing_id)
            return [self._payments[pid] for pid in bill.payment_ids]
