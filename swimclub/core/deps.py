from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from swimclub.core.clock import Clock
from swimclub.db.session import SessionLocal
from swimclub.services.fees import FeeCalculator
from swimclub.services.ledger import PaymentLedger
from swimclub.services.members import MemberStore
from swimclub.services.payment_status import MemberPaymentStatusAggregator
from swimclub.services.reports import BillingReportEngine


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Clock / Ledger 는 프로세스 단위 객체 (swimclub.main 에서 app.state 에 등록)
def get_clock(request: Request) -> Clock:
    return request.app.state.clock


def get_ledger(request: Request) -> PaymentLedger:
    return request.app.state.ledger


def get_fee_calculator(request: Request) -> FeeCalculator:
    return request.app.state.fee_calculator


def get_member_store(db: Session = Depends(get_db)) -> MemberStore:
    return MemberStore(db)


def get_aggregator(ledger: PaymentLedger = Depends(get_ledger)) -> MemberPaymentStatusAggregator:
    return MemberPaymentStatusAggregator(ledger)


def get_report_engine(
    fees: FeeCalculator = Depends(get_fee_calculator),
    aggregator: MemberPaymentStatusAggregator = Depends(get_aggregator),
) -> BillingReportEngine:
    return BillingReportEngine(fees, aggregator)
