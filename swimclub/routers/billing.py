"""
billing.py

회비 청구서 / 납부 API 모음.

주요 기능:
- 전체 청구서 목록 / 단건 조회
- 청구서별 납부 내역 조회
- 납부 등록 (부분 납부 / 완납 / 완납 시 다음 청구서 자동 생성)
- 연체(OVERDUE) 상태 일괄 갱신

설계 원칙:
- 납부 적용 규칙은 PaymentLedger 에 위임
- 납부자는 회원 저장소에 존재해야 함 (없으면 404)
- 존재하지 않는 청구서는 404, 0 이하 금액은 400
- 실패한 요청은 원장 상태를 변경하지 않음

관련 파일:
- swimclub.services.ledger  : 청구서 / 납부 원장
- swimclub.schemas.billing  : 요청/응답 스키마

"""

from fastapi import APIRouter, Depends, HTTPException

from swimclub.core.deps import get_ledger, get_member_store
from swimclub.core.exceptions import BillNotFound, MemberNotFound
from swimclub.schemas.billing import (
    BillingResponse,
    OverdueRefreshResponse,
    PaymentCreateRequest,
    PaymentOutcomeResponse,
    PaymentResponse,
)
from swimclub.services.ledger import PaymentLedger
from swimclub.services.members import MemberStore

router = APIRouter(prefix="/billing", tags=["billing"])


@router.get("/bills", response_model=list[BillingResponse])
def list_bills(ledger: PaymentLedger = Depends(get_ledger)):
    return [BillingResponse.from_billing(b) for b in ledger.find_all_bills()]


@router.get("/bills/{billing_id}", response_model=BillingResponse)
def get_bill(billing_id: int, ledger: PaymentLedger = Depends(get_ledger)):
    try:
        return BillingResponse.from_billing(ledger.find_bill(billing_id))
    except BillNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/bills/{billing_id}/payments", response_model=list[PaymentResponse])
def bill_payments(billing_id: int, ledger: PaymentLedger = Depends(get_ledger)):
    try:
        return ledger.find_payments_for_bill(billing_id)
    except BillNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


"""
납부 등록 API

- 청구서에 납부 1건을 적용
- PARTIALLY_PAID 이면 남은 금액(missing_amount) 반환
- PAID 가 되면 1년 뒤 다음 청구서(next_bill) 생성 후 반환

"""
@router.post("/payments", response_model=PaymentOutcomeResponse)
def create_payment(
    body: PaymentCreateRequest,
    ledger: PaymentLedger = Depends(get_ledger),
    store: MemberStore = Depends(get_member_store),
):
    try:
        store.get(body.member_id)
        outcome = ledger.apply_payment(body.billing_id, body.amount, body.member_id)
    except (BillNotFound, MemberNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return PaymentOutcomeResponse(
        payment=PaymentResponse.model_validate(outcome.payment),
        billing=BillingResponse.from_billing(outcome.billing),
        status=outcome.status,
        missing_amount=outcome.missing_amount,
        next_bill=BillingResponse.from_billing(outcome.next_bill) if outcome.next_bill else None,
    )


# 납부기한이 지난 미완납 청구서를 OVERDUE 로 저장
@router.post("/refresh-overdue", response_model=OverdueRefreshResponse)
def refresh_overdue(ledger: PaymentLedger = Depends(get_ledger)):
    changed = ledger.refresh_overdue()
    return OverdueRefreshResponse(updated=[BillingResponse.from_billing(b) for b in changed])
