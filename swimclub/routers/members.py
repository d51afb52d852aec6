"""
members.py

회원(Member) 등록 / 조회 API 모음.

이 파일은 회원 등록(연회비 계산 + 첫 청구서 생성)과
회원 정보, 연회비, 회원별 청구서/납부 내역 조회를 담당한다.

주요 기능:
- 회원 등록
- 회원 목록 / 단건 조회 (납부 상태 포함)
- 회원 검색 (ID / 이름 / 전화번호)
- 회원 정보 수정 (연회비는 새 정보로 계산, 발행된 청구서는 그대로)
- 회원 연회비 조회
- 회원별 청구서 / 납부 내역 조회
- 회원 삭제 (청구서/납부 내역은 원장에 이력으로 유지)

설계 원칙:
- 비즈니스 로직은 service 계층(swimclub.services.*)에 위임
- 이 라우터는 요청/응답 처리와 예외 -> HTTP 상태 코드 변환에만 집중
- 존재하지 않는 회원은 404

관련 파일:
- swimclub.services.members        : MemberStore / register_member
- swimclub.services.ledger         : 청구서 / 납부 원장
- swimclub.services.payment_status : 회원 납부 상태 집계
- swimclub.schemas.member          : 요청/응답 스키마

"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from swimclub.core.clock import Clock
from swimclub.core.deps import (
    get_aggregator,
    get_clock,
    get_db,
    get_fee_calculator,
    get_ledger,
    get_member_store,
)
from swimclub.core.exceptions import MemberNotFound
from swimclub.schemas.billing import BillingResponse, PaymentResponse
from swimclub.schemas.member import (
    MemberCreateRequest,
    MemberDetailResponse,
    MemberFeeResponse,
    MemberRegisteredResponse,
    MemberResponse,
    MemberUpdateRequest,
)
from swimclub.services.fees import FeeCalculator
from swimclub.services.ledger import PaymentLedger
from swimclub.services.members import MemberStore, register_member
from swimclub.services.payment_status import MemberPaymentStatusAggregator

router = APIRouter(prefix="/members", tags=["members"])


def _get_member_or_404(store: MemberStore, member_id: int):
    try:
        return store.get(member_id)
    except MemberNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


"""
회원 등록 API

- 회원 저장 후 연회비를 계산하여 첫 청구서를 생성
- 이메일 중복 시 400
- commit 실패 시 방금 만든 첫 청구서를 원장에서 제거

"""
@router.post("", response_model=MemberRegisteredResponse)
def create_member(
    body: MemberCreateRequest,
    db: Session = Depends(get_db),
    ledger: PaymentLedger = Depends(get_ledger),
    fees: FeeCalculator = Depends(get_fee_calculator),
    clock: Clock = Depends(get_clock),
):
    bill = None
    try:
        member, bill = register_member(
            db,
            ledger,
            fees,
            clock,
            name=body.name,
            email=body.email,
            phone=body.phone,
            age=body.age,
            category=body.category,
            membership_status=body.membership_status,
            level=body.level,
        )
        db.commit()
        db.refresh(member)
        return MemberRegisteredResponse(
            member=MemberResponse.model_validate(member),
            first_bill=BillingResponse.from_billing(bill),
        )
    except ValueError as e:
        db.rollback()
        if bill is not None:
            ledger.discard_unpaid_bill(bill.id)
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        if bill is not None:
            ledger.discard_unpaid_bill(bill.id)
        raise


@router.get("", response_model=list[MemberResponse])
def list_members(store: MemberStore = Depends(get_member_store)):
    return store.find_all()


"""
회원 검색 API

- q 가 숫자면 회원 ID 일치도 포함
- 이름 / 전화번호 부분 일치 (대소문자 무시)

"""
@router.get("/search", response_model=list[MemberResponse])
def search_members(
    q: str = Query(..., min_length=1),
    store: MemberStore = Depends(get_member_store),
):
    return store.search(q)


"""
회원 단건 조회 API

- 회원 정보 + 연회비 + 오늘 기준 납부 상태

"""
@router.get("/{member_id}", response_model=MemberDetailResponse)
def get_member(
    member_id: int,
    store: MemberStore = Depends(get_member_store),
    fees: FeeCalculator = Depends(get_fee_calculator),
    aggregator: MemberPaymentStatusAggregator = Depends(get_aggregator),
):
    member = _get_member_or_404(store, member_id)
    return MemberDetailResponse(
        **MemberResponse.model_validate(member).model_dump(),
        fee=fees.compute_fee(member),
        payment_status=aggregator.classify(member),
    )


@router.get("/{member_id}/fee", response_model=MemberFeeResponse)
def get_member_fee(
    member_id: int,
    store: MemberStore = Depends(get_member_store),
    fees: FeeCalculator = Depends(get_fee_calculator),
):
    member = _get_member_or_404(store, member_id)
    return MemberFeeResponse(member_id=member.id, fee=fees.compute_fee(member))


@router.get("/{member_id}/bills", response_model=list[BillingResponse])
def member_bills(
    member_id: int,
    store: MemberStore = Depends(get_member_store),
    ledger: PaymentLedger = Depends(get_ledger),
):
    _get_member_or_404(store, member_id)
    return [BillingResponse.from_billing(b) for b in ledger.find_bills_by_member(member_id)]


@router.get("/{member_id}/payments", response_model=list[PaymentResponse])
def member_payments(
    member_id: int,
    store: MemberStore = Depends(get_member_store),
    ledger: PaymentLedger = Depends(get_ledger),
):
    _get_member_or_404(store, member_id)
    return ledger.find_payments_by_member(member_id)


"""
회원 정보 수정 API

- 보낸 항목만 변경
- 응답의 fee 는 수정된 정보 기준, 이미 발행된 청구서는 그대로
- 이메일 중복 시 400

"""
@router.patch("/{member_id}", response_model=MemberDetailResponse)
def update_member(
    member_id: int,
    body: MemberUpdateRequest,
    db: Session = Depends(get_db),
    store: MemberStore = Depends(get_member_store),
    fees: FeeCalculator = Depends(get_fee_calculator),
    aggregator: MemberPaymentStatusAggregator = Depends(get_aggregator),
):
    try:
        member = store.update(member_id, **body.model_dump(exclude_unset=True))
        db.commit()
        db.refresh(member)
    except MemberNotFound as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise

    return MemberDetailResponse(
        **MemberResponse.model_validate(member).model_dump(),
        fee=fees.compute_fee(member),
        payment_status=aggregator.classify(member),
    )


"""
회원 삭제 API

- 회원 레코드만 삭제
- 청구서 / 납부 내역은 원장에 이력으로 남음

"""
@router.delete("/{member_id}")
def delete_member(
    member_id: int,
    db: Session = Depends(get_db),
    store: MemberStore = Depends(get_member_store),
):
    try:
        store.delete(member_id)
        db.commit()
    except MemberNotFound as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        db.rollback()
        raise
    return {"message": "Member deleted", "member_id": member_id}
