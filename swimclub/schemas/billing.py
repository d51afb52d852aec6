from datetime import date
from typing import Optional, List

from pydantic import BaseModel, Field, ConfigDict

from swimclub.models.billing import BillingStatus, MemberPaymentStatus, PaymentStatus


class BillingResponse(BaseModel):
    id: int
    member_id: int
    due_amount: int
    amount_paid: int
    missing_amount: int
    billing_date: date
    due_date: date
    status: BillingStatus
    payment_ids: List[int]

    @classmethod
    def from_billing(cls, bill) -> "BillingResponse":
        return cls(
            id=bill.id,
            member_id=bill.member_id,
            due_amount=bill.due_amount,
            amount_paid=bill.amount_paid,
            missing_amount=bill.missing_amount(),
            billing_date=bill.billing_date,
            due_date=bill.due_date,
            status=bill.status,
            payment_ids=list(bill.payment_ids),
        )


class PaymentCreateRequest(BaseModel):
    billing_id: int
    member_id: int
    # 0 이하 금액은 서비스 계층에서 InvalidAmount 로 거절 (400)
    amount: int = Field(..., examples=[800])


class PaymentResponse(BaseModel):
    id: int
    member_id: int
    billing_id: int
    amount: int
    payment_date: date
    status: PaymentStatus

    model_config = ConfigDict(from_attributes=True)


class PaymentOutcomeResponse(BaseModel):
    payment: PaymentResponse
    billing: BillingResponse
    status: BillingStatus
    missing_amount: Optional[int] = None
    next_bill: Optional[BillingResponse] = None


class OverdueRefreshResponse(BaseModel):
    updated: List[BillingResponse]


class TotalExpectedResponse(BaseModel):
    member_count: int
    total_expected: int
    currency: str


class DashboardMemberRow(BaseModel):
    member_id: int
    name: str
    email: str
    phone: str
    membership_description: str
    fee: int
    status: MemberPaymentStatus
    outstanding: int
