from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from swimclub.models.billing import MemberPaymentStatus
from swimclub.models.member import MembershipCategory, MembershipLevel, MembershipStatus
from swimclub.schemas.billing import BillingResponse


class MemberCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["Anna Jensen"])
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=30, examples=["12345678"])
    age: int = Field(..., ge=0, le=130, examples=[25])
    category: MembershipCategory = MembershipCategory.EXERCISE
    membership_status: MembershipStatus = MembershipStatus.ACTIVE
    # 미지정 시 나이로 결정
    level: Optional[MembershipLevel] = None


class MemberResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    age: int
    category: MembershipCategory
    level: MembershipLevel
    membership_status: MembershipStatus
    membership_description: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MemberDetailResponse(MemberResponse):
    fee: int
    payment_status: MemberPaymentStatus


class MemberRegisteredResponse(BaseModel):
    member: MemberResponse
    first_bill: BillingResponse


class MemberFeeResponse(BaseModel):
    member_id: int
    fee: int


# PATCH: 보낸 항목만 변경
class MemberUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=30)
    age: Optional[int] = Field(None, ge=0, le=130)
    category: Optional[MembershipCategory] = None
    membership_status: Optional[MembershipStatus] = None
    level: Optional[MembershipLevel] = None
