"""
member.py

수영 클럽 회원(Member) 모델 정의 파일.

이 파일은 회원의 연락처 정보와 회비 계산에 필요한 속성
(나이, 회원 종류, 활동 상태)을 관리한다.

회원은 청구서(Billing)를 직접 참조하지 않는다.
청구서/납부 내역은 PaymentLedger 가 회원 ID 기준으로 보관한다.

"""

import datetime
from enum import Enum

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from swimclub.db.base import Base


JUNIOR_AGE_LIMIT = 18


"""
회원 종류(category) × 등급(level) 정의

- COMPETITIVE : 경기(선수) 회원
- EXERCISE    : 운동(일반) 회원
- JUNIOR      : 18세 미만
- SENIOR      : 18세 이상

"""

class MembershipCategory(str, Enum):
    COMPETITIVE = "COMPETITIVE"
    EXERCISE = "EXERCISE"


class MembershipLevel(str, Enum):
    JUNIOR = "JUNIOR"
    SENIOR = "SENIOR"


"""
회원 활동 상태

- ACTIVE  : 활동 회원 (나이별 회비)
- PASSIVE : 휴면 회원 (고정 회비)

"""

class MembershipStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PASSIVE = "PASSIVE"


def level_for_age(age: int) -> MembershipLevel:
    return MembershipLevel.JUNIOR if age < JUNIOR_AGE_LIMIT else MembershipLevel.SENIOR


# 예: "Junior Member: Competitive"
def describe_membership(category: MembershipCategory, level: MembershipLevel) -> str:
    return f"{level.value.title()} Member: {category.value.title()}"


"""
회원(Member) 모델

- age / membership_status 로 회비 계산 (FeeCalculator)
- category / level 은 표시용 태그 (동작 분기 없음)

"""

class Member(Base):
    __tablename__ = "members"
    # 삭제된 회원 ID 재사용 금지 (원장 청구서가 회원 ID 로 연결됨)
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    phone: Mapped[str] = mapped_column(String(30), nullable=False)

    age: Mapped[int] = mapped_column(Integer, nullable=False)

    category: Mapped[MembershipCategory] = mapped_column(default=MembershipCategory.EXERCISE)
    level: Mapped[MembershipLevel] = mapped_column(default=MembershipLevel.SENIOR)
    membership_status: Mapped[MembershipStatus] = mapped_column(default=MembershipStatus.ACTIVE)

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.datetime.utcnow, nullable=False
    )

    @property
    def membership_description(self) -> str:
        return describe_membership(self.category, self.level)
