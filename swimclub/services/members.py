"""
services/members.py

회원 저장소(MemberStore) 및 회원 등록 로직.

회원 데이터는 SQLAlchemy(DB)에 저장하고,
청구서는 PaymentLedger 에 저장한다. 두 저장소는 회원 ID 로만 연결된다.

주요 기능:
- 회원 조회 / 목록 / 추가 / 수정 / 삭제 / 검색 (MemberStore)
- 회원 등록: 회원 저장 + 연회비 계산 + 첫 청구서 생성

설계 원칙:
- HTTP / FastAPI 의존성 없음
- 트랜잭션 제어(commit / rollback)는 라우터에서 수행
- 회원 삭제 시 청구서/납부 내역은 원장에 이력으로 남김

관련 파일:
- swimclub.models.member    : Member 모델
- swimclub.services.fees    : 연회비 계산
- swimclub.services.ledger  : 첫 청구서 생성
- swimclub.routers.members  : 회원 API

"""

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from swimclub.core.clock import Clock
from swimclub.core.exceptions import MemberNotFound
from swimclub.core.logging import get_logger
from swimclub.models.billing import Billing
from swimclub.models.member import (
    Member,
    MembershipCategory,
    MembershipLevel,
    MembershipStatus,
    level_for_age,
)
from swimclub.services.fees import FeeCalculator
from swimclub.services.ledger import PaymentLedger

logger = get_logger(__name__)


class MemberStore:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, member_id: int) -> Member | None:
        return self.db.scalar(select(Member).where(Member.id == member_id))

    # 없으면 MemberNotFound
    def get(self, member_id: int) -> Member:
        member = self.find_by_id(member_id)
        if member is None:
            raise MemberNotFound(member_id)
        return member

    def find_all(self) -> list[Member]:
        return list(self.db.scalars(select(Member).order_by(Member.id)).all())

    def find_by_email(self, email: str) -> Member | None:
        return self.db.scalar(select(Member).where(Member.email == email))

    def add(self, member: Member) -> Member:
        self.db.add(member)
        self.db.flush()
        return member

    def delete(self, member_id: int) -> None:
        member = self.get(member_id)
        self.db.delete(member)
        self.db.flush()

    def update(
        self,
        member_id: int,
        *,
        name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        age: int | None = None,
        category: MembershipCategory | None = None,
        level: MembershipLevel | None = None,
        membership_status: MembershipStatus | None = None,
    ) -> Member:
        """회원 정보 수정. None 인 항목은 그대로 둔다.

        나이가 바뀌고 level 을 주지 않으면 level 을 나이로 다시 정한다.
        회비는 FeeCalculator 가 매번 계산하므로 새 값이 바로 반영되고,
        이미 발행된 청구서 금액은 바뀌지 않는다.
        """
        member = self.get(member_id)

        if email is not None and email != member.email:
            existing = self.find_by_email(email)
            if existing is not None and existing.id != member.id:
                raise ValueError("email already registered")
            member.email = email

        if name is not None:
            member.name = name
        if phone is not None:
            member.phone = phone
        if category is not None:
            member.category = category
        if membership_status is not None:
            member.membership_status = membership_status

        if age is not None:
            member.age = age
            if level is None:
                member.level = level_for_age(age)
        if level is not None:
            member.level = level

        self.db.flush()
        logger.info("member %s updated (%s)", member.id, member.membership_description)
        return member

    # 숫자면 ID 일치, 아니면 이름 / 전화번호 부분 일치 (대소문자 무시)
    def search(self, query: str) -> list[Member]:
        query = query.strip()
        if not query:
            return []

        pattern = f"%{query}%"
        conditions = [Member.name.ilike(pattern), Member.phone.ilike(pattern)]
        if query.isdigit():
            conditions.append(Member.id == int(query))

        stmt = select(Member).where(or_(*conditions)).order_by(Member.id)
        return list(self.db.scalars(stmt).all())


"""
회원 등록

- 이메일 중복 불가
- level 미지정 시 나이로 결정 (18세 미만 JUNIOR)
- 오늘 날짜로 첫 청구서 생성, 납부기한은 1년 뒤
- DB commit 은 호출 측에서 수행

"""

def register_member(
    db: Session,
    ledger: PaymentLedger,
    fee_calculator: FeeCalculator,
    clock: Clock,
    *,
    name: str,
    email: str,
    phone: str,
    age: int,
    category: MembershipCategory,
    membership_status: MembershipStatus,
    level: MembershipLevel | None = None,
) -> tuple[Member, Billing]:
    store = MemberStore(db)
    if store.find_by_email(email):
        raise ValueError("email already registered")

    member = store.add(
        Member(
            name=name,
            email=email,
            phone=phone,
            age=age,
            category=category,
            level=level or level_for_age(age),
            membership_status=membership_status,
        )
    )

    fee = fee_calculator.compute_fee(member)
    bill = ledger.create_initial_bill(member.id, fee, clock.today())

    logger.info("member %s registered (%s), first bill %s", member.id, member.membership_description, bill.id)
    return member, bill
