"""
services/fees.py

회원 연회비(membership fee) 계산 규칙.

회원의 활동 상태(membership_status)와 나이(age)만으로 금액이 결정되며,
DB / Ledger 를 전혀 사용하지 않는 순수 계산 로직이다.

규칙 (위에서부터 먼저 일치하는 것 적용):
1. PASSIVE                -> 500
2. ACTIVE, 18세 미만       -> 1000
3. ACTIVE, 18세 이상 60세 미만 -> 1600
4. ACTIVE, 60세 이상       -> 1600 의 75% (1200)
5. 그 외 상태               -> 0

관련 파일:
- swimclub.services.members : 회원 등록 시 첫 청구 금액 계산
- swimclub.services.reports : 전체 예상 수입 합계

"""

from swimclub.models.member import JUNIOR_AGE_LIMIT, MembershipStatus


PASSIVE_FEE = 500
JUNIOR_FEE = 1000
ADULT_FEE = 1600
SENIOR_DISCOUNT_RATE = 0.75

SENIOR_AGE_LIMIT = 60


class FeeCalculator:
    def compute_fee(self, member) -> int:
        status = member.membership_status

        if status == MembershipStatus.PASSIVE:
            return PASSIVE_FEE

        if status == MembershipStatus.ACTIVE:
            if member.age < JUNIOR_AGE_LIMIT:
                return JUNIOR_FEE
            if member.age < SENIOR_AGE_LIMIT:
                return ADULT_FEE
            return int(ADULT_FEE * SENIOR_DISCOUNT_RATE)

        # 유효한 데이터라면 도달하지 않음
        return 0
