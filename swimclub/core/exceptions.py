"""
exceptions.py

회비 청구/납부 도메인 예외 정의.

모든 예외는 ValueError 를 상속하므로
라우터에서는 기존처럼 `except ValueError` 로 400 처리가 가능하고,
조회 실패(BillNotFound / MemberNotFound)만 따로 잡아 404로 변환한다.

- InvalidAmount  : 0 이하의 납부 금액 / 청구 금액
- InvalidBilling : 청구서 필수 값(청구일, 납부기한) 누락 또는 금액 오류
- BillNotFound   : 존재하지 않는 청구서 ID
- MemberNotFound : 존재하지 않는 회원 ID

"""


class BillingError(ValueError):
    pass


class InvalidAmount(BillingError):
    def __init__(self, amount):
        super().__init__(f"amount must be positive (got {amount})")
        self.amount = amount


class InvalidBilling(BillingError):
    pass


class BillNotFound(BillingError):
    def __init__(self, billing_id: int):
        super().__init__(f"billing not found: {billing_id}")
        self.billing_id = billing_id


class MemberNotFound(BillingError):
    def __init__(self, member_id: int):
        super().__init__(f"member not found: {member_id}")
        self.member_id = member_id
