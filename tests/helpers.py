# tests/helpers.py
import uuid

from swimclub.models.member import Member, MembershipCategory, MembershipStatus, level_for_age


def make_member(*, age: int = 30, status: MembershipStatus = MembershipStatus.ACTIVE,
                category: MembershipCategory = MembershipCategory.EXERCISE, member_id: int | None = None) -> Member:
    """DB에 저장하지 않은 Member (FeeCalculator / 리포트 단위 테스트용)"""
    return Member(
        id=member_id,
        name="Test Swimmer",
        email=f"swimmer_{uuid.uuid4().hex[:6]}@test.com",
        phone="12345678",
        age=age,
        category=category,
        level=level_for_age(age),
        membership_status=status,
    )


def register_via_api(client, *, age: int = 30, status: str = "ACTIVE", category: str = "EXERCISE", name: str = "Test Swimmer") -> dict:
    res = client.post(
        "/members",
        json={
            "name": name,
            "email": f"swimmer_{uuid.uuid4().hex[:6]}@test.com",
            "phone": "12345678",
            "age": age,
            "category": category,
            "membership_status": status,
        },
    )
    assert res.status_code == 200, res.text
    return res.json()


def pay_via_api(client, *, billing_id: int, member_id: int, amount: int):
    return client.post(
        "/billing/payments",
        json={"billing_id": billing_id, "member_id": member_id, "amount": amount},
    )
