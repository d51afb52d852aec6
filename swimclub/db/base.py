"""
base.py

SQLAlchemy ORM Base 정의 파일.

회원 저장소(MemberStore)가 사용하는 모든 SQLAlchemy 모델이
상속받는 공통 Base 클래스를 정의한다.

청구서(Billing) / 납부(Payment)는 PaymentLedger 가 메모리에서 소유하므로
이 Base 에 등록되지 않는다.

설계 원칙:
- Base 정의는 단일 파일에서만 관리
- 모델 간 순환 참조 방지

관련 파일:
- swimclub.models.member  : Member 모델
- swimclub.main           : 앱 시작 시 create_all

"""

from sqlalchemy.orm import declarative_base

# 모든 ORM 모델이 상속받는 Base 클래스
Base = declarative_base()
