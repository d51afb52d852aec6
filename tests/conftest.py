import os

# 앱 import 전에 지정 (lifespan 의 create_all 이 로컬 파일 DB를 만들지 않도록)
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from swimclub.main import app as fastapi_app
from swimclub.core.clock import FixedClock
from swimclub.core.config import settings
from swimclub.core.deps import get_db
from swimclub.db.base import Base
from swimclub.db.session import make_engine
from swimclub.services.fees import FeeCalculator
from swimclub.services.ledger import PaymentLedger

# ✅ 모델 import (Base.metadata에 테이블 등록)
import swimclub.models.member  # noqa: F401


# TEST_DATABASE_URL 미지정 시 메모리 SQLite (모든 세션이 같은 커넥션 공유)
TEST_DB_URL = settings.TEST_DATABASE_URL or "sqlite://"

engine = make_engine(TEST_DB_URL, poolclass=StaticPool) if TEST_DB_URL.startswith("sqlite") else make_engine(TEST_DB_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

START_DATE = date(2024, 1, 1)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """테스트 전체 시작/종료 때만 스키마 생성/삭제"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_tables():
    """각 테스트마다 데이터 초기화 (테이블은 유지, row만 삭제)"""
    with engine.begin() as conn:
        conn.execute(text("DELETE FROM members"))


@pytest.fixture()
def clock():
    return FixedClock(START_DATE)


@pytest.fixture()
def ledger(clock):
    return PaymentLedger(clock)


@pytest.fixture()
def fees():
    return FeeCalculator()


@pytest.fixture()
def db_session():
    """테스트에서 직접 DB 조작할 때 쓰는 세션"""
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    finally:
        session.close()


@pytest.fixture()
def client(clock, ledger, fees):
    # 테스트마다 고정 Clock + 빈 원장으로 교체
    fastapi_app.state.clock = clock
    fastapi_app.state.ledger = ledger
    fastapi_app.state.fee_calculator = fees
    fastapi_app.dependency_overrides[get_db] = override_get_db
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()
