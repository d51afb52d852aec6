"""
main.py

FastAPI 애플리케이션 진입점(Entry Point).

이 파일은 서버 실행 시 가장 먼저 로드되며,
애플리케이션 전반의 설정과 라우터 등록을 담당한다.

주요 역할:
- FastAPI 앱 인스턴스 생성
- 로깅 초기화, 회원 테이블 생성
- 프로세스 단위 객체(Clock, FeeCalculator, PaymentLedger)를 app.state 에 등록
- CORS 미들웨어 설정
- 도메인별 라우터(members, billing, dashboard) 등록
- 헬스 체크 및 DB 연결 상태 확인용 엔드포인트 제공

설계 원칙:
- 비즈니스 로직은 포함하지 않고 설정/조립 역할만 수행
- 실제 기능은 routers / services 계층에 위임

관련 파일:
- swimclub.core.config     : 환경 변수 및 설정 로드
- swimclub.core.deps       : DB 세션 / 원장 의존성
- swimclub.routers.*       : 기능별 API 라우터

"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
from sqlalchemy import text

from swimclub.core.clock import SystemClock
from swimclub.core.config import settings
from swimclub.core.deps import get_db
from swimclub.core.logging import configure_logging
from swimclub.db.base import Base
from swimclub.db.session import engine
from swimclub.routers import members, billing, dashboard
from swimclub.services.fees import FeeCalculator
from swimclub.services.ledger import PaymentLedger

logger = configure_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("swimclub started (db=%s)", engine.url.render_as_string(hide_password=True))
    yield


app = FastAPI(title="Swim Club Billing", lifespan=lifespan)

clock = SystemClock()
app.state.clock = clock
app.state.fee_calculator = FeeCalculator()
app.state.ledger = PaymentLedger(clock)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(members.router)
app.include_router(billing.router)
app.include_router(dashboard.router)

"""
서버 헬스 체크 엔드포인트

- 애플리케이션 프로세스가 정상 동작 중인지 확인

"""
@app.get("/health")
def health():
    return {"status": "ok"}

"""
데이터베이스 연결 상태 확인 엔드포인트

- 간단한 SELECT 1 쿼리를 통해 DB 연결 여부 확인

"""
@app.get("/db-ping")
def db_ping(db: Session = Depends(get_db)):
    value = db.execute(text("SELECT 1")).scalar_one()
    return {"db": "ok", "value": value}
