"""
session.py

데이터베이스 엔진 및 세션(Session) 관리 파일.

이 파일은 SQLAlchemy Engine과 SessionLocal을 생성하여
회원 저장소(MemberStore)가 공통으로 사용하는 DB 연결을 관리한다.

FastAPI 의존성(get_db)을 통해
요청 단위로 세션을 생성/종료하는 구조를 지원한다.

설계 원칙:
- DB 연결 설정은 한 곳에서만 정의
- 세션 생성/종료 책임을 명확히 분리
- pool_pre_ping=True로 유휴 연결 오류 방지

관련 파일:
- swimclub.core.config     : DATABASE_URL 설정
- swimclub.core.deps       : get_db 의존성

"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from swimclub.core.config import settings


def make_engine(url: str, **kwargs):
    # SQLite 는 FastAPI 스레드풀에서 같은 커넥션을 공유하므로 스레드 체크 해제
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True, **kwargs)


# SQLAlchemy Engine 생성
engine = make_engine(settings.DATABASE_URL)

# 요청 단위로 사용할 세션 팩토리
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)
