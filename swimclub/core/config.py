"""
config.py

애플리케이션 전역 설정(Configuration) 관리 파일.

이 파일은 .env 환경 변수들을 Pydantic BaseSettings를 통해 로드하여
애플리케이션 전반에서 공통으로 사용하는 설정 값을 제공한다.

주요 설정 항목:
- 데이터베이스 연결 정보 (회원 저장소)
- 로그 레벨
- 통화 단위 (리포트/엑셀 헤더 표기용)
- CORS 허용 도메인 목록

설계 원칙:
- 모든 환경 변수는 이 파일을 통해서만 접근
- 로컬 / 테스트 / 운영 환경을 .env로 분리하여 관리
- 설정 값은 런타임 중 변경되지 않는 불변 객체로 취급

관련 파일:
- swimclub.main            : CORS, 로깅 초기화 시 설정 사용
- swimclub.db.session      : DATABASE_URL 사용
- swimclub.routers.dashboard : CURRENCY 사용

"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

# .env 파일에 정의된 환경 변수를 로드하는 설정 클래스
# extra="ignore" 옵션으로 정의되지 않은 환경 변수는 무시
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str = "sqlite:///./swimclub.db"
    TEST_DATABASE_URL: str | None = None

    LOG_LEVEL: str = "INFO"

    # 회비 금액 표기 단위 (계산에는 영향 없음)
    CURRENCY: str = "DKK"

    # CORS 허용 도메인 (프론트엔드 주소)
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

# 애플리케이션 전역에서 import하여 사용하는 Settings 인스턴스
# 실행 시 한 번만 생성됨
settings = Settings()
