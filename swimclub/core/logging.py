"""
logging.py

애플리케이션 로깅 설정 파일.

표준 라이브러리 logging 을 사용하며,
모든 로거는 "swimclub" 네임스페이스 아래에 생성된다.

주요 기능:
- configure_logging : 앱 시작 시 1회 호출하여 핸들러/포맷/레벨 설정
- get_logger        : 모듈별 로거 반환

관련 파일:
- swimclub.main            : 앱 시작 시 configure_logging 호출
- swimclub.services.ledger : 청구/납부 이벤트 로그 기록

"""

import logging

_LOGGER_PREFIX = "swimclub"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    # 이미 swimclub.* 이름이면 그대로 사용 (__name__ 전달 시)
    if name == _LOGGER_PREFIX or name.startswith(f"{_LOGGER_PREFIX}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def configure_logging(level: str = "INFO") -> logging.Logger:
    """swimclub 루트 로거에 stream 핸들러를 한 번만 붙인다."""
    root = logging.getLogger(_LOGGER_PREFIX)
    root.setLevel(level.upper())

    if not any(getattr(h, "_swimclub", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._swimclub = True
        root.addHandler(handler)

    return root
