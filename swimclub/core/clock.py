"""
clock.py

현재 날짜(today)를 제공하는 Clock 추상화.

청구서 연체(OVERDUE) 판정, 납부일 기록, 신규 회원 첫 청구일 등
"오늘 날짜"가 필요한 모든 로직은 date.today()를 직접 호출하지 않고
주입받은 Clock을 통해서만 날짜를 얻는다.

- SystemClock : 운영용, 실제 시스템 날짜
- FixedClock  : 테스트용, 고정 날짜 (set / advance 로 이동 가능)

"""

from datetime import date, timedelta
from typing import Protocol


class Clock(Protocol):
    def today(self) -> date: ...


class SystemClock:
    def today(self) -> date:
        return date.today()


class FixedClock:
    """고정된 날짜를 반환하는 테스트용 Clock."""

    def __init__(self, fixed: date):
        self._today = fixed

    def today(self) -> date:
        return self._today

    def set(self, value: date) -> None:
        self._today = value

    def advance(self, days: int = 1) -> date:
        self._today = self._today + timedelta(days=days)
        return self._today
