# app/core/clock.py
from datetime import date, datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def today(self) -> date:
        ...


class SystemClock:
    """Fecha actual en UTC."""

    def today(self) -> date:
        return datetime.now(timezone.utc).date()


class FixedClock:
    """Reloj fijo, para pruebas y para reproducir un dashboard en una fecha dada."""

    def __init__(self, today: date):
        self._today = today

    def today(self) -> date:
        return self._today


def get_clock() -> Clock:
    return SystemClock()
