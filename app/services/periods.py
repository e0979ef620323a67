"""Períodos mensuales seleccionables en el dashboard y en los listados.

Un período es un mes calendario identificado por su clave ``YYYY-MM``. Las
opciones ofrecidas van, sin huecos, desde un mes inicial fijo (configurable)
hasta el mes de la transacción más reciente del usuario.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import List, Optional
from uuid import UUID

from app.core.clock import Clock
from app.core.errors import InvalidPeriodKey
from app.models.enums import TransactionType

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")

MONTH_NAMES = {
    "es": ["enero", "febrero", "marzo", "abril", "mayo", "junio", "julio",
           "agosto", "septiembre", "octubre", "noviembre", "diciembre"],
    "pt": ["janeiro", "fevereiro", "março", "abril", "maio", "junho", "julho",
           "agosto", "setembro", "outubro", "novembro", "dezembro"],
    "en": ["January", "February", "March", "April", "May", "June", "July",
           "August", "September", "October", "November", "December"],
}
DEFAULT_LOCALE = "es"


def format_month_label(year: int, month: int, locale: str = DEFAULT_LOCALE) -> str:
    """Etiqueta "mes de año" según el idioma ("pt-BR" usa la tabla "pt")."""
    language = (locale or DEFAULT_LOCALE).split("-")[0].split("_")[0].lower()
    names = MONTH_NAMES.get(language, MONTH_NAMES[DEFAULT_LOCALE])
    name = names[month - 1]
    if language == "en":
        return f"{name} {year}"
    return f"{name} de {year}"


@dataclass(frozen=True, order=True)
class Period:
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise InvalidPeriodKey(f"{self.year:04d}-{self.month:02d}")

    @classmethod
    def parse(cls, key: str) -> "Period":
        match = _KEY_RE.match(key.strip()) if isinstance(key, str) else None
        if not match:
            raise InvalidPeriodKey(key)
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            raise InvalidPeriodKey(key)
        return cls(year, month)

    @classmethod
    def containing(cls, day: date) -> "Period":
        return cls(day.year, day.month)

    @property
    def value(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def start(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def end(self) -> date:
        # Límite exclusivo: primer día del mes siguiente
        return self.next().start

    def next(self) -> "Period":
        if self.month == 12:
            return Period(self.year + 1, 1)
        return Period(self.year, self.month + 1)

    def label(self, locale: str = DEFAULT_LOCALE) -> str:
        return format_month_label(self.year, self.month, locale)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PeriodOption:
    value: str
    label: str


@dataclass(frozen=True)
class PeriodSelection:
    options: List[PeriodOption]
    default: str

    def __contains__(self, key: str) -> bool:
        return any(option.value == key for option in self.options)


def month_range(first: Period, last: Period) -> List[Period]:
    """Meses de `first` a `last`, ambos incluidos, en orden ascendente."""
    periods = []
    current = first
    while current <= last:
        periods.append(current)
        current = current.next()
    return periods


def resolve_periods(
    earliest_month: date,
    latest_known_date: Optional[date],
    *,
    today: date,
    locale: str = DEFAULT_LOCALE,
) -> PeriodSelection:
    """Genera las opciones de período y elige la selección por defecto.

    - Sin transacciones (`latest_known_date` es None) se usa `today`.
    - El default es el mes actual si está en la lista; si no, el último.
    - Si el mes inicial es posterior al último conocido, se ofrece solo el
      mes actual.
    """
    if latest_known_date is None:
        latest_known_date = today

    current = Period.containing(today)
    first = Period.containing(earliest_month)
    last = Period.containing(latest_known_date)

    if first > last:
        logger.info(
            "Rango de períodos invertido (%s > %s), se ofrece solo %s",
            first, last, current,
        )
        periods = [current]
    else:
        periods = month_range(first, last)

    options = [PeriodOption(value=p.value, label=p.label(locale)) for p in periods]
    default = current.value if current in periods else periods[-1].value
    return PeriodSelection(options=options, default=default)


async def load_period_selection(
    query,
    user_id: UUID,
    *,
    clock: Clock,
    epoch: str,
    locale: str = DEFAULT_LOCALE,
    type: Optional[TransactionType] = None,
) -> PeriodSelection:
    """Consulta la última fecha registrada y arma la selección de períodos."""
    latest = await query.latest_transaction_date(user_id, type)
    return resolve_periods(
        Period.parse(epoch).start,
        latest,
        today=clock.today(),
        locale=locale,
    )
