"""Estado de un dashboard conectado.

Mantiene las opciones de período, la selección actual y el último resumen.
Cambiar de período mientras la agregación anterior sigue en curso la
cancela: gana siempre la última selección.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional
from uuid import UUID

from app.core.clock import Clock, SystemClock
from app.core.errors import FinanceError
from app.models.enums import TransactionType
from app.repositories.transaction_query import TransactionQuery
from app.services.aggregator import FinancialSummary, aggregate
from app.services.periods import DEFAULT_LOCALE, PeriodSelection, load_period_selection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    title: str
    description: str


class DashboardSession:
    def __init__(
        self,
        query: TransactionQuery,
        user_id: Optional[UUID],
        *,
        epoch: str,
        clock: Optional[Clock] = None,
        locale: str = DEFAULT_LOCALE,
        period_type: Optional[TransactionType] = TransactionType.income,
        on_change: Optional[Callable[["DashboardSession"], Awaitable[None]]] = None,
    ):
        self.query = query
        self.user_id = user_id
        self.epoch = epoch
        self.clock = clock or SystemClock()
        self.locale = locale
        self.period_type = period_type
        self.on_change = on_change

        self.periods: Optional[PeriodSelection] = None
        self.selected_period: Optional[str] = None
        self.summary: Optional[FinancialSummary] = None
        self.notifications: List[Notification] = []
        self._inflight: Optional[asyncio.Task] = None

    def _notify(self, title: str, error: Exception) -> None:
        logger.warning("%s: %s", title, error)
        self.notifications.append(Notification(title=title, description=str(error)))

    async def load_periods(self) -> Optional[PeriodSelection]:
        """Carga las opciones de período; sin usuario autenticado no hace nada."""
        if self.user_id is None:
            return None
        try:
            self.periods = await load_period_selection(
                self.query,
                self.user_id,
                clock=self.clock,
                epoch=self.epoch,
                locale=self.locale,
                type=self.period_type,
            )
        except FinanceError as exc:
            self._notify("Error al cargar períodos", exc)
            return None
        return self.periods

    def select_period(self, period: str) -> Optional[asyncio.Task]:
        """Lanza la agregación de `period`, cancelando la anterior si sigue viva."""
        if self.user_id is None:
            return None

        if self._inflight is not None and not self._inflight.done():
            logger.info("Cancelando agregación de %s por nueva selección %s",
                        self.selected_period, period)
            self._inflight.cancel()

        self.selected_period = period
        task = asyncio.ensure_future(self._refresh(period))
        self._inflight = task
        return task

    async def _refresh(self, period: str) -> Optional[FinancialSummary]:
        try:
            summary = await aggregate(self.user_id, period, self.query)
        except FinanceError as exc:
            # No se reintenta: el usuario vuelve a elegir el período
            if self._is_current():
                self.summary = None
                self._notify("Error al cargar datos", exc)
                await self._publish()
            return None

        if self._is_current():
            self.summary = summary
            await self._publish()
        return summary

    async def _publish(self) -> None:
        if self.on_change is None:
            return
        try:
            await self.on_change(self)
        except Exception:
            # p.ej. el websocket se cerró mientras se calculaba el resumen
            logger.exception("No fue posible publicar el resumen de %s", self.selected_period)

    def _is_current(self) -> bool:
        return self._inflight is asyncio.current_task()

    async def wait(self) -> Optional[FinancialSummary]:
        """Espera la agregación vigente y devuelve el resumen publicado."""
        while self._inflight is not None and not self._inflight.done():
            await asyncio.wait([self._inflight])
        return self.summary

    def close(self) -> None:
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
