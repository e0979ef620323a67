"""Contrato de lectura sobre el almacén de transacciones.

El agregador del dashboard solo conoce este protocolo; las implementaciones
(SQL propio o PostgREST hospedado) deciden cómo se ejecuta cada filtro.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional, Protocol
from uuid import UUID

from app.models.enums import TransactionType


@dataclass(frozen=True)
class TransactionFilter:
    """Filtro de lectura: dueño, tipo, estado de pago y rango [start, end).

    Con `by_effective_date` el rango se aplica a la fecha efectiva
    (due_date si existe, si no transaction_date) en vez de a
    transaction_date.
    """

    user_id: UUID
    type: TransactionType
    is_paid: bool
    start: date
    end: date
    by_effective_date: bool = False


class TransactionQuery(Protocol):
    async def fetch_amounts(self, criteria: TransactionFilter) -> List[Decimal]:
        """Montos de las transacciones que cumplen el filtro."""
        ...

    async def latest_transaction_date(
        self,
        user_id: UUID,
        type: Optional[TransactionType] = None,
    ) -> Optional[date]:
        """Fecha de la transacción más reciente, o None si no hay ninguna."""
        ...
