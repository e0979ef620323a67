"""Resumen financiero de un período para el dashboard."""

import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Awaitable, Iterable, List, Union
from uuid import UUID

from app.core.errors import QueryFailure
from app.models.enums import TransactionType
from app.repositories.transaction_query import TransactionFilter, TransactionQuery
from app.services.periods import Period

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class FinancialSummary:
    period: str
    total_income: Decimal
    total_expenses: Decimal
    balance: Decimal
    pre_income_amount: Decimal
    upcoming_bills_amount: Decimal
    upcoming_bills_count: int
    pre_balance_amount: Decimal


def sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)


def build_filters(user_id: UUID, period: Period) -> dict:
    start, end = period.start, period.end
    return {
        "income": TransactionFilter(user_id, TransactionType.income, True, start, end),
        "pending_income": TransactionFilter(user_id, TransactionType.income, False, start, end),
        "expenses": TransactionFilter(user_id, TransactionType.expense, True, start, end),
        "upcoming_bills": TransactionFilter(
            user_id, TransactionType.expense, False, start, end, by_effective_date=True
        ),
    }


async def _run(name: str, pending: Awaitable[List[Decimal]]) -> List[Decimal]:
    try:
        return await pending
    except QueryFailure as exc:
        raise QueryFailure(name, exc.message) from exc
    except Exception as exc:
        raise QueryFailure(name, str(exc) or exc.__class__.__name__) from exc


async def aggregate(
    user_id: UUID,
    period: Union[Period, str],
    query: TransactionQuery,
) -> FinancialSummary:
    """Calcula ingresos, gastos, pendientes y cuentas por pagar del período.

    Las cuatro lecturas se lanzan en paralelo. Si una falla se cancelan las
    demás y se propaga un único QueryFailure: nunca un resumen parcial.
    """
    if isinstance(period, str):
        period = Period.parse(period)

    logger.debug("Agregando período %s para usuario %s", period, user_id)
    filters = build_filters(user_id, period)
    tasks = [
        asyncio.ensure_future(_run(name, query.fetch_amounts(criteria)))
        for name, criteria in filters.items()
    ]
    try:
        income, pending_income, expenses, bills = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        raise

    total_income = sum_amounts(income)
    total_expenses = sum_amounts(expenses)
    pre_income_amount = sum_amounts(pending_income)
    upcoming_bills_amount = sum_amounts(bills)

    summary = FinancialSummary(
        period=period.value,
        total_income=total_income,
        total_expenses=total_expenses,
        balance=total_income - total_expenses,
        pre_income_amount=pre_income_amount,
        upcoming_bills_amount=upcoming_bills_amount,
        upcoming_bills_count=len(bills),
        pre_balance_amount=pre_income_amount - upcoming_bills_amount,
    )
    logger.debug("Resumen %s listo: %s", period, summary)
    return summary
