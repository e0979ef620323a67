# app/repositories/sql_transaction_query.py

import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select
from starlette.concurrency import run_in_threadpool

from app.core.errors import QueryFailure
from app.models.enums import TransactionType
from app.models.transaction import Transaction
from app.repositories.transaction_query import TransactionFilter

logger = logging.getLogger(__name__)


def build_amounts_statement(criteria: TransactionFilter):
    query = (
        select(Transaction.amount)
        .where(Transaction.user_id == criteria.user_id)
        .where(Transaction.type == criteria.type)
        .where(Transaction.is_paid == criteria.is_paid)
    )

    if criteria.by_effective_date:
        # fecha efectiva = due_date si existe, si no transaction_date
        query = query.where(
            or_(
                and_(
                    Transaction.due_date.is_not(None),
                    Transaction.due_date >= criteria.start,
                    Transaction.due_date < criteria.end,
                ),
                and_(
                    Transaction.due_date.is_(None),
                    Transaction.transaction_date >= criteria.start,
                    Transaction.transaction_date < criteria.end,
                ),
            )
        )
    else:
        query = (
            query
            .where(Transaction.transaction_date >= criteria.start)
            .where(Transaction.transaction_date < criteria.end)
        )
    return query


class SqlTransactionQuery:
    """Lecturas sobre la tabla `transaction` de la base propia.

    Cada consulta abre su propia sesión y corre en el threadpool, así las
    sub-consultas del dashboard pueden ejecutarse en paralelo.
    """

    def __init__(self, engine):
        self.engine = engine

    def _fetch_amounts(self, criteria: TransactionFilter) -> List[Decimal]:
        with Session(self.engine) as session:
            rows = session.exec(build_amounts_statement(criteria)).all()
        return [Decimal(amount) for amount in rows]

    def _latest_transaction_date(
        self, user_id: UUID, type: Optional[TransactionType]
    ) -> Optional[date]:
        query = select(Transaction.transaction_date).where(Transaction.user_id == user_id)
        if type is not None:
            query = query.where(Transaction.type == type)
        query = query.order_by(Transaction.transaction_date.desc()).limit(1)

        with Session(self.engine) as session:
            return session.exec(query).first()

    async def fetch_amounts(self, criteria: TransactionFilter) -> List[Decimal]:
        try:
            return await run_in_threadpool(self._fetch_amounts, criteria)
        except SQLAlchemyError as exc:
            logger.warning("Falló la consulta de montos %s: %s", criteria, exc)
            raise QueryFailure("fetch_amounts", "Error consultando transacciones") from exc

    async def latest_transaction_date(
        self,
        user_id: UUID,
        type: Optional[TransactionType] = None,
    ) -> Optional[date]:
        try:
            return await run_in_threadpool(self._latest_transaction_date, user_id, type)
        except SQLAlchemyError as exc:
            logger.warning("Falló la consulta de última fecha: %s", exc)
            raise QueryFailure(
                "latest_transaction_date", "Error consultando la última transacción"
            ) from exc
