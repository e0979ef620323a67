# app/repositories/factory.py

from app.core.config import (
    POSTGREST_API_KEY,
    POSTGREST_TIMEOUT,
    POSTGREST_URL,
    TRANSACTION_STORE,
)
from app.repositories.postgrest_transaction_query import PostgrestTransactionQuery
from app.repositories.sql_transaction_query import SqlTransactionQuery
from app.repositories.transaction_query import TransactionQuery


def build_transaction_query(store: str = TRANSACTION_STORE) -> TransactionQuery:
    if store == "sql":
        from app.database import engine
        return SqlTransactionQuery(engine)
    if store == "postgrest":
        if not POSTGREST_URL:
            raise RuntimeError("POSTGREST_URL no está definida. Verifica tu .env")
        return PostgrestTransactionQuery(POSTGREST_URL, POSTGREST_API_KEY, timeout=POSTGREST_TIMEOUT)
    raise RuntimeError(f"TRANSACTION_STORE desconocido: {store!r}")


def get_transaction_query() -> TransactionQuery:
    return build_transaction_query()
