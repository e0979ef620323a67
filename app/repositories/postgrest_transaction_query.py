# app/repositories/postgrest_transaction_query.py
# Lecturas contra un backend PostgREST hospedado (p.ej. Supabase: <url>/rest/v1)

import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple
from uuid import UUID

import httpx

from app.core.errors import QueryFailure
from app.models.enums import TransactionType
from app.repositories.transaction_query import TransactionFilter

logger = logging.getLogger(__name__)

Params = List[Tuple[str, str]]


def build_amounts_params(criteria: TransactionFilter) -> Params:
    start, end = criteria.start.isoformat(), criteria.end.isoformat()
    params: Params = [
        ("select", "amount"),
        ("user_id", f"eq.{criteria.user_id}"),
        ("type", f"eq.{criteria.type.value}"),
        ("is_paid", f"eq.{str(criteria.is_paid).lower()}"),
    ]
    if criteria.by_effective_date:
        params.append((
            "or",
            f"(and(due_date.gte.{start},due_date.lt.{end}),"
            f"and(due_date.is.null,transaction_date.gte.{start},transaction_date.lt.{end}))",
        ))
    else:
        params.append(("transaction_date", f"gte.{start}"))
        params.append(("transaction_date", f"lt.{end}"))
    return params


class PostgrestTransactionQuery:
    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 10,
        client: Optional[httpx.AsyncClient] = None,
        table: str = "transactions",
    ):
        self.url = f"{base_url.rstrip('/')}/{table}"
        self.api_key = api_key
        self.timeout = timeout
        self.client = client

    @property
    def headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _get_rows(self, query_name: str, params: Params) -> list:
        try:
            if self.client is not None:
                r = await self.client.get(self.url, params=params, headers=self.headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    r = await client.get(self.url, params=params, headers=self.headers)
            r.raise_for_status()
            # Los montos NUMERIC llegan como número JSON: no pasar por float
            rows = r.json(parse_float=Decimal)
        except httpx.HTTPError as exc:
            logger.warning("PostgREST falló en %s: %s", query_name, exc)
            raise QueryFailure(query_name, "El servidor de datos no respondió correctamente") from exc
        except ValueError as exc:
            logger.warning("PostgREST devolvió un cuerpo inválido en %s", query_name)
            raise QueryFailure(query_name, "Respuesta inválida del servidor de datos") from exc

        if not isinstance(rows, list):
            raise QueryFailure(query_name, "Respuesta inválida del servidor de datos")
        return rows

    async def fetch_amounts(self, criteria: TransactionFilter) -> List[Decimal]:
        rows = await self._get_rows("fetch_amounts", build_amounts_params(criteria))
        try:
            return [Decimal(str(row["amount"])) for row in rows]
        except (KeyError, TypeError, ArithmeticError) as exc:
            raise QueryFailure("fetch_amounts", "Respuesta inválida del servidor de datos") from exc

    async def latest_transaction_date(
        self,
        user_id: UUID,
        type: Optional[TransactionType] = None,
    ) -> Optional[date]:
        params: Params = [
            ("select", "transaction_date"),
            ("user_id", f"eq.{user_id}"),
        ]
        if type is not None:
            params.append(("type", f"eq.{type.value}"))
        params += [("order", "transaction_date.desc"), ("limit", "1")]

        rows = await self._get_rows("latest_transaction_date", params)
        if not rows:
            return None
        # "2025-11-10" o "2025-11-10T00:00:00"
        return date.fromisoformat(str(rows[0]["transaction_date"])[:10])
