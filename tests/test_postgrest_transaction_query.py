"""Adaptador PostgREST con transporte httpx simulado."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import httpx
import pytest

from app.core.errors import QueryFailure
from app.models.enums import TransactionType
from app.repositories.postgrest_transaction_query import (
    PostgrestTransactionQuery,
    build_amounts_params,
)
from app.repositories.transaction_query import TransactionFilter
from app.services.aggregator import aggregate

USER_ID = uuid4()
BASE_URL = "https://demo.supabase.co/rest/v1"


def make_query(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return PostgrestTransactionQuery(BASE_URL, api_key="anon-key", client=client)


def test_plain_range_params():
    criteria = TransactionFilter(USER_ID, TransactionType.income, True, date(2025, 3, 1), date(2025, 4, 1))

    params = build_amounts_params(criteria)

    assert ("user_id", f"eq.{USER_ID}") in params
    assert ("type", "eq.income") in params
    assert ("is_paid", "eq.true") in params
    assert ("transaction_date", "gte.2025-03-01") in params
    assert ("transaction_date", "lt.2025-04-01") in params


def test_effective_date_params_use_or_group():
    criteria = TransactionFilter(
        USER_ID, TransactionType.expense, False, date(2025, 3, 1), date(2025, 4, 1), by_effective_date=True
    )

    params = dict(build_amounts_params(criteria))

    assert params["is_paid"] == "eq.false"
    assert params["or"] == (
        "(and(due_date.gte.2025-03-01,due_date.lt.2025-04-01),"
        "and(due_date.is.null,transaction_date.gte.2025-03-01,transaction_date.lt.2025-04-01))"
    )
    assert "transaction_date" not in params


@pytest.mark.asyncio
async def test_fetch_amounts_parses_decimals_without_float():
    seen = {}

    def handler(request):
        seen["url"] = request.url
        seen["apikey"] = request.headers.get("apikey")
        return httpx.Response(200, text='[{"amount": 0.1}, {"amount": 0.2}, {"amount": "19.99"}, {"amount": 5}]')

    query = make_query(handler)
    amounts = await query.fetch_amounts(
        TransactionFilter(USER_ID, TransactionType.income, True, date(2025, 3, 1), date(2025, 4, 1))
    )

    assert amounts == [Decimal("0.1"), Decimal("0.2"), Decimal("19.99"), Decimal("5")]
    assert sum(amounts) == Decimal("25.29")
    assert seen["url"].path == "/rest/v1/transactions"
    assert seen["apikey"] == "anon-key"


@pytest.mark.asyncio
async def test_latest_transaction_date():
    def handler(request):
        assert request.url.params["order"] == "transaction_date.desc"
        assert request.url.params["limit"] == "1"
        assert request.url.params["type"] == "eq.expense"
        return httpx.Response(200, json=[{"transaction_date": "2025-11-10"}])

    query = make_query(handler)

    assert await query.latest_transaction_date(USER_ID, TransactionType.expense) == date(2025, 11, 10)


@pytest.mark.asyncio
async def test_latest_transaction_date_empty():
    query = make_query(lambda request: httpx.Response(200, json=[]))
    assert await query.latest_transaction_date(USER_ID) is None


@pytest.mark.asyncio
async def test_http_error_becomes_query_failure():
    query = make_query(lambda request: httpx.Response(503, json={"message": "unavailable"}))

    with pytest.raises(QueryFailure):
        await query.latest_transaction_date(USER_ID)


@pytest.mark.asyncio
async def test_bills_failure_aborts_aggregation():
    def handler(request):
        if "or" in request.url.params:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json=[{"amount": 10}])

    with pytest.raises(QueryFailure) as excinfo:
        await aggregate(USER_ID, "2025-03", make_query(handler))

    assert excinfo.value.query == "upcoming_bills"


@pytest.mark.asyncio
async def test_aggregate_over_postgrest():
    def handler(request):
        params = request.url.params
        if "or" in params:
            return httpx.Response(200, json=[{"amount": 40.5}, {"amount": 9.5}])
        if params["type"] == "eq.income" and params["is_paid"] == "eq.true":
            return httpx.Response(200, json=[{"amount": 1000}])
        if params["type"] == "eq.income":
            return httpx.Response(200, json=[{"amount": 300}])
        return httpx.Response(200, json=[{"amount": 250.25}])

    summary = await aggregate(USER_ID, "2025-03", make_query(handler))

    assert summary.total_income == Decimal("1000")
    assert summary.total_expenses == Decimal("250.25")
    assert summary.balance == Decimal("749.75")
    assert summary.upcoming_bills_amount == Decimal("50.0")
    assert summary.upcoming_bills_count == 2
    assert summary.pre_balance_amount == Decimal("250.0")
