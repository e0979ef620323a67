# app/api/dashboard.py

import logging
from dataclasses import asdict
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect, status

from app.core.clock import Clock, get_clock
from app.core.config import PERIOD_EPOCH, PERIOD_LOCALE
from app.core.errors import InvalidPeriodKey, QueryFailure
from app.core.security import get_current_user, user_id_from_token
from app.models.enums import TransactionType
from app.repositories.factory import get_transaction_query
from app.repositories.transaction_query import TransactionQuery
from app.schemas.period import PeriodSelectionRead
from app.schemas.summary import FinancialSummaryRead
from app.services.aggregator import aggregate
from app.services.dashboard import DashboardSession
from app.services.periods import load_period_selection

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/resumen", response_model=FinancialSummaryRead, response_model_by_alias=True)
async def financial_summary(
    period: Optional[str] = Query(None, description="Mes YYYY-MM; por defecto el mes actual o el último disponible"),
    user_id: UUID = Depends(get_current_user),
    query: TransactionQuery = Depends(get_transaction_query),
    clock: Clock = Depends(get_clock),
):
    try:
        if period is None:
            # El dashboard acota los períodos por el último ingreso
            selection = await load_period_selection(
                query, user_id, clock=clock, epoch=PERIOD_EPOCH, type=TransactionType.income
            )
            period = selection.default
        return await aggregate(user_id, period, query)
    except InvalidPeriodKey as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except QueryFailure as exc:
        logger.error("No fue posible calcular el resumen %s: %s", period, exc)
        raise HTTPException(status_code=502, detail="Error al cargar datos, intenta nuevamente")


def _summary_event(session: DashboardSession) -> dict:
    if session.summary is not None:
        data = FinancialSummaryRead.model_validate(asdict(session.summary))
        return {"event": "summary", "data": data.model_dump(mode="json", by_alias=True)}
    notification = session.notifications[-1]
    return {
        "event": "error",
        "title": notification.title,
        "description": notification.description,
    }


@router.websocket("/ws")
async def dashboard_ws(
    websocket: WebSocket,
    token: str = Query(...),
    locale: str = Query(PERIOD_LOCALE),
    query: TransactionQuery = Depends(get_transaction_query),
    clock: Clock = Depends(get_clock),
):
    """Dashboard en vivo: el cliente envía {"period": "YYYY-MM"} y recibe el resumen.

    Si llega otra selección antes de terminar la anterior, la anterior se
    cancela y solo se publica la más reciente.
    """
    try:
        user_id = user_id_from_token(token)
    except HTTPException:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()

    async def on_change(session: DashboardSession):
        await websocket.send_json(_summary_event(session))

    session = DashboardSession(
        query, user_id, epoch=PERIOD_EPOCH, clock=clock, locale=locale, on_change=on_change
    )

    try:
        selection = await session.load_periods()
        if selection is None:
            notification = session.notifications[-1]
            await websocket.send_json(
                {"event": "error", "title": notification.title, "description": notification.description}
            )
        else:
            await websocket.send_json(
                {"event": "periods", "data": PeriodSelectionRead.model_validate(asdict(selection)).model_dump()}
            )
            session.select_period(selection.default)

        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                # Frame que no es JSON
                message = None
            period = message.get("period") if isinstance(message, dict) else None
            if not period:
                await websocket.send_json(
                    {"event": "error", "title": "Mensaje inválido", "description": "Se espera {\"period\": \"YYYY-MM\"}"}
                )
                continue
            session.select_period(period)
    except WebSocketDisconnect:
        logger.debug("Dashboard desconectado (usuario %s)", user_id)
    finally:
        session.close()
