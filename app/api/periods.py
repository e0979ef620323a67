from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query

from app.core.clock import Clock, get_clock
from app.core.config import PERIOD_EPOCH, PERIOD_LOCALE
from app.core.errors import QueryFailure
from app.core.security import get_current_user
from app.models.enums import TransactionType
from app.repositories.factory import get_transaction_query
from app.repositories.transaction_query import TransactionQuery
from app.schemas.period import PeriodSelectionRead
from app.services.periods import load_period_selection

router = APIRouter(prefix="/periods", tags=["periods"])


@router.get("", response_model=PeriodSelectionRead)
@router.get("/", response_model=PeriodSelectionRead)
async def list_periods(
    type: Optional[TransactionType] = Query(None, description="Limita la última fecha a ingresos o egresos"),
    locale: str = Query(PERIOD_LOCALE),
    user_id: UUID = Depends(get_current_user),
    query: TransactionQuery = Depends(get_transaction_query),
    clock: Clock = Depends(get_clock),
):
    try:
        selection = await load_period_selection(
            query, user_id, clock=clock, epoch=PERIOD_EPOCH, locale=locale, type=type
        )
    except QueryFailure:
        raise HTTPException(status_code=502, detail="Error al cargar períodos")
    return selection
