from datetime import date
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select
from sqlalchemy import func

from app.core.clock import Clock, get_clock
from app.core.errors import InvalidPeriodKey
from app.core.security import get_current_user
from app.database import get_session
from app.models.enums import TransactionType
from app.models.transaction import Transaction
from app.schemas.transaction import TransactionCreate, TransactionPage, TransactionRead, TransactionUpdate
from app.services.periods import Period

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _get_owned_transaction(session: Session, transaction_id: int, user_id: UUID) -> Transaction:
    tx = session.exec(
        select(Transaction).where(
            Transaction.id == transaction_id,
            Transaction.user_id == user_id
        )
    ).first()
    if not tx:
        raise HTTPException(status_code=404, detail="Transacción no encontrada")
    return tx


def _check_due_date(transaction_date: date, due_date: Optional[date]):
    if due_date is not None and due_date < transaction_date:
        raise HTTPException(status_code=400, detail="La fecha de vencimiento no puede ser anterior a la fecha de la transacción.")


@router.post("", response_model=TransactionRead)
@router.post("/", response_model=TransactionRead)
def create_transaction(
    transaction_data: TransactionCreate,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    data = transaction_data.model_dump()
    if data.get("transaction_date") is None:
        data["transaction_date"] = clock.today()
    if data.get("description"):
        data["description"] = data["description"].strip()
    _check_due_date(data["transaction_date"], data.get("due_date"))

    transaction = Transaction(**data, user_id=user_id)
    session.add(transaction)
    session.commit()
    session.refresh(transaction)
    return transaction


@router.get("", response_model=TransactionPage)
@router.get("/", response_model=TransactionPage)
def list_transactions(
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
    type: Optional[TransactionType] = Query(None),
    period: Optional[str] = Query(None, description="Mes YYYY-MM"),
    is_paid: Optional[bool] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
):
    query = select(Transaction).where(Transaction.user_id == user_id)

    if type is not None:
        query = query.where(Transaction.type == type)
    if is_paid is not None:
        query = query.where(Transaction.is_paid == is_paid)
    if period:
        try:
            selected = Period.parse(period)
        except InvalidPeriodKey as exc:
            raise HTTPException(status_code=422, detail=str(exc))
        query = (
            query
            .where(Transaction.transaction_date >= selected.start)
            .where(Transaction.transaction_date < selected.end)
        )

    total = session.exec(select(func.count()).select_from(query.subquery())).one()

    transactions = session.exec(
        query.order_by(Transaction.transaction_date.desc(), Transaction.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    ).all()

    total_pages = max(1, (total + page_size - 1) // page_size)

    return {
        "items": transactions,
        "total": total,
        "page": page,
        "page_size": page_size,
        "totalPages": total_pages
    }


@router.get("/{transaction_id}", response_model=TransactionRead)
def get_transaction(
    transaction_id: int,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return _get_owned_transaction(session, transaction_id, user_id)


@router.patch("/{transaction_id}", response_model=TransactionRead)
def update_transaction(
    transaction_id: int,
    data: TransactionUpdate,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    changes = data.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="Nada para actualizar.")

    tx = _get_owned_transaction(session, transaction_id, user_id)

    if changes.get("description"):
        changes["description"] = changes["description"].strip()
    for field, value in changes.items():
        setattr(tx, field, value)
    _check_due_date(tx.transaction_date, tx.due_date)

    session.add(tx)
    session.commit()
    session.refresh(tx)
    return tx


@router.post("/{transaction_id}/toggle-paid", response_model=TransactionRead)
def toggle_paid(
    transaction_id: int,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    tx = _get_owned_transaction(session, transaction_id, user_id)
    tx.is_paid = not tx.is_paid
    session.add(tx)
    session.commit()
    session.refresh(tx)
    return tx


@router.delete("/{transaction_id}")
def delete_transaction(
    transaction_id: int,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    transaction = _get_owned_transaction(session, transaction_id, user_id)
    session.delete(transaction)
    session.commit()
    return {"message": "Transacción eliminada correctamente"}
