from uuid import UUID
from decimal import Decimal
from datetime import date, datetime, timezone
from typing import Optional
from sqlmodel import SQLModel, Field

from app.models.enums import TransactionType


class Transaction(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: UUID = Field(foreign_key="user.id", index=True)
    # NUMERIC(12,2): nunca float para dinero
    amount: Decimal = Field(max_digits=12, decimal_places=2)
    type: TransactionType = Field(index=True)
    is_paid: bool = Field(default=False)
    transaction_date: date = Field(index=True)
    # Si existe, define el mes de una cuenta por pagar (fecha efectiva)
    due_date: Optional[date] = Field(default=None, index=True)
    description: Optional[str] = None
    category: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
