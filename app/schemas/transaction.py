from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import date
from app.models.enums import TransactionType

class TransactionCreate(BaseModel):
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    type: TransactionType
    is_paid: bool = False
    transaction_date: Optional[date] = None
    due_date: Optional[date] = None
    description: Optional[str] = None
    category: Optional[str] = None

class TransactionUpdate(BaseModel):
    amount: Optional[Decimal] = Field(default=None, gt=0, max_digits=12, decimal_places=2)
    is_paid: Optional[bool] = None
    transaction_date: Optional[date] = None
    due_date: Optional[date] = None
    description: Optional[str] = None
    category: Optional[str] = None

    # Columnas NOT NULL: se pueden omitir, pero no enviar como null
    @field_validator("amount", "is_paid", "transaction_date")
    @classmethod
    def reject_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} no puede ser null")
        return value

class TransactionRead(BaseModel):
    id: int
    amount: Decimal
    type: TransactionType
    is_paid: bool
    transaction_date: date
    due_date: Optional[date] = None
    description: Optional[str] = None
    category: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class TransactionPage(BaseModel):
    items: List[TransactionRead]
    total: int
    page: int
    page_size: int
    totalPages: int
