# app/schemas/summary.py

from decimal import Decimal
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class FinancialSummaryRead(BaseModel):
    # El frontend consume las claves en camelCase (totalIncome, preBalanceAmount...)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    period: str
    total_income: Decimal
    total_expenses: Decimal
    balance: Decimal
    pre_income_amount: Decimal
    upcoming_bills_amount: Decimal
    upcoming_bills_count: int
    pre_balance_amount: Decimal
