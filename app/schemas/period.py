from pydantic import BaseModel
from typing import List

class PeriodOptionRead(BaseModel):
    value: str  # YYYY-MM
    label: str

class PeriodSelectionRead(BaseModel):
    options: List[PeriodOptionRead]
    default: str
