from sqlmodel import SQLModel, Field
from uuid import uuid4, UUID
from datetime import datetime, timezone
from typing import Optional

class User(SQLModel, table=True):
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(index=True, unique=True)
    full_name: Optional[str] = None
    hashed_password: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
