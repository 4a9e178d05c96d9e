# admin_portal/schemas/transaction.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class TransactionCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(max_length=255)

    @field_validator("title")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty")
        return v


class TransactionUpdate(TransactionCreate):
    """Only the title is editable; owner and group are fixed at creation."""


class TransactionRead(SQLModel):
    id: uuid.UUID
    title: str
    user_id: uuid.UUID
    group_id: uuid.UUID | None
    created_at: datetime
