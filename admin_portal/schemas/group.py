# admin_portal/schemas/group.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class GroupCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class GroupUpdate(GroupCreate):
    pass


class GroupRead(SQLModel):
    id: uuid.UUID
    name: str
    created_at: datetime
