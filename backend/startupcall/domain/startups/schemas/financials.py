from __future__ import annotations

import datetime as dt
import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class SponsorshipCreate(BaseModel):
    amount: Decimal = Field(gt=0, max_digits=18, decimal_places=2)
    notes: str | None = None
    date: dt.date | None = None


class SponsorshipOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    startup_id: uuid.UUID
    sponsor_actor_id: str
    amount: Decimal
    notes: str | None
    date: dt.date
    created_at: dt.datetime


class ExpenseCreate(BaseModel):
    amount: Decimal = Field(gt=0, max_digits=18, decimal_places=2)
    category: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1)
    date: dt.date | None = None


class ExpenseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    startup_id: uuid.UUID
    amount: Decimal
    category: str
    description: str
    date: dt.date
    created_at: dt.datetime
