from __future__ import annotations

import datetime as dt
import uuid
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict

from startupcall.shared.enums import OpportunityStatus


class SponsorshipOpportunityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    description: str
    benefits: list[str]
    min_amount: Decimal
    max_amount: Decimal
    currency: str
    status: OpportunityStatus
    deadline: dt.datetime | None
    created_at: dt.datetime


class LatestUpdateOut(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    image_url: str | None = None
    date: dt.datetime | None = None
    type: Literal["event", "announcement"]
    category: str
    created_at: dt.datetime
