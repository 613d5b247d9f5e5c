from __future__ import annotations

import datetime as dt
import uuid

from pydantic import BaseModel, ConfigDict, Field

from startupcall.shared.enums import MilestoneStatus


class MilestoneCreate(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    description: str = Field(min_length=1)
    due_date: dt.date
    status: MilestoneStatus = MilestoneStatus.PENDING


class MilestoneUpdate(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    description: str = Field(min_length=1)
    due_date: dt.date
    status: MilestoneStatus | None = None


class MilestoneStatusPatch(BaseModel):
    status: MilestoneStatus


class MilestoneOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    startup_id: uuid.UUID
    title: str
    description: str
    due_date: dt.date
    status: MilestoneStatus
    created_at: dt.datetime
    updated_at: dt.datetime
