from __future__ import annotations

import datetime as dt
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator

from startupcall.shared.enums import FundingStage, StartupStatus


def _normalize_industries(values: list[str] | None) -> list[str] | None:
    if values is None:
        return None
    return sorted({v.strip() for v in values if v and v.strip()})


class StartupCreate(BaseModel):
    name: str = Field(min_length=2, max_length=200)
    description: str | None = None
    pitch: str | None = None
    website: str | None = Field(default=None, max_length=500)
    industries: list[str] = Field(default_factory=list)
    funding_stage: FundingStage = FundingStage.IDEA

    _industries = field_validator("industries")(_normalize_industries)


class StartupUpdate(BaseModel):
    """Full-record edit. Status is not editable here; see StartupStatusPatch."""

    name: str | None = Field(default=None, min_length=2, max_length=200)
    description: str | None = None
    pitch: str | None = None
    website: str | None = Field(default=None, max_length=500)
    industries: list[str] | None = None
    funding_stage: FundingStage | None = None

    _industries = field_validator("industries")(_normalize_industries)


class StartupStatusPatch(BaseModel):
    status: StartupStatus
    rationale: str | None = Field(default=None, max_length=2000)


class StartupOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str | None
    pitch: str | None
    website: str | None
    industries: list[str]
    funding_stage: FundingStage
    status: StartupStatus
    founder_actor_id: str
    created_at: dt.datetime
    updated_at: dt.datetime


class StatusHistoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    startup_id: uuid.UUID
    from_status: StartupStatus
    to_status: StartupStatus
    changed_by: str
    rationale: str | None
    created_at: dt.datetime
