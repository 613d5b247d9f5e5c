from __future__ import annotations

import datetime as dt
import uuid

from pydantic import BaseModel, ConfigDict, Field


class ReviewCreate(BaseModel):
    innovation_score: int = Field(ge=1, le=10)
    market_score: int = Field(ge=1, le=10)
    team_score: int = Field(ge=1, le=10)
    execution_score: int = Field(ge=1, le=10)
    feedback: str = Field(min_length=1)


class ReviewUpdate(ReviewCreate):
    pass


class ReviewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    startup_id: uuid.UUID
    reviewer_actor_id: str
    score: float
    innovation_score: int
    market_score: int
    team_score: int
    execution_score: int
    feedback: str
    created_at: dt.datetime
    updated_at: dt.datetime
