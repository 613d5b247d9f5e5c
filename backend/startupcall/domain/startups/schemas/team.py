from __future__ import annotations

import datetime as dt
import uuid

from pydantic import BaseModel, ConfigDict, Field


class TeamMemberCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    role: str = Field(min_length=1, max_length=100)
    bio: str | None = None
    user_actor_id: str | None = Field(default=None, max_length=200)


class TeamMemberUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    role: str = Field(min_length=1, max_length=100)
    bio: str | None = None


class TeamMemberOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    startup_id: uuid.UUID
    name: str
    email: str
    role: str
    bio: str | None
    user_actor_id: str | None
    created_at: dt.datetime
