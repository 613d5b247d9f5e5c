from __future__ import annotations

import datetime as dt
import uuid

from pydantic import BaseModel, ConfigDict, Field

from startupcall.core.config import settings


class DocumentCreate(BaseModel):
    name: str = Field(min_length=1, max_length=300)
    description: str | None = None
    content_type: str = Field(default="application/octet-stream", max_length=200)
    size_bytes: int = Field(default=0, ge=0, le=settings.max_document_bytes)
    url: str = Field(min_length=1, max_length=1000)


class DocumentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    startup_id: uuid.UUID
    name: str
    description: str | None
    content_type: str
    size_bytes: int
    url: str
    uploaded_by: str
    created_at: dt.datetime
