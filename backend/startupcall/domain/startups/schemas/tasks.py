from __future__ import annotations

import datetime as dt
import uuid

from pydantic import BaseModel, ConfigDict, Field

from startupcall.shared.enums import TaskPriority, TaskStatus


class TaskCreate(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    description: str = Field(min_length=1)
    due_date: dt.date
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    assignee_actor_id: str | None = Field(default=None, max_length=200)


class TaskUpdate(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    description: str = Field(min_length=1)
    due_date: dt.date
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    assignee_actor_id: str | None = Field(default=None, max_length=200)


class TaskStatusPatch(BaseModel):
    status: TaskStatus


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    startup_id: uuid.UUID
    title: str
    description: str
    due_date: dt.date | None
    status: TaskStatus
    priority: TaskPriority
    assignee_actor_id: str | None
    created_at: dt.datetime
    updated_at: dt.datetime
