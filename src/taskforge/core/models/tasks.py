"""Pydantic models for task payloads and response envelopes."""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive values are taken to be UTC; aware values are converted."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _due_date_in_range(value: Optional[datetime]) -> Optional[datetime]:
    try:
        return as_utc(value)
    except OverflowError:
        raise ValueError("due_date is out of range once converted to UTC") from None


DueDate = Annotated[datetime, AfterValidator(_due_date_in_range)]


# ===== Request Models =====


class TaskCreate(BaseModel):
    """Payload accepted by ``POST /api/tasks``."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: str = Field(min_length=3, max_length=200, examples=["Complete project documentation"])
    description: str = Field(
        min_length=10,
        max_length=1000,
        examples=["Write comprehensive documentation for the API endpoints"],
    )
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: DueDate = Field(examples=["2024-12-31T23:59:59Z"])


class TaskUpdate(BaseModel):
    """Payload accepted by ``PUT /api/tasks/{id}``; every field is optional."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: Optional[str] = Field(default=None, min_length=3, max_length=200)
    description: Optional[str] = Field(default=None, min_length=10, max_length=1000)
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[DueDate] = None


# ===== Response Models =====


class TaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime
    created_at: datetime
    updated_at: datetime

    @field_validator("due_date", "created_at", "updated_at", mode="after")
    @classmethod
    def _attach_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class PageMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_page: int
    from_: Optional[int] = Field(alias="from")
    last_page: int
    per_page: int
    to: Optional[int]
    total: int


class PageLinks(BaseModel):
    first: Optional[int]
    last: int
    prev: Optional[int]
    next: Optional[int]


class TaskPage(BaseModel):
    """Envelope returned by the list endpoint."""

    success: bool = True
    data: List[TaskRead]
    meta: PageMeta
    links: PageLinks


class TaskEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: TaskRead


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str
