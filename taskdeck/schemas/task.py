"""Pydantic schemas for tasks.

`Task` is the single record the task engine works on. It is also the shape of
the per-user JSON document: camelCase keys, ISO-8601 dates.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional, List, Literal, Any

from taskdeck.core.clock import to_naive_utc

RECURRENCE_PATTERNS = ("daily", "weekly", "monthly", "custom")

Priority = Literal["low", "medium", "high"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _coerce_interval(value: Any) -> Optional[int]:
    # intervalle illisible -> None, le calcul de récurrence retombe sur 1
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


class TaskFields(CamelModel):
    """Optional fields shared by creation, update and the stored record."""

    due_date: Optional[datetime] = None
    due_time: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[Priority] = None

    is_recurring: Optional[bool] = None
    recurrence_pattern: Optional[str] = None
    recurrence_interval: Optional[int] = None

    is_goal: Optional[bool] = None
    goal_start_date: Optional[datetime] = None
    goal_end_date: Optional[datetime] = None

    has_timer: Optional[bool] = None
    timer_duration: Optional[int] = None
    timer_started: Optional[datetime] = None
    timer_ended: Optional[datetime] = None

    @field_validator("recurrence_interval", mode="before")
    @classmethod
    def lenient_interval(cls, value):
        return _coerce_interval(value)

    @field_validator(
        "due_date", "goal_start_date", "goal_end_date", "timer_started", "timer_ended",
        mode="after",
    )
    @classmethod
    def naive_utc(cls, value):
        return to_naive_utc(value) if value is not None else None


class Task(TaskFields):
    id: str
    text: str = Field(min_length=1)
    completed: bool = False
    created_at: datetime
    user_id: str

    @field_validator("created_at", mode="after")
    @classmethod
    def naive_created_at(cls, value):
        return to_naive_utc(value)

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("text must not be blank")
        return value


# ============ REQUESTS ============

class TaskCreate(TaskFields):
    text: str = Field(min_length=1, max_length=500)

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("text must not be blank")
        return value


class TaskUpdate(TaskFields):
    """Schema for updating an existing task. Only sent fields are applied."""

    text: Optional[str] = Field(default=None, min_length=1, max_length=500)

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("text must not be blank")
        return value


# ============ RESPONSES ============

class ToggleResponse(CamelModel):
    task: Task
    generated: Optional[Task] = None


class ClearCompletedResponse(CamelModel):
    removed: int


class GoalProgress(CamelModel):
    task: Task
    progress: int
    days_remaining: int
    status: str


class TimerStatus(CamelModel):
    task: Task
    state: str
    remaining_seconds: int
    progress: float


class TypeDistribution(CamelModel):
    regular: int = 0
    goals: int = 0
    recurring: int = 0
    timers: int = 0


class TaskStats(CamelModel):
    total_tasks: int = 0
    completed_tasks: int = 0
    overdue_tasks: int = 0
    upcoming_tasks: int = 0
    completed_this_week: int = 0
    completion_rate: float = 0.0
    distribution: TypeDistribution = Field(default_factory=TypeDistribution)


class DayCount(CamelModel):
    date: datetime
    count: int


class WeeklyStats(CamelModel):
    week_start: datetime
    week_end: datetime
    days: List[DayCount]
