from datetime import datetime
from typing import Literal, Optional, List
from pydantic import field_validator
from taskdeck.core.clock import to_naive_utc
from taskdeck.schemas.task import CamelModel


class Notification(CamelModel):
    id: str
    message: str
    type: Literal["info", "success", "warning", "error"] = "info"
    read: bool = False
    created_at: datetime
    task_id: Optional[str] = None

    @field_validator("created_at", mode="after")
    @classmethod
    def naive_created_at(cls, value):
        return to_naive_utc(value)


class NotificationList(CamelModel):
    unread: int
    notifications: List[Notification]
