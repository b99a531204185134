"""
Service de notifications.

Les transitions (task_service) ne notifient rien elles-mêmes : les routers
passent le résultat ici après coup.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from taskdeck.core.clock import utcnow
from taskdeck.core.config import settings
from taskdeck.schemas.notification import Notification
from taskdeck.schemas.task import Task
from taskdeck.services.storage_service import KeyValueStore, NotificationRepository, PreferencesRepository
from taskdeck.services.task_service import TransitionResult


def format_day(moment: datetime) -> str:
    # "Jan 4, 2024"
    return f"{moment.strftime('%b')} {moment.day}, {moment.year}"


def make_notification(message: str, type: str = "info", task_id: Optional[str] = None, now: Optional[datetime] = None) -> Notification:
    return Notification(
        id=uuid.uuid4().hex,
        message=message,
        type=type,
        read=False,
        created_at=now or utcnow(),
        task_id=task_id,
    )


def notifications_for_created(task: Task, now: Optional[datetime] = None) -> List[Notification]:
    if task.due_date is None:
        return []
    return [make_notification(f'New task "{task.text}" due on {format_day(task.due_date)}', "info", task.id, now)]


def notifications_for_toggle(result: TransitionResult, now: Optional[datetime] = None) -> List[Notification]:
    if not result.completed:
        return []

    notes = [make_notification("Great job completing your task!", "success", result.task.id, now)]
    if result.generated is not None and result.generated.due_date is not None:
        notes.append(make_notification(
            f'Next "{result.generated.text}" scheduled for {format_day(result.generated.due_date)}',
            "info",
            result.generated.id,
            now,
        ))
    return notes


def push(existing: List[Notification], new: List[Notification]) -> List[Notification]:
    """Plus récentes en tête, liste plafonnée"""
    return [*new, *existing][:settings.NOTIFICATIONS_LIMIT]


def mark_all_read(notifications: List[Notification]) -> List[Notification]:
    return [n.model_copy(update={"read": True}) for n in notifications]


def unread_count(notifications: List[Notification]) -> int:
    return sum(1 for n in notifications if not n.read)


def publish(store: KeyValueStore, user_id: str, new: List[Notification]) -> List[Notification]:
    """Enregistre les notifications si l'utilisateur les a activées"""
    if not new or not PreferencesRepository(store).load(user_id).notifications_enabled:
        return []

    repo = NotificationRepository(store)
    repo.save(user_id, push(repo.load(user_id), new))
    return new
