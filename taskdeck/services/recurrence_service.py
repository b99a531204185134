"""Recurrence service - next occurrence of a repeating task"""

import logging
import uuid
from datetime import datetime, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from taskdeck.core.clock import utcnow
from taskdeck.schemas.task import Task

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 1


def new_task_id() -> str:
    return uuid.uuid4().hex


def effective_interval(task: Task) -> int:
    """recurrenceInterval if it is a positive int, else 1."""
    interval = task.recurrence_interval
    if isinstance(interval, int) and not isinstance(interval, bool) and interval > 0:
        return interval
    return DEFAULT_INTERVAL


def next_due_date(task: Task) -> Optional[datetime]:
    """
    Calcule la prochaine échéance à partir de dueDate.

    daily / custom -> +N jours
    weekly         -> +N semaines
    monthly        -> +N mois (jour ramené à la fin du mois si besoin, 31 jan -> 29 fév)
    autre          -> +1 semaine

    None si la date calculée sort du calendrier (intervalle énorme, année 9999).
    """
    if task.due_date is None:
        return None

    interval = effective_interval(task)
    pattern = task.recurrence_pattern

    try:
        if pattern in ("daily", "custom"):
            return task.due_date + timedelta(days=interval)
        if pattern == "weekly":
            return task.due_date + timedelta(weeks=interval)
        if pattern == "monthly":
            return task.due_date + relativedelta(months=interval)
        return task.due_date + timedelta(weeks=1)
    except (OverflowError, ValueError):
        logger.warning(f"Task {task.id}: next due date out of range ({pattern} x{interval})")
        return None


def next_occurrence(task: Task, now: Optional[datetime] = None) -> Optional[Task]:
    """
    Build the task that follows `task` in its series.

    Returns None when the task does not recur, has no due date to anchor on,
    or when the next due date cannot be represented.
    Every other field (recurrence, goal, timer) is copied as is.
    """
    if task.is_recurring is not True or task.due_date is None:
        return None

    due = next_due_date(task)
    if due is None:
        return None

    if now is None:
        now = utcnow()

    occurrence = task.model_copy(update={
        "id": new_task_id(),
        "completed": False,
        "created_at": now,
        "due_date": due,
    })
    logger.info(f"Recurring task {task.id} -> next occurrence {occurrence.id} due {due.isoformat()}")
    return occurrence
