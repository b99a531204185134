"""Timer service - countdowns attached to tasks"""

import math
from datetime import datetime
from typing import Optional

from taskdeck.core.clock import utcnow
from taskdeck.schemas.task import Task, TimerStatus


def total_seconds(task: Task) -> int:
    if not task.timer_duration or task.timer_duration <= 0:
        return 0
    return task.timer_duration * 60


def remaining_seconds(task: Task, now: Optional[datetime] = None) -> int:
    """duration - elapsed since timerStarted, floored at 0"""
    total = total_seconds(task)
    if task.timer_ended is not None:
        return 0
    if task.timer_started is None:
        return total
    if now is None:
        now = utcnow()

    elapsed = math.floor((now - task.timer_started).total_seconds())
    return max(0, total - max(0, elapsed))


def timer_state(task: Task, now: Optional[datetime] = None) -> str:
    if task.timer_ended is not None:
        return "finished"
    if task.timer_started is None:
        return "idle"
    if remaining_seconds(task, now) == 0:
        return "finished"
    return "running"


def timer_progress(task: Task, now: Optional[datetime] = None) -> float:
    total = total_seconds(task)
    if total == 0:
        return 0.0
    return 100 - (remaining_seconds(task, now) / total) * 100


def timer_status(task: Task, now: Optional[datetime] = None) -> TimerStatus:
    if now is None:
        now = utcnow()
    return TimerStatus(
        task=task,
        state=timer_state(task, now),
        remaining_seconds=remaining_seconds(task, now),
        progress=timer_progress(task, now),
    )


def start_timer(task: Task, now: Optional[datetime] = None) -> Task:
    # un minuteur déjà démarré garde son heure de départ
    if task.timer_started is not None:
        return task
    return task.model_copy(update={"timer_started": now or utcnow(), "timer_ended": None})


def finish_timer(task: Task, now: Optional[datetime] = None) -> Task:
    if task.timer_ended is not None:
        return task
    return task.model_copy(update={"timer_ended": now or utcnow()})


def reset_timer(task: Task) -> Task:
    return task.model_copy(update={"timer_started": None, "timer_ended": None})
