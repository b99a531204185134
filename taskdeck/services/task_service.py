"""Task service"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from taskdeck.core.clock import utcnow
from taskdeck.core.config import settings
from taskdeck.schemas.task import Task
from taskdeck.services.recurrence_service import new_task_id, next_occurrence

EPOCH = datetime(1970, 1, 1)

VIEWS = ("all", "today", "week", "upcoming", "overdue", "goals", "recurring", "timers")


# ============ DATES ============

def day_start(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), datetime.min.time())


def week_bounds(now: datetime, week_starts_on: Optional[int] = None) -> Tuple[datetime, datetime]:
    """(premier instant, dernier instant) de la semaine contenant `now`"""
    if week_starts_on is None:
        week_starts_on = settings.WEEK_STARTS_ON

    offset = (now.weekday() - week_starts_on) % 7
    start = day_start(now) - timedelta(days=offset)
    end = start + timedelta(days=7) - timedelta(microseconds=1)
    return start, end


def is_same_day(a: datetime, b: datetime) -> bool:
    return a.date() == b.date()


def is_overdue(task: Task, now: datetime) -> bool:
    return not task.completed and task.due_date is not None and task.due_date < now


def is_upcoming(task: Task, now: datetime) -> bool:
    if task.completed or task.due_date is None:
        return False
    horizon = now + timedelta(days=settings.UPCOMING_DAYS)
    return now < task.due_date <= horizon


# ============ VIEWS ============

def get_today_tasks(tasks: List[Task], now: datetime) -> List[Task]:
    return [t for t in tasks if t.due_date is not None and is_same_day(t.due_date, now)]


def get_this_week_tasks(tasks: List[Task], now: datetime) -> List[Task]:
    start, end = week_bounds(now)
    return [t for t in tasks if t.due_date is not None and start <= t.due_date <= end]


def get_upcoming_tasks(tasks: List[Task], now: datetime) -> List[Task]:
    return [t for t in tasks if is_upcoming(t, now)]


def get_overdue_tasks(tasks: List[Task], now: datetime) -> List[Task]:
    return [t for t in tasks if is_overdue(t, now)]


def filter_tasks(
    tasks: List[Task],
    view: str = "all",
    include_completed: bool = True,
    now: Optional[datetime] = None
) -> List[Task]:
    """
    Filtre la liste selon la vue demandée.

    Une vue inconnue se comporte comme "all". Une liste vide est un résultat valide.
    """
    if now is None:
        now = utcnow()

    if not include_completed:
        tasks = [t for t in tasks if not t.completed]

    if view == "today":
        return get_today_tasks(tasks, now)
    if view == "week":
        return get_this_week_tasks(tasks, now)
    if view == "upcoming":
        return get_upcoming_tasks(tasks, now)
    if view == "overdue":
        return get_overdue_tasks(tasks, now)
    if view == "goals":
        return [t for t in tasks if t.is_goal is True]
    if view == "recurring":
        return [t for t in tasks if t.is_recurring is True]
    if view == "timers":
        return [t for t in tasks if t.has_timer is True]
    return list(tasks)


def _sort_key(task: Task):
    # incomplètes d'abord, puis datées (échéance croissante), puis non datées (plus récentes d'abord)
    if task.due_date is not None:
        return (task.completed, 0, task.due_date - EPOCH)
    return (task.completed, 1, EPOCH - task.created_at)


def sort_tasks(tasks: List[Task]) -> List[Task]:
    return sorted(tasks, key=_sort_key)


# ============ TRANSITIONS ============

@dataclass
class TransitionResult:
    """Outcome of a completion toggle: the new list plus what changed."""

    tasks: List[Task]
    task: Task
    completed: bool
    generated: Optional[Task] = None


def find_task(tasks: List[Task], task_id: str) -> Optional[Task]:
    return next((t for t in tasks if t.id == task_id), None)


def create_task(
    tasks: List[Task],
    user_id: str,
    text: str,
    now: Optional[datetime] = None,
    **fields
) -> Tuple[List[Task], Task]:
    if now is None:
        now = utcnow()

    new_task = Task(
        id=new_task_id(),
        text=text,
        completed=False,
        created_at=now,
        user_id=user_id,
        **fields
    )
    return [*tasks, new_task], new_task


def toggle_task(tasks: List[Task], task_id: str, now: Optional[datetime] = None) -> Optional[TransitionResult]:
    """
    Flip the completed flag of one task.

    Only the incomplete -> completed transition of a recurring task generates
    the next occurrence. Unchecking never does.
    """
    current = find_task(tasks, task_id)
    if current is None:
        return None

    toggled = current.model_copy(update={"completed": not current.completed})
    generated = None
    if not current.completed:
        generated = next_occurrence(current, now)

    updated = [toggled if t.id == task_id else t for t in tasks]
    if generated is not None:
        updated.append(generated)

    return TransitionResult(tasks=updated, task=toggled, completed=toggled.completed, generated=generated)


def update_task(tasks: List[Task], task_id: str, updates: dict) -> Optional[Tuple[List[Task], Task]]:
    current = find_task(tasks, task_id)
    if current is None:
        return None

    # on ne touche jamais à l'identité de la tâche
    updates = {k: v for k, v in updates.items() if k not in ("id", "user_id", "created_at")}
    if updates.get("text") is None:
        updates.pop("text", None)
    updated_task = Task.model_validate({**current.model_dump(), **updates})
    return [updated_task if t.id == task_id else t for t in tasks], updated_task


def delete_task(tasks: List[Task], task_id: str) -> Optional[List[Task]]:
    if find_task(tasks, task_id) is None:
        return None
    return [t for t in tasks if t.id != task_id]


def clear_completed(tasks: List[Task]) -> Tuple[List[Task], int]:
    remaining = [t for t in tasks if not t.completed]
    return remaining, len(tasks) - len(remaining)
