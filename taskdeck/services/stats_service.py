"""
Service de statistiques - compteurs du dashboard et histogramme hebdo
"""

from datetime import datetime, timedelta
from typing import List, Optional

from taskdeck.core.clock import utcnow
from taskdeck.schemas.task import Task, TaskStats, TypeDistribution, DayCount, WeeklyStats
from taskdeck.services.task_service import is_overdue, is_upcoming, week_bounds, day_start, is_same_day


def type_distribution(tasks: List[Task]) -> TypeDistribution:
    """
    Quatre compteurs indépendants, pas une partition :
    une tâche objectif + minuteur compte dans goals ET timers.
    """
    return TypeDistribution(
        regular=sum(1 for t in tasks if not t.is_goal and not t.is_recurring and not t.has_timer),
        goals=sum(1 for t in tasks if t.is_goal),
        recurring=sum(1 for t in tasks if t.is_recurring),
        timers=sum(1 for t in tasks if t.has_timer),
    )


def completion_rate(completed: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return 100 * completed / total


def compute_stats(tasks: List[Task], now: Optional[datetime] = None) -> TaskStats:
    if now is None:
        now = utcnow()

    week_start, week_end = week_bounds(now)
    total = len(tasks)
    completed = sum(1 for t in tasks if t.completed)

    # createdAt sert de date de complétion, aucune autre date n'est stockée
    completed_this_week = sum(
        1 for t in tasks if t.completed and week_start <= t.created_at <= week_end
    )

    return TaskStats(
        total_tasks=total,
        completed_tasks=completed,
        overdue_tasks=sum(1 for t in tasks if is_overdue(t, now)),
        upcoming_tasks=sum(1 for t in tasks if is_upcoming(t, now)),
        completed_this_week=completed_this_week,
        completion_rate=completion_rate(completed, total),
        distribution=type_distribution(tasks),
    )


def weekly_completions(tasks: List[Task], week_start: datetime) -> List[DayCount]:
    start = day_start(week_start)
    days = [start + timedelta(days=i) for i in range(7)]
    return [
        DayCount(date=day, count=sum(1 for t in tasks if t.completed and is_same_day(t.created_at, day)))
        for day in days
    ]


def weekly_stats(tasks: List[Task], reference: Optional[datetime] = None) -> WeeklyStats:
    """Histogram for the week containing `reference` (default: this week)."""
    if reference is None:
        reference = utcnow()
    start, end = week_bounds(reference)
    return WeeklyStats(week_start=start, week_end=end, days=weekly_completions(tasks, start))
