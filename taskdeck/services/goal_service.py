"""Goal service"""

import math
from datetime import datetime, timedelta
from typing import Optional

from taskdeck.core.clock import utcnow
from taskdeck.schemas.task import Task, GoalProgress

ONE_DAY = timedelta(days=1)


def days_between(start: datetime, end: datetime) -> int:
    # jours complets (24h), tronqué vers zéro
    return int((end - start) / ONE_DAY)


def goal_progress(goal: Task, now: Optional[datetime] = None) -> int:
    """Elapsed share of the goal window, as an int in [0, 100]."""
    if goal.goal_start_date is None or goal.goal_end_date is None:
        return 0
    if now is None:
        now = utcnow()

    if now < goal.goal_start_date:
        return 0
    if now > goal.goal_end_date:
        return 100

    total_days = max(1, days_between(goal.goal_start_date, goal.goal_end_date))
    elapsed = days_between(goal.goal_start_date, now)
    # arrondi au demi supérieur (round() arrondit au pair)
    return min(100, math.floor(100 * elapsed / total_days + 0.5))


def days_remaining(goal: Task, now: Optional[datetime] = None) -> int:
    if goal.goal_start_date is None or goal.goal_end_date is None:
        return 0
    if now is None:
        now = utcnow()

    if now > goal.goal_end_date:
        return 0
    return max(0, days_between(now, goal.goal_end_date))


def goal_status(goal: Task, now: Optional[datetime] = None) -> str:
    if goal.goal_start_date is None or goal.goal_end_date is None:
        return "undated"
    if now is None:
        now = utcnow()

    if now < goal.goal_start_date:
        return "not_started"
    if now > goal.goal_end_date:
        return "ended"
    return "active"


def goal_summary(goal: Task, now: Optional[datetime] = None) -> GoalProgress:
    if now is None:
        now = utcnow()
    return GoalProgress(
        task=goal,
        progress=goal_progress(goal, now),
        days_remaining=days_remaining(goal, now),
        status=goal_status(goal, now),
    )
