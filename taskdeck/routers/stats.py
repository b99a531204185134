from fastapi import APIRouter, Depends, Query
from datetime import datetime
from typing import Optional

from taskdeck.core.clock import to_naive_utc
from taskdeck.models.user import User
from taskdeck.routers.deps import get_current_user, get_task_repository, owner_key
from taskdeck.schemas.task import TaskStats, WeeklyStats
from taskdeck.services.stats_service import compute_stats, weekly_stats
from taskdeck.services.storage_service import TaskRepository

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=TaskStats)
def get_stats(
    repo: TaskRepository = Depends(get_task_repository),
    current_user: User = Depends(get_current_user)
):
    return compute_stats(repo.load(owner_key(current_user)))


@router.get("/weekly", response_model=WeeklyStats)
def get_weekly(
    week_start: Optional[datetime] = Query(None),
    repo: TaskRepository = Depends(get_task_repository),
    current_user: User = Depends(get_current_user)
):
    """Complétions par jour pour la semaine qui contient `week_start` (par défaut : cette semaine)"""
    reference = to_naive_utc(week_start) if week_start else None
    return weekly_stats(repo.load(owner_key(current_user)), reference)
