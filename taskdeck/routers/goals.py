from fastapi import APIRouter, Depends
from typing import List

from taskdeck.core.clock import utcnow
from taskdeck.models.user import User
from taskdeck.routers.deps import get_current_user, get_task_repository, owner_key
from taskdeck.schemas.task import GoalProgress
from taskdeck.services.goal_service import goal_summary
from taskdeck.services.storage_service import TaskRepository
from taskdeck.services.task_service import filter_tasks, sort_tasks

router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("", response_model=List[GoalProgress])
def list_goals(
    repo: TaskRepository = Depends(get_task_repository),
    current_user: User = Depends(get_current_user)
):
    """Objectifs avec leur avancement (temps écoulé) et les jours restants"""
    now = utcnow()
    goals = filter_tasks(repo.load(owner_key(current_user)), "goals", now=now)
    return [goal_summary(goal, now) for goal in sort_tasks(goals)]
