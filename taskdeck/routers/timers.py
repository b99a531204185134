from fastapi import APIRouter, Depends, HTTPException, status
from typing import Callable, List

from taskdeck.core.clock import utcnow
from taskdeck.models.user import User
from taskdeck.routers.deps import get_current_user, get_task_repository, owner_key
from taskdeck.schemas.task import Task, TimerStatus
from taskdeck.services.storage_service import TaskRepository
from taskdeck.services.task_service import filter_tasks, find_task
from taskdeck.services.timer_service import timer_status, start_timer, finish_timer, reset_timer

router = APIRouter(prefix="/timers", tags=["timers"])


def _apply(repo: TaskRepository, user: User, task_id: str, change: Callable[[Task], Task]) -> TimerStatus:
    user_id = owner_key(user)
    tasks = repo.load(user_id)

    task = find_task(tasks, task_id)
    if not task or not task.has_timer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Timer not found")

    updated = change(task)
    repo.save(user_id, [updated if t.id == task_id else t for t in tasks])
    return timer_status(updated)


@router.get("", response_model=List[TimerStatus])
def list_timers(
    repo: TaskRepository = Depends(get_task_repository),
    current_user: User = Depends(get_current_user)
):
    now = utcnow()
    timers = filter_tasks(repo.load(owner_key(current_user)), "timers", now=now)
    return [timer_status(task, now) for task in timers]


@router.post("/{task_id}/start", response_model=TimerStatus)
def start(
    task_id: str,
    repo: TaskRepository = Depends(get_task_repository),
    current_user: User = Depends(get_current_user)
):
    return _apply(repo, current_user, task_id, start_timer)


@router.post("/{task_id}/finish", response_model=TimerStatus)
def finish(
    task_id: str,
    repo: TaskRepository = Depends(get_task_repository),
    current_user: User = Depends(get_current_user)
):
    return _apply(repo, current_user, task_id, finish_timer)


@router.post("/{task_id}/reset", response_model=TimerStatus)
def reset(
    task_id: str,
    repo: TaskRepository = Depends(get_task_repository),
    current_user: User = Depends(get_current_user)
):
    return _apply(repo, current_user, task_id, reset_timer)
