from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Optional

from taskdeck.models.user import User
from taskdeck.routers.deps import get_current_user, get_store, owner_key
from taskdeck.schemas.task import Task, TaskCreate, TaskUpdate, ToggleResponse, ClearCompletedResponse
from taskdeck.services.storage_service import SqlKeyValueStore, TaskRepository, PreferencesRepository
from taskdeck.services.notification_service import publish, notifications_for_created, notifications_for_toggle
from taskdeck.services.task_service import (
    filter_tasks,
    sort_tasks,
    find_task,
    create_task,
    toggle_task,
    update_task,
    delete_task,
    clear_completed
)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=List[Task])
def list_tasks(
    view: Optional[str] = Query(None),
    include_completed: Optional[bool] = Query(None),
    store: SqlKeyValueStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    """
    Liste triée des tâches pour une vue.

    Sans paramètres, la vue et l'affichage des tâches terminées viennent des préférences.
    """
    user_id = owner_key(current_user)
    if view is None or include_completed is None:
        prefs = PreferencesRepository(store).load(user_id)
        view = view if view is not None else prefs.default_view
        include_completed = include_completed if include_completed is not None else prefs.show_completed_tasks

    tasks = TaskRepository(store).load(user_id)
    return sort_tasks(filter_tasks(tasks, view, include_completed))


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
def add_task(
    task_data: TaskCreate,
    store: SqlKeyValueStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    user_id = owner_key(current_user)
    repo = TaskRepository(store)

    fields = task_data.model_dump(exclude_none=True, exclude={"text"})
    tasks, new_task = create_task(repo.load(user_id), user_id, task_data.text, **fields)
    repo.save(user_id, tasks)

    publish(store, user_id, notifications_for_created(new_task))
    return new_task


@router.delete("/completed", response_model=ClearCompletedResponse)
def clear_completed_tasks(
    store: SqlKeyValueStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    user_id = owner_key(current_user)
    repo = TaskRepository(store)

    tasks, removed = clear_completed(repo.load(user_id))
    repo.save(user_id, tasks)
    return ClearCompletedResponse(removed=removed)


@router.get("/{task_id}", response_model=Task)
def get_task(
    task_id: str,
    store: SqlKeyValueStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    task = find_task(TaskRepository(store).load(owner_key(current_user)), task_id)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.put("/{task_id}", response_model=Task)
def edit_task(
    task_id: str,
    task_data: TaskUpdate,
    store: SqlKeyValueStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    user_id = owner_key(current_user)
    repo = TaskRepository(store)

    # le passage à "terminée" passe par /toggle pour déclencher la récurrence
    updates = task_data.model_dump(exclude_unset=True)
    result = update_task(repo.load(user_id), task_id, updates)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")

    tasks, task = result
    repo.save(user_id, tasks)
    return task


@router.post("/{task_id}/toggle", response_model=ToggleResponse)
def toggle(
    task_id: str,
    store: SqlKeyValueStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    user_id = owner_key(current_user)
    repo = TaskRepository(store)

    result = toggle_task(repo.load(user_id), task_id)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")

    repo.save(user_id, result.tasks)
    publish(store, user_id, notifications_for_toggle(result))
    return ToggleResponse(task=result.task, generated=result.generated)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_task(
    task_id: str,
    store: SqlKeyValueStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    user_id = owner_key(current_user)
    repo = TaskRepository(store)

    tasks = delete_task(repo.load(user_id), task_id)
    if tasks is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    repo.save(user_id, tasks)
