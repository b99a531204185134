from fastapi import APIRouter, Depends

from taskdeck.models.user import User
from taskdeck.routers.deps import get_current_user, get_store, owner_key
from taskdeck.schemas.notification import NotificationList
from taskdeck.services.notification_service import mark_all_read, unread_count
from taskdeck.services.storage_service import SqlKeyValueStore, NotificationRepository

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationList)
def list_notifications(
    store: SqlKeyValueStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    notifications = NotificationRepository(store).load(owner_key(current_user))
    return NotificationList(unread=unread_count(notifications), notifications=notifications)


@router.post("/read-all", response_model=NotificationList)
def read_all(
    store: SqlKeyValueStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    user_id = owner_key(current_user)
    repo = NotificationRepository(store)

    notifications = mark_all_read(repo.load(user_id))
    repo.save(user_id, notifications)
    return NotificationList(unread=0, notifications=notifications)
