from fastapi import APIRouter, Depends

from taskdeck.models.user import User
from taskdeck.routers.deps import get_current_user, get_store, owner_key
from taskdeck.schemas.preferences import UserPreferences, PreferencesUpdate
from taskdeck.services.storage_service import SqlKeyValueStore, PreferencesRepository

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("", response_model=UserPreferences)
def get_preferences(
    store: SqlKeyValueStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    return PreferencesRepository(store).load(owner_key(current_user))


@router.put("", response_model=UserPreferences)
def update_preferences(
    update: PreferencesUpdate,
    store: SqlKeyValueStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    user_id = owner_key(current_user)
    repo = PreferencesRepository(store)

    changes = update.model_dump(exclude_none=True)
    preferences = repo.load(user_id).model_copy(update=changes)
    repo.save(user_id, preferences)
    return preferences
