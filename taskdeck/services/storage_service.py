"""
Persistence des documents par utilisateur.

Chaque utilisateur possède trois documents JSON dans un stockage clé-valeur :
tasks-<userId>, preferences-<userId>, notifications-<userId>.
Le service n'accède jamais au stockage directement : l'adaptateur est injecté.
"""

import json
import logging
from typing import Dict, List, Optional, Protocol

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from taskdeck.models.stored_value import StoredValue
from taskdeck.schemas.task import Task
from taskdeck.schemas.preferences import UserPreferences
from taskdeck.schemas.notification import Notification

logger = logging.getLogger(__name__)

_task_list = TypeAdapter(List[Task])
_notification_list = TypeAdapter(List[Notification])


# ============ ADAPTERS ============

class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class SqlKeyValueStore:
    """kv_store table, one row per key"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        row = self.db.query(StoredValue).filter(StoredValue.key == key).first()
        return row.value if row else None

    def set(self, key: str, value: str) -> None:
        row = self.db.query(StoredValue).filter(StoredValue.key == key).first()
        if row is None:
            self.db.add(StoredValue(key=key, value=value))
        else:
            row.value = value
        self.db.commit()


class MemoryKeyValueStore:
    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


# ============ REPOSITORIES ============

def tasks_key(user_id: str) -> str:
    return f"tasks-{user_id}"


def preferences_key(user_id: str) -> str:
    return f"preferences-{user_id}"


def notifications_key(user_id: str) -> str:
    return f"notifications-{user_id}"


def dump_tasks(tasks: List[Task]) -> str:
    return json.dumps([t.model_dump(mode="json", by_alias=True, exclude_none=True) for t in tasks])


def parse_tasks(raw: str) -> List[Task]:
    """Parse a stored document. Raises ValidationError on bad JSON or bad records."""
    return _task_list.validate_json(raw)


class TaskRepository:

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load(self, user_id: str) -> List[Task]:
        """
        Charge la liste de tâches de l'utilisateur.

        Document absent -> liste vide.
        Document illisible ou invalide -> liste vide (on ne plante jamais au chargement).
        """
        raw = self.store.get(tasks_key(user_id))
        if raw is None:
            return []

        try:
            tasks = parse_tasks(raw)
        except ValidationError as e:
            logger.warning(f"Discarding saved tasks for user {user_id}: {e.error_count()} error(s)")
            return []

        owned = [t for t in tasks if t.user_id == user_id]
        if len(owned) != len(tasks):
            logger.warning(f"Dropped {len(tasks) - len(owned)} task(s) not owned by user {user_id}")
        return owned

    def save(self, user_id: str, tasks: List[Task]) -> None:
        self.store.set(tasks_key(user_id), dump_tasks(tasks))


class PreferencesRepository:

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load(self, user_id: str) -> UserPreferences:
        raw = self.store.get(preferences_key(user_id))
        if raw is None:
            return UserPreferences()
        try:
            return UserPreferences.model_validate_json(raw)
        except ValidationError:
            logger.warning(f"Discarding saved preferences for user {user_id}")
            return UserPreferences()

    def save(self, user_id: str, preferences: UserPreferences) -> None:
        self.store.set(preferences_key(user_id), preferences.model_dump_json(by_alias=True))


class NotificationRepository:

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load(self, user_id: str) -> List[Notification]:
        raw = self.store.get(notifications_key(user_id))
        if raw is None:
            return []
        try:
            return _notification_list.validate_json(raw)
        except ValidationError:
            logger.warning(f"Discarding saved notifications for user {user_id}")
            return []

    def save(self, user_id: str, notifications: List[Notification]) -> None:
        payload = [n.model_dump(mode="json", by_alias=True, exclude_none=True) for n in notifications]
        self.store.set(notifications_key(user_id), json.dumps(payload))
