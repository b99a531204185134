"""Dépendances partagées par les routers"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status, Header
from sqlalchemy.orm import Session

from taskdeck.core.database import get_db
from taskdeck.core.security import decode_token
from taskdeck.models.user import User
from taskdeck.services.storage_service import SqlKeyValueStore, TaskRepository

logger = logging.getLogger(__name__)


def get_current_user(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(None)
) -> User:
    """Récupère l'utilisateur courant via JWT"""
    if not authorization:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")

    token = authorization.replace("Bearer ", "")
    user_id = decode_token(token)

    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        logger.warning(f"Token for unknown user {user_id}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    return user


def get_store(db: Session = Depends(get_db)) -> SqlKeyValueStore:
    return SqlKeyValueStore(db)


def get_task_repository(store: SqlKeyValueStore = Depends(get_store)) -> TaskRepository:
    return TaskRepository(store)


def owner_key(user: User) -> str:
    # les documents sont indexés par l'id utilisateur en texte
    return str(user.id)
