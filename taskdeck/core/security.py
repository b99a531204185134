import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from taskdeck.core.config import settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def _encode(user_id: int, email: str, minutes: int, token_type: str) -> str:
    payload = {
        "user_id": user_id,
        "email": email,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
        "type": token_type
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=ALGORITHM)


def create_access_token(user_id: int, email: str) -> str:
    # token d'accès, courte durée
    return _encode(user_id, email, settings.JWT_EXPIRE_MIN, "access")


def create_refresh_token(user_id: int, email: str) -> str:
    # token de rafraîchissement, 30 jours par défaut
    return _encode(user_id, email, settings.JWT_REFRESH_EXPIRE_MIN, "refresh")


def verify_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"Rejected token: {e}")
        return None


def decode_token(token: str) -> Optional[int]:
    """Return the user id of a valid *access* token, else None."""
    payload = verify_token(token)
    if payload is None or payload.get("type") != "access":
        return None
    return payload.get("user_id")
