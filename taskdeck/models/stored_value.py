"""Key-value table backing the per-user documents (tasks, preferences, notifications)"""

from sqlalchemy import Column, String, Text, DateTime
from taskdeck.core.clock import utcnow
from taskdeck.core.database import Base

class StoredValue(Base):
    __tablename__ = "kv_store"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
