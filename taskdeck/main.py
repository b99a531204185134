import logging

from fastapi import FastAPI
from taskdeck.core.config import settings
from taskdeck.core.database import engine, Base
from taskdeck.models import user, stored_value  # noqa: F401  tables
from taskdeck.routers import health, auth, tasks, goals, timers, stats, preferences, notifications

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

# Init DB
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Taskdeck API",
    version="0.1.0"
)

# Routes
app.include_router(health.router, prefix="/health")
app.include_router(auth.router)
app.include_router(tasks.router)
app.include_router(goals.router)
app.include_router(timers.router)
app.include_router(stats.router)
app.include_router(preferences.router)
app.include_router(notifications.router)
