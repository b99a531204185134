from datetime import datetime

from taskdeck.core.config import settings
from taskdeck.services.notification_service import (
    format_day,
    make_notification,
    notifications_for_created,
    notifications_for_toggle,
    push,
    publish,
    unread_count
)
from taskdeck.services.storage_service import MemoryKeyValueStore, NotificationRepository
from taskdeck.services.task_service import toggle_task

NOW = datetime(2024, 1, 10, 12, 0)


def test_format_day():
    assert format_day(datetime(2024, 1, 4, 15, 0)) == "Jan 4, 2024"


def test_created_without_due_date_is_silent(make_task):
    assert notifications_for_created(make_task(), NOW) == []


def test_completing_recurring_task_announces_next(make_task):
    task = make_task(text="Gym", is_recurring=True, recurrence_pattern="weekly",
                     due_date=datetime(2024, 1, 1))
    result = toggle_task([task], task.id, NOW)
    notes = notifications_for_toggle(result, NOW)

    assert [n.type for n in notes] == ["success", "info"]
    assert notes[1].message == 'Next "Gym" scheduled for Jan 8, 2024'
    assert notes[1].task_id == result.generated.id


def test_unchecking_is_silent(make_task):
    task = make_task(completed=True)
    assert notifications_for_toggle(toggle_task([task], task.id, NOW), NOW) == []


def test_push_keeps_newest_and_caps():
    existing = [make_notification(f"old {i}", now=NOW) for i in range(settings.NOTIFICATIONS_LIMIT)]
    fresh = make_notification("fresh", now=NOW)
    result = push(existing, [fresh])

    assert len(result) == settings.NOTIFICATIONS_LIMIT
    assert result[0].message == "fresh"
    assert unread_count(result) == settings.NOTIFICATIONS_LIMIT


def test_publish_stores_notifications():
    store = MemoryKeyValueStore()
    publish(store, "u1", [make_notification("hello", now=NOW)])
    assert [n.message for n in NotificationRepository(store).load("u1")] == ["hello"]
