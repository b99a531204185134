from datetime import timedelta

from taskdeck.core.clock import utcnow

from conftest import signup_and_login


def _iso(moment):
    return moment.replace(microsecond=0).isoformat()


# ========== CREATE ==========
def test_create_task_success(client, auth_headers):
    response = client.post("/tasks", headers=auth_headers, json={"text": "Ma première tâche", "priority": "high"})
    assert response.status_code == 201
    data = response.json()
    assert data["text"] == "Ma première tâche"
    assert data["priority"] == "high"
    assert data["completed"] is False
    assert data["id"]
    assert "createdAt" in data

def test_create_task_rejects_empty_text(client, auth_headers):
    response = client.post("/tasks", headers=auth_headers, json={"text": ""})
    assert response.status_code == 422

def test_create_recurring_task(client, auth_headers):
    response = client.post("/tasks", headers=auth_headers, json={
        "text": "Sport",
        "dueDate": "2024-01-01T07:00:00",
        "isRecurring": True,
        "recurrencePattern": "daily",
        "recurrenceInterval": 3
    })
    assert response.status_code == 201
    data = response.json()
    assert data["isRecurring"] is True
    assert data["recurrenceInterval"] == 3

# ========== LIST ==========
def test_list_tasks_empty(client, auth_headers):
    response = client.get("/tasks", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == []

def test_list_tasks_sorted(client, auth_headers):
    now = utcnow()
    client.post("/tasks", headers=auth_headers, json={"text": "Undated"})
    client.post("/tasks", headers=auth_headers, json={"text": "Later", "dueDate": _iso(now + timedelta(days=3))})
    client.post("/tasks", headers=auth_headers, json={"text": "Sooner", "dueDate": _iso(now + timedelta(days=1))})

    data = client.get("/tasks", headers=auth_headers).json()
    assert [t["text"] for t in data] == ["Sooner", "Later", "Undated"]

def test_list_overdue_view(client, auth_headers):
    past = _iso(utcnow() - timedelta(days=2))
    late = client.post("/tasks", headers=auth_headers, json={"text": "Late", "dueDate": past}).json()
    done = client.post("/tasks", headers=auth_headers, json={"text": "Done", "dueDate": past}).json()
    client.post(f"/tasks/{done['id']}/toggle", headers=auth_headers)

    data = client.get("/tasks?view=overdue&include_completed=true", headers=auth_headers).json()
    assert [t["id"] for t in data] == [late["id"]]

def test_list_uses_preferences(client, auth_headers):
    a = client.post("/tasks", headers=auth_headers, json={"text": "Open"}).json()
    b = client.post("/tasks", headers=auth_headers, json={"text": "Closed"}).json()
    client.post(f"/tasks/{b['id']}/toggle", headers=auth_headers)

    client.put("/preferences", headers=auth_headers, json={"showCompletedTasks": False})
    data = client.get("/tasks", headers=auth_headers).json()
    assert [t["id"] for t in data] == [a["id"]]

    # le paramètre explicite l'emporte
    data = client.get("/tasks?include_completed=true", headers=auth_headers).json()
    assert len(data) == 2

def test_tasks_are_per_user(client, auth_headers):
    client.post("/tasks", headers=auth_headers, json={"text": "Mine"})
    other = signup_and_login(client, email="other@example.com")
    data = client.get("/tasks", headers={"Authorization": f"Bearer {other}"}).json()
    assert data == []

# ========== GET / UPDATE / DELETE ==========
def test_get_task_not_found(client, auth_headers):
    assert client.get("/tasks/unknown", headers=auth_headers).status_code == 404

def test_update_task(client, auth_headers):
    task = client.post("/tasks", headers=auth_headers, json={"text": "Old"}).json()
    response = client.put(f"/tasks/{task['id']}", headers=auth_headers, json={"text": "New", "category": "work"})
    assert response.status_code == 200
    data = response.json()
    assert data["text"] == "New"
    assert data["category"] == "work"
    assert data["id"] == task["id"]
    assert client.get(f"/tasks/{task['id']}", headers=auth_headers).json()["text"] == "New"

def test_delete_task(client, auth_headers):
    task = client.post("/tasks", headers=auth_headers, json={"text": "Bye"}).json()
    assert client.delete(f"/tasks/{task['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"/tasks/{task['id']}", headers=auth_headers).status_code == 404
    assert client.delete(f"/tasks/{task['id']}", headers=auth_headers).status_code == 404

def test_clear_completed(client, auth_headers):
    a = client.post("/tasks", headers=auth_headers, json={"text": "A"}).json()
    client.post("/tasks", headers=auth_headers, json={"text": "B"})
    client.post(f"/tasks/{a['id']}/toggle", headers=auth_headers)

    response = client.delete("/tasks/completed", headers=auth_headers)
    assert response.json()["removed"] == 1
    assert len(client.get("/tasks", headers=auth_headers).json()) == 1

# ========== TOGGLE ==========
def test_toggle_recurring_generates_next(client, auth_headers):
    task = client.post("/tasks", headers=auth_headers, json={
        "text": "Sport",
        "dueDate": "2024-01-01T00:00:00",
        "isRecurring": True,
        "recurrencePattern": "daily",
        "recurrenceInterval": 3
    }).json()

    data = client.post(f"/tasks/{task['id']}/toggle", headers=auth_headers).json()
    assert data["task"]["completed"] is True
    assert data["generated"]["dueDate"] == "2024-01-04T00:00:00"
    assert data["generated"]["completed"] is False

    # décocher puis recocher : une seule occurrence de plus
    assert client.post(f"/tasks/{task['id']}/toggle", headers=auth_headers).json()["generated"] is None
    assert client.post(f"/tasks/{task['id']}/toggle", headers=auth_headers).json()["generated"] is not None
    assert len(client.get("/tasks", headers=auth_headers).json()) == 3

def test_toggle_not_found(client, auth_headers):
    assert client.post("/tasks/nope/toggle", headers=auth_headers).status_code == 404

def test_toggle_recurring_with_huge_interval(client, auth_headers):
    task = client.post("/tasks", headers=auth_headers, json={
        "text": "Bilan",
        "dueDate": "2024-01-01T00:00:00",
        "isRecurring": True,
        "recurrencePattern": "monthly",
        "recurrenceInterval": 200000
    }).json()

    response = client.post(f"/tasks/{task['id']}/toggle", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["task"]["completed"] is True
    assert data["generated"] is None
    assert len(client.get("/tasks", headers=auth_headers).json()) == 1
