import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Créer engine SQLite pour tests AVANT d'importer l'app
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"
test_engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# PATCH: remplacer le engine et SessionLocal du core.database AVANT d'importer l'app
import taskdeck.core.database
taskdeck.core.database.engine = test_engine
taskdeck.core.database.SessionLocal = TestingSessionLocal

# Maintenant importer l'app (qui utilisera notre engine SQLite)
from taskdeck.core.database import Base, get_db
from taskdeck.main import app
from taskdeck.schemas.task import Task

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB avant/après chaque test"""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)

# Override la dépendance
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def client():
    """Client de test FastAPI"""
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
def db():
    """Session DB pour les tests"""
    db = TestingSessionLocal()
    yield db
    db.close()


def signup_and_login(client, email="test@example.com", password="pass1234", name="Test"):
    client.post("/auth/signup", json={"name": name, "email": email, "password": password})
    response = client.post("/auth/login", json={"email": email, "password": password})
    return response.json()["access_token"]


@pytest.fixture
def auth_token(client):
    """Crée un utilisateur et retourne son token JWT"""
    return signup_and_login(client)


@pytest.fixture
def auth_headers(auth_token):
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def make_task():
    """Fabrique de tâches pour les tests des services"""
    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        data = {
            "id": f"t{counter['n']}",
            "text": f"Task {counter['n']}",
            "completed": False,
            "created_at": datetime(2024, 1, 1, 9, 0),
            "user_id": "u1",
        }
        data.update(fields)
        return Task(**data)

    return _make
