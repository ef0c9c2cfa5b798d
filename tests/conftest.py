import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from exam_bank.core.database import build_engine, get_db
from exam_bank.main import app
from exam_bank.models.orm import Base


@pytest.fixture()
def engine():
    eng = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, future=True)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def question_payload(title="Quanto é 2 + 2?", subject="Matemática", topics=None, alternatives=None):
    if alternatives is None:
        alternatives = [
            {"description": "4", "correct": True},
            {"description": "5", "correct": False},
        ]
    return {
        "title": title,
        "subject": subject,
        "topics": ["Álgebra"] if topics is None else topics,
        "alternatives": alternatives,
    }


@pytest.fixture()
def create_question(client):
    def _create(**kwargs) -> int:
        r = client.post("/questions", json=question_payload(**kwargs))
        assert r.status_code == 201, r.text
        return r.json()["id"]
    return _create


@pytest.fixture()
def create_exam(client):
    def _create(question_ids, title="Prova de Matemática", subject="Matemática") -> int:
        r = client.post("/exams", json={"title": title, "subject": subject, "questionIds": question_ids})
        assert r.status_code == 201, r.text
        return r.json()["id"]
    return _create
