"""
테스트 공용 fixture

- DB_DSN=sqlite:// 로 메모리 DB 사용 (설정/엔진 import 전에 지정해야 함)
- 테스트마다 테이블을 새로 만들어 서로 영향이 없도록 함
"""

import os

os.environ["DB_DSN"] = "sqlite://"
os.environ["ENV"] = "test"

import pytest
from fastapi.testclient import TestClient

from database.db import Base, SessionLocal, engine, init_db
from main import app
from models.grades import Grade as GradeModel, GradeScore as GradeScoreModel
from models.learners import Learner as LearnerModel


@pytest.fixture(autouse=True)
def _fresh_tables():
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def add_grade(db):
    """add_grade(class_id, learner_id, [("exam", 80), ("quiz", 70), ...])"""
    def _add(class_id, learner_id, scores):
        grade = GradeModel(
            class_id=class_id,
            learner_id=learner_id,
            scores=[
                GradeScoreModel(position=idx, type=kind, score=value)
                for idx, (kind, value) in enumerate(scores)
            ],
        )
        db.add(grade)
        db.commit()
        return grade
    return _add


@pytest.fixture
def add_learner(db):
    def _add(**fields):
        learner = LearnerModel(**fields)
        db.add(learner)
        db.commit()
        return learner
    return _add
