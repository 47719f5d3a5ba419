"""Shared fixtures: a throwaway SQLite herd, a pinned calendar and an API client"""

import pytest
from datetime import date
from pathlib import Path
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker, Session
from herdbook.api.main import create_app
from herdbook.api.dependencies import get_today
from herdbook.infrastructure.database.models import Base
from herdbook.infrastructure.database.session import build_engine, get_db
from herdbook.services import animals

# Every status decision made during a test uses this date
TODAY = date(2024, 6, 1)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def db(tmp_path: Path) -> Generator[Session, None, None]:
    """Fresh schema in a per-test SQLite file"""
    engine = build_engine(f"sqlite:///{tmp_path / 'herd.db'}")
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db: Session, today: date) -> TestClient:
    """API client bound to the test session and the pinned date"""
    app = create_app()
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_today] = lambda: today
    return TestClient(app)


@pytest.fixture
def cow(db: Session):
    return animals.register_animal(db, sex="F", tag_number="BR-001", name="Mimosa")


@pytest.fixture
def heifer(db: Session):
    return animals.register_animal(db, sex="F", tag_number="BR-002", name="Estrela")


@pytest.fixture
def bull(db: Session):
    return animals.register_animal(db, sex="M", tag_number="BR-100", name="Trovão")


@pytest.fixture
def two_dose_vaccine(db: Session):
    """Two doses a year, 21 days apart"""
    return animals.register_vaccine_type(db, name="Clostridiosis", doses_per_year=2, days_between_doses=21)


@pytest.fixture
def single_dose_vaccine(db: Session):
    return animals.register_vaccine_type(db, name="Rabies", doses_per_year=1, days_between_doses=365)


@pytest.fixture
def brucellosis_vaccine(db: Session):
    """Female-only vaccine"""
    return animals.register_vaccine_type(
        db, name="Brucellosis", doses_per_year=1, days_between_doses=365, female_only=True, mandatory=True
    )
