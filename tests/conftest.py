"""Shared test fixtures."""
import json

import pytest
from sqlalchemy import create_engine

from fisio import db
from fisio.dataset import Dataset
from fisio.services import QueryEngine


SEED = {
    "patients": [{"id": 1}],
    "physiotherapists": [{"id": 10, "name": "Bruno"}],
    "appointments": [
        {"id": 100, "patient_id": 1, "physiotherapist_id": 10, "appointment_date": "2023-04-18T09:00:00Z"}
    ],
}

CLINIC = {
    "patients": [
        {"id": 1, "name": "Ana"},
        {"id": 2, "name": "Carlos"},
        {"id": 3, "name": "Beatriz"},
        {"id": 4, "name": "Diego"},
    ],
    "physiotherapists": [
        {"id": 10, "name": "Bruno"},
        {"id": 11, "name": "Camila"},
        {"id": 12, "name": "Bruno"},
    ],
    "appointments": [
        {"id": 100, "patient_id": 3, "physiotherapist_id": 10, "appointment_date": "2023-04-18T09:00:00Z"},
        {"id": 101, "patient_id": 1, "physiotherapist_id": 11, "appointment_date": "2023-04-18T23:30:00-03:00"},
        {"id": 102, "patient_id": 3, "physiotherapist_id": 10, "appointment_date": "2023-04-18T15:00:00Z"},
        {"id": 103, "patient_id": 2, "physiotherapist_id": 12, "appointment_date": "2023-04-19T10:00:00Z"},
        {"id": 104, "patient_id": 99, "physiotherapist_id": 10, "appointment_date": "2023-04-18T11:00:00Z"},
        {"id": 105, "patient_id": 4, "physiotherapist_id": 11, "appointment_date": "not-a-date"},
        {"id": 106, "patient_id": 4, "physiotherapist_id": 10, "appointment_date": None},
    ],
}


@pytest.fixture
def seed_dataset() -> Dataset:
    return Dataset.from_dict(SEED)


@pytest.fixture
def clinic_dataset() -> Dataset:
    return Dataset.from_dict(CLINIC)


@pytest.fixture
def seed_engine(seed_dataset) -> QueryEngine:
    return QueryEngine(seed_dataset)


@pytest.fixture
def clinic_engine(clinic_dataset) -> QueryEngine:
    return QueryEngine(clinic_dataset)


@pytest.fixture
def clinic_json(tmp_path):
    """Write the clinic dataset to a JSON file and return its path."""
    path = tmp_path / "db.json"
    path.write_text(json.dumps(CLINIC), encoding="utf-8")
    return path


@pytest.fixture
def sqlite_db(tmp_path, monkeypatch):
    """Point the module-level engine/session factory at a temporary SQLite file."""
    eng = create_engine(f"sqlite:///{tmp_path / 'fisio.sqlite'}", future=True)
    factory = db.make_session_factory(eng)
    monkeypatch.setattr(db, "engine", eng)
    monkeypatch.setattr(db, "SessionLocal", factory)
    db.init_db(eng)
    yield factory
    eng.dispose()
