"""
Dataset in memoria: pazienti, fisioterapisti, appuntamenti.

Caricato una volta (da file JSON o dal DB) e mai modificato: il QueryEngine
lo riceve nel costruttore.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from .db import db_session
from .errors import DatasetError
from .logging_config import get_logger
from .models import Appuntamento, Fisioterapista, Paziente

log = get_logger(__name__)

COLLEZIONI = ("patients", "physiotherapists", "appointments")


@dataclass(frozen=True)
class Patient:
    id: Any
    name: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        _congela(self)

    @classmethod
    def from_record(cls, rec: Mapping[str, Any]) -> Patient:
        _richiedi(rec, "patients", ("id",))
        extra = {k: v for k, v in rec.items() if k not in ("id", "name")}
        return cls(id=rec["id"], name=rec.get("name"), extra=extra)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id}
        if self.name is not None:
            out["name"] = self.name
        out.update(self.extra)
        return out


@dataclass(frozen=True)
class Physiotherapist:
    id: Any
    name: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        _congela(self)

    @classmethod
    def from_record(cls, rec: Mapping[str, Any]) -> Physiotherapist:
        _richiedi(rec, "physiotherapists", ("id",))
        extra = {k: v for k, v in rec.items() if k not in ("id", "name")}
        return cls(id=rec["id"], name=rec.get("name"), extra=extra)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id}
        if self.name is not None:
            out["name"] = self.name
        out.update(self.extra)
        return out


@dataclass(frozen=True)
class Appointment:
    id: Any
    patient_id: Any
    physiotherapist_id: Any
    appointment_date: Any  # stringa ISO-8601 così come arriva dalla sorgente
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        _congela(self)

    _CAMPI = ("id", "patient_id", "physiotherapist_id", "appointment_date")

    @classmethod
    def from_record(cls, rec: Mapping[str, Any]) -> Appointment:
        _richiedi(rec, "appointments", cls._CAMPI)
        extra = {k: v for k, v in rec.items() if k not in cls._CAMPI}
        return cls(
            id=rec["id"],
            patient_id=rec["patient_id"],
            physiotherapist_id=rec["physiotherapist_id"],
            appointment_date=rec["appointment_date"],
            extra=extra,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "patient_id": self.patient_id,
            "physiotherapist_id": self.physiotherapist_id,
            "appointment_date": self.appointment_date,
        }
        out.update(self.extra)
        return out


def stesso_id(a: Any, b: Any) -> bool:
    """
    Uguaglianza stretta tra id: True non vale 1 e "1" non vale 1.
    Tra numeri (int/float) conta solo il valore, come nel JSON.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    return type(a) is type(b) and a == b


def _congela(rec: Any) -> None:
    # copia in sola lettura: il dizionario sorgente non resta condiviso
    object.__setattr__(rec, "extra", MappingProxyType(dict(rec.extra)))


def _richiedi(rec: Any, collezione: str, campi: tuple[str, ...]) -> None:
    if not isinstance(rec, Mapping):
        raise DatasetError(f"Record non valido in '{collezione}': atteso oggetto, trovato {type(rec).__name__}.")
    mancanti = [c for c in campi if c not in rec]
    if mancanti:
        raise DatasetError(f"Record in '{collezione}' senza campi obbligatori: {', '.join(mancanti)}.")


@dataclass(frozen=True)
class Dataset:
    patients: tuple[Patient, ...] = ()
    physiotherapists: tuple[Physiotherapist, ...] = ()
    appointments: tuple[Appointment, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> Dataset:
        if not isinstance(data, Mapping):
            raise DatasetError("Il dataset deve essere un oggetto con le collezioni " + ", ".join(COLLEZIONI) + ".")

        for nome in COLLEZIONI:
            if nome not in data:
                raise DatasetError(f"Collezione '{nome}' mancante nel dataset.")
            if not isinstance(data[nome], list):
                raise DatasetError(f"La collezione '{nome}' deve essere una lista.")

        return cls(
            patients=tuple(Patient.from_record(r) for r in data["patients"]),
            physiotherapists=tuple(Physiotherapist.from_record(r) for r in data["physiotherapists"]),
            appointments=tuple(Appointment.from_record(r) for r in data["appointments"]),
        )

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "patients": [p.to_dict() for p in self.patients],
            "physiotherapists": [f.to_dict() for f in self.physiotherapists],
            "appointments": [a.to_dict() for a in self.appointments],
        }


def load_json(path: str | Path) -> Dataset:
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise DatasetError(f"File dataset non trovato: {path}") from e
    except json.JSONDecodeError as e:
        raise DatasetError(f"JSON non valido in {path}: {e}") from e

    ds = Dataset.from_dict(data)
    log.info(
        "dataset_caricato",
        sorgente=str(path),
        pazienti=len(ds.patients),
        fisioterapisti=len(ds.physiotherapists),
        appuntamenti=len(ds.appointments),
    )
    return ds


def load_from_db(session_factory: sessionmaker[Session] | None = None) -> Dataset:
    """Ricostruisce il Dataset dal DB, nell'ordine di inserimento (colonna posizione)."""
    with db_session(session_factory) as s:
        pazienti = list(s.scalars(select(Paziente.dati).order_by(Paziente.posizione.asc())))
        fisio = list(s.scalars(select(Fisioterapista.dati).order_by(Fisioterapista.posizione.asc())))
        app = list(s.scalars(select(Appuntamento.dati).order_by(Appuntamento.posizione.asc())))

    ds = Dataset.from_dict({"patients": pazienti, "physiotherapists": fisio, "appointments": app})
    log.info(
        "dataset_caricato",
        sorgente="db",
        pazienti=len(ds.patients),
        fisioterapisti=len(ds.physiotherapists),
        appuntamenti=len(ds.appointments),
    )
    return ds
