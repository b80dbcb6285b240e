from __future__ import annotations

from typing import Any, Callable, Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, sessionmaker

from .dataset import Appointment, Dataset, Patient, Physiotherapist, stesso_id
from .db import Base, db_session
from .logging_config import get_logger
from .models import Appuntamento, Fisioterapista, Paziente

log = get_logger(__name__)


def _riga_paziente(p: Patient, pos: int) -> Paziente:
    return Paziente(id=str(p.id), posizione=pos, nome=p.name, dati=p.to_dict())


def _riga_fisioterapista(f: Physiotherapist, pos: int) -> Fisioterapista:
    return Fisioterapista(id=str(f.id), posizione=pos, nome=f.name, dati=f.to_dict())


def _riga_appuntamento(a: Appointment, pos: int) -> Appuntamento:
    return Appuntamento(
        id=str(a.id),
        posizione=pos,
        paziente_id=str(a.patient_id),
        fisioterapista_id=str(a.physiotherapist_id),
        data_appuntamento=a.appointment_date if isinstance(a.appointment_date, str) else None,
        dati=a.to_dict(),
    )


def _accoda(s: Session, model: type[Base], records: Iterable[Any], to_row: Callable[[Any, int], Base]) -> int:
    pos = (s.execute(select(func.max(model.posizione))).scalar_one_or_none() or 0) + 1
    inseriti = 0
    for rec in records:
        # chiave di riga = str(id): 1 e "1" occupano la stessa riga
        esistente = s.get(model, str(rec.id))
        if esistente is not None:
            if not stesso_id(esistente.dati.get("id"), rec.id):
                log.warning(
                    "id_in_conflitto",
                    tabella=model.__tablename__,
                    id=rec.id,
                    id_esistente=esistente.dati.get("id"),
                )
            continue
        s.add(to_row(rec, pos))
        s.flush()  # così un id ripetuto nello stesso dataset viene visto da s.get
        pos += 1
        inseriti += 1
    return inseriti


def importa_dataset(dataset: Dataset, session_factory: sessionmaker[Session] | None = None) -> int:
    """
    Copia il dataset nel DB (idempotente):
    - i record con id già presente vengono saltati
    - i nuovi record vengono accodati mantenendo l'ordine del dataset
    Ritorna il numero di righe inserite.
    """
    with db_session(session_factory) as s:
        inseriti = _accoda(s, Paziente, dataset.patients, _riga_paziente)
        inseriti += _accoda(s, Fisioterapista, dataset.physiotherapists, _riga_fisioterapista)
        inseriti += _accoda(s, Appuntamento, dataset.appointments, _riga_appuntamento)

    log.info("dataset_importato", inseriti=inseriti)
    return inseriti


def reset_db(session_factory: sessionmaker[Session] | None = None) -> None:
    """Cancella i dati (mantiene lo schema)."""
    with db_session(session_factory) as s:
        s.execute(delete(Appuntamento))
        s.execute(delete(Fisioterapista))
        s.execute(delete(Paziente))
