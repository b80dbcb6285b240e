from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from .dataset import Appointment, Dataset, Patient, Physiotherapist, stesso_id
from .errors import InvalidDateError, InvalidNameError, PractitionerNotFoundError
from .logging_config import get_logger

log = get_logger(__name__)


# =========================
# Confronto date
# =========================
def giorno_iso(giorno: Any) -> str:
    """
    Giorno richiesto come stringa YYYY-MM-DD.

    - date: isoformat()
    - datetime con tz: prima convertito in UTC, poi troncato
    - datetime naive: troncato così com'è
    - str: deve essere una data ISO (YYYY-MM-DD)
    """
    # datetime è sottoclasse di date: va controllato prima
    if isinstance(giorno, datetime):
        if giorno.tzinfo is not None:
            giorno = giorno.astimezone(timezone.utc)
        return giorno.date().isoformat()
    if isinstance(giorno, date):
        return giorno.isoformat()
    if isinstance(giorno, str):
        try:
            return date.fromisoformat(giorno.strip()).isoformat()
        except ValueError as e:
            raise InvalidDateError(f"Data non valida: '{giorno}' (atteso YYYY-MM-DD).") from e
    raise InvalidDateError(f"Data non valida: {giorno!r}.")


def giorno_appuntamento(appointment_date: Any) -> str | None:
    """
    Troncamento a stringa della data dell'appuntamento: tutto ciò che precede la 'T'.
    Nessuna normalizzazione del fuso orario; un valore non stringa non combacia mai.
    """
    if not isinstance(appointment_date, str):
        return None
    return appointment_date.split("T")[0]


# =========================
# Query engine
# =========================
class QueryEngine:
    """Query in sola lettura su un Dataset immutabile."""

    def __init__(self, dataset: Dataset) -> None:
        self.dataset = dataset

    def list_patients(self) -> list[Patient]:
        return list(self.dataset.patients)

    def list_physiotherapists(self) -> list[Physiotherapist]:
        return list(self.dataset.physiotherapists)

    def list_appointments(self) -> list[Appointment]:
        return list(self.dataset.appointments)

    def appointments_on(self, giorno: Any) -> list[Appointment]:
        target = giorno_iso(giorno)
        return [a for a in self.dataset.appointments if giorno_appuntamento(a.appointment_date) == target]

    def patients_with_appointment_on(self, giorno: Any) -> list[Patient]:
        """Pazienti con almeno un appuntamento nel giorno indicato, nell'ordine del dataset."""
        target = giorno_iso(giorno)
        del_giorno = self.appointments_on(target)
        out = [p for p in self.dataset.patients if any(stesso_id(a.patient_id, p.id) for a in del_giorno)]
        log.debug("query_pazienti_per_giorno", giorno=target, risultati=len(out))
        return out

    def find_physiotherapist(self, name: str) -> Physiotherapist | None:
        """Primo fisioterapista con nome identico (case-sensitive), None se assente."""
        return next((f for f in self.dataset.physiotherapists if f.name == name), None)

    def appointments_for_practitioner_named(self, name: str) -> list[Appointment]:
        if not isinstance(name, str) or not name:
            raise InvalidNameError("Il nome del fisioterapista è obbligatorio.")

        fisio = self.find_physiotherapist(name)
        if fisio is None:
            log.warning("fisioterapista_non_trovato", nome=name)
            raise PractitionerNotFoundError(name)

        out = [a for a in self.dataset.appointments if stesso_id(a.physiotherapist_id, fisio.id)]
        log.debug("query_appuntamenti_fisioterapista", nome=name, fisioterapista_id=fisio.id, risultati=len(out))
        return out
