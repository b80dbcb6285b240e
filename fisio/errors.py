from __future__ import annotations


class FisioError(Exception):
    """Errore base dell'applicativo: la CLI lo intercetta ed esce con status 1."""


class DatasetError(FisioError):
    """Sorgente dati mancante o malformata."""


class InvalidDateError(FisioError, ValueError):
    pass


class InvalidNameError(FisioError, ValueError):
    pass


class PractitionerNotFoundError(FisioError, LookupError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Nessun fisioterapista con nome '{name}'.")
        self.name = name
