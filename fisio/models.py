from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base

# Nessuna ForeignKey: i riferimenti appuntamento -> paziente/fisioterapista
# non sono vincolati, un id orfano deve poter essere salvato.


class Paziente(Base):
    __tablename__ = "pazienti"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    posizione: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    nome: Mapped[str | None] = mapped_column(String(120), nullable=True)
    dati: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    def __repr__(self) -> str:
        return f"Paziente({self.id}, {self.nome})"


class Fisioterapista(Base):
    __tablename__ = "fisioterapisti"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    posizione: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    nome: Mapped[str | None] = mapped_column(String(120), nullable=True, index=True)
    dati: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    def __repr__(self) -> str:
        return f"Fisioterapista({self.id}, {self.nome})"


class Appuntamento(Base):
    __tablename__ = "appuntamenti"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    posizione: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    paziente_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    fisioterapista_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    # testo sorgente (ISO-8601), non convertito in DateTime
    data_appuntamento: Mapped[str | None] = mapped_column(String(64), nullable=True)

    # record sorgente completo: ricaricandolo gli id mantengono il tipo JSON
    dati: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
