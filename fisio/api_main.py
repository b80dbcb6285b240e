from __future__ import annotations

from datetime import date
from functools import lru_cache
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from fisio import config
from fisio.dataset import load_json
from fisio.errors import DatasetError, InvalidNameError, PractitionerNotFoundError
from fisio.logging_config import setup_logging
from fisio.services import QueryEngine

# log su stderr, livello da FISIO_LOG_LEVEL
setup_logging(config.LOG_LEVEL)

app = FastAPI(title="Studio Fisio API", version="1.0.0")


@app.exception_handler(DatasetError)
async def dataset_non_disponibile(request: Request, exc: DatasetError) -> JSONResponse:
    # dataset mancante o malformato: il servizio non può rispondere
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(exc)})


# Schemi

class PazienteOut(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Any
    name: str | None = None


class FisioterapistaOut(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Any
    name: str | None = None


class AppuntamentoOut(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Any
    patient_id: Any
    physiotherapist_id: Any
    appointment_date: Any



# Dipendenze

@lru_cache(maxsize=1)
def get_query_engine() -> QueryEngine:
    # dataset caricato una sola volta per processo
    return QueryEngine(load_json(config.DATASET_PATH))



# Endpoints (sola lettura)

@app.get("/api/pazienti", response_model=list[PazienteOut])
def api_pazienti(engine: QueryEngine = Depends(get_query_engine)) -> list[dict]:
    return [p.to_dict() for p in engine.list_patients()]


@app.get("/api/pazienti/con-appuntamento", response_model=list[PazienteOut])
def api_pazienti_con_appuntamento(
    giorno: date = Query(...),
    engine: QueryEngine = Depends(get_query_engine),
) -> list[dict]:
    return [p.to_dict() for p in engine.patients_with_appointment_on(giorno)]


@app.get("/api/fisioterapisti", response_model=list[FisioterapistaOut])
def api_fisioterapisti(engine: QueryEngine = Depends(get_query_engine)) -> list[dict]:
    return [f.to_dict() for f in engine.list_physiotherapists()]


@app.get("/api/fisioterapisti/appuntamenti", response_model=list[AppuntamentoOut])
def api_appuntamenti_fisioterapista(
    nome: str = Query(...),
    engine: QueryEngine = Depends(get_query_engine),
) -> list[dict]:
    try:
        return [a.to_dict() for a in engine.appointments_for_practitioner_named(nome)]
    except PractitionerNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidNameError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.get("/api/appuntamenti", response_model=list[AppuntamentoOut])
def api_appuntamenti(engine: QueryEngine = Depends(get_query_engine)) -> list[dict]:
    return [a.to_dict() for a in engine.list_appointments()]
