"""Reproductive-cycle endpoints - forecasts and cycle follow-up"""

import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from herdbook.api.dependencies import get_request_id, to_http_error
from herdbook.api.v1.schemas import (
    CycleDatesSchema,
    CycleRequest,
    CycleResponse,
    DiagnosisRequest,
    ForecastResponse,
)
from herdbook.domain.exceptions import DomainException
from herdbook.domain.models import CycleDates
from herdbook.domain.reproduction import predict_cycle
from herdbook.infrastructure.database.session import get_db
from herdbook.services import reproduction

router = APIRouter()


def _dates(body: CycleDatesSchema) -> CycleDates:
    return CycleDates(
        last_calving_date=body.last_calving_date,
        last_heat_date=body.last_heat_date,
        breeding_date=body.breeding_date,
    )


@router.post("/reproduction/forecast", response_model=ForecastResponse)
def forecast(body: CycleDatesSchema):
    """Preview the predictions for a set of cycle dates without saving anything"""
    result = predict_cycle(_dates(body))
    return ForecastResponse(
        predicted_calving_date=result.predicted_calving_date,
        predicted_heat_date=result.predicted_heat_date,
        predicted_diagnosis_date=result.predicted_diagnosis_date,
        suggested_status=result.suggested_status,
    )


@router.post("/reproduction/cycles", response_model=CycleResponse, status_code=201)
def start_cycle(body: CycleRequest, request: Request, db: Session = Depends(get_db)):
    """
    Start a new follow-up for a female.

    Any previous cycle of the animal is deactivated.
    """
    if body.animal_id is None:
        raise HTTPException(status_code=422, detail="animal_id is required")
    try:
        cycle = reproduction.start_new_cycle(
            db,
            animal_id=body.animal_id,
            dates=_dates(body),
            sire_id=body.breeding_sire_id,
            method=body.breeding_method,
            notes=body.notes,
        )
    except DomainException as e:
        logging.warning(f"Cycle not started: {e}", extra={"request_id": get_request_id(request)})
        raise to_http_error(e)
    return cycle


@router.put("/reproduction/cycles/{cycle_id}", response_model=CycleResponse)
def edit_cycle(cycle_id: uuid.UUID, body: CycleRequest, request: Request, db: Session = Depends(get_db)):
    """Edit the dates of a cycle; predictions are recomputed on the same record"""
    try:
        cycle = reproduction.update_cycle(
            db,
            cycle_id=cycle_id,
            dates=_dates(body),
            sire_id=body.breeding_sire_id,
            method=body.breeding_method,
            notes=body.notes,
        )
    except DomainException as e:
        logging.warning(f"Cycle not updated: {e}", extra={"request_id": get_request_id(request)})
        raise to_http_error(e)
    return cycle


@router.post("/reproduction/cycles/{cycle_id}/diagnosis", response_model=CycleResponse)
def diagnose(cycle_id: uuid.UUID, body: DiagnosisRequest, db: Session = Depends(get_db)):
    try:
        return reproduction.record_pregnancy_diagnosis(db, cycle_id, body.pregnant)
    except DomainException as e:
        raise to_http_error(e)


@router.get("/reproduction/cycles", response_model=List[CycleResponse])
def get_cycles(
    animal_id: Optional[uuid.UUID] = Query(None, description="Restrict to one animal"),
    active_only: bool = Query(True),
    db: Session = Depends(get_db),
):
    return reproduction.list_cycles(db, animal_id=animal_id, active_only=active_only)
