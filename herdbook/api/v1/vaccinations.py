"""Vaccination schedule endpoints"""

import logging
import uuid
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from herdbook.api.dependencies import get_request_id, get_today, to_http_error
from herdbook.api.v1.schemas import (
    ApplicationRequest,
    ApplyDoseRequest,
    ApplyDoseResponse,
    VaccinationListResponse,
    VaccinationSchema,
)
from herdbook.domain.exceptions import DomainException
from herdbook.domain.status import effective_vaccination_status
from herdbook.infrastructure.database.models import VaccinationRecord
from herdbook.infrastructure.database.session import get_db
from herdbook.services import vaccinations

router = APIRouter()


def _record(record: VaccinationRecord, today: date) -> VaccinationSchema:
    return VaccinationSchema(
        id=record.id,
        animal_id=record.animal_id,
        vaccine_type_id=record.vaccine_type_id,
        scheduled_date=record.scheduled_date,
        applied_date=record.applied_date,
        status=effective_vaccination_status(record.status, record.scheduled_date, today),
        dose_number=record.dose_number,
        parent_record_id=record.parent_record_id,
    )


@router.post("/vaccinations", response_model=VaccinationListResponse, status_code=201)
def register_application(
    body: ApplicationRequest,
    request: Request,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """
    Register a vaccine for a batch of animals.

    Future dates are scheduled as pending; today or earlier count as applied.
    Multi-dose vaccines get their next dose scheduled automatically.
    """
    try:
        records = vaccinations.register_application(
            db,
            vaccine_type_id=body.vaccine_type_id,
            animal_ids=body.animal_ids,
            application_date=body.application_date,
            today=today,
            notes=body.notes,
        )
    except DomainException as e:
        logging.warning(f"Vaccination not registered: {e}", extra={"request_id": get_request_id(request)})
        raise to_http_error(e)
    return VaccinationListResponse(records=[_record(r, today) for r in records])


@router.post("/vaccinations/{record_id}/apply", response_model=ApplyDoseResponse)
def apply_dose(
    record_id: uuid.UUID,
    body: ApplyDoseRequest,
    request: Request,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    try:
        next_record = vaccinations.apply_pending_dose(db, record_id, body.applied_on or today, body.notes)
        applied = vaccinations.get_record(db, record_id)
    except DomainException as e:
        logging.warning(f"Dose not applied: {e}", extra={"request_id": get_request_id(request)})
        raise to_http_error(e)
    return ApplyDoseResponse(
        applied=_record(applied, today),
        next_dose=_record(next_record, today) if next_record is not None else None,
    )


@router.post("/vaccinations/{record_id}/cancel", response_model=VaccinationSchema)
def cancel_dose(
    record_id: uuid.UUID,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    try:
        record = vaccinations.cancel_vaccination(db, record_id)
    except DomainException as e:
        raise to_http_error(e)
    return _record(record, today)


@router.get("/vaccinations", response_model=VaccinationListResponse)
def get_schedule(
    animal_id: Optional[uuid.UUID] = Query(None),
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """Vaccination agenda with overdue doses flagged from today's date"""
    return VaccinationListResponse(
        records=[_record(r, today) for r in vaccinations.list_schedule(db, animal_id=animal_id)]
    )
