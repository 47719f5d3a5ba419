"""Animal registry, weighing and vaccine catalogue endpoints"""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from herdbook.api.dependencies import to_http_error
from herdbook.api.v1.schemas import (
    AnimalRequest,
    AnimalResponse,
    VaccineTypeRequest,
    VaccineTypeResponse,
    WeightRequest,
    WeightResponse,
)
from herdbook.domain.exceptions import DomainException
from herdbook.infrastructure.database.session import get_db
from herdbook.services import animals

router = APIRouter()


@router.post("/animals", response_model=AnimalResponse, status_code=201)
def register_animal(body: AnimalRequest, db: Session = Depends(get_db)):
    try:
        return animals.register_animal(
            db,
            sex=body.sex,
            tag_number=body.tag_number,
            name=body.name,
            birth_date=body.birth_date,
        )
    except DomainException as e:
        raise to_http_error(e)


@router.get("/animals/{animal_id}", response_model=AnimalResponse)
def get_animal(animal_id: uuid.UUID, db: Session = Depends(get_db)):
    try:
        return animals.get_animal(db, animal_id)
    except DomainException as e:
        raise to_http_error(e)


@router.post("/animals/{animal_id}/weights", response_model=WeightResponse, status_code=201)
def record_weight(animal_id: uuid.UUID, body: WeightRequest, db: Session = Depends(get_db)):
    """Add a weighing; it becomes the animal's current weight"""
    try:
        return animals.record_weight(db, animal_id, body.weight_kg, body.weighed_on, body.notes)
    except DomainException as e:
        raise to_http_error(e)


@router.post("/vaccine-types", response_model=VaccineTypeResponse, status_code=201)
def register_vaccine_type(body: VaccineTypeRequest, db: Session = Depends(get_db)):
    try:
        return animals.register_vaccine_type(
            db,
            name=body.name,
            doses_per_year=body.doses_per_year,
            days_between_doses=body.days_between_doses,
            female_only=body.female_only,
            mandatory=body.mandatory,
        )
    except DomainException as e:
        raise to_http_error(e)
