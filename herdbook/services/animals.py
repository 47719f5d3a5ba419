"""Animal registry and weighing history"""

import uuid
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from herdbook.domain.exceptions import InvalidArgumentError, RecordNotFoundError
from herdbook.domain.models import AnimalOrigin
from herdbook.infrastructure.database.models import Animal, VaccineType, WeightRecord
from herdbook.infrastructure.database.repositories import AnimalRepository, VaccinationRepository
from herdbook.services.atomic import atomic


def register_animal(
    db: Session,
    sex: str,
    tag_number: Optional[str] = None,
    name: Optional[str] = None,
    birth_date: Optional[date] = None,
    origin: AnimalOrigin = AnimalOrigin.BORN,
) -> Animal:
    if sex not in ("M", "F"):
        raise InvalidArgumentError(f"Sex must be 'M' or 'F', got {sex!r}")
    with atomic(db, "register_animal"):
        animal = AnimalRepository(db).create_animal(
            sex=sex,
            tag_number=tag_number,
            name=name,
            birth_date=birth_date,
            origin=AnimalOrigin(origin).value,
        )
    return animal


def get_animal(db: Session, animal_id: uuid.UUID) -> Animal:
    animal = AnimalRepository(db).get_animal(animal_id)
    if animal is None:
        raise RecordNotFoundError("Animal", animal_id)
    return animal


def record_weight(
    db: Session,
    animal_id: uuid.UUID,
    weight_kg: float,
    weighed_on: date,
    notes: Optional[str] = None,
) -> WeightRecord:
    """Store a weighing; the latest entry becomes the animal's current weight"""
    if weight_kg <= 0:
        raise InvalidArgumentError(f"Weight must be positive, got {weight_kg!r}")
    with atomic(db, "record_weight"):
        repo = AnimalRepository(db)
        animal = repo.get_animal(animal_id)
        if animal is None:
            raise RecordNotFoundError("Animal", animal_id)
        record = repo.add_weight(animal, weight_kg, weighed_on, notes)
    return record


def register_vaccine_type(
    db: Session,
    name: str,
    doses_per_year: int,
    days_between_doses: int,
    female_only: bool = False,
    mandatory: bool = False,
) -> VaccineType:
    if doses_per_year < 1:
        raise InvalidArgumentError("doses_per_year must be at least 1")
    if days_between_doses < 1:
        raise InvalidArgumentError("days_between_doses must be at least 1")
    with atomic(db, "register_vaccine_type"):
        vaccine_type = VaccinationRepository(db).create_vaccine_type(
            name=name,
            doses_per_year=doses_per_year,
            days_between_doses=days_between_doses,
            female_only=female_only,
            mandatory=mandatory,
        )
    return vaccine_type
