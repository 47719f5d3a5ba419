"""Reproductive-cycle bookkeeping on top of the forecast engine"""

import uuid
from typing import List, Optional

from sqlalchemy.orm import Session

from herdbook.domain.exceptions import InvalidArgumentError, RecordNotFoundError
from herdbook.domain.models import BreedingMethod, CycleDates, CycleForecast, CycleStatus
from herdbook.domain.reproduction import predict_cycle
from herdbook.infrastructure.database.models import ReproductiveCycle
from herdbook.infrastructure.database.repositories import AnimalRepository, CycleRepository
from herdbook.infrastructure.observability.logging import log_cycle_started
from herdbook.infrastructure.observability.metrics import cycle_counter
from herdbook.services.atomic import atomic


def _cycle_fields(
    dates: CycleDates,
    forecast: CycleForecast,
    sire_id: Optional[uuid.UUID],
    method: Optional[BreedingMethod],
    notes: Optional[str],
) -> dict:
    return {
        "last_calving_date": dates.last_calving_date,
        "last_heat_date": dates.last_heat_date,
        "breeding_date": dates.breeding_date,
        "breeding_sire_id": sire_id,
        "breeding_method": BreedingMethod(method).value if method else None,
        "predicted_calving_date": forecast.predicted_calving_date,
        "predicted_heat_date": forecast.predicted_heat_date,
        "predicted_diagnosis_date": forecast.predicted_diagnosis_date,
        "status": forecast.suggested_status.value,
        "notes": notes,
    }


def start_new_cycle(
    db: Session,
    animal_id: uuid.UUID,
    dates: CycleDates,
    sire_id: Optional[uuid.UUID] = None,
    method: Optional[BreedingMethod] = None,
    notes: Optional[str] = None,
) -> ReproductiveCycle:
    """
    Open a new follow-up for a female.

    Every earlier cycle of the animal is deactivated in the same commit, so
    exactly one active cycle remains.
    """
    with atomic(db, "start_new_cycle"):
        animal = AnimalRepository(db).get_animal(animal_id)
        if animal is None:
            raise RecordNotFoundError("Animal", animal_id)
        if animal.sex != "F":
            raise InvalidArgumentError("Reproductive cycles can only be tracked for females")

        forecast = predict_cycle(dates)
        cycle_repo = CycleRepository(db)
        deactivated = cycle_repo.deactivate_cycles(animal_id)
        cycle = cycle_repo.create_cycle(animal_id, **_cycle_fields(dates, forecast, sire_id, method, notes))

    cycle_counter.labels(status=cycle.status).inc()
    log_cycle_started(str(cycle.id), str(animal_id), cycle.status, deactivated)
    return cycle


def update_cycle(
    db: Session,
    cycle_id: uuid.UUID,
    dates: CycleDates,
    sire_id: Optional[uuid.UUID] = None,
    method: Optional[BreedingMethod] = None,
    notes: Optional[str] = None,
) -> ReproductiveCycle:
    """Overwrite the inputs of a cycle and recompute all its predictions in place"""
    with atomic(db, "update_cycle"):
        cycle = CycleRepository(db).get_cycle(cycle_id)
        if cycle is None:
            raise RecordNotFoundError("Cycle", cycle_id)

        forecast = predict_cycle(dates)
        for field, value in _cycle_fields(dates, forecast, sire_id, method, notes).items():
            setattr(cycle, field, value)
        db.flush()

    return cycle


def record_pregnancy_diagnosis(db: Session, cycle_id: uuid.UUID, pregnant: bool) -> ReproductiveCycle:
    """Confirm (pregnant) or rule out (empty) a pregnancy after the diagnosis window"""
    with atomic(db, "record_pregnancy_diagnosis"):
        cycle = CycleRepository(db).get_cycle(cycle_id)
        if cycle is None:
            raise RecordNotFoundError("Cycle", cycle_id)
        cycle.status = (CycleStatus.PREGNANT if pregnant else CycleStatus.EMPTY).value
        db.flush()

    return cycle


def list_cycles(
    db: Session,
    animal_id: Optional[uuid.UUID] = None,
    active_only: bool = True,
) -> List[ReproductiveCycle]:
    return CycleRepository(db).list_cycles(animal_id=animal_id, active_only=active_only)
