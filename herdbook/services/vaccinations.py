"""Vaccination schedule: registering applications and chaining follow-up doses"""

import uuid
from datetime import date
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from herdbook.domain import models as domain
from herdbook.domain.exceptions import InvalidArgumentError, RecordNotFoundError
from herdbook.domain.vaccination import chain_next_dose, initial_application_status
from herdbook.infrastructure.database.models import VaccinationRecord, VaccineType
from herdbook.infrastructure.database.repositories import AnimalRepository, VaccinationRepository
from herdbook.infrastructure.observability.logging import log_dose_chained
from herdbook.infrastructure.observability.metrics import vaccination_counter
from herdbook.services.atomic import atomic


def _schedule(vaccine_type: VaccineType) -> domain.VaccineType:
    return domain.VaccineType(
        id=vaccine_type.id,
        name=vaccine_type.name,
        doses_per_year=vaccine_type.doses_per_year,
        days_between_doses=vaccine_type.days_between_doses,
        female_only=vaccine_type.female_only,
        mandatory=vaccine_type.mandatory,
    )


def _dose(record: VaccinationRecord) -> domain.DoseRecord:
    return domain.DoseRecord(
        id=record.id,
        animal_id=record.animal_id,
        vaccine_type_id=record.vaccine_type_id,
        dose_number=record.dose_number,
    )


def _chain(
    repo: VaccinationRepository,
    record: VaccinationRecord,
    vaccine_type: VaccineType,
    base_date: date,
) -> Optional[VaccinationRecord]:
    """Persist the next dose of the series, if the rule schedules one"""
    draft = chain_next_dose(_dose(record), _schedule(vaccine_type), base_date)
    if draft is None:
        return None

    next_record = repo.create_record(
        animal_id=draft.animal_id,
        vaccine_type_id=draft.vaccine_type_id,
        scheduled_date=draft.scheduled_date,
        status=draft.status.value,
        dose_number=draft.dose_number,
        parent_record_id=draft.parent_record_id,
    )
    log_dose_chained(str(record.id), str(next_record.id), next_record.dose_number, draft.scheduled_date.isoformat())
    return next_record


def register_application(
    db: Session,
    vaccine_type_id: uuid.UUID,
    animal_ids: Sequence[uuid.UUID],
    application_date: date,
    today: date,
    notes: Optional[str] = None,
) -> List[VaccinationRecord]:
    """
    Register the first dose of a vaccine for a batch of animals.

    A date after `today` schedules the dose (pending); today or earlier records
    it as applied. When the vaccine needs more doses a year, the second dose is
    chained from the scheduled date. The whole batch commits or none of it does.

    Returns the created records, each first dose followed by its chained dose.
    """
    if not animal_ids:
        raise InvalidArgumentError("Select at least one animal")
    if len(set(animal_ids)) != len(animal_ids):
        raise InvalidArgumentError("An animal appears more than once in the application")

    status, applied_date = initial_application_status(application_date, today)
    created: List[VaccinationRecord] = []

    with atomic(db, "register_application"):
        repo = VaccinationRepository(db)
        vaccine_type = repo.get_vaccine_type(vaccine_type_id)
        if vaccine_type is None:
            raise RecordNotFoundError("Vaccine type", vaccine_type_id)

        animals = {a.id: a for a in AnimalRepository(db).get_animals(animal_ids)}
        for animal_id in animal_ids:
            animal = animals.get(animal_id)
            if animal is None:
                raise RecordNotFoundError("Animal", animal_id)
            if vaccine_type.female_only and animal.sex != "F":
                raise InvalidArgumentError(f"{vaccine_type.name} is restricted to females")

            record = repo.create_record(
                animal_id=animal_id,
                vaccine_type_id=vaccine_type.id,
                scheduled_date=application_date,
                applied_date=applied_date,
                status=status.value,
                dose_number=1,
                notes=notes,
            )
            created.append(record)
            next_record = _chain(repo, record, vaccine_type, application_date)
            if next_record is not None:
                created.append(next_record)

    for record in created:
        vaccination_counter.labels(origin="chained" if record.parent_record_id else "registered").inc()
    return created


def apply_pending_dose(
    db: Session,
    record_id: uuid.UUID,
    applied_on: date,
    notes: Optional[str] = None,
) -> Optional[VaccinationRecord]:
    """
    Confirm a scheduled dose and chain the next one from the applied date.

    A record that already spawned a follow-up is not chained again.

    Returns the chained record, or None when the series is complete.
    """
    with atomic(db, "apply_pending_dose"):
        repo = VaccinationRepository(db)
        record = repo.get_record(record_id)
        if record is None:
            raise RecordNotFoundError("Vaccination record", record_id)
        if record.status != domain.VaccinationStatus.PENDING.value:
            raise InvalidArgumentError(f"Only pending doses can be applied, record is {record.status}")

        record.status = domain.VaccinationStatus.APPLIED.value
        record.applied_date = applied_on
        if notes:
            record.notes = notes
        db.flush()

        next_record = None
        if not repo.has_child(record.id):
            next_record = _chain(repo, record, record.vaccine_type, applied_on)

    if next_record is not None:
        vaccination_counter.labels(origin="chained").inc()
    return next_record


def cancel_vaccination(db: Session, record_id: uuid.UUID) -> VaccinationRecord:
    with atomic(db, "cancel_vaccination"):
        record = VaccinationRepository(db).get_record(record_id)
        if record is None:
            raise RecordNotFoundError("Vaccination record", record_id)
        if record.status == domain.VaccinationStatus.APPLIED.value:
            raise InvalidArgumentError("An applied dose cannot be cancelled")
        record.status = domain.VaccinationStatus.CANCELLED.value

    return record


def get_record(db: Session, record_id: uuid.UUID) -> VaccinationRecord:
    record = VaccinationRepository(db).get_record(record_id)
    if record is None:
        raise RecordNotFoundError("Vaccination record", record_id)
    return record


def list_schedule(db: Session, animal_id: Optional[uuid.UUID] = None) -> List[VaccinationRecord]:
    return VaccinationRepository(db).list_records(animal_id=animal_id)
