"""Vaccine dose scheduling - initial application status and next-dose chaining"""

from datetime import date
from typing import Optional, Tuple

from herdbook.domain.models import DoseDraft, DoseRecord, VaccinationStatus, VaccineType
from herdbook.utils.date_utils import add_days


def initial_application_status(
    application_date: date,
    today: date,
) -> Tuple[VaccinationStatus, Optional[date]]:
    """
    Status of a freshly registered (non-chained) application.

    A date after today is a scheduled dose: pending, no applied date.
    Today or earlier counts as already applied on that date.
    """
    if application_date > today:
        return VaccinationStatus.PENDING, None
    return VaccinationStatus.APPLIED, application_date


def chain_next_dose(
    record: DoseRecord,
    vaccine_type: VaccineType,
    base_date: date,
) -> Optional[DoseDraft]:
    """
    Schedule the next dose of an annual series, if one remains.

    Fires only when doses_per_year exceeds the record's dose number and the
    vaccine has a positive interval. Produces a single pending dose; later
    doses are chained when this one is applied.

    Args:
        record: The dose just registered or applied
        vaccine_type: Schedule of the vaccine
        base_date: Scheduled date of a fresh registration, or the applied date

    Returns:
        The next dose to persist, or None when the series is complete
    """
    if vaccine_type.doses_per_year <= record.dose_number:
        return None
    if vaccine_type.days_between_doses <= 0:
        return None

    return DoseDraft(
        animal_id=record.animal_id,
        vaccine_type_id=record.vaccine_type_id,
        dose_number=record.dose_number + 1,
        scheduled_date=add_days(base_date, vaccine_type.days_between_doses),
        parent_record_id=record.id,
        status=VaccinationStatus.PENDING,
    )
