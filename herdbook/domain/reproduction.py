"""Reproductive-cycle forecasting - heat, calving and diagnosis date predictions"""

from datetime import date
from typing import Optional

from herdbook.domain.models import CycleDates, CycleForecast, CycleStatus
from herdbook.utils.date_utils import add_days

# Fixed biological constants for the modeled breed
GESTATION_DAYS = 290
ESTRUS_CYCLE_DAYS = 21
POSTPARTUM_RETURN_DAYS = 60
DIAGNOSIS_WINDOW_DAYS = 45


def _project(from_date: date, days: int) -> Optional[date]:
    """Date `days` after `from_date`, or None past the last representable date"""
    try:
        return add_days(from_date, days)
    except OverflowError:
        return None


def predict_cycle(dates: CycleDates) -> CycleForecast:
    """
    Derive cycle predictions from whichever input dates are known.

    Priority (first match wins):
    1. Breeding date: calving at +290d, diagnosis at +45d, return to heat at
       +21d if the service fails. Status awaiting-diagnosis.
    2. Last heat: next heat at +21d. Status empty.
    3. Last calving: first heat after anestrus at +60d. Status postpartum-anestrus.
    4. Nothing known: no predictions. Status empty.

    Dates are not cross-validated; any combination yields a forecast. A
    prediction that would fall after date.max is left as None.
    """
    if dates.breeding_date is not None:
        return CycleForecast(
            predicted_calving_date=_project(dates.breeding_date, GESTATION_DAYS),
            predicted_heat_date=_project(dates.breeding_date, ESTRUS_CYCLE_DAYS),
            predicted_diagnosis_date=_project(dates.breeding_date, DIAGNOSIS_WINDOW_DAYS),
            suggested_status=CycleStatus.AWAITING_DIAGNOSIS,
        )

    if dates.last_heat_date is not None:
        return CycleForecast(
            predicted_calving_date=None,
            predicted_heat_date=_project(dates.last_heat_date, ESTRUS_CYCLE_DAYS),
            predicted_diagnosis_date=None,
            suggested_status=CycleStatus.EMPTY,
        )

    if dates.last_calving_date is not None:
        return CycleForecast(
            predicted_calving_date=None,
            predicted_heat_date=_project(dates.last_calving_date, POSTPARTUM_RETURN_DAYS),
            predicted_diagnosis_date=None,
            suggested_status=CycleStatus.POSTPARTUM_ANESTRUS,
        )

    return CycleForecast(
        predicted_calving_date=None,
        predicted_heat_date=None,
        predicted_diagnosis_date=None,
        suggested_status=CycleStatus.EMPTY,
    )
