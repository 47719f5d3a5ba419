"""Unit tests for reproductive-cycle forecasting"""

from datetime import date, timedelta
from herdbook.domain.models import CycleDates, CycleStatus
from herdbook.domain.reproduction import (
    DIAGNOSIS_WINDOW_DAYS,
    ESTRUS_CYCLE_DAYS,
    GESTATION_DAYS,
    POSTPARTUM_RETURN_DAYS,
    predict_cycle,
)


def test_breeding_date_predicts_calving_diagnosis_and_return_heat():
    """Breeding on 2024-01-10 -> calving +290d, diagnosis +45d, heat +21d"""
    forecast = predict_cycle(CycleDates(breeding_date=date(2024, 1, 10)))

    assert forecast.predicted_calving_date == date(2024, 10, 26)
    assert forecast.predicted_diagnosis_date == date(2024, 2, 24)
    assert forecast.predicted_heat_date == date(2024, 1, 31)
    assert forecast.suggested_status == CycleStatus.AWAITING_DIAGNOSIS


def test_breeding_date_wins_over_heat_and_calving():
    """Any breeding date makes the cycle await diagnosis"""
    breeding = date(2024, 5, 5)
    forecast = predict_cycle(
        CycleDates(
            last_calving_date=date(2023, 12, 1),
            last_heat_date=date(2024, 4, 14),
            breeding_date=breeding,
        )
    )

    assert forecast.suggested_status == CycleStatus.AWAITING_DIAGNOSIS
    assert forecast.predicted_heat_date == breeding + timedelta(days=ESTRUS_CYCLE_DAYS)
    assert forecast.predicted_calving_date == breeding + timedelta(days=GESTATION_DAYS)


def test_last_heat_only():
    """Open cow with a known heat -> next heat in 21 days"""
    forecast = predict_cycle(CycleDates(last_heat_date=date(2024, 3, 1)))

    assert forecast.predicted_heat_date == date(2024, 3, 22)
    assert forecast.predicted_calving_date is None
    assert forecast.predicted_diagnosis_date is None
    assert forecast.suggested_status == CycleStatus.EMPTY


def test_last_heat_wins_over_calving():
    forecast = predict_cycle(
        CycleDates(last_calving_date=date(2024, 1, 1), last_heat_date=date(2024, 3, 1))
    )

    assert forecast.predicted_heat_date == date(2024, 3, 22)
    assert forecast.suggested_status == CycleStatus.EMPTY


def test_last_calving_only_is_postpartum_anestrus():
    """Fresh cow -> first heat expected 60 days after calving"""
    forecast = predict_cycle(CycleDates(last_calving_date=date(2024, 1, 1)))

    assert forecast.predicted_heat_date == date(2024, 1, 1) + timedelta(days=POSTPARTUM_RETURN_DAYS)
    assert forecast.predicted_heat_date == date(2024, 3, 1)
    assert forecast.predicted_calving_date is None
    assert forecast.predicted_diagnosis_date is None
    assert forecast.suggested_status == CycleStatus.POSTPARTUM_ANESTRUS
    assert forecast.suggested_status.value == "postpartum-anestrus"


def test_no_dates_gives_empty_forecast():
    forecast = predict_cycle(CycleDates())

    assert forecast.predicted_calving_date is None
    assert forecast.predicted_heat_date is None
    assert forecast.predicted_diagnosis_date is None
    assert forecast.suggested_status == CycleStatus.EMPTY


def test_inconsistent_dates_are_accepted():
    """Breeding before calving is not validated; the forecast still comes back"""
    forecast = predict_cycle(
        CycleDates(last_calving_date=date(2024, 6, 1), breeding_date=date(2023, 1, 1))
    )

    assert forecast.suggested_status == CycleStatus.AWAITING_DIAGNOSIS
    assert forecast.predicted_diagnosis_date == date(2023, 1, 1) + timedelta(days=DIAGNOSIS_WINDOW_DAYS)


def test_forecast_is_repeatable():
    """Same inputs always yield the same forecast"""
    dates = CycleDates(last_heat_date=date(2024, 2, 10), breeding_date=date(2024, 2, 12))

    assert predict_cycle(dates) == predict_cycle(dates)
    assert repr(predict_cycle(dates)) == repr(predict_cycle(dates))


def test_breeding_near_end_of_calendar_still_forecasts():
    """Predictions past date.max are left empty instead of failing"""
    forecast = predict_cycle(CycleDates(breeding_date=date(9999, 6, 1)))

    assert forecast.suggested_status == CycleStatus.AWAITING_DIAGNOSIS
    assert forecast.predicted_calving_date is None
    assert forecast.predicted_heat_date == date(9999, 6, 22)
    assert forecast.predicted_diagnosis_date == date(9999, 7, 16)


def test_last_day_of_calendar_gives_no_dates():
    forecast = predict_cycle(CycleDates(last_calving_date=date.max))

    assert forecast.suggested_status == CycleStatus.POSTPARTUM_ANESTRUS
    assert forecast.predicted_heat_date is None
