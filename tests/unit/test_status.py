"""Unit tests for read-time overdue projection"""

from datetime import date
from herdbook.domain.models import InstallmentStatus, VaccinationStatus
from herdbook.domain.status import effective_installment_status, effective_vaccination_status

TODAY = date(2024, 6, 1)


def test_pending_installment_past_due_reads_overdue():
    assert effective_installment_status("pending", date(2024, 5, 31), TODAY) == InstallmentStatus.OVERDUE


def test_pending_installment_due_today_is_not_overdue():
    assert effective_installment_status("pending", TODAY, TODAY) == InstallmentStatus.PENDING


def test_paid_installment_past_due_stays_paid():
    assert effective_installment_status(InstallmentStatus.PAID, date(2024, 1, 1), TODAY) == InstallmentStatus.PAID


def test_cancelled_installment_stays_cancelled():
    assert effective_installment_status("cancelled", date(2024, 1, 1), TODAY) == InstallmentStatus.CANCELLED


def test_pending_vaccination_past_schedule_reads_overdue():
    assert effective_vaccination_status("pending", date(2024, 5, 1), TODAY) == VaccinationStatus.OVERDUE


def test_future_vaccination_stays_pending():
    assert effective_vaccination_status("pending", date(2024, 7, 1), TODAY) == VaccinationStatus.PENDING


def test_applied_vaccination_is_never_overdue():
    assert effective_vaccination_status("applied", date(2024, 1, 1), TODAY) == VaccinationStatus.APPLIED
