"""Read-time status projection - pending items past their date read as overdue"""

from datetime import date
from typing import Optional

from herdbook.domain.models import InstallmentStatus, VaccinationStatus


def is_overdue(status: str, due_date: Optional[date], today: date) -> bool:
    """A pending item whose date is strictly before today"""
    return status == "pending" and due_date is not None and due_date < today


def effective_vaccination_status(
    status: VaccinationStatus,
    scheduled_date: Optional[date],
    today: date,
) -> VaccinationStatus:
    if is_overdue(VaccinationStatus(status).value, scheduled_date, today):
        return VaccinationStatus.OVERDUE
    return VaccinationStatus(status)


def effective_installment_status(
    status: InstallmentStatus,
    due_date: Optional[date],
    today: date,
) -> InstallmentStatus:
    if is_overdue(InstallmentStatus(status).value, due_date, today):
        return InstallmentStatus.OVERDUE
    return InstallmentStatus(status)
