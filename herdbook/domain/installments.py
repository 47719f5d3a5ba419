"""Installment schedule generation for purchase and sale transactions"""

from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import List, Union

from herdbook.domain.exceptions import InvalidArgumentError
from herdbook.domain.models import Installment, InstallmentStatus
from herdbook.utils.date_utils import add_days

INSTALLMENT_INTERVAL_DAYS = 30

Amount = Union[Decimal, int, str]


def to_cents(amount: Amount) -> int:
    """Quantize a currency amount to whole cents (half-up)"""
    try:
        value = Decimal(str(amount))
    except InvalidOperation as e:
        raise InvalidArgumentError(f"Invalid amount: {amount!r}") from e
    if not value.is_finite():
        raise InvalidArgumentError(f"Invalid amount: {amount!r}")
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def generate_installments(
    total_amount: Amount,
    count: int,
    negotiation_date: date,
) -> List[Installment]:
    """
    Split a transaction total into equal installments on a 30-day cadence.

    Requirements:
    - Exactly `count` installments, numbered 1..count
    - Installment i (0-based) falls due at negotiation_date + (i + 1) * 30 days
    - Last installment absorbs rounding remainder so the sum equals the total
    - Every installment starts pending

    Args:
        total_amount: Transaction total in currency units (e.g. Decimal("1000.00"))
        count: Number of installments (>= 1)
        negotiation_date: Date the deal was closed

    Raises:
        InvalidArgumentError: count < 1 or total_amount <= 0

    Example:
        1000.00 / 3 -> [333.33, 333.33, 333.34]
        100000 cents // 3 = 33333 base, remainder 1
    """
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise InvalidArgumentError(f"Installment count must be a positive integer, got {count!r}")

    total_cents = to_cents(total_amount)
    if total_cents <= 0:
        raise InvalidArgumentError(f"Total amount must be positive, got {total_amount!r}")

    base_amount = total_cents // count
    remainder = total_cents % count

    installments = []
    for i in range(count):
        amount = base_amount + (remainder if i == count - 1 else 0)
        installments.append(
            Installment(
                installment_number=i + 1,
                due_date=add_days(negotiation_date, (i + 1) * INSTALLMENT_INTERVAL_DAYS),
                amount_cents=amount,
                status=InstallmentStatus.PENDING,
            )
        )

    return installments
