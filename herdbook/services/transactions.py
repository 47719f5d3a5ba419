"""Purchase/sale transactions, their installments and payment settlement"""

import uuid
from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from herdbook.domain.exceptions import InvalidArgumentError, RecordNotFoundError
from herdbook.domain.installments import generate_installments, to_cents
from herdbook.domain.models import (
    AnimalStatus,
    InstallmentStatus,
    LineItem,
    TransactionKind,
    TransactionStatus,
)
from herdbook.infrastructure.database.models import Installment, Transaction
from herdbook.infrastructure.database.repositories import AnimalRepository, TransactionRepository
from herdbook.infrastructure.observability.logging import log_transaction_created
from herdbook.infrastructure.observability.metrics import installment_payment_counter, record_transaction
from herdbook.services.atomic import atomic


def _validate_items(items: Sequence[LineItem]) -> int:
    """Check line items and return the transaction total in cents"""
    if not items:
        raise InvalidArgumentError("A transaction needs at least one line item")

    seen = set()
    total_cents = 0
    for item in items:
        if item.head_count < 1:
            raise InvalidArgumentError("Each line item must cover at least one animal")
        if item.quantity is not None and item.animal_ids and item.quantity != len(item.animal_ids):
            raise InvalidArgumentError(
                f"Line item quantity {item.quantity} does not match its {len(item.animal_ids)} linked animals"
            )
        unit_cents = to_cents(item.unit_price)
        if unit_cents < 0:
            raise InvalidArgumentError(f"Unit price cannot be negative, got {item.unit_price!r}")
        for animal_id in item.animal_ids:
            if animal_id in seen:
                raise InvalidArgumentError(f"Animal {animal_id} appears in more than one line item")
            seen.add(animal_id)
        total_cents += unit_cents * item.head_count
    return total_cents


def create_transaction(
    db: Session,
    kind: TransactionKind,
    negotiation_date: date,
    installment_count: int,
    items: Sequence[LineItem],
    partner_name: Optional[str] = None,
    payment_method: Optional[str] = None,
    notes: Optional[str] = None,
) -> Transaction:
    """
    Record a purchase or sale as one atomic unit.

    Flow:
    1. Total the line items and generate the installment schedule
    2. Insert the transaction and its line items
    3. Link every animal; sales mark animals sold on the negotiation date,
       purchases mark them acquired by purchase
    4. Insert the installments
    5. Commit, or roll back everything on the first failure
    """
    kind = TransactionKind(kind)
    total_cents = _validate_items(items)
    # Raises before anything is written
    schedule = generate_installments(
        total_amount=Decimal(total_cents) / 100,
        count=installment_count,
        negotiation_date=negotiation_date,
    )

    with atomic(db, "create_transaction"):
        transaction_repo = TransactionRepository(db)
        animal_repo = AnimalRepository(db)

        transaction = transaction_repo.create_transaction(
            kind=kind.value,
            negotiation_date=negotiation_date,
            installment_count=installment_count,
            total_cents=total_cents,
            partner_name=partner_name,
            payment_method=payment_method,
            notes=notes,
        )

        animal_count = 0
        for item in items:
            db_item = transaction_repo.add_item(
                transaction_id=transaction.id,
                unit_price_cents=to_cents(item.unit_price),
                quantity=item.head_count,
                description=item.description,
            )
            animals = {a.id: a for a in animal_repo.get_animals(item.animal_ids)}
            for animal_id in item.animal_ids:
                animal = animals.get(animal_id)
                if animal is None:
                    raise RecordNotFoundError("Animal", animal_id)
                transaction_repo.link_animal(transaction.id, animal_id, db_item.id)
                if kind is TransactionKind.SALE:
                    if animal.status != AnimalStatus.ACTIVE.value:
                        raise InvalidArgumentError(f"Animal {animal_id} is not active and cannot be sold")
                    animal_repo.mark_sold(animal, transaction.id, negotiation_date)
                else:
                    animal_repo.mark_purchased(animal, transaction.id)
                animal_count += 1

        transaction_repo.add_installments(transaction.id, schedule)

    record_transaction(kind.value, len(schedule))
    log_transaction_created(str(transaction.id), kind.value, total_cents, len(schedule), animal_count)
    return transaction


def get_transaction(db: Session, transaction_id: uuid.UUID) -> Transaction:
    transaction = TransactionRepository(db).get_transaction(transaction_id)
    if transaction is None:
        raise RecordNotFoundError("Transaction", transaction_id)
    return transaction


def pay_installment(db: Session, installment_id: uuid.UUID, paid_on: date) -> Installment:
    """
    Settle one installment.

    Once every installment of the transaction is paid the transaction is
    finalized in the same commit. Paying an already paid installment is a no-op.
    """
    with atomic(db, "pay_installment"):
        transaction_repo = TransactionRepository(db)
        installment = transaction_repo.get_installment(installment_id)
        if installment is None:
            raise RecordNotFoundError("Installment", installment_id)
        if installment.status == InstallmentStatus.PAID.value:
            return installment
        if installment.status == InstallmentStatus.CANCELLED.value:
            raise InvalidArgumentError("A cancelled installment cannot be paid")

        installment.status = InstallmentStatus.PAID.value
        installment.paid_on = paid_on
        db.flush()

        statuses = transaction_repo.get_installment_statuses(installment.transaction_id)
        if all(status == InstallmentStatus.PAID.value for status in statuses):
            transaction = transaction_repo.get_transaction(installment.transaction_id)
            transaction.status = TransactionStatus.FINALIZED.value

    installment_payment_counter.inc()
    return installment


def cancel_installment(db: Session, installment_id: uuid.UUID) -> Installment:
    with atomic(db, "cancel_installment"):
        installment = TransactionRepository(db).get_installment(installment_id)
        if installment is None:
            raise RecordNotFoundError("Installment", installment_id)
        if installment.status == InstallmentStatus.PAID.value:
            raise InvalidArgumentError("A paid installment cannot be cancelled")
        installment.status = InstallmentStatus.CANCELLED.value

    return installment


def list_installments(db: Session, kind: Optional[TransactionKind] = None) -> List[Installment]:
    return TransactionRepository(db).list_installments(kind=TransactionKind(kind).value if kind else None)
