"""Purchase/sale endpoints and installment settlement"""

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from herdbook.api.dependencies import get_request_id, get_today, to_http_error
from herdbook.api.v1.schemas import (
    InstallmentListResponse,
    InstallmentSchema,
    PaymentRequest,
    TransactionRequest,
    TransactionResponse,
)
from herdbook.domain.exceptions import DomainException
from herdbook.domain.models import LineItem, TransactionKind
from herdbook.domain.status import effective_installment_status
from herdbook.infrastructure.database.models import Installment, Transaction
from herdbook.infrastructure.database.session import get_db
from herdbook.services import transactions

router = APIRouter()


def _installment(inst: Installment, today: date) -> InstallmentSchema:
    return InstallmentSchema(
        id=inst.id,
        transaction_id=inst.transaction_id,
        installment_number=inst.installment_number,
        due_date=inst.due_date,
        amount=Decimal(inst.amount_cents) / 100,
        amount_cents=inst.amount_cents,
        status=effective_installment_status(inst.status, inst.due_date, today),
        paid_on=inst.paid_on,
    )


def _transaction(transaction: Transaction, today: date) -> TransactionResponse:
    return TransactionResponse(
        id=transaction.id,
        kind=transaction.kind,
        negotiation_date=transaction.negotiation_date,
        installment_count=transaction.installment_count,
        total_amount=Decimal(transaction.total_cents) / 100,
        total_cents=transaction.total_cents,
        status=transaction.status,
        partner_name=transaction.partner_name,
        animal_ids=[link.animal_id for link in transaction.animal_links],
        installments=[_installment(inst, today) for inst in transaction.installments],
    )


@router.post("/transactions", response_model=TransactionResponse, status_code=201)
def create_transaction(
    body: TransactionRequest,
    request: Request,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """
    Record a purchase or sale.

    Flow:
    1. Total the price groups and split it into 30-day installments
    2. Persist transaction, price groups, animal links and installments
    3. Update animal status (sold / purchased)
    All steps commit together or not at all.
    """
    request_id = get_request_id(request)
    items = [
        LineItem(
            unit_price=item.unit_price,
            animal_ids=tuple(item.animal_ids),
            quantity=item.quantity,
            description=item.description,
        )
        for item in body.items
    ]
    try:
        transaction = transactions.create_transaction(
            db,
            kind=body.kind,
            negotiation_date=body.negotiation_date,
            installment_count=body.installment_count,
            items=items,
            partner_name=body.partner_name,
            payment_method=body.payment_method,
            notes=body.notes,
        )
    except DomainException as e:
        logging.warning(f"Transaction rejected: {e}", extra={"request_id": request_id})
        raise to_http_error(e)

    return _transaction(transaction, today)


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: uuid.UUID,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    try:
        transaction = transactions.get_transaction(db, transaction_id)
    except DomainException as e:
        raise to_http_error(e)
    return _transaction(transaction, today)


@router.get("/installments", response_model=InstallmentListResponse)
def list_installments(
    kind: Optional[TransactionKind] = Query(None, description="purchase (payable) or sale (receivable)"),
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    """List installments with overdue status derived from today's date"""
    return InstallmentListResponse(
        installments=[_installment(inst, today) for inst in transactions.list_installments(db, kind=kind)]
    )


@router.post("/installments/{installment_id}/pay", response_model=InstallmentSchema)
def pay_installment(
    installment_id: uuid.UUID,
    body: PaymentRequest,
    request: Request,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    try:
        installment = transactions.pay_installment(db, installment_id, body.paid_on or today)
    except DomainException as e:
        logging.warning(f"Payment rejected: {e}", extra={"request_id": get_request_id(request)})
        raise to_http_error(e)
    return _installment(installment, today)


@router.post("/installments/{installment_id}/cancel", response_model=InstallmentSchema)
def cancel_installment(
    installment_id: uuid.UUID,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    try:
        installment = transactions.cancel_installment(db, installment_id)
    except DomainException as e:
        raise to_http_error(e)
    return _installment(installment, today)
