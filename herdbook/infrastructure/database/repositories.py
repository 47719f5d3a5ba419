"""Data access layer for herd entities"""

import uuid
from datetime import date
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session
from herdbook.infrastructure.database.models import (
    Animal,
    Installment,
    ReproductiveCycle,
    Transaction,
    TransactionAnimal,
    TransactionItem,
    VaccinationRecord,
    VaccineType,
    WeightRecord,
)
from herdbook.domain import models as domain


class AnimalRepository:
    """Repository for animals and their weighing history"""

    def __init__(self, db: Session):
        self.db = db

    def create_animal(
        self,
        sex: str,
        tag_number: Optional[str] = None,
        name: Optional[str] = None,
        birth_date: Optional[date] = None,
        origin: str = domain.AnimalOrigin.BORN.value,
    ) -> Animal:
        db_animal = Animal(
            sex=sex,
            tag_number=tag_number,
            name=name,
            birth_date=birth_date,
            origin=origin,
            status=domain.AnimalStatus.ACTIVE.value,
        )
        self.db.add(db_animal)
        self.db.flush()
        return db_animal

    def get_animal(self, animal_id: uuid.UUID) -> Optional[Animal]:
        return self.db.get(Animal, animal_id)

    def get_animals(self, animal_ids: Iterable[uuid.UUID]) -> List[Animal]:
        ids = list(animal_ids)
        if not ids:
            return []
        return self.db.query(Animal).filter(Animal.id.in_(ids)).all()

    def mark_sold(self, animal: Animal, transaction_id: uuid.UUID, sold_on: date) -> None:
        animal.status = domain.AnimalStatus.SOLD.value
        animal.status_date = sold_on
        animal.sale_transaction_id = transaction_id

    def mark_purchased(self, animal: Animal, transaction_id: uuid.UUID) -> None:
        animal.origin = domain.AnimalOrigin.PURCHASED.value
        animal.purchase_transaction_id = transaction_id

    def add_weight(
        self,
        animal: Animal,
        weight_kg: float,
        weighed_on: date,
        notes: Optional[str] = None,
    ) -> WeightRecord:
        """Append a weighing and make it the animal's current weight"""
        record = WeightRecord(animal_id=animal.id, weight_kg=weight_kg, weighed_on=weighed_on, notes=notes)
        self.db.add(record)
        animal.current_weight_kg = weight_kg
        self.db.flush()
        return record


class CycleRepository:
    """Repository for reproductive cycles"""

    def __init__(self, db: Session):
        self.db = db

    def deactivate_cycles(self, animal_id: uuid.UUID) -> int:
        """Flag every cycle of the animal inactive; returns rows touched"""
        return (
            self.db.query(ReproductiveCycle)
            .filter(ReproductiveCycle.animal_id == animal_id, ReproductiveCycle.active.is_(True))
            .update({ReproductiveCycle.active: False}, synchronize_session="fetch")
        )

    def create_cycle(self, animal_id: uuid.UUID, **fields) -> ReproductiveCycle:
        db_cycle = ReproductiveCycle(animal_id=animal_id, active=True, **fields)
        self.db.add(db_cycle)
        self.db.flush()
        return db_cycle

    def get_cycle(self, cycle_id: uuid.UUID) -> Optional[ReproductiveCycle]:
        return self.db.get(ReproductiveCycle, cycle_id)

    def list_cycles(
        self,
        animal_id: Optional[uuid.UUID] = None,
        active_only: bool = True,
    ) -> List[ReproductiveCycle]:
        query = self.db.query(ReproductiveCycle)
        if animal_id is not None:
            query = query.filter(ReproductiveCycle.animal_id == animal_id)
        if active_only:
            query = query.filter(ReproductiveCycle.active.is_(True))
        return query.order_by(ReproductiveCycle.created_at.desc()).all()


class VaccinationRepository:
    """Repository for vaccine types and the vaccination schedule"""

    def __init__(self, db: Session):
        self.db = db

    def create_vaccine_type(
        self,
        name: str,
        doses_per_year: int,
        days_between_doses: int,
        female_only: bool = False,
        mandatory: bool = False,
    ) -> VaccineType:
        db_type = VaccineType(
            name=name,
            doses_per_year=doses_per_year,
            days_between_doses=days_between_doses,
            female_only=female_only,
            mandatory=mandatory,
        )
        self.db.add(db_type)
        self.db.flush()
        return db_type

    def get_vaccine_type(self, vaccine_type_id: uuid.UUID) -> Optional[VaccineType]:
        return self.db.get(VaccineType, vaccine_type_id)

    def create_record(
        self,
        animal_id: uuid.UUID,
        vaccine_type_id: uuid.UUID,
        scheduled_date: date,
        status: str,
        dose_number: int,
        applied_date: Optional[date] = None,
        parent_record_id: Optional[uuid.UUID] = None,
        notes: Optional[str] = None,
    ) -> VaccinationRecord:
        db_record = VaccinationRecord(
            animal_id=animal_id,
            vaccine_type_id=vaccine_type_id,
            scheduled_date=scheduled_date,
            applied_date=applied_date,
            status=status,
            dose_number=dose_number,
            parent_record_id=parent_record_id,
            notes=notes,
        )
        self.db.add(db_record)
        self.db.flush()
        return db_record

    def get_record(self, record_id: uuid.UUID) -> Optional[VaccinationRecord]:
        return self.db.get(VaccinationRecord, record_id)

    def has_child(self, record_id: uuid.UUID) -> bool:
        return (
            self.db.query(VaccinationRecord.id)
            .filter(VaccinationRecord.parent_record_id == record_id)
            .first()
            is not None
        )

    def list_records(self, animal_id: Optional[uuid.UUID] = None) -> List[VaccinationRecord]:
        query = self.db.query(VaccinationRecord)
        if animal_id is not None:
            query = query.filter(VaccinationRecord.animal_id == animal_id)
        return query.order_by(VaccinationRecord.scheduled_date.asc(), VaccinationRecord.dose_number.asc()).all()


class TransactionRepository:
    """Repository for transactions, their line items and installments"""

    def __init__(self, db: Session):
        self.db = db

    def create_transaction(
        self,
        kind: str,
        negotiation_date: date,
        installment_count: int,
        total_cents: int,
        partner_name: Optional[str] = None,
        payment_method: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Transaction:
        db_transaction = Transaction(
            kind=kind,
            negotiation_date=negotiation_date,
            installment_count=installment_count,
            total_cents=total_cents,
            partner_name=partner_name,
            payment_method=payment_method,
            notes=notes,
            status=domain.TransactionStatus.PENDING.value,
        )
        self.db.add(db_transaction)
        self.db.flush()  # Get ID without committing
        return db_transaction

    def add_item(
        self,
        transaction_id: uuid.UUID,
        unit_price_cents: int,
        quantity: int,
        description: Optional[str] = None,
    ) -> TransactionItem:
        db_item = TransactionItem(
            transaction_id=transaction_id,
            unit_price_cents=unit_price_cents,
            quantity=quantity,
            description=description,
        )
        self.db.add(db_item)
        self.db.flush()
        return db_item

    def link_animal(
        self,
        transaction_id: uuid.UUID,
        animal_id: uuid.UUID,
        item_id: Optional[uuid.UUID] = None,
    ) -> TransactionAnimal:
        link = TransactionAnimal(transaction_id=transaction_id, animal_id=animal_id, item_id=item_id)
        self.db.add(link)
        return link

    def add_installments(
        self,
        transaction_id: uuid.UUID,
        installments: List[domain.Installment],
    ) -> List[Installment]:
        db_installments = []
        for inst in installments:
            db_installment = Installment(
                transaction_id=transaction_id,
                installment_number=inst.installment_number,
                due_date=inst.due_date,
                amount_cents=inst.amount_cents,
                status=domain.InstallmentStatus(inst.status).value,
            )
            self.db.add(db_installment)
            db_installments.append(db_installment)
        self.db.flush()
        return db_installments

    def get_transaction(self, transaction_id: uuid.UUID) -> Optional[Transaction]:
        return self.db.get(Transaction, transaction_id)

    def get_installment(self, installment_id: uuid.UUID) -> Optional[Installment]:
        return self.db.get(Installment, installment_id)

    def get_installment_statuses(self, transaction_id: uuid.UUID) -> List[str]:
        rows = (
            self.db.query(Installment.status)
            .filter(Installment.transaction_id == transaction_id)
            .all()
        )
        return [row[0] for row in rows]

    def list_installments(self, kind: Optional[str] = None) -> List[Installment]:
        query = self.db.query(Installment).join(Transaction)
        if kind is not None:
            query = query.filter(Transaction.kind == kind)
        return query.order_by(Installment.due_date.asc(), Installment.installment_number.asc()).all()
