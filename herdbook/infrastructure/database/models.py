"""SQLAlchemy ORM models for the herd registry"""

import uuid
from sqlalchemy import Column, String, BigInteger, Boolean, Float, DateTime, Date, Integer, ForeignKey, Text, Uuid
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class Animal(Base):
    """Registered animal"""

    __tablename__ = "animal"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    tag_number = Column(Text, nullable=True, index=True)
    name = Column(Text, nullable=True)
    sex = Column(String(1), nullable=False)  # "M" or "F"
    birth_date = Column(Date, nullable=True)
    origin = Column(Text, nullable=False, default="born")
    status = Column(Text, nullable=False, default="active")
    status_date = Column(Date, nullable=True)
    current_weight_kg = Column(Float, nullable=True)
    purchase_transaction_id = Column(Uuid, ForeignKey("herd_transaction.id"), nullable=True)
    sale_transaction_id = Column(Uuid, ForeignKey("herd_transaction.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    weights = relationship("WeightRecord", back_populates="animal", cascade="all, delete-orphan")


class WeightRecord(Base):
    """Weighing history entry"""

    __tablename__ = "weight_record"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    animal_id = Column(Uuid, ForeignKey("animal.id", ondelete="CASCADE"), nullable=False, index=True)
    weight_kg = Column(Float, nullable=False)
    weighed_on = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    animal = relationship("Animal", back_populates="weights")


class ReproductiveCycle(Base):
    """Reproductive follow-up of a female; one active cycle per animal"""

    __tablename__ = "reproductive_cycle"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    animal_id = Column(Uuid, ForeignKey("animal.id", ondelete="CASCADE"), nullable=False, index=True)
    last_calving_date = Column(Date, nullable=True)
    last_heat_date = Column(Date, nullable=True)
    breeding_date = Column(Date, nullable=True)
    breeding_sire_id = Column(Uuid, ForeignKey("animal.id"), nullable=True)
    breeding_method = Column(Text, nullable=True)
    predicted_calving_date = Column(Date, nullable=True)
    predicted_heat_date = Column(Date, nullable=True)
    predicted_diagnosis_date = Column(Date, nullable=True)
    status = Column(Text, nullable=False, default="empty")
    active = Column(Boolean, nullable=False, default=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class VaccineType(Base):
    """Vaccine catalogue entry with its annual dose schedule"""

    __tablename__ = "vaccine_type"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False, unique=True)
    doses_per_year = Column(Integer, nullable=False, default=1)
    days_between_doses = Column(Integer, nullable=False, default=1)
    female_only = Column(Boolean, nullable=False, default=False)
    mandatory = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class VaccinationRecord(Base):
    """Scheduled or applied vaccine dose"""

    __tablename__ = "vaccination_record"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    animal_id = Column(Uuid, ForeignKey("animal.id", ondelete="CASCADE"), nullable=False, index=True)
    vaccine_type_id = Column(Uuid, ForeignKey("vaccine_type.id"), nullable=False)
    scheduled_date = Column(Date, nullable=False)
    applied_date = Column(Date, nullable=True)
    status = Column(Text, nullable=False, default="pending")
    dose_number = Column(Integer, nullable=False, default=1)
    parent_record_id = Column(Uuid, ForeignKey("vaccination_record.id"), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    vaccine_type = relationship("VaccineType")


class Transaction(Base):
    """Purchase or sale of animals"""

    __tablename__ = "herd_transaction"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    kind = Column(Text, nullable=False)  # "purchase" or "sale"
    partner_name = Column(Text, nullable=True)
    negotiation_date = Column(Date, nullable=False)
    installment_count = Column(Integer, nullable=False)
    payment_method = Column(Text, nullable=True)
    total_cents = Column(BigInteger, nullable=False)
    status = Column(Text, nullable=False, default="pending")
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    items = relationship("TransactionItem", back_populates="transaction", cascade="all, delete-orphan")
    installments = relationship(
        "Installment",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="Installment.installment_number",
    )
    animal_links = relationship("TransactionAnimal", back_populates="transaction", cascade="all, delete-orphan")


class TransactionItem(Base):
    """Price group: a number of animals sold or bought at one unit price"""

    __tablename__ = "transaction_item"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    transaction_id = Column(Uuid, ForeignKey("herd_transaction.id", ondelete="CASCADE"), nullable=False)
    unit_price_cents = Column(BigInteger, nullable=False)
    quantity = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    transaction = relationship("Transaction", back_populates="items")


class TransactionAnimal(Base):
    """Link between a transaction and one of the animals it moved"""

    __tablename__ = "transaction_animal"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    transaction_id = Column(Uuid, ForeignKey("herd_transaction.id", ondelete="CASCADE"), nullable=False)
    animal_id = Column(Uuid, ForeignKey("animal.id"), nullable=False)
    item_id = Column(Uuid, ForeignKey("transaction_item.id", ondelete="CASCADE"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    transaction = relationship("Transaction", back_populates="animal_links")


class Installment(Base):
    """Individual installment within a transaction"""

    __tablename__ = "installment"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    transaction_id = Column(Uuid, ForeignKey("herd_transaction.id", ondelete="CASCADE"), nullable=False)
    installment_number = Column(Integer, nullable=False)
    due_date = Column(Date, nullable=False)
    amount_cents = Column(BigInteger, nullable=False)
    status = Column(Text, nullable=False, default="pending")
    paid_on = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    transaction = relationship("Transaction", back_populates="installments")
