"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple
from uuid import UUID


class CycleStatus(str, Enum):
    EMPTY = "empty"
    POSTPARTUM_ANESTRUS = "postpartum-anestrus"  # shown as "lactation"
    AWAITING_DIAGNOSIS = "awaiting-diagnosis"
    PREGNANT = "pregnant"


class BreedingMethod(str, Enum):
    NATURAL_MOUNT = "natural-mount"
    ARTIFICIAL_INSEMINATION = "artificial-insemination"


class VaccinationStatus(str, Enum):
    PENDING = "pending"
    APPLIED = "applied"
    OVERDUE = "overdue"  # read-time only
    CANCELLED = "cancelled"


class InstallmentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"  # read-time only
    CANCELLED = "cancelled"


class TransactionKind(str, Enum):
    PURCHASE = "purchase"
    SALE = "sale"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    FINALIZED = "finalized"
    CANCELLED = "cancelled"


class AnimalStatus(str, Enum):
    ACTIVE = "active"
    SOLD = "sold"
    DEAD = "dead"
    TRANSFERRED = "transferred"


class AnimalOrigin(str, Enum):
    BORN = "born"
    PURCHASED = "purchased"


@dataclass(frozen=True)
class CycleDates:
    """Optional input dates of a reproductive cycle"""

    last_calving_date: Optional[date] = None
    last_heat_date: Optional[date] = None
    breeding_date: Optional[date] = None


@dataclass(frozen=True)
class CycleForecast:
    """Derived predictions for a reproductive cycle"""

    predicted_calving_date: Optional[date]
    predicted_heat_date: Optional[date]
    predicted_diagnosis_date: Optional[date]
    suggested_status: CycleStatus


@dataclass
class Installment:
    """Single scheduled payment of a transaction"""

    installment_number: int
    due_date: date
    amount_cents: int
    status: InstallmentStatus = InstallmentStatus.PENDING

    @property
    def amount(self) -> Decimal:
        return Decimal(self.amount_cents) / 100


@dataclass(frozen=True)
class VaccineType:
    """Annual dose schedule of a vaccine"""

    doses_per_year: int
    days_between_doses: int
    female_only: bool = False
    mandatory: bool = False
    id: Optional[UUID] = None
    name: str = ""


@dataclass(frozen=True)
class DoseRecord:
    """The fields of a vaccination record that dose chaining reads"""

    id: UUID
    animal_id: UUID
    vaccine_type_id: UUID
    dose_number: int


@dataclass(frozen=True)
class DoseDraft:
    """A chained vaccination record that has not been persisted yet"""

    animal_id: UUID
    vaccine_type_id: UUID
    dose_number: int
    scheduled_date: date
    parent_record_id: UUID
    status: VaccinationStatus = VaccinationStatus.PENDING


@dataclass(frozen=True)
class LineItem:
    """Price group of a transaction: animals traded at one unit price"""

    unit_price: Decimal
    animal_ids: Tuple[UUID, ...] = ()
    quantity: Optional[int] = None  # defaults to the number of linked animals
    description: Optional[str] = None

    @property
    def head_count(self) -> int:
        return self.quantity if self.quantity is not None else len(self.animal_ids)
