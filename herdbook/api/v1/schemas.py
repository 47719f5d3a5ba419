"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from herdbook.domain.models import (
    BreedingMethod,
    CycleStatus,
    InstallmentStatus,
    TransactionKind,
    TransactionStatus,
    VaccinationStatus,
)


# Reproduction

class CycleDatesSchema(BaseModel):
    """Optional input dates of a reproductive cycle"""

    last_calving_date: Optional[date] = None
    last_heat_date: Optional[date] = None
    breeding_date: Optional[date] = None


class ForecastResponse(BaseModel):
    """Response for POST /v1/reproduction/forecast"""

    predicted_calving_date: Optional[date]
    predicted_heat_date: Optional[date]
    predicted_diagnosis_date: Optional[date]
    suggested_status: CycleStatus


class CycleRequest(CycleDatesSchema):
    """Request body for starting or editing a cycle"""

    animal_id: Optional[UUID] = Field(None, description="Required when starting a new cycle")
    breeding_sire_id: Optional[UUID] = None
    breeding_method: Optional[BreedingMethod] = None
    notes: Optional[str] = None


class DiagnosisRequest(BaseModel):
    pregnant: bool


class CycleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    animal_id: UUID
    last_calving_date: Optional[date]
    last_heat_date: Optional[date]
    breeding_date: Optional[date]
    breeding_sire_id: Optional[UUID]
    breeding_method: Optional[BreedingMethod]
    predicted_calving_date: Optional[date]
    predicted_heat_date: Optional[date]
    predicted_diagnosis_date: Optional[date]
    status: CycleStatus
    active: bool
    notes: Optional[str]


# Transactions

class LineItemSchema(BaseModel):
    """Price group: animals traded at one unit price"""

    unit_price: Decimal = Field(..., ge=0)
    animal_ids: List[UUID] = Field(default_factory=list)
    quantity: Optional[int] = Field(None, ge=1)
    description: Optional[str] = None


class TransactionRequest(BaseModel):
    """Request body for POST /v1/transactions"""

    kind: TransactionKind
    negotiation_date: date
    installment_count: int = Field(1, description="Number of installments (>= 1)")
    items: List[LineItemSchema] = Field(..., min_length=1)
    partner_name: Optional[str] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None


class InstallmentSchema(BaseModel):
    """Single installment of a transaction"""

    id: UUID
    transaction_id: UUID
    installment_number: int
    due_date: date
    amount: Decimal
    amount_cents: int
    status: InstallmentStatus
    paid_on: Optional[date] = None


class TransactionResponse(BaseModel):
    """Response for POST /v1/transactions and GET /v1/transactions/{id}"""

    id: UUID
    kind: TransactionKind
    negotiation_date: date
    installment_count: int
    total_amount: Decimal
    total_cents: int
    status: TransactionStatus
    partner_name: Optional[str] = None
    animal_ids: List[UUID]
    installments: List[InstallmentSchema]


class PaymentRequest(BaseModel):
    paid_on: Optional[date] = Field(None, description="Defaults to today")


class InstallmentListResponse(BaseModel):
    installments: List[InstallmentSchema]


# Vaccinations

class VaccineTypeRequest(BaseModel):
    name: str = Field(..., min_length=1)
    doses_per_year: int = Field(1, ge=1)
    days_between_doses: int = Field(1, ge=1)
    female_only: bool = False
    mandatory: bool = False


class VaccineTypeResponse(VaccineTypeRequest):
    model_config = ConfigDict(from_attributes=True)

    id: UUID


class ApplicationRequest(BaseModel):
    """Request body for POST /v1/vaccinations"""

    vaccine_type_id: UUID
    animal_ids: List[UUID] = Field(..., min_length=1)
    application_date: date
    notes: Optional[str] = None


class ApplyDoseRequest(BaseModel):
    applied_on: Optional[date] = Field(None, description="Defaults to today")
    notes: Optional[str] = None


class VaccinationSchema(BaseModel):
    id: UUID
    animal_id: UUID
    vaccine_type_id: UUID
    scheduled_date: date
    applied_date: Optional[date] = None
    status: VaccinationStatus
    dose_number: int
    parent_record_id: Optional[UUID] = None


class VaccinationListResponse(BaseModel):
    records: List[VaccinationSchema]


class ApplyDoseResponse(BaseModel):
    applied: VaccinationSchema
    next_dose: Optional[VaccinationSchema] = None


# Animals

class AnimalRequest(BaseModel):
    sex: Literal["M", "F"]
    tag_number: Optional[str] = None
    name: Optional[str] = None
    birth_date: Optional[date] = None


class AnimalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    sex: str
    tag_number: Optional[str]
    name: Optional[str]
    birth_date: Optional[date]
    origin: str
    status: str
    status_date: Optional[date]
    current_weight_kg: Optional[float]


class WeightRequest(BaseModel):
    weight_kg: float = Field(..., gt=0)
    weighed_on: date
    notes: Optional[str] = None


class WeightResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    animal_id: UUID
    weight_kg: float
    weighed_on: date
