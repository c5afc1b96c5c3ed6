# backend/sanjeevan/models/consultation.py

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PrescriptionStatus(str, Enum):
    APPROVED = "Approved"
    REJECTED = "Rejected"
    PENDING = "Pending"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class RecordModel(BaseModel):
    """Immutable model that accepts both camelCase and snake_case keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PatientProfile(RecordModel):
    name: str
    age: int = Field(gt=0)
    gender: Gender
    height: str
    weight: str
    allergies: List[str] = []


class Medication(RecordModel):
    id: int
    name: str
    dosage: str
    frequency: str
    duration: str
    is_existing: bool = False


class ConsultationCase(RecordModel):
    """Case details as held in memory, including fields that never leave the app."""

    prescription_id: Optional[str] = None
    date: Optional[str] = None
    status: PrescriptionStatus = PrescriptionStatus.PENDING
    doctor_name: str = ""
    rejection_reason: Optional[str] = None
    ai_summary: str = ""
    ai_diagnosis: str = ""
    medical_history: str = ""
    transcript: str = ""
    # Advisory only; not rendered and not exported.
    confidence: Optional[float] = Field(default=None, ge=0, le=100)


class ConsultationRecord(RecordModel):
    case: ConsultationCase
    patient: Optional[PatientProfile] = None
    medications: Optional[List[Medication]] = None
