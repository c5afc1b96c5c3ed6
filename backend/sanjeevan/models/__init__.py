"""Pydantic models for the prescription record service."""

from .consultation import (
    ConsultationCase,
    ConsultationRecord,
    Gender,
    Medication,
    PatientProfile,
    PrescriptionStatus,
)
from .export import ExportCaseDetails, ExportSchema

__all__ = [
    "ConsultationCase",
    "ConsultationRecord",
    "ExportCaseDetails",
    "ExportSchema",
    "Gender",
    "Medication",
    "PatientProfile",
    "PrescriptionStatus",
]
