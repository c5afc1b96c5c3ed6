# backend/sanjeevan/models/export.py

from typing import List

from pydantic import ConfigDict

from .consultation import Medication, PatientProfile, RecordModel


class ExportModel(RecordModel):
    model_config = ConfigDict(extra="forbid")


class ExportCaseDetails(ExportModel):
    prescription_id: str
    date: str
    ai_summary: str
    ai_diagnosis: str
    medical_history: str
    doctor_name: str


class ExportSchema(ExportModel):
    """The part of a consultation record that is allowed into the exported document."""

    patient: PatientProfile
    medications: List[Medication]
    case_details: ExportCaseDetails
