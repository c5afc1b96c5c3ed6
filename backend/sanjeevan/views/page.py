# backend/sanjeevan/views/page.py

from typing import List, Optional

from pydantic import BaseModel

from sanjeevan.models import ConsultationRecord, Medication, PrescriptionStatus
from sanjeevan.services.report_renderer import EXISTING_MARKER
from sanjeevan.services.status import StatusPresentation, present_status
from sanjeevan.views.trigger import TriggerElement

NO_UPLOADS = "No images were uploaded for this consultation."
UNAVAILABLE = "Not available for this consultation."
MEDICATIONS_TITLE = "Finalized Prescription"
MEDICATIONS_DESCRIPTIONS = {
    PrescriptionStatus.APPROVED: "This prescription has been approved by your doctor. Follow the instructions carefully.",
    PrescriptionStatus.REJECTED: "This prescription was not approved by your doctor. Do not start these medications.",
    PrescriptionStatus.PENDING: "This prescription is awaiting review by your doctor.",
}


class MedicationRowView(BaseModel):
    id: int
    name: str
    badge: Optional[str] = None
    dosage: str
    frequency: str
    duration: str


class PrescriptionPage(BaseModel):
    title: str
    subtitle: str
    actions: List[TriggerElement] = []
    status: StatusPresentation
    patient_details: str
    physician: str
    allergies_and_history: str
    ai_summary: str
    diagnosis: str
    transcript: str
    uploads: str = NO_UPLOADS
    medications_title: str = MEDICATIONS_TITLE
    medications_description: str
    medications: List[MedicationRowView] = []
    notice: Optional[str] = None


def _medication_row(med: Medication) -> MedicationRowView:
    return MedicationRowView(
        id=med.id,
        name=med.name,
        badge=EXISTING_MARKER if med.is_existing else None,
        dosage=med.dosage,
        frequency=med.frequency,
        duration=med.duration,
    )


def build_page(
    record: ConsultationRecord,
    actions: Optional[List[TriggerElement]] = None,
    notice: Optional[str] = None,
) -> PrescriptionPage:
    """Build the on-screen view of a record; missing parts render as placeholders."""
    case = record.case
    patient = record.patient

    if patient is not None:
        title = f"Prescription for {patient.name}"
        patient_details = " • ".join(
            [f"{patient.age} years old", patient.gender.value, patient.height, patient.weight]
        )
        allergies = ", ".join(patient.allergies)
    else:
        title = "Prescription"
        patient_details = UNAVAILABLE
        allergies = ""

    history = " • ".join(part for part in (allergies, case.medical_history) if part)

    return PrescriptionPage(
        title=title,
        subtitle=f"Prescription ID: {case.prescription_id or '-'} | Issued on: {case.date or '-'}",
        actions=actions or [],
        status=present_status(case.status, case.doctor_name, case.rejection_reason),
        patient_details=patient_details,
        physician=case.doctor_name,
        allergies_and_history=history or UNAVAILABLE,
        ai_summary=case.ai_summary,
        diagnosis=case.ai_diagnosis,
        transcript=case.transcript,
        medications_description=MEDICATIONS_DESCRIPTIONS[PrescriptionStatus(case.status)],
        medications=[_medication_row(med) for med in record.medications or []],
        notice=notice,
    )
