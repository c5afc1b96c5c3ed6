# backend/sanjeevan/services/assembler.py

from sanjeevan.core.errors import IncompleteRecord
from sanjeevan.models import ConsultationRecord, ExportCaseDetails, ExportSchema


def assemble(record: ConsultationRecord) -> ExportSchema:
    """
    Project a consultation record onto the export schema.

    Only the fields named in ExportCaseDetails are copied, so status,
    rejection reason, transcript and confidence never reach the document.
    """
    case = record.case
    if not case.prescription_id:
        raise IncompleteRecord("prescriptionId")
    if not case.date:
        raise IncompleteRecord("date")
    if record.patient is None:
        raise IncompleteRecord("patient")
    if record.medications is None:
        raise IncompleteRecord("medications")

    return ExportSchema(
        patient=record.patient,
        medications=list(record.medications),
        case_details=ExportCaseDetails(
            prescription_id=case.prescription_id,
            date=case.date,
            ai_summary=case.ai_summary,
            ai_diagnosis=case.ai_diagnosis,
            medical_history=case.medical_history,
            doctor_name=case.doctor_name,
        ),
    )
