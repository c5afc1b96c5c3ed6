import pytest

from sanjeevan.core.errors import IncompleteRecord
from sanjeevan.models import ConsultationRecord, ExportSchema
from sanjeevan.services.assembler import assemble

from conftest import with_case

INTERNAL_FIELDS = {"status", "rejectionReason", "transcript", "confidence"}


def test_assemble_copies_export_fields(sample_record):
    schema = assemble(sample_record)

    assert isinstance(schema, ExportSchema)
    assert schema.patient == sample_record.patient
    assert schema.medications == sample_record.medications
    assert schema.case_details.prescription_id == "P-98124"
    assert schema.case_details.date == "June 07, 2025"
    assert schema.case_details.doctor_name == "Dr. Anil Kumar"
    assert schema.case_details.ai_diagnosis == "Moderate Persistent Asthma"


def test_assemble_excludes_internal_fields(sample_record):
    dumped = assemble(sample_record).model_dump(by_alias=True)

    assert set(dumped) == {"patient", "medications", "caseDetails"}
    assert set(dumped["caseDetails"]) == {
        "prescriptionId",
        "date",
        "aiSummary",
        "aiDiagnosis",
        "medicalHistory",
        "doctorName",
    }
    assert not INTERNAL_FIELDS & set(dumped["caseDetails"])
    assert "Awaiting patient follow-up" not in str(dumped)


def test_assemble_is_idempotent(sample_record):
    first = assemble(sample_record)
    second = assemble(sample_record)

    assert first == second
    assert first is not second


def test_assemble_does_not_depend_on_status(sample_record):
    rejected = with_case(sample_record, status="Rejected", confidence=10.0, transcript="other")

    assert assemble(rejected) == assemble(sample_record)


def test_assemble_accepts_empty_medication_list(sample_record):
    record = sample_record.model_copy(update={"medications": []})

    assert assemble(record).medications == []


@pytest.mark.parametrize(
    "field, build",
    [
        ("prescriptionId", lambda r: with_case(r, prescription_id=None)),
        ("date", lambda r: with_case(r, date=None)),
        ("patient", lambda r: r.model_copy(update={"patient": None})),
        ("medications", lambda r: r.model_copy(update={"medications": None})),
    ],
)
def test_assemble_rejects_missing_required_field(sample_record, field, build):
    with pytest.raises(IncompleteRecord) as exc_info:
        assemble(build(sample_record))

    assert exc_info.value.field == field


def test_record_accepts_camel_case_payload():
    record = ConsultationRecord.model_validate({
        "case": {"prescriptionId": "P-1", "date": "today", "doctorName": "Dr. Rao"},
        "patient": {
            "name": "Ravi",
            "age": 30,
            "gender": "Male",
            "height": "170 cm",
            "weight": "70 kg",
            "allergies": [],
        },
        "medications": [
            {"id": 1, "name": "Aspirin", "dosage": "75 mg", "frequency": "daily",
             "duration": "Ongoing", "isExisting": True},
        ],
    })

    schema = assemble(record)

    assert schema.case_details.prescription_id == "P-1"
    assert schema.medications[0].is_existing is True
