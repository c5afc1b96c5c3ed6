from io import BytesIO
from pathlib import Path

import pytest
from PyPDF2 import PdfReader

from sanjeevan.models import ConsultationRecord, Medication
from sanjeevan.services.record_store import RecordStore

DATA_FILE = Path(__file__).resolve().parent.parent / "data" / "consultations.json"


@pytest.fixture
def record_store() -> RecordStore:
    return RecordStore.from_json_file(DATA_FILE)


@pytest.fixture
def sample_record(record_store) -> ConsultationRecord:
    return record_store.get("P-98124")


def make_medication(id: int, name: str, is_existing: bool = False) -> Medication:
    return Medication(
        id=id,
        name=name,
        dosage="500 mg",
        frequency="1 tablet twice daily",
        duration="Ongoing" if is_existing else "30 Days",
        is_existing=is_existing,
    )


def with_case(record: ConsultationRecord, **changes) -> ConsultationRecord:
    return record.model_copy(update={"case": record.case.model_copy(update=changes)})


def pdf_text(content: bytes) -> str:
    reader = PdfReader(BytesIO(content))
    return "\n".join(page.extract_text() or "" for page in reader.pages)
