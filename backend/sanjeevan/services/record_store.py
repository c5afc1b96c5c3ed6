# backend/sanjeevan/services/record_store.py

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import structlog
from pydantic import TypeAdapter

from sanjeevan.core.errors import IncompleteRecord
from sanjeevan.models import ConsultationRecord

logger = structlog.get_logger(__name__)

_records_adapter = TypeAdapter(List[ConsultationRecord])


class RecordStore:
    """Read-only lookup of consultation records by prescription id."""

    def __init__(self, records: Iterable[ConsultationRecord] = ()):
        self._records: Dict[str, ConsultationRecord] = {}
        for record in records:
            self.add(record)

    def add(self, record: ConsultationRecord) -> None:
        prescription_id = record.case.prescription_id
        if not prescription_id:
            raise IncompleteRecord("prescriptionId")
        self._records[prescription_id] = record

    def get(self, prescription_id: str) -> Optional[ConsultationRecord]:
        return self._records.get(prescription_id)

    def __contains__(self, prescription_id: str) -> bool:
        return prescription_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "RecordStore":
        """Load a JSON array of consultation records."""
        records = _records_adapter.validate_json(Path(path).read_bytes())
        logger.info("records_loaded", path=str(path), count=len(records))
        return cls(records)
