class PrescriptionError(Exception):
    """Base class for errors scoped to a single prescription view."""


class IncompleteRecord(PrescriptionError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Consultation record is missing required field '{field}'")


class RenderError(PrescriptionError):
    """The prescription document could not be generated."""


class EnvironmentNotReady(PrescriptionError):
    """Document generation was requested before the view reached Mounted(ready)."""
