# backend/sanjeevan/services/status.py

from typing import Optional, Union

from pydantic import BaseModel

from sanjeevan.models import PrescriptionStatus


class StatusPresentation(BaseModel):
    icon: str
    color: str
    bg_color: str
    title: str
    description: str
    rejection_reason: Optional[str] = None


def present_status(
    status: Union[PrescriptionStatus, str],
    doctor_name: str,
    rejection_reason: Optional[str] = None,
) -> StatusPresentation:
    status = PrescriptionStatus(status)
    if status is PrescriptionStatus.APPROVED:
        return StatusPresentation(
            icon="check-circle-2",
            color="text-green-500",
            bg_color="bg-green-500/10",
            title="Prescription Approved",
            description=f"This prescription was reviewed and approved by {doctor_name}.",
        )
    if status is PrescriptionStatus.REJECTED:
        return StatusPresentation(
            icon="x-circle",
            color="text-red-500",
            bg_color="bg-red-500/10",
            title="Prescription Rejected",
            description=f"This prescription was rejected by {doctor_name}.",
            rejection_reason=rejection_reason or None,
        )
    if status is PrescriptionStatus.PENDING:
        return StatusPresentation(
            icon="clock",
            color="text-yellow-500",
            bg_color="bg-yellow-500/10",
            title="Approval Pending",
            description=f"This prescription is awaiting review by {doctor_name}.",
        )
    raise ValueError(f"Unhandled prescription status: {status!r}")
