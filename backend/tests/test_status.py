import pytest

from sanjeevan.models import PrescriptionStatus
from sanjeevan.services.status import present_status


@pytest.mark.parametrize("status", list(PrescriptionStatus))
def test_every_status_has_a_presentation(status):
    presentation = present_status(status, "Dr. Anil Kumar")

    assert presentation.title
    assert "Dr. Anil Kumar" in presentation.description


def test_rejected_shows_reason():
    presentation = present_status(PrescriptionStatus.REJECTED, "Dr. Anil Kumar", "X")

    assert presentation.title == "Prescription Rejected"
    assert presentation.rejection_reason == "X"
    assert presentation.icon == "x-circle"


def test_rejected_without_reason_has_no_reason_block():
    presentation = present_status(PrescriptionStatus.REJECTED, "Dr. Anil Kumar", "")

    assert presentation.rejection_reason is None


def test_approved_never_shows_reason():
    presentation = present_status(PrescriptionStatus.APPROVED, "Dr. Anil Kumar", "X")

    assert presentation.title == "Prescription Approved"
    assert presentation.rejection_reason is None
    assert presentation.description == "This prescription was reviewed and approved by Dr. Anil Kumar."


def test_pending_presentation():
    presentation = present_status(PrescriptionStatus.PENDING, "Dr. Anil Kumar", "X")

    assert presentation.title == "Approval Pending"
    assert presentation.color == "text-yellow-500"
    assert presentation.rejection_reason is None


def test_unknown_status_raises():
    with pytest.raises(ValueError):
        present_status("Archived", "Dr. Anil Kumar")


@pytest.mark.parametrize("value, title", [
    ("Approved", "Prescription Approved"),
    ("Rejected", "Prescription Rejected"),
    ("Pending", "Approval Pending"),
])
def test_plain_string_status_is_accepted(value, title):
    assert present_status(value, "Dr. Anil Kumar", "X").title == title
