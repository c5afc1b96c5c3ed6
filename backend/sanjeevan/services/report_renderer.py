# backend/sanjeevan/services/report_renderer.py
#
# Builds the downloadable prescription PDF:
#   1. Header    - prescription id, date, prescribing doctor
#   2. Patient   - profile and allergies
#   3. Clinical  - AI summary, AI diagnosis, medical history
#   4. Medications table, one row per medication in entry order

from functools import partial
from io import BytesIO
from typing import Any, List, Optional
from xml.sax.saxutils import escape

import structlog
from pydantic import BaseModel, ValidationError
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, letter
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import cm
from reportlab.platypus import (
    HRFlowable,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from sanjeevan.core.config import settings
from sanjeevan.core.errors import RenderError
from sanjeevan.models import ExportSchema, Medication
from sanjeevan.services.fonts import FontFamily, select_font

logger = structlog.get_logger(__name__)

NAVY = colors.HexColor("#1A2B4A")
TEAL = colors.HexColor("#0D7377")
LIGHT_GREY = colors.HexColor("#F5F5F5")
MID_GREY = colors.HexColor("#888888")
DARK_GREY = colors.HexColor("#333333")
WHITE = colors.white

MEDIA_TYPE = "application/pdf"
EXISTING_MARKER = "Existing Medication"
MEDICATION_HEADER = ["Medication", "Dosage", "Frequency", "Duration"]
PAGE_SIZES = {"A4": A4, "LETTER": letter}


class RenderedDocument(BaseModel):
    content: bytes
    file_name: str
    media_type: str = MEDIA_TYPE


def document_file_name(prescription_id: str) -> str:
    return f"{settings.PRODUCT_PREFIX}-Prescription-{prescription_id}.{settings.DOCUMENT_EXTENSION}"


def medication_rows(medications: List[Medication]) -> List[List[str]]:
    """Table rows in input order; existing medications get the marker on a second line."""
    rows = []
    for med in medications:
        name = f"{med.name}\n{EXISTING_MARKER}" if med.is_existing else med.name
        rows.append([name, med.dosage, med.frequency, med.duration])
    return rows


def document_text(schema: ExportSchema) -> str:
    """Every free-text value that ends up in the document."""
    patient = schema.patient
    case = schema.case_details
    parts = [
        settings.PRODUCT_PREFIX,
        case.prescription_id, case.date, case.doctor_name,
        case.ai_summary, case.ai_diagnosis, case.medical_history,
        patient.name, patient.height, patient.weight, *patient.allergies,
    ]
    for row in medication_rows(schema.medications):
        parts.extend(row)
    return "".join(parts)


def _make_styles(font: FontFamily) -> dict:
    regular, bold = font.regular, font.bold
    return {
        "title": ParagraphStyle("Title", fontName=bold, fontSize=18, textColor=NAVY, spaceAfter=4),
        "subtitle": ParagraphStyle("Subtitle", fontName=regular, fontSize=10, textColor=MID_GREY, spaceAfter=12),
        "section": ParagraphStyle("Section", fontName=bold, fontSize=12, textColor=NAVY, spaceBefore=12, spaceAfter=5),
        "body": ParagraphStyle("Body", fontName=regular, fontSize=9, textColor=DARK_GREY, spaceAfter=5, leading=14),
        "label": ParagraphStyle("Label", fontName=bold, fontSize=9, textColor=NAVY),
        "diagnosis": ParagraphStyle("Diagnosis", fontName=bold, fontSize=13, textColor=TEAL, spaceAfter=6, leading=17),
        "cell": ParagraphStyle("Cell", fontName=regular, fontSize=8, textColor=DARK_GREY, leading=11),
        "cell_head": ParagraphStyle("CellHead", fontName=bold, fontSize=8, textColor=WHITE, leading=11),
    }


def _text(value: Any) -> str:
    """Escape free text for the paragraph parser, keeping explicit line breaks."""
    return escape(str(value)).replace("\n", "<br/>")


def _two_col_table(data: list[tuple[str, str]], styles: dict) -> Table:
    rows = [
        [Paragraph(_text(label), styles["label"]), Paragraph(_text(value), styles["body"])]
        for label, value in data
    ]
    t = Table(rows, colWidths=[4.5 * cm, 12.5 * cm])
    t.setStyle(TableStyle([
        ("ROWBACKGROUNDS", (0, 0), (-1, -1), [WHITE, LIGHT_GREY]),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ("LEFTPADDING", (0, 0), (-1, -1), 8),
        ("GRID", (0, 0), (-1, -1), 0.3, MID_GREY),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]))
    return t


def _medication_table(medications: List[Medication], styles: dict) -> Table:
    rows = [[Paragraph(h, styles["cell_head"]) for h in MEDICATION_HEADER]]
    rows.extend(
        [Paragraph(_text(cell), styles["cell"]) for cell in row]
        for row in medication_rows(medications)
    )

    # Page breaks fall between rows only; the header row repeats on each page.
    # A single row taller than the frame therefore fails layout instead of splitting.
    t = Table(rows, colWidths=[5.5 * cm, 3.5 * cm, 4.5 * cm, 3.5 * cm], repeatRows=1)
    t.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), TEAL),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [WHITE, LIGHT_GREY]),
        ("TOPPADDING", (0, 0), (-1, -1), 5),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
        ("LEFTPADDING", (0, 0), (-1, -1), 6),
        ("GRID", (0, 0), (-1, -1), 0.3, MID_GREY),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]))
    return t


def build_story(schema: ExportSchema, font: Optional[FontFamily] = None) -> list:
    styles = _make_styles(font or select_font(document_text(schema)))
    patient = schema.patient
    case = schema.case_details
    story = []

    story.append(Paragraph(f"{_text(settings.PRODUCT_PREFIX)} Prescription", styles["title"]))
    story.append(Paragraph(
        f"Prescription ID: {_text(case.prescription_id)}  |  Issued on: {_text(case.date)}"
        f"  |  Prescribed by: {_text(case.doctor_name)}",
        styles["subtitle"],
    ))
    story.append(HRFlowable(color=NAVY, thickness=1.5))

    story.append(Paragraph("Patient Details", styles["section"]))
    story.append(_two_col_table([
        ("Name", patient.name),
        ("Age", f"{patient.age} years"),
        ("Gender", patient.gender.value),
        ("Height", patient.height),
        ("Weight", patient.weight),
        ("Allergies", ", ".join(patient.allergies)),
    ], styles))

    story.append(Spacer(1, 0.3 * cm))
    story.append(HRFlowable(color=TEAL, thickness=1))
    story.append(Paragraph("AI Symptom Summary", styles["section"]))
    story.append(Paragraph(_text(case.ai_summary), styles["body"]))
    story.append(Paragraph("Diagnosis", styles["section"]))
    story.append(Paragraph(_text(case.ai_diagnosis), styles["diagnosis"]))
    story.append(Paragraph("Medical History", styles["section"]))
    story.append(Paragraph(_text(case.medical_history), styles["body"]))

    story.append(Spacer(1, 0.3 * cm))
    story.append(HRFlowable(color=TEAL, thickness=1))
    story.append(Paragraph("Prescribed Medications", styles["section"]))
    story.append(_medication_table(schema.medications, styles))
    return story


def _draw_footer(font: FontFamily, canvas, doc) -> None:
    canvas.saveState()
    canvas.setFont(font.regular, 7)
    canvas.setFillColor(MID_GREY)
    canvas.drawString(doc.leftMargin, 1.2 * cm, f"{settings.PRODUCT_PREFIX} | Generated prescription")
    canvas.drawRightString(doc.pagesize[0] - doc.rightMargin, 1.2 * cm, f"Page {doc.page}")
    canvas.restoreState()


def _validated(schema: Any) -> ExportSchema:
    if not isinstance(schema, ExportSchema):
        try:
            schema = ExportSchema.model_validate(schema)
        except ValidationError as e:
            raise RenderError(f"Invalid export schema: {e}") from e
    if not isinstance(schema.medications, list):
        raise RenderError("Invalid export schema: medications must be a list")
    return schema


def render_document(schema: Any) -> RenderedDocument:
    """
    Render an export schema into a PDF.

    Raises:
        RenderError: if the schema is structurally invalid, no installed font
            can draw its text, or layout fails (e.g. one medication row is
            taller than a page).
    """
    schema = _validated(schema)
    case = schema.case_details
    font = select_font(document_text(schema))
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=PAGE_SIZES[settings.PAGE_SIZE],
        leftMargin=1.8 * cm, rightMargin=1.8 * cm,
        topMargin=2 * cm, bottomMargin=2 * cm,
        title=f"Prescription {case.prescription_id}",
        author=case.doctor_name,
        subject=f"Prescription for {schema.patient.name}",
    )
    footer = partial(_draw_footer, font)
    try:
        doc.build(build_story(schema, font), onFirstPage=footer, onLaterPages=footer)
    except Exception as e:
        logger.error("prescription_render_failed", prescription_id=case.prescription_id, error=str(e))
        raise RenderError(f"Could not lay out prescription {case.prescription_id}: {e}") from e

    content = buffer.getvalue()
    logger.info(
        "prescription_rendered",
        prescription_id=case.prescription_id,
        font=font.regular,
        medications=len(schema.medications),
        size=len(content),
    )
    return RenderedDocument(content=content, file_name=document_file_name(case.prescription_id))
