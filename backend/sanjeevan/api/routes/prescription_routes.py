# backend/sanjeevan/api/routes/prescription_routes.py

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, StreamingResponse

from sanjeevan.core.errors import IncompleteRecord
from sanjeevan.models import ConsultationRecord
from sanjeevan.services.assembler import assemble
from sanjeevan.services.record_store import RecordStore
from sanjeevan.views.lifecycle import CLIENT_ENVIRONMENT, PrescriptionView
from sanjeevan.views.page import PrescriptionPage

router = APIRouter(prefix="/prescription", tags=["prescription"])


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store


def _get_record(prescription_id: str, store: RecordStore) -> ConsultationRecord:
    record = store.get(prescription_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Prescription not found")
    return record


@router.get("/{prescription_id}", response_model=PrescriptionPage)
async def get_prescription_page(prescription_id: str, store: RecordStore = Depends(get_record_store)):
    """
    Markup-only pass of the prescription page. The view is never activated
    here, so the download trigger is not part of the response.
    """
    view = PrescriptionView(_get_record(prescription_id, store))
    return view.render()


@router.get("/{prescription_id}/export")
async def get_prescription_export(prescription_id: str, store: RecordStore = Depends(get_record_store)):
    record = _get_record(prescription_id, store)
    try:
        schema = assemble(record)
    except IncompleteRecord as e:
        return JSONResponse({"error": str(e), "field": e.field}, status_code=422)
    return JSONResponse(schema.model_dump(mode="json", by_alias=True))


@router.get("/{prescription_id}/pdf")
async def download_prescription_pdf(prescription_id: str, store: RecordStore = Depends(get_record_store)):
    """
    Client pass: mount a view, activate it in a binary-capable environment and
    press its download trigger once.
    """
    view = PrescriptionView(_get_record(prescription_id, store))
    if view.incomplete is not None:
        return JSONResponse(
            {"error": str(view.incomplete), "field": view.incomplete.field},
            status_code=422,
        )

    view.mount()
    await view.activate(CLIENT_ENVIRONMENT)
    try:
        document = await view.request_download()
    finally:
        view.teardown()

    if document is None:
        return JSONResponse({"error": "Generation failed"}, status_code=500)

    return StreamingResponse(
        iter([document.content]),
        media_type=document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{document.file_name}"'},
    )
