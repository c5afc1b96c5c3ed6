import pytest
from fastapi.testclient import TestClient

from sanjeevan import main
from sanjeevan.core.config import settings
from sanjeevan.core.errors import RenderError
from sanjeevan.main import create_app
from sanjeevan.services.record_store import RecordStore

from conftest import with_case


@pytest.fixture
def client(record_store):
    return TestClient(create_app(record_store))


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "records": 1}


def test_page_is_rendered_without_download_trigger(client):
    response = client.get("/prescription/P-98124")

    assert response.status_code == 200
    body = response.json()
    assert body["actions"] == []
    assert body["title"] == "Prescription for Priya Sharma"
    assert body["status"]["title"] == "Prescription Approved"


def test_unknown_prescription_is_404(client):
    assert client.get("/prescription/P-0").status_code == 404
    assert client.get("/prescription/P-0/pdf").status_code == 404


def test_export_excludes_internal_fields(client):
    response = client.get("/prescription/P-98124/export")

    assert response.status_code == 200
    case_details = response.json()["caseDetails"]
    assert case_details["prescriptionId"] == "P-98124"
    for field in ("status", "rejectionReason", "transcript", "confidence"):
        assert field not in case_details


def test_pdf_download(client):
    response = client.get("/prescription/P-98124/pdf")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="Sanjeevan-Prescription-P-98124.pdf"' in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


def test_incomplete_record_cannot_be_exported(sample_record):
    store = RecordStore([with_case(sample_record, date=None)])
    client = TestClient(create_app(store))

    pdf = client.get("/prescription/P-98124/pdf")
    export = client.get("/prescription/P-98124/export")
    page = client.get("/prescription/P-98124")

    assert pdf.status_code == 422
    assert pdf.json()["field"] == "date"
    assert export.status_code == 422
    assert page.status_code == 200
    assert page.json()["notice"]


def test_render_failure_is_reported(client, monkeypatch):
    def broken_renderer(schema):
        raise RenderError("layout exploded")

    monkeypatch.setattr("sanjeevan.views.trigger.render_document", broken_renderer)

    response = client.get("/prescription/P-98124/pdf")

    assert response.status_code == 500
    assert response.json() == {"error": "Generation failed"}


def test_run_serves_app_with_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))

    main.run()

    assert calls == [(("sanjeevan.main:app",), {"host": settings.SERVER_HOST, "port": settings.SERVER_PORT})]


def test_page_includes_prescription_heading(client):
    body = client.get("/prescription/P-98124").json()

    assert body["medications_title"] == "Finalized Prescription"
    assert body["medications_description"].startswith("This prescription has been approved")
