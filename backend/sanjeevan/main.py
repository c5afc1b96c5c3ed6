from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sanjeevan.api.routes.prescription_routes import router as prescription_routes
from sanjeevan.core.config import settings
from sanjeevan.core.logging import configure_logging
from sanjeevan.services.record_store import RecordStore


def create_app(record_store: Optional[RecordStore] = None) -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Read-only prescription records with PDF export",
        version=settings.VERSION,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    if record_store is None:
        if settings.RECORDS_PATH:
            record_store = RecordStore.from_json_file(settings.RECORDS_PATH)
        else:
            record_store = RecordStore()
    app.state.record_store = record_store

    app.include_router(prescription_routes)

    @app.get("/health")
    async def health():
        return {"status": "ok", "records": len(app.state.record_store)}

    @app.on_event("startup")
    def startup_event():
        configure_logging(settings.LOG_LEVEL)

    return app


app = create_app()


def run() -> None:
    uvicorn.run("sanjeevan.main:app", host=settings.SERVER_HOST, port=settings.SERVER_PORT)


if __name__ == "__main__":
    run()
