# backend/sanjeevan/views/trigger.py

import asyncio
from typing import Callable, Optional

import structlog
from pydantic import BaseModel

from sanjeevan.core.errors import RenderError
from sanjeevan.models import ExportSchema
from sanjeevan.services.report_renderer import RenderedDocument, document_file_name, render_document

logger = structlog.get_logger(__name__)

IDLE_LABEL = "Download as PDF"
BUSY_LABEL = "Generating..."
FAILED_LABEL = "Generation failed. Try again"

Renderer = Callable[[ExportSchema], RenderedDocument]


class TriggerElement(BaseModel):
    kind: str = "download-trigger"
    label: str
    disabled: bool
    file_name: str


class DownloadTrigger:
    """
    The download affordance of one prescription view.

    At most one generation runs per trigger; clicks that arrive while one is
    in flight are ignored. A failed generation keeps the last good document.
    """

    def __init__(self, schema: ExportSchema, renderer: Optional[Renderer] = None):
        self._schema = schema
        self._renderer = renderer
        self.busy = False
        self.failed = False
        self.document: Optional[RenderedDocument] = None

    @property
    def file_name(self) -> str:
        return document_file_name(self._schema.case_details.prescription_id)

    @property
    def label(self) -> str:
        if self.busy:
            return BUSY_LABEL
        if self.failed:
            return FAILED_LABEL
        return IDLE_LABEL

    async def click(self) -> Optional[RenderedDocument]:
        """Generate the document, or return None if busy or generation failed."""
        if self.busy:
            logger.debug("download_click_ignored", file_name=self.file_name)
            return None

        self.busy = True
        try:
            document = await asyncio.to_thread(self._renderer or render_document, self._schema)
        except RenderError as e:
            self.failed = True
            logger.warning("download_generation_failed", file_name=self.file_name, error=str(e))
            return None
        finally:
            self.busy = False

        self.failed = False
        self.document = document
        return document

    def render(self) -> TriggerElement:
        return TriggerElement(label=self.label, disabled=self.busy, file_name=self.file_name)
