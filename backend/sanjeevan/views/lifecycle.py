# backend/sanjeevan/views/lifecycle.py

import asyncio
from enum import Enum
from typing import Optional

import structlog
from pydantic import BaseModel, ConfigDict

from sanjeevan.core.errors import EnvironmentNotReady, IncompleteRecord
from sanjeevan.models import ConsultationRecord, ExportSchema
from sanjeevan.services.assembler import assemble
from sanjeevan.services.report_renderer import RenderedDocument
from sanjeevan.views.page import PrescriptionPage, build_page
from sanjeevan.views.trigger import DownloadTrigger, Renderer

logger = structlog.get_logger(__name__)


class ViewState(str, Enum):
    UNMOUNTED = "unmounted"
    MOUNTED_NOT_READY = "mounted_not_ready"
    MOUNTED_READY = "mounted_ready"


class RenderEnvironment(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    supports_binary: bool


# Markup-only pre-render pass; never produces documents.
SERVER_ENVIRONMENT = RenderEnvironment(name="server", supports_binary=False)
CLIENT_ENVIRONMENT = RenderEnvironment(name="client", supports_binary=True)


class PrescriptionView:
    """
    One page view of a consultation record.

    The view moves Unmounted -> Mounted(not-ready) -> Mounted(ready) and never
    back. The download trigger only exists in Mounted(ready), which is reached
    through activate() in an environment that can produce binary output.
    """

    def __init__(self, record: ConsultationRecord, renderer: Optional[Renderer] = None):
        self.record = record
        self._renderer = renderer
        self._state = ViewState.UNMOUNTED
        self._live = True
        self._trigger: Optional[DownloadTrigger] = None
        self.export: Optional[ExportSchema] = None
        self.incomplete: Optional[IncompleteRecord] = None
        try:
            self.export = assemble(record)
        except IncompleteRecord as e:
            self.incomplete = e
            logger.warning(
                "prescription_record_incomplete",
                prescription_id=record.case.prescription_id,
                field=e.field,
            )

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def trigger(self) -> Optional[DownloadTrigger]:
        if self._state is not ViewState.MOUNTED_READY:
            return None
        return self._trigger

    def mount(self) -> None:
        if not self._live or self._state is not ViewState.UNMOUNTED:
            return
        self._state = ViewState.MOUNTED_NOT_READY

    async def activate(self, environment: RenderEnvironment) -> bool:
        """Move to Mounted(ready) once the environment can produce documents."""
        # Runs after the current render pass, like a post-mount effect.
        await asyncio.sleep(0)

        if not self._live:
            logger.debug("view_activation_dropped", reason="torn_down")
            return False
        if self._state is ViewState.MOUNTED_READY:
            return True
        if self._state is ViewState.UNMOUNTED or not environment.supports_binary:
            return False

        self._state = ViewState.MOUNTED_READY
        if self.export is not None:
            self._trigger = DownloadTrigger(self.export, renderer=self._renderer)
        logger.info(
            "view_ready",
            environment=environment.name,
            prescription_id=self.record.case.prescription_id,
        )
        return True

    def teardown(self) -> None:
        self._live = False
        self._trigger = None

    async def request_download(self) -> Optional[RenderedDocument]:
        trigger = self.trigger
        if trigger is None:
            raise EnvironmentNotReady(f"View is {self._state.value}, download trigger is not available")
        return await trigger.click()

    def render(self) -> PrescriptionPage:
        trigger = self.trigger
        return build_page(
            self.record,
            actions=[trigger.render()] if trigger is not None else [],
            notice=str(self.incomplete) if self.incomplete is not None else None,
        )
