"""
Print Renderer

Turns a composed ReportDocument into a paginated PDF artifact. The HTML
surface built for a call belongs to that call alone and is disposed of
whether rendering succeeds or fails. Rendering is the only suspension point.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from core.exceptions import RenderError

from .models import ExportArtifact, ExportFormat, ReportDataType, ReportDocument, build_filename
from .pdf_converter import PDFConverter, PDFOptions
from .template_engine import TemplateEngine

logger = logging.getLogger(__name__)


class RenderState(Enum):
    """Per-call render lifecycle"""

    IDLE = "idle"
    COMPOSING = "composing"
    RENDERING = "rendering"
    DONE = "done"
    FAILED = "failed"


_TRANSITIONS = {
    RenderState.IDLE: {RenderState.COMPOSING},
    RenderState.COMPOSING: {RenderState.RENDERING, RenderState.FAILED},
    RenderState.RENDERING: {RenderState.DONE, RenderState.FAILED},
    RenderState.DONE: set(),
    RenderState.FAILED: set(),
}


class RenderJob:
    """State tracker for a single render call"""

    def __init__(self, title: str = ""):
        self.title = title
        self.state = RenderState.IDLE

    def advance(self, state: RenderState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise ValueError(f"Invalid render transition {self.state.value} -> {state.value}")
        logger.debug(f"Render '{self.title}': {self.state.value} -> {state.value}")
        self.state = state

    def fail(self) -> None:
        if self.state in (RenderState.COMPOSING, RenderState.RENDERING):
            self.advance(RenderState.FAILED)

    @property
    def finished(self) -> bool:
        return self.state in (RenderState.DONE, RenderState.FAILED)


class RenderSurface:
    """Disposable HTML materialization of one document"""

    def __init__(self, html: str):
        self.html = html
        self.disposed = False

    def dispose(self) -> None:
        self.html = ""
        self.disposed = True

    def __enter__(self) -> "RenderSurface":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()


class PrintRenderer:
    """
    Renders report documents to PDF through Playwright

    Every call launches its own browser through the converter factory, so
    concurrent calls share no rendering state.
    """

    def __init__(
        self,
        template_engine: Optional[TemplateEngine] = None,
        converter_factory: Callable[[], PDFConverter] = PDFConverter,
        options: Optional[PDFOptions] = None,
    ):
        self.template_engine = template_engine or TemplateEngine()
        self.converter_factory = converter_factory
        self.options = options

    def compose(self, document: ReportDocument) -> RenderSurface:
        """Materialize the document as an HTML surface"""
        return RenderSurface(self.template_engine.render_document(document))

    async def render(self, document: ReportDocument, job: Optional[RenderJob] = None) -> ExportArtifact:
        """
        Render a document into a PDF artifact

        Args:
            document: Composed report document
            job: Optional state tracker (a fresh one is created when omitted)

        Returns:
            ExportArtifact holding the PDF bytes

        Raises:
            RenderError: If the rendering dependency is unavailable or fails
        """
        job = job or RenderJob(document.title)
        options = self.options or PDFOptions.from_settings()

        job.advance(RenderState.COMPOSING)
        try:
            surface = self.compose(document)
        except Exception:
            job.fail()
            raise

        with surface:
            job.advance(RenderState.RENDERING)
            try:
                async with self.converter_factory() as converter:
                    result = await converter.convert_html_to_pdf(surface.html, options)
            except Exception as e:
                job.fail()
                raise RenderError(f"Document rendering failed: {e}", stage="rendering") from e

        if not result.success or not result.pdf_data:
            job.fail()
            raise RenderError(
                f"Document rendering failed: {result.error_message or 'no output produced'}",
                stage="rendering",
            )

        job.advance(RenderState.DONE)

        export_format = ExportFormat.DOCUMENT
        data_type = ReportDataType.parse(document.metadata.get("type"))
        role = document.metadata.get("role", "user")
        return ExportArtifact(
            content=result.pdf_data,
            filename=build_filename(role, data_type, export_format, document.generated_at),
            media_type=export_format.media_type,
            export_format=export_format,
            data_type=data_type,
            generated_at=document.generated_at,
        )
