"""
Test rendering report documents to PDF artifacts
"""
import asyncio
from unittest.mock import patch

import pytest
from jinja2 import TemplateError

from core.exceptions import RenderError
from report_exports.models import ExportFormat, ReportDataType
from report_exports.pdf_converter import PDFOptions, PDFResult
from report_exports.print_renderer import PrintRenderer, RenderJob, RenderState, RenderSurface
from report_exports.template_builder import ReportTemplateBuilder

pytestmark = pytest.mark.unit


@pytest.fixture
def orders_document(orders_payload, generated_at):
    return ReportTemplateBuilder(brand="Marketplace").build(
        ReportDataType.ORDERS, orders_payload, role="vendor", generated_at=generated_at
    )


class TestRenderJob:
    """Test the per-call render lifecycle"""

    def test_happy_path(self):
        job = RenderJob("Report")

        job.advance(RenderState.COMPOSING)
        job.advance(RenderState.RENDERING)
        job.advance(RenderState.DONE)

        assert job.state == RenderState.DONE
        assert job.finished

    def test_invalid_transition(self):
        job = RenderJob()

        with pytest.raises(ValueError):
            job.advance(RenderState.DONE)

    def test_no_transition_out_of_terminal_state(self):
        job = RenderJob()
        job.advance(RenderState.COMPOSING)
        job.fail()

        assert job.state == RenderState.FAILED
        with pytest.raises(ValueError):
            job.advance(RenderState.RENDERING)

    def test_fail_when_idle_is_noop(self):
        job = RenderJob()
        job.fail()

        assert job.state == RenderState.IDLE
        assert not job.finished


class TestRenderSurface:
    def test_context_manager_disposes(self):
        with RenderSurface("<html></html>") as surface:
            assert surface.html == "<html></html>"

        assert surface.disposed
        assert surface.html == ""


class TestPrintRenderer:
    """Test document rendering with a mocked converter"""

    @pytest.mark.asyncio
    async def test_render_success(self, orders_document, make_converter_factory):
        factory = make_converter_factory()
        renderer = PrintRenderer(converter_factory=factory, options=PDFOptions())
        job = RenderJob(orders_document.title)

        artifact = await renderer.render(orders_document, job)

        assert artifact.content == b"%PDF-1.4 fake"
        assert artifact.filename == "vendor_orders_2024-01-05.pdf"
        assert artifact.media_type == "application/pdf"
        assert artifact.export_format == ExportFormat.DOCUMENT
        assert artifact.data_type == ReportDataType.ORDERS
        assert job.state == RenderState.DONE

        html, options = factory.return_value.convert_html_to_pdf.call_args[0]
        assert "Marketplace - Vendor Orders Report" in html
        assert options == PDFOptions()

    @pytest.mark.asyncio
    async def test_unsuccessful_result(self, orders_document, make_converter_factory):
        factory = make_converter_factory(PDFResult(success=False, error_message="Playwright not available"))
        renderer = PrintRenderer(converter_factory=factory)
        job = RenderJob()

        with pytest.raises(RenderError) as exc_info:
            await renderer.render(orders_document, job)

        assert "Playwright not available" in exc_info.value.message
        assert exc_info.value.retryable is True
        assert job.state == RenderState.FAILED

    @pytest.mark.asyncio
    async def test_converter_exception(self, orders_document, make_converter_factory):
        factory = make_converter_factory(side_effect=RuntimeError("browser crashed"))
        renderer = PrintRenderer(converter_factory=factory)
        job = RenderJob()

        with pytest.raises(RenderError) as exc_info:
            await renderer.render(orders_document, job)

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert exc_info.value.details["stage"] == "rendering"
        assert job.state == RenderState.FAILED

    @pytest.mark.asyncio
    async def test_surface_disposed_on_success_and_failure(self, orders_document, make_converter_factory):
        for factory in (
            make_converter_factory(),
            make_converter_factory(side_effect=RuntimeError("browser crashed")),
        ):
            renderer = PrintRenderer(converter_factory=factory)
            surface = RenderSurface("<html><body>report</body></html>")

            with patch.object(renderer, "compose", return_value=surface):
                try:
                    await renderer.render(orders_document)
                except RenderError:
                    pass

            assert surface.disposed

    @pytest.mark.asyncio
    async def test_compose_failure_propagates(self, orders_document, make_converter_factory):
        factory = make_converter_factory()
        renderer = PrintRenderer(converter_factory=factory)
        job = RenderJob()

        with patch.object(renderer, "compose", side_effect=TemplateError("bad template")):
            with pytest.raises(TemplateError):
                await renderer.render(orders_document, job)

        assert job.state == RenderState.FAILED
        factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrent_renders_use_separate_converters(self, orders_document, make_converter_factory):
        factory = make_converter_factory()
        renderer = PrintRenderer(converter_factory=factory)

        first, second = await asyncio.gather(renderer.render(orders_document), renderer.render(orders_document))

        assert first.content == second.content == b"%PDF-1.4 fake"
        assert factory.call_count == 2
