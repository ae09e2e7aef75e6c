"""
Report Exports PDF Converter

HTML to PDF conversion using Playwright. A converter owns one headless
browser for the lifetime of its async context; every conversion gets its own
page, closed as soon as the PDF bytes are produced.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from core.config import settings

try:
    from playwright.async_api import Browser, async_playwright
except ImportError:
    # Document rendering reports the dependency as unavailable
    async_playwright = None
    Browser = None


logger = logging.getLogger(__name__)


def is_pdf_available() -> bool:
    """Whether the Playwright rendering dependency is installed"""
    return async_playwright is not None


@dataclass
class PDFOptions:
    """Configuration options for PDF generation"""

    format: str = "A4"
    margin_top: str = "0.5in"
    margin_bottom: str = "0.5in"
    margin_left: str = "0.5in"
    margin_right: str = "0.5in"
    print_background: bool = True
    prefer_css_page_size: bool = False
    scale: float = 1.0
    landscape: bool = False
    device_scale_factor: float = 1.5

    @classmethod
    def from_settings(cls) -> "PDFOptions":
        """Page layout configured for the application"""
        margin = settings.pdf_margin
        return cls(
            format=settings.pdf_page_format,
            margin_top=margin,
            margin_bottom=margin,
            margin_left=margin,
            margin_right=margin,
            landscape=settings.pdf_landscape,
            device_scale_factor=settings.pdf_device_scale_factor,
        )

    def to_playwright_options(self) -> Dict[str, Any]:
        """Convert to Playwright PDF options"""
        return {
            "format": self.format,
            "margin": {
                "top": self.margin_top,
                "bottom": self.margin_bottom,
                "left": self.margin_left,
                "right": self.margin_right,
            },
            "print_background": self.print_background,
            "prefer_css_page_size": self.prefer_css_page_size,
            "scale": self.scale,
            "landscape": self.landscape,
        }


@dataclass
class PDFResult:
    """Result of PDF generation process"""

    success: bool
    pdf_data: Optional[bytes] = None
    file_size: Optional[int] = None
    generation_time_ms: Optional[int] = None
    error_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "success": self.success,
            "file_size": self.file_size,
            "generation_time_ms": self.generation_time_ms,
            "error_message": self.error_message,
        }


class PDFConverter:
    """
    HTML to PDF converter using Playwright

    Use as an async context manager; the browser is launched on entry and
    closed on exit.
    """

    def __init__(self, page_timeout: Optional[int] = None):
        """
        Initialize PDF converter

        Args:
            page_timeout: Page operation timeout in milliseconds
        """
        self.page_timeout = page_timeout or settings.pdf_page_timeout_ms
        self._browser: Optional[Browser] = None
        self._playwright = None

        if not is_pdf_available():
            logger.warning("Playwright not available. PDF generation will be disabled.")

    async def __aenter__(self):
        """Async context manager entry"""
        if is_pdf_available():
            self._playwright = await async_playwright().start()
            try:
                self._browser = await self._playwright.chromium.launch(
                    headless=True,
                    args=[
                        "--no-sandbox",
                        "--disable-setuid-sandbox",
                        "--disable-dev-shm-usage",
                        "--disable-gpu",
                    ],
                )
            except Exception:
                await self._playwright.stop()
                self._playwright = None
                raise
            logger.debug("Playwright browser launched")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        try:
            if self._browser:
                await self._browser.close()
                logger.debug("Browser closed")
        finally:
            self._browser = None
            if self._playwright:
                await self._playwright.stop()
                self._playwright = None
                logger.debug("Playwright stopped")

    async def convert_html_to_pdf(
        self,
        html_content: str,
        options: Optional[PDFOptions] = None,
    ) -> PDFResult:
        """
        Convert HTML content to PDF

        Args:
            html_content: HTML content to convert
            options: PDF generation options

        Returns:
            PDFResult with success status and PDF data
        """
        if not is_pdf_available():
            return PDFResult(success=False, error_message="Playwright not available")

        if options is None:
            options = PDFOptions.from_settings()

        start_time = datetime.now()

        try:
            pdf_data = await self._generate_pdf_internal(html_content, options)
        except Exception as e:
            logger.error(f"PDF generation failed: {e}")
            return PDFResult(success=False, error_message=str(e))

        if not pdf_data:
            return PDFResult(success=False, error_message="PDF generation produced no output")

        generation_time = (datetime.now() - start_time).total_seconds() * 1000
        file_size = len(pdf_data)

        logger.info(f"PDF generated successfully. Size: {file_size} bytes, Time: {generation_time:.1f}ms")

        return PDFResult(
            success=True,
            pdf_data=pdf_data,
            file_size=file_size,
            generation_time_ms=int(generation_time),
        )

    async def _generate_pdf_internal(self, html_content: str, options: PDFOptions) -> Optional[bytes]:
        """Internal PDF generation using Playwright"""
        if not self._browser:
            raise RuntimeError("Browser not initialized. Use async context manager.")

        page = None
        try:
            page = await self._browser.new_page(device_scale_factor=options.device_scale_factor)
            page.set_default_timeout(self.page_timeout)

            await page.set_content(html_content, wait_until="load")
            await page.emulate_media(media="print")

            return await page.pdf(**options.to_playwright_options())
        finally:
            if page:
                await page.close()


async def html_to_pdf(html_content: str, options: Optional[PDFOptions] = None) -> PDFResult:
    """
    Convenience function to convert HTML to PDF

    Args:
        html_content: HTML content to convert
        options: PDF generation options

    Returns:
        PDFResult with success status and PDF data
    """
    async with PDFConverter() as converter:
        return await converter.convert_html_to_pdf(html_content, options)
