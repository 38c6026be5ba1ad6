"""PDF reconstruction from extracted layout."""
import logging
from pathlib import Path
from typing import List, Optional, Union

from pdflayout.config import config
from pdflayout.exceptions import PDFWriteError
from pdflayout.models.schemas import DocumentExtraction, Failure, FailureKind, PageExtraction
from pdflayout.rendering.pdf_writer import PageDraws, PDFWriter, ReportLabWriter, TextDraw

logger = logging.getLogger(__name__)

_INVISIBLE_CHARS = {
    '\x00': '',    # Null byte
    '\u200b': '',  # Zero-width space
    '\u200c': '',  # Zero-width non-joiner
    '\u200d': '',  # Zero-width joiner
    '\ufeff': '',  # BOM
}


class LayoutWriter:
    """
    Re-render an extraction as a new PDF.

    Exact mode reuses the stored page sizes and run coordinates; reflow mode
    lays the page text out at fixed margins. Original fonts are not
    preserved: every run is drawn in one standard font.
    """

    def __init__(self, writer: Optional[PDFWriter] = None):
        """Initialize layout writer.

        Args:
            writer: PDF writer collaborator (ReportLab by default)
        """
        self.writer = writer or ReportLabWriter(
            font_name=config.get('rendering.font_name', 'Helvetica'),
            fallback_font_size=config.get('rendering.default_font_size', 12)
        )
        self.margin = config.get('reflow.margin', 50)
        self.reflow_font_size = config.get('reflow.font_size', 12)
        self.line_spacing = config.get('reflow.line_spacing', 15)

    def render_exact(
        self,
        extraction: DocumentExtraction,
        output_path: Optional[Union[str, Path]] = None
    ) -> Union[bytes, Failure]:
        """
        Render every run at its original position.

        Args:
            extraction: Extraction to render
            output_path: Optional file to write the PDF to

        Returns:
            PDF bytes, or a write Failure
        """
        pages = [self._exact_page(page) for page in extraction.pages]
        return self._write(pages, output_path, mode="exact")

    def render_reflowed(
        self,
        extraction: DocumentExtraction,
        output_path: Optional[Union[str, Path]] = None
    ) -> Union[bytes, Failure]:
        """
        Render each page's text top-down at fixed margins on default-size pages.

        Lines are not wrapped; lines past the bottom margin are dropped.

        Args:
            extraction: Extraction to render
            output_path: Optional file to write the PDF to

        Returns:
            PDF bytes, or a write Failure
        """
        try:
            _, page_height = self.writer.default_page_size
        except PDFWriteError as e:
            return self._write_failure(e, mode="reflow")

        pages = [self._reflow_page(page, page_height) for page in extraction.pages]
        return self._write(pages, output_path, mode="reflow")

    def _exact_page(self, page: PageExtraction) -> PageDraws:
        # Undo the top-down flip applied during extraction
        draws: List[TextDraw] = [
            (
                self._clean_text_for_rendering(run.text),
                run.x,
                page.height - run.y - run.height,
                run.font_size
            )
            for run in page.items
        ]
        return page.width, page.height, draws

    def _reflow_page(self, page: PageExtraction, page_height: float) -> PageDraws:
        draws: List[TextDraw] = []
        y_position = page_height - self.margin
        for line in page.text.split('\n'):
            if y_position <= self.margin:
                break
            draws.append((
                self._clean_text_for_rendering(line),
                self.margin,
                y_position,
                self.reflow_font_size
            ))
            y_position -= self.line_spacing
        return None, None, draws

    def _write(
        self,
        pages: List[PageDraws],
        output_path: Optional[Union[str, Path]],
        mode: str
    ) -> Union[bytes, Failure]:
        try:
            pdf_bytes = self.writer.write(pages)
        except PDFWriteError as e:
            return self._write_failure(e, mode)

        if output_path is not None:
            try:
                with open(output_path, 'wb') as f:
                    f.write(pdf_bytes)
            except OSError as e:
                logger.error(f"Error creating PDF ({mode}): cannot write {output_path}: {e}")
                return Failure(
                    kind=FailureKind.WRITE,
                    message=f"Cannot write {output_path}: {e}",
                    operation="persist",
                    source=str(output_path)
                )
            logger.info(f"New PDF created: {output_path}")

        return pdf_bytes

    @staticmethod
    def _write_failure(error: PDFWriteError, mode: str) -> Failure:
        logger.error(
            f"Error creating PDF ({mode}, operation={error.operation}, "
            f"page={error.page_number}): {error.message}"
        )
        return Failure(
            kind=FailureKind.WRITE,
            message=error.message,
            operation=error.operation,
            page_number=error.page_number
        )

    @staticmethod
    def _clean_text_for_rendering(text: str) -> str:
        """Remove characters that have no visible glyph."""
        for old, new in _INVISIBLE_CHARS.items():
            text = text.replace(old, new)
        return text


def render_exact(
    extraction: DocumentExtraction,
    output_path: Optional[Union[str, Path]] = None
) -> Union[bytes, Failure]:
    """Render an extraction at original coordinates with the default writer."""
    return LayoutWriter().render_exact(extraction, output_path)


def render_reflowed(
    extraction: DocumentExtraction,
    output_path: Optional[Union[str, Path]] = None
) -> Union[bytes, Failure]:
    """Render an extraction as reflowed text with the default writer."""
    return LayoutWriter().render_reflowed(extraction, output_path)
