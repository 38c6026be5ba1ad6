"""PyMuPDF-backed PDF parser."""
import logging
from typing import List

from pdflayout.exceptions import PDFParseError
from pdflayout.parsing.base import ParsedDocument, PDFParser, RawPage, RawTextRun

logger = logging.getLogger(__name__)


class PyMuPDFDocument(ParsedDocument):
    """Open PyMuPDF document exposing pages as raw text runs."""

    def __init__(self, doc):
        self._doc = doc

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def get_page(self, page_number: int) -> RawPage:
        """
        Read one page.

        Each text span becomes one run. PyMuPDF reports span origins top-down
        at the baseline; the transform below is expressed bottom-up the way a
        PDF text matrix is, with ``f`` placed one font size above the baseline
        so the normalized ``y`` lands on the top of the run.

        Args:
            page_number: 1-based page number

        Returns:
            RawPage with viewport size and runs in emission order
        """
        try:
            page = self._doc.load_page(page_number - 1)
            page_rect = page.rect
            blocks = page.get_text("dict")
        except Exception as e:
            raise PDFParseError(
                f"Could not read page {page_number}: {e}",
                operation="get_page",
                page_number=page_number
            ) from e

        page_height = page_rect.height
        runs: List[RawTextRun] = []
        for block in blocks.get("blocks", []):
            if block.get("type") != 0:  # Text blocks only
                continue
            for line in block.get("lines", []):
                dx, dy = line.get("dir", (1.0, 0.0))
                for span in line.get("spans", []):
                    size = span.get("size", 0.0)
                    origin_x, origin_y = span.get("origin", (0.0, 0.0))
                    x0, _, x1, _ = span.get("bbox", (0.0, 0.0, 0.0, 0.0))
                    runs.append(RawTextRun(
                        text=span.get("text", ""),
                        transform=(
                            size * dx,
                            -size * dy,
                            size * dy,
                            size * dx,
                            origin_x,
                            page_height - (origin_y - size),
                        ),
                        width=x1 - x0,
                        height=size,
                        font_name=span.get("font", ""),
                    ))

        return RawPage(
            page_number=page_number,
            width=page_rect.width,
            height=page_height,
            runs=runs
        )

    def close(self) -> None:
        self._doc.close()


class PyMuPDFParser(PDFParser):
    """Open PDF bytes with PyMuPDF."""

    def open(self, data: bytes) -> PyMuPDFDocument:
        try:
            import fitz  # PyMuPDF
        except ImportError as e:
            raise PDFParseError(
                "PyMuPDF (fitz) is required. Install with: pip install PyMuPDF",
                operation="open"
            ) from e

        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            raise PDFParseError(f"Could not open PDF: {e}", operation="open") from e

        logger.debug(f"Opened PDF with {doc.page_count} pages")
        return PyMuPDFDocument(doc)
