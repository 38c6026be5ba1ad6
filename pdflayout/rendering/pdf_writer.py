"""ReportLab-backed PDF writer."""
import io
import math
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple

from pdflayout.exceptions import PDFWriteError

# (text, x, y, font_size) with y measured from the bottom of the page
TextDraw = Tuple[str, float, float, float]
# (page_width, page_height, draws); a None size means the writer's default page size
PageDraws = Tuple[Optional[float], Optional[float], Sequence[TextDraw]]


class PDFWriter(ABC):
    """Turns absolute-position text draws into PDF bytes."""

    @abstractmethod
    def write(self, pages: Sequence[PageDraws]) -> bytes:
        """Serialize pages of absolute-position text draws. Raises PDFWriteError."""
        ...

    @property
    @abstractmethod
    def default_page_size(self) -> Tuple[float, float]:
        ...


class ReportLabWriter(PDFWriter):
    """Write text-only PDFs with a single standard font."""

    def __init__(self, font_name: str = "Helvetica", fallback_font_size: float = 12):
        """
        Initialize writer.

        Args:
            font_name: Standard font used for every draw
            fallback_font_size: Size used when a draw has no usable size
        """
        self.font_name = font_name
        self.fallback_font_size = fallback_font_size

    @property
    def default_page_size(self) -> Tuple[float, float]:
        try:
            from reportlab import rl_config
        except ImportError as e:
            raise _missing_reportlab() from e

        width, height = rl_config.defaultPageSize
        return width, height

    def write(self, pages: Sequence[PageDraws]) -> bytes:
        try:
            from reportlab.pdfgen import canvas
        except ImportError as e:
            raise _missing_reportlab() from e

        buffer = io.BytesIO()
        c = canvas.Canvas(buffer, pagesize=self.default_page_size)
        for page_number, (width, height, draws) in enumerate(pages, start=1):
            try:
                if width is not None and height is not None:
                    c.setPageSize((width, height))
                else:
                    c.setPageSize(self.default_page_size)
                for text, x, y, font_size in draws:
                    c.setFont(self.font_name, self._font_size(font_size))
                    c.drawString(x, y, text)
                c.showPage()
            except Exception as e:
                raise PDFWriteError(
                    f"Could not draw page {page_number}: {e}",
                    operation="draw",
                    page_number=page_number
                ) from e

        try:
            c.save()
        except Exception as e:
            raise PDFWriteError(f"Could not serialize PDF: {e}", operation="save") from e

        buffer.seek(0)
        return buffer.read()

    def _font_size(self, font_size: Optional[float]) -> float:
        """Missing, zero or non-finite sizes fall back to the default size."""
        if not font_size or not math.isfinite(font_size):
            return self.fallback_font_size
        return font_size


def _missing_reportlab() -> PDFWriteError:
    return PDFWriteError(
        "ReportLab is required to create PDFs. Install with: pip install reportlab",
        operation="import"
    )
