"""PDF reconstruction modules."""
from .layout_writer import LayoutWriter, render_exact, render_reflowed
from .pdf_writer import PDFWriter, ReportLabWriter

__all__ = ["LayoutWriter", "PDFWriter", "ReportLabWriter", "render_exact", "render_reflowed"]
