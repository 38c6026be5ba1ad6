"""Layout reconstruction for PDF text: lines, structure and re-rendering."""
from pdflayout.models.schemas import DocumentExtraction, ExtractionOptions, Failure, FailureKind
from pdflayout.pipeline import (
    DocumentExtractor,
    extract_plain_text,
    extract_with_layout,
    load_extraction,
    save_extraction,
)
from pdflayout.rendering.layout_writer import LayoutWriter, render_exact, render_reflowed

__version__ = "1.0.0"

__all__ = [
    "DocumentExtraction",
    "DocumentExtractor",
    "ExtractionOptions",
    "Failure",
    "FailureKind",
    "LayoutWriter",
    "extract_plain_text",
    "extract_with_layout",
    "load_extraction",
    "render_exact",
    "render_reflowed",
    "save_extraction",
]
