"""PDF parser collaborators."""
from .base import PDFParser, ParsedDocument, RawPage, RawTextRun
from .pymupdf_parser import PyMuPDFParser

__all__ = ["PDFParser", "ParsedDocument", "RawPage", "RawTextRun", "PyMuPDFParser"]
