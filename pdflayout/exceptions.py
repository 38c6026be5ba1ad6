"""Exceptions raised by the PDF collaborators."""
from typing import Optional


class PDFLayoutError(Exception):
    """Base exception for the layout engine."""

    def __init__(
        self,
        message: str = "PDF layout operation failed",
        operation: Optional[str] = None,
        page_number: Optional[int] = None
    ):
        self.message = message
        self.operation = operation
        self.page_number = page_number
        super().__init__(self.message)


class PDFParseError(PDFLayoutError):
    def __init__(self, message: str = "Could not read PDF document", **kwargs):
        super().__init__(message, **kwargs)


class PDFWriteError(PDFLayoutError):
    def __init__(self, message: str = "Could not write PDF document", **kwargs):
        super().__init__(message, **kwargs)
