"""Data models for PDF layout extraction."""
from .schemas import (
    TextRun,
    Line,
    ColumnGroup,
    TableCandidate,
    AlignmentClassification,
    PageStructure,
    PageExtraction,
    ExtractionOptions,
    ExtractionMetadata,
    DocumentExtraction,
    Failure,
    FailureKind,
)

__all__ = [
    "TextRun",
    "Line",
    "ColumnGroup",
    "TableCandidate",
    "AlignmentClassification",
    "PageStructure",
    "PageExtraction",
    "ExtractionOptions",
    "ExtractionMetadata",
    "DocumentExtraction",
    "Failure",
    "FailureKind",
]
