"""Pydantic models for extracted PDF layout data."""
import math
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Page units are integers once normalized; degenerate geometry stays a float (NaN/inf).
Number = Union[int, float]


class LayoutModel(BaseModel):
    """Immutable value with camelCase JSON field names."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True
    )


class TextRun(LayoutModel):
    """A single text fragment in top-down page coordinates."""
    text: str
    x: Number
    y: Number
    width: Number
    height: Number
    font_name: str = ""
    font_size: Number = 0
    index: int  # emission order within the page

    @property
    def is_degenerate(self) -> bool:
        """True when any coordinate or size is NaN or infinite."""
        return not all(
            math.isfinite(value)
            for value in (self.x, self.y, self.width, self.height, self.font_size)
        )


class Line(LayoutModel):
    """Runs judged to share a baseline, ordered left to right."""
    y: Number
    x: Number
    width: Number
    height: Number
    items: Tuple[TextRun, ...] = ()
    text: str = ""


class ColumnGroup(LayoutModel):
    """Lines sharing a left edge; members are the clustered x values."""
    x: Number
    line_count: int
    members: Tuple[Number, ...] = ()
    line_indices: Tuple[int, ...] = ()


class TableCandidate(LayoutModel):
    """Lines whose width is close to ``width``. Candidates may overlap."""
    width: Number
    line_indices: Tuple[int, ...] = ()


class AlignmentClassification(LayoutModel):
    """Line indices per alignment bucket. A line is in at most one bucket."""
    left: Tuple[int, ...] = ()
    center: Tuple[int, ...] = ()
    right: Tuple[int, ...] = ()


class PageStructure(LayoutModel):
    """Geometric structure inferred from a page's lines."""
    columns: Tuple[ColumnGroup, ...] = ()
    table_candidates: Tuple[TableCandidate, ...] = ()
    alignment: AlignmentClassification = Field(default_factory=AlignmentClassification)


class PageExtraction(LayoutModel):
    """Everything extracted from one page."""
    page_number: int
    width: float
    height: float
    items: Tuple[TextRun, ...] = ()
    lines: Tuple[Line, ...] = ()
    text: str = ""
    structure: Optional[PageStructure] = None  # None when column detection is off

    def lines_at(self, indices: Sequence[int]) -> List[Line]:
        """Resolve structure line indices back to Lines."""
        return [self.lines[i] for i in indices]


class ExtractionOptions(LayoutModel):
    """Switches controlling how much layout is reconstructed."""
    preserve_spacing: bool = True
    group_by_lines: bool = True
    detect_columns: bool = True


class ExtractionMetadata(LayoutModel):
    """Where and how an extraction was produced."""
    source: str
    timestamp: str
    options: ExtractionOptions = Field(default_factory=ExtractionOptions)


class DocumentExtraction(LayoutModel):
    """Complete layout extraction for a document."""
    pages: Tuple[PageExtraction, ...] = ()
    total_pages: int
    metadata: ExtractionMetadata


class FailureKind(str, Enum):
    """Kinds of collaborator failure surfaced to callers."""
    PARSE = "parse_failure"
    WRITE = "write_failure"


class Failure(LayoutModel):
    """Failure result returned instead of raising.

    Falsy, so callers can write ``if not result:``.
    """
    kind: FailureKind
    message: str
    operation: Optional[str] = None
    page_number: Optional[int] = None
    source: Optional[str] = None

    def __bool__(self) -> bool:
        return False
