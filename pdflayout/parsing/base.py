"""Parser collaborator interface and the raw page data it produces."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Tuple

Transform = Tuple[float, float, float, float, float, float]


@dataclass
class RawTextRun:
    """A text fragment as the parser emits it, in PDF (bottom-left origin) space."""
    text: str
    transform: Transform  # [a, b, c, d, e, f]
    width: float
    height: float
    font_name: str = ""


@dataclass
class RawPage:
    """Viewport size and raw runs of one 1-based page."""
    page_number: int
    width: float
    height: float
    runs: List[RawTextRun] = field(default_factory=list)


class ParsedDocument(ABC):
    """An open document. Use as a context manager so it gets closed."""

    @property
    @abstractmethod
    def page_count(self) -> int:
        ...

    @abstractmethod
    def get_page(self, page_number: int) -> RawPage:
        """Viewport and runs of a 1-based page, in emission order."""
        ...

    def close(self) -> None:
        pass

    def __enter__(self) -> "ParsedDocument":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class PDFParser(ABC):
    """Opens PDF bytes as a ParsedDocument."""

    @abstractmethod
    def open(self, data: bytes) -> ParsedDocument:
        """Open raw PDF bytes. Raises PDFParseError on malformed input."""
        ...
