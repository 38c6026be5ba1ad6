"""Shared fixtures: in-memory parser/writer collaborators and model builders."""
from typing import List, Optional, Sequence, Tuple

import pytest

from pdflayout.exceptions import PDFParseError, PDFWriteError
from pdflayout.models.schemas import Line, TextRun
from pdflayout.parsing.base import ParsedDocument, PDFParser, RawPage, RawTextRun
from pdflayout.rendering.pdf_writer import PageDraws, PDFWriter

A4 = (595.2755905511812, 841.8897637795277)


def raw_run(text: str, x: float, top: float, page_height: float = 800, size: float = 10,
            width: Optional[float] = None) -> RawTextRun:
    """Raw run whose normalized position will be (x, top)."""
    return RawTextRun(
        text=text,
        transform=(size, 0.0, 0.0, size, x, page_height - top),
        width=len(text) * 6 if width is None else width,
        height=size,
        font_name="g_d0_f1"
    )


class FakeDocument(ParsedDocument):
    def __init__(self, pages: List[RawPage], fail_on_page: Optional[int] = None):
        self.pages = pages
        self.fail_on_page = fail_on_page
        self.closed = False

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def get_page(self, page_number: int) -> RawPage:
        if page_number == self.fail_on_page:
            raise PDFParseError("broken page", operation="get_page", page_number=page_number)
        return self.pages[page_number - 1]

    def close(self) -> None:
        self.closed = True


class FakeParser(PDFParser):
    def __init__(self, pages: Sequence[RawPage] = (), fail_open: bool = False,
                 fail_on_page: Optional[int] = None):
        self.pages = list(pages)
        self.fail_open = fail_open
        self.fail_on_page = fail_on_page
        self.documents: List[FakeDocument] = []

    def open(self, data: bytes) -> FakeDocument:
        if self.fail_open:
            raise PDFParseError("not a PDF", operation="open")
        doc = FakeDocument(self.pages, self.fail_on_page)
        self.documents.append(doc)
        return doc


class RecordingWriter(PDFWriter):
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.pages: List[PageDraws] = []

    @property
    def default_page_size(self) -> Tuple[float, float]:
        return A4

    def write(self, pages: Sequence[PageDraws]) -> bytes:
        if self.fail:
            raise PDFWriteError("font embedding failed", operation="draw", page_number=1)
        self.pages = list(pages)
        return b"%PDF-1.4 fake"


@pytest.fixture
def make_run():
    def _make_run(text: str = "x", x: float = 0, y: float = 0, width: float = 10,
                  height: float = 10, font_size: float = 10, index: int = 0) -> TextRun:
        return TextRun(text=text, x=x, y=y, width=width, height=height,
                       font_name="F1", font_size=font_size, index=index)
    return _make_run


@pytest.fixture
def make_line():
    def _make_line(x: float, width: float, y: float = 0, text: str = "") -> Line:
        return Line(y=y, x=x, width=width, height=10, text=text)
    return _make_line


@pytest.fixture
def two_page_parser():
    first = RawPage(page_number=1, width=600, height=800, runs=[
        raw_run("Hello", 10, 100, width=30),
        raw_run("World", 60, 102, width=30),
        raw_run("Second", 10, 130, width=36),
    ])
    second = RawPage(page_number=2, width=600, height=800, runs=[
        raw_run("Closing", 270, 400, width=60),
    ])
    return FakeParser([first, second])


@pytest.fixture
def recording_writer():
    return RecordingWriter()
