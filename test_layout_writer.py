import pytest

from conftest import A4, RecordingWriter
from pdflayout.models.schemas import (
    DocumentExtraction,
    ExtractionMetadata,
    FailureKind,
    PageExtraction,
    TextRun,
)
from pdflayout.rendering.layout_writer import LayoutWriter


def extraction_with(*pages: PageExtraction) -> DocumentExtraction:
    return DocumentExtraction(
        pages=pages,
        total_pages=len(pages),
        metadata=ExtractionMetadata(source="test.pdf", timestamp="2026-01-01T00:00:00+00:00")
    )


@pytest.fixture
def page():
    runs = (
        TextRun(text="Title", x=72, y=100, width=40, height=14, font_name="F1", font_size=14, index=0),
        TextRun(text="\u200bBody", x=72, y=130, width=30, height=12, font_name="F2", font_size=12, index=1),
    )
    return PageExtraction(page_number=1, width=600, height=800, items=runs, text="Title\nBody")


class TestExactMode:
    def test_draws_runs_at_flipped_coordinates(self, page, recording_writer):
        result = LayoutWriter(writer=recording_writer).render_exact(extraction_with(page))

        assert result == b"%PDF-1.4 fake"
        width, height, draws = recording_writer.pages[0]
        assert (width, height) == (600, 800)
        assert draws[0] == ("Title", 72, 800 - 100 - 14, 14)
        assert draws[1] == ("Body", 72, 800 - 130 - 12, 12)

    def test_one_writer_page_per_extracted_page(self, page, recording_writer):
        LayoutWriter(writer=recording_writer).render_exact(extraction_with(page, page))
        assert len(recording_writer.pages) == 2

    def test_writes_output_file(self, page, recording_writer, tmp_path):
        target = tmp_path / "exact.pdf"
        result = LayoutWriter(writer=recording_writer).render_exact(extraction_with(page), target)

        assert target.read_bytes() == result


class TestReflowMode:
    def test_lines_at_fixed_margins(self, page, recording_writer):
        LayoutWriter(writer=recording_writer).render_reflowed(extraction_with(page))

        width, height, draws = recording_writer.pages[0]
        assert (width, height) == (None, None)
        top = A4[1] - 50
        assert draws == [("Title", 50, top, 12), ("Body", 50, top - 15, 12)]

    def test_overflowing_lines_are_dropped(self, recording_writer):
        long_page = PageExtraction(
            page_number=1, width=600, height=800,
            text="\n".join(f"line {i}" for i in range(200))
        )
        LayoutWriter(writer=recording_writer).render_reflowed(extraction_with(long_page))

        draws = recording_writer.pages[0][2]
        assert 0 < len(draws) < 200
        assert draws[-1][2] > 50
        assert draws[-1][2] - 15 <= 50
        assert draws[-1][0] == f"line {len(draws) - 1}"

    def test_long_lines_are_not_wrapped(self, recording_writer):
        text = "word " * 100
        wide_page = PageExtraction(page_number=1, width=600, height=800, text=text)
        LayoutWriter(writer=recording_writer).render_reflowed(extraction_with(wide_page))

        assert recording_writer.pages[0][2] == [(text, 50, A4[1] - 50, 12)]


class TestFailures:
    def test_writer_error_becomes_failure(self, page):
        result = LayoutWriter(writer=RecordingWriter(fail=True)).render_exact(extraction_with(page))

        assert not result
        assert result.kind == FailureKind.WRITE
        assert result.operation == "draw"

    def test_reflow_writer_error_becomes_failure(self, page):
        result = LayoutWriter(writer=RecordingWriter(fail=True)).render_reflowed(extraction_with(page))
        assert result.kind == FailureKind.WRITE

    def test_unwritable_target_becomes_failure(self, page, recording_writer, tmp_path):
        target = tmp_path / "missing" / "exact.pdf"
        result = LayoutWriter(writer=recording_writer).render_exact(extraction_with(page), target)

        assert not result
        assert result.kind == FailureKind.WRITE
        assert result.operation == "persist"
        assert not target.exists()
