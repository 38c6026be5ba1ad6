"""Main extraction pipeline."""
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pdflayout.config import config
from pdflayout.exceptions import PDFParseError
from pdflayout.layout.line_assembler import LineAssembler
from pdflayout.layout.normalizer import normalize_page
from pdflayout.layout.structure_analyzer import StructureAnalyzer
from pdflayout.models.schemas import (
    DocumentExtraction,
    ExtractionMetadata,
    ExtractionOptions,
    Failure,
    FailureKind,
    PageExtraction,
)
from pdflayout.parsing.base import PDFParser, RawPage
from pdflayout.parsing.pymupdf_parser import PyMuPDFParser

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "<bytes>"


class DocumentExtractor:
    """
    Extract positioned text and inferred layout from PDF documents.

    Pages are processed in parser order. Every call builds its results from
    scratch; nothing is shared between extractions.
    """

    def __init__(
        self,
        parser: Optional[PDFParser] = None,
        structure_analyzer: Optional[StructureAnalyzer] = None,
        line_threshold: Optional[float] = None
    ):
        """Initialize extractor.

        Args:
            parser: PDF parser collaborator (PyMuPDF by default)
            structure_analyzer: Analyzer used when column detection is on
            line_threshold: Vertical distance under which runs share a line
        """
        self.parser = parser or PyMuPDFParser()
        self.structure_analyzer = structure_analyzer or StructureAnalyzer()
        self.line_threshold = config.line_threshold if line_threshold is None else line_threshold

    def extract_with_layout(
        self,
        data: bytes,
        options: Optional[Union[ExtractionOptions, Dict[str, Any]]] = None,
        source: Optional[str] = None
    ) -> Union[DocumentExtraction, Failure]:
        """
        Extract text with positions, lines and page structure.

        Args:
            data: Raw PDF bytes
            options: Extraction options (model or dict of option values)
            source: Identifier recorded in the metadata, e.g. the file path

        Returns:
            DocumentExtraction, or a parse Failure if the document could not
            be read. No partial result is returned.
        """
        if options is None:
            options = ExtractionOptions()
        elif not isinstance(options, ExtractionOptions):
            options = ExtractionOptions.model_validate(options)
        source = source or DEFAULT_SOURCE

        pages: List[PageExtraction] = []
        try:
            with self.parser.open(data) as doc:
                total_pages = doc.page_count
                for page_number in range(1, total_pages + 1):
                    logger.info(f"Processing page {page_number}/{total_pages}...")
                    raw_page = doc.get_page(page_number)
                    pages.append(self._extract_page(raw_page, options))
        except PDFParseError as e:
            logger.error(
                f"Error extracting text with positions from {source} "
                f"(operation={e.operation}, page={e.page_number}): {e.message}"
            )
            return self._parse_failure(e, source)

        return DocumentExtraction(
            pages=tuple(pages),
            total_pages=total_pages,
            metadata=ExtractionMetadata(
                source=source,
                timestamp=datetime.now(timezone.utc).isoformat(),
                options=options
            )
        )

    def extract_plain_text(self, data: bytes) -> Union[str, Failure]:
        """
        Extract raw text without any positioning.

        Each page contributes its runs joined by single spaces, followed by
        a newline.
        """
        chunks = []
        try:
            with self.parser.open(data) as doc:
                for page_number in range(1, doc.page_count + 1):
                    raw_page = doc.get_page(page_number)
                    chunks.append(" ".join(run.text for run in raw_page.runs))
                    chunks.append("\n")
        except PDFParseError as e:
            logger.error(f"Error extracting text: {e.message}")
            return self._parse_failure(e, DEFAULT_SOURCE)
        return "".join(chunks)

    def _extract_page(self, raw_page: RawPage, options: ExtractionOptions) -> PageExtraction:
        """Normalize, group and analyze a single page."""
        items = normalize_page(raw_page)

        lines = []
        if options.group_by_lines:
            assembler = LineAssembler(self.line_threshold, options.preserve_spacing)
            lines = assembler.assemble(items)

        structure = None
        if options.detect_columns:
            structure = self.structure_analyzer.analyze(lines, raw_page.width)

        return PageExtraction(
            page_number=raw_page.page_number,
            width=raw_page.width,
            height=raw_page.height,
            items=tuple(items),
            lines=tuple(lines),
            text="\n".join(line.text for line in lines),
            structure=structure
        )

    @staticmethod
    def _parse_failure(error: PDFParseError, source: str) -> Failure:
        return Failure(
            kind=FailureKind.PARSE,
            message=error.message,
            operation=error.operation,
            page_number=error.page_number,
            source=source
        )


def save_extraction(
    extraction: DocumentExtraction,
    output_dir: Optional[str] = None,
    stem: str = "document"
) -> Path:
    """
    Save an extraction as ``<stem>_layout.json``.

    Args:
        extraction: Extraction result
        output_dir: Target directory, created if missing
        stem: File name stem

    Returns:
        Path of the written file
    """
    output_dir = output_dir or config.output_directory
    os.makedirs(output_dir, exist_ok=True)

    json_path = Path(output_dir) / f"{stem}_layout.json"
    with open(json_path, 'w', encoding='utf-8') as f:
        json.dump(
            extraction.model_dump(mode='json', by_alias=True),
            f,
            indent=2,
            ensure_ascii=False
        )

    logger.info(f"Saved layout data to: {json_path}")
    return json_path


def load_extraction(path: Union[str, Path]) -> DocumentExtraction:
    """Load an extraction previously written by save_extraction."""
    with open(path, 'r', encoding='utf-8') as f:
        return DocumentExtraction.model_validate(json.load(f))


def extract_with_layout(
    data: bytes,
    options: Optional[Union[ExtractionOptions, Dict[str, Any]]] = None,
    source: Optional[str] = None
) -> Union[DocumentExtraction, Failure]:
    """Extract layout with the default PyMuPDF parser."""
    return DocumentExtractor().extract_with_layout(data, options, source)


def extract_plain_text(data: bytes) -> Union[str, Failure]:
    """Extract plain text with the default PyMuPDF parser."""
    return DocumentExtractor().extract_plain_text(data)
