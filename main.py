#!/usr/bin/env python
"""Main CLI interface for the PDF layout engine."""
import argparse
import logging
import os
import sys
from pathlib import Path

from pdflayout.config import config
from pdflayout.models.schemas import ExtractionOptions, Failure
from pdflayout.pipeline import DocumentExtractor, load_extraction, save_extraction
from pdflayout.rendering.layout_writer import LayoutWriter

MODES = ("layout", "text", "exact", "reflow")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="PDF layout extraction - positioned text, lines, columns and re-rendering"
    )

    parser.add_argument(
        "--input",
        "-i",
        required=True,
        type=str,
        help="Path to input PDF file (or a saved *_layout.json for exact/reflow)"
    )

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output directory for results (default: from config, 'output')"
    )

    parser.add_argument(
        "--mode",
        "-m",
        choices=MODES,
        default="layout",
        help="layout: save extraction JSON; text: plain text; exact/reflow: rebuild a PDF"
    )

    parser.add_argument(
        "--no-spacing",
        action="store_true",
        help="Join runs with single spaces instead of synthesizing gaps"
    )

    parser.add_argument(
        "--no-lines",
        action="store_true",
        help="Skip line grouping (only positioned runs are extracted)"
    )

    parser.add_argument(
        "--no-columns",
        action="store_true",
        help="Skip column/table/alignment analysis"
    )

    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Path to config file (default: config.yaml)"
    )

    return parser


def run(args: argparse.Namespace) -> int:
    """Execute one CLI invocation and return the exit code."""
    input_path = Path(args.input)
    output_dir = Path(args.output or config.output_directory)
    os.makedirs(output_dir, exist_ok=True)
    stem = input_path.stem
    if stem.endswith("_layout"):
        stem = stem[: -len("_layout")]

    extractor = DocumentExtractor()

    if args.mode == "text":
        try:
            data = input_path.read_bytes()
        except OSError as e:
            print(f"Error reading PDF: {e}")
            return 1
        text = extractor.extract_plain_text(data)
        if isinstance(text, Failure):
            print(f"Error extracting text: {text.message}")
            return 1
        text_path = output_dir / f"{stem}.txt"
        text_path.write_text(text, encoding='utf-8')
        print(f"Saved text to: {text_path}")
        return 0

    if input_path.suffix.lower() == ".json":
        try:
            extraction = load_extraction(input_path)
        except (OSError, ValueError) as e:
            print(f"Error loading layout: {e}")
            return 1
    else:
        options = ExtractionOptions(
            preserve_spacing=not args.no_spacing,
            group_by_lines=not args.no_lines,
            detect_columns=not args.no_columns
        )
        try:
            data = input_path.read_bytes()
        except OSError as e:
            print(f"Error reading PDF: {e}")
            return 1
        extraction = extractor.extract_with_layout(
            data,
            options=options,
            source=str(input_path)
        )
        if isinstance(extraction, Failure):
            print(f"Error extracting layout: {extraction.message}")
            return 1

    if args.mode == "layout":
        json_path = save_extraction(extraction, str(output_dir), stem)
        print("\n" + "=" * 50)
        print("Extraction Summary")
        print("=" * 50)
        print(f"Source: {extraction.metadata.source}")
        print(f"Total Pages: {extraction.total_pages}")
        print(f"Lines Found: {sum(len(page.lines) for page in extraction.pages)}")
        print(f"Saved: {json_path}")
        print("=" * 50)
        return 0

    writer = LayoutWriter()
    pdf_path = output_dir / f"{stem}_{args.mode}.pdf"
    if args.mode == "exact":
        result = writer.render_exact(extraction, pdf_path)
    else:
        result = writer.render_reflowed(extraction, pdf_path)
    if isinstance(result, Failure):
        print(f"Error creating PDF: {result.message}")
        return 1
    print(f"New PDF created: {pdf_path}")
    return 0


def main():
    """Main CLI entry point."""
    args = build_parser().parse_args()

    if args.config:
        config.reload(args.config)

    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Validate input
    if not Path(args.input).exists():
        print(f"Error: Input file not found: {args.input}")
        sys.exit(1)

    sys.exit(run(args))


if __name__ == "__main__":
    main()
