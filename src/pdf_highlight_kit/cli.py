#!/usr/bin/env python3
"""
PDF Highlight Kit - Command Line Interface
Extract highlighted text from PDFs and highlight text found by search
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import get_style
from .errors import HighlightKitError
from .reconciler.models import Origin, SearchMode
from .pdf_processor.pdf_highlighter import (
    PDFHighlightDocument,
    extract_highlights,
    highlight_text,
    locate_in_document,
    remove_highlight_in_file,
)
from .reconciler.highlight_matcher import group_records_by_annotation
from .utils.file_utils import create_backup, ensure_directory_exists, list_pdf_files, read_search_targets


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _cmd_extract(args) -> int:
    source = Path(args.pdf_file)
    pdf_files = list_pdf_files(str(source)) if source.is_dir() else [str(source)]
    if not pdf_files:
        print(f"Error: No PDF files found in {source}")
        return 1

    exported = []
    for pdf_file in pdf_files:
        print(f"Processing highlights for: {Path(pdf_file).name}")
        with PDFHighlightDocument(pdf_file) as document:
            records = extract_highlights(document)

        texts = group_records_by_annotation(records) if args.by_annotation else [r.text for r in records]
        print(f"Found {len(texts)} highlighted passages")
        for i, text in enumerate(texts, 1):
            print(f"  {i}. {text}")

        exported.append({
            "pdf_file": pdf_file,
            "highlights": [record.to_dict() for record in records],
        })

    if args.export_json:
        ensure_directory_exists(str(Path(args.export_json).parent))
        with open(args.export_json, 'w', encoding='utf-8') as f:
            json.dump(exported if len(exported) > 1 else exported[0], f, indent=2, ensure_ascii=False)
        print(f"Highlights exported to: {args.export_json}")
    return 0


def _cmd_highlight(args) -> int:
    if args.targets_file and not Path(args.targets_file).is_file():
        print(f"Error: Targets file does not exist: {args.targets_file}")
        return 1
    targets = [args.text] if args.text else read_search_targets(args.targets_file)
    if not targets:
        print("Error: No search text given")
        return 1

    style = get_style(args.style) if args.style else None
    mode = SearchMode.ALL if args.all else SearchMode.FIRST_ONLY

    if args.backup and not args.output:
        create_backup(args.pdf_file)

    found = 0
    with PDFHighlightDocument(args.pdf_file) as document:
        settings = document.settings
        style = style or settings.default_style
        if args.color:
            style = style.with_color(args.color)
        per_line = settings.per_line and not args.whole_run

        for target in targets:
            if highlight_text(document, target, style=style, per_line=per_line, mode=mode):
                found += 1
                print(f"✅ Highlighted: {target}")
            else:
                print(f"❌ Not found: {target}")

        if not found:
            print("No highlights were added; the PDF was not modified.")
            return 1
        saved_to = document.save_pdf(args.output)

    print(f"Added highlights for {found} of {len(targets)} search texts. Saved to: {saved_to}")
    return 0


def _cmd_locate(args) -> int:
    mode = SearchMode.ALL if args.all else SearchMode.FIRST_ONLY
    with PDFHighlightDocument(args.pdf_file) as document:
        regions = locate_in_document(document, args.text, mode)
    if not regions:
        print(f"Not found: {args.text}")
        return 1
    for region in regions:
        print(
            f"page {region.page_index + 1}: left={region.left:.2f} bottom={region.bottom:.2f} "
            f"right={region.right:.2f} top={region.top:.2f}"
        )
    return 0


def _cmd_remove(args) -> int:
    origin = Origin.TOP_LEFT if args.top_left else Origin.BOTTOM_LEFT
    if remove_highlight_in_file(args.pdf_file, args.page - 1, args.x, args.y, args.output, origin=origin):
        print("✅ Highlight removed")
        return 0
    print(f"No highlight at ({args.x}, {args.y}) on page {args.page}")
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pdf-highlight-kit", description="PDF highlight reader and writer")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser("extract", help="Print the text under every highlight")
    extract.add_argument("--pdf-file", required=True, help="PDF file, or a folder of PDF files")
    extract.add_argument("--export-json", help="Export highlights to JSON file")
    extract.add_argument("--by-annotation", action="store_true",
                         help="Join multi-line highlights into one passage")
    extract.set_defaults(handler=_cmd_extract)

    highlight = subparsers.add_parser("highlight", help="Highlight text found by search")
    highlight.add_argument("--pdf-file", required=True, help="Path to PDF file")
    group = highlight.add_mutually_exclusive_group(required=True)
    group.add_argument("--text", help="Exact text to highlight")
    group.add_argument("--targets-file", help="Text file with one search text per line")
    highlight.add_argument("--output", help="Output PDF path (default: modify input in place)")
    highlight.add_argument("--style", help="Highlight style preset (default, character, dialogue)")
    highlight.add_argument("--color", help="Override the style color, e.g. #FF9E00")
    highlight.add_argument("--all", action="store_true", help="Highlight every occurrence")
    highlight.add_argument("--whole-run", action="store_true",
                           help="One box around the match instead of one per line")
    highlight.add_argument("--backup", action="store_true", help="Back up the input before modifying it in place")
    highlight.set_defaults(handler=_cmd_highlight)

    locate = subparsers.add_parser("locate", help="Print where text occurs without modifying the PDF")
    locate.add_argument("--pdf-file", required=True, help="Path to PDF file")
    locate.add_argument("--text", required=True, help="Exact text to find")
    locate.add_argument("--all", action="store_true", help="Report every occurrence")
    locate.set_defaults(handler=_cmd_locate)

    remove = subparsers.add_parser("remove", help="Remove the highlight under a point")
    remove.add_argument("--pdf-file", required=True, help="Path to PDF file")
    remove.add_argument("--page", type=int, required=True, help="1-based page number")
    remove.add_argument("--x", type=float, required=True)
    remove.add_argument("--y", type=float, required=True)
    remove.add_argument("--top-left", action="store_true", help="y is measured down from the page top")
    remove.add_argument("--output", help="Output PDF path (default: modify input in place)")
    remove.set_defaults(handler=_cmd_remove)

    return parser


def main(argv=None) -> int:
    """Command line interface main function"""
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        return args.handler(args)
    except HighlightKitError as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
