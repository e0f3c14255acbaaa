#!/usr/bin/env python3
"""
Dump glyphs and highlight regions of a PDF page to help debug matching.

Usage:
  python scripts/dump_page_glyphs.py tests/sample.pdf 0

Args:
  pdf_path: Path to the PDF file
  page_number: 0-based page index (default: 0)
"""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pdf_highlight_kit.errors import HighlightKitError, LayoutUnavailable
from pdf_highlight_kit.pdf_processor import GlyphLayoutExtractor, PDFHighlightDocument


def main() -> int:
    if len(sys.argv) < 2:
        print("Usage: dump_page_glyphs.py <pdf_path> [page_number]")
        return 2

    pdf_path = Path(sys.argv[1])
    page_number = int(sys.argv[2]) if len(sys.argv) > 2 else 0

    try:
        with PDFHighlightDocument(str(pdf_path)) as document:
            extractor = GlyphLayoutExtractor(document.text_provider)
            try:
                glyphs = extractor.extract_glyphs(page_number)
            except LayoutUnavailable as e:
                print(f"No text layer: {e.reason}")
                glyphs = []

            print(f"GLYPH COUNT {len(glyphs)} (page height {document.text_provider.page_height(page_number):.1f})")
            for i, g in enumerate(glyphs):
                # center is the anchor used for region membership
                print(f"{i:4d}: {g.character!r} x={g.x:.2f} y={g.y:.2f} w={g.width:.2f} h={g.height:.2f} "
                      f"center=({g.center_x:.2f}, {g.center_y:.2f}) line={g.line_key}")

            print("\nHIGHLIGHT REGIONS:")
            for region in document.annotation_provider.highlight_regions_for_page(page_number):
                print(f"  annot {region.annotation_id}: left={region.left:.2f} right={region.right:.2f} "
                      f"top={region.top:.2f} bottom={region.bottom:.2f} color={region.color_hex}")
    except HighlightKitError as e:
        print(f"Error: {e}")
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
