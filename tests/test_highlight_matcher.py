"""
Unit tests for the read path: matching highlight regions against glyphs.

Glyph layout used throughout: "HELLO WORLD" on one line, 10pt wide glyphs
starting at x=100, top edge at y=700 (PDF space), 12pt tall. Glyph centers
are therefore at x=105, 115, ... and y=694.
"""

import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

import pytest

from pdf_highlight_kit.errors import InvalidArgument
from pdf_highlight_kit.reconciler.highlight_matcher import group_records_by_annotation, match_highlights
from pdf_highlight_kit.reconciler.models import Glyph, Origin, Region

PAGE_HEIGHT = 800.0


def make_glyphs(text, x=100.0, top=700.0, width=10.0, height=12.0, page_index=0, line_key=None):
    return [
        Glyph(character=ch, x=x + i * width, y=top, width=width, height=height,
              page_index=page_index, line_key=line_key)
        for i, ch in enumerate(text)
    ]


def region(left, right, top=702.0, bottom=688.0, **kwargs):
    return Region(left=left, right=right, top=top, bottom=bottom, page_index=kwargs.pop("page_index", 0), **kwargs)


class TestMatchHighlights:
    """Scenarios for match_highlights"""

    def test_region_over_first_word(self):
        glyphs = make_glyphs("HELLO WORLD")
        records = match_highlights(glyphs, [region(100, 150)])

        assert len(records) == 1
        assert records[0].text == "HELLO"
        assert records[0].page_index == 0

    def test_overlapping_regions_are_not_merged(self):
        glyphs = make_glyphs("HELLO WORLD")
        records = match_highlights(glyphs, [region(160, 210), region(158, 212)])

        assert [r.text for r in records] == ["WORLD", "WORLD"]

    def test_empty_glyph_sequence_yields_nothing(self):
        assert match_highlights([], [region(100, 150), region(0, 400)]) == []

    def test_whitespace_only_match_is_discarded(self):
        glyphs = make_glyphs("HELLO WORLD")
        # only the space (center x=155) lies inside
        assert match_highlights(glyphs, [region(150, 160)]) == []

    def test_surrounding_whitespace_is_trimmed(self):
        glyphs = make_glyphs("HELLO WORLD")
        records = match_highlights(glyphs, [region(140, 170)])
        assert records[0].text == "O W"

    def test_bounds_are_inclusive(self):
        glyphs = make_glyphs("HELLO WORLD")
        # right edge exactly on the center of the first "O"
        assert match_highlights(glyphs, [region(100, 145)])[0].text == "HELLO"
        assert match_highlights(glyphs, [region(100, 144.9)])[0].text == "HELL"
        # vertical edge exactly on the glyph center line
        assert match_highlights(glyphs, [region(100, 150, top=694.0, bottom=680.0)])[0].text == "HELLO"

    def test_region_above_the_line_matches_nothing(self):
        glyphs = make_glyphs("HELLO WORLD")
        assert match_highlights(glyphs, [region(100, 210, top=730.0, bottom=710.0)]) == []

    def test_output_follows_region_order(self):
        glyphs = make_glyphs("HELLO WORLD")
        records = match_highlights(glyphs, [region(160, 210), region(100, 150)])
        assert [r.text for r in records] == ["WORLD", "HELLO"]

    def test_text_keeps_sequence_order_across_lines(self):
        # second line is emitted after the first even though a region covers both
        glyphs = make_glyphs("ABC ", line_key=(0, 0)) + make_glyphs("DEF", top=680.0, line_key=(0, 1))
        records = match_highlights(glyphs, [region(100, 140, top=702.0, bottom=668.0)])
        assert records[0].text == "ABC DEF"

    @pytest.mark.parametrize("left,right", [(100, 150), (120, 190), (95, 215), (130, 131)])
    def test_text_is_in_order_subsequence_of_page(self, left, right):
        glyphs = make_glyphs("HELLO WORLD")
        page_text = "".join(g.character for g in glyphs)
        for record in match_highlights(glyphs, [region(left, right)]):
            assert record.text in page_text

    def test_regions_only_match_glyphs_on_their_page(self):
        glyphs = make_glyphs("HELLO WORLD", page_index=0)
        assert match_highlights(glyphs, [region(100, 150, page_index=1)]) == []

    def test_top_left_region_is_converted_before_matching(self):
        glyphs = make_glyphs("HELLO WORLD")
        screen_region = Region(left=100, right=150, top=98.0, bottom=112.0, page_index=0, origin=Origin.TOP_LEFT)

        records = match_highlights(glyphs, [screen_region], page_height=PAGE_HEIGHT)

        assert records[0].text == "HELLO"
        assert records[0].region.origin is Origin.BOTTOM_LEFT
        assert records[0].region.top == 702.0
        assert records[0].region.bottom == 688.0

    def test_top_left_glyphs_with_bottom_left_region(self):
        glyphs = [g.flipped(PAGE_HEIGHT) for g in make_glyphs("HELLO WORLD")]
        records = match_highlights(glyphs, [region(160, 210)], page_height=PAGE_HEIGHT)

        assert records[0].text == "WORLD"
        assert records[0].region.origin is Origin.TOP_LEFT

    def test_origin_mismatch_without_page_height_is_rejected(self):
        glyphs = make_glyphs("HELLO WORLD")
        screen_region = Region(left=100, right=150, top=98.0, bottom=112.0, page_index=0, origin=Origin.TOP_LEFT)
        with pytest.raises(InvalidArgument):
            match_highlights(glyphs, [screen_region])

    def test_mixed_glyph_origins_are_rejected(self):
        glyphs = make_glyphs("HELLO")
        glyphs.append(glyphs[0].flipped(PAGE_HEIGHT))
        with pytest.raises(InvalidArgument):
            match_highlights(glyphs, [region(100, 150)])

    def test_color_is_carried_into_record(self):
        glyphs = make_glyphs("HELLO WORLD")
        records = match_highlights(glyphs, [region(100, 150, color_hex="#ff9e00")])
        assert records[0].color_hex == "#FF9E00"


class TestGroupRecordsByAnnotation:

    def test_quads_of_one_annotation_are_joined(self):
        glyphs = make_glyphs("HELLO WORLD")
        records = match_highlights(glyphs, [
            region(100, 150, annotation_id="12"),
            region(160, 210, annotation_id="12"),
            region(160, 210, annotation_id="15"),
        ])

        assert group_records_by_annotation(records) == ["HELLO WORLD", "WORLD"]

    def test_records_without_annotation_id_stand_alone(self):
        glyphs = make_glyphs("HELLO WORLD")
        records = match_highlights(glyphs, [region(100, 150), region(160, 210)])

        assert group_records_by_annotation(records) == ["HELLO", "WORLD"]
