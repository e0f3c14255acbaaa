"""
Write path: find glyph runs spelling a search string and turn them into
highlight geometry.

Matching is exact (case and whitespace sensitive) over the concatenated
glyph characters, using a sliding window that always ends at the glyph
being scanned. Every candidate start position is therefore checked once,
and overlapping candidates never need separate bookkeeping.
"""

from collections import deque
from typing import Deque, List, Optional, Sequence, Tuple

from ..errors import InvalidArgument
from .coordinates import common_origin
from .models import Glyph, Region, SearchMode


class MatchWindow:
    """The most recent glyphs whose text is at most `size` characters long"""

    def __init__(self, size: int):
        self.size = size
        self._glyphs: Deque[Glyph] = deque()
        self._length = 0

    def push(self, glyph: Glyph) -> None:
        self._glyphs.append(glyph)
        self._length += len(glyph.character)
        # drop from the front, never reset
        while self._length > self.size and self._glyphs:
            dropped = self._glyphs.popleft()
            self._length -= len(dropped.character)

    def clear(self) -> None:
        self._glyphs.clear()
        self._length = 0

    @property
    def text(self) -> str:
        return "".join(g.character for g in self._glyphs)

    def glyphs(self) -> List[Glyph]:
        return list(self._glyphs)


def find_text_runs(glyphs: Sequence[Glyph], target: str, mode: SearchMode = SearchMode.FIRST_ONLY) -> List[List[Glyph]]:
    """
    Return the glyph runs whose characters spell `target` exactly.

    In ALL mode the window is cleared after each match so that no glyph is
    reported twice. A run never spans two pages.

    Raises:
        InvalidArgument: If `target` is empty or `mode` is not a SearchMode
    """
    if not target:
        raise InvalidArgument("Search target must not be empty")
    if not isinstance(mode, SearchMode):
        raise InvalidArgument(f"Unsupported search mode: {mode!r}")
    common_origin(glyphs)

    if sum(len(g.character) for g in glyphs) < len(target):
        return []

    window = MatchWindow(len(target))
    runs: List[List[Glyph]] = []
    current_page: Optional[int] = None
    for glyph in glyphs:
        if glyph.page_index != current_page:
            window.clear()
            current_page = glyph.page_index
        window.push(glyph)
        if window.text == target:
            runs.append(window.glyphs())
            if mode is SearchMode.FIRST_ONLY:
                break
            window.clear()
    return runs


def locate_text(glyphs: Sequence[Glyph], target: str, mode: SearchMode = SearchMode.FIRST_ONLY) -> List[Region]:
    """
    Locate `target` on a page and return one enclosing region per match.

    A match that wraps across lines yields a single box around the full run;
    use locate_text_lines for per-line boxes.
    """
    return [Region.enclosing(run) for run in find_text_runs(glyphs, target, mode)]


def locate_text_lines(glyphs: Sequence[Glyph], target: str, mode: SearchMode = SearchMode.FIRST_ONLY) -> List[List[Region]]:
    """Like locate_text, but each match is split into one region per visual line"""
    return [line_regions(run) for run in find_text_runs(glyphs, target, mode)]


def _same_line(previous: Glyph, glyph: Glyph) -> bool:
    if previous.line_key is not None and glyph.line_key is not None:
        return previous.line_key == glyph.line_key
    return previous.y - previous.height <= glyph.center_y <= previous.y


def split_into_lines(run: Sequence[Glyph]) -> List[List[Glyph]]:
    """
    Group consecutive glyphs of a run by visual line.

    Uses the line grouping reported by the text layout when both glyphs carry
    one, otherwise the vertical overlap with the previous glyph.
    """
    lines: List[List[Glyph]] = []
    for glyph in run:
        if lines and _same_line(lines[-1][-1], glyph):
            lines[-1].append(glyph)
        else:
            lines.append([glyph])
    return lines


def _strip_whitespace(line: List[Glyph]) -> List[Glyph]:
    start, end = 0, len(line)
    while start < end and line[start].character.isspace():
        start += 1
    while end > start and line[end - 1].character.isspace():
        end -= 1
    return line[start:end]


def line_regions(run: Sequence[Glyph], color_hex: Optional[str] = None) -> List[Region]:
    """
    One region per visual line of a glyph run.

    Leading and trailing whitespace glyphs are left out of each line's box and
    whitespace-only lines are dropped. A run made only of whitespace falls back
    to its enclosing box.
    """
    if not run:
        return []
    regions = []
    for line in split_into_lines(run):
        visible = _strip_whitespace(line)
        if visible:
            regions.append(Region.enclosing(visible, color_hex=color_hex))
    return regions or [Region.enclosing(run, color_hex=color_hex)]


def _nearest_index(glyphs: Sequence[Glyph], point: Tuple[float, float]) -> int:
    px, py = point
    candidates = [i for i, g in enumerate(glyphs) if not g.character.isspace()] or list(range(len(glyphs)))
    return min(candidates, key=lambda i: (glyphs[i].center_x - px) ** 2 + (glyphs[i].center_y - py) ** 2)


def locate_span(glyphs: Sequence[Glyph], start: Tuple[float, float], end: Tuple[float, float]) -> List[Region]:
    """
    Per-line regions for the reading-order run between two points.

    The run starts at the glyph nearest to `start` and ends at the glyph
    nearest to `end` (swapped when `end` comes first). Points are in the
    glyphs' origin and the glyphs should belong to one page.
    """
    if not glyphs:
        return []
    common_origin(glyphs)
    first = _nearest_index(glyphs, start)
    last = _nearest_index(glyphs, end)
    if first > last:
        first, last = last, first
    return line_regions(glyphs[first:last + 1])


def region_at(regions: Sequence[Region], x: float, y: float) -> Optional[Region]:
    """First region containing the point, or None"""
    for region in regions:
        if region.contains(x, y):
            return region
    return None
