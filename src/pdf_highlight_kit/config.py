"""Highlight styles and runtime settings."""

from dataclasses import dataclass, field
from typing import Dict, Optional

from .errors import InvalidArgument
from .utils.color_utils import normalize_hex


@dataclass(frozen=True)
class HighlightStyle:
    """How a new highlight annotation looks and is labelled"""

    tag: str
    title: str
    color_hex: str
    opacity: float = 0.3

    def __post_init__(self):
        object.__setattr__(self, "color_hex", normalize_hex(self.color_hex))
        if not 0.0 <= self.opacity <= 1.0:
            raise InvalidArgument(f"Opacity must be between 0 and 1, got {self.opacity}")

    def with_color(self, color_hex: str) -> "HighlightStyle":
        return HighlightStyle(tag=self.tag, title=self.title, color_hex=color_hex, opacity=self.opacity)


HIGHLIGHT_STYLES: Dict[str, HighlightStyle] = {
    "default": HighlightStyle(tag="default", title="Highlight", color_hex="#FFFF00", opacity=0.3),
    "character": HighlightStyle(tag="character", title="Character", color_hex="#FF9E00", opacity=0.4),
    "dialogue": HighlightStyle(tag="dialogue", title="Dialogue", color_hex="#F1C680", opacity=0.4),
}


def get_style(name: Optional[str]) -> HighlightStyle:
    """Look up a preset style by tag; None means the configured default"""
    if name is None:
        return SETTINGS.default_style
    try:
        return HIGHLIGHT_STYLES[name]
    except KeyError:
        known = ", ".join(sorted(HIGHLIGHT_STYLES))
        raise InvalidArgument(f"Unknown highlight style {name!r} (known: {known})") from None


@dataclass
class HighlightSettings:
    """Defaults used when an entry point is not given explicit options."""

    default_style: HighlightStyle = field(default_factory=lambda: HIGHLIGHT_STYLES["default"])

    # Write one highlight per visual line instead of one box around the match
    per_line: bool = True

    # Append a synthetic space after each text line so searches cross line breaks
    separate_lines: bool = True

    # fitz.Document.save options for full (non-incremental) saves
    save_garbage: int = 4
    save_deflate: bool = True


# Global settings instance
SETTINGS = HighlightSettings()
