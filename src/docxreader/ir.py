"""Intermediate Representation (IR) for Word documents.

This module defines the data structures produced by the reader:
OOXML Parts → Style Table → Style Cascade → Document
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class StyleKind(str, Enum):
    """What a style applies to."""

    PARAGRAPH = "paragraph"
    RUN = "run"


class Justification(str, Enum):
    """Paragraph alignment. LEFT doubles as "not set"."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"

    @classmethod
    def from_ooxml(cls, value: Optional[str]) -> "Justification":
        """Map a w:jc value; anything unrecognized is LEFT."""
        if value == "center":
            return cls.CENTER
        if value == "right":
            return cls.RIGHT
        if value == "both":
            return cls.JUSTIFY
        return cls.LEFT


@dataclass(frozen=True)
class Color:
    """An RGBA color. Opaque black is the "not set" value."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 255

    @classmethod
    def from_hex(cls, value: Optional[str]) -> "Color":
        """Parse RRGGBB or RRGGBBAA. Malformed input (e.g. "auto") gives the default."""
        if not value or len(value) not in (6, 8):
            return cls()
        if any(c not in string.hexdigits for c in value):
            return cls()
        channels = [int(value[i:i + 2], 16) for i in range(0, len(value), 2)]
        return cls(*channels)

    @property
    def is_default(self) -> bool:
        return self == Color()

    def to_hex(self) -> str:
        return f"{self.r:02X}{self.g:02X}{self.b:02X}{self.a:02X}"


@dataclass(frozen=True)
class TabStop:
    """A tab stop definition."""

    position: float = 0.0  # in points
    alignment: str = "left"  # left, right, center, decimal, ...
    leader: str = ""  # dot, hyphen, underscore, ...


@dataclass
class Style:
    """A style record, either as declared in styles.xml or fully resolved."""

    style_id: str = ""
    based_on: str = ""
    kind: StyleKind = StyleKind.RUN
    name: str = ""

    # Character properties
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strike: bool = False
    subscript: bool = False
    superscript: bool = False
    color: Color = field(default_factory=Color)
    back_color: Color = field(default_factory=Color)
    font_family: str = ""
    font_size: float = 0.0  # in points, 0 = not set

    # Numbering
    level: int = 0
    numbered: bool = False
    number_format: str = ""  # e.g. decimal
    number_style: str = ""

    # Spacing
    line_spacing: float = 0.0  # multiplier, 0 = not set
    space_before: float = 0.0  # in points
    space_after: float = 0.0  # in points
    space_between_same_style: bool = False

    # Alignment and direction
    justification: Justification = Justification.LEFT
    right_direction: bool = False

    # Indentation (points)
    indent_left: float = 0.0
    indent_right: float = 0.0
    indent_first_line: float = 0.0

    tabs: List[TabStop] = field(default_factory=list)


@dataclass
class Run:
    """A run of uniformly formatted text."""

    text: str = ""
    style: str = ""  # style ID the run was resolved against
    lang: str = ""
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strike: bool = False
    subscript: bool = False
    superscript: bool = False
    color: Color = field(default_factory=Color)
    back_color: Color = field(default_factory=Color)
    font_family: str = ""
    font_size: float = 0.0  # in points

    # Footnote / endnote reference (0 = none)
    note_id: int = 0
    note_type: str = ""  # "footnote" or "endnote"

    @property
    def is_note_reference(self) -> bool:
        return self.note_id != 0


@dataclass
class Paragraph:
    """A paragraph with its effective layout and its runs."""

    style: str = ""  # explicit w:pStyle, empty when the paragraph has none

    # Numbering
    level: int = 0
    numbered: bool = False
    number_format: str = ""
    number_style: str = ""

    justification: Justification = Justification.LEFT
    right_direction: bool = False

    # Spacing
    line_spacing: float = 1.0  # multiplier
    space_before: float = 0.0  # in points
    space_after: float = 0.0  # in points
    space_between_same_style: bool = False

    # Indentation (points)
    indent_left: float = 0.0
    indent_right: float = 0.0
    indent_first_line: float = 0.0

    tabs: List[TabStop] = field(default_factory=list)
    runs: List[Run] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass
class Note:
    """A footnote or endnote body."""

    id: int
    paragraphs: List[Paragraph] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(p.text for p in self.paragraphs)


@dataclass
class Document:
    """The complete document representation."""

    paragraphs: List[Paragraph] = field(default_factory=list)
    styles: Dict[str, Style] = field(default_factory=dict)
    footnotes: Dict[int, Note] = field(default_factory=dict)
    endnotes: Dict[int, Note] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "\n".join(p.text for p in self.paragraphs)

    def footnote_for(self, run: Run) -> Optional[Note]:
        if run.note_type != "footnote":
            return None
        return self.footnotes.get(run.note_id)

    def endnote_for(self, run: Run) -> Optional[Note]:
        if run.note_type != "endnote":
            return None
        return self.endnotes.get(run.note_id)
