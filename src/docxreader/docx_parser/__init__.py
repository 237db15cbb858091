"""DOCX Parser Package - OOXML extraction modules."""

from .reader import read_document, read_paragraphs
from .styles import parse_styles
from .cascade import new_style_cache, resolve_style, merge_style
from .document import build_paragraphs, read_paragraph, coalesce_runs
from .notes import extract_notes, parse_footnotes, parse_endnotes
from .archive import read_parts, read_part

__all__ = [
    "read_document",
    "read_paragraphs",
    "parse_styles",
    "new_style_cache",
    "resolve_style",
    "merge_style",
    "build_paragraphs",
    "read_paragraph",
    "coalesce_runs",
    "extract_notes",
    "parse_footnotes",
    "parse_endnotes",
    "read_parts",
    "read_part",
]
