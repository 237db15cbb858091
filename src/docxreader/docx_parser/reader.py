"""DOCX reader - Main entry point for reading .docx packages."""

from __future__ import annotations

import logging
from typing import List

from docxreader.exceptions import ArchiveError
from docxreader.ir import Document, Paragraph
from docxreader.docx_parser.archive import (
    DOCUMENT_PART,
    ENDNOTES_PART,
    FOOTNOTES_PART,
    PACKAGE_PARTS,
    STYLES_PART,
    Source,
    read_parts,
)
from docxreader.docx_parser.cascade import new_style_cache
from docxreader.docx_parser.document import build_paragraphs
from docxreader.docx_parser.notes import extract_notes
from docxreader.docx_parser.styles import parse_styles

logger = logging.getLogger(__name__)


def read_document(source: Source) -> Document:
    """Read a .docx package into a Document.

    Args:
        source: Path to the .docx file, its raw bytes, or a binary file object.

    Returns:
        Document: paragraphs, style table and note maps. Missing or
        malformed parts leave the matching field empty; an unreadable
        package gives an empty Document.
    """
    doc = Document()
    try:
        parts = read_parts(source, PACKAGE_PARTS)
    except ArchiveError as e:
        logger.warning("Cannot read package: %s", e)
        return doc

    # Table and cache live for this call only
    styles = parse_styles(parts.get(STYLES_PART))
    cache = new_style_cache()

    doc.styles = styles
    doc.footnotes = extract_notes(parts.get(FOOTNOTES_PART), styles, cache)
    doc.endnotes = extract_notes(parts.get(ENDNOTES_PART), styles, cache)
    doc.paragraphs = build_paragraphs(parts.get(DOCUMENT_PART), styles, cache)

    logger.debug(
        "Read %d paragraphs, %d styles, %d footnotes, %d endnotes",
        len(doc.paragraphs), len(doc.styles), len(doc.footnotes), len(doc.endnotes),
    )
    return doc


def read_paragraphs(source: Source) -> List[Paragraph]:
    """Flat view: just the body paragraphs of read_document."""
    return read_document(source).paragraphs
