"""Notes parser - Parse footnotes.xml / endnotes.xml into Note maps."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from docxreader.ir import Note, Style
from docxreader.docx_parser.cascade import StyleCache, new_style_cache
from docxreader.docx_parser.document import read_paragraph
from docxreader.docx_parser.ooxml import W, load_part, localname, to_int, w_attr

logger = logging.getLogger(__name__)

# Part root -> note element
NOTE_ELEMENTS = {
    "footnotes": "footnote",
    "endnotes": "endnote",
}

# Structural entries Word keeps in every notes part
SEPARATOR_TYPES = {"separator", "continuationSeparator", "continuationNotice"}


def extract_notes(
    notes_xml: Optional[bytes],
    styles: Dict[str, Style],
    cache: Optional[StyleCache] = None,
) -> Dict[int, Note]:
    """Parse a footnotes or endnotes part.

    Args:
        notes_xml: Raw bytes of footnotes.xml or endnotes.xml.
        styles: Style table from parse_styles.
        cache: Cascade cache of the current parse; a fresh one is used if None.

    Returns:
        Dict mapping note IDs to Notes. Separator entries are skipped.
    """
    notes: Dict[int, Note] = {}
    root = load_part(notes_xml, "notes part")
    if root is None:
        return notes

    note_tag = NOTE_ELEMENTS.get(localname(root))
    if note_tag is None or root.tag != W + localname(root):
        logger.warning("Unexpected notes root %s", root.tag)
        return notes

    if cache is None:
        cache = new_style_cache()

    for elem in root.iterchildren(W + note_tag):
        note_id = to_int(w_attr(elem, "id"))
        if note_id is None:
            logger.debug("Skipping w:%s without a numeric id", note_tag)
            continue
        if w_attr(elem, "type") in SEPARATOR_TYPES:
            continue

        paragraphs = [read_paragraph(p, styles, cache) for p in elem.iterchildren(W + "p")]
        notes[note_id] = Note(id=note_id, paragraphs=paragraphs)

    return notes


def parse_footnotes(footnotes_xml: Optional[bytes], styles: Dict[str, Style], cache: Optional[StyleCache] = None) -> Dict[int, Note]:
    return extract_notes(footnotes_xml, styles, cache)


def parse_endnotes(endnotes_xml: Optional[bytes], styles: Dict[str, Style], cache: Optional[StyleCache] = None) -> Dict[int, Note]:
    return extract_notes(endnotes_xml, styles, cache)
