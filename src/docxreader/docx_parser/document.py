"""DOCX document builder - Turn body XML into resolved paragraphs and runs."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional

from lxml import etree

from docxreader.config import settings
from docxreader.ir import Paragraph, Run, Style
from docxreader.docx_parser.cascade import StyleCache, merge_style, resolve_style
from docxreader.docx_parser.ooxml import (
    W,
    XML_SPACE,
    load_part,
    localname,
    to_int,
    w_attr,
    w_child,
    w_text,
    w_val,
)
from docxreader.docx_parser.styles import read_paragraph_properties, read_run_properties

logger = logging.getLogger(__name__)

# Inline containers whose runs belong to the enclosing paragraph
RUN_CONTAINERS = {"hyperlink", "ins", "smartTag", "fldSimple"}

NOTE_REFERENCES = {
    "footnoteReference": "footnote",
    "endnoteReference": "endnote",
}

# Run fields that must match for two adjacent runs to merge
RUN_FORMAT_FIELDS = (
    "style",
    "lang",
    "bold",
    "italic",
    "underline",
    "strike",
    "subscript",
    "superscript",
    "color",
    "back_color",
    "font_family",
    "font_size",
)


def build_paragraphs(body_xml: Optional[bytes], styles: Dict[str, Style], cache: StyleCache) -> List[Paragraph]:
    """Build the ordered paragraph list of document.xml.

    Args:
        body_xml: Raw bytes of word/document.xml (None or empty is allowed).
        styles: Style table from parse_styles.
        cache: Per-parse cascade cache, shared with the note extractor.

    Returns:
        Paragraphs in document order; empty when the part is missing,
        malformed, or has no w:body.
    """
    root = load_part(body_xml, "word/document.xml", root_name="document")
    if root is None:
        return []
    body = w_child(root, "body")
    if body is None:
        logger.warning("word/document.xml has no w:body")
        return []

    return [read_paragraph(p, styles, cache) for p in body.iterchildren(W + "p")]


def read_paragraph(elem: etree._Element, styles: Dict[str, Style], cache: StyleCache) -> Paragraph:
    """Resolve a single w:p element.

    Precedence, lowest first: defaults, the named style's cascade, then
    the paragraph's own w:pPr.
    """
    pPr = w_child(elem, "pPr")
    explicit_style = w_val(pPr, "pStyle") or ""
    style_id = explicit_style or settings.default_paragraph_style

    local = read_paragraph_properties(pPr, Style())
    effective = merge_style(resolve_style(styles, cache, style_id), local)

    para = Paragraph(
        style=explicit_style,
        level=effective.level,
        numbered=effective.numbered,
        number_format=effective.number_format,
        number_style=effective.number_style,
        justification=effective.justification,
        right_direction=effective.right_direction,
        space_before=effective.space_before,
        space_after=effective.space_after,
        space_between_same_style=effective.space_between_same_style,
        indent_left=effective.indent_left,
        indent_right=effective.indent_right,
        indent_first_line=effective.indent_first_line,
        tabs=list(effective.tabs),
    )
    if effective.line_spacing > 0:
        para.line_spacing = effective.line_spacing

    runs = [_read_run(r, style_id, styles, cache) for r in iter_runs(elem)]
    para.runs = coalesce_runs(runs)
    return para


def iter_runs(elem: etree._Element) -> Iterator[etree._Element]:
    """Yield w:r elements of a paragraph in document order.

    Descends into hyperlinks, tracked insertions, smart tags, simple fields
    and content controls (w:sdt/w:sdtContent).
    """
    for child in elem:
        tag = localname(child)
        if tag == "r":
            yield child
        elif tag in RUN_CONTAINERS:
            yield from iter_runs(child)
        elif tag == "sdt":
            content = w_child(child, "sdtContent")
            if content is not None:
                yield from iter_runs(content)


def _read_run(run: etree._Element, paragraph_style: str, styles: Dict[str, Style], cache: StyleCache) -> Run:
    """Resolve a single w:r element into a Run."""
    # Note references become reference-only runs; the note body stays in the note map
    for tag, note_type in NOTE_REFERENCES.items():
        ref = w_child(run, tag)
        if ref is None:
            continue
        note_id = to_int(w_attr(ref, "id"))
        if note_id:
            return Run(note_id=note_id, note_type=note_type)
        logger.debug("Ignoring w:%s without a usable id (line %s)", tag, ref.sourceline)

    rPr = w_child(run, "rPr")
    style_id = w_val(rPr, "rStyle") or paragraph_style

    local = read_run_properties(rPr, Style())
    effective = merge_style(resolve_style(styles, cache, style_id), local)

    return Run(
        text=run_text(run),
        style=style_id,
        lang=w_val(rPr, "lang") or "",
        bold=effective.bold,
        italic=effective.italic,
        underline=effective.underline,
        strike=effective.strike,
        subscript=effective.subscript,
        superscript=effective.superscript,
        color=effective.color,
        back_color=effective.back_color,
        font_family=effective.font_family,
        font_size=effective.font_size,
    )


def run_text(run: etree._Element) -> str:
    """Collect the text of a run.

    w:t content is kept verbatim under xml:space="preserve" and otherwise
    loses leading and trailing ASCII spaces. Tabs and breaks map to
    "\\t" and "\\n".
    """
    parts: List[str] = []
    for child in run:
        tag = localname(child)
        if tag == "t":
            text = w_text(child) or ""
            if child.get(XML_SPACE) != "preserve":
                text = text.strip(" ")
            parts.append(text)
        elif tag == "tab":
            parts.append("\t")
        elif tag in ("br", "cr"):
            parts.append("\n")
    return "".join(parts)


def _same_format(a: Run, b: Run) -> bool:
    return all(getattr(a, name) == getattr(b, name) for name in RUN_FORMAT_FIELDS)


def coalesce_runs(runs: List[Run]) -> List[Run]:
    """Merge adjacent runs with identical formatting.

    Word often splits one logical run across several w:r elements (spell
    check, revision ids), e.g. "Hel" + "lo" -> "Hello". Note reference
    runs are never merged.
    """
    if not runs:
        return runs

    coalesced: List[Run] = [runs[0]]
    for run in runs[1:]:
        current = coalesced[-1]
        if (
            not run.is_note_reference
            and not current.is_note_reference
            and _same_format(current, run)
        ):
            current.text += run.text
        else:
            coalesced.append(run)

    return coalesced
