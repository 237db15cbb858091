"""Styles parser - Parse styles.xml to build a style table."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from lxml import etree

from docxreader.ir import Color, Justification, Style, StyleKind, TabStop
from docxreader.docx_parser.ooxml import (
    W,
    half_points,
    is_on,
    line_units,
    load_part,
    to_int,
    twentieths,
    w_attr,
    w_child,
    w_val,
)

logger = logging.getLogger(__name__)

# Style attribute -> w:rPr toggle element
TOGGLE_PROPERTIES = (
    ("bold", "b"),
    ("italic", "i"),
    ("underline", "u"),
    ("strike", "strike"),
    ("subscript", "subscript"),
    ("superscript", "superscript"),
)


def parse_styles(styles_xml: Optional[bytes]) -> Dict[str, Style]:
    """Parse styles.xml into a flat map of unresolved styles.

    Args:
        styles_xml: Raw bytes of styles.xml content (None or empty is allowed).

    Returns:
        Dict mapping style IDs to the style as declared, without inheritance.
    """
    styles_map: Dict[str, Style] = {}
    root = load_part(styles_xml, "word/styles.xml", root_name="styles")
    if root is None:
        return styles_map

    for elem in root.iterchildren(W + "style"):
        style_id = w_attr(elem, "styleId")
        if not style_id:
            logger.debug("Skipping style without styleId (line %s)", elem.sourceline)
            continue
        if style_id in styles_map:
            logger.warning("Duplicate style id %r, keeping the first definition", style_id)
            continue
        styles_map[style_id] = read_style(elem, style_id)

    return styles_map


def read_style(elem: etree._Element, style_id: str) -> Style:
    """Build the unresolved Style for a single w:style element."""
    style = Style(style_id=style_id)
    style.kind = StyleKind.PARAGRAPH if w_attr(elem, "type") == "paragraph" else StyleKind.RUN
    style.name = w_val(elem, "name") or ""
    style.based_on = w_val(elem, "basedOn") or ""

    read_run_properties(w_child(elem, "rPr"), style)
    read_paragraph_properties(w_child(elem, "pPr"), style)
    return style


def read_run_properties(rPr: Optional[etree._Element], style: Style) -> Style:
    """Record the character properties of a w:rPr element on style.

    Only properties present in rPr are written; everything else keeps its
    "not set" value so the cascade can tell the two apart.
    """
    if rPr is None:
        return style

    for attr, tag in TOGGLE_PROPERTIES:
        if is_on(rPr, tag):
            setattr(style, attr, True)

    vert_align = w_val(rPr, "vertAlign")
    if vert_align == "subscript":
        style.subscript = True
    elif vert_align == "superscript":
        style.superscript = True

    color = w_val(rPr, "color")
    if color:
        style.color = Color.from_hex(color)
    fill = w_attr(w_child(rPr, "shd"), "fill")
    if fill:
        style.back_color = Color.from_hex(fill)

    rFonts = w_child(rPr, "rFonts")
    if rFonts is not None:
        # Prioritize ascii, then hAnsi
        style.font_family = w_attr(rFonts, "ascii") or w_attr(rFonts, "hAnsi") or ""

    size = half_points(w_val(rPr, "sz"))
    if size > 0:
        style.font_size = size
    return style


def read_paragraph_properties(pPr: Optional[etree._Element], style: Style) -> Style:
    """Record the paragraph properties of a w:pPr element on style."""
    if pPr is None:
        return style

    outline = to_int(w_val(pPr, "outlineLvl"))
    if outline is not None:
        style.level = outline

    num_pr = w_child(pPr, "numPr")
    if num_pr is not None:
        style.numbered = True
        # numbering.xml is not consulted; any numId means a decimal list
        if w_val(num_pr, "numId"):
            style.number_format = "decimal"
        ilvl = to_int(w_val(num_pr, "ilvl"))
        if ilvl is not None:
            style.level = ilvl
        style.number_style = w_val(num_pr, "numStyle") or ""

    spacing = w_child(pPr, "spacing")
    if spacing is not None:
        style.line_spacing = line_units(w_attr(spacing, "line"))
        style.space_before = twentieths(w_attr(spacing, "before"))
        style.space_after = twentieths(w_attr(spacing, "after"))
        if w_attr(spacing, "lineRule") == "exact":
            style.space_between_same_style = True
    if is_on(pPr, "contextualSpacing"):
        style.space_between_same_style = True

    ind = w_child(pPr, "ind")
    if ind is not None:
        style.indent_left = twentieths(w_attr(ind, "left") or w_attr(ind, "start"))
        style.indent_right = twentieths(w_attr(ind, "right") or w_attr(ind, "end"))
        style.indent_first_line = twentieths(w_attr(ind, "firstLine"))

    jc = w_val(pPr, "jc")
    if jc is not None:
        style.justification = Justification.from_ooxml(jc)

    tabs = w_child(pPr, "tabs")
    if tabs is not None:
        for tab in tabs.iterchildren(W + "tab"):
            style.tabs.append(TabStop(
                position=twentieths(w_attr(tab, "pos")),
                alignment=w_attr(tab, "val") or "left",
                leader=w_attr(tab, "leader") or "",
            ))

    if is_on(pPr, "bidi"):
        style.right_direction = True

    return style
