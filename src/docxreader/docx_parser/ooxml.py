"""OOXML helpers - namespaces, safe XML loading and value-or-absent accessors."""

from __future__ import annotations

import logging
import math
from typing import Optional

from lxml import etree

from docxreader.exceptions import MalformedXmlError

logger = logging.getLogger(__name__)

# OOXML namespaces
NAMESPACES = {
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
    "xml": "http://www.w3.org/XML/1998/namespace",
}

W = f"{{{NAMESPACES['w']}}}"
XML_SPACE = f"{{{NAMESPACES['xml']}}}space"

# w:val values that switch a toggle property off
OFF_VALUES = {"0", "false", "off", "none"}

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)


def parse_xml(data: bytes, part: Optional[str] = None) -> etree._Element:
    """Parse part bytes into an element tree root.

    Raises:
        MalformedXmlError: if the bytes are empty or not well-formed.
    """
    if not data:
        raise MalformedXmlError("empty part", part=part)
    try:
        return etree.fromstring(data, _PARSER)
    except etree.XMLSyntaxError as e:
        raise MalformedXmlError(str(e), part=part) from e


def load_part(data: Optional[bytes], part: str, root_name: Optional[str] = None) -> Optional[etree._Element]:
    """Parse a part, returning None when it is absent, malformed or has the wrong root."""
    if not data:
        logger.debug("%s: absent or empty", part)
        return None
    try:
        root = parse_xml(data, part)
    except MalformedXmlError as e:
        logger.warning("Skipping malformed part %s", e)
        return None
    if root_name is not None and root.tag != W + root_name:
        logger.warning("%s: expected root w:%s, found %s", part, root_name, root.tag)
        return None
    return root


def w_child(elem: Optional[etree._Element], name: str) -> Optional[etree._Element]:
    """First w:<name> child of elem, or None."""
    if elem is None:
        return None
    return elem.find(W + name)


def w_attr(elem: Optional[etree._Element], name: str) -> Optional[str]:
    """The w:<name> attribute of elem, or None."""
    if elem is None:
        return None
    return elem.get(W + name)


def w_val(elem: Optional[etree._Element], child: str) -> Optional[str]:
    """Shortcut for the w:val attribute of the w:<child> element."""
    return w_attr(w_child(elem, child), "val")


def is_on(elem: Optional[etree._Element], child: str) -> bool:
    """True when a toggle property (w:b, w:i, ...) is present and not switched off."""
    prop = w_child(elem, child)
    if prop is None:
        return False
    val = w_attr(prop, "val")
    return val is None or val.lower() not in OFF_VALUES


def localname(elem: etree._Element) -> str:
    """Tag name without namespace. Comments and PIs give an empty string."""
    if not isinstance(elem.tag, str):
        return ""
    return etree.QName(elem).localname


def to_float(value: Optional[str]) -> Optional[float]:
    """Parse a finite decimal number; inf, nan and underscore digit groups are rejected."""
    if value is None or "_" in value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def to_int(value: Optional[str]) -> Optional[int]:
    if value is None or "_" in value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def half_points(value: Optional[str]) -> float:
    """Half-points to points; absent or invalid is 0."""
    number = to_float(value)
    return number / 2.0 if number is not None else 0.0


def twentieths(value: Optional[str]) -> float:
    """Twentieths of a point (twips) to points; absent or invalid is 0."""
    number = to_float(value)
    return number / 20.0 if number is not None else 0.0


def line_units(value: Optional[str]) -> float:
    """240ths of a line to a line spacing multiplier; absent or invalid is 0."""
    number = to_float(value)
    return number / 240.0 if number is not None else 0.0


def w_text(elem: Optional[etree._Element]) -> Optional[str]:
    """Text content of elem, or None when elem is absent or empty."""
    if elem is None:
        return None
    return elem.text
