"""Style cascade - Resolve effective styles by walking basedOn chains."""

from __future__ import annotations

import copy
import logging
from typing import Dict, List, Optional, Tuple

from docxreader.config import settings
from docxreader.ir import Justification, Style, StyleKind

logger = logging.getLogger(__name__)

StyleCache = Dict[str, Style]

# Fields where "set" wins over "not set"
_UNION_FLAGS = (
    "bold",
    "italic",
    "underline",
    "strike",
    "subscript",
    "superscript",
    "right_direction",
    "numbered",
    "space_between_same_style",
)
_SET_IF_PRESENT = ("color", "back_color", "font_family", "number_format", "number_style")
_SET_IF_POSITIVE = (
    "font_size",
    "line_spacing",
    "space_before",
    "space_after",
    "indent_left",
    "indent_right",
    "indent_first_line",
    "level",
)


def new_style_cache() -> StyleCache:
    """Create an empty cache. One per parse; never share it between documents."""
    return {}


def _is_set(value) -> bool:
    if hasattr(value, "is_default"):
        return not value.is_default
    return bool(value)


def merge_style(base: Style, overlay: Style) -> Style:
    """Return a new Style with overlay's explicitly-set fields on top of base.

    Flags are unioned, colors and strings replace only when set, numbers
    replace only when positive, justification replaces unless LEFT, and
    tabs are appended. Neither argument is modified.
    """
    result = copy.copy(base)
    result.tabs = list(base.tabs)

    if overlay.kind is not StyleKind.RUN:
        result.kind = overlay.kind

    for name in _UNION_FLAGS:
        if getattr(overlay, name):
            setattr(result, name, True)

    for name in _SET_IF_PRESENT:
        value = getattr(overlay, name)
        if _is_set(value):
            setattr(result, name, value)

    for name in _SET_IF_POSITIVE:
        value = getattr(overlay, name)
        if value > 0:
            setattr(result, name, value)

    # LEFT is indistinguishable from "not set", so it can never override
    if overlay.justification is not Justification.LEFT:
        result.justification = overlay.justification

    result.tabs.extend(overlay.tabs)
    return result


def resolve_style(styles: Dict[str, Style], cache: StyleCache, style_id: str) -> Style:
    """Resolve the effective style for style_id, following its basedOn chain.

    Args:
        styles: Style table from parse_styles.
        cache: Per-parse memo of resolved styles (see new_style_cache).
        style_id: The style to resolve.

    Returns:
        The merged Style. Empty ids resolve to a default Style (uncached);
        unknown ids resolve to a cached default Style. Every style on a
        basedOn cycle resolves as its own properties over the default Style,
        so the result does not depend on which member is resolved first. An
        over-long chain is cut where it is detected. Callers must not modify
        the returned object.
    """
    if not style_id:
        return Style()

    cached = cache.get(style_id)
    if cached is not None:
        return cached

    # Walk up until a cached ancestor, an unknown id or the chain root
    chain: List[Tuple[str, Style]] = []
    visited = set()
    base = Style()
    cycle_start: Optional[int] = None
    current = style_id
    while current:
        if current in cache:
            base = cache[current]
            break
        if current in visited:
            logger.warning("Style %r: basedOn cycle through %r, treating it as the default style", style_id, current)
            cycle_start = [sid for sid, _ in chain].index(current)
            break
        if len(chain) >= settings.max_style_depth:
            logger.warning("Style %r: basedOn chain longer than %d, truncating", style_id, settings.max_style_depth)
            break
        declared = styles.get(current)
        if declared is None:
            logger.debug("Unknown style reference %r", current)
            base = Style()
            cache[current] = base
            break
        visited.add(current)
        chain.append((current, declared))
        current = declared.based_on

    # Each style on a cycle resolves over the default base
    if cycle_start is not None:
        for sid, declared in chain[cycle_start:]:
            cache[sid] = _resolved(Style(), declared)
        base = cache[chain[cycle_start][0]]
        chain = chain[:cycle_start]

    # Merge from the root down, memoizing every level
    for sid, declared in reversed(chain):
        base = _resolved(base, declared)
        cache[sid] = base

    return cache[style_id]


def _resolved(base: Style, declared: Style) -> Style:
    merged = merge_style(base, declared)
    merged.style_id = declared.style_id
    merged.based_on = declared.based_on
    merged.name = declared.name
    return merged
