"""Archive reader - Pull named parts out of a DOCX (ZIP) package."""

from __future__ import annotations

import io
import logging
import zipfile
import zlib
from pathlib import Path
from typing import BinaryIO, Dict, Iterable, Optional, Union

from docxreader.exceptions import ArchiveError

logger = logging.getLogger(__name__)

DOCUMENT_PART = "word/document.xml"
STYLES_PART = "word/styles.xml"
FOOTNOTES_PART = "word/footnotes.xml"
ENDNOTES_PART = "word/endnotes.xml"

PACKAGE_PARTS = (DOCUMENT_PART, STYLES_PART, FOOTNOTES_PART, ENDNOTES_PART)

Source = Union[str, Path, bytes, bytearray, BinaryIO]


def _open(source: Source) -> zipfile.ZipFile:
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(bytes(source))
    try:
        return zipfile.ZipFile(source, "r")
    except (zipfile.BadZipFile, OSError) as e:
        raise ArchiveError(f"cannot open package: {e}") from e


def read_parts(source: Source, names: Iterable[str] = PACKAGE_PARTS) -> Dict[str, bytes]:
    """Read the requested members from a package.

    Args:
        source: Path to the .docx file, its raw bytes, or a binary file object.
        names: Member names to extract.

    Returns:
        Dict mapping member names to bytes. Members missing from the
        package are left out.

    Raises:
        ArchiveError: if the source is not a readable ZIP.
    """
    parts: Dict[str, bytes] = {}
    with _open(source) as zf:
        available = set(zf.namelist())
        for name in names:
            if name not in available:
                logger.debug("Package has no %s", name)
                continue
            try:
                parts[name] = zf.read(name)
            except (zipfile.BadZipFile, zlib.error, OSError, RuntimeError) as e:
                # A corrupt member is treated like a missing one
                logger.warning("Cannot extract %s: %s", name, e)
    return parts


def read_part(source: Source, name: str) -> Optional[bytes]:
    """Read a single member, or None when the package lacks it."""
    return read_parts(source, [name]).get(name)
