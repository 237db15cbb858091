"""Reader exceptions.

These are raised by the low-level archive and XML helpers. ``read_document``
catches them and degrades to an empty or partial Document.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class DocxReadError(Exception):
    message: str
    part: Optional[str] = None

    def __str__(self) -> str:
        if self.part:
            return f"{self.part}: {self.message}"
        return self.message


class ArchiveError(DocxReadError):
    """The source is not a readable ZIP package."""


class MalformedXmlError(DocxReadError):
    """A package part is not well-formed XML."""
