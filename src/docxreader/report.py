"""Report Generator - Summaries and dumps of a read document."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Dict, List

from docxreader.ir import Document, Paragraph


@dataclass
class DocumentReport:
    """Counts and warnings for a read document."""

    input_file: str = ""

    # Stats
    paragraphs: int = 0
    runs: int = 0
    styles: int = 0
    footnotes: int = 0
    endnotes: int = 0
    numbered_paragraphs: int = 0

    # Formatting
    bold_runs: int = 0
    italic_runs: int = 0
    underline_runs: int = 0

    # References
    note_references: int = 0
    dangling_references: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return asdict(self)

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


def generate_report(doc: Document, input_path: Path) -> DocumentReport:
    """Summarize a document.

    Reference runs whose id is missing from the matching note map are
    listed as dangling; they are not errors for the reader itself.
    """
    report = DocumentReport(
        input_file=str(input_path),
        paragraphs=len(doc.paragraphs),
        styles=len(doc.styles),
        footnotes=len(doc.footnotes),
        endnotes=len(doc.endnotes),
    )

    for para in doc.paragraphs:
        if para.numbered:
            report.numbered_paragraphs += 1
        for run in para.runs:
            report.runs += 1
            if run.is_note_reference:
                report.note_references += 1
                notes = doc.footnotes if run.note_type == "footnote" else doc.endnotes
                if run.note_id not in notes:
                    report.dangling_references.append(f"{run.note_type}:{run.note_id}")
                continue
            if run.bold:
                report.bold_runs += 1
            if run.italic:
                report.italic_runs += 1
            if run.underline:
                report.underline_runs += 1

    return report


def document_to_dict(doc: Document) -> Dict:
    """Plain-data view of a Document, suitable for JSON."""
    data = asdict(doc)
    # JSON object keys must be strings
    data["footnotes"] = {str(k): v for k, v in data["footnotes"].items()}
    data["endnotes"] = {str(k): v for k, v in data["endnotes"].items()}
    return data


def document_to_json(doc: Document, indent: int = 2) -> str:
    return json.dumps(document_to_dict(doc), indent=indent, ensure_ascii=False)


def _paragraph_text(para: Paragraph) -> str:
    parts = []
    for run in para.runs:
        if run.note_type == "footnote":
            parts.append(f"[^{run.note_id}]")
        elif run.note_type == "endnote":
            parts.append(f"[^en{run.note_id}]")
        else:
            parts.append(run.text)
    return "".join(parts)


def render_text(doc: Document) -> str:
    """Plain text with note markers, followed by the notes themselves."""
    lines = [_paragraph_text(p) for p in doc.paragraphs]

    for label, prefix, notes in (("Footnotes", "", doc.footnotes), ("Endnotes", "en", doc.endnotes)):
        if not notes:
            continue
        lines.append("")
        lines.append(f"{label}:")
        for note_id in sorted(notes):
            body = " ".join(_paragraph_text(p) for p in notes[note_id].paragraphs).strip()
            lines.append(f"[^{prefix}{note_id}] {body}")

    return "\n".join(lines)


def save_report(report: DocumentReport, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(report.to_json(), encoding="utf-8")
