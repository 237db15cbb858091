"""DOCX Reader - CLI Entry Point."""

import logging
from pathlib import Path
from typing import Optional

import click

from docxreader.config import settings
from docxreader.docx_parser import read_document
from docxreader.report import document_to_json, generate_report, render_text, save_report


@click.command()
@click.argument("input_docx", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "output_format", type=click.Choice(["json", "text"]), default="json",
              help="Output format (default: json)")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path),
              help="Write output to a file instead of stdout")
@click.option("--report", "report_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Write a summary report.json")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def cli(input_docx: Path, output_format: str, output: Optional[Path] = None,
        report_path: Optional[Path] = None, verbose: bool = False):
    """Read a Word document and print its resolved content.

    INPUT_DOCX: Path to the input .docx file.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    doc = read_document(input_docx)

    if verbose:
        click.echo(f"Read {input_docx}: {len(doc.paragraphs)} paragraphs, "
                   f"{len(doc.styles)} styles, {len(doc.footnotes)} footnotes, "
                   f"{len(doc.endnotes)} endnotes", err=True)

    content = document_to_json(doc) if output_format == "json" else render_text(doc)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content, encoding="utf-8")
        if verbose:
            click.echo(f"Written to: {output}", err=True)
    else:
        click.echo(content)

    if report_path:
        report = generate_report(doc, input_docx)
        save_report(report, report_path)
        if verbose:
            click.echo(f"Report saved to: {report_path}", err=True)
            if report.dangling_references:
                click.echo(f"  Dangling note references: {', '.join(report.dangling_references)}", err=True)


if __name__ == "__main__":
    cli()
