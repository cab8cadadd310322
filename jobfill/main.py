import json
import logging
from pathlib import Path
from typing import List, Optional

import click

from jobfill.adapters.factory import select_adapter
from jobfill.core import text_parser
from jobfill.core.document_text import extract_resume_text
from jobfill.core.errors import JobFillError
from jobfill.core.form_detector import Document, as_document
from jobfill.core.schemas import DetectedField, ResumeRecord
from jobfill.logging_config import setup_logging

logger = logging.getLogger(__name__)


def detect_fields(document: Optional[Document], url: str = "") -> List[DetectedField]:
    """Detect and classify the form fields of a page with the adapter chosen for it."""
    root = as_document(document)
    adapter = select_adapter(root, url)
    return adapter.detect_fields(root)


def parse(text) -> ResumeRecord:
    """Parse plain résumé text."""
    return text_parser.parse(text)


def _field_summary(field: DetectedField) -> dict:
    return {
        "id": field.metadata.id,
        "name": field.metadata.name,
        "type": field.metadata.type,
        "label": field.metadata.label_text,
        "category": field.category,
        "subcategory": field.subcategory,
        "confidence": field.confidence,
    }


@click.group()
@click.option("--log-level", default=None, help="Override JOBFILL_LOG_LEVEL (DEBUG, INFO, WARNING, ...)")
def cli(log_level: Optional[str]):
    """Résumé parsing and application form field detection."""
    setup_logging(log_level)


@cli.command("parse")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def parse_command(file: Path):
    """Parse a résumé file (DOCX, PDF, TXT or MD) and print it as JSON."""
    try:
        text = extract_resume_text(file.read_bytes(), filename=file.name)
        record = parse(text)
    except JobFillError as e:
        raise click.ClickException(str(e))
    click.echo(record.model_dump_json(indent=2))


@cli.command("detect")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--url", default="", help="Page URL, used to pick a site adapter")
def detect_command(file: Path, url: str):
    """Detect and classify the fields of a saved HTML page."""
    try:
        fields = detect_fields(file.read_text(encoding="utf-8", errors="replace"), url)
    except JobFillError as e:
        raise click.ClickException(str(e))
    click.echo(json.dumps([_field_summary(f) for f in fields], indent=2))


if __name__ == "__main__":
    cli()
