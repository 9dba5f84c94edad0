"""CLI for docmind: catalog listing, document validation, conditions, and scorecards."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from docmind.catalog import create_catalog_backend
from docmind.conditions.models import Condition
from docmind.core.config import AppSettings, CatalogConfig, PersistenceConfig
from docmind.core.logging_config import setup_logging
from docmind.core.startup_checks import validate_settings
from docmind.exceptions import DocMindError
from docmind.services.review_service import ReviewService, create_review_service
from docmind.validation.engine import DocumentValidator
from docmind.validation.models import ExtractedDocument, Issue, ValidationResult

app = typer.Typer(name="docmind", help="Mortgage document validation, conditions, and readiness scoring")
console = Console()

_SEVERITY_STYLE = {"critical": "red", "warning": "yellow", "info": "blue"}


def _build_settings(catalog: Optional[Path], store: Optional[Path]) -> AppSettings:
    """Build settings, overriding env defaults with CLI flags."""
    settings = AppSettings()
    if catalog:
        settings.catalog = CatalogConfig(path=catalog)
    if store:
        settings.persistence = PersistenceConfig(store_path=store)
    setup_logging(settings.observability)
    try:
        validate_settings(settings)
    except ValueError as exc:
        _fail(exc)
    return settings


def _service(catalog: Optional[Path], store: Optional[Path]) -> ReviewService:
    return create_review_service(_build_settings(catalog, store))


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise typer.BadParameter(f"Cannot read JSON from {path}: {exc}") from exc


def _load_extracted(path: Path, document_type: Optional[str]) -> ExtractedDocument:
    """Accept either a full ExtractedDocument JSON or a bare field map plus --type."""
    raw = _load_json(path)
    if not isinstance(raw, dict):
        raise typer.BadParameter(f"Expected a JSON object in {path}")
    if "data" in raw and ("documentType" in raw or "document_type" in raw):
        extracted = ExtractedDocument.model_validate(raw)
        if document_type:
            extracted = extracted.model_copy(update={"document_type": document_type})
        return extracted
    if not document_type:
        raise typer.BadParameter("--type is required when the file is a bare field map")
    return ExtractedDocument(document_type=document_type, data=raw)


def _fail(exc: Exception) -> NoReturn:
    console.print(f"[red]{exc}[/red]")
    raise typer.Exit(code=1)


def _print_result(result: ValidationResult) -> None:
    status = "[green]VALID[/green]" if result.is_valid else "[red]INVALID[/red]"
    console.print(f"[bold]{result.document_type}[/bold]: {status}")

    findings: list[Issue] = [*result.issues, *result.warnings, *result.info]
    if not findings:
        return
    table = Table(title="Findings")
    table.add_column("Severity")
    table.add_column("Rule", style="cyan")
    table.add_column("Field")
    table.add_column("Message", max_width=80)
    for issue in findings:
        style = _SEVERITY_STYLE.get(issue.severity.value, "")
        table.add_row(
            f"[{style}]{issue.severity.value}[/{style}]",
            issue.rule or "",
            issue.field or "",
            issue.message,
        )
    console.print(table)


def _print_conditions(conditions: list[Condition]) -> None:
    table = Table(title="Conditions")
    table.add_column("ID", style="cyan")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("Document")
    table.add_column("Title", max_width=60)
    table.add_column("Suggested Action", max_width=50)
    for c in conditions:
        table.add_row(c.id, c.type.value, c.status.value, c.document_type, c.title, c.suggested_action)
    console.print(table)


@app.command("doc-types")
def doc_types(
    catalog: Optional[Path] = typer.Option(None, "--catalog", help="Catalog YAML/JSON path"),
) -> None:
    """List the document types in the rule catalog."""
    backend = create_catalog_backend(_build_settings(catalog, None))
    try:
        summaries = backend.list_document_types()
        version = backend.get_version()
    except DocMindError as exc:
        _fail(exc)

    table = Table(title=f"Document Types (catalog v{version})")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Category")
    table.add_column("Required")
    table.add_column("Conditions")
    for s in summaries:
        conditions = ", ".join(f"{c['field']} {c['operator']} {c['value']!r}" for c in s["conditions"])
        table.add_row(s["id"], s["name"], s["category"], "yes" if s["required"] else "", conditions)
    console.print(table)


@app.command()
def validate(
    extracted_file: Path = typer.Argument(..., help="Extracted document JSON"),
    loan_file: Path = typer.Option(..., "--loan", help="Loan application JSON"),
    document_type: Optional[str] = typer.Option(None, "--type", help="Document type id"),
    catalog: Optional[Path] = typer.Option(None, "--catalog", help="Catalog YAML/JSON path"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Validate one extracted document against a loan file (nothing is stored)."""
    backend = create_catalog_backend(_build_settings(catalog, None))
    extracted = _load_extracted(extracted_file, document_type)
    loan = _load_json(loan_file)

    try:
        result = DocumentValidator(backend).validate_document(extracted, loan=loan)
    except DocMindError as exc:
        _fail(exc)

    if as_json:
        console.print_json(json.dumps(result.to_dict()))
    else:
        _print_result(result)


@app.command("import-loan")
def import_loan(
    loan_file: Path = typer.Argument(..., help="Loan application JSON"),
    store: Optional[Path] = typer.Option(None, "--store", help="Record store directory"),
) -> None:
    """Store a loan application record."""
    service = _service(None, store)
    try:
        loan_id = service.loans.save_loan(_load_json(loan_file))
    except ValueError as exc:
        _fail(exc)
    console.print(f"[green]Loan {loan_id} imported[/green]")


@app.command()
def process(
    extracted_file: Path = typer.Argument(..., help="Extracted document JSON"),
    loan_id: str = typer.Option(..., "--loan-id", help="Stored loan id"),
    document_type: Optional[str] = typer.Option(None, "--type", help="Document type id"),
    file_name: str = typer.Option("", "--file-name", help="Original upload file name"),
    catalog: Optional[Path] = typer.Option(None, "--catalog"),
    store: Optional[Path] = typer.Option(None, "--store"),
) -> None:
    """Validate a document for a stored loan, raise conditions, and record it."""
    service = _service(catalog, store)
    extracted = _load_extracted(extracted_file, document_type)
    try:
        record = service.process_document(loan_id, extracted, file_name or extracted_file.name)
    except DocMindError as exc:
        _fail(exc)

    style = "green" if record.status.value == "approved" else "yellow"
    console.print(f"Document {record.id}: [{style}]{record.status.value}[/{style}]")
    if record.validation is not None:
        _print_result(record.validation)
    console.print(f"{len(record.condition_ids)} condition(s) generated")


@app.command()
def scorecard(
    loan_id: str = typer.Argument(..., help="Loan id"),
    catalog: Optional[Path] = typer.Option(None, "--catalog"),
    store: Optional[Path] = typer.Option(None, "--store"),
    as_json: bool = typer.Option(False, "--json", help="Print the scorecard as JSON"),
) -> None:
    """Show the readiness scorecard for a loan."""
    try:
        card = _service(catalog, store).scorecard(loan_id)
    except DocMindError as exc:
        _fail(exc)

    if as_json:
        console.print_json(card.model_dump_json(by_alias=True))
        return

    ready = "[green]READY TO CLOSE[/green]" if card.ready_to_close else "[yellow]NOT READY[/yellow]"
    console.print(f"[bold]Loan {card.loan_id}[/bold]: overall {card.overall_score}/100, {ready}")

    table = Table(title="Scores")
    table.add_column("Dimension", style="cyan")
    table.add_column("Score")
    table.add_column("Weight")
    table.add_column("Details")
    for name, dim in (
        ("Document completeness", card.scores.document_completeness),
        ("Data accuracy", card.scores.data_accuracy),
        ("Compliance", card.scores.compliance),
    ):
        details = ", ".join(f"{k}={v}" for k, v in dim.details.items())
        table.add_row(name, str(dim.score), f"{dim.weight:g}", details)
    console.print(table)

    if card.missing_documents:
        console.print("[bold]Missing documents:[/bold] " + ", ".join(d.name for d in card.missing_documents))
    if card.conditions:
        _print_conditions(card.conditions)


@app.command()
def conditions(
    loan_id: str = typer.Argument(..., help="Loan id"),
    store: Optional[Path] = typer.Option(None, "--store"),
) -> None:
    """List a loan's conditions with status counts."""
    service = _service(None, store)
    items = service.conditions.get_conditions_for_loan(loan_id)
    if not items:
        console.print(f"No conditions for loan {loan_id}")
        return
    _print_conditions(items)
    stats = service.condition_stats(loan_id)
    console.print(
        f"Total {stats.total}: {stats.open} open, {stats.pending_document} pending document, "
        f"{stats.cleared} cleared ({stats.critical} critical, {stats.warnings} warning)"
    )


@app.command()
def clear(
    condition_id: str = typer.Argument(..., help="Condition id"),
    notes: str = typer.Option("", "--notes", help="Resolution notes"),
    store: Optional[Path] = typer.Option(None, "--store"),
) -> None:
    """Clear a condition."""
    try:
        condition = _service(None, store).conditions.clear_condition(condition_id, notes)
    except DocMindError as exc:
        _fail(exc)
    console.print(f"[green]Condition {condition.id} cleared[/green]")


@app.command("request-document")
def request_document(
    condition_id: str = typer.Argument(..., help="Condition id"),
    document_type: str = typer.Option(..., "--type", help="Document type to request"),
    notes: str = typer.Option("", "--notes", help="Request notes"),
    store: Optional[Path] = typer.Option(None, "--store"),
) -> None:
    """Request a replacement document for an open condition."""
    try:
        condition = _service(None, store).conditions.request_document(condition_id, document_type, notes)
    except DocMindError as exc:
        _fail(exc)
    console.print(f"[green]Requested {document_type} for condition {condition.id}[/green]")


if __name__ == "__main__":
    app()
