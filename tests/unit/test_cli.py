"""Tests for the docmind CLI."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator

import pytest
from rich.console import Console
from typer.testing import CliRunner

from docmind.cli import main as cli_main
from docmind.cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Wide console so table cells are not wrapped; restore root logging afterwards."""
    monkeypatch.setattr(cli_main, "console", Console(width=200))
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _write(path: Path, data: Any) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestDocTypes:
    def test_lists_catalog(self) -> None:
        result = runner.invoke(app, ["doc-types"])
        assert result.exit_code == 0
        assert "catalog v2.1" in result.output
        assert "verificationOfEmployment" in result.output

    def test_missing_catalog(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["doc-types", "--catalog", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1
        assert "does not exist" in result.output


class TestValidate:
    def test_bare_field_map_with_type(self, tmp_path: Path, loan_data, clean_w2) -> None:
        doc = _write(tmp_path / "w2.json", clean_w2)
        loan = _write(tmp_path / "loan.json", loan_data)

        result = runner.invoke(app, ["validate", str(doc), "--loan", str(loan), "--type", "w2", "--json"])

        assert result.exit_code == 0
        assert '"documentType": "w2"' in result.output

    def test_full_extracted_document(self, tmp_path: Path, loan_data) -> None:
        doc = _write(tmp_path / "dl.json", {"documentType": "driversLicense", "data": {"fullName": "John Doe"}})
        loan = _write(tmp_path / "loan.json", loan_data)

        result = runner.invoke(app, ["validate", str(doc), "--loan", str(loan), "--json"])

        assert result.exit_code == 0
        assert '"isValid": false' in result.output
        assert "Name does not match borrower: Jane Smith" in result.output

    def test_bare_map_needs_type(self, tmp_path: Path, loan_data, clean_w2) -> None:
        doc = _write(tmp_path / "w2.json", clean_w2)
        loan = _write(tmp_path / "loan.json", loan_data)
        result = runner.invoke(app, ["validate", str(doc), "--loan", str(loan)])
        assert result.exit_code == 2

    def test_unknown_type(self, tmp_path: Path, loan_data) -> None:
        doc = _write(tmp_path / "doc.json", {})
        loan = _write(tmp_path / "loan.json", loan_data)
        result = runner.invoke(app, ["validate", str(doc), "--loan", str(loan), "--type", "passport"])
        assert result.exit_code == 1
        assert "Unknown document type: passport" in result.output


class TestLoanWorkflow:
    def test_import_process_score_and_clear(self, tmp_path: Path, loan_data, clean_paystub) -> None:
        store = tmp_path / "store"
        loan = _write(tmp_path / "loan.json", loan_data)
        stub = _write(tmp_path / "stub.json", clean_paystub)

        result = runner.invoke(app, ["import-loan", str(loan), "--store", str(store)])
        assert result.exit_code == 0
        assert "Loan LN-1001 imported" in result.output

        result = runner.invoke(
            app, ["process", str(stub), "--loan-id", "LN-1001", "--type", "paystub", "--store", str(store)]
        )
        assert result.exit_code == 0
        assert "condition(s) generated" in result.output

        result = runner.invoke(app, ["scorecard", "LN-1001", "--store", str(store), "--json"])
        assert result.exit_code == 0
        assert '"loanId": "LN-1001"' in result.output
        assert '"readyToClose": false' in result.output

        result = runner.invoke(app, ["conditions", "LN-1001", "--store", str(store)])
        assert result.exit_code == 0
        assert "Total" in result.output

        stored = json.loads((store / "conditions-LN-1001.json").read_text(encoding="utf-8"))
        condition_id = stored[0]["id"]

        result = runner.invoke(app, ["clear", condition_id, "--notes", "checked", "--store", str(store)])
        assert result.exit_code == 0
        assert f"Condition {condition_id} cleared" in result.output

        result = runner.invoke(app, ["clear", condition_id, "--store", str(store)])
        assert result.exit_code == 1
        assert "cannot move from 'cleared'" in result.output

    def test_request_document(self, tmp_path: Path, loan_data, clean_paystub) -> None:
        store = tmp_path / "store"
        runner.invoke(app, ["import-loan", str(_write(tmp_path / "loan.json", loan_data)), "--store", str(store)])
        runner.invoke(
            app,
            ["process", str(_write(tmp_path / "stub.json", clean_paystub)), "--loan-id", "LN-1001",
             "--type", "paystub", "--store", str(store)],
        )
        condition_id = json.loads((store / "conditions-LN-1001.json").read_text(encoding="utf-8"))[0]["id"]

        result = runner.invoke(
            app, ["request-document", condition_id, "--type", "paystub", "--store", str(store)]
        )

        assert result.exit_code == 0
        assert f"Requested paystub for condition {condition_id}" in result.output

    def test_import_without_loan_id(self, tmp_path: Path) -> None:
        loan = _write(tmp_path / "loan.json", {"borrower": {}})
        result = runner.invoke(app, ["import-loan", str(loan), "--store", str(tmp_path / "store")])
        assert result.exit_code == 1
        assert "no loanId" in result.output

    def test_unknown_loan(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["scorecard", "LN-404", "--store", str(tmp_path / "store")])
        assert result.exit_code == 1
        assert "Loan not found: LN-404" in result.output

    def test_no_conditions(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["conditions", "LN-404", "--store", str(tmp_path / "store")])
        assert result.exit_code == 0
        assert "No conditions for loan LN-404" in result.output
