"""Tests for catalog parsing and the catalog backends."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path

import pytest
import yaml

from docmind.catalog import create_catalog_backend, parse_catalog
from docmind.catalog.backends.file_backend import FileCatalogBackend
from docmind.catalog.backends.memory_backend import MemoryCatalogBackend
from docmind.catalog.backends.protocol import ICatalogBackend
from docmind.catalog.models import DataType, FieldValidatorId, Operator, RuleCatalog, Severity
from docmind.core.config import AppSettings, CatalogConfig
from docmind.exceptions import CatalogError, UnknownDocumentTypeError
from docmind.validation import DocumentValidator


def _blob(**overrides):
    blob = {
        "version": "3",
        "scoringRules": {
            "documentCompleteness": {"weight": 30},
            "dataAccuracy": {"weight": 25},
            "complianceIssues": {"weight": 20},
        },
        "documentTypes": [
            {
                "id": "paystub",
                "name": "Pay Stub",
                "required": True,
                "extractionRules": {
                    "fields": [{"name": "grossPay", "dataType": "currency", "required": True}],
                    "documentValidations": [{"rule": "nameMatches", "severity": "critical", "message": "m"}],
                },
            }
        ],
    }
    blob.update(overrides)
    return blob


class TestDefaultCatalog:
    def test_loads(self, catalog):
        assert catalog.version == "2.1"
        assert len(catalog.document_types) == 11
        assert catalog.scoring_weights.total == 75

    def test_paystub_definition(self, catalog):
        paystub = catalog.find("paystub")
        fields = {f.name: f for f in paystub.fields}
        assert fields["payPeriodEnd"].validator == FieldValidatorId.WITHIN_30_DAYS
        assert fields["grossPayYTD"].data_type == DataType.CURRENCY
        assert paystub.document_rules[0].severity == Severity.CRITICAL

    def test_max_ltv(self, catalog):
        assert catalog.max_ltv_for("FHA") == 96.5
        assert catalog.max_ltv_for("Jumbo") == 90
        assert catalog.max_ltv_for("Unknown") == 97
        assert catalog.max_ltv_for(None) == 97

    def test_summary_shape(self, catalog_backend):
        w2 = next(s for s in catalog_backend.list_document_types() if s["id"] == "w2")
        assert w2["conditions"] == [
            {"field": "borrower.employment.current.selfEmployed", "operator": "equals", "value": False}
        ]


class TestParser:
    def test_minimal_blob(self):
        catalog = parse_catalog(_blob())
        assert catalog.version == "3"
        assert catalog.find("paystub").fields[0].required
        assert catalog.find("w2") is None

    def test_missing_sections_use_defaults(self):
        catalog = parse_catalog({})
        assert catalog.document_types == ()
        assert catalog.scoring_weights.document_completeness == 30
        assert catalog.loan_type_rules == {}

    def test_duplicate_document_type(self):
        blob = _blob()
        blob["documentTypes"].append(copy.deepcopy(blob["documentTypes"][0]))
        with pytest.raises(CatalogError, match="Duplicate document type id"):
            parse_catalog(blob)

    def test_duplicate_field(self):
        blob = _blob()
        fields = blob["documentTypes"][0]["extractionRules"]["fields"]
        fields.append(dict(fields[0]))
        with pytest.raises(CatalogError, match="duplicate field"):
            parse_catalog(blob)

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda dt: dt.update(conditions=[{"field": "a", "operator": "between", "value": 1}]),
            lambda dt: dt["extractionRules"]["fields"][0].update(validationRule="mustBeNice"),
            lambda dt: dt["extractionRules"]["documentValidations"][0].update(severity="fatal"),
            lambda dt: dt.pop("id"),
        ],
    )
    def test_malformed_entries(self, mutate):
        blob = _blob()
        mutate(blob["documentTypes"][0])
        with pytest.raises(CatalogError, match="Malformed catalog"):
            parse_catalog(blob)

    def test_not_a_mapping(self):
        with pytest.raises(CatalogError):
            parse_catalog([])  # type: ignore[arg-type]

    def test_condition_operator_parsed(self):
        blob = _blob()
        blob["documentTypes"][0]["conditions"] = [{"field": "mismo.productType", "operator": "in", "value": ["FHA"]}]
        (condition,) = parse_catalog(blob).find("paystub").conditions
        assert condition.operator == Operator.IN

    def test_off_balance_weights_warn(self, caplog):
        blob = _blob(scoringRules={"documentCompleteness": {"weight": 50}})
        with caplog.at_level(logging.WARNING, logger="docmind.catalog.parser"):
            catalog = parse_catalog(blob)
        assert catalog.scoring_weights.total == 95
        assert "Scoring weights sum to 95" in caplog.text

    def test_off_balance_weights_strict(self):
        blob = _blob(scoringRules={"documentCompleteness": {"weight": 50}})
        with pytest.raises(CatalogError, match="expected 75"):
            parse_catalog(blob, strict_weights=True)


class TestFileBackend:
    def test_satisfies_protocol(self, catalog_backend):
        assert isinstance(catalog_backend, ICatalogBackend)

    def test_unknown_type(self, catalog_backend):
        with pytest.raises(UnknownDocumentTypeError) as exc_info:
            catalog_backend.get_document_type("passport")
        assert exc_info.value.document_type == "passport"

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="not found"):
            FileCatalogBackend(tmp_path / "missing.yaml").get_catalog()

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogError, match="Cannot decode"):
            FileCatalogBackend(path).get_catalog()

    def test_json_catalog(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(_blob()), encoding="utf-8")
        assert FileCatalogBackend(path).get_version() == "3"

    def test_update_catalog_persists(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(yaml.safe_dump(_blob()), encoding="utf-8")
        backend = FileCatalogBackend(path)
        assert backend.get_version() == "3"

        backend.update_catalog(_blob(version="4"))

        assert backend.get_version() == "4"
        assert yaml.safe_load(path.read_text(encoding="utf-8"))["version"] == "4"
        assert FileCatalogBackend(path).get_version() == "4"

    def test_update_leaves_no_temp_file(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(_blob()), encoding="utf-8")

        FileCatalogBackend(path).update_catalog(_blob(version="4"))

        assert [p.name for p in tmp_path.iterdir()] == ["catalog.json"]
        assert json.loads(path.read_text(encoding="utf-8"))["version"] == "4"

    def test_failed_swap_keeps_previous_catalog(self, tmp_path, monkeypatch):
        path = tmp_path / "catalog.yaml"
        path.write_text(yaml.safe_dump(_blob()), encoding="utf-8")
        backend = FileCatalogBackend(path)
        backend.get_catalog()

        def fail_replace(self, target):
            raise OSError("disk full")

        monkeypatch.setattr(Path, "replace", fail_replace)
        with pytest.raises(CatalogError, match="disk full"):
            backend.update_catalog(_blob(version="4"))

        assert yaml.safe_load(path.read_text(encoding="utf-8"))["version"] == "3"
        assert backend.get_version() == "3"

    def test_malformed_update_never_written(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(yaml.safe_dump(_blob()), encoding="utf-8")
        backend = FileCatalogBackend(path)

        with pytest.raises(CatalogError):
            backend.update_catalog({"documentTypes": [{"name": "no id"}]})

        assert yaml.safe_load(path.read_text(encoding="utf-8"))["version"] == "3"

    def test_reload_picks_up_file_changes(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(yaml.safe_dump(_blob()), encoding="utf-8")
        backend = FileCatalogBackend(path)
        backend.get_catalog()

        path.write_text(yaml.safe_dump(_blob(version="5")), encoding="utf-8")
        assert backend.get_version() == "3"
        backend.reload()
        assert backend.get_version() == "5"

    def test_strict_weights_on_load(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(yaml.safe_dump(_blob(scoringRules={"dataAccuracy": {"weight": 10}})), encoding="utf-8")
        with pytest.raises(CatalogError):
            FileCatalogBackend(path, strict_weights=True).get_catalog()


class TestMemoryBackend:
    def test_replace(self):
        backend = MemoryCatalogBackend()
        assert backend.list_document_types() == []
        backend.replace(parse_catalog(_blob()))
        assert backend.get_document_type("paystub").name == "Pay Stub"
        assert backend.get_version() == "3"

    def test_unknown_type(self):
        with pytest.raises(UnknownDocumentTypeError):
            MemoryCatalogBackend(RuleCatalog()).get_document_type("paystub")


class TestFactory:
    def test_file_backend_from_settings(self):
        backend = create_catalog_backend(AppSettings())
        assert isinstance(backend, FileCatalogBackend)

    def test_memory_backend_from_settings(self):
        settings = AppSettings(catalog=CatalogConfig(backend="memory"))
        assert isinstance(create_catalog_backend(settings), MemoryCatalogBackend)

    def test_memory_backend_is_seeded_from_catalog_file(self):
        backend = create_catalog_backend(AppSettings(catalog=CatalogConfig(backend="memory")))
        assert backend.get_version() == "2.1"
        assert backend.get_document_type("paystub").name

    def test_memory_backend_seed_path_is_configurable(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(_blob()), encoding="utf-8")
        backend = create_catalog_backend(AppSettings(catalog=CatalogConfig(backend="memory", path=path)))

        backend.replace(parse_catalog(_blob(version="9")))

        assert backend.get_version() == "9"
        assert json.loads(path.read_text(encoding="utf-8"))["version"] == "3"

    def test_memory_backend_validates_documents(self, clean_w2, loan, today):
        backend = create_catalog_backend(AppSettings(catalog=CatalogConfig(backend="memory")))
        result = DocumentValidator(backend, clock=lambda: today).validate_document(clean_w2, "w2", loan)
        assert result.is_valid
