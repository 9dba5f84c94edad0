"""Tests for the loan readiness scorecard."""

from __future__ import annotations

import pytest

from docmind.catalog.backends.memory_backend import MemoryCatalogBackend
from docmind.catalog.models import DocumentTypeDefinition, RuleCatalog, Severity
from docmind.conditions.models import Condition, ConditionCategory, ConditionStatus, ConditionType
from docmind.loans.models import DocumentRecord
from docmind.scoring import ScorecardBuilder
from docmind.validation.models import Issue, ValidationResult


def _condition(status: ConditionStatus = ConditionStatus.OPEN) -> Condition:
    return Condition(
        id="cond-1",
        loan_id="LN-1001",
        document_type="paystub",
        type=ConditionType.WARNING,
        category=ConditionCategory.NEEDS_CLARIFICATION,
        title="Employer name formatting differs",
        severity=Severity.WARNING,
        status=status,
    )


def _record(document_type: str, result: ValidationResult | None) -> DocumentRecord:
    return DocumentRecord(
        id=f"doc-{document_type}",
        loan_id="LN-1001",
        document_type=document_type,
        validation_results=result.to_dict() if result is not None else {},
    )


def _result(document_type: str, critical: int = 0, warnings: int = 0) -> ValidationResult:
    result = ValidationResult(document_type=document_type)
    for i in range(critical):
        result.add(Issue(Severity.CRITICAL, f"critical {i}"))
    for i in range(warnings):
        result.add(Issue(Severity.WARNING, f"warning {i}"))
    return result


@pytest.fixture
def builder(catalog_backend) -> ScorecardBuilder:
    return ScorecardBuilder(catalog_backend)


@pytest.fixture
def optional_only_builder() -> ScorecardBuilder:
    catalog = RuleCatalog(
        document_types=(DocumentTypeDefinition(id="giftLetter", name="Gift Letter", required=False),)
    )
    return ScorecardBuilder(MemoryCatalogBackend(catalog))


class TestEmptyLoan:
    def test_nothing_received(self, builder, loan):
        card = builder.build_scorecard(loan, [], [])

        assert card.scores.document_completeness.score == 0
        assert card.scores.data_accuracy.score == 0
        assert card.scores.compliance.score == 100
        assert card.overall_score == 20
        assert not card.ready_to_close
        assert len(card.missing_documents) == 8
        assert card.missing_documents[0].name == "Driver's License"

    def test_nothing_required_and_nothing_received(self, optional_only_builder, loan):
        card = optional_only_builder.build_scorecard(loan, [], [])

        assert card.scores.document_completeness.score == 100
        assert card.scores.data_accuracy.score == 0
        assert card.ready_to_close
        assert card.overall_score == 75

    def test_open_condition_blocks_readiness(self, optional_only_builder, loan):
        card = optional_only_builder.build_scorecard(loan, [], [_condition()])
        assert not card.ready_to_close
        assert card.overall_score == 50
        assert [c.id for c in card.conditions] == ["cond-1"]

    def test_cleared_condition_does_not_block(self, optional_only_builder, loan):
        card = optional_only_builder.build_scorecard(loan, [], [_condition(ConditionStatus.CLEARED)])
        assert card.ready_to_close
        assert card.conditions == []


class TestDimensions:
    def test_half_up_rounding(self, builder, loan):
        card = builder.build_scorecard(loan, [_record("paystub", _result("paystub", warnings=2))], [])

        # 1 of 8 required = 12.5
        assert card.scores.document_completeness.score == 13
        assert card.scores.data_accuracy.score == 100
        assert card.scores.compliance.score == 90
        # 13*0.30 + 100*0.25 + 90*0.20 = 46.9
        assert card.overall_score == 47

    def test_details(self, builder, loan):
        documents = [
            _record("paystub", _result("paystub")),
            _record("w2", _result("w2", critical=2, warnings=1)),
        ]
        card = builder.build_scorecard(loan, documents, [])

        assert card.scores.document_completeness.details == {"total": 8, "received": 2, "missing": 6}
        assert card.scores.data_accuracy.details == {"total": 2, "valid": 1, "invalid": 1}
        assert card.scores.compliance.details == {"criticalIssues": 2, "warningIssues": 1, "totalIssues": 3}
        assert card.scores.compliance.score == 75

    def test_compliance_floors_at_zero(self, builder, loan):
        card = builder.build_scorecard(loan, [_record("w2", _result("w2", critical=11))], [])
        assert card.scores.compliance.score == 0

    def test_document_without_results_counts_as_not_valid(self, builder, loan):
        card = builder.build_scorecard(loan, [_record("paystub", None)], [])
        assert card.scores.data_accuracy.score == 0
        assert card.scores.document_completeness.details["received"] == 1

    def test_mapping_documents_accepted(self, builder, loan):
        documents = [{"documentType": "paystub", "validationResults": _result("paystub").to_dict()}]
        card = builder.build_scorecard(loan, documents, [])
        assert card.scores.data_accuracy.score == 100

    def test_weights_reported(self, builder, loan):
        scores = builder.build_scorecard(loan, [], []).scores
        assert (scores.document_completeness.weight, scores.data_accuracy.weight, scores.compliance.weight) == (
            30,
            25,
            20,
        )


class TestMonotonicity:
    def test_more_received_documents_never_lowers_completeness(self, builder, loan):
        types = ["driversLicense", "paystub", "w2", "bankStatement"]
        scores = [
            builder.build_scorecard(loan, [_record(t, _result(t)) for t in types[:n]], []).scores.document_completeness.score
            for n in range(len(types) + 1)
        ]
        assert scores == sorted(scores)

    def test_more_findings_never_raise_compliance(self, builder, loan):
        scores = [
            builder.build_scorecard(loan, [_record("w2", _result("w2", critical=n, warnings=n))], []).scores.compliance.score
            for n in range(5)
        ]
        assert scores == sorted(scores, reverse=True)


class TestSerialization:
    def test_camel_case_dump(self, builder, loan):
        dumped = builder.build_scorecard(loan, [], [_condition()]).model_dump(mode="json", by_alias=True)

        assert dumped["loanId"] == "LN-1001"
        assert {"overallScore", "readyToClose", "missingDocuments", "generatedAt"} <= set(dumped)
        assert set(dumped["scores"]) == {"documentCompleteness", "dataAccuracy", "compliance"}
        assert dumped["conditions"][0]["suggestedAction"] == ""
