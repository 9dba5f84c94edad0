"""Loan readiness scoring."""

from __future__ import annotations

from docmind.scoring.scorecard import (
    DimensionScore,
    MissingDocument,
    ScoreBreakdown,
    Scorecard,
    ScorecardBuilder,
)

__all__ = [
    "DimensionScore",
    "MissingDocument",
    "ScoreBreakdown",
    "Scorecard",
    "ScorecardBuilder",
]
