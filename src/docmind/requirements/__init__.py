"""Requirement resolution: which document types a loan must supply."""

from __future__ import annotations

from docmind.requirements.resolver import evaluate_condition, is_required, required_documents

__all__ = ["evaluate_condition", "is_required", "required_documents"]
