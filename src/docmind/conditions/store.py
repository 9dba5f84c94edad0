"""Condition store: conditions grouped per loan on a persistence backend."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Iterable

from pydantic import TypeAdapter

from docmind.conditions.models import Condition
from docmind.persistence.protocols import RecordKind, record_ids, record_key

if TYPE_CHECKING:
    from docmind.persistence.protocols import IPersistenceBackend

log = logging.getLogger(__name__)

_CONDITION_LIST = TypeAdapter(list[Condition])


class ConditionStore:
    """Reads and writes a loan's conditions as one JSON array per loan.

    Each mutation is a single read-modify-write of the loan's record; callers
    must not mutate the same loan's conditions concurrently.
    """

    def __init__(self, backend: IPersistenceBackend) -> None:
        self._backend = backend

    @staticmethod
    def key_for(loan_id: str) -> str:
        return record_key(RecordKind.CONDITIONS, loan_id)

    def load_for_loan(self, loan_id: str) -> list[Condition]:
        """Return the loan's conditions in creation order (empty when none)."""
        try:
            raw = self._backend.load(self.key_for(loan_id))
        except KeyError:
            return []
        return _CONDITION_LIST.validate_json(raw)

    def save_for_loan(self, loan_id: str, conditions: Iterable[Condition]) -> None:
        payload = [c.model_dump(mode="json", by_alias=True) for c in conditions]
        self._backend.save(self.key_for(loan_id), json.dumps(payload, indent=2))

    def append(self, loan_id: str, conditions: list[Condition]) -> None:
        if not conditions:
            return
        existing = self.load_for_loan(loan_id)
        existing.extend(conditions)
        self.save_for_loan(loan_id, existing)
        log.debug("Appended %d condition(s) for loan %s", len(conditions), loan_id)

    def loan_ids(self) -> list[str]:
        return record_ids(self._backend, RecordKind.CONDITIONS)

    def find(self, condition_id: str) -> Condition | None:
        """Locate a condition by id across all loans."""
        for loan_id in self.loan_ids():
            for condition in self.load_for_loan(loan_id):
                if condition.id == condition_id:
                    return condition
        return None

    def replace(self, updated: Condition) -> None:
        """Overwrite the stored condition with the same id in its loan's record."""
        conditions = self.load_for_loan(updated.loan_id)
        for i, condition in enumerate(conditions):
            if condition.id == updated.id:
                conditions[i] = updated
                break
        else:
            raise KeyError(f"Condition {updated.id} not stored for loan {updated.loan_id}")
        self.save_for_loan(updated.loan_id, conditions)
