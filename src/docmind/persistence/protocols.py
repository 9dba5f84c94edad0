"""Record store contract for loan and condition records.

Every record is one JSON document addressed by ``<kind>-<recordId>``::

    loan-LN-1001         loan application with its document records
    conditions-LN-1001   the loan's underwriting conditions, in creation order

Backends only see opaque keys and serialized text; the stores in
``docmind.loans`` and ``docmind.conditions`` own the record shapes.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable


class RecordKind(str, Enum):
    LOAN = "loan"
    CONDITIONS = "conditions"

    @property
    def prefix(self) -> str:
        return f"{self.value}-"


def record_key(kind: RecordKind, record_id: str) -> str:
    return f"{kind.prefix}{record_id}"


@runtime_checkable
class IPersistenceBackend(Protocol):
    """Keyed JSON record storage (one backend holds every record kind)."""

    def save(self, key: str, data: str) -> None:
        """Replace the record at ``key``; readers see the old or new text, never a mix."""
        ...

    def load(self, key: str) -> str:
        """Return the record text. Raises KeyError when nothing is stored at ``key``."""
        ...

    def list_keys(self, prefix: str = "") -> list[str]:
        """Sorted keys starting with ``prefix``, e.g. ``RecordKind.LOAN.prefix``."""
        ...


def record_ids(backend: IPersistenceBackend, kind: RecordKind) -> list[str]:
    """Ids of every stored record of ``kind``, sorted."""
    prefix = kind.prefix
    return [key[len(prefix):] for key in backend.list_keys(prefix)]
