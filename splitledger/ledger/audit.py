"""
Audit log implementation for splitledger.

Every balance-affecting event (expense, payment, settlement transfer) is
appended here as a human-readable message plus a JSON-primitive payload.
Entries are hash-chained so that edits to stored history are detectable.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from splitledger.core.canonical import canonical_hash
from splitledger.core.exceptions import AuditLogError
from splitledger.core.models import _VALID_EVENT_TYPES
from splitledger.core.time import ledger_timestamp


GENESIS_HASH = "0" * 64


@dataclass(frozen=True)
class AuditEntry:
    """A single entry in the audit log"""
    sequence:      int
    event_type:    str
    message:       str
    timestamp:     str
    previous_hash: str
    payload:       Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        return {
            "sequence":      self.sequence,
            "event_type":    self.event_type,
            "message":       self.message,
            "timestamp":     self.timestamp,
            "previous_hash": self.previous_hash,
            "payload":       self.payload,
        }

    def compute_hash(self) -> str:
        """Compute hash of this entry for chaining"""
        return canonical_hash(self.to_dict())

    def __str__(self) -> str:
        return self.message


class AuditLog:
    """
    Append-only ordered record of ledger events.

    Nothing is ever removed. Insertion order is display order.
    """

    def __init__(self):
        self._entries: List[AuditEntry] = []

    def append(
        self,
        event_type: str,
        message: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> AuditEntry:
        """Append an event and return the stored entry"""
        if event_type not in _VALID_EVENT_TYPES:
            raise ValueError(
                f"Invalid event_type '{event_type}'. "
                f"Valid: {sorted(_VALID_EVENT_TYPES)}"
            )
        previous_hash = self._entries[-1].compute_hash() if self._entries else GENESIS_HASH
        entry = AuditEntry(
            sequence=len(self._entries),
            event_type=event_type,
            message=message,
            timestamp=ledger_timestamp(),
            previous_hash=previous_hash,
            payload=dict(payload or {}),
        )
        self._entries.append(entry)
        return entry

    def entries(self) -> List[AuditEntry]:
        """Get all entries"""
        return self._entries.copy()

    def messages(self) -> List[str]:
        return [e.message for e in self._entries]

    def by_type(self, event_type: str) -> List[AuditEntry]:
        """Get all entries of a specific type"""
        return [e for e in self._entries if e.event_type == event_type]

    def get_stats(self) -> dict:
        type_counts = {}
        for entry in self._entries:
            type_counts[entry.event_type] = type_counts.get(entry.event_type, 0) + 1

        return {
            "total_entries": len(self._entries),
            "by_type": type_counts,
            "first_entry_time": self._entries[0].timestamp if self._entries else None,
            "last_entry_time": self._entries[-1].timestamp if self._entries else None,
        }

    def verify(self) -> bool:
        try:
            self.verify_or_raise()
        except AuditLogError:
            return False
        return True

    def verify_or_raise(self) -> None:
        """Verify chain linkage or raise AuditLogError"""
        if not self._entries:
            return

        if self._entries[0].previous_hash != GENESIS_HASH:
            raise AuditLogError("First entry does not link to genesis hash")

        for i in range(1, len(self._entries)):
            prev_entry = self._entries[i - 1]
            curr_entry = self._entries[i]

            if curr_entry.sequence != i:
                raise AuditLogError(
                    f"Sequence gap at index {i}",
                    {"expected": i, "got": curr_entry.sequence},
                )

            expected_prev_hash = prev_entry.compute_hash()
            if curr_entry.previous_hash != expected_prev_hash:
                raise AuditLogError(
                    f"Chain break at index {i}: "
                    f"expected {expected_prev_hash}, got {curr_entry.previous_hash}"
                )

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[AuditEntry]:
        return iter(self._entries.copy())
