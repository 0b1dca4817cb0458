"""
splitledger/core/models.py

Value types shared by the ledger, the settlement engine and the CLI.

    User      — identity is the name string, compared structurally
    Transfer  — one "debtor pays amount to creditor" instruction
    EventType — vocabulary of audit record types

Amounts are plain ints (integer currency units) everywhere.
"""

from dataclasses import dataclass
from typing import Any, Dict, Set

from splitledger.core.exceptions import ValidationError


# ─────────────────────────────────────────────────────────────
# Event Type Vocabulary
# ─────────────────────────────────────────────────────────────

class EventType:
    """
    Audit record type constants.

    These are the ONLY valid values for AuditEntry.event_type.
    Only balance-affecting events are recorded.
    """
    EXPENSE    = "expense"
    PAYMENT    = "payment"
    SETTLEMENT = "settlement"


_VALID_EVENT_TYPES: Set[str] = {
    EventType.EXPENSE,
    EventType.PAYMENT,
    EventType.SETTLEMENT,
}


# ─────────────────────────────────────────────────────────────
# User
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class User:
    """
    A participant, identified by a case-sensitive name.

    Two User objects with the same name are the same user: equality and
    hash come from the name, so users can be shared across groups and
    rebuilt from names without losing identity.
    """
    name: str

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError(
                "User name must be a non-empty string",
                {"name": repr(self.name)},
            )

    def __str__(self) -> str:
        return self.name


# ─────────────────────────────────────────────────────────────
# Transfer
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Transfer:
    """debtor pays amount to creditor."""
    debtor:   User
    creditor: User
    amount:   int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "debtor":   self.debtor.name,
            "creditor": self.creditor.name,
            "amount":   self.amount,
        }

    def describe(self) -> str:
        return f"{self.debtor} will pay {self.amount} to {self.creditor}"

    def __str__(self) -> str:
        return self.describe()
