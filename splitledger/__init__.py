"""
splitledger/__init__.py

splitledger: shared-expense ledger with greedy debt simplification.

A Group tracks one signed net balance per member (sum always zero).
Expenses and direct payments move those balances; the settlement engine
turns them into the shortest greedy list of "debtor pays creditor"
transfers. Every balance change is written to an append-only audit log.
"""

__version__ = "0.1.0"

from splitledger.core.config import (
    LedgerConfig,
    LedgerMode,
    config_from_env,
    config_from_yaml,
    lenient_config,
    strict_config,
)
from splitledger.core.exceptions import (
    AuditLogError,
    DuplicateIdentityError,
    InvalidAmountError,
    InvariantViolationError,
    LedgerIntegrityWarning,
    NotAMemberError,
    SplitLedgerError,
    UnknownIdentityError,
    ValidationError,
)
from splitledger.core.models import EventType, Transfer, User
from splitledger.ledger import AuditEntry, AuditLog, Group
from splitledger.runtime import AppState, load_scenario
from splitledger.settlement import SettlementEngine, plan_transfers

__all__ = [
    # Core types
    "User",
    "Transfer",
    "EventType",
    "Group",
    "AuditLog",
    "AuditEntry",
    "SettlementEngine",
    "AppState",
    # Config
    "LedgerConfig",
    "LedgerMode",
    "strict_config",
    "lenient_config",
    "config_from_env",
    "config_from_yaml",
    # Errors
    "SplitLedgerError",
    "ValidationError",
    "InvalidAmountError",
    "UnknownIdentityError",
    "NotAMemberError",
    "DuplicateIdentityError",
    "InvariantViolationError",
    "AuditLogError",
    "LedgerIntegrityWarning",
    # Helpers
    "plan_transfers",
    "load_scenario",
]
