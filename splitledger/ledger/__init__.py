"""
splitledger Ledger - per-group balances and the append-only audit log.
"""

from splitledger.ledger.audit import AuditEntry, AuditLog, GENESIS_HASH
from splitledger.ledger.group import Group

__all__ = ["AuditEntry", "AuditLog", "GENESIS_HASH", "Group"]
