"""
splitledger Settlement Engine

Turns a group's tangled net balances into a short list of explicit
"debtor pays creditor" transfers.

Critical Invariants:
- Greedy extremal matching: largest creditor against most negative debtor
- Deterministic: equal balances are broken by member insertion order
- At most (members with nonzero balance - 1) transfers
- Settling an already settled group emits nothing
"""

from splitledger.settlement.engine import SettlementEngine, plan_transfers

__all__ = ["SettlementEngine", "plan_transfers"]
