"""
Group ledger: members, net balances and the audit log of one group.

Balance convention:
    positive  — the group owes this member (net creditor)
    negative  — this member owes the group (net debtor)

Every mutation keeps sum(balances) == 0 and appends exactly one audit
record per balance-affecting event.
"""

import threading
from typing import Dict, List, Mapping, Optional

from splitledger.core.config import LedgerConfig
from splitledger.core.exceptions import (
    InvalidAmountError,
    NotAMemberError,
    ValidationError,
)
from splitledger.core.models import EventType, Transfer, User
from splitledger.ledger.audit import AuditLog
from splitledger.settlement.engine import SettlementEngine


def _check_amount(value, label: str) -> None:
    # bool is an int subclass; True is not an amount
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidAmountError(
            f"{label} must be an integer",
            {"got": type(value).__name__},
        )
    if value < 0:
        raise InvalidAmountError(f"{label} must be non-negative", {"got": value})


class Group:
    """
    A named group of users sharing expenses.

    Members are kept in insertion order; that order is the settlement
    tie-break. Balance entries are created at add time and never removed.
    """

    def __init__(self, name: str, config: Optional[LedgerConfig] = None):
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Group name must be a non-empty string", {"name": repr(name)})
        self.name = name
        self.config = config or LedgerConfig()
        self.log = AuditLog()
        self.lock = threading.RLock()
        self._balances: Dict[User, int] = {}

    # ── Membership ────────────────────────────────────────────

    def add_member(self, user: User) -> bool:
        """
        Add a user with a zero balance.

        Returns:
            True if added, False if the user was already a member.
        """
        if not isinstance(user, User):
            raise ValidationError("member must be a User", {"got": type(user).__name__})
        with self.lock:
            if user in self._balances:
                return False
            self._balances[user] = 0
            return True

    def is_member(self, user: User) -> bool:
        return user in self._balances

    @property
    def members(self) -> List[User]:
        return list(self._balances)

    # ── Balance-affecting operations ──────────────────────────

    def add_expense(
        self,
        paid_by: User,
        total_amount: int,
        shares: Mapping[User, int],
    ) -> None:
        """
        Record that `paid_by` fronted `total_amount`, split as `shares`.

        Each non-payer in `shares` now owes their share to the payer. The
        payer's own share entry moves no money; whatever the shares leave
        unallocated stays with the payer, so the books still balance.

        Shares adding up to more than `total_amount` are refused even though
        the per-share rule would keep the sum at zero: such an expense
        records more debt than money was spent.

        Raises:
            NotAMemberError: payer or a share holder is not in the group
            InvalidAmountError: negative amount, or shares exceed the total
            InvariantViolationError: strict mode, balances already off zero
        """
        with self.lock:
            _check_amount(total_amount, "total_amount")
            self._require_member(paid_by, "paid_by")
            for user, share in shares.items():
                self._require_member(user, "shares")
                _check_amount(share, f"share for {user}")

            allocated = sum(shares.values())
            if allocated > total_amount:
                raise InvalidAmountError(
                    "Shares exceed the total amount",
                    {"total_amount": total_amount, "shares": allocated},
                )

            balanced = self.check_invariant()

            for user, share in shares.items():
                if user == paid_by:
                    continue
                self._balances[user] -= share
                self._balances[paid_by] += share

            breakdown = ", ".join(f"{u}={s}" for u, s in shares.items())
            self.log.append(
                EventType.EXPENSE,
                f"{paid_by} paid {total_amount} (shares: {breakdown})",
                {
                    "paid_by": paid_by.name,
                    "amount": total_amount,
                    "shares": {u.name: s for u, s in shares.items()},
                },
            )
            if balanced:
                self.check_invariant()

    def make_payment(self, from_user: User, to_user: User, amount: int) -> None:
        """
        Direct payment between two members, outside any expense.

        `from_user` is debited `amount` and `to_user` credited `amount`.
        """
        with self.lock:
            self._require_member(from_user, "from_user")
            self._require_member(to_user, "to_user")
            if from_user == to_user:
                raise ValidationError("A member cannot pay themselves", {"user": from_user.name})
            _check_amount(amount, "amount")
            balanced = self.check_invariant()

            self._balances[from_user] -= amount
            self._balances[to_user] += amount

            self.log.append(
                EventType.PAYMENT,
                f"{from_user} paid {amount} to {to_user}",
                {"from": from_user.name, "to": to_user.name, "amount": amount},
            )
            if balanced:
                self.check_invariant()

    def simplify_debts(self) -> List[Transfer]:
        """Settle all balances with the fewest greedy transfers and log them."""
        return SettlementEngine(self).settle()

    def pending_debts(self) -> List[Transfer]:
        """Transfers that would settle the group now. Does not mutate."""
        return SettlementEngine(self).preview()

    # ── Queries ───────────────────────────────────────────────

    def balance_of(self, user: User) -> int:
        return self._balances.get(user, 0)

    @property
    def balances(self) -> Dict[User, int]:
        """Snapshot copy of member balances, in member order."""
        return dict(self._balances)

    def net_total(self) -> int:
        return sum(self._balances.values())

    def check_invariant(self) -> bool:
        """
        Report a nonzero balance sum through the config (raise or warn).

        Returns False if a violation was warned about, True otherwise.
        Mutations check before and after, so a strict group whose balances
        are already off zero refuses to record anything further.
        """
        if not self.config.check_invariants:
            return True
        total = self.net_total()
        if total != 0:
            self.config.violation(
                f"Balances of group '{self.name}' do not sum to zero",
                {"total": total},
            )
            return False
        return True

    # ── Internals ─────────────────────────────────────────────

    def _settle_transfer(self, transfer: Transfer) -> None:
        """Apply one settlement transfer and log it. Caller holds the lock."""
        self._balances[transfer.debtor] += transfer.amount
        self._balances[transfer.creditor] -= transfer.amount
        self.log.append(EventType.SETTLEMENT, transfer.describe(), transfer.to_dict())

    def _require_member(self, user: User, role: str) -> None:
        if user not in self._balances:
            raise NotAMemberError(
                f"'{user}' is not a member of group '{self.name}'",
                {"role": role},
            )

    def __contains__(self, user: User) -> bool:
        return self.is_member(user)

    def __repr__(self) -> str:
        return f"Group(name={self.name!r}, members={len(self._balances)}, log_entries={len(self.log)})"
