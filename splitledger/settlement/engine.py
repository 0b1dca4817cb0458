"""
Settlement engine: greedy debt simplification over group balances.
"""

import heapq
from typing import TYPE_CHECKING, Dict, Iterable, List, Mapping, Optional, Tuple

from splitledger.core.exceptions import InvariantViolationError
from splitledger.core.models import EventType, Transfer, User

if TYPE_CHECKING:
    from splitledger.ledger.group import Group


def _greedy_match(
    balances: Mapping[User, int],
    order: Optional[Iterable[User]] = None,
) -> Tuple[List[Transfer], Dict[User, int]]:
    """
    Match the largest creditor with the largest debtor until one side runs out.

    Heap entries are (key, rank, user). rank is the user's position in
    `order` (mapping order when omitted), so equal balances pop
    first-inserted-first and a user pushed back after a partial settlement
    keeps its original rank.

    Returns:
        (transfers, unmatched) where unmatched holds balances left on the
        non-empty side. unmatched is empty whenever balances sum to zero.
    """
    rank: Dict[User, int] = {}
    for user in (order if order is not None else balances):
        rank.setdefault(user, len(rank))
    for user in balances:
        rank.setdefault(user, len(rank))

    creditors: List[Tuple[int, int, User]] = []  # (-balance, rank, user)
    debtors:   List[Tuple[int, int, User]] = []  # (balance, rank, user)

    for user, balance in balances.items():
        if balance > 0:
            heapq.heappush(creditors, (-balance, rank[user], user))
        elif balance < 0:
            heapq.heappush(debtors, (balance, rank[user], user))

    transfers: List[Transfer] = []

    while creditors and debtors:
        credit_neg, creditor_rank, creditor = heapq.heappop(creditors)
        debt, debtor_rank, debtor = heapq.heappop(debtors)

        credit = -credit_neg
        settled = min(credit, -debt)
        transfers.append(Transfer(debtor=debtor, creditor=creditor, amount=settled))

        remaining_credit = credit - settled
        remaining_debt = debt + settled

        if remaining_credit > 0:
            heapq.heappush(creditors, (-remaining_credit, creditor_rank, creditor))
        if remaining_debt < 0:
            heapq.heappush(debtors, (remaining_debt, debtor_rank, debtor))

    unmatched = {user: -key for key, _, user in creditors}
    unmatched.update({user: key for key, _, user in debtors})
    return transfers, unmatched


def plan_transfers(
    balances: Mapping[User, int],
    order: Optional[Iterable[User]] = None,
) -> List[Transfer]:
    """
    Compute the transfers that zero out `balances`, without touching them.

    Emits at most (number of nonzero balances - 1) transfers, in the order
    they were generated. A settled ledger yields [].

    Raises:
        InvariantViolationError: balances do not sum to zero, so one side
            ran out with the other still holding a balance.
    """
    transfers, unmatched = _greedy_match(balances, order)
    if unmatched:
        raise InvariantViolationError(
            "Settlement left unmatched balances",
            {u.name: b for u, b in unmatched.items()},
        )
    return transfers


class SettlementEngine:
    """
    Applies greedy simplification to a group's live balances.

    settle() works on the actual balances, not a copy: after it returns
    every balance is zero and a second call emits nothing.
    """

    def __init__(self, group: "Group"):
        self.group = group

    def preview(self) -> List[Transfer]:
        """Transfers settle() would emit right now. Read-only."""
        with self.group.lock:
            transfers, unmatched = _greedy_match(self.group.balances, self.group.members)
        if unmatched:
            self._report_unmatched(unmatched)
        return transfers

    def settle(self) -> List[Transfer]:
        """
        Plan, apply and log the simplified transfers for the group.

        Returns:
            The transfers applied, in generation order.
        """
        group = self.group
        with group.lock:
            transfers, unmatched = _greedy_match(group.balances, group.members)
            if unmatched:
                self._report_unmatched(unmatched)

            for transfer in transfers:
                group._settle_transfer(transfer)

            group.check_invariant()
            if not unmatched and group.config.check_invariants:
                leftover = {u.name: b for u, b in group.balances.items() if b != 0}
                if leftover:
                    group.config.violation(
                        f"Group '{group.name}' not settled after simplification",
                        leftover,
                    )
        return transfers

    def get_settlement_stats(self) -> dict:
        """
        Get settlement statistics from the group's audit log.

        Returns:
            Dict with record counts by event type and the settled total
        """
        settlements = self.group.log.by_type(EventType.SETTLEMENT)
        stats = self.group.log.get_stats()
        return {
            "total": stats["total_entries"],
            "by_type": stats["by_type"],
            "transfers": len(settlements),
            "settled_amount": sum(e.payload.get("amount", 0) for e in settlements),
        }

    def _report_unmatched(self, unmatched: Dict[User, int]) -> None:
        if not self.group.config.check_invariants:
            return
        self.group.config.violation(
            f"Settlement of group '{self.group.name}' left unmatched balances",
            {u.name: b for u, b in unmatched.items()},
        )
