"""
splitledger/cli/render.py

Text reports for the CLI. Every function returns a string; printing is
left to the command.
"""

import sys
from typing import List

from splitledger.core.models import Transfer
from splitledger.ledger.group import Group


# ── ANSI color ────────────────────────────────────────────────────────────────

class _Color:
    """
    Minimal ANSI color wrapper.
    Auto-disables when not a TTY or --no-color is passed.
    """
    _on: bool = True

    @classmethod
    def configure(cls, enabled: bool) -> None:
        cls._on = enabled and sys.stdout.isatty()

    @classmethod
    def green(cls, s: str) -> str:
        return f"\033[32m{s}\033[0m" if cls._on else s

    @classmethod
    def red(cls, s: str) -> str:
        return f"\033[31m{s}\033[0m" if cls._on else s

    @classmethod
    def bold(cls, s: str) -> str:
        return f"\033[1m{s}\033[0m" if cls._on else s

    @classmethod
    def dim(cls, s: str) -> str:
        return f"\033[2m{s}\033[0m" if cls._on else s


def _signed(balance: int) -> str:
    if balance > 0:
        return _Color.green(str(balance))
    if balance < 0:
        return _Color.red(str(balance))
    return _Color.dim(str(balance))


# ── Reports ───────────────────────────────────────────────────────────────────

def render_balances(group: Group) -> str:
    lines = [_Color.bold(f"Balances in Group {group.name}:")]
    if not group.members:
        lines.append(_Color.dim("  (no members)"))
    for user, balance in group.balances.items():
        lines.append(f"  {user} -> Net balance: {_signed(balance)}")
    return "\n".join(lines)


def render_log(group: Group) -> str:
    lines = [_Color.bold(f"Transaction Log for Group {group.name}:")]
    messages = group.log.messages()
    if not messages:
        lines.append(_Color.dim("  (no transactions)"))
    lines.extend(f"  - {m}" for m in messages)
    return "\n".join(lines)


def render_transfers(transfers: List[Transfer], currency: str) -> str:
    if not transfers:
        return "  All settled up."
    return "\n".join(
        f"  {t.debtor} will pay {currency} {t.amount} to {t.creditor}"
        for t in transfers
    )


def render_debts(group: Group, currency: str) -> str:
    """Pending transfers, i.e. only positive remaining obligations."""
    return "\n".join([
        _Color.bold(f"Detailed Debts in Group {group.name}:"),
        render_transfers(group.pending_debts(), currency),
    ])
