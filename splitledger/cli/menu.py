"""
splitledger/cli/menu.py

splitledger menu — interactive ledger session
==============================================

Numbered menu loop over one in-memory AppState. Nothing is persisted:
the session ends when the loop exits.

Errors from the ledger (unknown names, bad amounts) are printed and the
loop continues.
"""

from typing import Callable, Dict

import click

from splitledger.cli.render import (
    _Color,
    render_balances,
    render_debts,
    render_log,
    render_transfers,
)
from splitledger.core.exceptions import SplitLedgerError
from splitledger.demos.trip import build_trip
from splitledger.runtime.context import AppState


MENU = """
 1. Create User
 2. Create Group
 3. Add User to Group
 4. Add Expense
 5. Make Payment
 6. View Balances
 7. View Logs
 8. View Debts
 9. Settle Up
10. Run Demo
11. Exit"""

EXIT_CHOICE = 11


# ── Actions ───────────────────────────────────────────────────────────────────

def create_user(state: AppState) -> None:
    name = click.prompt("Enter username")
    state.create_user(name)
    click.echo(f"✅ User '{name}' ready")


def create_group(state: AppState) -> None:
    name = click.prompt("Enter group name")
    state.create_group(name)
    click.echo(f"✅ Group '{name}' created")


def add_users_to_group(state: AppState) -> None:
    group = state.get_group(click.prompt("Enter group name"))
    names = click.prompt("Enter user names (comma separated)")
    for name in (n.strip() for n in names.split(",")):
        if not name:
            continue
        if group.add_member(state.get_user(name)):
            click.echo(f"✅ Added '{name}' to {group.name}")
        else:
            click.echo(_Color.dim(f"'{name}' is already in {group.name}"))


def add_expense(state: AppState) -> None:
    group = state.get_group(click.prompt("Group name"))
    paid_by = state.get_user(click.prompt("Paid by (user name)"))
    amount = click.prompt("Total amount", type=int)

    shares = {}
    for user in group.members:
        shares[user] = click.prompt(f"Share for {user}", type=int)

    group.add_expense(paid_by, amount, shares)
    click.echo("✅ Expense recorded")


def make_payment(state: AppState) -> None:
    group = state.get_group(click.prompt("Group name"))
    from_user = state.get_user(click.prompt("From (user)"))
    to_user = state.get_user(click.prompt("To (user)"))
    amount = click.prompt("Amount", type=int)
    group.make_payment(from_user, to_user, amount)
    click.echo("✅ Payment recorded")


def view_balances(state: AppState) -> None:
    click.echo(render_balances(state.get_group(click.prompt("Group name"))))


def view_logs(state: AppState) -> None:
    click.echo(render_log(state.get_group(click.prompt("Group name"))))


def view_debts(state: AppState) -> None:
    group = state.get_group(click.prompt("Group name"))
    click.echo(render_debts(group, state.config.currency))


def settle_up(state: AppState) -> None:
    group = state.get_group(click.prompt("Group name"))
    transfers = group.simplify_debts()
    click.echo(_Color.bold(f"Settlement for Group {group.name}:"))
    click.echo(render_transfers(transfers, state.config.currency))


def run_demo(state: AppState) -> None:
    # separate state: repeatable, and never clashes with a session "Trip"
    click.echo("Running demo scenario...")
    trip = build_trip(AppState(config=state.config))
    click.echo(render_balances(trip))
    click.echo(render_debts(trip, state.config.currency))
    trip.simplify_debts()
    click.echo(render_log(trip))


ACTIONS: Dict[int, Callable[[AppState], None]] = {
    1:  create_user,
    2:  create_group,
    3:  add_users_to_group,
    4:  add_expense,
    5:  make_payment,
    6:  view_balances,
    7:  view_logs,
    8:  view_debts,
    9:  settle_up,
    10: run_demo,
}


# ── Loop ──────────────────────────────────────────────────────────────────────

def run_menu(state: AppState) -> None:
    """Prompt for menu choices until Exit is chosen."""
    while True:
        click.echo(MENU)
        choice = click.prompt("Choose option", type=click.IntRange(1, EXIT_CHOICE))
        if choice == EXIT_CHOICE:
            click.echo("Goodbye.")
            return
        try:
            ACTIONS[choice](state)
        except SplitLedgerError as e:
            click.echo(_Color.red(f"❌ Error: {e}"))


@click.command("menu")
@click.option("--mode", type=click.Choice(["strict", "lenient"]), default=None,
              help="Override SPLITLEDGER_MODE for this session.")
@click.option("--no-color", is_flag=True, default=False, help="Disable ANSI color.")
def menu_command(mode, no_color) -> None:
    """Start an interactive expense-splitting session."""
    _Color.configure(not no_color)
    run_menu(AppState.from_env(mode))
