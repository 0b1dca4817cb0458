"""
splitledger/cli/demo.py

splitledger demo — run the built-in Trip scenario
"""

import click

from splitledger.cli.render import (
    _Color,
    render_balances,
    render_debts,
    render_log,
    render_transfers,
)
from splitledger.demos.trip import build_trip
from splitledger.runtime.context import AppState


@click.command("demo")
@click.option("--no-color", is_flag=True, default=False, help="Disable ANSI color.")
def demo_command(no_color) -> None:
    """Run the built-in demo scenario and settle it."""
    _Color.configure(not no_color)
    state = AppState.from_env()
    currency = state.config.currency

    trip = build_trip(state)
    click.echo(render_balances(trip))
    click.echo(render_debts(trip, currency))

    transfers = trip.simplify_debts()
    click.echo(_Color.bold(f"Settlement for Group {trip.name}:"))
    click.echo(render_transfers(transfers, currency))
    click.echo(render_balances(trip))
    click.echo(render_log(trip))
