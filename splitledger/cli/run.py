"""
splitledger/cli/run.py

splitledger run — replay a YAML scenario
=========================================

Usage:
    splitledger run trip.yaml             Balances, pending debts, log
    splitledger run trip.yaml --settle    Settle every group first

Exit codes:
    0  Scenario applied
    2  Error  (file missing, malformed YAML, ledger rejected an event)
"""

import sys
from pathlib import Path

import click
import yaml

from splitledger.cli.render import (
    _Color,
    render_balances,
    render_debts,
    render_log,
    render_transfers,
)
from splitledger.core.exceptions import SplitLedgerError
from splitledger.runtime.scenario import load_scenario


@click.command("run")
@click.argument("scenario", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--settle", is_flag=True, default=False,
              help="Simplify debts in every group after loading.")
@click.option("--no-color", is_flag=True, default=False, help="Disable ANSI color.")
def run_command(scenario: Path, settle: bool, no_color: bool) -> None:
    """Load SCENARIO and report every group."""
    _Color.configure(not no_color)

    try:
        state = load_scenario(scenario)
    except yaml.YAMLError as e:
        click.echo(_Color.red(f"❌ Error: malformed YAML in {scenario}: {e}"), err=True)
        sys.exit(2)
    except SplitLedgerError as e:
        click.echo(_Color.red(f"❌ Error: {e}"), err=True)
        sys.exit(2)

    currency = state.config.currency
    for group in state.groups.values():
        if settle:
            transfers = group.simplify_debts()
            click.echo(_Color.bold(f"Settlement for Group {group.name}:"))
            click.echo(render_transfers(transfers, currency))
        click.echo(render_balances(group))
        click.echo(render_debts(group, currency))
        click.echo(render_log(group))
        click.echo()
