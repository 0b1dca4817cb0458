"""
splitledger/cli/__init__.py

splitledger CLI — root Click command group.

This file is the sole entry point for the `splitledger` terminal command.
It is registered in pyproject.toml as:

    [project.scripts]
    splitledger = "splitledger.cli:cli"

Adding a new command:
    1. Create splitledger/cli/your_command.py with a @click.command()
    2. Import it here
    3. cli.add_command(your_command)
"""

import click

from splitledger.cli.demo import demo_command
from splitledger.cli.menu import menu_command
from splitledger.cli.run import run_command


@click.group()
@click.version_option(package_name="splitledger")
def cli() -> None:
    """
    splitledger — shared expenses and debt simplification.

    \b
    Commands:
      menu    Interactive session (users, groups, expenses, payments).
      demo    Run the built-in Trip scenario.
      run     Replay a YAML scenario file.

    \b
    Quick start:
      splitledger demo
      splitledger run trip.yaml --settle
      SPLITLEDGER_MODE=lenient splitledger menu
    """
    pass


cli.add_command(menu_command)
cli.add_command(demo_command)
cli.add_command(run_command)
