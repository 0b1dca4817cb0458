"""
Scenario files: replay users, groups and ledger events from YAML.

    config: {mode: strict, currency: "Rs."}
    users: [A, B, C]
    groups:
      - name: Trip
        members: [A, B, C]
        events:
          - expense: {paid_by: A, amount: 600, shares: {A: 200, B: 0, C: 400}}
          - payment: {from: B, to: A, amount: 50}
          - settle: true

Events run in file order against the group they are listed under.
"""

from pathlib import Path
from typing import Optional

import yaml

from splitledger.core.config import config_from_mapping
from splitledger.core.exceptions import ValidationError
from splitledger.runtime.context import AppState


def load_scenario(path: Path, state: Optional[AppState] = None) -> AppState:
    """Load a scenario file into `state` (a fresh AppState by default)."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValidationError("Scenario root must be a mapping", {"path": str(path)})
    return apply_scenario(data, state)


def apply_scenario(data: dict, state: Optional[AppState] = None) -> AppState:
    if state is None:
        state = AppState(config=config_from_mapping(data.get("config")))

    for name in data.get("users") or []:
        state.create_user(str(name))

    for entry in data.get("groups") or []:
        if not isinstance(entry, dict) or "name" not in entry:
            raise ValidationError("Each group needs a 'name'", {"got": repr(entry)})
        group_name = str(entry["name"])
        state.create_group(group_name)
        for member in entry.get("members") or []:
            state.add_user_to_group(group_name, str(member))
        for index, event in enumerate(entry.get("events") or []):
            _apply_event(state, group_name, index, event)

    return state


def _apply_event(state: AppState, group_name: str, index: int, event) -> None:
    if not isinstance(event, dict) or len(event) != 1:
        raise ValidationError(
            "Each event must be a single-key mapping",
            {"group": group_name, "index": index},
        )
    (kind, body), = event.items()
    group = state.get_group(group_name)

    if kind == "expense":
        shares = {
            state.get_user(str(name)): share
            for name, share in (_field(body, "shares", kind, index) or {}).items()
        }
        group.add_expense(
            state.get_user(str(_field(body, "paid_by", kind, index))),
            _field(body, "amount", kind, index),
            shares,
        )
    elif kind == "payment":
        group.make_payment(
            state.get_user(str(_field(body, "from", kind, index))),
            state.get_user(str(_field(body, "to", kind, index))),
            _field(body, "amount", kind, index),
        )
    elif kind == "settle":
        if body:
            group.simplify_debts()
    else:
        raise ValidationError(
            f"Unknown event kind '{kind}'",
            {"group": group_name, "index": index},
        )


def _field(body, key: str, kind: str, index: int):
    if not isinstance(body, dict) or key not in body:
        raise ValidationError(
            f"{kind} event is missing '{key}'",
            {"index": index},
        )
    return body[key]
