"""
splitledger: Strict and Lenient Modes.

Strict Mode:  Default. Invariant violations raise InvariantViolationError.
Lenient Mode: Invariant violations are reported with warnings.warn() and
              the operation completes.

Argument validation (negative amounts, non-members) is always enforced;
modes only decide how a broken zero-sum invariant is surfaced.
"""

import os
import warnings
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import yaml

from splitledger.core.exceptions import (
    InvariantViolationError,
    LedgerIntegrityWarning,
    ValidationError,
)


DEFAULT_CURRENCY = "Rs."


class LedgerMode(Enum):
    STRICT  = "strict"
    LENIENT = "lenient"


@dataclass(frozen=True)
class LedgerConfig:
    mode:             LedgerMode = LedgerMode.STRICT
    currency:         str        = DEFAULT_CURRENCY
    check_invariants: bool       = True

    @property
    def strict(self) -> bool:
        return self.mode == LedgerMode.STRICT

    def violation(self, message: str, details: dict = None) -> None:
        """Raise or warn about a broken ledger invariant, depending on mode."""
        if self.strict:
            raise InvariantViolationError(message, details)
        warnings.warn(
            str(InvariantViolationError(message, details)),
            LedgerIntegrityWarning,
            stacklevel=3,
        )


# ─────────────────────────────────────────────────────────────
# Factory Functions
# ─────────────────────────────────────────────────────────────

def strict_config(currency: str = DEFAULT_CURRENCY) -> LedgerConfig:
    return LedgerConfig(mode=LedgerMode.STRICT, currency=currency)


def lenient_config(currency: str = DEFAULT_CURRENCY) -> LedgerConfig:
    return LedgerConfig(mode=LedgerMode.LENIENT, currency=currency)


def parse_mode(value: str) -> LedgerMode:
    try:
        return LedgerMode(str(value).strip().lower())
    except ValueError:
        raise ValidationError(
            f"Unknown ledger mode '{value}'",
            {"valid": "|".join(m.value for m in LedgerMode)},
        )


def config_from_mapping(data: dict) -> LedgerConfig:
    """Build a config from a plain mapping (YAML `config:` block)."""
    data = data or {}
    if not isinstance(data, dict):
        raise ValidationError("config must be a mapping", {"got": type(data).__name__})
    check_invariants = data.get("check_invariants", True)
    if not isinstance(check_invariants, bool):
        raise ValidationError(
            "check_invariants must be true or false",
            {"got": repr(check_invariants)},
        )
    return LedgerConfig(
        mode=parse_mode(data.get("mode", LedgerMode.STRICT.value)),
        currency=str(data.get("currency", DEFAULT_CURRENCY)),
        check_invariants=check_invariants,
    )


def config_from_env() -> LedgerConfig:
    """Read SPLITLEDGER_MODE and SPLITLEDGER_CURRENCY. Defaults to strict."""
    return LedgerConfig(
        mode=parse_mode(os.environ.get("SPLITLEDGER_MODE", "strict")),
        currency=os.environ.get("SPLITLEDGER_CURRENCY", DEFAULT_CURRENCY),
    )


def config_from_yaml(path: Path) -> LedgerConfig:
    """Load the `config:` mapping of a YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValidationError("YAML root must be a mapping", {"path": str(path)})
    return config_from_mapping(data.get("config"))
