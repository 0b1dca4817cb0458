"""Built-in demo scenarios."""

from splitledger.demos.trip import build_trip

__all__ = ["build_trip"]
