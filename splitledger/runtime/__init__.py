"""
splitledger runtime: application state and scenario replay.
"""

from splitledger.runtime.context import AppState
from splitledger.runtime.scenario import apply_scenario, load_scenario

__all__ = ["AppState", "apply_scenario", "load_scenario"]
