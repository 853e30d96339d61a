"""Data models for gap detection"""

from .record import Record
from .gap_decision import GapDecision, StatsSnapshot, Verdict

__all__ = [
    "Record",
    "GapDecision",
    "StatsSnapshot",
    "Verdict",
]
