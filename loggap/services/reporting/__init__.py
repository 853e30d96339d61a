"""Presentation of gap decisions."""

from .gap_formatter import GapFormatter

__all__ = ["GapFormatter"]
