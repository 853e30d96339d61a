"""Rolling gap statistics."""

from .gap_window import GapWindow

__all__ = ["GapWindow"]
