"""Utility functions"""

from .input_utils import iter_lines
from .text_utils import split_fields

__all__ = ["iter_lines", "split_fields"]
