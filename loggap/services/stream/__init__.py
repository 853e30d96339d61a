"""Stream orchestration."""

from .stream_driver import DriverState, StreamDriver

__all__ = ["DriverState", "StreamDriver"]
