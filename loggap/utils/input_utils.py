"""Line input helpers."""

import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional, TextIO


def iter_lines(paths: Optional[Iterable[Path]] = None, stdin: Optional[TextIO] = None) -> Iterator[str]:
    """
    Yield lines from the given files in order, or from stdin when none are given.

    Args:
        paths: Files to read one after another
        stdin: Stream used when no paths are given (default: sys.stdin)

    Yields:
        Lines with the trailing newline removed. Invalid UTF-8 bytes are
        replaced rather than raised, for files and stdin alike.

    Raises:
        FileNotFoundError: If a path does not exist
    """
    paths = list(paths or [])

    if not paths:
        stream = stdin if stdin is not None else sys.stdin
        if hasattr(stream, "reconfigure"):
            # Decode piped input the same way as files
            stream.reconfigure(encoding="utf-8", errors="replace")
        for line in stream:
            yield line.rstrip("\r\n")
        return

    for path in paths:
        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {path}")

        with open(path, "r", encoding="utf-8", errors="replace") as f:
            for line in f:
                yield line.rstrip("\r\n")
