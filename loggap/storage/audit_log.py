"""Audit logging for gap detection runs."""

import json
from datetime import datetime
from pathlib import Path

from ..models.gap_decision import GapDecision


class AuditLog:
    """JSON-lines audit logger for aberrant gaps and run lifecycle events."""

    def __init__(self, log_path: Path):
        """
        Initialize audit logger.

        Args:
            log_path: Path to audit log file (parent directories are created)
        """
        self.log_path = log_path
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def log_run_started(self, sources: list[str], settings: dict) -> None:
        """
        Log the start of a run.

        Args:
            sources: Input file names, or ["<stdin>"]
            settings: Detection settings in effect
        """
        self._write_event(
            {
                "timestamp": datetime.now().isoformat(),
                "event_type": "run_started",
                "sources": sources,
                "settings": settings,
            }
        )

    def log_aberrant_gap(self, decision: GapDecision) -> None:
        """Log a gap classified as aberrant."""
        self._write_event(
            {
                "timestamp": datetime.now().isoformat(),
                "event_type": "aberrant_gap",
                "line_number": decision.line_number,
                "gap_seconds": decision.gap_seconds,
                "record_time": decision.instant.isoformat(),
                "text": decision.text,
            }
        )

    def log_run_completed(self, lines_read: int, decisions: int, aberrant: int) -> None:
        self._write_event(
            {
                "timestamp": datetime.now().isoformat(),
                "event_type": "run_completed",
                "lines_read": lines_read,
                "decisions": decisions,
                "aberrant": aberrant,
            }
        )

    def log_run_failed(self, error: Exception, lines_read: int) -> None:
        """
        Log a fatal error that ended the run.

        Args:
            error: The exception that aborted the run
            lines_read: Lines consumed before the failure
        """
        event = {
            "timestamp": datetime.now().isoformat(),
            "event_type": "run_failed",
            "error_type": type(error).__name__,
            "error_details": str(error),
            "lines_read": lines_read,
        }

        text = getattr(error, "text", None)
        if text is not None:
            event["text"] = text

        self._write_event(event)

    def export_events(self, output_path: Path) -> int:
        """
        Export all logged events to a JSON file.

        Args:
            output_path: Path to output JSON file

        Returns:
            Number of events exported
        """
        events = []

        if self.log_path.exists():
            with open(self.log_path, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if line:
                        try:
                            events.append(json.loads(line))
                        except json.JSONDecodeError:
                            # Skip invalid lines
                            continue

        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(events, f, indent=2, ensure_ascii=False)

        return len(events)

    def _write_event(self, event: dict) -> None:
        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(event, ensure_ascii=False) + "\n")
