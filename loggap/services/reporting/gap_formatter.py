"""Formatting of gap decisions and running statistics for display."""

from typing import Dict

from loggap.models.gap_decision import GapDecision, StatsSnapshot

ABERRANT_COLOR = "\x1b[0;31m"
RESET_COLOR = "\x1b[0m"


class GapFormatter:
    """Format decisions and snapshots as output lines."""

    def __init__(self, config: Dict):
        """
        Initialize formatter with configuration.

        Args:
            config: Output configuration dict (see OutputConfig)
        """
        self.line_template = config.get("line_template", "[+{gap}] {line}")
        self.date_format = config.get("date_format", "%c")
        self.pretty = config.get("pretty", False)
        self.display_date = config.get("display_date", False)

    def format_decision(self, decision: GapDecision) -> str:
        """
        Format one decision.

        Args:
            decision: Decision produced by the stream driver

        Returns:
            Output line, optionally date-prefixed and colored when aberrant
        """
        prefix = ""
        suffix = ""

        if self.display_date:
            prefix += decision.instant.astimezone().strftime(self.date_format) + " "

        if self.pretty and decision.is_aberrant:
            prefix = ABERRANT_COLOR + prefix
            suffix = RESET_COLOR

        body = self.line_template.format(gap=decision.gap_seconds, line=decision.text)

        return f"{prefix}{body}{suffix}"

    def format_snapshot(self, snapshot: StatsSnapshot) -> str:
        return (
            f"RUNNING STATS: Last Date Read={snapshot.last_instant.astimezone().strftime('%Y-%m-%dT%H:%M:%S')}, "
            f"Lines Read={snapshot.lines_processed}, "
            f"Average Time Between Lines = {snapshot.mean:.1f}, "
            f"Standard Deviation = {snapshot.stddev:.1f}"
        )
