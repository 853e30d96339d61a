"""Main CLI entry point for loggap."""

import argparse
import sys
from pathlib import Path
from typing import Optional

from loggap.config.config_loader import ConfigLoader
from loggap.errors import ConfigError, ExtractionError, InsufficientDataError
from loggap.services.reporting.gap_formatter import GapFormatter
from loggap.services.stream.stream_driver import StreamDriver
from loggap.services.timestamps import PatternParser, TimestampStrategy, create_extractor
from loggap.storage.audit_log import AuditLog
from loggap.utils.input_utils import iter_lines

COMMANDS = ("scan", "export")
DEFAULT_RUNNING_STATS = 60

DESCRIPTION = """\
Provides rough statistical analysis on date values from date/timestamped
files. The intent is to identify gaps in logs, implying potential gaps in
service, by looking at statistically aberrant jumps in time from line to line.
"""

EPILOG = """\
examples:
  grep 127.0.0.1 access.log | loggap --field=1 --within 2 --window 10 --timestamp --minimum=400 --begin 20090106 --end 20090107
  loggap --pattern '%Y-%m-%d %H:%M:%S AKST' --field 1-3 --stop-caring app.log
"""


def _detection_overrides(args) -> dict:
    overrides = {
        "delimiter": args.delimiter,
        "field": args.field,
        "within": args.within,
        "window": args.window,
        "minimum": args.minimum,
        "maximum": args.maximum,
        "pattern": args.pattern,
        "begin": args.begin,
        "end": args.end,
    }

    if args.timestamp:
        overrides["strategy"] = TimestampStrategy.EPOCH
    elif args.pattern:
        overrides["strategy"] = TimestampStrategy.PATTERN

    if args.stop_caring:
        overrides["stop_caring"] = True

    return {key: value for key, value in overrides.items() if value is not None}


def _output_overrides(args) -> dict:
    overrides = {
        "pretty": args.pretty or None,
        "display_date": args.display_date or None,
        "only_outliers": args.only_outliers or None,
        "running_stats": args.running_stats,
    }
    return {key: value for key, value in overrides.items() if value is not None}


def scan_logs(args) -> int:
    """
    Scan log files (or stdin) and print gap decisions.

    Returns:
        Process exit code: 0 on success, 1 for data failures, 2 for configuration errors
    """
    config_loader = ConfigLoader(args.config)

    try:
        config = config_loader.with_overrides(
            detection=_detection_overrides(args),
            output=_output_overrides(args),
            storage={"audit_log_path": str(args.audit_log)} if args.audit_log else None,
        )
        extractor = create_extractor(config.detection)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.verbose and isinstance(extractor, PatternParser):
        print(f"Parsed pattern into: {extractor.regex.pattern}", file=sys.stderr)

    formatter = GapFormatter(config.output.model_dump())

    audit_log_path = config.storage.get_audit_log_path()
    audit_log = AuditLog(audit_log_path) if audit_log_path else None

    driver = StreamDriver(
        config.detection,
        extractor,
        only_outliers=config.output.only_outliers,
        running_stats=config.output.running_stats,
        on_snapshot=lambda snapshot: print(formatter.format_snapshot(snapshot)),
    )

    paths = [Path(p) for p in args.files]

    if audit_log:
        audit_log.log_run_started(
            sources=[str(p) for p in paths] or ["<stdin>"],
            settings=config.detection.model_dump(mode="json"),
        )

    try:
        for decision in driver.run(iter_lines(paths)):
            print(formatter.format_decision(decision))
            if audit_log and decision.is_aberrant:
                audit_log.log_aberrant_gap(decision)

    except (ExtractionError, InsufficientDataError, FileNotFoundError) as e:
        if audit_log:
            audit_log.log_run_failed(e, driver.state.lines_read)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if audit_log:
        audit_log.log_run_completed(driver.state.lines_read, driver.state.decisions, driver.state.aberrant)

    if args.verbose:
        print(
            f"Processed {driver.state.lines_read} lines, "
            f"{driver.state.aberrant} aberrant gaps in {driver.state.decisions} records",
            file=sys.stderr,
        )

    return 0


def cmd_export(args) -> int:
    """Export audit log events command."""
    config_loader = ConfigLoader(args.config)

    try:
        config = config_loader.load_app_config()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    log_path = args.audit_log or config.storage.get_audit_log_path()
    if log_path is None:
        print("Error: no audit log configured (use --audit-log)", file=sys.stderr)
        return 2

    output_path = Path(args.output) if args.output else Path("loggap_export.json")

    count = AuditLog(Path(log_path)).export_events(output_path)

    print(f"Exported {count} events to: {output_path}")
    return 0


def _expand_running_stats(argv: list[str]) -> list[str]:
    """
    Give a bare --running-stats its default interval.

    The following token is taken as the interval only when it is all digits,
    so "--running-stats app.log" still reads app.log.
    """
    expanded = []

    for position, token in enumerate(argv):
        if token == "--running-stats":
            following = argv[position + 1] if position + 1 < len(argv) else ""
            if not following.isdigit():
                token = f"--running-stats={DEFAULT_RUNNING_STATS}"
        expanded.append(token)

    return expanded


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="loggap", description="loggap - find statistically aberrant gaps in logs")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    scan_parser = subparsers.add_parser(
        "scan",
        help="Scan log files (default command)",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    scan_parser.add_argument("files", nargs="*", help="Log file(s) to read; stdin when omitted")
    scan_parser.add_argument("--delimiter", help="Field delimiter, like cut -d (default: space)")
    scan_parser.add_argument("--field", help="Date field(s), like cut -f: N, M-, M-N, -N, comma separated")
    scan_parser.add_argument("--within", type=float, help="Standard deviations considered normal (default: 2)")
    scan_parser.add_argument("--window", type=int, help="Number of trailing gaps to compare against (default: 10)")
    scan_parser.add_argument("--minimum", type=int, help="Only evaluate gaps of at least N seconds")
    scan_parser.add_argument("--maximum", type=int, help="Only evaluate gaps of at most N seconds")
    scan_parser.add_argument("--timestamp", action="store_true", help="Treat the date field as a Unix timestamp")
    scan_parser.add_argument("--pattern", help="strftime-like pattern, e.g. '%%Y-%%m-%%d %%H:%%M:%%S'")
    scan_parser.add_argument("--stop-caring", action="store_true", help="Skip lines not matching --pattern")
    scan_parser.add_argument("--begin", help="Only display lines dated on or after this date")
    scan_parser.add_argument("--end", help="Only display lines dated on or before this date")
    scan_parser.add_argument("--only-outliers", action="store_true", help="Only display aberrant lines")
    scan_parser.add_argument("--pretty", action="store_true", help="Highlight aberrant lines in red")
    scan_parser.add_argument("--display-date", action="store_true", help="Prefix lines with the parsed date")
    scan_parser.add_argument(
        "--running-stats",
        type=int,
        metavar="N",
        help="Every N seconds (default 60 when given without N) show the average gap and standard deviation",
    )
    scan_parser.add_argument("--config", type=Path, help="Custom config file path")
    scan_parser.add_argument("--audit-log", type=Path, help="Append run events to this JSON-lines file")
    scan_parser.add_argument("--verbose", action="store_true", help="Print diagnostics to stderr")

    export_parser = subparsers.add_parser("export", help="Export audit log events as JSON")
    export_parser.add_argument("--config", type=Path, help="Custom config file path")
    export_parser.add_argument("--audit-log", type=Path, help="Audit log to export")
    export_parser.add_argument("--output", type=Path, help="Output file path")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    argv = list(sys.argv[1:] if argv is None else argv)

    # Default command: scan
    if not argv or (argv[0] not in COMMANDS and argv[0] not in ("-h", "--help")):
        argv.insert(0, "scan")

    args = build_parser().parse_args(_expand_running_stats(argv))

    if args.command == "export":
        return cmd_export(args)

    return scan_logs(args)


if __name__ == "__main__":
    sys.exit(main())
