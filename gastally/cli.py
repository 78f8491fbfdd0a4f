"""
Command-line entry points.

Analyses a JSON object containing a Lotus execution trace to determine the self and total gas
consumption of each message execution in the call tree.

Usage:

    gastally cron --depth 2 cron_state.json
    gastally messages --depth 2 tipset_trace.json

``crongas`` and ``lotusgas`` are shorthands for the ``cron`` and ``messages`` reports.
"""

import argparse
import logging
import sys
from typing import List, Optional

from gastally.loader import TraceLoadError, load_document
from gastally.report import REPORTS, ReportConfig

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _depth(value: str) -> int:
    depth = int(value)
    if depth < 0:
        raise argparse.ArgumentTypeError(f"depth must be non-negative, got {depth}")
    return depth


def _add_common_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("trace", help="Path to the trace JSON file.")
    p.add_argument("--depth", type=_depth, default=None, help="Max depth to display. Deeper calls still count towards totals. Default: display all calls.")
    p.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING", help="Level of diagnostics written to stderr.")


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)
    logging.getLogger("gastally").setLevel(level)


def run(variant: str, trace_path: str, depth: Optional[int] = None) -> int:
    """Loads a trace, tallies it and prints the report for the given variant.

    :param variant: Report name, one of ``REPORTS``.
    :type variant: str
    :param trace_path: Path to the trace JSON file.
    :type trace_path: str
    :param depth: Max depth to display, defaults to None (display all calls)
    :type depth: Optional[int]
    :return: The process exit code.
    :rtype: int
    """
    report = REPORTS[variant](config=ReportConfig(display_depth=depth))
    try:
        document = load_document(trace_path, report.document_model)
    except (OSError, TraceLoadError) as e:
        logger.error("Failed to load trace: %s", e)
        return 1

    for line in report.render(document):
        print(line)
    return 0


def parse_args(argv: List[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="gastally", description="Tally self and total gas for each call in a Lotus execution trace.")
    sub = p.add_subparsers(dest="variant", required=True)
    cron = sub.add_parser("cron", help="A single cron execution trace at value.active.ExecutionTrace.")
    _add_common_arguments(cron)
    messages = sub.add_parser("messages", help="The traces of a list of top-level messages under Trace.")
    _add_common_arguments(messages)
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    _configure_logging(args.log_level)
    return run(args.variant, args.trace, args.depth)


def _single_variant_main(prog: str, variant: str, argv: Optional[List[str]]) -> int:
    p = argparse.ArgumentParser(prog=prog, description=f"Tally self and total gas per call ({variant} report).")
    _add_common_arguments(p)
    args = p.parse_args(sys.argv[1:] if argv is None else argv)
    _configure_logging(args.log_level)
    return run(variant, args.trace, args.depth)


def crongas(argv: Optional[List[str]] = None) -> int:
    return _single_variant_main("crongas", "cron", argv)


def lotusgas(argv: Optional[List[str]] = None) -> int:
    return _single_variant_main("lotusgas", "messages", argv)


if __name__ == "__main__":
    raise SystemExit(main())
