#!/usr/bin/env python3
# run_visualizer.py
# This file is part of Causeway - Causal Log Motif Search
#
# Command-line interface for causal graph reconstruction and motif search

import sys
import argparse
from pathlib import Path
from typing import List

from core.session import VisualizationSession, VisualizeSettings
from model.exceptions import CycleDetectedError, InconsistentClockError
from motif.exceptions import InvalidPatternError
from motif.navigator import NavigationResult
from parser import DEFAULT_LINE_PATTERN
from parser.exceptions import ParseError
from utils.logger import configure_logging, get_logger


def read_log_file(filepath: Path) -> str:
    """Read a log file.

    Args:
        filepath: Path to the log file

    Returns:
        The log text

    Raises:
        FileNotFoundError: If the log file doesn't exist
        UnicodeDecodeError: If the log file is not UTF-8 text
        ValueError: If the log file is empty
    """
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Log file not found: {filepath}")

    if not content.strip():
        raise ValueError(f"Log file is empty: {filepath}")
    return content


def print_summary(session: VisualizationSession) -> None:
    """Print the executions, hosts and graph sizes of the loaded log."""
    context = session.context
    print(f"Hosts ({context.settings.sort_type}): {', '.join(context.host_order)}")
    for label in context.labels:
        graph = context.graph(label)
        name = label or "<default>"
        print(
            f"Execution {name}: {len(graph)} nodes, "
            f"{len(graph.cross_edges())} messages over {len(graph.hosts)} hosts"
        )
    if context.parse_errors:
        print(f"Skipped {len(context.parse_errors)} malformed line(s)")


def format_instance(result: NavigationResult) -> List[str]:
    """Render one motif instance as indented log lines."""
    lines = [f"#{result.index + 1} (view {result.view}, offset {result.anchor_offset})"]
    for event in sorted(result.instance.log_events(), key=lambda e: e.offset):
        lines.append(f"    {event.line_number:>6}: {event.text}")
    return lines


def print_results(session: VisualizationSession, show: int) -> None:
    """Print the instance count and the first `show` instances."""
    navigator = session.navigator
    if navigator is None or navigator.is_empty():
        print(f"Query {session.query!r}: 0 instance(s)")
        return

    total = navigator.num_instances
    print(f"Query {session.query!r}: {total} instance(s)")

    result = navigator.jump_to(0)
    for _ in range(min(show, total)):
        print("\n".join(format_instance(result)))
        result = navigator.next()


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser for command line interface.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Causeway - causal graph reconstruction and motif search",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_visualizer.py -l run.log
  python run_visualizer.py -l run.log -q "#broadcast" --show 3
  python run_visualizer.py -l run.log -q "ERROR" -v
  python run_visualizer.py -l run.log -d "^=== (?P<trace>.*) ===$" --serialize out.log

Log line format (default regular expression):
  <host> <event text> <vector clock>

  A send_B {"A":2}
  B recv {"A":2,"B":1}

Queries:
  ERROR                      plain text search
  host=A && /timeout/        structured text search
  #broadcast | #gather       predefined motifs
  #request-response
  #structure=[...]           custom motif from vector timestamps
        """,
    )

    parser.add_argument(
        "-l", "--log", required=True, type=Path, help="Path to the log file"
    )

    parser.add_argument(
        "-r",
        "--regexp",
        default=DEFAULT_LINE_PATTERN,
        help="Line regular expression with 'host' and 'clock' named groups",
    )

    parser.add_argument(
        "-d",
        "--delimiter",
        default="",
        help="Regular expression separating executions (optional 'trace' group)",
    )

    parser.add_argument(
        "--sort",
        choices=["length", "order"],
        default="length",
        help="Host order: by chain length or by first occurrence",
    )

    parser.add_argument(
        "--ascending", action="store_true", help="Sort hosts in ascending order"
    )

    parser.add_argument("-q", "--query", default="", help="Search query to run")

    parser.add_argument(
        "--show",
        type=int,
        default=5,
        metavar="N",
        help="Number of instances to print (default: 5)",
    )

    parser.add_argument(
        "--serialize",
        type=Path,
        metavar="PATH",
        help="Write the graphs back as log text ('-' for stdout)",
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output (overrides --verbose)"
    )

    return parser


def main() -> int:
    """Main entry point for the visualiser.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_argument_parser()
    args = parser.parse_args()

    configure_logging(verbose=args.verbose, debug=args.debug)
    logger = get_logger()

    try:
        text = read_log_file(args.log)
    except (OSError, ValueError) as e:
        logger.error(f"File error: {e}")
        return 4

    try:
        settings = VisualizeSettings(
            line_pattern=args.regexp,
            delimiter_pattern=args.delimiter,
            sort_type=args.sort,
            descending=not args.ascending,
        )

        session = VisualizationSession()
        session.load(text, settings)
        print_summary(session)

        if args.query.strip():
            session.search(args.query)
            print_results(session, args.show)

        if args.serialize is not None:
            output = session.serialize()
            if str(args.serialize) == "-":
                print(output)
            else:
                args.serialize.write_text(output + "\n", encoding="utf-8")
                logger.info(f"Serialized log written to {args.serialize}")

        return 0

    except ParseError as e:
        logger.error(f"Log parsing error: {e}")
        return 1

    except (InconsistentClockError, CycleDetectedError) as e:
        logger.error(f"Causal graph error: {e}")
        return 2

    except InvalidPatternError as e:
        logger.error(f"Invalid query: {e}")
        return 3

    except OSError as e:
        logger.error(f"File error: {e}")
        return 4

    except KeyboardInterrupt:
        logger.error("Interrupted by user")
        return 5

    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        import traceback

        traceback.print_exc()
        return 6


if __name__ == "__main__":
    sys.exit(main())
