import argparse
import json
import logging
import sys
from typing import Any, Dict, List

import dns.exception

from checker import CheckerError, CheckResult, ConsistencyChecker, ConsistencyScanner
from reporting.assembler import Assemble
from reporting.formatting import format_failed
from reporting.report import analytics, failures_frame
from zones import load_directories

from . import __version__
from .config import Settings, configure_logging

"""
The command-line interface for ns-checker.

  1) Parse every zone file below each --dir and merge them into one store
  2) Run the A, AAAA and PTR consistency checks
  3) Print the failed names per check (or JSON / a table)

Exit codes: 0 = consistent, 1 = check failures, 2 = zones could not be loaded or indexed.
"""

logger = logging.getLogger(__name__)

# Order in which check failures are printed.
CHECK_ORDER = ["a", "aaaa", "ptr"]


def parse_args(argv: List[str] | None = None, settings: Settings | None = None) -> argparse.Namespace:
    settings = settings or Settings.from_env()

    p = argparse.ArgumentParser(
        prog="ns-checker",
        description="Check that A/AAAA and PTR records in zone files point at each other",
    )
    p.add_argument(
        "-d", "--dir",
        dest="dirs",
        action="append",
        default=None,
        help="Directory with zone files to parse (repeatable; defaults to NS_CHECKER_DIRS)",
    )
    out = p.add_mutually_exclusive_group()
    out.add_argument("--json", dest="as_json", action="store_true", help="Output JSON")
    out.add_argument("--table", action="store_true", help="Output a table of failed records")
    p.add_argument("--separator", default=settings.separator, help="Separator between failed names")
    p.add_argument("--log-level", default=settings.log_level, help="Logging level (DEBUG, INFO, ...)")

    args = p.parse_args(argv)
    if not args.dirs:
        args.dirs = list(settings.dirs)
    if not args.dirs:
        p.error("at least one --dir is required (or set NS_CHECKER_DIRS)")
    return args


def run_checks(dirs: List[str]) -> CheckResult:
    """
    Load and check the zones below `dirs`.

    Raises:
        OSError / dns.exception.DNSException: a directory or zone file could not be read.
        CheckerError: a record could not be indexed.
    """
    store = load_directories(dirs)
    return ConsistencyScanner(ConsistencyChecker(store)).scan()


def print_human(result: CheckResult, sep: str) -> None:
    for name in CHECK_ORDER:
        fails = result.failed.get(name) or []
        if fails:
            print(f"Failed {name} records:\n{format_failed(fails, sep)}")


def print_table(result: CheckResult) -> None:
    df = failures_frame(result, include_debug=True)
    print(df.to_string(index=False))

    by_source = analytics(df)["counts_by_source"]
    if not by_source.empty:
        print("\nFailed records by source:")
        print(by_source.to_string(index=False))


def main(argv: List[str] | None = None) -> int:
    """
    CLI entrypoint.

    Returns:
        Process exit code.
    """
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        result = run_checks(args.dirs)
    except (OSError, dns.exception.DNSException, CheckerError) as e:
        logger.debug("check aborted", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.as_json:
        out: Dict[str, Any] = Assemble().build(
            target=", ".join(args.dirs),
            result=result,
            meta={"version": __version__, "source": "cli"},
        )
        print(json.dumps(out, indent=2))
    elif args.table:
        print_table(result)
    else:
        print_human(result, args.separator)

    return 1 if result.overall == "fail" else 0


if __name__ == "__main__":
    raise SystemExit(main())
