import argparse
import time

from rich.console import Console

from .arbiter import Arbiter, SearchAborted
from .config import (
    DEFAULT_START,
    FILTER_ROUNDS,
    MODES,
    RANGE_SIZE,
    SearchConfig,
    detect_thread_count,
)
from .messages import LEVELS, Reporter
from .stats import print_summary

SHUTDOWN_GRACE = 1.0  # seconds to wait for workers after Ctrl-C

EXIT_OK = 0
EXIT_FATAL = 1


def build_parser():
    parser = argparse.ArgumentParser(
        prog="mersenne-hunt",
        description="Search for Mersenne primes 2^p - 1 on every CPU core.",
    )
    parser.add_argument("start", nargs="?", type=int, default=DEFAULT_START,
                        help=f"starting exponent (default {DEFAULT_START})")
    parser.add_argument("--threads", type=int, default=None,
                        help="worker threads (default: one per logical CPU)")
    parser.add_argument("--mode", choices=MODES, default="ranged",
                        help="hand out ranges of exponents or draw from one shared cursor")
    parser.add_argument("--range-size", type=int, default=RANGE_SIZE,
                        help=f"exponent magnitudes per assignment in ranged mode (default {RANGE_SIZE})")
    parser.add_argument("--rounds", type=int, default=FILTER_ROUNDS,
                        help=f"probabilistic rounds before Lucas-Lehmer (default {FILTER_ROUNDS})")
    parser.add_argument("--trace-level", choices=list(LEVELS), default="all",
                        help="print messages at this level and above")
    parser.add_argument("--summary", action="store_true",
                        help="print a per-worker table when stopped")
    return parser


def main(argv=None, console=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = SearchConfig(
            start=args.start,
            threads=args.threads if args.threads is not None else detect_thread_count(),
            mode=args.mode,
            range_size=args.range_size,
            rounds=args.rounds,
        )
    except ValueError as e:
        parser.error(str(e))

    console = console or Console()
    reporter = Reporter(console, LEVELS[args.trace_level])
    reporter.info(
        f"Using {config.threads} workers from p={config.start} ({config.mode} mode)"
    )

    arbiter = Arbiter(config, reporter)
    started = time.time()
    try:
        result = arbiter.run()
    except KeyboardInterrupt:
        console.print("\n[bold red]Shutting down...[/bold red]")
        arbiter.shutdown(SHUTDOWN_GRACE)
        result = None

    if args.summary:
        print_summary(console, arbiter.stats(), started)

    if isinstance(result, SearchAborted):
        return EXIT_FATAL
    return EXIT_OK
