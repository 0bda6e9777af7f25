import argparse
import logging
import sys
from typing import List, Optional

from freesim.config import Order, Policy
from freesim.errors import ConfigurationError, InternalInconsistency
from freesim.script import (
    DEFAULT_OPERATIONS,
    Job,
    SimulationOptions,
    parse_int,
    simulate,
)
from freesim.telemetrics import LOGGER, get_logger

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_INTERNAL_ERROR = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="freesim",
        description="Simulate a free-list memory allocator.")
    parser.add_argument("-S", "--size", default="100",
                        help="size of the heap")
    parser.add_argument("-B", "--base", default="1000",
                        help="base address of the heap")
    parser.add_argument("-H", "--header-size", default="0",
                        help="size of the header")
    parser.add_argument("-p", "-P", "--policy", default=Policy.BEST.label,
                        help="list search policy (BEST, WORST, FIRST, NEXTFIT)")
    parser.add_argument("-l", "--order", default=Order.BY_ADDRESS.label,
                        help="list order (ADDRSORT, SIZESORT+, SIZESORT-)")
    parser.add_argument("-C", "--coalesce", action="store_true",
                        help="coalesce the free list?")
    parser.add_argument("-A", "--ops", default=DEFAULT_OPERATIONS,
                        help="list of operations (+10,-0,etc); pass as -A=LIST "
                             "when the list starts with a minus sign")
    parser.add_argument("-c", "--check", action="store_true",
                        help="verify heap consistency after every operation")
    parser.add_argument("-v", "--verbosity", action="count",
                        default=0, help="increase output verbosity")
    return parser


def options_from_args(args: argparse.Namespace) -> SimulationOptions:
    return SimulationOptions(
        size=parse_int(args.size, "heap size"),
        start=parse_int(args.base, "base address"),
        header_size=parse_int(args.header_size, "header size"),
        policy=Policy.from_name(args.policy),
        order=Order.from_name(args.order),
        coalesce=args.coalesce,
        jobs=[Job.parse(args.ops)],
        check=args.check,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    levels = (logging.WARNING, logging.INFO, logging.DEBUG)
    get_logger(level=levels[min(args.verbosity, len(levels) - 1)])

    try:
        options = options_from_args(args)
        # Validated here so a bad heap never reaches the first operation.
        options.heap_config()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        simulate(options)
    except InternalInconsistency:
        LOGGER.exception("Heap invariants violated, aborting")
        return EXIT_INTERNAL_ERROR
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
