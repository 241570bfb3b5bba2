from config import Config
from tlb_hierarchy import TLBSimulator, TranslationFault
import argparse
import logging
import os
import sys

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Two level TLB simulator runner"
    )
    parser.add_argument(
        "-c", "--config",
        default="trace.config",
        help="Path to config file (default: %(default)s)",
    )
    parser.add_argument(
        "-t", "--trace",
        default="-",  # default to stdin, not a hardcoded file
        help='Trace file path (use "-" or omit to read from stdin; default: "%(default)s")',
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for simulator internals (default: %(default)s)",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-v", "--verbose",
        dest="verbose",
        action="store_true",
        help="Enable verbose output (default)",
    )
    group.add_argument(
        "-q", "--quiet",
        dest="verbose",
        action="store_false",
        help="Quiet mode (turn off verbose output)",
    )
    parser.set_defaults(verbose=True)
    return parser.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s %(name)s: %(message)s")

    use_stdin = (args.trace == "-")

    # validation
    if not os.path.exists(args.config):
        print(f"error: config file not found: {args.config}", file=sys.stderr)
        sys.exit(2)

    if not use_stdin and not os.path.exists(args.trace):
        print(f"error: trace file not found: {args.trace}", file=sys.stderr)
        sys.exit(2)

    try:
        sim_config = Config.from_config_file(args.config)
    except ValueError as e:
        print(f"error: invalid config: {e}", file=sys.stderr)
        sys.exit(2)
    if args.verbose:
        print(sim_config)
    trace_path = "/dev/stdin" if use_stdin else args.trace
    simulator = TLBSimulator(sim_config)
    try:
        simulator.simulate(trace_path, verbose=args.verbose)
    except TranslationFault as e:
        print(f"error: translation fault: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
