#!/usr/bin/env python3
"""
nickcollide CLI
===============
Command-line interface for the nickname collision experiment.

Usage:
    nickcollide run
    nickcollide run words.txt --population 100000 --tries 500000 --table
    nickcollide sample -n 20 --bits 64
    nickcollide catalog words.txt
"""

import argparse
import logging
import sys

from nickcollide import __version__

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

STRATEGY_LABELS = ['REUSE/32BIT', 'REUSE/64BIT', 'RECREATE/32BIT', 'RECREATE/64BIT']

EXIT_RESOURCE_UNAVAILABLE = 3

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def print(self, *args, **kwargs):
        if not self.quiet:
            print(*args, **kwargs)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)


def load_catalog(args, max_len=None):
    """Load the catalog named on the command line, or the bundled one."""
    from nickcollide.catalog import load_word_catalog

    return load_word_catalog(args.wordlist, max_len=max_len)


# =============================================================================
# Commands
# =============================================================================

def cmd_run(args, out: Output):
    """Run the collision experiment over all requested strategies."""
    from nickcollide.config import ExperimentConfig
    from nickcollide.parallel import ExperimentRunner
    from nickcollide.profiler import save_profiles_json
    from nickcollide.ui import log_catalog_summary, log_results, render_results

    config = ExperimentConfig(
        population_size=args.population,
        num_tries=args.tries,
        strategies=args.strategy,
        executor=args.executor,
        max_workers=args.workers,
        seed=args.seed,
    )
    catalog = load_catalog(args, max_len=config.max_nickname_len)
    log_catalog_summary(catalog)

    runner = ExperimentRunner(catalog, config)
    results = runner.run()

    log_results(results)
    if args.table and not out.quiet:
        render_results(results)
    if args.profile_output:
        save_profiles_json({r.label: r.profile for r in results}, args.profile_output)
        logger.info(f"Profiling data saved to {args.profile_output}")
    return 0


def cmd_sample(args, out: Output):
    """Print sample nicknames."""
    from nickcollide.generators import (
        NicknameGenerator,
        SeededEntropy,
        SystemEntropy,
        create_engine,
    )

    if args.count < 0:
        out.error("--count must be non-negative")
        return 1

    catalog = load_catalog(args)
    entropy = SeededEntropy(args.seed) if args.seed is not None else SystemEntropy()
    engine = create_engine(args.bits, entropy)
    generator = NicknameGenerator(catalog)

    for nickname in generator.generate(engine, count=args.count):
        out.print(nickname)
    return 0


def cmd_catalog(args, out: Output):
    """Show candidate counts per word length."""
    from nickcollide.ui import log_catalog_summary, render_catalog

    catalog = load_catalog(args)
    log_catalog_summary(catalog)
    if not out.quiet:
        render_catalog(catalog)
    return 0


# =============================================================================
# Main
# =============================================================================

def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='nickcollide',
        description='nickcollide - Nickname collision experiment across PRNG strategies',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s run
  %(prog)s run words.txt --population 100000 --tries 500000 --table
  %(prog)s run --strategy RECREATE/32BIT --strategy REUSE/32BIT --seed 7
  %(prog)s sample -n 20 --bits 32
  %(prog)s catalog words.txt
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- run ---
    p = subparsers.add_parser('run', aliases=['r'], help='Run the collision experiment')
    p.add_argument('wordlist', nargs='?', help='Word list (default: bundled list)')
    p.add_argument('--population', '-p', type=int, help='Initial unique nicknames per strategy')
    p.add_argument('--tries', '-t', type=int, help='Measurement trials per strategy')
    p.add_argument('--strategy', '-s', action='append', choices=STRATEGY_LABELS,
                   help='Strategy to run (repeatable, default: all four)')
    p.add_argument('--seed', type=int, help='Root seed for a reproducible run')
    p.add_argument('--executor', choices=['process', 'thread'], help='Task pool type')
    p.add_argument('--workers', type=int, help='Max concurrent tasks')
    p.add_argument('--table', action='store_true', help='Print a results table')
    p.add_argument('--profile-output', help='Save per-phase timings to JSON file')

    # --- sample ---
    p = subparsers.add_parser('sample', aliases=['gen', 'g'], help='Print sample nicknames')
    p.add_argument('wordlist', nargs='?', help='Word list (default: bundled list)')
    p.add_argument('-n', '--count', type=int, default=10, help='Number of nicknames (default: 10)')
    p.add_argument('--bits', type=int, choices=[32, 64], default=64, help='Engine width (default: 64)')
    p.add_argument('--seed', type=int, help='Seed for reproducible output')

    # --- catalog ---
    p = subparsers.add_parser('catalog', aliases=['cat'], help='Show word counts per length')
    p.add_argument('wordlist', nargs='?', help='Word list (default: bundled list)')

    # Parse
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # Handle aliases
    cmd_map = {
        'r': 'run',
        'gen': 'sample', 'g': 'sample',
        'cat': 'catalog',
    }
    command = cmd_map.get(args.command, args.command)

    out = Output(quiet=args.quiet)

    from nickcollide.catalog import ResourceUnavailable
    from nickcollide.generators import SamplingExhausted
    from nickcollide.ui import configure_logging

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("WARNING")
    else:
        configure_logging()

    commands = {
        'run': cmd_run,
        'sample': cmd_sample,
        'catalog': cmd_catalog,
    }

    handler = commands[command]
    try:
        return handler(args, out)
    except ResourceUnavailable:
        # already logged at CRITICAL by the loader
        return EXIT_RESOURCE_UNAVAILABLE
    except SamplingExhausted:
        return 1
    except KeyboardInterrupt:
        out.print("\nCancelled.")
        return 130
    except ValueError as e:
        out.error(str(e))
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
