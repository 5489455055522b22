#!/usr/bin/env python3
"""
Command-line entry point for ecdh-drive-key.

Usage:
    ecdh-drive-key [-v] demo [-v] [--curve P-256] [--message TEXT] [--key-length 256] [--kdf raw]
    ecdh-drive-key benchmark [--iterations N] [--sizes SIZE1,SIZE2] [--output-dir DIR]

Running without a sub-command runs the demo with default settings.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import DemoConfig
from .crypto.keys import DEFAULT_CURVE, SUPPORTED_CURVES
from .crypto.kdf import AES_KEY_LENGTHS, SUPPORTED_KDFS, KDF_RAW
from .demo import run_demo
from .errors import ECDHDriveError
from .evaluation.benchmark import run_comprehensive_benchmark, DEFAULT_MESSAGE_SIZES
from .evaluation.results import new_run_root, write_data
from .evaluation.sysinfo import capture_system_info

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(prog='ecdh-drive-key',
                                     description='ECDH key agreement with AES-GCM encryption')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    # --verbose is accepted after the sub-command too
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--verbose', '-v', action='store_true', default=argparse.SUPPRESS,
                        help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Sub-commands')

    demo_parser = subparsers.add_parser('demo', parents=[common],
                                        help='Derive shared keys and round-trip a message')
    demo_parser.add_argument('--curve', choices=list(SUPPORTED_CURVES), default=None,
                             help=f'Named curve (default: {DEFAULT_CURVE})')
    demo_parser.add_argument('--message', type=str, default=None,
                             help='Text to encrypt (default: "Hello, Deno 2.0!")')
    demo_parser.add_argument('--key-length', type=int, choices=AES_KEY_LENGTHS, default=None,
                             help='AES key length in bits (default: 256)')
    demo_parser.add_argument('--kdf', choices=SUPPORTED_KDFS, default=None,
                             help=f'Key derivation mode (default: {KDF_RAW})')

    bench_parser = subparsers.add_parser('benchmark', parents=[common],
                                         help='Time key agreement and AES-GCM')
    bench_parser.add_argument('--iterations', type=int, default=100,
                              help='Iterations per measurement (default: 100)')
    bench_parser.add_argument('--sizes', type=str,
                              default=','.join(str(s) for s in DEFAULT_MESSAGE_SIZES),
                              help='Comma-separated message sizes in bytes')
    bench_parser.add_argument('--curve', choices=list(SUPPORTED_CURVES), default=DEFAULT_CURVE,
                              help=f'Named curve (default: {DEFAULT_CURVE})')
    bench_parser.add_argument('--kdf', choices=SUPPORTED_KDFS, default=KDF_RAW,
                              help=f'Key derivation mode (default: {KDF_RAW})')
    bench_parser.add_argument('--output-dir', type=str, default=None,
                              help='Write results under a timestamped folder in this directory')
    bench_parser.add_argument('--format', choices=['csv', 'json', 'both'], default='both',
                              help='Output format for data files')

    return parser


def parse_sizes(value: str) -> List[int]:
    """Parse a comma-separated list of positive integers."""
    try:
        sizes = [int(s) for s in value.split(',') if s.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid size list: '{value}'")
    if not sizes or any(s < 0 for s in sizes):
        raise argparse.ArgumentTypeError(f"Invalid size list: '{value}'")
    return sizes


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )


def cmd_demo(args: argparse.Namespace) -> int:
    config = DemoConfig.from_env(
        curve=args.curve,
        message=args.message,
        key_length=args.key_length,
        kdf=args.kdf,
    )
    result = run_demo(config)
    return 0 if result.verified else 1


def cmd_benchmark(args: argparse.Namespace) -> int:
    sizes = parse_sizes(args.sizes)
    if args.iterations <= 0:
        raise argparse.ArgumentTypeError("--iterations must be positive")

    print(f"Benchmarking {args.curve} / AES-GCM ({args.iterations} iterations)")
    benchmark = run_comprehensive_benchmark(
        iterations=args.iterations,
        message_sizes=sizes,
        curve=args.curve,
        kdf=args.kdf
    )

    for r in benchmark.results:
        line = f"  {r.name:<28} {r.avg_time * 1e6:10.1f} us/op"
        if r.throughput_mbps is not None:
            line += f"  {r.throughput_mbps:8.2f} MB/s"
        print(line)

    if args.output_dir:
        output_root = new_run_root(args.output_dir)
        written = write_data(output_root, 'benchmark', benchmark.results_as_dicts(), args.format)
        written += write_data(output_root, 'sysinfo', capture_system_info(), 'json')
        for path in written:
            print(f"Wrote {path}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if not args.command:
        extra = ['--verbose'] if args.verbose else []
        args = parser.parse_args(extra + ['demo'])

    try:
        if args.command == 'benchmark':
            return cmd_benchmark(args)
        return cmd_demo(args)
    except (ECDHDriveError, argparse.ArgumentTypeError) as e:
        logger.debug("Run failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
