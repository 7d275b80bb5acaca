#!/usr/bin/env python3
"""
Sound Inference Benchmark - Main Entry Point

Parses command-line arguments and runs the runtime benchmark suite.
"""

import sys

from .benchmark import create_parser
from .benchmark.benchmark_runner import run_benchmarks


def main(argv=None) -> int:
    """Main entry point for the benchmark suite."""
    # Parse command-line arguments
    parser = create_parser()
    args = parser.parse_args(argv)

    # Run the benchmarks
    return run_benchmarks(args)


if __name__ == "__main__":
    sys.exit(main())
