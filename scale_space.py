#!/usr/bin/env python3
"""
Scale Space - Gaussian / Difference of Gaussian pyramid tool
Plans octave schedules and benchmarks pyramid construction
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

import numpy as np

from scalespace.core.pipeline import ScaleSpaceBatch
from scalespace.core.schedule import plan_octaves
from scalespace.models.config import PyramidConfig
from scalespace.utils.logging import setup_logging


def parse_arguments(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Scale Space - multi-octave Gaussian and DoG pyramids"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging of the pyramid internals"
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write the log to this file"
    )

    subparsers = parser.add_subparsers(dest="mode", help="Command")

    plan_parser = subparsers.add_parser(
        "plan",
        help="Print the octaves built for an image size"
    )
    _add_pyramid_arguments(plan_parser)
    plan_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the schedule to this JSON file instead of stdout"
    )

    bench_parser = subparsers.add_parser(
        "bench",
        help="Time scale-space construction on random images"
    )
    _add_pyramid_arguments(bench_parser)
    bench_parser.add_argument(
        "--repeat",
        type=int,
        default=4,
        help="Number of images to process"
    )
    bench_parser.add_argument(
        "--num-threads",
        type=int,
        default=None,
        help="Number of threads to use (None for auto)"
    )
    bench_parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Seed for the random images"
    )

    return parser.parse_args(argv)


def _add_pyramid_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--width", type=int, required=True, help="Input image width")
    parser.add_argument("--height", type=int, required=True, help="Input image height")
    parser.add_argument(
        "--num-scales",
        type=int,
        default=5,
        help="Blurred images per octave (at least 3)"
    )
    parser.add_argument(
        "--base-sigma",
        type=float,
        default=1.6,
        help="Blur added between adjacent scales"
    )
    parser.add_argument(
        "--double-input",
        action="store_true",
        help="Double the input image before building the first octave"
    )


def run_plan(args, config: PyramidConfig, logger: logging.Logger) -> int:
    octaves = plan_octaves(args.width, args.height, config)
    schedule = {
        'config': config.to_dict(),
        'input_size': [args.width, args.height],
        'octaves': [octave.to_dict() for octave in octaves]
    }

    if args.output is None:
        print(json.dumps(schedule, indent=2))
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, 'w') as f:
            json.dump(schedule, f, indent=2)
        logger.info(f"Schedule with {len(octaves)} octaves written to: {args.output}")
    return 0


def run_bench(args, config: PyramidConfig, logger: logging.Logger) -> int:
    if args.repeat < 1:
        raise ValueError(f"--repeat must be at least 1, got {args.repeat}")

    rng = np.random.default_rng(args.seed)
    images = [
        rng.random((args.height, args.width), dtype=np.float32)
        for _ in range(args.repeat)
    ]

    batch = ScaleSpaceBatch(config, num_threads=args.num_threads)
    start = time.perf_counter()
    results = batch.process(images)
    elapsed = time.perf_counter() - start

    logger.info(f"Octaves per image: {len(results[0])}")
    logger.info(f"Total time: {elapsed:.3f} s ({elapsed / len(images):.3f} s per image)")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)

    package_level = logging.DEBUG if args.debug else logging.INFO
    logger = setup_logging(logging.INFO, args.log_file, package_level=package_level)

    if args.mode is None:
        logger.error("No command given, use 'plan' or 'bench'")
        return 1

    try:
        config = PyramidConfig(
            num_scales=args.num_scales,
            base_sigma=args.base_sigma,
            double_input_image=args.double_input
        )
        if args.mode == 'plan':
            return run_plan(args, config, logger)
        return run_bench(args, config, logger)
    except ValueError as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
