#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Main CLI entry point for the Media Optimizer.
"""

import argparse
import sys
import logging

from .config import OptimizerConfig, ORIGIN_DIRNAME, OUTPUT_DIRNAME
from .commands.optimize import OptimizeCommand
from .jsonio import enable_json_logging


def setup_logging(verbose: bool):
    """Configure logging for the CLI tool."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    logging.debug("Verbose logging enabled (DEBUG level).")


def create_parser():
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="media-optimizer",
        description="Convert source media to AVIF/WebP/MP4 and stage the results with git",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  # Typical pre-commit run from the repository root
  %(prog)s

  # Ignore the staging index and scan the whole origin tree
  %(prog)s --scan-all

  # AVIF only, keep the originals
  %(prog)s --no-webp --keep-sources
""")

    parser.add_argument("--origin", default=ORIGIN_DIRNAME,
                        help=f"Watched source directory (default: {ORIGIN_DIRNAME})")
    parser.add_argument("--output", default=OUTPUT_DIRNAME,
                        help=f"Destination directory for optimized files (default: {OUTPUT_DIRNAME})")
    parser.add_argument("--repo-root", default=".",
                        help="Repository root; relative directories resolve against it (default: .)")
    parser.add_argument("--no-webp", action="store_true",
                        help="Only produce AVIF for images")
    parser.add_argument("--keep-sources", action="store_true",
                        help="Keep source files after a successful conversion")
    parser.add_argument("--scan-all", action="store_true",
                        help="Skip the git staging index and walk the origin directory")
    parser.add_argument("--no-progress", action="store_true",
                        help="Disable progress bars")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable verbose (DEBUG) output")
    parser.add_argument("--json", action="store_true",
                        help="Output the run summary as JSON instead of human-readable text")
    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.json:
        enable_json_logging()
    else:
        setup_logging(args.verbose)

    logging.debug("Parsed arguments: %s", args)

    try:
        config = OptimizerConfig.from_args(args)
        logging.info("Optimizing media in %s -> %s", config.origin_dir, config.output_dir)

        command = OptimizeCommand(config)
        summary = command.execute(show_progress=not (args.no_progress or args.json),
                                  quiet=args.json)

        if args.json:
            from .jsonio import success
            return success("optimize", summary.to_dict())
        return 0

    except KeyboardInterrupt:
        if args.json:
            from .jsonio import error
            return error("optimize", "Operation interrupted by user", code=130)
        logging.warning("Operation interrupted by user.")
        sys.exit(130)
    except Exception as e:
        if args.json:
            from .jsonio import error
            debug_info = {"exception_type": type(e).__name__} if args.verbose else None
            return error("optimize", str(e), debug=debug_info, code=1)
        logging.error("Media optimization failed: %s", e, exc_info=args.verbose)
        sys.exit(1)


if __name__ == "__main__":
    sys.exit(main())
