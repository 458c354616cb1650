"""Input validation utilities."""

import sys
import argparse

__all__ = ["validate_cli_arguments"]


def validate_cli_arguments(args: argparse.Namespace) -> None:
    """Validate CLI argument combinations and constraints.

    Exits with a message when a value is out of range.

    Args:
        args: Parsed command line arguments
    """
    if args.threshold < 1:
        sys.exit("-t (threshold) must be a positive number of bp")

    if not (0.0 < args.quantity <= 1.0):
        sys.exit("-Q (quantity) must be in (0, 1]")

    if args.threads < 1:
        sys.exit("-j (threads) must be >= 1")

    # The beagle writer needs the marker name and payload from beagle input
    if args.output_format == "beagle" and args.in_beagle is None:
        sys.exit("--format beagle requires --in-beagle input")
