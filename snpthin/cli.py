"""Command-line interface for snpthin."""

import argparse
import platform
import subprocess
import sys
from pathlib import Path

from .app import SnpThinApp, SnpThinConfig
from .core import DEFAULT_THRESHOLD
from .errors import SnpThinError
from .io import OUTPUT_FORMATS
from .utils.validation import validate_cli_arguments
from .version import __version__

__all__ = ["parser_resolve_path", "create_parser", "main"]


def _get_git_commit() -> str:
    """Return short git commit hash if available, else 'unknown'."""
    try:
        res = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            cwd=Path(__file__).resolve().parent,
        )
        return res.stdout.strip() or "unknown"
    except (OSError, subprocess.CalledProcessError):
        return "unknown"


def _build_version_string() -> str:
    """Compose version string with build and runtime info."""
    commit = _get_git_commit()
    py = platform.python_version()
    return f"snpthin {__version__} (commit hash {commit})\nPython {py}"


def parser_resolve_path(path: str) -> Path:
    """Resolve CLI-provided path string to an absolute Path."""
    return Path(path).resolve()


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser.

    Example:
        >>> parser = create_parser()
        >>> args = parser.parse_args(["--in-simple", "snps.tsv", "-t", "500"])
        >>> print(f"Input: {args.in_simple.name}, threshold: {args.threshold}")
        Input: snps.tsv, threshold: 500
    """
    parser = argparse.ArgumentParser(
        prog="snpthin",
        description=(
            "Randomly sample SNPs so that no two kept SNPs on the same scaffold "
            "are closer than a minimum distance."
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        epilog=(
            "Notes: the whole input is loaded in memory. Without --seed every "
            "run draws a different sample."
        ),
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=_build_version_string(),
        help="Show program version, commit hash, and Python version, then exit",
    )

    grp_input = parser.add_argument_group("Input", "Exactly one input file")
    inputs = grp_input.add_mutually_exclusive_group(required=True)
    inputs.add_argument(
        "--in-beagle",
        dest="in_beagle",
        help="Set the input file to use in the beagle format",
        type=parser_resolve_path,
        default=None,
        metavar="BEAGLE",
    )
    inputs.add_argument(
        "--in-simple",
        dest="in_simple",
        help="Set the input file to use in the scaffold<TAB>position format",
        type=parser_resolve_path,
        default=None,
        metavar="SIMPLE",
    )

    grp_output = parser.add_argument_group("Output", "Output file and format")
    grp_output.add_argument(
        "-o",
        "--out",
        dest="out",
        help="Sets the output file",
        type=parser_resolve_path,
        default="out.snps",
        metavar="OUTPUT",
    )
    grp_output.add_argument(
        "--format",
        dest="output_format",
        help="Output format; beagle requires --in-beagle",
        choices=list(OUTPUT_FORMATS),
        default="simple",
    )
    grp_output.add_argument(
        "--summary-tsv",
        help="Write per-scaffold counts and minimum gaps to this TSV",
        type=parser_resolve_path,
        default=None,
        metavar="SUMMARY_TSV",
    )

    grp_select = parser.add_argument_group(
        "Selection", "Core parameters controlling selection"
    )
    grp_select.add_argument(
        "-t",
        "--threshold",
        help="The minimum distance (in bp) between two SNPs to sample",
        type=int,
        default=DEFAULT_THRESHOLD,
        metavar="THRESHOLD",
    )
    grp_select.add_argument(
        "-Q",
        "--quantity",
        help=(
            "The maximum proportion of SNPs to sample. 1.0 means sample all, "
            "0.5 means sample half."
        ),
        type=float,
        default=1.0,
        metavar="QUANTITY",
    )
    grp_select.add_argument(
        "-s",
        "--seed",
        help="Seed for the random shuffle, for reproducible samples",
        type=int,
        default=None,
        metavar="SEED",
    )
    grp_select.add_argument(
        "-j",
        "--threads",
        help="Number of worker processes used to decode the input",
        type=int,
        default=1,
        metavar="THREADS",
    )

    grp_log = parser.add_argument_group("Logging", "Logging verbosity and format")
    grp_log.add_argument(
        "-q",
        "--quiet",
        help="Suppress progress output",
        action="store_true",
        default=False,
    )
    grp_log.add_argument(
        "-L",
        "--log-level",
        help=(
            "Logging level (DEBUG, INFO, WARNING, ERROR); default depends on --quiet"
        ),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
    )
    grp_log.add_argument(
        "-F",
        "--log-format",
        help="Logging format: text or json",
        choices=["text", "json"],
        default="text",
    )

    return parser


def main() -> None:
    """CLI entry point.

    Parses and validates arguments, runs the pipeline and turns fatal errors
    into a non-zero exit with an ``ERROR:`` message on stderr.

    Example:
        >>> # Command line usage:
        >>> # snpthin --in-simple snps.tsv -o thinned.snps -t 5000 -Q 0.5
        >>> # python -m snpthin.cli --in-beagle calls.beagle --format beagle
    """
    parser = create_parser()
    args = parser.parse_args()

    validate_cli_arguments(args)

    if args.in_beagle is not None:
        input_path, input_format = args.in_beagle, "beagle"
    else:
        input_path, input_format = args.in_simple, "simple"

    config = SnpThinConfig(
        input_path=input_path,
        input_format=input_format,
        output_path=args.out,
        output_format=args.output_format,
        threshold=args.threshold,
        quantity=args.quantity,
        seed=args.seed,
        threads=args.threads,
        summary_tsv=args.summary_tsv,
        verbose=not args.quiet,
        log_level=args.log_level,
        log_format=args.log_format,
    )

    if config.verbose:
        print(f"Starting snpthin {__version__}")
        print(f"Input ({config.input_format}): {config.input_path}")
        print(f"Output ({config.output_format}): {config.output_path}")
        print(
            f"Configuration: threshold={config.threshold}, quantity={config.quantity}, "
            f"seed={config.seed if config.seed is not None else 'random'}"
        )
        print("-" * 60)

    app = SnpThinApp(config)
    try:
        app.run()
    except SnpThinError as e:
        sys.exit(f"ERROR: {e}")
    except KeyboardInterrupt:
        print("\nOperation interrupted by user. Exiting.")
        sys.exit(1)


if __name__ == "__main__":
    main()
