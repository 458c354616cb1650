"""Encoding of selected SNPs to output files."""

import logging
from pathlib import Path
from typing import Iterable, Optional

from ..core.record import SNP
from ..errors import OutputUnavailable

__all__ = ["OUTPUT_FORMATS", "format_snp", "SNPWriter"]

OUTPUT_FORMATS = ("simple", "beagle")


def format_snp(snp: SNP, output_format: str) -> str:
    """Render one record as an output line, newline included.

    Example:
        >>> format_snp(SNP("chr1", 100), "simple")
        'chr1:100\\n'
    """
    if output_format == "simple":
        return f"{snp.scaffold}:{snp.pos}\n"
    if output_format == "beagle":
        if not snp.has_payload:
            raise ValueError(
                f"Cannot write {snp.scaffold}:{snp.pos} as beagle: no payload"
            )
        return "\t".join([snp.name, snp.a_ref, snp.a_alt, *snp.probabilities]) + "\n"
    raise ValueError(f"Unknown output format: {output_format}")


class SNPWriter:
    """Handles SNP file output."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def write(self, snps: Iterable[SNP], output_path: Path, output_format: str) -> int:
        """Write records to ``output_path`` in the given format.

        Lines are rendered before the file is opened, so a bad record never
        leaves a half-written file behind.

        Returns:
            Number of records written

        Raises:
            OutputUnavailable: If the output file cannot be created
        """
        lines = [format_snp(snp, output_format) for snp in snps]

        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info(f"Writing result to {output_path}")

        try:
            with open(output_path, "w", encoding="utf-8", newline="\n") as out:
                out.writelines(lines)
        except OSError as e:
            raise OutputUnavailable(f"Can't create `{output_path}`: {e}") from e

        return len(lines)
