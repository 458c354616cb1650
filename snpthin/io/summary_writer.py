"""TSV summary file output operations."""

import logging
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..core.ordering import sort_records
from ..core.record import SNP
from ..errors import OutputUnavailable

__all__ = ["ScaffoldStatistics", "SummaryWriter"]


@dataclass
class ScaffoldStatistics:
    """Per-scaffold selection statistics.

    Attributes:
        scaffold: Scaffold identifier
        input_snps: Number of input records on the scaffold
        selected_snps: Number of selected records on the scaffold
        min_gap: Smallest distance between neighbouring selected records,
            None with fewer than two selected

    Example:
        >>> stats = ScaffoldStatistics("chr1", input_snps=10, selected_snps=3, min_gap=2150)
        >>> print(f"{stats.scaffold}: {stats.selected_snps}/{stats.input_snps}")
        chr1: 3/10
    """

    scaffold: str
    input_snps: int
    selected_snps: int
    min_gap: Optional[int]


class SummaryWriter:
    """Handles TSV summary file output."""

    HEADER = ["scaffold", "input_snps", "selected_snps", "min_gap"]

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def compute_statistics(
        self, records: Sequence[SNP], selected: Sequence[SNP]
    ) -> List[ScaffoldStatistics]:
        """Compute statistics for every scaffold present in the input.

        Args:
            records: All input records
            selected: Records kept by the sampler, in any order

        Returns:
            One entry per input scaffold, sorted by scaffold name
        """
        input_counts: Counter[str] = Counter(snp.scaffold for snp in records)
        positions: Dict[str, List[int]] = {}
        for snp in sort_records(selected):
            positions.setdefault(snp.scaffold, []).append(snp.pos)

        stats = []
        for scaffold in sorted(input_counts):
            kept = positions.get(scaffold, [])
            gaps = [b - a for a, b in zip(kept, kept[1:])]
            stats.append(
                ScaffoldStatistics(
                    scaffold=scaffold,
                    input_snps=input_counts[scaffold],
                    selected_snps=len(kept),
                    min_gap=min(gaps) if gaps else None,
                )
            )
        return stats

    def write_summary(
        self,
        records: Sequence[SNP],
        selected: Sequence[SNP],
        output_path: Path,
    ) -> List[ScaffoldStatistics]:
        """Write per-scaffold statistics to TSV.

        Example output::

            scaffold	input_snps	selected_snps	min_gap
            chr1	2	1	NA
            chr2	1	1	NA

        Raises:
            OutputUnavailable: If the summary file cannot be created
        """
        stats = self.compute_statistics(records, selected)

        lines = ["\t".join(self.HEADER)]
        for s in stats:
            row = [
                s.scaffold,
                str(s.input_snps),
                str(s.selected_snps),
                "NA" if s.min_gap is None else str(s.min_gap),
            ]
            lines.append("\t".join(row))

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                f.write("\n".join(lines) + "\n")
        except OSError as e:
            raise OutputUnavailable(f"Can't create `{output_path}`: {e}") from e

        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info(
                f"Summary for {len(stats)} scaffold(s) written to: {output_path}"
            )
        return stats
