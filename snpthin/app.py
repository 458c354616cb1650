"""Main application coordinator for snpthin."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import numpy as np

from .core import DEFAULT_THRESHOLD, SNP, SamplingResult, SpacingSampler, sort_records
from .errors import OutputUnavailable
from .io import SNPReader, SNPWriter, SummaryWriter
from .utils import MemoryMonitor, setup_logger

__all__ = ["SnpThinConfig", "SnpThinApp"]


@dataclass
class SnpThinConfig:
    """Configuration for a snpthin run.

    Attributes:
        input_path: Path to the input SNP file
        input_format: Input format: "beagle" or "simple"
        output_path: Path of the output file
        output_format: Output format: "simple" or "beagle"
        threshold: Minimum distance in bp between selected SNPs on a scaffold
        quantity: Target proportion of input SNPs to keep, in (0, 1]
        seed: Seed for the shuffle; None gives a different sample each run
        threads: Number of worker processes used for decoding
        summary_tsv: Optional path of a per-scaffold summary TSV
        verbose: Whether to enable verbose logging
        log_level: Logging level override
        log_format: Logging format (text or json)

    Example:
        >>> from pathlib import Path
        >>> config = SnpThinConfig(
        ...     input_path=Path("calls.beagle"),
        ...     input_format="beagle",
        ...     threshold=5000,
        ...     quantity=0.5,
        ... )
        >>> print(f"Input: {config.input_path}, output: {config.output_path}")
        Input: calls.beagle, output: out.snps
    """

    input_path: Path
    input_format: str
    output_path: Path = Path("out.snps")
    output_format: str = "simple"
    threshold: int = DEFAULT_THRESHOLD
    quantity: float = 1.0
    seed: Optional[int] = None
    threads: int = 1
    summary_tsv: Optional[Path] = None
    verbose: bool = True
    log_level: Optional[str] = None
    log_format: str = "text"


class SnpThinApp:
    """Runs the read, sample, sort and write pipeline."""

    def __init__(self, config: SnpThinConfig):
        self.config = config
        self.logger = setup_logger(
            "snpthin", config.log_level, config.log_format, config.verbose
        )
        self.memory_monitor = MemoryMonitor(self.logger)

        self.reader = SNPReader(self.memory_monitor, self.logger, config.threads)
        self.sampler = SpacingSampler(
            self.memory_monitor,
            self.logger,
            show_progress=config.verbose,
            rng=np.random.default_rng(config.seed),
        )
        self.writer = SNPWriter(self.logger)
        self.summary_writer = SummaryWriter(self.logger)

    def run(self) -> SamplingResult:
        """Execute the complete pipeline.

        1. Read and decode the input file
        2. Sample spaced SNPs
        3. Sort the selection by scaffold and position
        4. Write the summary TSV if requested, then the output file

        Returns:
            The SamplingResult; ``result.selected`` is left in admission order

        Raises:
            InputUnavailable: If the input file cannot be read
            MalformedRecord: If an input line cannot be decoded
            OutputUnavailable: If an output file cannot be created
        """
        records: List[SNP] = self.reader.read(
            self.config.input_path, self.config.input_format
        )

        result = self.sampler.sample(
            records, threshold=self.config.threshold, quantity=self.config.quantity
        )

        ordered = sort_records(result.selected)

        # Summary first; a failed output write removes it again
        summary = self.config.summary_tsv
        if summary is not None:
            self.summary_writer.write_summary(records, ordered, summary)
        try:
            written = self.writer.write(
                ordered, self.config.output_path, self.config.output_format
            )
        except OutputUnavailable:
            if summary is not None:
                summary.unlink(missing_ok=True)
            raise

        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info(f"Done: {written} SNPs written")
        return result
