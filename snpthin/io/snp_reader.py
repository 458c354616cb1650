"""Decoding of beagle-like and simple SNP files."""

import logging
from concurrent.futures import ProcessPoolExecutor
from itertools import repeat
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from ..core.record import SNP
from ..errors import InputUnavailable
from ..utils.memory_monitor import MemoryMonitor

__all__ = ["INPUT_FORMATS", "SNPReader", "decode_lines"]

NumberedLine = Tuple[int, str]

INPUT_FORMATS: Dict[str, Callable[[str, Optional[int]], SNP]] = {
    "beagle": SNP.from_beagle_row,
    "simple": SNP.from_simple_row,
}


def decode_lines(input_format: str, lines: List[NumberedLine]) -> List[SNP]:
    """Decode numbered lines in order; the first bad line raises MalformedRecord."""
    decode = INPUT_FORMATS[input_format]
    return [decode(line, number) for number, line in lines]


class SNPReader:
    """Reads a whole SNP file into memory and decodes it."""

    CHUNK_SIZE = 50_000

    def __init__(
        self,
        memory_monitor: MemoryMonitor,
        logger: logging.Logger,
        threads: int = 1,
    ):
        """Initialize reader.

        Args:
            memory_monitor: MemoryMonitor instance for tracking memory usage
            logger: Logger instance for output
            threads: Number of worker processes used for decoding
        """
        self.memory_monitor = memory_monitor
        self.logger = logger
        self.threads = threads

    def read_lines(self, path: Path, input_format: str) -> List[NumberedLine]:
        """Load all data lines of a file, keeping their 1-based line numbers.

        Blank lines are dropped for the simple format only.

        Raises:
            InputUnavailable: If the file cannot be opened or read
        """
        try:
            with open(path, encoding="utf-8") as fh:
                raw_lines = [line.rstrip("\n") for line in fh]
        except (OSError, UnicodeDecodeError) as e:
            raise InputUnavailable(f"Could not read input file {path}: {e}") from e

        numbered = list(enumerate(raw_lines, start=1))
        if input_format == "simple":
            numbered = [(n, line) for n, line in numbered if line.strip()]
        return numbered

    def decode(self, lines: List[NumberedLine], input_format: str) -> List[SNP]:
        """Decode lines, in parallel chunks when more than one worker is set.

        Output order always matches input order.

        Raises:
            MalformedRecord: For the first line (in input order) that fails
        """
        if input_format not in INPUT_FORMATS:
            raise ValueError(f"Unknown input format: {input_format}")

        if self.threads <= 1 or len(lines) <= self.CHUNK_SIZE:
            return decode_lines(input_format, lines)

        chunks = [
            lines[i : i + self.CHUNK_SIZE]
            for i in range(0, len(lines), self.CHUNK_SIZE)
        ]
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(
                f"Decoding {len(lines)} lines in {len(chunks)} chunks "
                f"with {self.threads} workers"
            )
        records: List[SNP] = []
        with ProcessPoolExecutor(max_workers=self.threads) as ex:
            for decoded in ex.map(decode_lines, repeat(input_format), chunks):
                records.extend(decoded)
        return records

    def read(self, path: Path, input_format: str) -> List[SNP]:
        """Read and decode a whole input file.

        Args:
            path: Input file path
            input_format: "beagle" or "simple"

        Returns:
            Decoded records in file order

        Raises:
            InputUnavailable: If the file cannot be opened
            MalformedRecord: If any line fails to decode

        Example:
            >>> reader = SNPReader(monitor, logger, threads=4)
            >>> snps = reader.read(Path("input.beagle"), "beagle")
        """
        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info(f"Reading {path}")

        lines = self.read_lines(path, input_format)
        records = self.decode(lines, input_format)

        if self.logger.isEnabledFor(logging.INFO):
            scaffolds = len({snp.scaffold for snp in records})
            self.logger.info(
                f"Decoded {len(records)} SNPs on {scaffolds} scaffold(s)"
            )

        payload_fields = len(records[0].probabilities) if records else 0
        self.memory_monitor.check_memory_and_warn("decoding")
        self.memory_monitor.warn_for_large_dataset(len(records), payload_fields)
        return records
