"""Randomized greedy selection of spaced SNPs."""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
from tqdm import tqdm

from .compatibility import AcceptedSet
from .record import SNP
from ..utils.memory_monitor import MemoryMonitor

__all__ = ["DEFAULT_THRESHOLD", "compute_quota", "SamplingResult", "SpacingSampler"]

DEFAULT_THRESHOLD = 2000


def compute_quota(quantity: float, n: int) -> int:
    """Return the target number of records for a proportion of a pool.

    The quota is ``floor(quantity * n) + 1``, so it always asks for one record
    more than the plain proportion.

    Example:
        >>> compute_quota(0.5, 10)
        6
        >>> compute_quota(1.0, 1)
        2
    """
    return math.floor(quantity * n) + 1


@dataclass
class SamplingResult:
    """Outcome of one sampling run.

    Attributes:
        selected: Accepted records in admission order
        quota: Target number of records
        pool_size: Number of input records
        threshold: Minimum distance used
        considered: Records taken from the pool, the seed record included
        skipped: Records rejected because they conflicted with the accepted set
    """

    selected: List[SNP]
    quota: int
    pool_size: int
    threshold: int
    considered: int = 0
    skipped: int = 0

    @property
    def shortfall(self) -> bool:
        """True when fewer records were accepted than the quota asked for."""
        return len(self.selected) < self.quota


class SpacingSampler:
    """Greedy sampler keeping records at least ``threshold`` bp apart."""

    def __init__(
        self,
        memory_monitor: MemoryMonitor,
        logger: logging.Logger,
        show_progress: bool = True,
        rng: Optional[np.random.Generator] = None,
    ):
        """Initialize the sampler.

        Args:
            memory_monitor: MemoryMonitor instance for tracking memory usage
            logger: Logger instance for output
            show_progress: Whether to show a progress bar over the pool
            rng: Random generator used to shuffle the pool; an unseeded one is
                created when omitted

        Example:
            >>> import numpy as np
            >>> sampler = SpacingSampler(monitor, logger, rng=np.random.default_rng(42))
        """
        self.memory_monitor = memory_monitor
        self.logger = logger
        self.show_progress = show_progress
        self.rng = rng if rng is not None else np.random.default_rng()

    def shuffle(self, records: Sequence[SNP]) -> List[SNP]:
        """Return the records in a uniformly random order."""
        order = self.rng.permutation(len(records))
        return [records[i] for i in order]

    def sample(
        self,
        records: Sequence[SNP],
        threshold: int = DEFAULT_THRESHOLD,
        quantity: float = 1.0,
    ) -> SamplingResult:
        """Select a random subset of records with no close pairs per scaffold.

        The pool is shuffled and then consumed from its end. Each record is
        accepted if it does not conflict with anything accepted so far and
        discarded for good otherwise. The loop stops once the accepted set is
        larger than the quota or the pool runs out, so the result may exceed
        the quota by one record.

        Args:
            records: All decoded input records
            threshold: Minimum distance in bp between records on one scaffold
            quantity: Target proportion of the pool, in (0, 1]

        Returns:
            SamplingResult with the accepted records in admission order
        """
        pool_size = len(records)
        todo = compute_quota(quantity, pool_size)
        result = SamplingResult(
            selected=[], quota=todo, pool_size=pool_size, threshold=threshold
        )

        if pool_size == 0:
            self.logger.warning(
                f"Not enough valid SNPs; stopping at 0 instead of {todo}"
            )
            return result

        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info("Shuffling input")
        pool = self.shuffle(records)

        accepted = AcceptedSet(threshold)
        accepted.add(pool.pop())
        result.considered = 1

        if self.logger.isEnabledFor(logging.INFO):
            self.logger.info(
                f"Sampling {todo} SNPs >{threshold}bp apart from {pool_size}"
            )

        with tqdm(
            total=len(pool),
            desc="Sampling SNPs",
            unit="snp",
            leave=False,
            disable=not self.show_progress,
        ) as bar:
            while pool:
                candidate = pool.pop()
                result.considered += 1
                bar.update(1)
                if accepted.blocks(candidate):
                    result.skipped += 1
                else:
                    accepted.add(candidate)

                if len(accepted) > todo:
                    break

        result.selected = accepted.records

        if result.shortfall:
            self.logger.warning(
                f"Not enough valid SNPs; stopping at {len(result.selected)} "
                f"instead of {todo}"
            )
        elif self.logger.isEnabledFor(logging.INFO):
            self.logger.info(
                f"Selected {len(result.selected)} SNPs after examining "
                f"{result.considered} of {pool_size}"
            )

        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(
                f"Sampling stats: considered={result.considered}, "
                f"skipped={result.skipped}, remaining={len(pool)}"
            )

        self.memory_monitor.check_memory_and_warn("sampling complete")
        return result
