"""Pairwise spacing compatibility between SNP records."""

from typing import Dict, Iterable, Iterator, List

import numpy as np
from numpy.typing import NDArray

from .record import POS_MAX, POS_MIN, SNP

__all__ = ["incompatible", "is_blocked", "AcceptedSet"]


def incompatible(snp1: SNP, snp2: SNP, threshold: int) -> bool:
    """Return True if two records sit on the same scaffold closer than threshold.

    A gap exactly equal to ``threshold`` is compatible. Records on different
    scaffolds never conflict.

    Example:
        >>> a = SNP("chr1", 100)
        >>> incompatible(a, SNP("chr1", 150), 100)
        True
        >>> incompatible(a, SNP("chr1", 200), 100)
        False
        >>> incompatible(a, SNP("chr2", 100), 100)
        False
    """
    if snp1.scaffold != snp2.scaffold:
        return False
    return abs(snp1.pos - snp2.pos) < threshold


def is_blocked(snp: SNP, accepted: Iterable[SNP], threshold: int) -> bool:
    """Return True if ``snp`` is incompatible with any accepted record."""
    return any(incompatible(snp, old, threshold) for old in accepted)


class AcceptedSet:
    """Growing set of accepted records with a vectorized conflict scan.

    Scaffolds are mapped to integer codes and positions are kept in numpy
    arrays alongside the record list, so that checking a candidate against
    every accepted record is a single array comparison instead of a Python
    loop. Arrays grow by doubling.
    """

    INITIAL_CAPACITY = 1024

    def __init__(self, threshold: int):
        self.threshold = threshold
        self._records: List[SNP] = []
        self._codes: Dict[str, int] = {}
        self._scaffold_codes: NDArray[np.int64] = np.empty(
            self.INITIAL_CAPACITY, dtype=np.int64
        )
        self._positions: NDArray[np.int64] = np.empty(
            self.INITIAL_CAPACITY, dtype=np.int64
        )

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SNP]:
        return iter(self._records)

    @property
    def records(self) -> List[SNP]:
        """Accepted records in admission order."""
        return list(self._records)

    def _grow(self) -> None:
        capacity = self._positions.shape[0] * 2
        codes = np.empty(capacity, dtype=np.int64)
        positions = np.empty(capacity, dtype=np.int64)
        size = len(self._records)
        codes[:size] = self._scaffold_codes[:size]
        positions[:size] = self._positions[:size]
        self._scaffold_codes = codes
        self._positions = positions

    def add(self, snp: SNP) -> None:
        """Append a record; the caller is responsible for checking blocks()."""
        size = len(self._records)
        if size == self._positions.shape[0]:
            self._grow()
        code = self._codes.setdefault(snp.scaffold, len(self._codes))
        self._scaffold_codes[size] = code
        self._positions[size] = snp.pos
        self._records.append(snp)

    def blocks(self, snp: SNP) -> bool:
        """Return True if ``snp`` conflicts with any accepted record.

        Gives the same answer as ``is_blocked(snp, self, self.threshold)``.
        """
        code = self._codes.get(snp.scaffold)
        if code is None:
            return False
        size = len(self._records)
        same_scaffold = self._scaffold_codes[:size] == code
        # |p - pos| < threshold as a clamped closed interval; int64 subtraction
        # would wrap for positions near the ends of the range
        low = max(snp.pos - self.threshold + 1, POS_MIN)
        high = min(snp.pos + self.threshold - 1, POS_MAX)
        positions = self._positions[:size]
        close = (positions >= low) & (positions <= high)
        return bool(np.any(same_scaffold & close))
