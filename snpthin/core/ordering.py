"""Deterministic ordering of selected records."""

from typing import Iterable, List, Tuple

from .record import SNP

__all__ = ["sort_key", "sort_records"]


def sort_key(snp: SNP) -> Tuple[str, int]:
    return (snp.scaffold, snp.pos)


def sort_records(records: Iterable[SNP]) -> List[SNP]:
    """Return records sorted by scaffold name, then position.

    The order does not depend on how the records were selected, so output
    files from different runs can be diffed directly.
    """
    return sorted(records, key=sort_key)
