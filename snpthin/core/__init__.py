"""Core selection logic for snpthin."""

from .record import SNP
from .compatibility import incompatible, is_blocked, AcceptedSet
from .sampler import DEFAULT_THRESHOLD, compute_quota, SamplingResult, SpacingSampler
from .ordering import sort_key, sort_records

__all__ = [
    "SNP",
    "incompatible",
    "is_blocked",
    "AcceptedSet",
    "DEFAULT_THRESHOLD",
    "compute_quota",
    "SamplingResult",
    "SpacingSampler",
    "sort_key",
    "sort_records",
]
