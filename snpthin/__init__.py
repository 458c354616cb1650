"""snpthin - spacing-constrained random sampling of SNPs.

Thins dense variant call sets by randomly selecting SNPs such that no two
selected SNPs on the same scaffold lie closer than a minimum distance.
"""

from .app import SnpThinApp, SnpThinConfig
from .core import SNP, SpacingSampler, SamplingResult, sort_records
from .errors import InputUnavailable, MalformedRecord, OutputUnavailable, SnpThinError
from .version import __version__

__all__ = [
    "__version__",
    "SnpThinApp",
    "SnpThinConfig",
    "SNP",
    "SpacingSampler",
    "SamplingResult",
    "sort_records",
    "SnpThinError",
    "InputUnavailable",
    "MalformedRecord",
    "OutputUnavailable",
]
