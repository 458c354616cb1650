"""Input/Output modules for file operations."""

from .snp_reader import INPUT_FORMATS, SNPReader, decode_lines
from .snp_writer import OUTPUT_FORMATS, SNPWriter, format_snp
from .summary_writer import SummaryWriter, ScaffoldStatistics

__all__ = [
    "INPUT_FORMATS",
    "SNPReader",
    "decode_lines",
    "OUTPUT_FORMATS",
    "SNPWriter",
    "format_snp",
    "SummaryWriter",
    "ScaffoldStatistics",
]
