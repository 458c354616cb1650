"""SNP record model and row decoding."""

import math
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from ..errors import MalformedRecord

__all__ = ["SNP", "POS_MIN", "POS_MAX"]

# Positions are held in int64 arrays during sampling
POS_MIN = -(2**63)
POS_MAX = 2**63 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _parse_int(value: str) -> int:
    """Parse a plain ASCII decimal integer with an optional sign."""
    if not _INT_RE.fullmatch(value):
        raise ValueError(f"invalid integer {value!r}")
    return int(value)


def _parse_allele(value: str) -> str:
    """Validate an allele code (0..255) and return it unchanged."""
    code = _parse_int(value)
    if not 0 <= code <= 255:
        raise ValueError(f"allele code {code} out of range")
    return value


def _parse_probability(value: str) -> str:
    """Validate a finite plain decimal number and return it unchanged."""
    if not _FLOAT_RE.fullmatch(value) or not math.isfinite(float(value)):
        raise ValueError(f"invalid probability {value!r}")
    return value


def _decode_position(value: str, line_number: Optional[int], raw: str) -> int:
    try:
        pos = _parse_int(value)
    except ValueError:
        raise MalformedRecord(
            f"Non-numeric position '{value}'", line_number, raw
        ) from None
    if not POS_MIN <= pos <= POS_MAX:
        raise MalformedRecord(f"Position out of range '{value}'", line_number, raw)
    return pos


@dataclass(frozen=True)
class SNP:
    """A single variant site.

    Only ``scaffold`` and ``pos`` are used for spacing decisions. The remaining
    fields are carried through selection untouched so the record can be
    written back in the format it was read from.

    Attributes:
        scaffold: Contig or chromosome identifier
        pos: Coordinate on the scaffold
        name: Original beagle marker name, empty for simple input
        a_ref: Reference allele code as written in the input
        a_alt: Alternate allele code as written in the input
        probabilities: Per-sample probability strings, verbatim

    Example:
        >>> snp = SNP.from_simple_row("chr1\\t100")
        >>> print(f"{snp.scaffold}:{snp.pos}")
        chr1:100
    """

    scaffold: str
    pos: int
    name: str = ""
    a_ref: str = ""
    a_alt: str = ""
    probabilities: Tuple[str, ...] = ()

    @property
    def has_payload(self) -> bool:
        """True when the record was decoded from beagle input."""
        return bool(self.name)

    @classmethod
    def from_beagle_row(cls, line: str, line_number: Optional[int] = None) -> "SNP":
        """Decode one beagle-like line.

        The first column is a marker name of the form
        ``<x>_<y>_<scaffold>_<pos>[_...]``, followed by the reference and
        alternate allele codes and one or more probability columns.

        Args:
            line: Raw input line (a trailing newline is ignored)
            line_number: 1-based line number used in error messages

        Returns:
            Decoded SNP record

        Raises:
            MalformedRecord: If a required field is missing or unparsable
        """
        raw = line.rstrip("\r\n")
        fields = raw.split("\t")

        name = fields[0]
        if not name:
            raise MalformedRecord("No name found", line_number, raw)
        tokens = name.split("_")
        if len(tokens) < 4:
            raise MalformedRecord(
                "Marker name lacks scaffold and position tokens", line_number, raw
            )
        scaffold = tokens[2]
        pos = _decode_position(tokens[3], line_number, raw)

        if len(fields) < 3:
            raise MalformedRecord("Missing allele fields", line_number, raw)
        try:
            a_ref = _parse_allele(fields[1])
            a_alt = _parse_allele(fields[2])
        except ValueError:
            raise MalformedRecord(
                f"Invalid allele codes '{fields[1]}'/'{fields[2]}'", line_number, raw
            ) from None

        probabilities = tuple(fields[3:])
        if not probabilities:
            raise MalformedRecord("No probability fields", line_number, raw)
        for value in probabilities:
            try:
                _parse_probability(value)
            except ValueError:
                raise MalformedRecord(
                    f"Non-numeric probability '{value}'", line_number, raw
                ) from None

        return cls(
            scaffold=scaffold,
            pos=pos,
            name=name,
            a_ref=a_ref,
            a_alt=a_alt,
            probabilities=probabilities,
        )

    @classmethod
    def from_simple_row(cls, line: str, line_number: Optional[int] = None) -> "SNP":
        """Decode one ``scaffold<TAB>pos`` line.

        Raises:
            MalformedRecord: If the line does not hold exactly two columns,
                the scaffold is empty or the position is not an int64 integer
        """
        raw = line.rstrip("\r\n")
        fields = raw.split("\t")
        if len(fields) < 2:
            raise MalformedRecord("No position found", line_number, raw)
        if len(fields) > 2:
            raise MalformedRecord(
                f"Expected 2 columns, found {len(fields)}", line_number, raw
            )
        scaffold, pos_field = fields
        if not scaffold:
            raise MalformedRecord("No scaffold found", line_number, raw)
        pos = _decode_position(pos_field, line_number, raw)
        return cls(scaffold=scaffold, pos=pos)
