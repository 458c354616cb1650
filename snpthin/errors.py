"""Exception types raised by snpthin."""

from typing import Optional

__all__ = [
    "SnpThinError",
    "InputUnavailable",
    "MalformedRecord",
    "OutputUnavailable",
]


class SnpThinError(Exception):
    """Base class for fatal snpthin errors."""

    pass


class InputUnavailable(SnpThinError):
    """Exception raised when the input file cannot be opened or read."""

    pass


class OutputUnavailable(SnpThinError):
    """Exception raised when the output file cannot be created."""

    pass


class MalformedRecord(SnpThinError):
    """Exception raised when an input line cannot be decoded into a SNP.

    Attributes:
        reason: Short description of what is wrong with the line
        line_number: 1-based line number in the input file, if known
        line: Raw line content without the trailing newline
    """

    def __init__(
        self, reason: str, line_number: Optional[int] = None, line: str = ""
    ):
        self.reason = reason
        self.line_number = line_number
        self.line = line
        where = f"Line {line_number}: " if line_number is not None else ""
        super().__init__(f"{where}{reason} in {line!r}")

    def __reduce__(self):
        # Keep attributes when the error crosses a process pool boundary
        return (self.__class__, (self.reason, self.line_number, self.line))
