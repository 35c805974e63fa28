"""
Exception hierarchy for upbeat.

All exceptions inherit from UPBeatError. Wire-level failures (bad field
values, oversized packets, malformed or corrupted packets) derive from
ProtocolError, and the value-shaped ones also derive from ValueError so
callers validating user input can catch them generically.

ParseError is the row-level failure raised while reading a UPE export.
The configuration parser normally downgrades it to a skipped row.
"""

from __future__ import annotations


class UPBeatError(Exception):
    """
    Base exception for all upbeat errors.

    All library-specific exceptions inherit from this class, allowing
    callers to catch all upbeat errors with a single except clause.
    """

    pass


class ProtocolError(UPBeatError):
    """
    Protocol-level error.

    Raised when encoding or decoding UPB packets, register reports or PIM
    messages violates the wire format.
    """

    pass


class RangeError(ProtocolError, ValueError):
    """
    A caller-supplied field value is outside its legal domain.

    Raised for control word sub-fields, ack flag combinations, header bytes
    and PIM register arguments.
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: object = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


class LengthError(ProtocolError, ValueError):
    """
    A composed packet would exceed the wire limit.

    The caller must shrink the message arguments.
    """

    def __init__(
        self,
        message: str,
        *,
        length: int | None = None,
        maximum: int | None = None,
    ) -> None:
        super().__init__(message)
        self.length = length
        self.maximum = maximum


class FormatError(ProtocolError, ValueError):
    """
    Malformed input to a decoder.

    Raised for packets shorter than the header, empty register reports,
    and PIM messages that cannot be decoded.
    """

    pass


class ChecksumError(FormatError):
    """
    Checksum validation failure.

    Raised when the byte sum of a received packet is not zero. The packet
    must be discarded, never partially trusted.
    """

    def __init__(
        self,
        message: str = "Checksum validation failed",
        *,
        expected: int | None = None,
        received: int | None = None,
    ) -> None:
        super().__init__(message)
        self.expected = expected
        self.received = received

    def __str__(self) -> str:
        base = super().__str__()
        if self.expected is not None and self.received is not None:
            return f"{base} (expected 0x{self.expected:02X}, got 0x{self.received:02X})"
        return base


class ParseError(FormatError):
    """
    UPE record parsing error.

    Raised when a configuration row cannot be turned into a record, typically
    due to:
    - Too few fields for the record type
    - A non-integer value in an integer column
    - A child record with no module to attach to
    """

    def __init__(
        self,
        message: str,
        *,
        record_type: str | None = None,
        row_number: int | None = None,
        column: int | None = None,
        raw_data: str | None = None,
    ) -> None:
        super().__init__(message)
        self.record_type = record_type
        self.row_number = row_number
        self.column = column
        self.raw_data = raw_data

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.record_type:
            parts.append(f"record_type={self.record_type}")
        if self.row_number is not None:
            parts.append(f"row={self.row_number}")
        if self.column is not None:
            parts.append(f"column={self.column}")
        if self.raw_data:
            display_data = self.raw_data[:40] + "..." if len(self.raw_data) > 40 else self.raw_data
            parts.append(f"data={display_data}")
        return " ".join(parts) if len(parts) > 1 else parts[0]


class TransportError(UPBeatError):
    """
    Transport-level error.

    Raised by byte-sink implementations when the link is not open or an
    I/O operation fails.
    """

    pass


class TimeoutError(UPBeatError):  # noqa: A001 - intentionally shadows builtin
    """
    Communication timeout.

    Raised when a transport read does not complete in time.
    """

    def __init__(
        self,
        message: str = "Communication timeout",
        *,
        timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(message)
        self.timeout_seconds = timeout_seconds

    def __str__(self) -> str:
        base = super().__str__()
        if self.timeout_seconds is not None:
            return f"{base} (after {self.timeout_seconds:.1f}s)"
        return base
