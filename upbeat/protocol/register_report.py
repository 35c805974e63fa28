"""
Register report payload decoding.

A register report (UPB_REGISTER_VALUES, or a PIM "PR" message) carries the
address of the first register followed by the values of consecutive
registers:

    byte 0      start register
    byte 1..N   register values, in order (may be empty)
"""

from __future__ import annotations

from dataclasses import dataclass

from upbeat.exceptions import FormatError


@dataclass(frozen=True)
class RegisterReport:
    """
    Decoded register report.

    Attributes:
        start_register: Address of the first reported register (0-255).
        values: Values of registers start_register, start_register + 1, ...
    """

    start_register: int
    values: bytes

    def __len__(self) -> int:
        return len(self.values)

    def as_dict(self) -> dict[int, int]:
        """Map each register address to its value."""
        return {self.start_register + i: v for i, v in enumerate(self.values)}


def decode_register_report(payload: bytes | bytearray | memoryview) -> RegisterReport:
    """
    Decode a register report payload.

    Args:
        payload: Report payload (the message arguments of the packet).

    Returns:
        Decoded RegisterReport.

    Raises:
        FormatError: If the payload is empty.

    Example:
        >>> decode_register_report(b"\\x10\\x01\\x02")
        RegisterReport(start_register=16, values=b'\\x01\\x02')
    """
    if not payload:
        raise FormatError("Register report payload is empty")
    data = bytes(payload)
    return RegisterReport(start_register=data[0], values=data[1:])
