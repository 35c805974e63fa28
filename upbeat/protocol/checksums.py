"""
8-bit two's-complement checksum calculation and validation.

UPB packets end with a checksum byte chosen so that the unsigned sum of
every byte in the packet, checksum included, is zero modulo 256:

- Sum all bytes as unsigned values
- Keep only the lower 8 bits
- Negate (two's complement) and truncate to 8 bits

The same checksum protects PIM register read/write messages.
"""

from __future__ import annotations


def byte_sum(data: bytes | bytearray | memoryview) -> int:
    """
    Calculate the unsigned 8-bit sum of the data.

    Args:
        data: Bytes to sum.

    Returns:
        Sum of all byte values modulo 256 (0-255).

    Example:
        >>> byte_sum(b"\\xff\\x02")
        1
    """
    return sum(data) & 0xFF


def calculate_checksum(data: bytes | bytearray | memoryview) -> int:
    """
    Calculate the UPB checksum over the specified data.

    Algorithm: two's-complement negation of the 8-bit byte sum.

    Args:
        data: Packet bytes, excluding the checksum byte.

    Returns:
        8-bit checksum value (0-255).

    Example:
        >>> hex(calculate_checksum(b"\\x08\\x04\\x01\\x02\\xff\\x20"))
        '0xd2'
    """
    return (256 - byte_sum(data)) & 0xFF


def validate_checksum(packet: bytes | bytearray | memoryview) -> bool:
    """
    Check that a packet with its trailing checksum sums to zero.

    Args:
        packet: Complete packet including the checksum byte.

    Returns:
        True if the byte sum is zero modulo 256, False otherwise.
    """
    return byte_sum(packet) == 0


def append_checksum(data: bytes | bytearray) -> bytes:
    """
    Calculate the checksum and append it as a single byte.

    Args:
        data: Data to checksum.

    Returns:
        Original data with the checksum byte appended.

    Example:
        >>> append_checksum(b"\\x70\\x02")
        b'p\\x02\\x8e'
    """
    return bytes(data) + bytes([calculate_checksum(data)])
