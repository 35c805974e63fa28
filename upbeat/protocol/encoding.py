"""
ASCII hex helpers for PIM framing.

In message mode the PIM exchanges UPB packets and register values as
ASCII hex text: each byte travels as two uppercase hexadecimal characters.

For example:
- Byte 0x8F is sent as "8F"
- Packet 08 04 01 02 FF 20 D2 is sent as "08040102FF20D2"

Received text may use either case.
"""

from __future__ import annotations

from typing import Final

_HEX_CHARS: Final[bytes] = b"0123456789ABCDEF"
_HEX_DIGITS: Final[frozenset[int]] = frozenset(b"0123456789ABCDEFabcdef")


def encode_byte(value: int) -> bytes:
    """
    Encode a byte value as 2 uppercase ASCII hex characters.

    Args:
        value: Byte value (0-255).

    Returns:
        2-byte ASCII hex representation.

    Raises:
        ValueError: If value is not in range 0-255.

    Example:
        >>> encode_byte(0x8F)
        b'8F'
    """
    if not 0 <= value <= 255:
        raise ValueError(f"Byte value must be 0-255, got {value}")
    return bytes([_HEX_CHARS[value >> 4], _HEX_CHARS[value & 0x0F]])


def decode_byte(hex_chars: bytes | str) -> int:
    """
    Decode 2 ASCII hex characters to a byte value.

    Args:
        hex_chars: 2 ASCII hex characters (case-insensitive).

    Returns:
        Decoded byte value (0-255).

    Raises:
        ValueError: If input is not valid 2-character hex.

    Example:
        >>> decode_byte(b'8F')
        143
    """
    if len(hex_chars) != 2:
        raise ValueError(f"Expected 2 hex characters, got {len(hex_chars)}")
    if isinstance(hex_chars, str):
        hex_chars = hex_chars.encode("ascii", errors="replace")
    if not is_hex(hex_chars):
        raise ValueError(f"Invalid hex characters: {hex_chars!r}")
    return int(hex_chars, 16)


def is_hex(data: bytes | bytearray | memoryview) -> bool:
    """Check that every byte is an ASCII hex digit (empty input is hex)."""
    return all(b in _HEX_DIGITS for b in bytes(data))


def hex_to_bytes(hex_string: str | bytes | bytearray | memoryview) -> bytes:
    """
    Convert ASCII hex text to bytes.

    Args:
        hex_string: Hexadecimal text (even length, no separators).

    Returns:
        Decoded bytes.

    Raises:
        ValueError: If the text is not valid hex or has odd length.

    Example:
        >>> hex_to_bytes("8F1234")
        b'\\x8f\\x124'
    """
    if not isinstance(hex_string, str):
        raw = bytes(hex_string)
        if not is_hex(raw):
            raise ValueError(f"Invalid hex data: {raw!r}")
        hex_string = raw.decode("ascii")
    if len(hex_string) % 2:
        raise ValueError(f"Hex data must have even length, got {len(hex_string)}")
    return bytes.fromhex(hex_string)


def bytes_to_hex(data: bytes | bytearray | memoryview) -> str:
    """
    Convert bytes to an uppercase hex string.

    Example:
        >>> bytes_to_hex(b'\\x8f\\x124')
        '8F1234'
    """
    return bytes(data).hex().upper()


def encode_hex(data: bytes | bytearray | memoryview) -> bytes:
    """
    Convert bytes to uppercase ASCII hex, ready for the wire.

    Example:
        >>> encode_hex(b'\\x70\\x02')
        b'7002'
    """
    return bytes_to_hex(data).encode("ascii")
