"""
UPB protocol constants.

Control word layout (big-endian, 16 bits):

    bit 15      LNK    link (1) or direct (0) packet
    bits 14-13  REPRQ  repeater request
    bits 12-8   LEN    total packet length in bytes
    bit 7       RSV    reserved
    bit 6       ACKMSG acknowledge with a message
    bit 5       ACKID  acknowledge with an ID pulse
    bit 4       ACKPLS acknowledge with a pulse
    bits 3-2    CNT    transmit count
    bits 1-0    SEQ    transmit sequence

Also holds the PIM (Powerline Interface Module) command bytes and the
two-letter response types it emits in message mode.
"""

from __future__ import annotations

from enum import Enum, IntEnum, IntFlag
from typing import Final


class ControlWordMask:
    """Bit masks for the fields of the 16-bit control word."""

    LINK: Final[int] = 0x8000
    REPEATER_REQUEST: Final[int] = 0x6000
    LENGTH: Final[int] = 0x1F00
    RESERVED: Final[int] = 0x0080
    ACK_REQUEST: Final[int] = 0x0070
    ACK_MESSAGE: Final[int] = 0x0040
    ACK_ID: Final[int] = 0x0020
    ACK_PULSE: Final[int] = 0x0010
    TRANSMIT_COUNT: Final[int] = 0x000C
    TRANSMIT_SEQUENCE: Final[int] = 0x0003


class Link(IntEnum):
    """Packet addressing mode (LNK bit)."""

    DIRECT = 0
    """Destination is a single device (unit id)."""

    LINK = 1
    """Destination is a scene (link id)."""


class RepeaterRequest(IntEnum):
    """Repeater request field (REPRQ bits)."""

    NONE = 0
    ONE = 1
    TWO = 2
    HALT = 3


class AckFlag(IntFlag):
    """
    Acknowledgment request flags (ACKRQ bits).

    The flags sit in their control word positions, so a combination can be
    OR-ed straight into the low byte.
    """

    NONE = 0
    PULSE = 0x10
    ID = 0x20
    MESSAGE = 0x40


ALL_ACK_FLAGS: Final[int] = int(AckFlag.PULSE | AckFlag.ID | AckFlag.MESSAGE)
"""Every legal ack flag bit."""


class ProtocolConstants:
    """
    UPB packet constants.

    Contains packet size limits and field ranges used by the packet codec.
    """

    # ===== Packet Layout =====

    HEADER_LENGTH: Final[int] = 6
    """Control word (2) + network id + destination id + source id + MDID."""

    CHECKSUM_LENGTH: Final[int] = 1
    """Trailing checksum byte."""

    MIN_PACKET_LENGTH: Final[int] = 6
    """Shortest buffer the decoder will accept."""

    MAX_PACKET_LENGTH: Final[int] = 24
    """Longest packet allowed on the wire."""

    MAX_MESSAGE_ARGUMENTS: Final[int] = MAX_PACKET_LENGTH - HEADER_LENGTH - CHECKSUM_LENGTH
    """Most argument bytes a packet can carry (17)."""

    # ===== Field Ranges =====

    MAX_TWO_BIT_FIELD: Final[int] = 3
    """Upper bound for REPRQ, CNT and SEQ."""

    MIN_SOURCE_ID: Final[int] = 1
    """Lowest unit id a reporting device may use."""

    MAX_SOURCE_ID: Final[int] = 250
    """Highest unit id a reporting device may use."""

    BROADCAST_ID: Final[int] = 0
    """Destination id addressing every device on the network."""

    PIM_SOURCE_ID: Final[int] = 0xFF
    """Source id conventionally used by the interface module."""


# ===== PIM (Powerline Interface Module) =====


class PimCommand(IntEnum):
    """Leading byte of a message sent to the PIM."""

    READ_REGISTER = 0x12
    """Read one or more PIM registers (answered with PR)."""

    TRANSMIT_MESSAGE = 0x14
    """Transmit a UPB packet onto the powerline."""

    WRITE_REGISTER = 0x17
    """Write one or more PIM registers (answered with PA)."""


class PimResponseType(str, Enum):
    """Two-letter message types reported by the PIM."""

    ACCEPT = "PA"
    """Message accepted for processing."""

    BUSY = "PB"
    """PIM busy, message should be resent."""

    ERROR = "PE"
    """Message rejected."""

    ACK = "PK"
    """Transmission acknowledged by the target device."""

    NAK = "PN"
    """Transmission not acknowledged."""

    REGISTER_REPORT = "PR"
    """Register values, answer to a read register command."""

    UPB_MESSAGE = "PU"
    """A UPB packet received from the powerline."""


class PimConstants:
    """PIM framing constants."""

    EOM: Final[int] = 0x0D
    """End of message (Carriage Return)."""

    MIN_REGISTER_COUNT: Final[int] = 1
    MAX_REGISTER_COUNT: Final[int] = 16

    MODE_REGISTER: Final[int] = 0x70
    """PIM options register."""

    MESSAGE_MODE: Final[int] = 0x02
    """Options value that switches the PIM into message mode."""


HEX_PAYLOAD_RESPONSES: Final[frozenset[PimResponseType]] = frozenset({
    PimResponseType.REGISTER_REPORT,
    PimResponseType.UPB_MESSAGE,
})
"""Response types whose payload is ASCII hex."""
