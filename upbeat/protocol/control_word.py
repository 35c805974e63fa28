"""
UPB control word encoding and decoding.

The control word is the first two bytes of every UPB packet. Decoding is a
pure bit extraction and never fails. Encoding validates each sub-field and
always leaves the length field at zero: the packet length is only known
once the message arguments are attached, so build_packet fills it in.
"""

from __future__ import annotations

from dataclasses import dataclass

from upbeat.exceptions import RangeError
from upbeat.protocol.constants import (
    ALL_ACK_FLAGS,
    AckFlag,
    ControlWordMask,
    Link,
    ProtocolConstants,
    RepeaterRequest,
)


@dataclass(frozen=True)
class ControlWord:
    """
    Decomposed view of a 16-bit control word.

    Attributes:
        link: Direct or link (scene) addressing.
        repeater_request: Number of repeater hops requested.
        length: Total packet length in bytes (LEN field).
        reserved: Reserved bit, preserved as received.
        ack_message: Acknowledge with a message.
        ack_id: Acknowledge with an ID pulse.
        ack_pulse: Acknowledge with a pulse.
        transmit_count: Number of times the packet is transmitted.
        transmit_sequence: Which transmission this is.
    """

    link: Link
    repeater_request: RepeaterRequest
    length: int
    reserved: int
    ack_message: bool
    ack_id: bool
    ack_pulse: bool
    transmit_count: int
    transmit_sequence: int

    @property
    def ack_flags(self) -> AckFlag:
        """Acknowledgment requests as a flag combination."""
        flags = AckFlag.NONE
        if self.ack_message:
            flags |= AckFlag.MESSAGE
        if self.ack_id:
            flags |= AckFlag.ID
        if self.ack_pulse:
            flags |= AckFlag.PULSE
        return flags

    @property
    def is_link(self) -> bool:
        """Check if the packet addresses a scene rather than a device."""
        return self.link == Link.LINK

    def encode(self) -> int:
        """
        Pack every field, including length and reserved, into 16 bits.

        Returns:
            The control word value (0-65535).
        """
        return (
            (int(self.link) << 15)
            | (int(self.repeater_request) << 13)
            | ((self.length & 0x1F) << 8)
            | ((self.reserved & 0x01) << 7)
            | int(self.ack_flags)
            | ((self.transmit_count & 0x03) << 2)
            | (self.transmit_sequence & 0x03)
        )

    def __repr__(self) -> str:
        return (
            f"ControlWord({self.link.name}, reprq={self.repeater_request.name}, "
            f"len={self.length}, ack={self.ack_flags!r}, "
            f"cnt={self.transmit_count}, seq={self.transmit_sequence})"
        )


def decode_control_word(word: int) -> ControlWord:
    """
    Split a 16-bit control word into its fields.

    No validation is performed; every 16-bit value decodes.

    Args:
        word: Control word value. Bits above 15 are ignored.

    Returns:
        Decoded ControlWord.

    Example:
        >>> cw = decode_control_word(0x8704)
        >>> cw.link, cw.length, cw.transmit_count
        (<Link.LINK: 1>, 7, 1)
    """
    word &= 0xFFFF
    return ControlWord(
        link=Link((word & ControlWordMask.LINK) >> 15),
        repeater_request=RepeaterRequest((word & ControlWordMask.REPEATER_REQUEST) >> 13),
        length=(word & ControlWordMask.LENGTH) >> 8,
        reserved=(word & ControlWordMask.RESERVED) >> 7,
        ack_message=bool(word & ControlWordMask.ACK_MESSAGE),
        ack_id=bool(word & ControlWordMask.ACK_ID),
        ack_pulse=bool(word & ControlWordMask.ACK_PULSE),
        transmit_count=(word & ControlWordMask.TRANSMIT_COUNT) >> 2,
        transmit_sequence=word & ControlWordMask.TRANSMIT_SEQUENCE,
    )


def _check_two_bit(name: str, value: int) -> None:
    if not 0 <= value <= ProtocolConstants.MAX_TWO_BIT_FIELD:
        raise RangeError(f"{name} must be 0-3, got {value}", field=name, value=value)


def encode_control_word(
    link: int,
    repeater_request: int = RepeaterRequest.NONE,
    ack_flags: int = AckFlag.NONE,
    transmit_count: int = 0,
    transmit_sequence: int = 0,
) -> int:
    """
    Encode control word fields into a 16-bit value with LEN set to 0.

    Args:
        link: 0 for direct, 1 for link packets.
        repeater_request: Repeater request (0-3).
        ack_flags: Bitwise OR of AckFlag.MESSAGE, AckFlag.ID, AckFlag.PULSE.
        transmit_count: Transmission count (0-3).
        transmit_sequence: Transmission sequence (0-3).

    Returns:
        Encoded control word with the length field zeroed.

    Raises:
        RangeError: If any field is outside its legal domain.

    Example:
        >>> hex(encode_control_word(Link.LINK, transmit_count=1))
        '0x8004'
    """
    if link not in (Link.DIRECT, Link.LINK):
        raise RangeError(f"link must be 0 or 1, got {link}", field="link", value=link)
    _check_two_bit("repeater_request", repeater_request)
    if int(ack_flags) < 0 or int(ack_flags) & ~ALL_ACK_FLAGS:
        raise RangeError(
            f"Invalid ack_flags {int(ack_flags)}, "
            "must be a combination of MESSAGE, ID and PULSE",
            field="ack_flags",
            value=ack_flags,
        )
    _check_two_bit("transmit_count", transmit_count)
    _check_two_bit("transmit_sequence", transmit_sequence)

    return (
        (int(link) << 15)
        | (int(repeater_request) << 13)
        | int(ack_flags)
        | (int(transmit_count) << 2)
        | int(transmit_sequence)
    )
