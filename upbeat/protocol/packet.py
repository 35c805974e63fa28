"""
UPB packet building and parsing.

Packet layout:

    byte 0-1    control word (big-endian)
    byte 2      network id
    byte 3      destination id (unit id, or link id for link packets)
    byte 4      source id
    byte 5      message data id (MDID)
    byte 6..    message arguments (0-17 bytes)
    last byte   checksum

The total length is 6 to 24 bytes and every byte, checksum included, sums
to zero modulo 256.

Example:
    >>> from upbeat.protocol import (
    ...     Link, MessageDataId, build_packet, encode_control_word, parse_packet,
    ... )
    >>> cw = encode_control_word(Link.DIRECT, transmit_count=1)
    >>> raw = build_packet(cw, 0x01, 0x02, 0xFF, MessageDataId.GOTO, b"\\x64")
    >>> packet = parse_packet(raw)
    >>> packet.message_name, packet.message_arguments
    ('UPB_GOTO', b'd')
"""

from __future__ import annotations

from dataclasses import dataclass, field

from upbeat.exceptions import ChecksumError, FormatError, LengthError, RangeError
from upbeat.protocol.catalog import (
    MessageSet,
    message_data_name,
    message_set_name,
)
from upbeat.protocol.checksums import byte_sum, calculate_checksum
from upbeat.protocol.constants import (
    AckFlag,
    ControlWordMask,
    ProtocolConstants,
    RepeaterRequest,
)
from upbeat.protocol.control_word import (
    ControlWord,
    decode_control_word,
    encode_control_word,
)
from upbeat.protocol.register_report import RegisterReport, decode_register_report


@dataclass(frozen=True)
class Packet:
    """
    Decomposed view of a received UPB packet.

    Attributes:
        control_word: Raw 16-bit control word.
        network_id: Network id (0-255).
        destination_id: Destination unit or link id (0-255).
        source_id: Source unit id (0-255).
        message_data_id: Full MDID byte (0-255).
        message_arguments: Bytes between the MDID and the checksum.
        checksum: Trailing checksum byte.
        raw: Packet bytes as they appeared on the wire.
    """

    control_word: int
    network_id: int
    destination_id: int
    source_id: int
    message_data_id: int
    message_arguments: bytes
    checksum: int
    raw: bytes = field(default=b"", repr=False, compare=False)

    @property
    def message_set_id(self) -> int:
        """Top 3 bits of the MDID."""
        return (self.message_data_id >> 5) & 0x07

    @property
    def message_id(self) -> int:
        """Low 5 bits of the MDID."""
        return self.message_data_id & 0x1F

    @property
    def message_set(self) -> MessageSet:
        return MessageSet(self.message_set_id)

    @property
    def control(self) -> ControlWord:
        """Decoded control word."""
        return decode_control_word(self.control_word)

    @property
    def message_set_name(self) -> str:
        return message_set_name(self.message_set_id)

    @property
    def message_name(self) -> str:
        return message_data_name(self.message_data_id)

    def register_report(self) -> RegisterReport:
        """
        Decode the message arguments as a register report.

        Raises:
            FormatError: If the packet carries no arguments.
        """
        return decode_register_report(self.message_arguments)

    def __repr__(self) -> str:
        return (
            f"Packet({self.message_name}, net={self.network_id}, "
            f"dst={self.destination_id}, src={self.source_id}, "
            f"args={self.message_arguments.hex().upper() or '-'})"
        )


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise RangeError(f"{name} must be 0-255, got {value}", field=name, value=value)


def build_packet(
    control_word: int,
    network_id: int,
    destination_id: int,
    source_id: int,
    message_data_id: int,
    message_arguments: bytes | bytearray | None = None,
) -> bytes:
    """
    Compose a complete UPB packet.

    The LEN field of the control word is overwritten with the actual packet
    length; every other control word bit is kept as supplied.

    Args:
        control_word: 16-bit control word, typically from encode_control_word.
        network_id: Network id (0-255).
        destination_id: Destination unit or link id (0-255).
        source_id: Source unit id (0-255).
        message_data_id: MDID byte (0-255).
        message_arguments: Optional argument bytes.

    Returns:
        Packet bytes including the checksum.

    Raises:
        LengthError: If the packet would exceed 24 bytes.
        RangeError: If a header value does not fit its field.
    """
    args = bytes(message_arguments) if message_arguments else b""

    total_length = (
        ProtocolConstants.HEADER_LENGTH + len(args) + ProtocolConstants.CHECKSUM_LENGTH
    )
    if total_length > ProtocolConstants.MAX_PACKET_LENGTH:
        raise LengthError(
            f"Total packet length {total_length} exceeds maximum "
            f"{ProtocolConstants.MAX_PACKET_LENGTH} bytes",
            length=total_length,
            maximum=ProtocolConstants.MAX_PACKET_LENGTH,
        )

    if not 0 <= control_word <= 0xFFFF:
        raise RangeError(
            f"control_word must be 0-65535, got {control_word}",
            field="control_word",
            value=control_word,
        )
    _check_byte("network_id", network_id)
    _check_byte("destination_id", destination_id)
    _check_byte("source_id", source_id)
    _check_byte("message_data_id", message_data_id)

    word = (int(control_word) & ~ControlWordMask.LENGTH) | ((total_length & 0x1F) << 8)

    data = bytearray([
        (word >> 8) & 0xFF,
        word & 0xFF,
        network_id,
        destination_id,
        source_id,
        message_data_id,
    ])
    data += args
    data.append(calculate_checksum(data))
    return bytes(data)


def parse_packet(data: bytes | bytearray | memoryview) -> Packet:
    """
    Decompose and validate a received UPB packet.

    The LEN field is not compared against the actual data length; the
    checksum already guarantees integrity.

    Args:
        data: Raw packet bytes including the checksum.

    Returns:
        Decoded Packet.

    Raises:
        FormatError: If the data is shorter than 6 bytes.
        ChecksumError: If the byte sum is not zero.
    """
    raw = bytes(data)
    if len(raw) < ProtocolConstants.MIN_PACKET_LENGTH:
        raise FormatError(
            f"Invalid UPB packet: length {len(raw)} < "
            f"{ProtocolConstants.MIN_PACKET_LENGTH} bytes"
        )

    residual = byte_sum(raw)
    if residual != 0:
        raise ChecksumError(
            f"Invalid UPB packet: checksum residual 0x{residual:02X}",
            expected=calculate_checksum(raw[:-1]),
            received=raw[-1],
        )

    return Packet(
        control_word=(raw[0] << 8) | raw[1],
        network_id=raw[2],
        destination_id=raw[3],
        source_id=raw[4],
        message_data_id=raw[5],
        message_arguments=raw[6:-1],
        checksum=raw[-1],
        raw=raw,
    )


def build_report_packet(
    *,
    link: int,
    network_id: int,
    destination_id: int,
    source_id: int,
    message_data_id: int,
    arguments: bytes | bytearray | None = None,
) -> bytes:
    """
    Build a report packet sent on behalf of a device.

    Reports are sent once with no repeaters and no acknowledgment request.

    Args:
        link: Link.DIRECT or Link.LINK.
        network_id: Network id (0-255).
        destination_id: Destination unit or link id.
        source_id: Reporting device's unit id (1-250).
        message_data_id: Report MDID.
        arguments: Optional report arguments.

    Returns:
        Packet bytes including the checksum.

    Raises:
        RangeError: If the source id is outside 1-250 or a field is invalid.
        LengthError: If the packet would exceed 24 bytes.
    """
    if not ProtocolConstants.MIN_SOURCE_ID <= source_id <= ProtocolConstants.MAX_SOURCE_ID:
        raise RangeError(
            f"source_id must be {ProtocolConstants.MIN_SOURCE_ID}-"
            f"{ProtocolConstants.MAX_SOURCE_ID}, got {source_id}",
            field="source_id",
            value=source_id,
        )
    control_word = encode_control_word(
        link,
        repeater_request=RepeaterRequest.NONE,
        ack_flags=AckFlag.NONE,
        transmit_count=0,
        transmit_sequence=0,
    )
    return build_packet(
        control_word,
        network_id,
        destination_id,
        source_id,
        message_data_id,
        arguments,
    )


