"""
PIM (Powerline Interface Module) message framing.

In message mode the PIM speaks a line-oriented ASCII protocol. Messages sent
to the PIM start with a raw command byte, carry ASCII hex, and end with a
carriage return:

1. **Transmit message**: [0x14][PACKET HEX][CR]
   - Asks the PIM to put a complete UPB packet on the powerline

2. **Read register**: [0x12][REG][COUNT][CS][CR]
   - REG, COUNT and CS are each 2 hex chars
   - Answered with a PR message

3. **Write register**: [0x17][REG][VALUES...][CS][CR]
   - Answered with PA

Messages from the PIM start with a two-letter type and end with CR:

- PA, PB, PE: accept / busy / error for the last command
- PK, PN: powerline ACK / NAK for the last transmission
- PR: register report, hex payload [REG][VALUES...]
- PU: UPB packet received from the powerline, hex payload

Responses are decoded as data only. Acting on busy or NAK replies (for
example by retrying) is left to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto

from upbeat.exceptions import ChecksumError, FormatError, LengthError, RangeError
from upbeat.protocol.checksums import append_checksum
from upbeat.protocol.constants import (
    HEX_PAYLOAD_RESPONSES,
    PimCommand,
    PimConstants,
    PimResponseType,
    ProtocolConstants,
)
from upbeat.protocol.encoding import bytes_to_hex, encode_hex, hex_to_bytes
from upbeat.protocol.packet import Packet, parse_packet
from upbeat.protocol.register_report import RegisterReport, decode_register_report

logger = logging.getLogger(__name__)


# ===== Outbound =====


def _frame(command: PimCommand, body: bytes) -> bytes:
    return bytes([command]) + encode_hex(body) + bytes([PimConstants.EOM])


def encode_transmit_message(packet: bytes | bytearray) -> bytes:
    """
    Wrap a UPB packet in a PIM transmit message.

    Args:
        packet: Complete packet from build_packet.

    Returns:
        Bytes to send to the PIM.

    Raises:
        FormatError: If the packet is shorter than 6 bytes.
        LengthError: If the packet is longer than 24 bytes.

    Example:
        >>> encode_transmit_message(bytes.fromhex("08040102FF20D2"))
        b'\\x1408040102FF20D2\\r'
    """
    if len(packet) < ProtocolConstants.MIN_PACKET_LENGTH:
        raise FormatError(f"Packet too short to transmit: {len(packet)} bytes")
    if len(packet) > ProtocolConstants.MAX_PACKET_LENGTH:
        raise LengthError(
            f"Packet length {len(packet)} exceeds maximum "
            f"{ProtocolConstants.MAX_PACKET_LENGTH} bytes",
            length=len(packet),
            maximum=ProtocolConstants.MAX_PACKET_LENGTH,
        )
    return _frame(PimCommand.TRANSMIT_MESSAGE, bytes(packet))


def _check_register(register: int) -> None:
    if not 0 <= register <= 0xFF:
        raise RangeError(
            f"register must be 0-255, got {register}", field="register", value=register
        )


def encode_read_register(register: int, count: int) -> bytes:
    """
    Build a PIM read register message.

    Args:
        register: First register to read (0-255).
        count: Number of registers to read (1-16).

    Returns:
        Bytes to send to the PIM.

    Raises:
        RangeError: If register or count is out of range.

    Example:
        >>> encode_read_register(0x70, 1)
        b'\\x1270018F\\r'
    """
    _check_register(register)
    if not PimConstants.MIN_REGISTER_COUNT <= count <= PimConstants.MAX_REGISTER_COUNT:
        raise RangeError(
            f"Invalid number of registers: {count} (must be 1-16)",
            field="count",
            value=count,
        )
    return _frame(PimCommand.READ_REGISTER, append_checksum(bytes([register, count])))


def encode_write_register(register: int, values: bytes | bytearray) -> bytes:
    """
    Build a PIM write register message.

    Args:
        register: First register to write (0-255).
        values: Values for consecutive registers (1-16 bytes).

    Returns:
        Bytes to send to the PIM.

    Raises:
        RangeError: If register or the number of values is out of range.
    """
    _check_register(register)
    if not PimConstants.MIN_REGISTER_COUNT <= len(values) <= PimConstants.MAX_REGISTER_COUNT:
        raise RangeError(
            f"Invalid number of values: {len(values)} (must be 1-16)",
            field="values",
            value=len(values),
        )
    return _frame(PimCommand.WRITE_REGISTER, append_checksum(bytes([register]) + bytes(values)))


def encode_message_mode() -> bytes:
    """
    Build the write register message that switches the PIM to message mode.

    Example:
        >>> encode_message_mode()
        b'\\x1770028E\\r'
    """
    return encode_write_register(PimConstants.MODE_REGISTER, bytes([PimConstants.MESSAGE_MODE]))


# ===== Inbound =====


class PimParseResult(Enum):
    """Result codes for PIM message parsing."""

    SUCCESS = auto()
    """Message was parsed and its payload decoded."""

    EMPTY_BUFFER = auto()
    """Buffer is empty, no data to parse."""

    INCOMPLETE = auto()
    """No carriage return yet, more bytes needed."""

    INVALID_FORMAT = auto()
    """Message is too short or its payload is not valid."""

    INVALID_CHECKSUM = auto()
    """Embedded UPB packet failed checksum validation."""

    UNKNOWN_TYPE = auto()
    """Two-letter message type is not recognized."""


@dataclass(frozen=True)
class PimMessage:
    """
    A message received from the PIM.

    Attributes:
        response_type: Two-letter message type.
        payload: Decoded payload (hex decoded for PR and PU, else raw).
        raw_message: Complete message bytes including the CR.
        bytes_consumed: Number of bytes consumed from the input buffer.
        packet: Decoded UPB packet for PU messages.
        register_report: Decoded register report for PR messages.
    """

    response_type: PimResponseType
    payload: bytes
    raw_message: bytes
    bytes_consumed: int
    packet: Packet | None = None
    register_report: RegisterReport | None = None

    @property
    def is_accept(self) -> bool:
        return self.response_type == PimResponseType.ACCEPT

    @property
    def is_busy(self) -> bool:
        return self.response_type == PimResponseType.BUSY

    @property
    def is_error(self) -> bool:
        return self.response_type == PimResponseType.ERROR

    @property
    def is_ack(self) -> bool:
        return self.response_type == PimResponseType.ACK

    @property
    def is_nak(self) -> bool:
        return self.response_type == PimResponseType.NAK

    def __repr__(self) -> str:
        if self.payload:
            return f"PimMessage({self.response_type.value}, payload={bytes_to_hex(self.payload)})"
        return f"PimMessage({self.response_type.value})"


@dataclass(frozen=True)
class PimParseError:
    """
    Details about a PIM message parsing failure.

    bytes_consumed tells a streaming caller how many bytes to drop before
    trying again; it is zero while the message is incomplete.
    """

    result: PimParseResult
    message: str
    bytes_consumed: int = 0
    partial_data: bytes = b""


class PimMessageReader:
    """
    PIM message parser.

    Parses one CR-terminated message from the front of a buffer. The reader
    is stateless and can be reused.

    Example:
        >>> reader = PimMessageReader()
        >>> result, message = reader.parse(b"PA\\r")
        >>> assert result == PimParseResult.SUCCESS
        >>> assert message.is_accept
    """

    def parse(
        self,
        buffer: bytes | bytearray | memoryview,
    ) -> tuple[PimParseResult, PimMessage | PimParseError]:
        """
        Parse a message from the input buffer.

        Args:
            buffer: Input buffer containing PIM data.

        Returns:
            Tuple of (result, message_or_error):
            - On success: (SUCCESS, PimMessage)
            - On failure: (error_code, PimParseError)
        """
        if not buffer:
            return PimParseResult.EMPTY_BUFFER, PimParseError(
                result=PimParseResult.EMPTY_BUFFER,
                message="Buffer is empty",
            )

        data = bytes(buffer)
        eom_pos = data.find(PimConstants.EOM)
        if eom_pos < 0:
            return PimParseResult.INCOMPLETE, PimParseError(
                result=PimParseResult.INCOMPLETE,
                message="CR terminator not found",
                partial_data=data,
            )

        consumed = eom_pos + 1
        body = data[:eom_pos]

        if len(body) < 2:
            return self._error(
                PimParseResult.INVALID_FORMAT,
                f"Message too short ({len(body)} bytes)",
                consumed,
                body,
            )

        type_text = body[:2].decode("ascii", errors="replace")
        try:
            response_type = PimResponseType(type_text)
        except ValueError:
            return self._error(
                PimParseResult.UNKNOWN_TYPE,
                f"Unknown message type: {type_text}",
                consumed,
                body,
            )

        payload = body[2:]
        if response_type in HEX_PAYLOAD_RESPONSES:
            try:
                payload = hex_to_bytes(payload)
            except ValueError as e:
                return self._error(
                    PimParseResult.INVALID_FORMAT,
                    f"Invalid {response_type.value} hex data: {e}",
                    consumed,
                    body,
                )

        packet = None
        register_report = None
        try:
            if response_type == PimResponseType.UPB_MESSAGE:
                packet = parse_packet(payload)
            elif response_type == PimResponseType.REGISTER_REPORT:
                register_report = decode_register_report(payload)
        except ChecksumError as e:
            return self._error(PimParseResult.INVALID_CHECKSUM, str(e), consumed, body)
        except FormatError as e:
            return self._error(PimParseResult.INVALID_FORMAT, str(e), consumed, body)

        message = PimMessage(
            response_type=response_type,
            payload=payload,
            raw_message=data[:consumed],
            bytes_consumed=consumed,
            packet=packet,
            register_report=register_report,
        )
        logger.debug("PIM message decoded: %r", message)
        return PimParseResult.SUCCESS, message

    @staticmethod
    def _error(
        result: PimParseResult,
        message: str,
        consumed: int,
        body: bytes,
    ) -> tuple[PimParseResult, PimParseError]:
        logger.debug("PIM message rejected (%s): %s", result.name, message)
        return result, PimParseError(
            result=result,
            message=message,
            bytes_consumed=consumed,
            partial_data=body,
        )


DEFAULT_PIM_READER: PimMessageReader = PimMessageReader()
"""Default PimMessageReader instance for convenience."""


def parse_pim_message(
    buffer: bytes | bytearray | memoryview,
) -> tuple[PimParseResult, PimMessage | PimParseError]:
    """
    Parse a PIM message using the default reader.

    Args:
        buffer: Input buffer containing PIM data.

    Returns:
        Tuple of (result, message_or_error).
    """
    return DEFAULT_PIM_READER.parse(buffer)
