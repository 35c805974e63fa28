"""
Protocol layer for UPB communication.

This module contains the wire-level handling:
- Control word layout, limits and PIM constants
- Checksum calculation and validation
- Control word encoding/decoding
- Packet building and parsing
- Register report decoding
- Message set / message data name catalog
- PIM message framing
"""

from upbeat.protocol.catalog import (
    UNKNOWN_MDID,
    UNKNOWN_MSID,
    MessageDataId,
    MessageSet,
    message_data_name,
    message_set_name,
)
from upbeat.protocol.checksums import (
    append_checksum,
    byte_sum,
    calculate_checksum,
    validate_checksum,
)
from upbeat.protocol.constants import (
    AckFlag,
    Link,
    PimCommand,
    PimConstants,
    PimResponseType,
    ProtocolConstants,
    RepeaterRequest,
)
from upbeat.protocol.control_word import ControlWord, decode_control_word, encode_control_word
from upbeat.protocol.encoding import bytes_to_hex, decode_byte, encode_byte, hex_to_bytes
from upbeat.protocol.packet import Packet, build_packet, build_report_packet, parse_packet
from upbeat.protocol.pim import (
    DEFAULT_PIM_READER,
    PimMessage,
    PimMessageReader,
    PimParseError,
    PimParseResult,
    encode_message_mode,
    encode_read_register,
    encode_transmit_message,
    encode_write_register,
    parse_pim_message,
)
from upbeat.protocol.register_report import RegisterReport, decode_register_report

__all__ = [
    # Constants
    "AckFlag",
    "Link",
    "RepeaterRequest",
    "ProtocolConstants",
    "PimCommand",
    "PimConstants",
    "PimResponseType",
    # Checksums
    "byte_sum",
    "calculate_checksum",
    "validate_checksum",
    "append_checksum",
    # Encoding
    "encode_byte",
    "decode_byte",
    "hex_to_bytes",
    "bytes_to_hex",
    # Control Word
    "ControlWord",
    "encode_control_word",
    "decode_control_word",
    # Packets
    "Packet",
    "build_packet",
    "build_report_packet",
    "parse_packet",
    # Register Reports
    "RegisterReport",
    "decode_register_report",
    # Catalog
    "MessageSet",
    "MessageDataId",
    "message_set_name",
    "message_data_name",
    "UNKNOWN_MSID",
    "UNKNOWN_MDID",
    # PIM Framing
    "PimMessageReader",
    "PimMessage",
    "PimParseError",
    "PimParseResult",
    "DEFAULT_PIM_READER",
    "parse_pim_message",
    "encode_transmit_message",
    "encode_read_register",
    "encode_write_register",
    "encode_message_mode",
]
