"""
upbeat - Python library for the Universal Powerline Bus (UPB).

This library provides a codec for UPB packets (control word, checksum,
register reports, message names), PIM message framing, and a parser that
turns a UPStart "UPE" configuration export into a structured document.

Example:
    >>> from upbeat import AckFlag, Link, build_packet, encode_control_word, parse_packet
    >>> cw = encode_control_word(Link.DIRECT, ack_flags=AckFlag.PULSE, transmit_count=1)
    >>> raw = build_packet(cw, network_id=1, destination_id=2, source_id=255,
    ...                    message_data_id=0x22, message_arguments=b"\\x64")
    >>> parse_packet(raw).message_name
    'UPB_GOTO'

    >>> from upbeat import parse_upe
    >>> document = parse_upe(export_bytes)
    >>> [module.device_name for module in document.modules]
"""

from upbeat.exceptions import (
    ChecksumError,
    FormatError,
    LengthError,
    ParseError,
    ProtocolError,
    RangeError,
    TimeoutError,
    TransportError,
    UPBeatError,
)
from upbeat.models.records import ConfigDocument, Module, RecordType
from upbeat.parsers.upe_parser import ConfigDocumentBuilder, SkippedRow, parse_upe, parse_upe_file
from upbeat.protocol.constants import AckFlag, Link, RepeaterRequest
from upbeat.protocol.control_word import ControlWord, decode_control_word, encode_control_word
from upbeat.protocol.packet import Packet, build_packet, build_report_packet, parse_packet
from upbeat.protocol.register_report import RegisterReport, decode_register_report
from upbeat.transport import AbstractTransport, MockTransport

__version__ = "0.1.0"
__all__ = [
    # Codec
    "AckFlag",
    "Link",
    "RepeaterRequest",
    "ControlWord",
    "encode_control_word",
    "decode_control_word",
    "Packet",
    "build_packet",
    "build_report_packet",
    "parse_packet",
    "RegisterReport",
    "decode_register_report",
    # Configuration
    "ConfigDocument",
    "ConfigDocumentBuilder",
    "Module",
    "RecordType",
    "SkippedRow",
    "parse_upe",
    "parse_upe_file",
    # Exceptions
    "UPBeatError",
    "ProtocolError",
    "RangeError",
    "LengthError",
    "FormatError",
    "ChecksumError",
    "ParseError",
    "TransportError",
    "TimeoutError",
    # Transport
    "AbstractTransport",
    "MockTransport",
    # Version
    "__version__",
]
