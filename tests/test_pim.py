"""Tests for PIM message framing."""

import pytest

from upbeat.exceptions import FormatError, LengthError, RangeError
from upbeat.protocol.catalog import MessageDataId
from upbeat.protocol.constants import Link, PimResponseType
from upbeat.protocol.control_word import encode_control_word
from upbeat.protocol.packet import build_packet
from upbeat.protocol.pim import (
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


class TestEncodeMessages:
    """Tests for messages sent to the PIM."""

    def test_transmit_message(self):
        """Test wrapping a packet as hex between 0x14 and CR."""
        raw = bytes.fromhex("08040102FF22646C")
        assert encode_transmit_message(raw) == b"\x1408040102FF22646C\r"

    def test_transmit_too_short(self):
        """Test that partial packets are rejected."""
        with pytest.raises(FormatError):
            encode_transmit_message(b"\x07\x04\x01")

    def test_transmit_too_long(self):
        """Test that oversized packets are rejected."""
        with pytest.raises(LengthError):
            encode_transmit_message(bytes(25))

    def test_read_register(self):
        """Test the read register message with checksum."""
        assert encode_read_register(0x70, 1) == b"\x1270018F\r"

    @pytest.mark.parametrize("register, count", [(0x70, 0), (0x70, 17), (256, 1), (-1, 1)])
    def test_read_register_out_of_range(self, register, count):
        """Test that invalid register arguments are rejected."""
        with pytest.raises(RangeError):
            encode_read_register(register, count)

    def test_write_register(self):
        """Test the write register message with checksum."""
        # 00 01 02 sums to 0x03
        assert encode_write_register(0x00, b"\x01\x02") == b"\x17000102FD\r"

    @pytest.mark.parametrize("values", [b"", bytes(17)])
    def test_write_register_value_count(self, values):
        """Test that 0 or more than 16 values are rejected."""
        with pytest.raises(RangeError):
            encode_write_register(0x10, values)

    def test_message_mode(self):
        """Test the message mode switch."""
        assert encode_message_mode() == b"\x1770028E\r"


class TestPimMessageReader:
    """Tests for PimMessageReader."""

    @pytest.fixture
    def reader(self):
        return PimMessageReader()

    @pytest.mark.parametrize(
        "data, response_type",
        [
            (b"PA\r", PimResponseType.ACCEPT),
            (b"PB\r", PimResponseType.BUSY),
            (b"PE\r", PimResponseType.ERROR),
            (b"PK\r", PimResponseType.ACK),
            (b"PN\r", PimResponseType.NAK),
        ],
    )
    def test_parse_status_messages(self, reader, data, response_type):
        """Test parsing two-letter status replies."""
        result, message = reader.parse(data)
        assert result == PimParseResult.SUCCESS
        assert isinstance(message, PimMessage)
        assert message.response_type == response_type
        assert message.payload == b""
        assert message.bytes_consumed == 3

    def test_status_properties(self, reader):
        """Test the convenience flags."""
        _, accept = reader.parse(b"PA\r")
        _, nak = reader.parse(b"PN\r")
        assert accept.is_accept and not accept.is_error
        assert nak.is_nak and not nak.is_ack

    def test_parse_upb_message(self, reader):
        """Test that a PU message carries a decoded packet."""
        result, message = reader.parse(b"PU08040102FF22646C\r")
        assert result == PimParseResult.SUCCESS
        assert message.response_type == PimResponseType.UPB_MESSAGE
        assert message.packet is not None
        assert message.packet.message_data_id == MessageDataId.GOTO
        assert message.packet.message_arguments == b"\x64"
        assert message.payload == bytes.fromhex("08040102FF22646C")

    def test_parse_upb_message_lowercase(self, reader):
        """Test that lowercase hex is accepted."""
        result, message = reader.parse(b"PU08040102ff22646c\r")
        assert result == PimParseResult.SUCCESS
        assert message.packet.source_id == 0xFF

    def test_parse_register_report(self, reader):
        """Test that a PR message carries a decoded register report."""
        result, message = reader.parse(b"PR7002\r")
        assert result == PimParseResult.SUCCESS
        assert message.register_report.start_register == 0x70
        assert message.register_report.values == b"\x02"

    def test_empty_buffer(self, reader):
        """Test parsing an empty buffer."""
        result, error = reader.parse(b"")
        assert result == PimParseResult.EMPTY_BUFFER
        assert isinstance(error, PimParseError)

    def test_incomplete(self, reader):
        """Test that a message without CR is incomplete."""
        result, error = reader.parse(b"PU0804")
        assert result == PimParseResult.INCOMPLETE
        assert error.bytes_consumed == 0
        assert error.partial_data == b"PU0804"

    def test_too_short(self, reader):
        """Test that a lone CR is rejected but consumed."""
        result, error = reader.parse(b"\r")
        assert result == PimParseResult.INVALID_FORMAT
        assert error.bytes_consumed == 1

    def test_unknown_type(self, reader):
        """Test that unrecognized message types are reported."""
        result, error = reader.parse(b"PX\r")
        assert result == PimParseResult.UNKNOWN_TYPE
        assert error.bytes_consumed == 3

    def test_bad_hex(self, reader):
        """Test that invalid hex in a PU payload is rejected."""
        result, _ = reader.parse(b"PU08Z4\r")
        assert result == PimParseResult.INVALID_FORMAT

    def test_odd_hex(self, reader):
        """Test that odd-length hex is rejected."""
        result, _ = reader.parse(b"PR700\r")
        assert result == PimParseResult.INVALID_FORMAT

    def test_bad_checksum(self, reader):
        """Test that a corrupted PU packet is reported."""
        result, error = reader.parse(b"PU08040102FF22646D\r")
        assert result == PimParseResult.INVALID_CHECKSUM
        assert error.bytes_consumed == 19

    def test_short_packet(self, reader):
        """Test that a PU packet shorter than the header is rejected."""
        result, _ = reader.parse(b"PU0804\r")
        assert result == PimParseResult.INVALID_FORMAT

    def test_empty_register_report(self, reader):
        """Test that a PR message with no payload is rejected."""
        result, _ = reader.parse(b"PR\r")
        assert result == PimParseResult.INVALID_FORMAT

    def test_streaming(self, reader):
        """Test parsing back-to-back messages using bytes_consumed."""
        buffer = b"PA\rPK\rPU0804"
        results = []
        while True:
            result, item = reader.parse(buffer)
            if result in (PimParseResult.EMPTY_BUFFER, PimParseResult.INCOMPLETE):
                break
            results.append(item.response_type)
            buffer = buffer[item.bytes_consumed:]
        assert results == [PimResponseType.ACCEPT, PimResponseType.ACK]
        assert buffer == b"PU0804"

    def test_round_trip_with_packet_builder(self):
        """Test that a transmitted packet parses back when echoed as PU."""
        raw = build_packet(
            encode_control_word(Link.LINK, transmit_count=1),
            0x01,
            0x05,
            0x10,
            MessageDataId.ACTIVATE_LINK,
        )
        wire = encode_transmit_message(raw)
        result, message = parse_pim_message(b"PU" + wire[1:])
        assert result == PimParseResult.SUCCESS
        assert message.packet.raw == raw
        assert message.packet.control.is_link
