"""Tests for control word encoding and decoding."""

import itertools

import pytest

from upbeat.exceptions import RangeError
from upbeat.protocol.constants import AckFlag, Link, RepeaterRequest
from upbeat.protocol.control_word import ControlWord, decode_control_word, encode_control_word


class TestDecodeControlWord:
    """Tests for decode_control_word."""

    def test_decode_fields(self):
        """Test extraction of every field from a known word."""
        # LNK=1 REPRQ=2 LEN=9 RSV=1 ACKMSG=1 ACKID=0 ACKPLS=1 CNT=3 SEQ=2
        word = 0x8000 | (2 << 13) | (9 << 8) | 0x80 | 0x40 | 0x10 | (3 << 2) | 2
        cw = decode_control_word(word)
        assert cw.link == Link.LINK
        assert cw.repeater_request == RepeaterRequest.TWO
        assert cw.length == 9
        assert cw.reserved == 1
        assert cw.ack_message is True
        assert cw.ack_id is False
        assert cw.ack_pulse is True
        assert cw.transmit_count == 3
        assert cw.transmit_sequence == 2

    def test_decode_zero(self):
        """Test that an all-zero word decodes to defaults."""
        cw = decode_control_word(0)
        assert cw.link == Link.DIRECT
        assert cw.repeater_request == RepeaterRequest.NONE
        assert cw.length == 0
        assert cw.ack_flags == AckFlag.NONE

    def test_decode_never_fails(self):
        """Test that every 16-bit value decodes."""
        for word in range(0, 0x10000, 0x101):
            assert isinstance(decode_control_word(word), ControlWord)

    def test_decode_ignores_high_bits(self):
        """Test that bits above 15 are masked off."""
        assert decode_control_word(0x1_8704) == decode_control_word(0x8704)

    def test_encode_method_round_trips(self):
        """Test that ControlWord.encode() reproduces the original word."""
        for word in (0x0000, 0x8704, 0xFFFF, 0x1234, 0x0080):
            assert decode_control_word(word).encode() == word

    def test_ack_flags_property(self):
        """Test that the ack booleans combine into AckFlag."""
        cw = decode_control_word(0x0060)
        assert cw.ack_flags == AckFlag.MESSAGE | AckFlag.ID
        assert cw.is_link is False


class TestEncodeControlWord:
    """Tests for encode_control_word."""

    def test_encode_known_value(self):
        """Test encoding a link packet with one transmission."""
        assert encode_control_word(Link.LINK, transmit_count=1) == 0x8004

    def test_encode_leaves_length_zero(self):
        """Test that the LEN field is always zero after encoding."""
        word = encode_control_word(1, 3, AckFlag.MESSAGE | AckFlag.ID | AckFlag.PULSE, 3, 3)
        assert decode_control_word(word).length == 0
        assert word == 0xE07F

    def test_round_trip_all_valid_fields(self):
        """Test decode(encode(...)) for every valid field combination."""
        ack_values = [0, 0x10, 0x20, 0x30, 0x40, 0x50, 0x60, 0x70]
        for link, reprq, ack, cnt, seq in itertools.product(
            (0, 1), range(4), ack_values, range(4), range(4)
        ):
            cw = decode_control_word(encode_control_word(link, reprq, ack, cnt, seq))
            assert cw.link == link
            assert cw.repeater_request == reprq
            assert int(cw.ack_flags) == ack
            assert cw.transmit_count == cnt
            assert cw.transmit_sequence == seq
            assert cw.length == 0

    def test_repeater_request_out_of_range(self):
        """Test that repeater request 4 is rejected."""
        with pytest.raises(RangeError) as exc_info:
            encode_control_word(Link.DIRECT, repeater_request=4)
        assert exc_info.value.field == "repeater_request"
        assert exc_info.value.value == 4

    def test_transmit_count_negative(self):
        """Test that transmit count -1 is rejected."""
        with pytest.raises(RangeError):
            encode_control_word(Link.DIRECT, transmit_count=-1)

    def test_transmit_sequence_out_of_range(self):
        """Test that transmit sequence 4 is rejected."""
        with pytest.raises(RangeError):
            encode_control_word(Link.DIRECT, transmit_sequence=4)

    @pytest.mark.parametrize("link", [-1, 2])
    def test_link_out_of_range(self, link):
        """Test that link values other than 0 and 1 are rejected."""
        with pytest.raises(RangeError):
            encode_control_word(link)

    @pytest.mark.parametrize("ack_flags", [0x01, 0x80, 0x0F, 0x71, -1])
    def test_invalid_ack_flags(self, ack_flags):
        """Test that bits outside the ack flags are rejected."""
        with pytest.raises(RangeError):
            encode_control_word(Link.DIRECT, ack_flags=ack_flags)

    def test_range_error_is_value_error(self):
        """Test that RangeError can be caught as ValueError."""
        with pytest.raises(ValueError):
            encode_control_word(Link.DIRECT, repeater_request=7)
