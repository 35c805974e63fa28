"""Tests for register report decoding."""

import pytest

from upbeat.exceptions import FormatError
from upbeat.protocol.register_report import RegisterReport, decode_register_report


class TestRegisterReport:
    """Tests for decode_register_report."""

    def test_decode_values(self):
        """Test splitting start register and values."""
        report = decode_register_report(b"\x10\x01\x02\x03")
        assert report == RegisterReport(start_register=0x10, values=b"\x01\x02\x03")
        assert len(report) == 3

    def test_decode_start_only(self):
        """Test a report carrying no values."""
        report = decode_register_report(b"\x70")
        assert report.start_register == 0x70
        assert report.values == b""
        assert len(report) == 0

    def test_empty_payload(self):
        """Test that an empty payload is rejected."""
        with pytest.raises(FormatError):
            decode_register_report(b"")

    def test_as_dict(self):
        """Test mapping register addresses to values."""
        report = decode_register_report(bytearray(b"\x00\x05\x06"))
        assert report.as_dict() == {0: 5, 1: 6}
