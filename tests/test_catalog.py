"""Tests for the message catalog."""

import pytest

from upbeat.protocol.catalog import (
    UNKNOWN_MDID,
    UNKNOWN_MSID,
    MessageDataId,
    MessageSet,
    message_data_name,
    message_data_names,
    message_set_name,
    message_set_names,
)


class TestMessageSetNames:
    """Tests for message set name lookup."""

    @pytest.mark.parametrize(
        "msid, name",
        [
            (0, "UPB_CORE_COMMAND"),
            (1, "UPB_DEVICE_CONTROL_COMMAND"),
            (4, "UPB_CORE_REPORTS"),
            (7, "UPB_EXTENDED_MESSAGE_SET"),
        ],
    )
    def test_known_sets(self, msid, name):
        """Test names of assigned message sets."""
        assert message_set_name(msid) == name

    @pytest.mark.parametrize("msid", [8, -1, 255])
    def test_unknown_set(self, msid):
        """Test that values outside 0-7 map to the sentinel."""
        assert message_set_name(msid) == UNKNOWN_MSID

    def test_every_set_named(self):
        """Test that each MessageSet member has a table entry."""
        names = message_set_names()
        assert set(names) == set(MessageSet)


class TestMessageDataNames:
    """Tests for message data name lookup."""

    @pytest.mark.parametrize(
        "mdid, name",
        [
            (0x00, "UPB_NULL_COMMAND"),
            (0x11, "UPB_SET_REGISTER_VALUE_COMMAND"),
            (0x22, "UPB_GOTO"),
            (0x31, "UPB_STORE_STATE"),
            (0x86, "UPB_DEVICE_STATE"),
            (0x90, "UPB_REGISTER_VALUES"),
            (0x93, "UPB_HEARTBEAT"),
        ],
    )
    def test_known_ids(self, mdid, name):
        """Test names of assigned message data ids."""
        assert message_data_name(mdid) == name

    @pytest.mark.parametrize("mdid", [0x09, 0x0A, 0x28, 0x81, 0x94, 0xFF])
    def test_unassigned_ids(self, mdid):
        """Test that unassigned ids map to the sentinel."""
        assert message_data_name(mdid) == UNKNOWN_MDID

    def test_total_over_byte_range(self):
        """Test that every byte value has a name."""
        for mdid in range(256):
            assert isinstance(message_data_name(mdid), str)

    def test_every_id_named(self):
        """Test that each MessageDataId member has a table entry."""
        names = message_data_names()
        for mdid in MessageDataId:
            assert names[mdid] == f"UPB_{mdid.name}"

    def test_tables_read_only(self):
        """Test that the exposed tables cannot be modified."""
        with pytest.raises(TypeError):
            message_data_names()[0x22] = "X"

    def test_message_set_property(self):
        """Test the message set derived from an MDID."""
        assert MessageDataId.GOTO.message_set == MessageSet.DEVICE_CONTROL_COMMAND
        assert MessageDataId.HEARTBEAT.message_set == MessageSet.CORE_REPORTS
        assert MessageDataId.NULL_COMMAND.message_set == MessageSet.CORE_COMMAND
