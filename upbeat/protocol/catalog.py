"""
UPB message catalog.

Static lookup tables from message set identifiers (MSID, top 3 bits of the
MDID byte) and message data identifiers (the full MDID byte) to their
canonical names. Both lookups are total: unrecognized values map to an
explicit sentinel instead of failing.

Example:
    >>> message_data_name(0x22)
    'UPB_GOTO'
    >>> message_set_name(0x22 >> 5)
    'UPB_DEVICE_CONTROL_COMMAND'
"""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Final, Mapping

UNKNOWN_MSID: Final[str] = "UNKNOWN_MSID"
"""Name returned for an unrecognized message set id."""

UNKNOWN_MDID: Final[str] = "UNKNOWN_MDID"
"""Name returned for an unrecognized message data id."""


class MessageSet(IntEnum):
    """Message set identifiers (MDID bits 7-5)."""

    CORE_COMMAND = 0
    DEVICE_CONTROL_COMMAND = 1
    RESERVED_COMMAND_SET_1 = 2
    RESERVED_COMMAND_SET_2 = 3
    CORE_REPORTS = 4
    RESERVED_REPORT_SET_1 = 5
    RESERVED_REPORT_SET_2 = 6
    EXTENDED_MESSAGE_SET = 7


class MessageDataId(IntEnum):
    """
    Message data identifiers.

    Grouped by message set: core commands (0x00-0x11), device control
    commands (0x20-0x31) and core reports (0x80-0x93).
    """

    # ===== Core Commands =====
    NULL_COMMAND = 0x00
    WRITE_ENABLED_COMMAND = 0x01
    WRITE_PROTECT_COMMAND = 0x02
    START_SETUP_MODE_COMMAND = 0x03
    STOP_SETUP_MODE_COMMAND = 0x04
    GET_SETUP_TIME_COMMAND = 0x05
    AUTO_ADDRESS_COMMAND = 0x06
    GET_DEVICE_STATUS_COMMAND = 0x07
    SET_DEVICE_CONTROL_COMMAND = 0x08
    ADD_LINK_COMMAND = 0x0B
    DEL_LINK_COMMAND = 0x0C
    TRANSMIT_MESSAGE_COMMAND = 0x0D
    DEVICE_RESET_COMMAND = 0x0E
    GET_DEVICE_SIG_COMMAND = 0x0F
    GET_REGISTER_VALUE_COMMAND = 0x10
    SET_REGISTER_VALUE_COMMAND = 0x11

    # ===== Device Control Commands =====
    ACTIVATE_LINK = 0x20
    DEACTIVATE_LINK = 0x21
    GOTO = 0x22
    FADE_START = 0x23
    FADE_STOP = 0x24
    BLINK = 0x25
    INDICATE = 0x26
    TOGGLE = 0x27
    REPORT_STATE = 0x30
    STORE_STATE = 0x31

    # ===== Core Reports =====
    ACK_RESPONSE = 0x80
    SETUP_TIME = 0x85
    DEVICE_STATE = 0x86
    DEVICE_STATUS = 0x87
    DEVICE_SIG = 0x8F
    REGISTER_VALUES = 0x90
    RAM_VALUES = 0x91
    RAW_DATA = 0x92
    HEARTBEAT = 0x93

    @property
    def message_set(self) -> MessageSet:
        """Message set this identifier belongs to."""
        return MessageSet(self.value >> 5)


_MESSAGE_SET_NAMES: Final[Mapping[int, str]] = MappingProxyType({
    MessageSet.CORE_COMMAND: "UPB_CORE_COMMAND",
    MessageSet.DEVICE_CONTROL_COMMAND: "UPB_DEVICE_CONTROL_COMMAND",
    MessageSet.RESERVED_COMMAND_SET_1: "UPB_RESERVED_COMMAND_SET_1",
    MessageSet.RESERVED_COMMAND_SET_2: "UPB_RESERVED_COMMAND_SET_2",
    MessageSet.CORE_REPORTS: "UPB_CORE_REPORTS",
    MessageSet.RESERVED_REPORT_SET_1: "UPB_RESERVED_REPORT_SET_1",
    MessageSet.RESERVED_REPORT_SET_2: "UPB_RESERVED_REPORT_SET_2",
    MessageSet.EXTENDED_MESSAGE_SET: "UPB_EXTENDED_MESSAGE_SET",
})

_MESSAGE_DATA_NAMES: Final[Mapping[int, str]] = MappingProxyType({
    MessageDataId.NULL_COMMAND: "UPB_NULL_COMMAND",
    MessageDataId.WRITE_ENABLED_COMMAND: "UPB_WRITE_ENABLED_COMMAND",
    MessageDataId.WRITE_PROTECT_COMMAND: "UPB_WRITE_PROTECT_COMMAND",
    MessageDataId.START_SETUP_MODE_COMMAND: "UPB_START_SETUP_MODE_COMMAND",
    MessageDataId.STOP_SETUP_MODE_COMMAND: "UPB_STOP_SETUP_MODE_COMMAND",
    MessageDataId.GET_SETUP_TIME_COMMAND: "UPB_GET_SETUP_TIME_COMMAND",
    MessageDataId.AUTO_ADDRESS_COMMAND: "UPB_AUTO_ADDRESS_COMMAND",
    MessageDataId.GET_DEVICE_STATUS_COMMAND: "UPB_GET_DEVICE_STATUS_COMMAND",
    MessageDataId.SET_DEVICE_CONTROL_COMMAND: "UPB_SET_DEVICE_CONTROL_COMMAND",
    MessageDataId.ADD_LINK_COMMAND: "UPB_ADD_LINK_COMMAND",
    MessageDataId.DEL_LINK_COMMAND: "UPB_DEL_LINK_COMMAND",
    MessageDataId.TRANSMIT_MESSAGE_COMMAND: "UPB_TRANSMIT_MESSAGE_COMMAND",
    MessageDataId.DEVICE_RESET_COMMAND: "UPB_DEVICE_RESET_COMMAND",
    MessageDataId.GET_DEVICE_SIG_COMMAND: "UPB_GET_DEVICE_SIG_COMMAND",
    MessageDataId.GET_REGISTER_VALUE_COMMAND: "UPB_GET_REGISTER_VALUE_COMMAND",
    MessageDataId.SET_REGISTER_VALUE_COMMAND: "UPB_SET_REGISTER_VALUE_COMMAND",
    MessageDataId.ACTIVATE_LINK: "UPB_ACTIVATE_LINK",
    MessageDataId.DEACTIVATE_LINK: "UPB_DEACTIVATE_LINK",
    MessageDataId.GOTO: "UPB_GOTO",
    MessageDataId.FADE_START: "UPB_FADE_START",
    MessageDataId.FADE_STOP: "UPB_FADE_STOP",
    MessageDataId.BLINK: "UPB_BLINK",
    MessageDataId.INDICATE: "UPB_INDICATE",
    MessageDataId.TOGGLE: "UPB_TOGGLE",
    MessageDataId.REPORT_STATE: "UPB_REPORT_STATE",
    MessageDataId.STORE_STATE: "UPB_STORE_STATE",
    MessageDataId.ACK_RESPONSE: "UPB_ACK_RESPONSE",
    MessageDataId.SETUP_TIME: "UPB_SETUP_TIME",
    MessageDataId.DEVICE_STATE: "UPB_DEVICE_STATE",
    MessageDataId.DEVICE_STATUS: "UPB_DEVICE_STATUS",
    MessageDataId.DEVICE_SIG: "UPB_DEVICE_SIG",
    MessageDataId.REGISTER_VALUES: "UPB_REGISTER_VALUES",
    MessageDataId.RAM_VALUES: "UPB_RAM_VALUES",
    MessageDataId.RAW_DATA: "UPB_RAW_DATA",
    MessageDataId.HEARTBEAT: "UPB_HEARTBEAT",
})


def message_set_name(message_set_id: int) -> str:
    """
    Look up the canonical name of a message set.

    Args:
        message_set_id: Message set id (0-7).

    Returns:
        Canonical name, or UNKNOWN_MSID for any other value.
    """
    return _MESSAGE_SET_NAMES.get(message_set_id, UNKNOWN_MSID)


def message_data_name(message_data_id: int) -> str:
    """
    Look up the canonical name of a message data id.

    Args:
        message_data_id: Full MDID byte (0-255).

    Returns:
        Canonical name, or UNKNOWN_MDID for an unassigned value.
    """
    return _MESSAGE_DATA_NAMES.get(message_data_id, UNKNOWN_MDID)


def message_set_names() -> Mapping[int, str]:
    """Read-only view of the message set table."""
    return _MESSAGE_SET_NAMES


def message_data_names() -> Mapping[int, str]:
    """Read-only view of the message data table."""
    return _MESSAGE_DATA_NAMES
