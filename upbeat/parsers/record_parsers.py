"""
Per-record-type parsers for UPE rows.

Each parser turns one row into its model. Columns are fixed per record type
(0-based, column 0 is the record type tag):

System / contacts:
- 0 system info: version, total modules, total links, network id, password
- 10, 11 contacts: company, name, address, city, state, zip, phone, email,
  fax, pager, web

Definitions:
- 2 link: link id, name
- 3 module: module id, network id, product id, manufacturer id, firmware
  major/minor, device type, channels, transmit/receive components, room
  name, device name, packet type

Module children (column 3 is unused by every child record):
- 4 preset, 5 rocker, 6 button, 7 input, 8 channel info, 9 vhc,
  12 memory, 13 keypad indicator, 14 thermostat

A row that is too short, holds a non-integer in an integer column, or
fails model validation raises ParseError.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from upbeat.models.records import (
    Button,
    ChannelInfo,
    ContactInfo,
    Input,
    KeypadIndicator,
    LinkDefinition,
    MemoryBlock,
    Module,
    Preset,
    RecordType,
    Rocker,
    SystemInfo,
    Thermostat,
    Vhc,
)
from upbeat.parsers.row_reader import RowReader

ModelT = TypeVar("ModelT", bound=BaseModel)


MIN_FIELD_COUNTS: dict[RecordType, int] = {
    RecordType.BEGIN_OF_FILE: 6,
    RecordType.END_OF_FILE: 1,
    RecordType.LINK: 3,
    RecordType.MODULE: 14,
    RecordType.PRESET: 6,
    RecordType.ROCKER: 14,
    RecordType.BUTTON: 15,
    RecordType.INPUT: 10,
    RecordType.CHANNEL_INFO: 5,
    RecordType.VHC: 5,
    RecordType.INSTALLER: 12,
    RecordType.CUSTOMER: 12,
    RecordType.MEMORY: 3,
    RecordType.KEYPAD_INDICATOR: 7,
    RecordType.THERMOSTAT: 10,
    RecordType.ROOM_ICON: 3,
    RecordType.DEVICE_ICON: 3,
}
"""Fewest fields a row of each record type may have."""


# Shared child-record columns
COL_CHANNEL = 1
COL_COMPONENT = 2
COL_CHILD_FIRST_VALUE = 4


def check_field_count(reader: RowReader, record_type: RecordType) -> None:
    """
    Verify the row has the minimum number of fields for its type.

    Raises:
        ParseError: If the row is too short.
    """
    minimum = MIN_FIELD_COUNTS.get(record_type)
    if minimum is not None and len(reader) < minimum:
        raise reader.error(
            f"Invalid record {record_type.name}: too few fields "
            f"({len(reader)}, need {minimum})"
        )


def _build(reader: RowReader, model: type[ModelT], **values: Any) -> ModelT:
    try:
        return model(**values)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise reader.error(f"Invalid {model.__name__}: {details}") from e


# ===== System / Contacts =====


def parse_system_info(reader: RowReader) -> SystemInfo:
    """Parse a begin-of-file row."""
    return _build(
        reader,
        SystemInfo,
        version=reader.int_at(1),
        total_modules=reader.int_at(2),
        total_links=reader.int_at(3),
        network_id=reader.int_at(4),
        network_password=reader.int_at(5),
    )


CONTACT_FIELDS: tuple[str, ...] = (
    "company",
    "name",
    "address",
    "city",
    "state",
    "zip",
    "phone",
    "email",
    "fax",
    "pager",
    "web",
)


def parse_contact(reader: RowReader) -> ContactInfo:
    """Parse an installer or customer row; absent columns become empty strings."""
    return _build(
        reader,
        ContactInfo,
        **{name: reader.optional_str_at(i) for i, name in enumerate(CONTACT_FIELDS, start=1)},
    )


# ===== Definitions =====


def parse_link(reader: RowReader) -> LinkDefinition:
    """Parse a link definition row."""
    return _build(reader, LinkDefinition, link_id=reader.int_at(1), name=reader.str_at(2))


def parse_module(reader: RowReader) -> Module:
    """Parse a module definition row (without children)."""
    reader.seek(1)
    (
        module_id,
        network_id,
        product_id,
        manufacturer_id,
        firmware_major,
        firmware_minor,
        device_type,
        channels,
        transmit_components,
        receive_components,
    ) = reader.read_ints(10)
    room_name = reader.read_str()
    device_name = reader.read_str()
    packet_type = reader.read_int()
    return _build(
        reader,
        Module,
        module_id=module_id,
        network_id=network_id,
        product_id=product_id,
        manufacturer_id=manufacturer_id,
        firmware_major_version=firmware_major,
        firmware_minor_version=firmware_minor,
        device_type=device_type,
        channels=channels,
        transmit_components=transmit_components,
        receive_components=receive_components,
        room_name=room_name,
        device_name=device_name,
        packet_type=packet_type,
    )


# ===== Module Children =====


def parse_preset(reader: RowReader) -> Preset:
    return _build(
        reader,
        Preset,
        channel_id=reader.int_at(COL_CHANNEL),
        component_id=reader.int_at(COL_COMPONENT),
        link_id=reader.int_at(4),
        dim_level=reader.int_at(5),
        fade_rate=reader.int_at(6),
    )


def parse_rocker(reader: RowReader) -> Rocker:
    reader.seek(COL_CHILD_FIRST_VALUE)
    top = reader.read_ints(5)
    bottom = reader.read_ints(5)
    return _build(
        reader,
        Rocker,
        channel_id=reader.int_at(COL_CHANNEL),
        component_id=reader.int_at(COL_COMPONENT),
        top_link_id=top[0],
        top_single_click_action=top[1],
        top_double_click_action=top[2],
        top_hold_action=top[3],
        top_release_action=top[4],
        bottom_link_id=bottom[0],
        bottom_single_click_action=bottom[1],
        bottom_double_click_action=bottom[2],
        bottom_hold_action=bottom[3],
        bottom_release_action=bottom[4],
    )


def parse_button(reader: RowReader) -> Button:
    reader.seek(COL_CHILD_FIRST_VALUE)
    link_id = reader.read_int()
    single, double, hold, release = reader.read_ints(4)
    single_toggle, double_toggle, hold_toggle, release_toggle = reader.read_ints(4)
    indicator_link, indicator_byte = reader.read_ints(2)
    return _build(
        reader,
        Button,
        channel_id=reader.int_at(COL_CHANNEL),
        component_id=reader.int_at(COL_COMPONENT),
        link_id=link_id,
        single_click_action=single,
        double_click_action=double,
        hold_action=hold,
        release_action=release,
        single_click_toggle_action=single_toggle,
        double_click_toggle_action=double_toggle,
        hold_toggle_action=hold_toggle,
        release_toggle_action=release_toggle,
        indicator_link=indicator_link,
        indicator_byte=indicator_byte,
    )


def parse_input(reader: RowReader) -> Input:
    reader.seek(COL_CHILD_FIRST_VALUE)
    open_link, open_cmd, open_toggle = reader.read_ints(3)
    close_link, close_cmd, close_toggle = reader.read_ints(3)
    return _build(
        reader,
        Input,
        channel_id=reader.int_at(COL_CHANNEL),
        component_id=reader.int_at(COL_COMPONENT),
        open_link_id=open_link,
        open_command_id=open_cmd,
        open_toggle_command_id=open_toggle,
        close_link_id=close_link,
        close_command_id=close_cmd,
        close_toggle_command_id=close_toggle,
    )


def parse_channel_info(reader: RowReader) -> ChannelInfo:
    # Column 2 is unused for channel info
    return _build(
        reader,
        ChannelInfo,
        channel_id=reader.int_at(COL_CHANNEL),
        dim_enabled=reader.int_at(3),
        default_fade_rate=reader.int_at(4),
    )


def parse_vhc(reader: RowReader) -> Vhc:
    return _build(
        reader,
        Vhc,
        channel_id=reader.int_at(COL_CHANNEL),
        component_id=reader.int_at(COL_COMPONENT),
        transmit_command=reader.int_at(COL_CHILD_FIRST_VALUE),
    )


def parse_memory(reader: RowReader) -> MemoryBlock:
    """Parse a memory row; the data columns are re-joined with commas."""
    return _build(reader, MemoryBlock, address=reader.str_at(1), data=reader.join_from(2))


def parse_keypad_indicator(reader: RowReader) -> KeypadIndicator:
    return _build(
        reader,
        KeypadIndicator,
        channel_id=reader.int_at(COL_CHANNEL),
        component_id=reader.int_at(COL_COMPONENT),
        link_id=reader.int_at(4),
        mask1=reader.int_at(5),
        mask2=reader.int_at(6),
    )


def parse_thermostat(reader: RowReader) -> Thermostat:
    return _build(
        reader,
        Thermostat,
        channel_id=reader.int_at(COL_CHANNEL),
        component_id=reader.int_at(COL_COMPONENT),
        firmware_version=reader.str_at(4),
        wdu_version=reader.str_at(5),
        units=reader.int_at(6),
        inhibit_link=reader.int_at(7),
        link_base=reader.int_at(8),
        setpoint_delta=reader.int_at(9),
    )
