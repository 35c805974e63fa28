"""
Pydantic models for UPE configuration records.

A UPE export describes a UPB installation as rows tagged with a numeric
record type. These models hold the parsed rows and the ConfigDocument that
aggregates them.

Design principles:
- All models are frozen (immutable) once built
- A Module owns its child records (presets, rockers, buttons, ...)
- Child collections are tuples in the order the rows appeared
- Text columns are kept verbatim; integer columns are validated
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field

from upbeat.models import products


class RecordType(IntEnum):
    """
    UPE record type tags (first column of every row).

    Types 15-17 do not appear in exports; any tag not listed here is an
    unrecognized record and is ignored.
    """

    BEGIN_OF_FILE = 0
    """System information; carries the schema version."""

    END_OF_FILE = 1
    """End marker, no data."""

    LINK = 2
    """Link (scene) definition."""

    MODULE = 3
    """Module (device) definition; following child rows attach to it."""

    PRESET = 4
    """Receive component preset."""

    ROCKER = 5
    """Rocker switch transmit component."""

    BUTTON = 6
    """Keypad button transmit component."""

    INPUT = 7
    """Input (contact closure) transmit component."""

    CHANNEL_INFO = 8
    """Per-channel dimming settings."""

    VHC = 9
    """Vacuum handle controller transmit component."""

    INSTALLER = 10
    """Installer contact block."""

    CUSTOMER = 11
    """Customer contact block."""

    MEMORY = 12
    """Raw device memory dump."""

    KEYPAD_INDICATOR = 13
    """Keypad indicator receive component."""

    THERMOSTAT = 14
    """Thermostat settings."""

    ROOM_ICON = 18
    """Room icon, reserved."""

    DEVICE_ICON = 19
    """Device icon, reserved."""

    @property
    def is_child(self) -> bool:
        """Check if rows of this type attach to the current module."""
        return self in _CHILD_RECORD_TYPES


_CHILD_RECORD_TYPES = frozenset({
    RecordType.PRESET,
    RecordType.ROCKER,
    RecordType.BUTTON,
    RecordType.INPUT,
    RecordType.CHANNEL_INFO,
    RecordType.VHC,
    RecordType.MEMORY,
    RecordType.KEYPAD_INDICATOR,
    RecordType.THERMOSTAT,
})


class SystemInfo(BaseModel):
    """Network-wide settings from the begin-of-file row."""

    model_config = ConfigDict(frozen=True)

    version: int = Field(ge=0, description="UPE schema version")
    total_modules: int = Field(ge=0, description="Number of modules in the export")
    total_links: int = Field(ge=0, description="Number of links in the export")
    network_id: int = Field(ge=0, le=255, description="UPB network id")
    network_password: int = Field(ge=0, le=0xFFFF, description="UPB network password")


class ContactInfo(BaseModel):
    """Installer or customer contact block. Absent columns are empty strings."""

    model_config = ConfigDict(frozen=True)

    company: str = ""
    name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    phone: str = ""
    email: str = ""
    fax: str = ""
    pager: str = ""
    web: str = ""

    @property
    def is_empty(self) -> bool:
        return not any(self.model_dump().values())


class LinkDefinition(BaseModel):
    """A named link (scene)."""

    model_config = ConfigDict(frozen=True)

    link_id: int = Field(ge=0, le=255, description="Link id")
    name: str = Field(description="Link name")


class Preset(BaseModel):
    """Level and fade rate a receive component goes to when a link is activated."""

    model_config = ConfigDict(frozen=True)

    channel_id: int = Field(ge=0, le=255)
    component_id: int = Field(ge=0, le=255)
    link_id: int = Field(ge=0, le=255)
    dim_level: int = Field(ge=0, le=255, description="Preset level (percent, or 255 for last level)")
    fade_rate: int = Field(ge=0, le=255, description="Preset fade rate code")


class Rocker(BaseModel):
    """Rocker transmit component: a top and a bottom paddle."""

    model_config = ConfigDict(frozen=True)

    channel_id: int = Field(ge=0, le=255)
    component_id: int = Field(ge=0, le=255)
    top_link_id: int = Field(ge=0, le=255)
    top_single_click_action: int = Field(ge=0, le=255)
    top_double_click_action: int = Field(ge=0, le=255)
    top_hold_action: int = Field(ge=0, le=255)
    top_release_action: int = Field(ge=0, le=255)
    bottom_link_id: int = Field(ge=0, le=255)
    bottom_single_click_action: int = Field(ge=0, le=255)
    bottom_double_click_action: int = Field(ge=0, le=255)
    bottom_hold_action: int = Field(ge=0, le=255)
    bottom_release_action: int = Field(ge=0, le=255)


class Button(BaseModel):
    """Keypad button transmit component."""

    model_config = ConfigDict(frozen=True)

    channel_id: int = Field(ge=0, le=255)
    component_id: int = Field(ge=0, le=255)
    link_id: int = Field(ge=0, le=255, description="Link transmitted by the button")
    single_click_action: int = Field(ge=0, le=255)
    double_click_action: int = Field(ge=0, le=255)
    hold_action: int = Field(ge=0, le=255)
    release_action: int = Field(ge=0, le=255)
    single_click_toggle_action: int = Field(ge=0, le=255)
    double_click_toggle_action: int = Field(ge=0, le=255)
    hold_toggle_action: int = Field(ge=0, le=255)
    release_toggle_action: int = Field(ge=0, le=255)
    indicator_link: int = Field(ge=0, le=255)
    indicator_byte: int = Field(ge=0, le=255)

    @property
    def action_names(self) -> dict[str, str]:
        """Display names of the single click, double click, hold and release actions."""
        return {
            event: products.action_name(getattr(self, f"{event}_action"))
            for event in ("single_click", "double_click", "hold", "release")
        }


class Input(BaseModel):
    """Input transmit component: links sent on open and on close."""

    model_config = ConfigDict(frozen=True)

    channel_id: int = Field(ge=0, le=255)
    component_id: int = Field(ge=0, le=255)
    open_link_id: int = Field(ge=0, le=255)
    open_command_id: int = Field(ge=0, le=255)
    open_toggle_command_id: int = Field(ge=0, le=255)
    close_link_id: int = Field(ge=0, le=255)
    close_command_id: int = Field(ge=0, le=255)
    close_toggle_command_id: int = Field(ge=0, le=255)


class ChannelInfo(BaseModel):
    """Per-channel dimming settings."""

    model_config = ConfigDict(frozen=True)

    channel_id: int = Field(ge=0, le=255)
    dim_enabled: int = Field(ge=0, le=255, description="Non-zero if the channel dims")
    default_fade_rate: int = Field(ge=0, le=255)

    @property
    def is_dimmable(self) -> bool:
        return self.dim_enabled != 0


class Vhc(BaseModel):
    """Vacuum handle controller transmit component."""

    model_config = ConfigDict(frozen=True)

    channel_id: int = Field(ge=0, le=255)
    component_id: int = Field(ge=0, le=255)
    transmit_command: int = Field(ge=0, le=255)


class MemoryBlock(BaseModel):
    """Raw device memory as exported (address and comma-joined data, both text)."""

    model_config = ConfigDict(frozen=True)

    address: str
    data: str


class KeypadIndicator(BaseModel):
    """Keypad indicator receive component."""

    model_config = ConfigDict(frozen=True)

    channel_id: int = Field(ge=0, le=255)
    component_id: int = Field(ge=0, le=255)
    link_id: int = Field(ge=0, le=255)
    mask1: int = Field(ge=0, le=255)
    mask2: int = Field(ge=0, le=255)


class Thermostat(BaseModel):
    """Thermostat settings."""

    model_config = ConfigDict(frozen=True)

    channel_id: int = Field(ge=0, le=255)
    component_id: int = Field(ge=0, le=255)
    firmware_version: str
    wdu_version: str
    units: int
    inhibit_link: int = Field(ge=0, le=255)
    link_base: int = Field(ge=0, le=255)
    setpoint_delta: int


class Module(BaseModel):
    """
    A UPB module (device) and the child records that followed its row.
    """

    model_config = ConfigDict(frozen=True)

    module_id: int = Field(ge=0, le=255, description="Unit id")
    network_id: int = Field(ge=0, le=255)
    product_id: int = Field(ge=0, description="Product id within the manufacturer")
    manufacturer_id: int = Field(ge=0)
    firmware_major_version: int = Field(ge=0)
    firmware_minor_version: int = Field(ge=0)
    device_type: int = Field(ge=0, description="Device kind code")
    channels: int = Field(ge=0)
    transmit_components: int = Field(ge=0)
    receive_components: int = Field(ge=0)
    room_name: str
    device_name: str
    packet_type: int = Field(ge=0, description="0 = direct, 1 = link")

    presets: tuple[Preset, ...] = ()
    rockers: tuple[Rocker, ...] = ()
    buttons: tuple[Button, ...] = ()
    inputs: tuple[Input, ...] = ()
    channel_info: tuple[ChannelInfo, ...] = ()
    vhcs: tuple[Vhc, ...] = ()
    memory: tuple[MemoryBlock, ...] = ()
    receive_indicators: tuple[KeypadIndicator, ...] = ()
    thermostats: tuple[Thermostat, ...] = ()

    @property
    def manufacturer_name(self) -> str:
        return products.manufacturer_name(self.manufacturer_id)

    @property
    def kind_name(self) -> str:
        return products.kind_name(self.device_type)

    @property
    def product_name(self) -> str:
        return products.product_name(self.manufacturer_id, self.product_id)

    @property
    def packet_type_name(self) -> str:
        return products.packet_type_name(self.packet_type)

    @property
    def firmware_version(self) -> str:
        return f"{self.firmware_major_version}.{self.firmware_minor_version}"

    def __repr__(self) -> str:
        return f"Module({self.module_id}, {self.room_name!r}, {self.device_name!r})"


class ConfigDocument(BaseModel):
    """
    Parsed UPE export.

    system_info is None when the export had no begin-of-file row. Contact
    blocks default to empty.
    """

    model_config = ConfigDict(frozen=True)

    system_info: SystemInfo | None = None
    installer: ContactInfo = Field(default_factory=ContactInfo)
    customer: ContactInfo = Field(default_factory=ContactInfo)
    links: tuple[LinkDefinition, ...] = ()
    modules: tuple[Module, ...] = ()

    @property
    def version(self) -> int | None:
        return self.system_info.version if self.system_info else None

    def get_module(self, module_id: int) -> Module | None:
        """Find the first module with the given unit id."""
        return next((m for m in self.modules if m.module_id == module_id), None)

    def get_link(self, link_id: int) -> LinkDefinition | None:
        """Find the link with the given id."""
        return next((link for link in self.links if link.link_id == link_id), None)
