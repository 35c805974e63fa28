"""
Data models for UPE configuration exports.

This module contains Pydantic models and lookup tables for the records of
a UPE export, including:

- The ConfigDocument aggregate and SystemInfo / ContactInfo blocks
- Link and Module definitions
- Module child records (presets, rockers, buttons, inputs, ...)
- Manufacturer, device kind, product and action name tables
"""

from upbeat.models.products import (
    UNKNOWN,
    action_name,
    kind_name,
    manufacturer_name,
    packet_type_name,
    product_name,
)
from upbeat.models.records import (
    Button,
    ChannelInfo,
    ConfigDocument,
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

__all__ = [
    # Enums
    "RecordType",
    # Document
    "ConfigDocument",
    "SystemInfo",
    "ContactInfo",
    "LinkDefinition",
    "Module",
    # Module Children
    "Preset",
    "Rocker",
    "Button",
    "Input",
    "ChannelInfo",
    "Vhc",
    "MemoryBlock",
    "KeypadIndicator",
    "Thermostat",
    # Lookups
    "UNKNOWN",
    "manufacturer_name",
    "kind_name",
    "product_name",
    "packet_type_name",
    "action_name",
]
