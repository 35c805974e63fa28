"""
UPE lookup tables.

Numeric codes found in a UPE export (manufacturer, device kind, packet type,
product and action codes) and their display names. Every lookup is total
and returns UNKNOWN for a code that is not in its table.

Product ids are only unique per manufacturer, so product names are looked
up through the manufacturer's product family:

    PCS (1)                        PCS_PRODUCTS
    HAI (5)                        HAI_PRODUCTS
    MD Manufacturing (2)           MD_PRODUCTS
    Simply Automated (4), Web
    Mountain Tech (3), OEM (0,
    90-99)                         SAI_WMT_OEM_PRODUCTS
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final, Mapping

UNKNOWN: Final[str] = "Unknown"
"""Name returned for any unrecognized code."""


MANUFACTURERS: Final[Mapping[int, str]] = MappingProxyType({
    0: "OEM",
    1: "PCS",
    2: "MDManufacturing",
    3: "WebMountainTech",
    4: "SimplyAutomated",
    5: "HAI",
    10: "RCS",
    **{oem: f"OEM{oem}" for oem in range(90, 100)},
})

DEVICE_KINDS: Final[Mapping[int, str]] = MappingProxyType({
    0: "Other",
    1: "Keypad",
    2: "Switch",
    3: "Module",
    4: "Input Module",
    5: "Input-Output Module",
    6: "Vacuum Power Module",
    7: "Vacuum Handle Controller",
    8: "Thermostat",
})

PACKET_TYPES: Final[Mapping[int, str]] = MappingProxyType({
    0: "Direct",
    1: "Link",
})

PCS_PRODUCTS: Final[Mapping[int, str]] = MappingProxyType({
    1: "(WS1) Wall Switch - 1 Channel Switch",
    2: "(WS1R) Wall Switch – Relay Switch",
    3: "(WMC6) Wall Mount Controller - 6 Button Keypad",
    4: "(WMC8) Wall Mount Controller - 8 Button Keypad",
    6: "(OCM2) Output Control Module - 2 Channel Module",
    7: "(LCM1) Load Control Module 1 Module",
    9: "(LM1) Lamp Module - 1 Channel Module",
    10: "(LM2) Lamp Module – 2 Channel Module",
    11: "(ICM2) Input Control Module - 2 Channel Input",
    13: "(DTC6) Desktop Controller - 6 Button Keypad",
    14: "(DTC8) Desktop Controller - 8 Button Keypad",
    15: "(AM1) Appliance Module - 1 Channel Module",
    24: "(WS1E) Wall Switch - Electronic Low Voltage Switch",
    25: "(LSM) Load Shedding Module Module",
    36: "(DCM) Doorbell Control Module Input",
    37: "(TCM) Telephone Control Module Input",
    60: "(FMD2) Fixture Module – Dimmer Module",
    61: "(FMR) Fixture Module - Relay Module",
    62: "(WS2D) LED Wall Switch Switch",
    65: "(KPC6) Controller – 6 Button Keypad",
    66: "(KPC8) Controller – 8 Button Keypad",
})

HAI_PRODUCTS: Final[Mapping[int, str]] = MappingProxyType({
    1: "35A00-1 600W Dimming Switch",
    2: "35A00-2 1000W Dimming Switch",
    3: "55A00-1 1000W Dimming Switch",
    4: "55A00-2 1500W Dimming Switch",
    5: "55A00-3 2400W Dimming Switch",
    16: "35A00-3 600W Non-Dimming Switch",
    17: "35A00-4 1000W Non-Dimming Switch",
    18: "40A00-1 15A Relay Switch",
    32: "59A00-1 300W Lamp Module",
    48: "60A00-1 15A Appliance Module",
    80: "38A00-1 6-Button Room Controller Keypad",
    81: "HLCK6 6-Button Room Controller Keypad",
    96: "38A00-2 8-Button House Controller Keypad",
})

SAI_WMT_OEM_PRODUCTS: Final[Mapping[int, str]] = MappingProxyType({
    1: "UML Lamp Module Module",
    5: "UMA Appliance Module Module",
    7: "UFR Fixture Relay / URD Receptacle Switch or Module",
    9: "UMA Appliance Module – Timer Module",
    10: "UFD Fixture Dimmer Switch or Module",
    12: "UML Lamp Module – Timer Module",
    13: "UFR Fixture / URD Receptacle – Timer Switch or Module",
    14: "UFD Fixture Dimmer – Timer Switch or Module",
    15: "UCT Tabletop Controller Keypad",
    20: "USM1 Switch Motorized Switch",
    22: "US1 / US2 Series Dimming Switch Switch",
    26: "UCQ / UCQT Quad Output Module Module",
    27: "US4 Series Quad Dimming Switch Switch",
    28: "US1-40 Series Dimming Switch Switch",
    29: "US2-40 Series Dimming Switch Switch",
    30: "Serial PIM",
    31: "USB PIM",
    32: "Ethernet PIM",
    33: "Signal Quality Monitoring Unit",
    34: "US1-40 Series Dimming Switch – Timer Switch",
    36: "UCQTX Quad Output Module Module",
    40: "UMI-32 3-Input / 2-Output Module Input-Output Module",
    41: "Input Module",
    43: "Sprinker Controller",
    44: "USM1R Switch",
    45: "USM2R Switch",
    50: "UQC",
    51: "UQC 40",
    52: "UQC F",
    62: "US22-40T Series Dimming Switch Switch",
    201: "Lamp Module (UML-E) Module",
    205: "Appliance Module (UMA-E) Module",
    222: "Retail Dimming Switch (RS101) Switch",
    240: "Retail I/O 32 Module Input-Output Module",
})

MD_PRODUCTS: Final[Mapping[int, str]] = MappingProxyType({
    32: "(VHC) Vacuum Handle Controller",
    33: "(VPM) Vacuum Power Module",
    35: "(VIM) Vacuum Input Module",
    36: "(DSM) Doorbell Sense Module",
    37: "(TSM) Telephone Sense Module",
})

UPB_ACTIONS: Final[Mapping[int, str]] = MappingProxyType({
    0: "Goto Off",
    1: "Goto On",
    2: "Fade Down",
    3: "Fade Up",
    4: "Fade Stop",
    5: "Deactivate",
    6: "Activate",
    7: "Snap Off",
    8: "Snap On",
    9: "Quick Off",
    10: "Quick On",
    11: "Slow Off",
    12: "Slow On",
    13: "Blink",
    14: "Null",
    15: "No Command",
})

_PRODUCT_FAMILIES: Final[Mapping[int, Mapping[int, str]]] = MappingProxyType({
    0: SAI_WMT_OEM_PRODUCTS,
    1: PCS_PRODUCTS,
    2: MD_PRODUCTS,
    3: SAI_WMT_OEM_PRODUCTS,
    4: SAI_WMT_OEM_PRODUCTS,
    5: HAI_PRODUCTS,
    **{oem: SAI_WMT_OEM_PRODUCTS for oem in range(90, 100)},
})


def manufacturer_name(manufacturer_id: int) -> str:
    """Display name for a manufacturer id."""
    return MANUFACTURERS.get(manufacturer_id, UNKNOWN)


def kind_name(device_type: int) -> str:
    """Display name for a module's device kind."""
    return DEVICE_KINDS.get(device_type, UNKNOWN)


def packet_type_name(packet_type: int) -> str:
    """Display name for a module's packet type."""
    return PACKET_TYPES.get(packet_type, UNKNOWN)


def product_name(manufacturer_id: int, product_id: int) -> str:
    """
    Display name for a product.

    Args:
        manufacturer_id: Manufacturer id selecting the product family.
        product_id: Product id within that family.

    Returns:
        Product name, or UNKNOWN if either id is not recognized.

    Example:
        >>> product_name(5, 32)
        '59A00-1 300W Lamp Module'
    """
    family = _PRODUCT_FAMILIES.get(manufacturer_id)
    if family is None:
        return UNKNOWN
    return family.get(product_id, UNKNOWN)


def action_name(action: int) -> str:
    """Display name for a UPB action code (button, rocker and input actions)."""
    return UPB_ACTIONS.get(action, UNKNOWN)
