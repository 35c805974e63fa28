"""
Transport layer for PIM communication.

The codec never does I/O; a transport is the byte sink a caller hands PIM
messages to, and the source it reads the PIM's replies from.

Available transports:
- AbstractTransport: interface for serial or network links to a PIM
- MockTransport: in-memory transport for testing without hardware
- SimulatedPim: response callback emulating a PIM in message mode

Testing Example:
    >>> from upbeat.transport import MockTransport, SimulatedPim
    >>> mock = MockTransport()
    >>> mock.set_response_callback(SimulatedPim(registers={0x70: 0x02}))
"""

from upbeat.transport.abc import AbstractTransport
from upbeat.transport.mock import MockTransport, SimulatedPim

__all__ = [
    "AbstractTransport",
    "MockTransport",
    "SimulatedPim",
]
