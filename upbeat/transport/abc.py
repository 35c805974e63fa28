"""
Abstract byte-sink interface for talking to a PIM.

The codec never performs I/O. Callers that build a packet and wrap it in a
PIM message hand the bytes to a transport implementing this interface, and
read the PIM's CR-terminated replies back from it.

The transport layer is responsible for:
- Opening/closing the link to the PIM (serial port, TCP socket, ...)
- Reading and writing raw bytes
- Timeout handling
- Buffer management

No concrete serial or network transport ships with the library;
MockTransport is provided for tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from upbeat.protocol.constants import PimConstants
from upbeat.protocol.pim import DEFAULT_PIM_READER, PimMessage, PimParseError, PimParseResult

if TYPE_CHECKING:
    from types import TracebackType


class AbstractTransport(ABC):
    """
    Abstract base class for PIM transports.

    Transports support the async context manager protocol:

        async with transport:
            await transport.write(encode_transmit_message(packet))
            result, reply = await transport.read_message()

    Attributes:
        is_open: Whether the link is currently open.
        port_name: Identifier for the link (device path, host:port, ...).
    """

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """True if the link is open and ready for I/O."""
        ...

    @property
    @abstractmethod
    def port_name(self) -> str:
        """Identifier of the link."""
        ...

    @abstractmethod
    async def open(self) -> None:
        """
        Open the link.

        Raises:
            TransportError: If the link cannot be opened or is already open.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """
        Close the link. Safe to call multiple times.
        """
        ...

    @abstractmethod
    async def write(self, data: bytes) -> None:
        """
        Write a complete PIM message.

        Args:
            data: Bytes to send, including the trailing CR.

        Raises:
            TransportError: If the link is not open or the write fails.
        """
        ...

    @abstractmethod
    async def read_until(
        self,
        terminator: int = PimConstants.EOM,
        timeout: float | None = None,
    ) -> bytes:
        """
        Read until a terminator byte is received.

        Args:
            terminator: Byte value ending the read (default CR).
            timeout: Timeout in seconds; None uses the transport default.

        Returns:
            Bytes read including the terminator.

        Raises:
            TimeoutError: If the terminator does not arrive in time.
            TransportError: If the link is not open or the read fails.
        """
        ...

    @abstractmethod
    async def read(self, size: int, timeout: float | None = None) -> bytes:
        """
        Read exactly `size` bytes.

        Raises:
            TimeoutError: If not enough bytes arrive in time.
            TransportError: If the link is not open or the read fails.
        """
        ...

    @abstractmethod
    async def read_byte(self, timeout: float | None = None) -> int:
        """
        Read a single byte.

        Raises:
            TimeoutError: If no byte arrives in time.
            TransportError: If the link is not open or the read fails.
        """
        ...

    @abstractmethod
    def discard_buffers(self) -> None:
        """Drop any pending received or unsent data."""
        ...

    async def read_message(
        self,
        timeout: float | None = None,
    ) -> tuple[PimParseResult, PimMessage | PimParseError]:
        """
        Read and decode one CR-terminated PIM message.

        Args:
            timeout: Timeout in seconds; None uses the transport default.

        Returns:
            Tuple of (result, message_or_error) as from PimMessageReader.

        Raises:
            TimeoutError: If no complete message arrives in time.
            TransportError: If the link is not open or the read fails.
        """
        data = await self.read_until(PimConstants.EOM, timeout=timeout)
        return DEFAULT_PIM_READER.parse(data)

    async def __aenter__(self) -> AbstractTransport:
        """Async context manager entry - opens the link."""
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit - closes the link."""
        await self.close()
