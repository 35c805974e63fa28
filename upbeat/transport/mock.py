"""
Mock transport for testing.

MockTransport records every written PIM message and serves replies from a
queue or from a response callback. SimulatedPim is a ready-made callback
that answers register reads/writes and transmit requests the way a PIM in
message mode does.

Example:
    >>> mock = MockTransport()
    >>> mock.set_response_callback(SimulatedPim())
    >>> async with mock:
    ...     await mock.write(encode_message_mode())
    ...     result, reply = await mock.read_message()
    ...     assert reply.is_accept
"""

from __future__ import annotations

from collections import deque
from typing import Callable

from upbeat.exceptions import TimeoutError, TransportError
from upbeat.protocol.checksums import validate_checksum
from upbeat.protocol.constants import (
    AckFlag,
    PimCommand,
    PimConstants,
    PimResponseType,
    ProtocolConstants,
)
from upbeat.protocol.control_word import decode_control_word
from upbeat.protocol.encoding import encode_hex, hex_to_bytes
from upbeat.transport.abc import AbstractTransport

ResponseCallback = Callable[[bytes], "bytes | None"]


def _reply(response_type: PimResponseType, payload: bytes = b"") -> bytes:
    return response_type.value.encode("ascii") + payload + bytes([PimConstants.EOM])


class SimulatedPim:
    """
    Response callback emulating a PIM in message mode.

    - Read register: PR with the current register values
    - Write register: PA, and the registers are updated
    - Transmit message: PA, followed by PK when the packet requests an
      acknowledgment pulse (or PN if `nak` is set)
    - Anything malformed: PE

    Attributes:
        registers: The simulated 256-byte register file.
        transmitted: UPB packets accepted for transmission.
    """

    def __init__(self, registers: dict[int, int] | None = None, nak: bool = False) -> None:
        self.registers = bytearray(256)
        for register, value in (registers or {}).items():
            self.registers[register] = value
        self.nak = nak
        self.transmitted: list[bytes] = []

    def __call__(self, data: bytes) -> bytes | None:
        if len(data) < 2 or data[-1] != PimConstants.EOM:
            return _reply(PimResponseType.ERROR)
        try:
            command = PimCommand(data[0])
            body = hex_to_bytes(data[1:-1])
        except ValueError:
            return _reply(PimResponseType.ERROR)

        if command == PimCommand.TRANSMIT_MESSAGE:
            return self._transmit(body)
        if not body or not validate_checksum(body):
            return _reply(PimResponseType.ERROR)
        if command == PimCommand.READ_REGISTER:
            return self._read_register(body[:-1])
        return self._write_register(body[:-1])

    def _transmit(self, packet: bytes) -> bytes:
        if len(packet) < ProtocolConstants.MIN_PACKET_LENGTH or not validate_checksum(packet):
            return _reply(PimResponseType.ERROR)
        self.transmitted.append(packet)
        reply = _reply(PimResponseType.ACCEPT)
        control = decode_control_word((packet[0] << 8) | packet[1])
        if control.ack_flags & AckFlag.PULSE:
            reply += _reply(PimResponseType.NAK if self.nak else PimResponseType.ACK)
        return reply

    def _read_register(self, args: bytes) -> bytes:
        if len(args) != 2:
            return _reply(PimResponseType.ERROR)
        register, count = args
        values = bytes(self.registers[register:register + count])
        return _reply(PimResponseType.REGISTER_REPORT, encode_hex(bytes([register]) + values))

    def _write_register(self, args: bytes) -> bytes:
        if len(args) < 2:
            return _reply(PimResponseType.ERROR)
        register = args[0]
        values = args[1:]
        self.registers[register:register + len(values)] = values
        return _reply(PimResponseType.ACCEPT)


class MockTransport(AbstractTransport):
    """
    Mock transport for testing without a PIM.

    Replies are taken from the response callback first, then from the queue
    in FIFO order. Everything written is recorded for verification.

    Attributes:
        written_data: List of all messages written to the transport.
    """

    def __init__(
        self,
        port_name: str = "mock://pim",
        default_timeout: float = 5.0,
    ) -> None:
        """
        Initialize the mock transport.

        Args:
            port_name: Identifier for the mock link.
            default_timeout: Reported timeout for reads (no real waiting).
        """
        self._port_name = port_name
        self._default_timeout = default_timeout
        self._is_open = False
        self._responses: deque[bytes] = deque()
        self._written_data: list[bytes] = []
        self._read_buffer = bytearray()
        self._response_callback: ResponseCallback | None = None

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def port_name(self) -> str:
        return self._port_name

    @property
    def default_timeout(self) -> float:
        return self._default_timeout

    @property
    def written_data(self) -> list[bytes]:
        """Copy of all data written to the transport."""
        return self._written_data.copy()

    @property
    def last_written(self) -> bytes | None:
        return self._written_data[-1] if self._written_data else None

    def add_response(self, response: bytes) -> None:
        """Queue a reply for a later read."""
        self._responses.append(response)

    def add_responses(self, *responses: bytes) -> None:
        for response in responses:
            self._responses.append(response)

    def set_response_callback(self, callback: ResponseCallback | None) -> None:
        """
        Set a callback generating replies from written data.

        If the callback returns None, nothing is added to the read buffer
        and queued responses are used as usual.
        """
        self._response_callback = callback

    def clear(self) -> None:
        """Clear written data, queued replies and the read buffer."""
        self._written_data.clear()
        self._responses.clear()
        self._read_buffer.clear()

    async def open(self) -> None:
        if self._is_open:
            raise TransportError("Mock transport already open")
        self._is_open = True

    async def close(self) -> None:
        self._is_open = False

    def _check_open(self) -> None:
        if not self._is_open:
            raise TransportError("Mock transport not open")

    async def write(self, data: bytes) -> None:
        """
        Record the written data and run the response callback.

        Raises:
            TransportError: If the transport is not open.
        """
        self._check_open()
        self._written_data.append(bytes(data))

        if self._response_callback:
            response = self._response_callback(bytes(data))
            if response is not None:
                self._read_buffer.extend(response)

    def _fill(self, enough: Callable[[], bool]) -> None:
        while not enough() and self._responses:
            self._read_buffer.extend(self._responses.popleft())

    async def read_until(
        self,
        terminator: int = PimConstants.EOM,
        timeout: float | None = None,
    ) -> bytes:
        """
        Read through the next terminator.

        Raises:
            TimeoutError: If no terminator is buffered or queued.
            TransportError: If the transport is not open.
        """
        self._check_open()
        self._fill(lambda: terminator in self._read_buffer)
        if terminator not in self._read_buffer:
            raise TimeoutError(
                "No mock response available",
                timeout_seconds=timeout if timeout is not None else self._default_timeout,
            )
        end = self._read_buffer.index(terminator) + 1
        result = bytes(self._read_buffer[:end])
        del self._read_buffer[:end]
        return result

    async def read(self, size: int, timeout: float | None = None) -> bytes:
        """
        Read exactly `size` bytes.

        Raises:
            TimeoutError: If not enough data is buffered or queued.
            TransportError: If the transport is not open.
        """
        self._check_open()
        self._fill(lambda: len(self._read_buffer) >= size)
        if len(self._read_buffer) < size:
            raise TimeoutError(
                f"Not enough mock data: need {size}, have {len(self._read_buffer)}",
                timeout_seconds=timeout if timeout is not None else self._default_timeout,
            )
        result = bytes(self._read_buffer[:size])
        del self._read_buffer[:size]
        return result

    async def read_byte(self, timeout: float | None = None) -> int:
        return (await self.read(1, timeout))[0]

    def discard_buffers(self) -> None:
        self._read_buffer.clear()

    def assert_written(self, expected: bytes, index: int = -1) -> None:
        """
        Assert that specific data was written.

        Raises:
            AssertionError: If nothing was written or the data differs.
        """
        if not self._written_data:
            raise AssertionError("No data written to mock transport")
        actual = self._written_data[index]
        if actual != expected:
            raise AssertionError(f"Written data mismatch: expected {expected!r}, got {actual!r}")

    def assert_write_count(self, expected: int) -> None:
        actual = len(self._written_data)
        if actual != expected:
            raise AssertionError(f"Write count mismatch: expected {expected}, got {actual}")
