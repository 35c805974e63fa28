"""
UPE export parsing.

ConfigDocumentBuilder folds tokenized rows into a ConfigDocument in a
single pass. Every row is dispatched on its record type tag:

- 0 (begin of file): system info; a schema version other than the
  supported one stops processing right after this row
- 1 (end of file): marker, ignored
- 2 (link), 3 (module): appended to the document; a module row also
  becomes the current module
- 4-9, 12-14: child records attached to the current module
- 10, 11: installer / customer contact blocks
- 18, 19: room / device icons, reserved and ignored
- anything else (including "03" or "+3"): unrecognized, ignored

A malformed row (too few fields, bad integer, child with no module, or a
line the tokenizer rejects) is skipped with a warning and recorded in
skipped_rows. With strict=True the error propagates instead.

Example:
    >>> document = parse_upe(open("house.upe", "rb").read())
    >>> for module in document.modules:
    ...     print(module.module_id, module.device_name, len(module.buttons))
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Final

from upbeat.exceptions import FormatError, ParseError
from upbeat.models.records import (
    ConfigDocument,
    ContactInfo,
    LinkDefinition,
    Module,
    RecordType,
    SystemInfo,
)
from upbeat.parsers import record_parsers
from upbeat.parsers.csv_tokenizer import CsvRowTokenizer
from upbeat.parsers.row_reader import RowReader

logger = logging.getLogger(__name__)


class UpeConstants:
    """UPE format constants."""

    SUPPORTED_VERSION: Final[int] = 5
    """Only schema version the parser accepts."""

    DEFAULT_ENCODING: Final[str] = "utf-8-sig"
    """Export text encoding (a leading BOM is dropped)."""


@dataclass(frozen=True)
class SkippedRow:
    """
    A row the builder dropped.

    Attributes:
        row_number: 1-based row number within the export.
        record_type: Record type name (or raw tag) of the row.
        reason: Why the row was dropped.
    """

    row_number: int
    record_type: str
    reason: str


# Record type for each tag text
_RECORD_TAGS: Final[dict[str, RecordType]] = {str(int(t)): t for t in RecordType}

# Module child collection fed by each child record type
_CHILD_COLLECTIONS: Final[dict[RecordType, tuple[str, Callable[[RowReader], object]]]] = {
    RecordType.PRESET: ("presets", record_parsers.parse_preset),
    RecordType.ROCKER: ("rockers", record_parsers.parse_rocker),
    RecordType.BUTTON: ("buttons", record_parsers.parse_button),
    RecordType.INPUT: ("inputs", record_parsers.parse_input),
    RecordType.CHANNEL_INFO: ("channel_info", record_parsers.parse_channel_info),
    RecordType.VHC: ("vhcs", record_parsers.parse_vhc),
    RecordType.MEMORY: ("memory", record_parsers.parse_memory),
    RecordType.KEYPAD_INDICATOR: ("receive_indicators", record_parsers.parse_keypad_indicator),
    RecordType.THERMOSTAT: ("thermostats", record_parsers.parse_thermostat),
}


class ConfigDocumentBuilder:
    """
    Single-pass builder turning UPE rows into a ConfigDocument.

    The builder owns the document under construction. The current module
    is tracked as an index into the module list; child rows are collected
    per module and attached when build() is called.

    A builder parses one export. Use a new instance per input.

    Example:
        >>> builder = ConfigDocumentBuilder()
        >>> for row in tokenize_rows(data):
        ...     if not builder.feed(row):
        ...         break
        >>> document = builder.build()
    """

    def __init__(
        self,
        supported_version: int = UpeConstants.SUPPORTED_VERSION,
        strict: bool = False,
    ) -> None:
        """
        Initialize the builder.

        Args:
            supported_version: Schema version to accept; any other version
                stops processing after the begin-of-file row.
            strict: Raise ParseError for malformed rows instead of skipping.
        """
        self._supported_version = supported_version
        self._strict = strict

        self._system_info: SystemInfo | None = None
        self._installer = ContactInfo()
        self._customer = ContactInfo()
        self._links: list[LinkDefinition] = []
        self._modules: list[Module] = []
        self._children: list[dict[str, list[object]]] = []
        self._current_index: int | None = None

        self._row_count = 0
        self._halted = False
        self._skipped: list[SkippedRow] = []

        self._handlers: dict[RecordType, Callable[[RowReader], None]] = {
            RecordType.BEGIN_OF_FILE: self._apply_system_info,
            RecordType.END_OF_FILE: self._apply_end_of_file,
            RecordType.LINK: self._apply_link,
            RecordType.MODULE: self._apply_module,
            RecordType.INSTALLER: partial(self._apply_contact, "installer"),
            RecordType.CUSTOMER: partial(self._apply_contact, "customer"),
            RecordType.ROOM_ICON: self._apply_reserved,
            RecordType.DEVICE_ICON: self._apply_reserved,
            **{
                record_type: partial(self._apply_child, record_type)
                for record_type in _CHILD_COLLECTIONS
            },
        }

    # ===== State =====

    @property
    def supported_version(self) -> int:
        return self._supported_version

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def is_halted(self) -> bool:
        """True once a schema version mismatch has stopped processing."""
        return self._halted

    @property
    def rows_seen(self) -> int:
        return self._row_count

    @property
    def skipped_rows(self) -> tuple[SkippedRow, ...]:
        return tuple(self._skipped)

    @property
    def current_module(self) -> Module | None:
        """Module that child rows currently attach to (without its children)."""
        if self._current_index is None:
            return None
        return self._modules[self._current_index]

    @property
    def handled_record_types(self) -> frozenset[RecordType]:
        return frozenset(self._handlers)

    # ===== Row Processing =====

    def feed(self, row: Sequence[str], row_number: int | None = None) -> bool:
        """
        Apply one tokenized row.

        Args:
            row: Field strings; column 0 is the record type tag.
            row_number: Row number for diagnostics; defaults to a running count.

        Returns:
            False if processing has stopped (schema version mismatch),
            True if more rows may be fed.

        Raises:
            ParseError: In strict mode, if the row is malformed.
        """
        if self._halted:
            return False

        self._row_count += 1
        if row_number is None:
            row_number = self._row_count

        reader = RowReader(row, row_number=row_number)
        tag = reader.record_tag
        record_type = _RECORD_TAGS.get(tag)
        if record_type is None:
            logger.debug("Row %d: unrecognized record type %r, ignored", row_number, tag)
            return True

        reader.record_type = record_type.name
        try:
            record_parsers.check_field_count(reader, record_type)
            self._handlers[record_type](reader)
        except ParseError as e:
            if self._strict:
                raise
            self._skip(row_number, record_type.name, e)

        return not self._halted

    def feed_rows(self, rows: Iterable[Sequence[str]]) -> ConfigDocument:
        """
        Apply rows until they run out or processing stops, then build.

        Rows after a schema version mismatch are not consumed.
        """
        for row in rows:
            if not self.feed(row):
                break
        return self.build()

    def build(self) -> ConfigDocument:
        """
        Assemble the document parsed so far.

        May be called at any point; the builder keeps its state.
        """
        modules = tuple(
            module.model_copy(
                update={name: tuple(items) for name, items in children.items()}
            )
            for module, children in zip(self._modules, self._children)
        )
        return ConfigDocument(
            system_info=self._system_info,
            installer=self._installer,
            customer=self._customer,
            links=tuple(self._links),
            modules=modules,
        )

    def reject_row(self, error: FormatError) -> None:
        """
        Account for a line the tokenizer could not split into fields.

        The line takes the next row number and is recorded as skipped.

        Raises:
            FormatError: In strict mode.
        """
        if self._strict:
            raise error
        self._row_count += 1
        self._skip(self._row_count, "", error)

    def _skip(self, row_number: int, record_type: str, error: FormatError) -> None:
        logger.warning("Skipping row %d: %s", row_number, error)
        self._skipped.append(SkippedRow(row_number, record_type, str(error)))

    # ===== Record Handlers =====

    def _apply_system_info(self, reader: RowReader) -> None:
        # The halt depends on the version column alone
        version = reader.int_at(1)
        if version != self._supported_version:
            logger.warning(
                "UPE file version is %d, must be %d; stopping at row %s",
                version,
                self._supported_version,
                reader.row_number,
            )
            self._halted = True
        self._system_info = record_parsers.parse_system_info(reader)

    def _apply_end_of_file(self, reader: RowReader) -> None:
        logger.debug("Row %s: end of configuration", reader.row_number)

    def _apply_link(self, reader: RowReader) -> None:
        self._links.append(record_parsers.parse_link(reader))

    def _apply_module(self, reader: RowReader) -> None:
        module = record_parsers.parse_module(reader)
        self._modules.append(module)
        self._children.append({})
        self._current_index = len(self._modules) - 1
        logger.debug("Row %s: module %d (%s)", reader.row_number, module.module_id, module.device_name)

    def _apply_child(self, record_type: RecordType, reader: RowReader) -> None:
        if self._current_index is None:
            raise reader.error(f"{record_type.name} record appears before any module record")
        collection, parse = _CHILD_COLLECTIONS[record_type]
        record = parse(reader)
        self._children[self._current_index].setdefault(collection, []).append(record)

    def _apply_contact(self, which: str, reader: RowReader) -> None:
        contact = record_parsers.parse_contact(reader)
        if which == "installer":
            self._installer = contact
        else:
            self._customer = contact

    def _apply_reserved(self, reader: RowReader) -> None:
        logger.debug("Row %s: reserved record %s ignored", reader.row_number, reader.record_type)


def parse_upe(
    data: bytes | bytearray | memoryview | str,
    *,
    encoding: str = UpeConstants.DEFAULT_ENCODING,
    supported_version: int = UpeConstants.SUPPORTED_VERSION,
    strict: bool = False,
) -> ConfigDocument:
    """
    Parse a complete UPE export.

    Args:
        data: Export bytes (or already decoded text).
        encoding: Text encoding of the export.
        supported_version: Schema version to accept.
        strict: Raise ParseError for malformed rows instead of skipping.

    Returns:
        The parsed ConfigDocument. On a schema version mismatch this holds
        only what was parsed up to and including the begin-of-file row.

    A line that cannot be tokenized is skipped like a malformed row.

    Raises:
        FormatError: If the data cannot be decoded, or in strict mode for
            a line that cannot be tokenized.
        ParseError: In strict mode, for the first malformed row.
    """
    tokenizer = CsvRowTokenizer(encoding=encoding)
    builder = ConfigDocumentBuilder(supported_version=supported_version, strict=strict)
    document = builder.feed_rows(tokenizer.tokenize(data, on_error=builder.reject_row))
    if builder.skipped_rows:
        logger.warning("UPE parse finished with %d skipped rows", len(builder.skipped_rows))
    return document


def parse_upe_file(
    path: str | Path,
    *,
    encoding: str = UpeConstants.DEFAULT_ENCODING,
    supported_version: int = UpeConstants.SUPPORTED_VERSION,
    strict: bool = False,
) -> ConfigDocument:
    """
    Read and parse a UPE export file.

    Raises:
        OSError: If the file cannot be read.
    """
    return parse_upe(
        Path(path).read_bytes(),
        encoding=encoding,
        supported_version=supported_version,
        strict=strict,
    )
