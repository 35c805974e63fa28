"""
CsvRowTokenizer - splits a UPE export into rows of string fields.

UPE files are written by spreadsheet-style CSV exporters, so tokenization
follows the same rules:

- Fields are separated by commas outside quotes
- A field may be wrapped in double quotes
- Inside quotes, a literal quote is written as two quotes
- A newline inside an open quoted field is kept in the field value
- A newline outside quotes ends the row
- The last row is emitted even without a trailing newline
- Blank lines produce no row

Example:
    >>> list(tokenize_rows(b'a,"b,c","d""e",f\\n'))
    [['a', 'b,c', 'd"e', 'f']]
"""

from __future__ import annotations

import csv
import io
from collections.abc import Callable, Iterator
from typing import Final

from upbeat.exceptions import FormatError

MAX_FIELD_SIZE: Final[int] = 2**31 - 1
"""Default field size limit, the largest value csv accepts on every platform."""

ErrorCallback = Callable[[FormatError], None]


class CsvRowTokenizer:
    """
    Tokenizer producing rows of string fields from UPE bytes.

    The tokenizer is stateless; each call to tokenize() returns an
    independent, lazy, single-pass iterator.

    Attributes:
        encoding: Text encoding of the export.
        errors: Codec error handler for undecodable bytes.
        field_size_limit: Longest field, in characters, the tokenizer accepts.
    """

    __slots__ = ("_encoding", "_errors", "_field_size_limit")

    def __init__(
        self,
        encoding: str = "utf-8-sig",
        errors: str = "replace",
        field_size_limit: int = MAX_FIELD_SIZE,
    ) -> None:
        """
        Initialize the tokenizer.

        Args:
            encoding: Text encoding; the default strips a UTF-8 BOM.
            errors: Codec error handler ("strict", "replace", ...).
            field_size_limit: Longest accepted field; a longer one makes its
                line malformed.
        """
        self._encoding = encoding
        self._errors = errors
        self._field_size_limit = field_size_limit

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def errors(self) -> str:
        return self._errors

    @property
    def field_size_limit(self) -> int:
        return self._field_size_limit

    def decode(self, data: bytes | bytearray | memoryview | str) -> str:
        """
        Decode raw export bytes to text.

        Raises:
            FormatError: If the bytes cannot be decoded under a strict handler.
        """
        if isinstance(data, str):
            return data
        try:
            return bytes(data).decode(self._encoding, errors=self._errors)
        except UnicodeDecodeError as e:
            raise FormatError(f"Cannot decode UPE data as {self._encoding}: {e}") from e

    def tokenize(
        self,
        data: bytes | bytearray | memoryview | str,
        on_error: ErrorCallback | None = None,
    ) -> Iterator[list[str]]:
        """
        Split export data into rows.

        A line the csv reader rejects (an oversized field, or a NUL byte on
        older interpreters) raises FormatError. If `on_error` is given, the
        error is passed to it instead and tokenizing resumes at the next line.

        Args:
            data: Raw export bytes (or already decoded text).
            on_error: Optional callback receiving malformed-line errors.

        Yields:
            Each non-blank row as a list of field strings.

        Raises:
            FormatError: If the data cannot be decoded, or a line is
                malformed and no `on_error` callback is given.
        """
        text = self.decode(data)
        reader = csv.reader(io.StringIO(text, newline=""), strict=False)
        previous_limit = csv.field_size_limit(self._field_size_limit)
        try:
            while True:
                try:
                    row = next(reader)
                except StopIteration:
                    return
                except csv.Error as e:
                    error = FormatError(f"Malformed UPE data near line {reader.line_num}: {e}")
                    if on_error is None:
                        raise error from e
                    on_error(error)
                    continue
                if row:
                    yield row
        finally:
            csv.field_size_limit(previous_limit)

    def __repr__(self) -> str:
        return (
            f"CsvRowTokenizer(encoding={self._encoding!r}, errors={self._errors!r}, "
            f"field_size_limit={self._field_size_limit})"
        )


DEFAULT_TOKENIZER: CsvRowTokenizer = CsvRowTokenizer()
"""Default CsvRowTokenizer instance for convenience."""


def tokenize_rows(data: bytes | bytearray | memoryview | str) -> Iterator[list[str]]:
    """
    Tokenize export data using the default tokenizer.

    Args:
        data: Raw export bytes (or already decoded text).

    Returns:
        Iterator over rows of field strings.
    """
    return DEFAULT_TOKENIZER.tokenize(data)
