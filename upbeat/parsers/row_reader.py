"""
RowReader - positional field reader over one tokenized UPE row.

UPE rows are fixed-column: each record type defines which column holds
which value. The reader gives typed access to those columns and reports
failures as ParseError carrying the record type, row number and column.

Example:
    >>> reader = RowReader(["2", "7", "Kitchen"], row_number=4)
    >>> reader.record_tag
    '2'
    >>> reader.int_at(1), reader.str_at(2)
    (7, 'Kitchen')
"""

from __future__ import annotations

from collections.abc import Sequence

from upbeat.exceptions import ParseError


class RowReader:
    """
    Reader for the fields of one UPE row.

    Column 0 always holds the record type tag. Columns are addressed by
    absolute index; a cursor is also kept for sequential reads.

    Attributes:
        fields: The row's field strings.
        row_number: 1-based row number within the export.
        position: Column the next sequential read will return.
    """

    __slots__ = ("_fields", "_row_number", "_position", "_record_type")

    def __init__(
        self,
        fields: Sequence[str],
        row_number: int | None = None,
        record_type: str | None = None,
    ) -> None:
        """
        Initialize the row reader.

        Args:
            fields: Field strings of the row.
            row_number: Row number used in error reports.
            record_type: Record name used in error reports.
        """
        self._fields = tuple(fields)
        self._row_number = row_number
        self._record_type = record_type
        self._position = 1

    @property
    def fields(self) -> tuple[str, ...]:
        return self._fields

    @property
    def row_number(self) -> int | None:
        return self._row_number

    @property
    def record_type(self) -> str | None:
        return self._record_type

    @record_type.setter
    def record_type(self, value: str | None) -> None:
        self._record_type = value

    @property
    def record_tag(self) -> str:
        """Raw record type tag (column 0), stripped."""
        return self._fields[0].strip() if self._fields else ""

    @property
    def position(self) -> int:
        return self._position

    @property
    def remaining(self) -> int:
        """Number of columns at or after the cursor."""
        return max(len(self._fields) - self._position, 0)

    def has_columns(self, count: int) -> bool:
        """Check if the row has at least `count` columns."""
        return len(self._fields) >= count

    def error(self, message: str, column: int | None = None) -> ParseError:
        """Build a ParseError describing this row."""
        return ParseError(
            message,
            record_type=self._record_type,
            row_number=self._row_number,
            column=column,
            raw_data=",".join(self._fields),
        )

    def _check_bounds(self, column: int, operation: str) -> None:
        if not 0 <= column < len(self._fields):
            raise self.error(
                f"Cannot {operation}: column {column} missing, row has {len(self._fields)} fields",
                column=column,
            )

    # ===== Absolute Access =====

    def str_at(self, column: int) -> str:
        """
        Read a text column verbatim.

        Raises:
            ParseError: If the column does not exist.
        """
        self._check_bounds(column, "read text")
        return self._fields[column]

    def optional_str_at(self, column: int, default: str = "") -> str:
        """Read a text column, returning the default if it is absent or empty."""
        if 0 <= column < len(self._fields):
            return self._fields[column] or default
        return default

    def int_at(self, column: int) -> int:
        """
        Read an integer column, ignoring surrounding whitespace.

        Raises:
            ParseError: If the column does not exist or is not an integer.
        """
        self._check_bounds(column, "read integer")
        text = self._fields[column].strip()
        try:
            return int(text, 10)
        except ValueError:
            raise self.error(f"Invalid integer {text!r}", column=column) from None

    def join_from(self, column: int, separator: str = ",") -> str:
        """Re-join every column from `column` to the end of the row."""
        return separator.join(self._fields[column:])

    # ===== Sequential Access =====

    def seek(self, column: int) -> None:
        """
        Move the cursor to an absolute column.

        Raises:
            ParseError: If the column is outside the row.
        """
        if not 0 <= column <= len(self._fields):
            raise self.error(
                f"Invalid seek column {column}, valid range is 0-{len(self._fields)}",
                column=column,
            )
        self._position = column

    def skip(self, count: int = 1) -> None:
        """Skip `count` columns."""
        self.seek(self._position + count)

    def read_int(self) -> int:
        """Read the integer at the cursor and advance."""
        value = self.int_at(self._position)
        self._position += 1
        return value

    def read_str(self) -> str:
        """Read the text at the cursor and advance."""
        value = self.str_at(self._position)
        self._position += 1
        return value

    def read_ints(self, count: int) -> list[int]:
        """Read `count` consecutive integers and advance."""
        return [self.read_int() for _ in range(count)]

    def __repr__(self) -> str:
        return (
            f"RowReader(row={self._row_number}, tag={self.record_tag!r}, "
            f"fields={len(self._fields)}, pos={self._position})"
        )

    def __len__(self) -> int:
        """Return the number of fields."""
        return len(self._fields)
