"""
Parsers for UPE configuration exports.

This module contains:
- CsvRowTokenizer for splitting an export into rows
- RowReader for typed, positional access to a row's fields
- Per-record-type row parsers
- ConfigDocumentBuilder and parse_upe() for building a ConfigDocument
"""

from upbeat.parsers.csv_tokenizer import DEFAULT_TOKENIZER, CsvRowTokenizer, tokenize_rows
from upbeat.parsers.record_parsers import MIN_FIELD_COUNTS
from upbeat.parsers.row_reader import RowReader
from upbeat.parsers.upe_parser import (
    ConfigDocumentBuilder,
    SkippedRow,
    UpeConstants,
    parse_upe,
    parse_upe_file,
)

__all__ = [
    # Tokenizer
    "CsvRowTokenizer",
    "DEFAULT_TOKENIZER",
    "tokenize_rows",
    # Rows
    "RowReader",
    "MIN_FIELD_COUNTS",
    # Builder
    "ConfigDocumentBuilder",
    "SkippedRow",
    "UpeConstants",
    "parse_upe",
    "parse_upe_file",
]
