"""Tests for UPE export parsing."""

import logging

import pytest

from upbeat.exceptions import FormatError, ParseError
from upbeat.models.records import RecordType
from upbeat.parsers.csv_tokenizer import CsvRowTokenizer
from upbeat.parsers.upe_parser import (
    ConfigDocumentBuilder,
    SkippedRow,
    parse_upe,
    parse_upe_file,
)

SYSTEM_INFO = "0,5,1,2,1,1234"
LINK_ROW = "2,5,Evening"
MODULE_ROW = "3,10,1,80,5,3,1,1,1,6,0,Kitchen,Keypad,0"
BUTTON_ROW = "6,0,1,0,5,1,0,3,4,0,1,2,4,5,1"
PRESET_ROW = "4,0,0,0,5,100,3"


def export(*rows):
    return ("\n".join(rows) + "\n").encode("utf-8")


class TestParseUpe:
    """Tests for parse_upe."""

    def test_complete_document(self):
        """Test a small export with every section."""
        document = parse_upe(
            export(
                SYSTEM_INFO,
                "10,Acme Lighting,Pat,1 Main St,Springfield,IL,62701,555-0100,pat@example.com,,,example.com",
                "11,,Sam,,,,,,,,,",
                LINK_ROW,
                "2,6,Away",
                MODULE_ROW,
                BUTTON_ROW,
                "1",
            )
        )
        assert document.version == 5
        assert document.system_info.network_id == 1
        assert document.system_info.network_password == 1234
        assert document.installer.company == "Acme Lighting"
        assert document.installer.web == "example.com"
        assert document.customer.name == "Sam"
        assert document.customer.web == ""
        assert [link.name for link in document.links] == ["Evening", "Away"]
        assert len(document.modules) == 1
        module = document.modules[0]
        assert module.module_id == 10
        assert module.product_name == "38A00-1 6-Button Room Controller Keypad"
        assert module.room_name == "Kitchen"

    def test_child_attaches_to_current_module(self):
        """Test that a button row attaches to the module just created."""
        document = parse_upe(
            export(SYSTEM_INFO, MODULE_ROW, BUTTON_ROW, "3,11,1,32,5,1,0,3,1,0,1,Hall,Lamp,0", PRESET_ROW)
        )
        first, second = document.modules
        assert len(first.buttons) == 1
        assert first.buttons[0].link_id == 5
        assert first.buttons[0].hold_action == 3
        assert first.buttons[0].indicator_byte == 1
        assert first.presets == ()
        assert second.buttons == ()
        assert second.presets[0].dim_level == 100
        assert second.presets[0].fade_rate == 3

    def test_child_before_module_skipped(self, caplog):
        """Test that a child row with no module is dropped with a warning."""
        with caplog.at_level(logging.WARNING, logger="upbeat.parsers.upe_parser"):
            document = parse_upe(export(SYSTEM_INFO, BUTTON_ROW, MODULE_ROW))
        assert len(document.modules) == 1
        assert document.modules[0].buttons == ()
        assert "before any module" in caplog.text

    def test_child_before_module_strict(self):
        """Test that strict mode raises for a child row with no module."""
        with pytest.raises(ParseError) as exc_info:
            parse_upe(export(SYSTEM_INFO, BUTTON_ROW), strict=True)
        assert exc_info.value.row_number == 2
        assert exc_info.value.record_type == "BUTTON"

    def test_unsupported_version_stops(self):
        """Test that a version 6 export yields only system info."""
        document = parse_upe(export("0,6,1,2,1,1234", LINK_ROW, MODULE_ROW, BUTTON_ROW))
        assert document.version == 6
        assert document.system_info.total_links == 2
        assert document.links == ()
        assert document.modules == ()

    @pytest.mark.parametrize("header", ["0,6,1,1,300,0", "0,6,1,1,1,70000"])
    def test_unsupported_version_stops_with_invalid_columns(self, header):
        """Test that the version stop does not depend on the other columns."""
        document = parse_upe(export(header, LINK_ROW, MODULE_ROW, BUTTON_ROW))
        assert document.system_info is None
        assert document.links == ()
        assert document.modules == ()

    def test_unsupported_version_not_an_error(self):
        """Test that the version stop does not raise in strict mode."""
        document = parse_upe(export("0,4,0,0,1,0", LINK_ROW), strict=True)
        assert document.links == ()

    def test_rows_before_version_kept(self):
        """Test that rows applied before a mismatched header are kept."""
        document = parse_upe(export(LINK_ROW, "0,6,0,0,1,0", "2,6,Away"))
        assert [link.link_id for link in document.links] == [5]

    def test_too_few_fields_skipped(self):
        """Test that short rows are skipped and parsing continues."""
        document = parse_upe(export(SYSTEM_INFO, "2,5", MODULE_ROW, "6,0,1,0,5"))
        assert document.links == ()
        assert len(document.modules) == 1
        assert document.modules[0].buttons == ()

    def test_bad_integer_skipped(self):
        """Test that a non-integer column drops only that row."""
        document = parse_upe(export(SYSTEM_INFO, "2,five,Evening", "2,6,Away"))
        assert [link.link_id for link in document.links] == [6]

    def test_bad_integer_strict(self):
        """Test that strict mode raises for a non-integer column."""
        with pytest.raises(ParseError) as exc_info:
            parse_upe(export(SYSTEM_INFO, "2,five,Evening"), strict=True)
        assert exc_info.value.column == 1

    def test_out_of_range_value_skipped(self):
        """Test that model validation failures drop the row."""
        document = parse_upe(export(SYSTEM_INFO, "2,300,Evening"))
        assert document.links == ()

    def test_whitespace_around_integers(self):
        """Test that integer columns are stripped."""
        document = parse_upe(export(SYSTEM_INFO, " 2 , 5 ,Evening"))
        assert document.links[0].link_id == 5

    @pytest.mark.parametrize("tag", ["03", "+3", "3.0"])
    def test_tag_text_matched_exactly(self, tag):
        """Test that tags are compared as text, not as numbers."""
        row = tag + MODULE_ROW[1:]
        document = parse_upe(export(SYSTEM_INFO, row, LINK_ROW))
        assert document.modules == ()
        assert len(document.links) == 1

    def test_oversized_memory_field(self):
        """Test that a memory dump longer than the csv default limit is kept."""
        dump = "A0" * 70000
        document = parse_upe(export(SYSTEM_INFO, MODULE_ROW, f'12,0x0000,"{dump}"', LINK_ROW))
        assert document.modules[0].memory[0].data == dump
        assert len(document.links) == 1

    def test_unknown_and_reserved_tags_ignored(self):
        """Test unrecognized tags and icon records."""
        document = parse_upe(
            export(SYSTEM_INFO, "15,a,b", "99", "abc,1", "18,1,icon", "19,1,icon", LINK_ROW)
        )
        assert len(document.links) == 1

    def test_all_child_records(self):
        """Test that every child record type reaches its collection."""
        document = parse_upe(
            export(
                SYSTEM_INFO,
                MODULE_ROW,
                PRESET_ROW,
                "5,0,1,0,5,1,0,3,4,6,0,2,2,4",
                BUTTON_ROW,
                "7,0,1,0,5,1,0,6,0,1",
                "8,0,0,1,3",
                "9,0,1,0,8",
                '12,0x0100,"A0,B1",C2,D3',
                "13,0,1,0,5,255,0",
                "14,0,1,0,1.2,3.4,1,7,20,2",
            )
        )
        module = document.modules[0]
        assert module.presets[0].link_id == 5
        assert module.rockers[0].top_link_id == 5
        assert module.rockers[0].bottom_link_id == 6
        assert module.rockers[0].bottom_release_action == 4
        assert module.buttons[0].release_toggle_action == 4
        assert module.inputs[0].close_link_id == 6
        assert module.inputs[0].close_toggle_command_id == 1
        assert module.channel_info[0].is_dimmable
        assert module.channel_info[0].default_fade_rate == 3
        assert module.vhcs[0].transmit_command == 8
        assert module.memory[0].address == "0x0100"
        assert module.memory[0].data == "A0,B1,C2,D3"
        assert module.receive_indicators[0].mask1 == 255
        assert module.thermostats[0].firmware_version == "1.2"
        assert module.thermostats[0].wdu_version == "3.4"
        assert module.thermostats[0].setpoint_delta == 2

    def test_quoted_names(self):
        """Test names containing commas and quotes."""
        document = parse_upe(export(SYSTEM_INFO, '2,5,"Dinner, ""late"""'))
        assert document.links[0].name == 'Dinner, "late"'

    def test_empty_export(self):
        """Test that an empty export gives an empty document."""
        document = parse_upe(b"")
        assert document.system_info is None
        assert document.modules == ()

    def test_parse_upe_file(self, tmp_path):
        """Test reading an export from disk."""
        path = tmp_path / "house.upe"
        path.write_bytes(b"\xef\xbb\xbf" + export(SYSTEM_INFO, LINK_ROW))
        document = parse_upe_file(path)
        assert document.links[0].name == "Evening"


class TestConfigDocumentBuilder:
    """Tests for ConfigDocumentBuilder."""

    @pytest.fixture
    def builder(self):
        return ConfigDocumentBuilder()

    def test_every_record_type_handled(self, builder):
        """Test that each record type has an explicit handler."""
        assert builder.handled_record_types == frozenset(RecordType)

    def test_feed_returns_false_after_version_mismatch(self, builder):
        """Test that feeding stops after an unsupported version."""
        assert builder.feed(["0", "6", "0", "0", "1", "0"]) is False
        assert builder.is_halted
        assert builder.feed(LINK_ROW.split(",")) is False
        assert builder.rows_seen == 1
        assert builder.build().links == ()

    def test_current_module(self, builder):
        """Test the module that child rows attach to."""
        assert builder.current_module is None
        builder.feed(MODULE_ROW.split(","))
        assert builder.current_module.module_id == 10
        builder.feed("3,11,1,32,5,1,0,3,1,0,1,Hall,Lamp,0".split(","))
        assert builder.current_module.module_id == 11

    def test_skipped_rows(self, builder):
        """Test the trail of dropped rows."""
        builder.feed(SYSTEM_INFO.split(","))
        builder.feed(["2", "5"])
        builder.feed(BUTTON_ROW.split(","))
        skipped = builder.skipped_rows
        assert [row.row_number for row in skipped] == [2, 3]
        assert skipped[0].record_type == "LINK"
        assert "too few fields" in skipped[0].reason
        assert isinstance(skipped[1], SkippedRow)

    def test_explicit_row_numbers(self, builder):
        """Test that supplied row numbers are used in diagnostics."""
        builder.feed(["2", "x", "Bad"], row_number=42)
        assert builder.skipped_rows[0].row_number == 42

    def test_strict_builder(self):
        """Test that a strict builder raises instead of skipping."""
        builder = ConfigDocumentBuilder(strict=True)
        assert builder.strict
        with pytest.raises(ParseError):
            builder.feed(["3", "1"])

    def test_custom_supported_version(self):
        """Test accepting a different schema version."""
        builder = ConfigDocumentBuilder(supported_version=6)
        document = builder.feed_rows([["0", "6", "0", "1", "1", "0"], LINK_ROW.split(",")])
        assert document.version == 6
        assert len(document.links) == 1

    def test_build_is_repeatable(self, builder):
        """Test that build() can be called while feeding."""
        builder.feed(MODULE_ROW.split(","))
        builder.feed(BUTTON_ROW.split(","))
        first = builder.build()
        builder.feed(BUTTON_ROW.split(","))
        second = builder.build()
        assert len(first.modules[0].buttons) == 1
        assert len(second.modules[0].buttons) == 2

    def test_version_stop_with_invalid_columns_strict(self):
        """Test that a strict builder stops even when the header row is invalid."""
        builder = ConfigDocumentBuilder(strict=True)
        with pytest.raises(ParseError):
            builder.feed(["0", "6", "0", "0", "300", "0"])
        assert builder.is_halted
        assert builder.feed(LINK_ROW.split(",")) is False

    def test_untokenizable_line_skipped(self, builder):
        """Test that a line the tokenizer rejects is skipped and parsing continues."""
        tokenizer = CsvRowTokenizer(field_size_limit=16)
        data = export(SYSTEM_INFO, MODULE_ROW, "12,0x0000," + "A0" * 20, LINK_ROW)
        document = builder.feed_rows(tokenizer.tokenize(data, on_error=builder.reject_row))
        assert len(document.modules) == 1
        assert document.modules[0].memory == ()
        assert len(document.links) == 1
        assert [row.row_number for row in builder.skipped_rows] == [3]
        assert "field larger than field limit" in builder.skipped_rows[0].reason

    def test_reject_row_strict(self):
        """Test that a strict builder raises for an untokenizable line."""
        builder = ConfigDocumentBuilder(strict=True)
        with pytest.raises(FormatError):
            builder.reject_row(FormatError("Malformed UPE data near line 1"))
