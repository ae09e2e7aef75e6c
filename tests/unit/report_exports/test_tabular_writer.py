"""
Test comma-separated output
"""
import pytest

from report_exports.tabular_writer import TabularWriter, escape_cell, write_tabular

pytestmark = pytest.mark.unit


class TestEscapeCell:
    """Test per-cell escaping rules"""

    def test_string_with_quotes_and_delimiter(self):
        assert escape_cell('She said "hi", bye') == '"She said ""hi"", bye"'

    def test_plain_string_is_quoted(self):
        assert escape_cell("delivered") == '"delivered"'

    def test_numbers_written_as_is(self):
        assert escape_cell(0) == "0"
        assert escape_cell(12.5) == "12.5"

    def test_booleans(self):
        assert escape_cell(True) == "true"
        assert escape_cell(False) == "false"

    def test_missing_value(self):
        assert escape_cell(None) == ""

    def test_nested_object_is_json(self):
        assert escape_cell({"name": "Crafts"}) == '"{""name"":""Crafts""}"'
        assert escape_cell([1, 2]) == '"[1,2]"'


class TestTabularWriter:
    """Test full document output"""

    def test_header_then_rows(self):
        text = write_tabular(["name", "orders"], [{"name": "Jute Bag", "orders": 3}, {"name": "Clay Pot"}])

        assert text == 'name,orders\n"Jute Bag",3\n"Clay Pot",'

    def test_no_trailing_newline(self):
        text = write_tabular(["name"], [{"name": "A"}])
        assert not text.endswith("\n")

    def test_header_only_when_no_rows(self):
        assert write_tabular(["period", "revenue"], []) == "period,revenue"

    def test_header_quoted_only_when_needed(self):
        text = write_tabular(["Change, %", "Orders"], [])
        assert text == '"Change, %",Orders'

    def test_labels_with_separate_keys(self):
        writer = TabularWriter()

        text = writer.write(
            ["Order #", "Amount"],
            [{"orderNumber": "A1", "totalAmount": "BDT 10.00"}],
            keys=["orderNumber", "totalAmount"],
        )

        assert text == 'Order #,Amount\n"A1","BDT 10.00"'

    def test_mismatched_keys(self):
        with pytest.raises(ValueError):
            TabularWriter().write(["a", "b"], [], keys=["a"])

    def test_line_count_matches_records(self):
        rows = [{"name": f"Item {index}", "note": "multi\nline"} for index in range(3)]

        lines = list(TabularWriter().write_lines(["name", "note"], rows))

        assert len(lines) == 4

    def test_custom_delimiter(self):
        writer = TabularWriter(delimiter=";", line_separator="\r\n")

        assert writer.write(["a", "b"], [{"a": 1, "b": "x"}]) == 'a;b\r\n1;"x"'
