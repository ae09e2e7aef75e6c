"""
Tabular Writer

Serializes flat records into comma-separated text with a single header row.

Cell rules:
- strings are always double-quoted, embedded quotes doubled
- mappings and sequences are written as compact JSON, then quoted as strings
- numbers are written as-is, booleans as true/false
- missing values are empty cells
"""

from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Sequence

from .interchange import serialize_compact

DELIMITER = ","
LINE_SEPARATOR = "\n"


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def escape_cell(value: Any) -> str:
    """Render one cell value"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, str):
        return _quote(value)
    # Nested objects keep their structure in interchange form
    return _quote(serialize_compact(value))


def _header_cell(label: str) -> str:
    if any(ch in label for ch in (DELIMITER, '"', "\n", "\r")):
        return _quote(label)
    return label


class TabularWriter:
    """Comma-separated writer with stable column order"""

    def __init__(self, delimiter: str = DELIMITER, line_separator: str = LINE_SEPARATOR):
        self.delimiter = delimiter
        self.line_separator = line_separator

    def write_lines(
        self,
        header: Sequence[str],
        rows: Iterable[Mapping[str, Any]],
        keys: Optional[Sequence[str]] = None,
    ) -> Iterable[str]:
        """Yield the header line followed by one line per row"""
        keys = list(keys) if keys is not None else list(header)
        yield self.delimiter.join(_header_cell(label) for label in header)
        for row in rows:
            yield self.delimiter.join(escape_cell(row.get(key)) for key in keys)

    def write(
        self,
        header: Sequence[str],
        rows: Iterable[Mapping[str, Any]],
        keys: Optional[Sequence[str]] = None,
    ) -> str:
        """
        Write records as delimited text

        Args:
            header: Header labels, in output order
            rows: Records to write
            keys: Record keys matching each header label (defaults to the labels)

        Returns:
            Delimited text without a trailing line separator
        """
        if keys is not None and len(keys) != len(header):
            raise ValueError("Header and keys must have the same length")
        return self.line_separator.join(self.write_lines(header, rows, keys))


def write_tabular(header: Sequence[str], rows: Iterable[Mapping[str, Any]]) -> str:
    """Convenience function using the default writer"""
    return TabularWriter().write(header, rows)
