"""Minimal reader of "name": "value" pairs from a flat JSON object."""

from __future__ import annotations

JSON_ROW_FORMAT = '{{"{}": "{}"}}'
JSON_TWO_ROW_FORMAT = '{{"{}": "{}", "{}": "{}"}}'


class JsonFormatError(ValueError):
    """Raised when the text holds no further complete field."""


class JsonFieldParser:
    """Reads successive string fields from a JSON object text.

    Field names end at the next quote; values end at the next quote not
    escaped by an odd number of backslashes. Values are returned raw.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def _find_quote(self, start: int) -> int:
        index = self._text.find('"', start)
        if index == -1:
            raise JsonFormatError("expected a quote")
        return index

    def _closing_quote(self, start: int) -> int:
        pos = start
        while (quote := self._text.find('"', pos)) != -1:
            preceding = self._text[start:quote]
            backslashes = len(preceding) - len(preceding.rstrip("\\"))
            if backslashes % 2 == 0:
                return quote
            pos = quote + 1
        raise JsonFormatError("unterminated value")

    def next_field(self) -> tuple[str, str]:
        """Return the next (name, value) pair and advance past it."""
        name_start = self._find_quote(self._pos) + 1
        name_end = self._find_quote(name_start)
        value_start = self._find_quote(name_end + 1) + 1
        value_end = self._closing_quote(value_start)
        self._pos = value_end + 1
        return self._text[name_start:name_end], self._text[value_start:value_end]


def format_row(name: str, value: str) -> str:
    """Render a one-field JSON object."""
    return JSON_ROW_FORMAT.format(name, value)


def format_two_rows(first_name: str, first_value: str, second_name: str, second_value: str) -> str:
    """Render a two-field JSON object."""
    return JSON_TWO_ROW_FORMAT.format(first_name, first_value, second_name, second_value)