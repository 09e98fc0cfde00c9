"""Helpers for reading the lines of a scene file."""

from __future__ import annotations

WHITESPACE = " \t\n\v\f\r"
TAB_WIDTH = 4


def is_white_space_line(line: str | None) -> bool:
    """True for a missing or empty line, or one made only of whitespace."""
    return not line or all(c in WHITESPACE for c in line)


def _skip_spaces(line: str, index: int) -> int:
    while index < len(line) and line[index] == " ":
        index += 1
    return index


def start_of_texture(line: str) -> int:
    """Index of the value following a two-character identifier on a line."""
    index = _skip_spaces(line, 0)
    return _skip_spaces(line, min(index + 2, len(line)))


def len_of_texture(line: str) -> int:
    """Length of the first word of a line, after any leading spaces."""
    start = _skip_spaces(line, 0)
    end = start
    while end < len(line) and line[end] not in " \n":
        end += 1
    return end - start


def convert_tab_in_space(line: str) -> str:
    """Replace every tab with four spaces."""
    return line.replace("\t", " " * TAB_WIDTH)