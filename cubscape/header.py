"""Command-line checks and parsing of the identifier part of a scene file."""

from __future__ import annotations

import enum
import os
import re
import string
from dataclasses import dataclass
from typing import Iterable

from cubscape.colors import RGB, rgb_to_uint
from cubscape.errors import CubError, TextureError
from cubscape.textlines import is_white_space_line, len_of_texture, start_of_texture

SCENE_EXTENSION = ".cub"
TEXTURE_EXTENSION = ".xpm"


class Identifier(enum.IntFlag):
    """Identifiers that may open a header line; values form a bit set."""

    NORTH = 1
    SOUTH = 2
    EAST = 4
    WEST = 8
    FLOOR = 16
    CEILING = 32


WALLS = (Identifier.NORTH, Identifier.SOUTH, Identifier.EAST, Identifier.WEST)
_ALL = WALLS + (Identifier.FLOOR, Identifier.CEILING)
COMPLETE = Identifier(sum(_ALL))

_PREFIXES = (
    (Identifier.NORTH, "NO "),
    (Identifier.SOUTH, "SO "),
    (Identifier.EAST, "EA "),
    (Identifier.WEST, "WE "),
    (Identifier.FLOOR, "F "),
    (Identifier.CEILING, "C "),
)
_RGB_CHARS = frozenset(string.digits + " ,")


@dataclass
class SceneHeader:
    """Wall texture paths and floor/ceiling colours of a scene."""

    textures: dict[Identifier, str]
    floor_rgb: RGB
    ceiling_rgb: RGB

    @property
    def floor_color(self) -> int:
        return rgb_to_uint(self.floor_rgb)

    @property
    def ceiling_color(self) -> int:
        return rgb_to_uint(self.ceiling_rgb)

    @property
    def wall_paths(self) -> list[str]:
        """Texture paths in north, south, east, west order."""
        return [self.textures[wall] for wall in WALLS]


def identify_line(line: str) -> Identifier | None:
    """Return the identifier a line starts with, ignoring leading spaces."""
    stripped = line.lstrip(" ")
    for identifier, prefix in _PREFIXES:
        if stripped.startswith(prefix):
            return identifier
    return None


def parse_rgb(text: str) -> RGB:
    """Parse 'R,G,B' (spaces allowed) up to the end of the line."""
    body = text.split("\n", 1)[0]
    if any(c not in _RGB_CHARS for c in body):
        raise TextureError("colour values may only hold digits, spaces and commas")
    numbers = re.findall(r"[0-9]+", body)
    if len(numbers) != 3:
        raise TextureError("a colour needs exactly three values")
    if body.count(",") != 2:
        raise TextureError("colour values must be separated by two commas")
    red, green, blue = (int(n) for n in numbers)
    return (red, green, blue)


def is_valid_file_format(path: str, extension: str) -> bool:
    """True when the path ends with the given extension."""
    return path.endswith(extension)


def check_file_readable(path: str) -> str:
    """Return the path if it can be read, otherwise raise CubError."""
    if os.access(path, os.R_OK):
        return path
    if os.path.exists(path):
        raise CubError(f"permission denied: {path}")
    if not os.path.lexists(path) and not os.path.exists(os.path.dirname(path) or "."):
        raise CubError(f"file does not exist: {path}")
    if not os.path.lexists(path):
        raise CubError(f"file does not exist: {path}")
    raise CubError(f"cannot access file: {path}")


def check_arguments(argv: list[str]) -> str:
    """Validate the command-line arguments and return the scene path."""
    if len(argv) != 1:
        raise CubError(f"usage: expected exactly one {SCENE_EXTENSION} file")
    path = argv[0]
    if not is_valid_file_format(path, SCENE_EXTENSION):
        raise CubError(f"invalid file format, expected {SCENE_EXTENSION}")
    return check_file_readable(path)


def _check_header(header: SceneHeader) -> None:
    for rgb in (header.floor_rgb, header.ceiling_rgb):
        if any(not 0 <= value <= 255 for value in rgb):
            raise TextureError("colour values must be between 0 and 255")
    for path in header.wall_paths:
        if not is_valid_file_format(path, TEXTURE_EXTENSION):
            raise TextureError(
                f"invalid file format, expected {TEXTURE_EXTENSION}: {path!r}"
            )
        check_file_readable(path)


def parse_header(lines: Iterable[str]) -> SceneHeader:
    """Read identifier lines until all six are set and validate them.

    Lines are consumed from the iterator up to and including the last
    identifier, so the caller can go on reading the map from it.
    """
    textures: dict[Identifier, str] = {}
    colors: dict[Identifier, RGB] = {}
    seen = Identifier(0)
    for line in iter(lines):
        identifier = identify_line(line)
        if identifier is None:
            if not is_white_space_line(line):
                raise CubError("unexpected content before all identifiers are set")
            continue
        if seen & identifier:
            raise CubError(f"duplicate identifier {identifier.name}")
        seen |= identifier
        value = line[start_of_texture(line):]
        if identifier in (Identifier.FLOOR, Identifier.CEILING):
            colors[identifier] = parse_rgb(value)
        else:
            textures[identifier] = value[: len_of_texture(value)]
        if seen == COMPLETE:
            break
    if seen != COMPLETE:
        missing = ", ".join(i.name for i in _ALL if not seen & i)
        raise CubError(f"missing identifier(s): {missing}")
    header = SceneHeader(
        textures=textures,
        floor_rgb=colors[Identifier.FLOOR],
        ceiling_rgb=colors[Identifier.CEILING],
    )
    _check_header(header)
    return header