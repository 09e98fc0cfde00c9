"""Error types raised while loading a scene, and the way they are reported."""

from __future__ import annotations

import sys
from typing import TextIO

ERROR_HEADER = "Error\n"


class CubError(Exception):
    """Base error for argument, scene and texture problems."""


class MapError(CubError):
    """The map part of a scene is invalid."""


class TextureError(CubError):
    """A texture path or a colour of a scene is invalid."""


def report_error(error: BaseException | str, stream: TextIO | None = None) -> None:
    """Write an error in the program's report format (stderr by default)."""
    out = sys.stderr if stream is None else stream
    out.write(f"{ERROR_HEADER}{error}\n")