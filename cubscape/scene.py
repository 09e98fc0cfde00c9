"""Loading a whole scene file: header identifiers followed by the map."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

from cubscape.header import SceneHeader, check_arguments, parse_header
from cubscape.mapgrid import GameMap, Player, build_map
from cubscape.settings import Settings


@dataclass
class Scene:
    """A parsed scene: textures, colours and map."""

    header: SceneHeader
    game_map: GameMap
    bonus: bool = False

    @property
    def floor_color(self) -> int:
        return self.header.floor_color

    @property
    def ceiling_color(self) -> int:
        return self.header.ceiling_color

    @property
    def player(self) -> Player:
        return self.game_map.player


def _parse_lines(
    lines: Iterable[str], bonus: bool, settings: Settings | None
) -> Scene:
    stream = iter(lines)
    header = parse_header(stream)
    game_map = build_map(stream, bonus, settings)
    return Scene(header=header, game_map=game_map, bonus=bonus)


def parse_scene(
    text: str, bonus: bool = False, settings: Settings | None = None
) -> Scene:
    """Parse the text of a scene file."""
    return _parse_lines(text.splitlines(keepends=True), bonus, settings)


def load_scene(
    path: str | os.PathLike[str],
    bonus: bool = False,
    settings: Settings | None = None,
) -> Scene:
    """Check that the path names a readable .cub file and parse it."""
    checked = check_arguments([os.fspath(path)])
    with open(checked, encoding="utf-8") as handle:
        return _parse_lines(handle, bonus, settings)