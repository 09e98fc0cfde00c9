"""The game object and the command that opens the window."""

from __future__ import annotations

import sys
from typing import Sequence

from cubscape.controls import Action, KeyState, apply_keys
from cubscape.doors import DoorState
from cubscape.errors import CubError, report_error
from cubscape.framebuffer import FrameBuffer
from cubscape.header import check_arguments
from cubscape.render import Renderer, TextureSet
from cubscape.scene import Scene, load_scene
from cubscape.settings import Settings

BONUS_FLAG = "--bonus"
ESC_MESSAGE = "Escape pressed, see you soon!\n"
CROSS_MESSAGE = "Window closed, see you soon!\n"
_INTRO = (
    "\033[38;5;217m"
    "*************************************\n"
    "*     cubscape: the legend of it    *\n"
    "*************************************\n"
    "\n\tWelcome here :)\n\n"
    "\033[0m"
)


def display_intro(stream=None) -> None:
    """Print the welcome banner."""
    (sys.stdout if stream is None else stream).write(_INTRO)


class Game:
    """Player, keys, doors and the two frame buffers drawn in turn."""

    def __init__(
        self, scene: Scene, settings: Settings | None = None, bonus: bool | None = None
    ) -> None:
        self.scene = scene
        self.settings = settings or Settings()
        self.bonus = scene.bonus if bonus is None else bonus
        self.player = scene.player
        self.keys = KeyState(bonus=self.bonus)
        self.door = DoorState.from_colors(scene.header.floor_rgb, scene.header.ceiling_rgb)
        self.textures = TextureSet.load(scene.header, self.settings, self.bonus)
        self.renderer = Renderer(scene, self.settings, self.textures, self.bonus)
        self.buffers = [
            FrameBuffer(self.settings.width, self.settings.height) for _ in range(2)
        ]
        for buffer in self.buffers:
            buffer.fill_background(scene.ceiling_color, scene.floor_color)
        self._current = 0
        self.nb_frame = 0
        self.running = True

    def tick(self) -> FrameBuffer | None:
        """Advance one loop turn; return the frame drawn on this turn, if any."""
        rendered = None
        if self.nb_frame >= self.settings.frame_time:
            apply_keys(
                self.keys, self.player, self.scene.game_map,
                self.door, self.settings, self.bonus,
            )
            rendered = self.buffers[self._current]
            self.renderer.render(rendered, self.player, self.door)
            self._current ^= 1
            self.nb_frame = 0
        self.nb_frame += 1
        return rendered

    def stop(self, message: str, stream=None) -> None:
        """Stop the game loop after printing a farewell message."""
        (sys.stdout if stream is None else stream).write(message)
        self.running = False

    def close(self) -> None:
        """Handle the window being closed."""
        self.stop(CROSS_MESSAGE)

    def handle_key_down(self, key: str) -> Action | None:
        """React to a key press; escape stops the game."""
        action = self.keys.press(key)
        if action is Action.QUIT:
            self.stop(ESC_MESSAGE)
        return action

    def handle_key_up(self, key: str) -> Action | None:
        """React to a key release."""
        return self.keys.release(key)


def _run_window(game: Game) -> None:
    import pygame

    settings = game.settings
    pygame.init()
    try:
        info = pygame.display.Info()
        if info.current_w > 0 and info.current_h > 0 and (
            settings.width > info.current_w or settings.height > info.current_h
        ):
            raise CubError("the window does not fit on the screen")
        screen = pygame.display.set_mode((settings.width, settings.height))
        pygame.display.set_caption(settings.title)
        clock = pygame.time.Clock()
        game.tick()
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.close()
                elif event.type == pygame.KEYDOWN:
                    game.handle_key_down(pygame.key.name(event.key))
                elif event.type == pygame.KEYUP:
                    game.handle_key_up(pygame.key.name(event.key))
            if not game.running:
                break
            frame = game.tick()
            if frame is not None:
                surface = pygame.surfarray.make_surface(frame.to_rgb().swapaxes(0, 1))
                screen.blit(surface, (0, 0))
                pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on a .cub scene; pass --bonus for doors, minimap and hearts."""
    args = list(sys.argv[1:] if argv is None else argv)
    bonus = BONUS_FLAG in args
    paths = [arg for arg in args if arg != BONUS_FLAG]
    try:
        path = check_arguments(paths)
        settings = Settings()
        scene = load_scene(path, bonus, settings)
        game = Game(scene, settings, bonus)
    except CubError as exc:
        report_error(exc)
        return 1
    display_intro()
    try:
        _run_window(game)
    except CubError as exc:
        report_error(exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())