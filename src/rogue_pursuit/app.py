from __future__ import annotations

import logging
import os
import sys
from typing import Dict, List, Optional, TextIO, Tuple, Union

from .config import GameConfig
from .core.events import NOTICE, STATS, Event
from .game.actors import PLAYER_GLYPH
from .game.session import GameSession, new_game
from .rendering.display import TextDisplay

logger = logging.getLogger(__name__)

QUIT_WORDS = {"q", "quit", "exit"}
HUD_ROWS = 2


def _arcade_available() -> bool:
    try:
        import arcade  # noqa: F401
        return True
    except ImportError:
        return False


def _stats_line(stats: Dict[str, int]) -> str:
    return f"HP {stats['hitpoints']}/{stats['max_hitpoints']}  Moves {stats['moves']}"


def _parse_key(line: str) -> Union[str, int]:
    """Headless key syntax: a bare number is a key code, anything else a key name."""
    return int(line) if line.isdigit() else line


def run_gui(config: Optional[GameConfig] = None, seed=None) -> int:
    """Run the game in an Arcade window if available, otherwise fall back to headless.

    Returns:
        Process exit code (0 on success).
    """
    if not _arcade_available():
        logger.warning("Arcade not available; falling back to headless mode")
        return run_headless(config=config, seed=seed)

    import arcade

    config = config or GameConfig()
    cell = config.display.cell_px
    font_size = config.display.font_size
    dcfg = config.dungeon

    class GameWindow(arcade.Window):
        def __init__(self) -> None:
            super().__init__(dcfg.width * cell, (dcfg.height + HUD_ROWS) * cell, title="Rogue Pursuit")
            arcade.set_background_color(arcade.color.BLACK)
            self.text_display = TextDisplay(dcfg.width, dcfg.height)
            self.session: GameSession = new_game(config, seed=seed, display=self.text_display)
            self.session.mapper.alias_backend_keys(arcade.key)
            self._stats = "-"
            self._notice = "Arrows/PgUp/PgDn/Home/End move, Enter/Space opens a box, Esc quits"
            self.session.events.subscribe(STATS, self._on_stats)
            self.session.events.subscribe(NOTICE, self._on_notice)
            self._cells: List[arcade.Text] = []
            self._revision = -1
            self._hud_stats = arcade.Text("", 4, cell + 2, arcade.color.DARK_SPRING_GREEN, font_size)
            self._hud_notice = arcade.Text("", 4, 2, arcade.color.ASH_GREY, font_size)
            self.session.start()

        def _on_stats(self, event: Event) -> None:
            if event.payload.get("glyph") == PLAYER_GLYPH:
                self._stats = _stats_line(event.payload)

        def _on_notice(self, event: Event) -> None:
            self._notice = event.payload["message"]

        def _rebuild_cells(self) -> None:
            cells: List[arcade.Text] = []
            for y in range(self.text_display.height):
                py = (self.text_display.height - 1 - y + HUD_ROWS) * cell
                for x in range(self.text_display.width):
                    glyph = self.text_display.glyph_at(x, y)
                    if glyph == " ":
                        continue
                    color: Tuple[int, int, int] = self.text_display.color_at(x, y)
                    cells.append(arcade.Text(glyph, x * cell, py, color, font_size, font_name="Courier New"))
            self._cells = cells
            self._revision = self.text_display.revision

        def on_draw(self):
            self.clear()
            if self._revision != self.text_display.revision:
                self._rebuild_cells()
            for text in self._cells:
                text.draw()
            self._hud_stats.text = self._stats
            self._hud_notice.text = self._notice
            self._hud_stats.draw()
            self._hud_notice.draw()

        def on_key_press(self, symbol: int, modifiers: int):
            if symbol == arcade.key.ESCAPE:
                self.close()
                return
            if self.session.is_over:
                return
            self.session.keyboard.dispatch(symbol)

    window = GameWindow()
    try:
        logger.info("Launching Arcade window")
        arcade.run()
        logger.info("Arcade loop finished")
        return 0
    except Exception:
        logger.exception("Unhandled exception in GUI loop; exiting with code 1")
        return 1
    finally:
        window.close()


def run_headless(
    config: Optional[GameConfig] = None,
    seed=None,
    stream: Optional[TextIO] = None,
    out: Optional[TextIO] = None,
    max_inputs: Optional[int] = None,
) -> int:
    """Play in the console: one key name or key code per input line.

    The map is printed after every input along with any notices. Stops on
    capture, end of input, a quit word, or after ``max_inputs`` lines.
    """
    stream = stream if stream is not None else sys.stdin
    out = out if out is not None else sys.stdout
    config = config or GameConfig()

    try:
        display = TextDisplay(config.dungeon.width, config.dungeon.height)
        session = new_game(config, seed=seed, display=display)
        session.events.subscribe(NOTICE, lambda e: print(e.payload["message"], file=out))

        def _print_stats(event: Event) -> None:
            if event.payload.get("glyph") == PLAYER_GLYPH:
                print(_stats_line(event.payload), file=out)

        session.events.subscribe(STATS, _print_stats)

        print("Rogue Pursuit (headless)", file=out)
        print("Keys: up/down/left/right/pageup/pagedown/home/end, enter or space to open, q to quit\n", file=out)
        session.start()
        print(display.render(), file=out)

        inputs = 0
        for raw in stream:
            line = raw.strip()
            if not line:
                continue
            if line.lower() in QUIT_WORDS:
                print("Bye", file=out)
                break
            session.keyboard.dispatch(_parse_key(line))
            inputs += 1
            print(display.render(), file=out)
            if session.is_over:
                break
            if max_inputs is not None and inputs >= max_inputs:
                logger.info("Stopping after %d inputs", inputs)
                break
        return 0
    except KeyboardInterrupt:
        print("Interrupted by user", file=out)
        return 130
    except Exception:
        logger.exception("Unhandled exception in headless loop")
        return 1


def run_auto(config: Optional[GameConfig] = None, seed=None, max_inputs: Optional[int] = None) -> int:
    """Run GUI if available and not explicitly overridden, else headless.

    RP_HEADLESS=1 forces headless. Otherwise the GUI runs, which itself falls
    back to headless when arcade cannot be imported. RP_GUI=1 (set by --gui)
    wins over RP_HEADLESS.
    """
    if os.getenv("RP_HEADLESS") == "1" and os.getenv("RP_GUI") != "1":
        return run_headless(config=config, seed=seed, max_inputs=max_inputs)

    return run_gui(config=config, seed=seed)
