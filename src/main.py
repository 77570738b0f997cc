"""Entry point for the Tilelink connect-pairs puzzle.

Sets up the ECS world, event bus, systems, and Arcade window.
"""
import logging

from arcade import Window, run, set_background_color, color, key

from tilelink.constants import GRID_COLS, GRID_ROWS, REMOVAL_DELAY
from tilelink.events.bus import (
    EventBus,
    EVENT_TICK,
    EVENT_MOUSE_PRESS,
    EVENT_NEW_BOARD_REQUEST,
    EVENT_SHUFFLE_REQUEST,
    EVENT_LEVEL_COMPLETE,
    EVENT_BOARD_STALEMATE,
)
from tilelink.systems.board import BoardSystem
from tilelink.systems.input import InputSystem
from tilelink.systems.match import MatchSystem
from tilelink.systems.render import RenderSystem
from tilelink.ui.layout import board_pixel_size
from tilelink.world import create_world

logger = logging.getLogger(__name__)


class TilelinkWindow(Window):
    def __init__(self):
        width, height = board_pixel_size(GRID_ROWS, GRID_COLS)
        super().__init__(int(width), int(height), "Tilelink", resizable=True)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(rows=GRID_ROWS, cols=GRID_COLS)

        self.match_system = MatchSystem(self.world, self.event_bus, removal_delay=REMOVAL_DELAY)
        self.board_system = BoardSystem(self.world, self.event_bus, self.match_system)
        self.render_system = RenderSystem(self.world, self.event_bus, self)
        self.input_system = InputSystem(self.event_bus, self, self.world)

        # Level progression belongs to the caller; here a cleared board just deals a new one.
        self.event_bus.subscribe(EVENT_LEVEL_COMPLETE, self.on_level_complete)
        self.event_bus.subscribe(EVENT_BOARD_STALEMATE, self.on_stalemate)

        set_background_color(color.WHITE)

    def on_level_complete(self, sender, **kwargs):
        logger.info("level complete")
        self.event_bus.emit(EVENT_NEW_BOARD_REQUEST)

    def on_stalemate(self, sender, **kwargs):
        logger.info("no moves left, %s shuffles remaining", kwargs.get('remaining_shuffles'))

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == key.S:
            self.event_bus.emit(EVENT_SHUFFLE_REQUEST)
        elif symbol == key.N:
            self.event_bus.emit(EVENT_NEW_BOARD_REQUEST)
        elif symbol == key.H:
            self.render_system.show_hint()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    TilelinkWindow()
    run()

if __name__ == "__main__":
    main()
