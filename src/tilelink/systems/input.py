from esper import World

from tilelink.events.bus import EventBus, EVENT_MOUSE_PRESS, EVENT_TILE_CLICK
from tilelink.systems.board_ops import board_dimensions
from tilelink.ui.layout import compute_board_geometry, point_from_pixel


class InputSystem:
    """Maps left clicks in window space to ``tile_click`` events.

    Arcade reports y upwards from the bottom edge; layout works y-down, so the
    press is flipped against the window height first.
    """
    def __init__(self, event_bus: EventBus, window, world: World):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        # Left button only; other buttons are left to whoever listens for them.
        if button != 1:
            return
        dims = board_dimensions(self.world)
        if dims is None:
            return
        rows, cols = dims
        cell_size, left, top = compute_board_geometry(self.window.width, self.window.height, rows, cols)
        cell = point_from_pixel(x, self.window.height - y, (left, top), rows, cols, cell_size)
        if cell is None:
            return
        self.event_bus.emit(EVENT_TILE_CLICK, row=cell[0], col=cell[1])
