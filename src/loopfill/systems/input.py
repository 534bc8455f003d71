from loopfill.events.bus import EventBus, EVENT_MOUSE_PRESS, EVENT_TILE_CLICK


class InputSystem:
    """Turns left clicks on the board into tile clicks."""

    def __init__(self, event_bus: EventBus, window):
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None or button != 1:
            return
        render_system = getattr(self.window, 'render_system', None)
        if render_system is None:
            return
        geometry = render_system.geometry()
        if geometry is None:
            return
        cell = geometry.tile_at(x, y)
        if cell is None:
            return
        col, row = cell
        self.event_bus.emit(EVENT_TILE_CLICK, index=row * geometry.cols + col, col=col, row=row)
