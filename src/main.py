"""Entry point for the Loopfill prototype.

Sets up the ECS world, event bus, systems, and Arcade window, then loads the demo level.
Click a dot to consume it; a shape fills once all of its dots are gone. R resets the level.
"""
import logging

from arcade import Window, key, run, set_background_color

from loopfill.constants import BACKGROUND_COLOR, DEMO_LEVEL, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from loopfill.events.bus import EventBus, EVENT_MOUSE_PRESS
from loopfill.systems.input import InputSystem
from loopfill.systems.render import RenderSystem
from loopfill.world import create_world


class LoopfillWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE, resizable=True)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus)
        self.render_system = RenderSystem(self.world, self.event_bus, self)
        self.input_system = InputSystem(self.event_bus, self)
        self.world.level_system.load(DEMO_LEVEL, name="demo")
        set_background_color(BACKGROUND_COLOR)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == key.R:
            self.world.level_system.reset()


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    window = LoopfillWindow()
    run()

if __name__ == "__main__":
    main()
