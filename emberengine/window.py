"""Application window with a current OpenGL context."""

from __future__ import annotations

import time


def _open_pyglet_window(width: int, height: int, title: str):
    import pyglet

    window = pyglet.window.Window(width, height, caption=title, resizable=True)
    screen = window.screen
    window.set_location(screen.x + (screen.width - width) // 2,
                        screen.y + (screen.height - height) // 2)
    return window


def _gl_viewport(width: int, height: int) -> None:
    from pyglet import gl

    gl.glViewport(0, 0, width, height)


class Window:
    """A window that tracks its size and the time since it was opened.

    ``factory`` opens the native window, ``viewport`` resizes the GL viewport
    and ``clock`` returns seconds; by default pyglet and a monotonic clock are
    used.
    """

    def __init__(self, factory=None, viewport=None, clock=time.monotonic):
        self._factory = factory or _open_pyglet_window
        self._viewport = viewport or _gl_viewport
        self._clock = clock
        self._native = None
        self._start = 0.0
        self._viewport_size = (0, 0)
        self.width = 0
        self.height = 0
        self.time = 0.0

    @property
    def native(self):
        """The underlying native window."""
        if self._native is None:
            raise RuntimeError("window has not been created")
        return self._native

    def create(self, width, height, title) -> None:
        """Open a centred window and make its context current."""
        self._native = self._factory(int(width), int(height), str(title))
        self._start = self._clock()
        self._native.switch_to()

    def status(self) -> bool:
        """Process events, update size and time; False once the window should close."""
        native = self.native
        native.dispatch_events()

        self.width, self.height = native.get_size()
        if (self.width, self.height) != self._viewport_size:
            self._viewport(self.width, self.height)
            self._viewport_size = (self.width, self.height)

        self.time = self._clock() - self._start
        return not native.has_exit

    def present(self) -> None:
        """Swap the back buffer to the screen."""
        self.native.flip()

    def shutdown(self) -> None:
        """Close the native window."""
        self.native.close()