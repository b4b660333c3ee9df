# catchball/inputs.py
import pygame

from .physics import InputState


class InputTracker:
    """Turns keyboard, mouse and touch events into the paddle InputState.

    Handlers only write the primitive fields; the frame loop reads them once
    per step. Coordinates are converted from window space to canvas space.
    """

    def __init__(self, canvas_left, window_w, scale=1.0):
        self.canvas_left = canvas_left
        self.window_w = window_w
        self.scale = scale
        self.state = InputState()

    def reset(self):
        self.state = InputState()

    def to_canvas_x(self, window_x):
        return (window_x - self.canvas_left) * self.scale

    def handle(self, ev):
        """Returns True when the event was consumed."""
        s = self.state
        if ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_LEFT: s.left = True; return True
            if ev.key == pygame.K_RIGHT: s.right = True; return True
        elif ev.type == pygame.KEYUP:
            if ev.key == pygame.K_LEFT: s.left = False; return True
            if ev.key == pygame.K_RIGHT: s.right = False; return True
        elif ev.type == pygame.MOUSEMOTION:
            # SDL mirrors touches as mouse motion; those must not cancel the touch
            if getattr(ev, "touch", False):
                return False
            s.pointer_x = self.to_canvas_x(ev.pos[0])
            s.touch_x = None
            return True
        elif ev.type in (pygame.FINGERDOWN, pygame.FINGERMOTION):
            # finger x is normalised to the window width
            s.touch_x = self.to_canvas_x(ev.x * self.window_w)
            return True
        elif ev.type == pygame.FINGERUP:
            # hand control back to the pointer where the finger left off
            if s.touch_x is not None:
                s.pointer_x = s.touch_x
            s.touch_x = None
            return True
        return False
