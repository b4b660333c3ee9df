# catchball/physics.py
"""Ball, paddle and score state plus the per-frame step.

Everything here is plain numeric state: no pygame, no I/O. The engine owns a
single GameState and calls ``step`` once per displayed frame while playing.
"""
import enum
from dataclasses import dataclass

from . import settings
from .utils import clamp


class CollisionPolicy(enum.Enum):
    # SIMPLE scores on every overlapping frame, so one slow contact can count
    # more than once. Kept for comparison only.
    SIMPLE = "simple"
    ROBUST = "robust"


class Event(enum.Enum):
    SCORED = "scored"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    canvas_w: int = settings.CANVAS_W
    canvas_h: int = settings.CANVAS_H
    ball_start: tuple = settings.BALL_START
    base_speed: float = settings.BALL_SPEED
    radius: int = settings.BALL_RADIUS
    paddle_x: float = settings.PADDLE_START_X
    paddle_y: float = settings.PADDLE_Y
    paddle_w: int = settings.PADDLE_W
    paddle_h: int = settings.PADDLE_H
    key_step: float = settings.KEY_STEP
    speed_step: float = settings.SPEED_STEP
    rearm_margin: float = settings.REARM_MARGIN
    policy: CollisionPolicy = CollisionPolicy.ROBUST
    # when False the pointer/touch target is applied even while a key is held
    keyboard_priority: bool = True


@dataclass
class Ball:
    x: float
    y: float
    dx: float
    dy: float
    radius: int

    @property
    def top(self):
        return self.y - self.radius

    @property
    def bottom(self):
        return self.y + self.radius

    @property
    def left(self):
        return self.x - self.radius

    @property
    def right(self):
        return self.x + self.radius


@dataclass
class Paddle:
    x: float
    y: float
    width: int
    height: int

    @property
    def right(self):
        return self.x + self.width

    @property
    def bottom(self):
        return self.y + self.height


@dataclass
class InputState:
    left: bool = False
    right: bool = False
    pointer_x: float = settings.BALL_START[0]
    touch_x: float = None  # None: no active touch, follow the pointer

    def target_x(self):
        return self.touch_x if self.touch_x is not None else self.pointer_x


@dataclass
class GameState:
    ball: Ball
    paddle: Paddle
    score: int = 0
    can_score: bool = True
    over: bool = False


def new_game(config=None):
    """Construction-time state for a fresh game."""
    config = config or GameConfig()
    x, y = config.ball_start
    ball = Ball(x, y, config.base_speed, -config.base_speed, config.radius)
    paddle = Paddle(config.paddle_x, config.paddle_y, config.paddle_w, config.paddle_h)
    return GameState(ball=ball, paddle=paddle)


def ball_image_index(score, count):
    if count <= 0:
        return None
    return (score // settings.IMAGE_EVERY) % count


def move_paddle(paddle, inputs, config):
    max_x = config.canvas_w - paddle.width
    keyed = inputs.left or inputs.right
    if inputs.left:
        paddle.x = clamp(paddle.x - config.key_step, 0, max_x)
    if inputs.right:
        paddle.x = clamp(paddle.x + config.key_step, 0, max_x)
    if not keyed or not config.keyboard_priority:
        paddle.x = clamp(inputs.target_x() - paddle.width / 2, 0, max_x)


def bounce_walls(ball, config):
    # flip only while heading into the wall, so an overlapping ball is not
    # flipped back on the following frame
    if (ball.left < 0 and ball.dx < 0) or (ball.right > config.canvas_w and ball.dx > 0):
        ball.dx = -ball.dx
    if ball.top < 0 and ball.dy < 0:
        ball.dy = -ball.dy


def _hit_simple(state):
    ball, paddle = state.ball, state.paddle
    if (ball.bottom > paddle.y and ball.top < paddle.bottom
            and paddle.x < ball.x < paddle.right):
        ball.dy = -ball.dy
        state.score += 1
        return True
    return False


def _hit_robust(state, config):
    ball, paddle = state.ball, state.paddle
    overlap = (ball.bottom >= paddle.y and ball.top <= paddle.bottom
               and ball.right >= paddle.x and ball.left <= paddle.right)
    hit = False
    if overlap and ball.dy > 0 and state.can_score:
        ball.dy = -ball.dy
        ball.y = paddle.y - ball.radius
        state.can_score = False
        state.score += 1
        speed = config.base_speed * (1 + state.score * config.speed_step)
        ball.dx = speed if ball.dx > 0 else -speed
        ball.dy = speed if ball.dy > 0 else -speed
        hit = True
    if ball.y < paddle.y - ball.radius - config.rearm_margin:
        state.can_score = True
    return hit


def is_out(ball, config):
    if config.policy is CollisionPolicy.SIMPLE:
        return ball.bottom > config.canvas_h
    return ball.top > config.canvas_h


def step(state, inputs, config=None):
    """Advance one frame. Returns ``(state, events)``; state is updated in place.

    Once the game is over further calls change nothing and report no events.
    """
    config = config or GameConfig()
    if state.over:
        return state, frozenset()

    events = set()
    move_paddle(state.paddle, inputs, config)

    ball = state.ball
    ball.x += ball.dx
    ball.y += ball.dy
    bounce_walls(ball, config)

    if config.policy is CollisionPolicy.SIMPLE:
        scored = _hit_simple(state)
    else:
        scored = _hit_robust(state, config)
    if scored:
        events.add(Event.SCORED)

    if is_out(ball, config):
        state.over = True
        events.add(Event.GAME_OVER)

    return state, frozenset(events)
