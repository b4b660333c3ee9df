# catchball/engine.py
import enum
import logging
import random
import sys

import pygame

from . import settings, ui
from .inputs import InputTracker
from .loader import AssetLoader
from .physics import Event, GameConfig, new_game, step
from .scores import Entry, JsonFileStore, add_entry, clean_name, load_leaderboard, save_leaderboard

log = logging.getLogger(__name__)

BG = (243, 244, 246)
CANVAS_BG = (255, 255, 255)
TEXT = (31, 41, 55)
MUTED = (107, 114, 128)
GREEN = (16, 185, 129)
DISABLED = (209, 213, 219)
RED = (220, 38, 38)
DARK_BG = (31, 41, 55)


class Phase(enum.Enum):
    NAME_ENTRY = "name_entry"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class Session:
    """Phase sequencing and leaderboard bookkeeping, without any drawing.

    NAME_ENTRY -> PLAYING needs a non-blank name; PLAYING -> GAME_OVER only
    happens when the physics step reports the ball lost; GAME_OVER -> NAME_ENTRY
    via reset(). The leaderboard is written at most once per game.
    """

    def __init__(self, store, config=None, rng=None):
        self.store = store
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.name = ""
        self.phase = Phase.NAME_ENTRY
        self.state = new_game(self.config)
        self.leaderboard = load_leaderboard(store)
        self.face_index = 0
        self._finished = False

    @property
    def score(self):
        return self.state.score

    @property
    def can_start(self):
        return bool(clean_name(self.name))

    # ---------- name entry ----------
    def set_name(self, text):
        self.name = (text or "")[:settings.NAME_MAX_LEN]

    def type_text(self, text):
        if self.phase is Phase.NAME_ENTRY:
            self.set_name(self.name + text)

    def backspace(self):
        if self.phase is Phase.NAME_ENTRY:
            self.name = self.name[:-1]

    # ---------- transitions ----------
    def start(self):
        if self.phase is not Phase.NAME_ENTRY or not self.can_start:
            return False
        self.state = new_game(self.config)
        self._finished = False
        self.phase = Phase.PLAYING
        log.info("[game] %s started", clean_name(self.name))
        return True

    def tick(self, inputs):
        if self.phase is not Phase.PLAYING:
            return frozenset()
        _, events = step(self.state, inputs, self.config)
        if Event.GAME_OVER in events:
            self.phase = Phase.GAME_OVER
            self.finish()
        return events

    def finish(self):
        if self._finished:
            return
        self._finished = True
        self.face_index = self.rng.randrange(len(settings.BALL_IMAGES))
        name = clean_name(self.name)
        log.info("[game] over, %s scored %d", name, self.score)
        if self.score > 0 and name:
            entries = add_entry(self.leaderboard, Entry.create(name, self.score))
            if save_leaderboard(self.store, entries):
                self.leaderboard = entries

    def reset(self):
        if self.phase is not Phase.GAME_OVER:
            return False
        self.state = new_game(self.config)
        self._finished = False
        self.phase = Phase.NAME_ENTRY
        self.leaderboard = load_leaderboard(self.store)
        return True


# ---------- drawing helpers ----------
_clip_cache = {}

def circle_clip(img, radius):
    key = (id(img), radius)
    if key not in _clip_cache:
        size = radius*2
        base = pygame.Surface(img.get_size(), pygame.SRCALPHA); base.blit(img, (0,0))
        surf = pygame.transform.smoothscale(base, (size, size))
        mask = pygame.Surface((size, size), pygame.SRCALPHA)
        pygame.draw.circle(mask, (255,255,255,255), (radius, radius), radius)
        surf.blit(mask, (0,0), special_flags=pygame.BLEND_RGBA_MIN)
        _clip_cache[key] = surf
    return _clip_cache[key]

def draw_disc(surface, center, radius, img=None):
    cx, cy = int(round(center[0])), int(round(center[1]))
    if img is None:
        pygame.draw.circle(surface, settings.BALL_COLOR, (cx, cy), radius)
    else:
        surface.blit(circle_clip(img, radius), (cx - radius, cy - radius))

def draw_ball(surface, ball, img, offset=(0,0)):
    ox, oy = offset
    draw_disc(surface, (ball.x + ox, ball.y + oy), ball.radius, img)

def draw_paddle(surface, paddle, offset=(0,0)):
    ox, oy = offset
    pygame.draw.rect(surface, settings.PADDLE_COLOR, (int(paddle.x) + ox, int(paddle.y) + oy, paddle.width, paddle.height))


class Engine:
    FPS = 60

    def __init__(self, screen, store=None, loader=None, config=None):
        self.screen = screen
        self.window_w, self.window_h = screen.get_size()
        self.config = config or GameConfig()

        self.loader = loader or AssetLoader()
        self.loader.start()
        self.session = Session(store if store is not None else JsonFileStore(), self.config)

        self.canvas = ui.canvas_rect(self.window_w, self.config.canvas_w, self.config.canvas_h, settings.CANVAS_TOP)
        self.tracker = InputTracker(self.canvas.x, self.window_w)

        self.name_box = ui.name_box_rect(self.window_w, self.window_h)
        self.name_buttons = ui.build_name_entry_buttons(self.window_w, self.window_h)
        self.over_buttons = ui.build_game_over_buttons(self.window_w, self.window_h)

        self.font_big = pygame.font.SysFont(None, 72)
        self.font = pygame.font.SysFont(None, 36)
        self.font_small = pygame.font.SysFont(None, 24)
        self.caret_time = 0.0

        pygame.key.start_text_input()

    @property
    def phase(self):
        return self.session.phase

    # ---------- actions ----------
    def start_game(self):
        if not self.session.start():
            return False
        self.tracker.reset()
        pygame.key.stop_text_input()
        return True

    def back_to_start(self):
        if self.session.reset():
            self.tracker.reset()
            pygame.key.start_text_input()

    def quit_game(self):
        self.loader.shutdown()
        pygame.quit(); sys.exit()

    def handle_event(self, ev):
        if self.phase is Phase.NAME_ENTRY:
            if ev.type == pygame.TEXTINPUT:
                self.session.type_text(ev.text)
            elif ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_BACKSPACE: self.session.backspace()
                elif ev.key in (pygame.K_RETURN, pygame.K_KP_ENTER): self.start_game()
            elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
                if ui.hit(self.name_buttons, ev.pos) == "start":
                    self.start_game()
        elif self.phase is Phase.PLAYING:
            self.tracker.handle(ev)
        elif self.phase is Phase.GAME_OVER:
            if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
                if ui.hit(self.over_buttons, ev.pos) == "reset":
                    self.back_to_start()
            elif ev.type == pygame.KEYDOWN and ev.key in (pygame.K_RETURN, pygame.K_SPACE):
                self.back_to_start()

    def update(self, dt):
        self.loader.poll()
        self.caret_time += dt
        events = self.session.tick(self.tracker.state)
        if Event.SCORED in events:
            self.loader.play_bounce()
        if Event.GAME_OVER in events:
            self.loader.play_gameover()

    # ---------- drawing ----------
    def draw(self):
        if self.phase is Phase.NAME_ENTRY:
            self.draw_name_entry()
        elif self.phase is Phase.PLAYING:
            self.draw_playing()
        else:
            self.draw_game_over()

    def blit_centered(self, font, text, color, y):
        surf = font.render(text, True, color)
        self.screen.blit(surf, surf.get_rect(center=(self.window_w//2, y)))

    def draw_button(self, rect, label, enabled=True):
        pygame.draw.rect(self.screen, GREEN if enabled else DISABLED, rect, border_radius=8)
        txt = self.font.render(label, True, (255,255,255))
        self.screen.blit(txt, txt.get_rect(center=rect.center))

    def draw_name_entry(self):
        self.screen.fill(BG)
        self.blit_centered(self.font_big, "Ball Game", TEXT, self.window_h//8)

        box = self.name_box
        pygame.draw.rect(self.screen, (255,255,255), box, border_radius=8)
        pygame.draw.rect(self.screen, DISABLED, box, 2, border_radius=8)
        if self.session.name:
            txt = self.font.render(self.session.name, True, TEXT)
        else:
            txt = self.font_small.render("Enter your name", True, MUTED)
        tr = txt.get_rect(center=box.center); self.screen.blit(txt, tr)
        if int(self.caret_time*2) % 2 == 0:
            cx = tr.right + 2 if self.session.name else box.centerx
            pygame.draw.line(self.screen, TEXT, (cx, box.y+10), (cx, box.bottom-10), 2)

        for rect,label,_ in self.name_buttons:
            self.draw_button(rect, label, self.session.can_start)

        entries = self.session.leaderboard
        if entries:
            top = self.name_buttons[-1][0].bottom + 40
            self.blit_centered(self.font, "TOP 10", TEXT, top)
            for i,(rect,entry) in enumerate(zip(ui.leaderboard_rows(self.window_w, top + 24, len(entries)), entries)):
                left = self.font_small.render(f"{i+1}. {entry.name}", True, TEXT)
                right = self.font_small.render(str(entry.score), True, (37,99,235))
                self.screen.blit(left, (rect.x, rect.y + 4))
                self.screen.blit(right, (rect.right - right.get_width(), rect.y + 4))
                pygame.draw.line(self.screen, (229,231,235), rect.bottomleft, rect.bottomright)

        self.blit_centered(self.font_small, "Mouse, touch or arrow keys", MUTED, self.window_h - 24)

    def draw_playing(self):
        self.screen.fill(BG)
        self.blit_centered(self.font, "Ball Game", TEXT, 36)
        self.blit_centered(self.font_small, f"Score: {self.session.score}", TEXT, 70)

        c = self.canvas
        pygame.draw.rect(self.screen, CANVAS_BG, c)
        state = self.session.state
        prev_clip = self.screen.get_clip()
        self.screen.set_clip(c)
        draw_ball(self.screen, state.ball, self.loader.ball_image(state.score), c.topleft)
        draw_paddle(self.screen, state.paddle, c.topleft)
        self.screen.set_clip(prev_clip)
        pygame.draw.rect(self.screen, TEXT, c.inflate(8, 8), 4)

    def draw_game_over(self):
        self.screen.fill(DARK_BG)
        self.blit_centered(self.font_big, "GAME OVER", RED, self.window_h//6)
        face = self.loader.face_image(self.session.face_index)
        center = (self.window_w//2, int(self.window_h*0.38))
        pygame.draw.circle(self.screen, (255,255,255), center, 106)
        draw_disc(self.screen, center, 100, face)
        name = clean_name(self.session.name)
        self.blit_centered(self.font, f"{name}'s score", (255,255,255), int(self.window_h*0.58))
        self.blit_centered(self.font_big, str(self.session.score), GREEN, int(self.window_h*0.66))
        for rect,label,_ in self.over_buttons:
            self.draw_button(rect, label)
