# catchball/loader.py
import logging
import os
import random
from concurrent.futures import ThreadPoolExecutor, wait as wait_futures

import numpy as np
import pygame

from .physics import ball_image_index
from .settings import BALL_IMAGES, BOUNCE_SOUND, GAMEOVER_SOUND

log = logging.getLogger(__name__)

PLAYBACK_RATE = (0.8, 1.2)


def load_image_safe(path):
    if not os.path.exists(path):
        log.warning("[assets] missing image %s", path)
        return None
    try:
        return pygame.image.load(str(path))
    except Exception as e:
        log.warning("[assets] couldn't load image %s: %s", path, e)
        return None


def load_sound_safe(path):
    if not os.path.exists(path):
        log.warning("[assets] missing sound %s", path)
        return None
    try:
        if not pygame.mixer.get_init():
            return None
        return pygame.mixer.Sound(str(path))
    except Exception as e:
        log.warning("[assets] couldn't load sound %s: %s", path, e)
        return None


def resample(samples, rate):
    """Nearest-sample resampling; rate > 1 plays faster and higher."""
    n = samples.shape[0]
    if n == 0 or rate == 1.0:
        return samples
    idx = np.arange(0, n, rate).astype(np.int64)
    idx = idx[idx < n]
    return np.ascontiguousarray(samples[idx])


class AssetLoader:
    """Loads the ball images and sounds in the background.

    Nothing here blocks the frame loop: until every image task has finished
    the usable image list is empty and callers draw the fallback disc.
    """

    def __init__(self, image_paths=None, bounce_path=BOUNCE_SOUND, gameover_path=GAMEOVER_SOUND, workers=4):
        self.image_paths = list(BALL_IMAGES if image_paths is None else image_paths)
        self.bounce_path = bounce_path
        self.gameover_path = gameover_path
        self.images = []
        self.sounds = {"bounce": None, "gameover": None}
        self.ready = False
        self._pitched = {}
        self._pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="assets")
        self._image_futures = []
        self._sound_futures = {}

    def start(self):
        self._image_futures = [self._pool.submit(load_image_safe, p) for p in self.image_paths]
        self._sound_futures = {
            "bounce": self._pool.submit(load_sound_safe, self.bounce_path),
            "gameover": self._pool.submit(load_sound_safe, self.gameover_path),
        }
        return self

    def poll(self):
        """Publish whatever has finished. Call from the frame loop."""
        for key, fut in list(self._sound_futures.items()):
            if fut.done():
                self.sounds[key] = fut.result()
                del self._sound_futures[key]
        if self.ready or not all(f.done() for f in self._image_futures):
            return self.ready
        loaded = [f.result() for f in self._image_futures]
        usable = [img for img in loaded if img is not None]
        if pygame.display.get_surface():
            usable = [img.convert_alpha() for img in usable]
        self.images = usable
        self.ready = True
        log.info("[assets] %d/%d ball images loaded", len(usable), len(self.image_paths))
        return self.ready

    def wait(self, timeout=None):
        wait_futures(self._image_futures + list(self._sound_futures.values()), timeout=timeout)
        return self.poll()

    def shutdown(self):
        self._pool.shutdown(wait=False, cancel_futures=True)

    # ---------- lookups ----------
    def ball_image(self, score):
        idx = ball_image_index(score, len(self.images))
        return None if idx is None else self.images[idx]

    def face_image(self, index):
        if not self.images:
            return None
        return self.images[index % len(self.images)]

    # ---------- audio ----------
    def pitched(self, snd, rate):
        rate = round(rate, 2)
        key = (id(snd), rate)
        if key not in self._pitched:
            samples = pygame.sndarray.array(snd)
            self._pitched[key] = pygame.sndarray.make_sound(resample(samples, rate))
        return self._pitched[key]

    def play_bounce(self, rate=None):
        snd = self.sounds.get("bounce")
        if not snd:
            return False
        if rate is None:
            rate = random.uniform(*PLAYBACK_RATE)
        try:
            try:
                snd = self.pitched(snd, rate)
            except Exception as e:
                log.debug("[audio] pitch shift unavailable: %s", e)
            snd.stop()
            snd.play()
            return True
        except Exception as e:
            log.warning("[audio] bounce playback failed: %s", e)
            return False

    def play_gameover(self):
        snd = self.sounds.get("gameover")
        if not snd:
            return False
        try:
            snd.stop()
            snd.play()
            return True
        except Exception as e:
            log.warning("[audio] game over playback failed: %s", e)
            return False
