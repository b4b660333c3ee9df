# catchball/main.py
import logging
import os
import pygame

from .engine import Engine
from .settings import WINDOW_W, WINDOW_H

def main():
    logging.basicConfig(level=logging.INFO, format="[%(name)s] %(message)s")
    os.environ.setdefault("SDL_VIDEO_CENTERED", "1")

    pygame.mixer.pre_init(44100, -16, 2, 512)
    pygame.init()
    pygame.font.init()

    screen = pygame.display.set_mode((WINDOW_W, WINDOW_H))
    pygame.display.set_caption("Ball Game")

    engine = Engine(screen)

    clock = pygame.time.Clock()
    while True:
        dt = clock.tick(engine.FPS)/1000.0
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                engine.quit_game()
            elif ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE:
                engine.quit_game()
            else:
                engine.handle_event(ev)

        # one physics step per displayed frame
        engine.update(dt)
        engine.draw()
        pygame.display.flip()

if __name__ == "__main__":
    main()
