# catchball/settings.py

from .utils import resource_path, user_data_path

ASSETS = resource_path("assets")
TEX_DIR = ASSETS / "textures"
SND_DIR = ASSETS / "sounds"
SAVES_DIR = user_data_path("saves")
STORE_JSON = SAVES_DIR / "store.json"

# ball skins, in cycle order
BALL_IMAGES = [TEX_DIR / "ball1.png", TEX_DIR / "ball2.png", TEX_DIR / "ball3.png"]
BOUNCE_SOUND = SND_DIR / "bounce.wav"
GAMEOVER_SOUND = SND_DIR / "gameover.wav"

LEADERBOARD_KEY = "ball-game-rankings"
LEADERBOARD_SIZE = 10
NAME_MAX_LEN = 20

# playfield
CANVAS_W, CANVAS_H = 330, 580
BALL_START = (165.0, 280.0)
BALL_SPEED = 2.5
BALL_RADIUS = 28
PADDLE_START_X = 115
PADDLE_Y = 540
PADDLE_W, PADDLE_H = 90, 18
KEY_STEP = 6
SPEED_STEP = 0.01
REARM_MARGIN = 10
IMAGE_EVERY = 10

# window around the playfield
WINDOW_W, WINDOW_H = 420, 720
CANVAS_TOP = 100

BALL_COLOR = (59, 130, 246)
PADDLE_COLOR = (31, 41, 55)
