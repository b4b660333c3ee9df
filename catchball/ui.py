# catchball/ui.py
from pygame import Rect

# layout helpers returning (rect, label, action) tuples, like the menu lists Engine draws

def canvas_rect(window_w, canvas_w, canvas_h, top):
    return Rect((window_w - canvas_w)//2, top, canvas_w, canvas_h)

def name_box_rect(window_w, window_h):
    w,h = 300,48
    return Rect((window_w - w)//2, window_h//4, w, h)

def build_name_entry_buttons(window_w, window_h):
    w,h = 300,52
    box = name_box_rect(window_w, window_h)
    return [(Rect((window_w - w)//2, box.bottom + 16, w, h), "START", "start")]

def build_game_over_buttons(window_w, window_h):
    w,h = 240,52
    return [(Rect((window_w - w)//2, int(window_h*0.78), w, h), "Back to start", "reset")]

def leaderboard_rows(window_w, top, count, row_h=26, w=300):
    sx = (window_w - w)//2
    return [Rect(sx, top + i*row_h, w, row_h) for i in range(count)]

def hit(buttons, pos):
    for rect,label,action in buttons:
        if rect.collidepoint(pos):
            return action
    return None
