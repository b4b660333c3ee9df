# catchball/utils.py
import sys
from pathlib import Path

APP_DIR_NAME = ".catchball"

def resource_path(rel):
    """Read-only files shipped with the package (or unpacked by PyInstaller)."""
    base = getattr(sys, "_MEIPASS", None)
    if base is None:
        base = Path(__file__).resolve().parent
    return Path(base) / rel

def user_data_path(rel, home=None):
    # writable files live under the user's home, never next to the installed package
    return Path(home or Path.home()) / APP_DIR_NAME / rel

def clamp(value, lo, hi):
    if hi < lo:
        return lo
    return max(lo, min(hi, value))
