# catchball/scores.py
"""Local top-10 leaderboard kept in a small key-value store."""
import json
import logging
import os
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

from .settings import LEADERBOARD_KEY, LEADERBOARD_SIZE, NAME_MAX_LEN, STORE_JSON

log = logging.getLogger(__name__)


def clean_name(name):
    return (name or "").strip()[:NAME_MAX_LEN]


@dataclass
class Entry:
    name: str
    score: int
    timestamp: str

    @classmethod
    def create(cls, name, score):
        stamp = datetime.now(timezone.utc).isoformat()
        return cls(name=clean_name(name), score=int(score), timestamp=stamp)

    @classmethod
    def from_dict(cls, d):
        return cls(name=clean_name(str(d["name"])), score=int(d["score"]),
                   timestamp=str(d.get("timestamp", "")))


class MemoryStore:
    def __init__(self, data=None):
        self.data = dict(data or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value


class JsonFileStore:
    """Keys mapped to string values, kept as one JSON object on disk."""

    def __init__(self, path=STORE_JSON):
        self.path = path

    def _read(self):
        try:
            if os.path.exists(self.path):
                with open(self.path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return data
                log.warning("[store] %s is not a JSON object, ignoring", self.path)
        except Exception as e:
            log.warning("[store] could not read %s: %s", self.path, e)
        return {}

    def get(self, key):
        return self._read().get(key)

    def set(self, key, value):
        data = self._read()
        data[key] = value
        os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)


def add_entry(entries, entry, limit=LEADERBOARD_SIZE):
    # sorted() is stable: on equal scores the older entry stays ahead
    merged = sorted(list(entries) + [entry], key=lambda e: e.score, reverse=True)
    return merged[:limit]


def load_leaderboard(store, key=LEADERBOARD_KEY):
    """Read the leaderboard; anything missing or malformed reads as empty."""
    try:
        raw = store.get(key)
    except Exception as e:
        log.warning("[scores] store read failed: %s", e)
        return []
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except Exception as e:
        # RecursionError from deeply nested arrays lands here too
        log.warning("[scores] malformed leaderboard: %s", e)
        return []
    if not isinstance(data, list):
        log.warning("[scores] leaderboard is not a list, ignoring")
        return []
    entries = []
    for record in data:
        try:
            entries.append(Entry.from_dict(record))
        except Exception:
            log.debug("[scores] skipping bad record %r", record)
    entries.sort(key=lambda e: e.score, reverse=True)
    return entries[:LEADERBOARD_SIZE]


def save_leaderboard(store, entries, key=LEADERBOARD_KEY):
    payload = json.dumps([asdict(e) for e in entries], ensure_ascii=False)
    try:
        store.set(key, payload)
        return True
    except Exception as e:
        log.error("[scores] save failed: %s", e)
        return False
