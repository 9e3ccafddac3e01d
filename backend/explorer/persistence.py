"""
Game Store - Scores, Visits and Settings on Disk

FILE FORMAT:
JSON files stored in ./data/ (override with EXPLORER_DATA_DIR)
- high_scores.json  {"arcade": int, "raiden": int}
- visited.json      {"<body>": {"visit_count": int, "last_visited": ms}}
- settings.json     {"muted": bool}

Nothing here is critical. A missing or corrupted file logs a warning and
falls back to defaults; the game keeps running either way.
"""

from __future__ import annotations
from typing import Any, Dict, Optional
import json
import logging
import os
import time
from pathlib import Path

logger = logging.getLogger(__name__)

HIGH_SCORES_FILE = "high_scores.json"
VISITED_FILE = "visited.json"
SETTINGS_FILE = "settings.json"

SCORED_GAMES = ("arcade", "raiden")
DEFAULT_SETTINGS: Dict[str, Any] = {"muted": False}


def default_data_dir() -> str:
    return os.environ.get("EXPLORER_DATA_DIR", "./data")


class GameStore:
    def __init__(self, storage_dir: Optional[str] = None):
        self.storage_dir = Path(storage_dir or default_data_dir())
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def _read(self, filename: str, default: Dict[str, Any]) -> Dict[str, Any]:
        filepath = self.storage_dir / filename
        if not filepath.exists():
            return dict(default)
        try:
            with open(filepath, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load {filename}: {e}")
            return dict(default)
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed {filename}")
            return dict(default)
        return data

    def _write(self, filename: str, data: Dict[str, Any]) -> bool:
        filepath = self.storage_dir / filename
        try:
            with open(filepath, 'w') as f:
                json.dump(data, f)
        except OSError as e:
            logger.warning(f"Failed to save {filename}: {e}")
            return False
        return True

    # ------------------------------------------------------------
    # High scores
    # ------------------------------------------------------------

    def get_high_scores(self) -> Dict[str, int]:
        data = self._read(HIGH_SCORES_FILE, {})
        scores = {}
        for game in SCORED_GAMES:
            try:
                scores[game] = int(data.get(game, 0))
            except (TypeError, ValueError):
                scores[game] = 0
        return scores

    def save_high_score(self, game: str, score: int) -> bool:
        """Persist `score` only if it beats the stored best. True if saved."""
        if game not in SCORED_GAMES:
            raise ValueError(f"Unknown game: {game}")
        scores = self.get_high_scores()
        if score <= scores[game]:
            return False
        scores[game] = int(score)
        logger.info(f"New {game} high score: {score}")
        return self._write(HIGH_SCORES_FILE, scores)

    # ------------------------------------------------------------
    # Visited bodies
    # ------------------------------------------------------------

    def get_visited(self) -> Dict[str, Dict[str, int]]:
        return self._read(VISITED_FILE, {})

    def mark_visited(self, body: str) -> Dict[str, int]:
        visited = self.get_visited()
        previous = visited.get(body) or {}
        entry = {
            "visit_count": int(previous.get("visit_count", 0)) + 1,
            "last_visited": int(time.time() * 1000),
        }
        visited[body] = entry
        self._write(VISITED_FILE, visited)
        return entry

    def has_visited(self, body: str) -> bool:
        return body in self.get_visited()

    # ------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------

    def get_settings(self) -> Dict[str, Any]:
        settings = dict(DEFAULT_SETTINGS)
        settings.update(self._read(SETTINGS_FILE, DEFAULT_SETTINGS))
        return settings

    def save_settings(self, settings: Dict[str, Any]) -> Dict[str, Any]:
        merged = self.get_settings()
        merged.update(settings)
        self._write(SETTINGS_FILE, merged)
        return merged

    def clear_all(self) -> None:
        """Wipe every stored file (debug/reset)."""
        for filename in (HIGH_SCORES_FILE, VISITED_FILE, SETTINGS_FILE):
            filepath = self.storage_dir / filename
            if filepath.exists():
                filepath.unlink()
        logger.info("Cleared all stored game data")
