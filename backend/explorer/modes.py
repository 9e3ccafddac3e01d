"""
Mode Controller - Which Game Is Running?

Exactly one mode is active per tick. Switching modes never touches another
engine's state, so leaving the arcade and coming back to the solar system
resumes exactly where the ship was.

Engines register two kinds of hooks:
- reset hook: reinitialize THIS engine (new game)
- leave hook: clean up when the player leaves this mode
  (disengage autopilot, save a high score, ...)
"""

from __future__ import annotations
from enum import Enum
from typing import Callable, Dict, List
import logging

logger = logging.getLogger(__name__)


class GameMode(str, Enum):
    SOLAR = "solar"
    ARCADE = "arcade"
    ORBIT = "orbit"
    RAIDEN = "raiden"


Hook = Callable[[], None]


class ModeController:
    def __init__(self, initial: GameMode = GameMode.SOLAR):
        self.mode = initial
        self._reset_hooks: Dict[GameMode, Hook] = {}
        self._leave_hooks: Dict[GameMode, List[Hook]] = {m: [] for m in GameMode}

    def on_reset(self, mode: GameMode, hook: Hook) -> None:
        self._reset_hooks[mode] = hook

    def on_leave(self, mode: GameMode, hook: Hook) -> None:
        self._leave_hooks[mode].append(hook)

    def is_active(self, mode: GameMode) -> bool:
        return self.mode == mode

    def set_mode(self, mode: GameMode) -> GameMode:
        """Switch the active subsystem. Returns the previous mode."""
        previous = self.mode
        self.mode = mode
        if previous != mode:
            logger.info(f"Mode {previous.value} -> {mode.value}")
        return previous

    def reset(self, mode: GameMode) -> None:
        hook = self._reset_hooks.get(mode)
        if hook is not None:
            hook()

    def reset_arcade(self) -> None:
        self.reset(GameMode.ARCADE)

    def reset_raiden(self) -> None:
        self.reset(GameMode.RAIDEN)

    def _leave(self, mode: GameMode) -> None:
        for hook in self._leave_hooks[mode]:
            hook()

    def enter_mode(self, mode: GameMode) -> None:
        """Set mode -> reset that engine -> clean up the mode we left."""
        previous = self.set_mode(mode)
        self.reset(mode)
        if previous != mode:
            self._leave(previous)

    def exit_mode(self) -> None:
        """Back to the solar system without resetting it."""
        previous = self.set_mode(GameMode.SOLAR)
        if previous != GameMode.SOLAR:
            self._leave(previous)
