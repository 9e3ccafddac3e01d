"""
Solar Explorer simulation package.

This module provides:
- GameEngine: the host loop driving all four modes
- Per-mode engines: ship kinematics + autopilot, arcade, orbit, raiden
- GameStore: scores, visited bodies and settings on disk
- ShipComputer: debounced body descriptions and chat
"""

from .engine import GameEngine, EngineConfig
from .modes import GameMode, ModeController
from .persistence import GameStore
from .computer import ShipComputer, PregeneratedDescriptions, ComputerConfig
from .orbit import OrbitPreset, OrbitStatus

__all__ = [
    "GameEngine",
    "EngineConfig",
    "GameMode",
    "ModeController",
    "GameStore",
    "ShipComputer",
    "PregeneratedDescriptions",
    "ComputerConfig",
    "OrbitPreset",
    "OrbitStatus",
]
