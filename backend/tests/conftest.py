"""Shared fixtures for the explorer test suite."""
import os
import random
import tempfile

# The server module builds its GameStore at import time
os.environ.setdefault("EXPLORER_DATA_DIR", tempfile.mkdtemp(prefix="explorer-test-"))

import pytest

from explorer.persistence import GameStore


class RecordingAudio:
    """Audio port that remembers every cue it was sent."""

    def __init__(self):
        self.cues = []
        self.thrust_levels = []

    def play_laser(self):
        self.cues.append("laser")

    def play_explosion(self):
        self.cues.append("explosion")

    def play_alert(self):
        self.cues.append("alert")

    def set_thrust(self, amount):
        self.thrust_levels.append(amount)


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def store(tmp_path):
    return GameStore(str(tmp_path / "data"))
