"""
Ports - What the Engines Call Out To

The engines never synthesize sound. They fire cues ("laser fired",
"explosion") through an AudioPort and never wait on or branch on the result.

AudioCueBuffer is the production adapter: it queues cues so the host loop
can ship them to the browser inside the next snapshot, where the Web Audio
synth plays them.
"""

from __future__ import annotations
from typing import List, Protocol


class AudioPort(Protocol):
    def play_laser(self) -> None: ...
    def play_explosion(self) -> None: ...
    def play_alert(self) -> None: ...
    def set_thrust(self, amount: float) -> None: ...


class NullAudio:
    """Silent port."""

    def play_laser(self) -> None:
        pass

    def play_explosion(self) -> None:
        pass

    def play_alert(self) -> None:
        pass

    def set_thrust(self, amount: float) -> None:
        pass


class AudioCueBuffer:
    """Collects one-shot cues plus the latest thrust level between drains."""

    def __init__(self):
        self.cues: List[str] = []
        self.thrust: float = 0.0

    def play_laser(self) -> None:
        self.cues.append("laser")

    def play_explosion(self) -> None:
        self.cues.append("explosion")

    def play_alert(self) -> None:
        self.cues.append("alert")

    def set_thrust(self, amount: float) -> None:
        self.thrust = max(0.0, min(1.0, amount))

    def drain(self) -> dict:
        cues, self.cues = self.cues, []
        return {"cues": cues, "thrust": self.thrust}
