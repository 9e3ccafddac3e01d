"""
Ship Computer - Descriptions, Deep Scans and Chat

KEY CONCEPT: Generation Counter

The proximity scan is debounced: when the closest body changes we wait
1.5 s before asking for a description. If the pilot flies past three
planets in that window only the LAST lookup may land.

Every lookup captures the generation number when it starts. Anything that
supersedes it (a new closest body, leaving solar mode) bumps the counter.
When a lookup finishes it compares its captured number with the current
one, and a mismatch means the result is stale and gets dropped.

    t=0.0  Mars     -> gen 1, sleep 1.5
    t=0.4  Jupiter  -> gen 2, sleep 1.5   (gen 1 task cancelled)
    t=1.9  gen 2 lands: "Gas giant. Mass: ..."

Task cancellation alone isn't enough: a lookup can already be past its
last await when the cancel arrives.

Where the text comes from is behind DescriptionSource. The offline
PregeneratedDescriptions cycles through the local fact tables. A source
that raises is logged and answered with the matching offline message.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, List, Optional, Protocol
import asyncio
import logging
import time
import uuid

from .content import (
    CHAT_OFFLINE,
    DEEP_SCAN_OFFLINE,
    DESCRIPTIONS,
    FUN_FACTS,
    NO_DATA_MESSAGE,
    SCALE_FACTS,
)
from .persistence import GameStore
from .ports import AudioPort, NullAudio

logger = logging.getLogger(__name__)


@dataclass
class ComputerConfig:
    scan_delay: float = 1.5      # seconds of debounce before a passive scan
    history_size: int = 6        # chat messages sent along as context


@dataclass
class ChatMessage:
    role: str                    # "user" | "assistant"
    content: str
    body: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: int = field(default_factory=lambda: int(time.time() * 1000))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "role": self.role,
            "content": self.content,
            "timestamp": self.timestamp,
            "body": self.body,
        }


class DescriptionSource(Protocol):
    async def describe(self, body: str) -> str: ...
    async def deep_scan(self, body: str) -> str: ...
    async def chat(self, message: str, body: Optional[str], history: List[ChatMessage]) -> str: ...


def interleave_facts(body: str) -> List[str]:
    """science, fun, scale, science, fun, scale, ..."""
    tables = [DESCRIPTIONS.get(body, []), FUN_FACTS.get(body, []), SCALE_FACTS.get(body, [])]
    longest = max(len(t) for t in tables)
    combined = []
    for i in range(longest):
        for table in tables:
            if i < len(table):
                combined.append(table[i])
    return combined


class PregeneratedDescriptions:
    """Offline source: local fact tables, no network."""

    def __init__(self, latency: float = 0.0):
        self.latency = latency
        self._usage: Dict[str, int] = {}

    async def describe(self, body: str) -> str:
        facts = interleave_facts(body)
        if not facts:
            return NO_DATA_MESSAGE
        index = self._usage.get(body, 0)
        self._usage[body] = index + 1
        if self.latency > 0:
            await asyncio.sleep(self.latency)
        return facts[index % len(facts)]

    async def deep_scan(self, body: str) -> str:
        return DEEP_SCAN_OFFLINE

    async def chat(self, message: str, body: Optional[str], history: List[ChatMessage]) -> str:
        return CHAT_OFFLINE


class ShipComputer:
    def __init__(
        self,
        source: Optional[DescriptionSource] = None,
        config: Optional[ComputerConfig] = None,
        audio: Optional[AudioPort] = None,
        store: Optional[GameStore] = None,
    ):
        self.source = source or PregeneratedDescriptions()
        self.config = config or ComputerConfig()
        self.audio = audio or NullAudio()
        self.store = store

        self.body: Optional[str] = None
        self.description: Optional[str] = None
        self.loading = False
        self.messages: List[ChatMessage] = []
        self.chat_loading = False

        self.generation = 0
        self.pending: Optional[str] = None
        self._task: Optional[asyncio.Task] = None
        self._event_handlers: List[Callable[[dict], Awaitable[None]]] = []

    def on_event(self, handler: Callable[[dict], Awaitable[None]]) -> None:
        self._event_handlers.append(handler)

    async def _emit_event(self, event: dict) -> None:
        for handler in self._event_handlers:
            try:
                await handler(event)
            except Exception as e:
                logger.error(f"Computer event handler error: {e}")

    def _supersede(self) -> int:
        self.generation += 1
        self.pending = None
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        return self.generation

    def on_proximity_change(self, body: Optional[str]) -> None:
        """Closest body changed. Starts a debounced lookup for the new one."""
        self._supersede()
        self.body = body
        self.description = None
        if body is None:
            self.loading = False
            return

        self.audio.play_alert()
        self.loading = True
        if self.store is not None:
            self.store.mark_visited(body)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Called outside the host loop; start_pending() picks it up
            self.pending = body
            return
        self._task = loop.create_task(self._scan(self.generation, body))

    def start_pending(self) -> Optional[asyncio.Task]:
        """Schedule a lookup queued while no event loop was running."""
        if self.pending is None:
            return None
        body, self.pending = self.pending, None
        self._task = asyncio.get_running_loop().create_task(self._scan(self.generation, body))
        return self._task

    def cancel(self) -> None:
        """Drop any in-flight lookup (e.g. leaving solar mode)."""
        self._supersede()
        self.loading = False

    async def _scan(self, generation: int, body: str) -> None:
        await asyncio.sleep(self.config.scan_delay)
        try:
            text = await self.source.describe(body)
        except Exception as e:
            logger.warning(f"Description lookup for {body} failed: {e}")
            text = NO_DATA_MESSAGE
        await self._land(generation, body, text)

    async def _land(self, generation: int, body: str, text: str) -> bool:
        if generation != self.generation:
            logger.debug(f"Dropping stale description for {body}")
            return False
        self.description = text
        self.loading = False
        await self._emit_event({"type": "description", "body": body, "text": text})
        return True

    async def deep_scan(self) -> Optional[str]:
        """On-demand scan of the current body, bypassing the debounce."""
        body = self.body
        if body is None:
            return None
        generation = self._supersede()
        self.loading = True
        try:
            text = await self.source.deep_scan(body)
        except Exception as e:
            logger.warning(f"Deep scan of {body} failed: {e}")
            text = DEEP_SCAN_OFFLINE
        if not await self._land(generation, body, text):
            return None
        return text

    async def chat(self, message: str) -> ChatMessage:
        history = self.messages[-self.config.history_size:]
        self.messages.append(ChatMessage(role="user", content=message, body=self.body))
        self.chat_loading = True
        try:
            text = await self.source.chat(message, self.body, history)
        except Exception as e:
            logger.warning(f"Chat request failed: {e}")
            text = CHAT_OFFLINE
        finally:
            self.chat_loading = False
        reply = ChatMessage(role="assistant", content=text, body=self.body)
        self.messages.append(reply)
        await self._emit_event({"type": "chat", "message": reply.to_dict()})
        return reply

    def to_dict(self) -> dict:
        return {
            "body": self.body,
            "description": self.description,
            "loading": self.loading,
            "chat_loading": self.chat_loading,
            "messages": [m.to_dict() for m in self.messages],
        }
