"""
API Server - The Bridge Between Game and Browser

This server does three things:
1. Host loop: one GameEngine ticking at 60 Hz for the lifetime of the app
2. WebSocket: stream per-tick snapshots out, take input samples in
3. REST API: mode switching, autopilot, orbit sandbox, computer, storage

The browser is a thin renderer. It never simulates anything; it draws
whatever the latest snapshot says and plays the audio cues attached to it.
"""

from __future__ import annotations
import asyncio
import json
import logging
import math
import os
from contextlib import asynccontextmanager
from typing import Optional, Set

from fastapi import FastAPI, WebSocket, WebSocketDisconnect, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from explorer.engine import GameEngine, EngineConfig
from explorer.modes import GameMode
from explorer.orbit import OrbitPreset
from explorer.persistence import GameStore
from explorer.vector import Vec2

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Manages WebSocket connections.

    Several tabs can watch the same game; every one of them gets every
    snapshot, and any of them can steer.
    """

    def __init__(self):
        self.active_connections: Set[WebSocket] = set()

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.add(websocket)
        logger.info(f"Client connected. Total: {len(self.active_connections)}")

    def disconnect(self, websocket: WebSocket):
        self.active_connections.discard(websocket)
        logger.info(f"Client disconnected. Total: {len(self.active_connections)}")

    async def broadcast(self, message: dict):
        """Send to all connected clients."""
        if not self.active_connections:
            return

        data = json.dumps(message)
        disconnected = []
        for connection in list(self.active_connections):
            try:
                await connection.send_text(data)
            except (WebSocketDisconnect, RuntimeError):
                disconnected.append(connection)

        for conn in disconnected:
            self.disconnect(conn)


# Global instances
manager = ConnectionManager()
store = GameStore()
engine = GameEngine(EngineConfig(), store=store)
engine.on_event(manager.broadcast)
run_task: Optional[asyncio.Task] = None


# ============================================================
# API Models
# ============================================================

class AutopilotRequest(BaseModel):
    target: str


class OrbitParamsRequest(BaseModel):
    distance: Optional[float] = None
    speed: Optional[float] = None
    angle: Optional[float] = None


class ChatRequest(BaseModel):
    message: str


class SettingsRequest(BaseModel):
    muted: bool


class ViewportRequest(BaseModel):
    width: float
    height: float


def parse_mode(mode: str) -> GameMode:
    try:
        return GameMode(mode)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown mode: {mode}")


# ============================================================
# FastAPI App
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown logic."""
    global run_task
    logger.info("Solar Explorer server starting...")
    run_task = asyncio.create_task(engine.run())
    yield
    logger.info("Server shutting down...")
    if run_task and not run_task.done():
        run_task.cancel()
        try:
            await run_task
        except asyncio.CancelledError:
            pass


app = FastAPI(
    title="Solar Explorer",
    description="Solar system flight sandbox with three minigames",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS for local dev (Vite on a different port)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# REST Endpoints
# ============================================================

@app.get("/")
async def root():
    return {
        "name": "Solar Explorer",
        "version": "0.1.0",
        "mode": engine.mode.value,
        "tick": engine.tick_count,
    }


@app.get("/bodies")
async def list_bodies():
    """Body table with current positions."""
    return [b.to_state_dict() for b in engine.bodies]


@app.get("/state")
async def get_state():
    """Full snapshot including the HUD. Does not consume pending audio cues."""
    return engine.snapshot(include_hud=True, drain_cues=False)


@app.post("/modes/exit")
async def exit_mode():
    engine.exit_mode()
    return {"mode": engine.mode.value}


@app.post("/modes/{mode}/enter")
async def enter_mode(mode: str):
    engine.enter_mode(parse_mode(mode))
    return {"mode": engine.mode.value}


@app.post("/modes/{mode}/reset")
async def reset_mode(mode: str):
    engine.reset_mode(parse_mode(mode))
    return {"mode": engine.mode.value, "reset": mode}


@app.post("/viewport")
async def set_viewport(request: ViewportRequest):
    if not (math.isfinite(request.width) and math.isfinite(request.height)):
        raise HTTPException(status_code=400, detail="Viewport must be finite")
    if request.width <= 0 or request.height <= 0:
        raise HTTPException(status_code=400, detail="Viewport must be positive")
    engine.set_viewport(request.width, request.height)
    return {"width": engine.config.width, "height": engine.config.height}


# ------------------------------------------------------------
# Autopilot
# ------------------------------------------------------------

@app.post("/autopilot")
async def engage_autopilot(request: AutopilotRequest):
    if engine.mode != GameMode.SOLAR:
        raise HTTPException(status_code=400, detail="Autopilot is only available in solar mode")
    if not engine.engage_autopilot(request.target):
        raise HTTPException(status_code=400, detail=f"Unknown body: {request.target}")
    return engine.autopilot.to_dict()


@app.delete("/autopilot")
async def disengage_autopilot():
    engine.disengage_autopilot()
    return engine.autopilot.to_dict()


# ------------------------------------------------------------
# Orbit sandbox
# ------------------------------------------------------------

@app.get("/orbit")
async def get_orbit():
    return engine.orbit.to_dict()


@app.put("/orbit/params")
async def set_orbit_params(request: OrbitParamsRequest):
    values = (request.distance, request.speed, request.angle)
    if any(v is not None and not math.isfinite(v) for v in values):
        raise HTTPException(status_code=400, detail="Orbit parameters must be finite")
    if request.distance is not None and request.distance <= 0:
        raise HTTPException(status_code=400, detail="Distance must be positive")
    params = engine.orbit.set_params(request.distance, request.speed, request.angle)
    return params.to_dict()


@app.post("/orbit/launch")
async def launch_orbit():
    launched = engine.orbit.launch()
    return {"launched": launched, "status": engine.orbit.status.value}


@app.post("/orbit/reset")
async def reset_orbit():
    engine.orbit.reset()
    return {"status": engine.orbit.status.value}


@app.post("/orbit/presets/{preset}")
async def apply_orbit_preset(preset: str):
    try:
        kind = OrbitPreset(preset)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown preset: {preset}")
    params = engine.orbit.apply_preset(kind)
    return {"params": params.to_dict(), "status": engine.orbit.status.value}


# ------------------------------------------------------------
# Arcade
# ------------------------------------------------------------

@app.post("/arcade/fire")
async def arcade_fire():
    if engine.mode != GameMode.ARCADE:
        raise HTTPException(status_code=400, detail="Arcade is not active")
    return {"fired": engine.fire()}


# ------------------------------------------------------------
# Ship computer
# ------------------------------------------------------------

@app.post("/scan")
async def deep_scan():
    if engine.computer.body is None:
        raise HTTPException(status_code=400, detail="Nothing in scanner range")
    text = await engine.computer.deep_scan()
    return {"body": engine.computer.body, "description": text}


@app.post("/chat")
async def chat(request: ChatRequest):
    message = request.message.strip()
    if not message:
        raise HTTPException(status_code=400, detail="Empty message")
    reply = await engine.computer.chat(message)
    return reply.to_dict()


@app.get("/chat")
async def chat_history():
    return [m.to_dict() for m in engine.computer.messages]


# ------------------------------------------------------------
# Storage
# ------------------------------------------------------------

@app.get("/scores")
async def get_scores():
    return store.get_high_scores()


@app.get("/visited")
async def get_visited():
    return store.get_visited()


@app.get("/settings")
async def get_settings():
    return store.get_settings()


@app.put("/settings")
async def put_settings(request: SettingsRequest):
    return store.save_settings({"muted": request.muted})


# ============================================================
# WebSocket
# ============================================================

def handle_client_message(message: dict) -> Optional[dict]:
    """
    Apply one input sample from a client. Returns a reply, if any.

    Message types:
    - ping                      -> pong
    - key_down / key_up         {key}
    - joystick                  {x, y}  (already normalized by the client)
    - pointer                   {x, y} in world space, or {active: false}
    - viewport                  {width, height}
    - fire                      one-shot fire (touch button)

    Non-finite joystick or pointer coordinates raise ValueError.
    """
    kind = message.get("type")
    if kind == "ping":
        return {"type": "pong"}
    if kind == "key_down":
        engine.input.key_down(str(message.get("key", "")))
    elif kind == "key_up":
        engine.input.key_up(str(message.get("key", "")))
    elif kind == "joystick":
        engine.input.set_joystick(float(message.get("x", 0.0)), float(message.get("y", 0.0)))
    elif kind == "pointer":
        if message.get("active", True) and "x" in message and "y" in message:
            engine.input.set_pointer(Vec2(float(message["x"]), float(message["y"])))
        else:
            engine.input.set_pointer(None)
    elif kind == "viewport":
        engine.set_viewport(float(message.get("width", 0)), float(message.get("height", 0)))
    elif kind == "fire":
        return {"type": "fired", "fired": engine.fire()}
    else:
        return {"type": "error", "detail": f"Unknown message type: {kind}"}
    return None


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """
    Bidirectional game channel.

    Out: {"type": "state", ...} every tick, plus proximity / description /
    chat / game_over events as they happen.
    In:  input samples (see handle_client_message).
    """
    await manager.connect(websocket)
    try:
        while True:
            data = await websocket.receive_text()
            try:
                message = json.loads(data)
                reply = handle_client_message(message)
            except (json.JSONDecodeError, TypeError, ValueError, AttributeError) as e:
                reply = {"type": "error", "detail": f"Bad message: {e}"}
            if reply is not None:
                await websocket.send_text(json.dumps(reply))
    except WebSocketDisconnect:
        manager.disconnect(websocket)


# ============================================================
# Main entry point
# ============================================================

if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(
        app,
        host=os.environ.get("EXPLORER_HOST", "0.0.0.0"),
        port=int(os.environ.get("EXPLORER_PORT", "8000")),
    )
