from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from dataclasses import asdict
from typing import List, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from simulation import Simulation, SimulationConfig

logger = logging.getLogger(__name__)


class CallResult(BaseModel):
    floor: int
    accepted: bool
    status: str
    label: str


class FloorState(BaseModel):
    floor: int
    status: str
    label: str
    enabled: bool


class SimulationManager:
    def __init__(self, config: Optional[SimulationConfig] = None) -> None:
        self.config = config or SimulationConfig()
        self.config.validate()
        self.simulation = Simulation.from_config(self.config)
        self.tick_interval = self.config.tick_interval_ms / 1000
        self.clients: Set[WebSocket] = set()
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()
        self._pending_arrivals: List[dict] = []
        self.simulation.on_event("arrival", self._pending_arrivals.append)

    async def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def _run(self) -> None:
        while True:
            payload, arrivals = await self.tick()
            for arrival in arrivals:
                await self.broadcast({"type": "arrival", **arrival})
            await self.broadcast(payload)
            await asyncio.sleep(self.tick_interval)

    async def tick(self) -> tuple:
        async with self._lock:
            self.simulation.step()
            arrivals = list(self._pending_arrivals)
            self._pending_arrivals.clear()
            payload = self.current_state()
        return payload, arrivals

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except WebSocketDisconnect:
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        metrics = asdict(self.simulation.metrics.snapshot(self.simulation.current_time))
        building = self.simulation.building.snapshot()
        return {
            "type": "state",
            "time": self.simulation.current_time,
            "elevators": building["elevators"],
            "floors": building["floors"],
            "metrics": metrics,
        }

    def floor_state(self, floor: int) -> FloorState:
        status = self.simulation.floor_status(floor)
        return FloorState(
            floor=floor, status=status.value, label=status.label, enabled=status.accepts_calls
        )

    async def request_floor(self, floor: int) -> CallResult:
        async with self._lock:
            accepted = self.simulation.request_floor(floor)
            status = self.simulation.floor_status(floor)
        return CallResult(floor=floor, accepted=accepted, status=status.value, label=status.label)


def create_app(manager: SimulationManager) -> FastAPI:
    app = FastAPI(title="Elevator Bank Simulation API")
    app.state.manager = manager
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    async def on_startup() -> None:
        await manager.start()

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        await manager.stop()

    @app.get("/state")
    async def get_state() -> dict:
        return manager.current_state()

    @app.get("/floors/{floor}", response_model=FloorState)
    async def get_floor(floor: int) -> FloorState:
        try:
            return manager.floor_state(floor)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))

    @app.post("/floors/{floor}/call", response_model=CallResult)
    async def call_floor(floor: int) -> CallResult:
        try:
            return await manager.request_floor(floor)
        except ValueError as exc:
            logger.warning("Rejected call: %s", exc)
            raise HTTPException(status_code=400, detail=str(exc))

    @app.websocket("/ws/stream")
    async def websocket_endpoint(websocket: WebSocket) -> None:
        await manager.register(websocket)
        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            await manager.unregister(websocket)

    return app


app = create_app(SimulationManager())


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
