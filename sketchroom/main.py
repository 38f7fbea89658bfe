# sketchroom/main.py
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sketchroom.domain.common.scheduler import RoomScheduler
from sketchroom.domain.common.words import WordBank
from sketchroom.logging_config import configure_logging
from sketchroom.settings import Settings, get_settings
from sketchroom.store.memory_repo import MemoryRepo
from sketchroom.store.registry import ConnectionRegistry
from sketchroom.transport.admin import router as admin_router
from sketchroom.transport.gateway import BroadcastGateway
from sketchroom.transport.ws import router as ws_router
from sketchroom.transport.ws_manager import WSManager


def create_app(settings: Optional[Settings] = None, words: Optional[WordBank] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.APP_NAME)
    allowed_origins = [o.strip() for o in settings.WS_ALLOWED_ORIGINS.split(",") if o.strip()]
    if "null" not in allowed_origins:
        allowed_origins.append("null")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # all game state is process-local
    app.state.settings = settings
    app.state.repo = MemoryRepo()
    app.state.registry = ConnectionRegistry()
    app.state.scheduler = RoomScheduler()
    app.state.words = words or WordBank()
    app.state.wsman = WSManager()
    app.state.gateway = BroadcastGateway(app.state.wsman, app.state.registry)

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        app.state.scheduler.cancel_all()

    @app.get("/health")
    async def health():
        rooms = await app.state.repo.list_rooms()
        return {"ok": True, "rooms": len(rooms), "connections": await app.state.wsman.size()}

    app.include_router(ws_router)
    app.include_router(admin_router)
    return app


app = create_app()
