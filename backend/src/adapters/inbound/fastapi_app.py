"""
FastAPI application - primary inbound adapter.
Exposes the current session and the credential operations to the client UI.
"""
from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.src.adapters.inbound.websocket_handler import connections
from backend.src.infrastructure.config import Settings
from backend.src.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)

settings = Settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the shared session manager on startup, close it on shutdown."""
    setup_logging(settings.logging.level)
    settings.validate_production()
    logger.info("Session orchestrator starting up...")
    from backend.src.infrastructure.container import ApplicationContainer
    container = ApplicationContainer(settings)
    app.state.container = container
    manager = container.session_manager()
    manager.start()
    connections.attach(manager)
    yield
    logger.info("Session orchestrator shutting down...")
    connections.detach()
    await container.aclose()


app = FastAPI(
    title="Session Orchestrator API",
    description="Current-session state and credential operations",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.web.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Log each request with method, path, status, and duration."""
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    if request.url.path.startswith("/api"):
        response.headers["cache-control"] = "no-store, no-cache, must-revalidate"
    logger.info(
        "%s %s -> %d (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


@app.exception_handler(RuntimeError)
async def runtime_error_handler(request: Request, exc: RuntimeError):
    logger.error("Runtime error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


# ── API routes ─────────────────────────────────────────────────

from backend.src.adapters.inbound.api.session import router as session_router

app.include_router(session_router, prefix="/api/session", tags=["session"])


@app.get("/api/health")
async def health():
    return {
        "status": "ok",
        "version": "0.1.0",
        "identity_backend": "firebase" if settings.firebase.enabled else "memory",
    }


@app.get("/api/config/firebase")
async def firebase_config():
    """Return public Firebase config for frontend SDK initialization."""
    return {
        "enabled": settings.firebase.enabled,
        "apiKey": settings.firebase.api_key,
        "authDomain": settings.firebase.auth_domain,
        "projectId": settings.firebase.project_id,
    }


@app.websocket("/ws/session")
async def session_websocket(websocket: WebSocket):
    """Stream session snapshots: the current one on connect, then every change."""
    manager = websocket.app.state.container.session_manager()
    await connections.serve(websocket, manager)


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting session orchestrator on %s:%d", settings.web.host, settings.web.port)
    uvicorn.run(
        "backend.src.adapters.inbound.fastapi_app:app",
        host=settings.web.host,
        port=settings.web.port,
        log_level=settings.logging.level.lower(),
    )
