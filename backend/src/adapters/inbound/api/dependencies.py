"""FastAPI dependencies for the shared session manager."""
from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Request

from backend.src.application.session_manager import SessionManager
from backend.src.core.entities.user import SessionUser


def get_session_manager(request: Request) -> SessionManager:
    """Return the process-wide session manager started in the app lifespan."""
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise RuntimeError("Session manager requested before application startup")
    manager = container.session_manager()
    if not manager.started:
        raise RuntimeError("Session manager must be started before it is used")
    return manager


async def get_current_user(manager: SessionManager = Depends(get_session_manager)) -> SessionUser:
    """Return the signed-in user or fail with 401."""
    user: Optional[SessionUser] = manager.user
    if user is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user
