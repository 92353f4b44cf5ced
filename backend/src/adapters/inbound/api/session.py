"""
Session API routes.

Credential operations always answer 200 with ``success`` set; the caller
decides how to show a failure.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from backend.src.adapters.inbound.api.dependencies import get_current_user, get_session_manager
from backend.src.application.session_manager import SessionManager
from backend.src.core.entities.user import SessionUser
from backend.src.core.value_objects.operation_result import OperationResult

router = APIRouter()


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: str
    name: str
    email: str


class SessionResponse(BaseModel):
    user: Optional[UserResponse] = None
    loading: bool
    status: str
    revision: int


class OperationResponse(BaseModel):
    success: bool
    reason: Optional[str] = None
    message: str = ""


def _session_response(manager: SessionManager) -> SessionResponse:
    return SessionResponse(**manager.state.to_dict())


def _operation_response(result: OperationResult) -> OperationResponse:
    return OperationResponse(**result.to_dict())


@router.get("", response_model=SessionResponse)
async def get_session(manager: SessionManager = Depends(get_session_manager)):
    return _session_response(manager)


@router.get("/me", response_model=UserResponse)
async def get_me(user: SessionUser = Depends(get_current_user)):
    return UserResponse(**user.to_dict())


@router.post("/register", response_model=OperationResponse)
async def register(body: RegisterRequest, manager: SessionManager = Depends(get_session_manager)):
    result = await manager.register(body.name, body.email, body.password)
    return _operation_response(result)


@router.post("/login", response_model=OperationResponse)
async def login(body: LoginRequest, manager: SessionManager = Depends(get_session_manager)):
    result = await manager.login(body.email, body.password)
    return _operation_response(result)


@router.post("/login/google", response_model=OperationResponse)
async def login_with_google(manager: SessionManager = Depends(get_session_manager)):
    result = await manager.login_with_google()
    return _operation_response(result)


@router.post("/logout", response_model=OperationResponse)
async def logout(manager: SessionManager = Depends(get_session_manager)):
    result = await manager.logout()
    return _operation_response(result)
