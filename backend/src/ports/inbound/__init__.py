from backend.src.ports.inbound.session_use_case import SessionUseCase

__all__ = ["SessionUseCase"]
