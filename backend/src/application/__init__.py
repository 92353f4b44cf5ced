from backend.src.application.profile_repository import ProfileRepository
from backend.src.application.profile_resolver import ProfileResolver
from backend.src.application.session_manager import SessionManager
from backend.src.application.session_state_store import SessionStateStore

__all__ = [
    "SessionManager",
    "SessionStateStore",
    "ProfileRepository",
    "ProfileResolver",
]
