from backend.src.core.entities.principal import GOOGLE_PROVIDER, PASSWORD_PROVIDER, Principal
from backend.src.core.entities.profile_document import ProfileDocument
from backend.src.core.entities.session_state import SessionState, SessionStatus, SessionWriter
from backend.src.core.entities.user import SessionUser

__all__ = [
    "Principal", "GOOGLE_PROVIDER", "PASSWORD_PROVIDER",
    "ProfileDocument", "SessionState", "SessionStatus", "SessionWriter", "SessionUser",
]
