from backend.src.core.events.session_events import SessionStateChanged

__all__ = ["SessionStateChanged"]
