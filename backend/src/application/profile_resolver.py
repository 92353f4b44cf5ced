"""
Display-name resolution for a provider-reported principal.
"""
from __future__ import annotations

import logging

from backend.src.application.profile_repository import ProfileRepository
from backend.src.core.entities.principal import Principal
from backend.src.core.exceptions import ProfileSyncError, SessionError

logger = logging.getLogger(__name__)


class ProfileResolver:
    """Resolves a principal's display name.

    The provider's own display-name field wins when it is set. Otherwise the
    stored profile document is read exactly once; a missing document leaves
    the name empty. Read failures raise :class:`ProfileSyncError`.
    """

    def __init__(self, profiles: ProfileRepository) -> None:
        self._profiles = profiles

    async def resolve(self, principal: Principal) -> str:
        if principal.display_name:
            return principal.display_name

        try:
            profile = await self._profiles.get_after_pending_writes(principal.uid)
        except SessionError:
            raise
        except Exception as exc:
            raise ProfileSyncError(f"Profile read failed for {principal.uid}: {exc}") from exc

        if profile is None:
            logger.info("No display name available yet for %s", principal.uid)
            return ""
        return profile.name
