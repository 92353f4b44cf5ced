"""Interactive Google consent via the OAuth loopback flow.

Opens the user's browser on Google's consent screen and waits on a local
redirect server for the result; the returned Google ID token is what
Firebase's ``signInWithIdp`` exchanges for a session.
"""
from __future__ import annotations

import asyncio
import logging

from google_auth_oauthlib.flow import InstalledAppFlow

from backend.src.core.entities.principal import GOOGLE_PROVIDER
from backend.src.core.exceptions import FederatedAuthError
from backend.src.ports.outbound.consent_flow_port import FederatedCredential

logger = logging.getLogger(__name__)

GOOGLE_SCOPES = [
    "openid",
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/userinfo.profile",
]


class GoogleConsentFlow:
    """Implements :class:`ConsentFlowPort` for ``google.com``."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        timeout_seconds: int = 120,
        port: int = 0,
        open_browser: bool = True,
    ) -> None:
        self._client_config = {
            "installed": {
                "client_id": client_id,
                "client_secret": client_secret,
                "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                "token_uri": "https://oauth2.googleapis.com/token",
                "redirect_uris": ["http://localhost"],
            }
        }
        self._configured = bool(client_id and client_secret)
        self._timeout = timeout_seconds
        self._port = port
        self._open_browser = open_browser

    async def obtain_credential(self, provider_kind: str) -> FederatedCredential:
        if provider_kind != GOOGLE_PROVIDER:
            raise FederatedAuthError(f"Unsupported provider: {provider_kind}", code="INVALID_PROVIDER_ID")
        if not self._configured:
            raise FederatedAuthError("Google OAuth client is not configured", code="OPERATION_NOT_ALLOWED")

        loop = asyncio.get_running_loop()
        try:
            credentials = await loop.run_in_executor(None, self._run_flow)
        except Exception as exc:
            logger.warning("Google consent flow did not complete: %s", exc)
            raise FederatedAuthError(f"Google consent flow failed: {exc}", code="POPUP_CLOSED_BY_USER") from exc

        id_token = getattr(credentials, "id_token", None)
        if not id_token:
            raise FederatedAuthError("Google consent returned no ID token", code="MISSING_ID_TOKEN")
        return FederatedCredential(
            provider_id=GOOGLE_PROVIDER,
            id_token=id_token,
            access_token=getattr(credentials, "token", None) or "",
        )

    def _run_flow(self):
        flow = InstalledAppFlow.from_client_config(self._client_config, scopes=GOOGLE_SCOPES)
        logger.info("Waiting for Google consent (timeout=%ss)", self._timeout)
        return flow.run_local_server(
            port=self._port,
            open_browser=self._open_browser,
            timeout_seconds=self._timeout,
        )
