"""Firebase Authentication adapter over the Identity Toolkit REST API.

Implements :class:`IdentityProviderPort` for an interactive client: the
signed-in user and its ID token live in this process, and sign-out only
drops them locally, as the Firebase client SDKs do.
"""
from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlencode

import httpx

from backend.src.adapters.outbound.firebase.auth_state import AuthStateNotifier
from backend.src.core.entities.principal import PASSWORD_PROVIDER, Principal
from backend.src.core.exceptions import (
    CredentialError,
    FederatedAuthError,
    ProviderUnavailable,
    SessionError,
)
from backend.src.ports.outbound.consent_flow_port import ConsentFlowPort

logger = logging.getLogger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"

CREDENTIAL_ERROR_CODES = frozenset({
    "EMAIL_EXISTS",
    "EMAIL_NOT_FOUND",
    "INVALID_EMAIL",
    "INVALID_PASSWORD",
    "INVALID_LOGIN_CREDENTIALS",
    "MISSING_PASSWORD",
    "MISSING_EMAIL",
    "WEAK_PASSWORD",
    "USER_DISABLED",
    "INVALID_ID_TOKEN",
    "TOKEN_EXPIRED",
    "USER_NOT_FOUND",
})

UNAVAILABLE_ERROR_CODES = frozenset({
    "TOO_MANY_ATTEMPTS_TRY_LATER",
    "QUOTA_EXCEEDED",
    "INTERNAL_ERROR",
    "API_KEY_INVALID",
    "PROJECT_NOT_FOUND",
})


def parse_error_code(payload: dict) -> str:
    """Extract the provider code from an error body.

    Messages look like ``"WEAK_PASSWORD : Password should be at least 6
    characters"``; only the leading token is the code.
    """
    message = (payload.get("error") or {}).get("message") or ""
    return message.split(":", 1)[0].strip().split(" ", 1)[0]


def error_for_code(code: str, federated: bool = False) -> SessionError:
    if code in UNAVAILABLE_ERROR_CODES:
        return ProviderUnavailable(f"Identity provider unavailable: {code}", code=code)
    if federated:
        return FederatedAuthError(f"Federated sign-in rejected: {code}", code=code)
    if code not in CREDENTIAL_ERROR_CODES:
        logger.warning("Unrecognized identity provider error code: %s", code or "<empty>")
    return CredentialError(f"Credentials rejected: {code}", code=code)


class IdentityToolkitProvider(AuthStateNotifier):
    """Email/password and federated sign-in against Firebase Authentication."""

    def __init__(
        self,
        api_key: str,
        consent_flow: Optional[ConsentFlowPort] = None,
        base_url: str = IDENTITY_TOOLKIT_URL,
        timeout: float = 10.0,
        request_uri: str = "http://localhost",
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__()
        self._api_key = api_key
        self._consent_flow = consent_flow
        self._base_url = base_url.rstrip("/")
        self._request_uri = request_uri
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._id_token: Optional[str] = None
        self._refresh_token: Optional[str] = None

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ── REST plumbing ─────────────────────────────────────────────

    async def _post(self, endpoint: str, payload: dict, federated: bool = False) -> dict:
        url = f"{self._base_url}/accounts:{endpoint}"
        try:
            response = await self._client.post(url, params={"key": self._api_key}, json=payload)
        except httpx.HTTPError as exc:
            raise ProviderUnavailable(f"{endpoint} request failed: {exc}") from exc

        if response.status_code >= 500:
            raise ProviderUnavailable(
                f"{endpoint} returned HTTP {response.status_code}",
                code=str(response.status_code),
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderUnavailable(f"{endpoint} returned a non-JSON body") from exc

        if response.status_code >= 400:
            code = parse_error_code(data)
            logger.debug("%s rejected with %s", endpoint, code)
            raise error_for_code(code, federated=federated)
        return data

    def _accept_session(self, data: dict, provider_id: str) -> Principal:
        principal = Principal(
            uid=data["localId"],
            email=data.get("email") or None,
            display_name=data.get("displayName") or None,
            provider_id=data.get("providerId") or provider_id,
        )
        self._id_token = data.get("idToken")
        self._refresh_token = data.get("refreshToken")
        self._set_current(principal)
        return principal

    # ── IdentityProviderPort implementation ───────────────────────

    async def create_account(self, email: str, password: str) -> Principal:
        data = await self._post(
            "signUp", {"email": email, "password": password, "returnSecureToken": True}
        )
        logger.info("Account created for %s", email)
        return self._accept_session(data, PASSWORD_PROVIDER)

    async def sign_in(self, email: str, password: str) -> Principal:
        data = await self._post(
            "signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return self._accept_session(data, PASSWORD_PROVIDER)

    async def sign_in_federated(self, provider_kind: str) -> Principal:
        if self._consent_flow is None:
            raise FederatedAuthError(
                f"No consent flow configured for {provider_kind}", code="OPERATION_NOT_ALLOWED"
            )
        credential = await self._consent_flow.obtain_credential(provider_kind)
        post_body = {"providerId": credential.provider_id}
        if credential.id_token:
            post_body["id_token"] = credential.id_token
        else:
            post_body["access_token"] = credential.access_token

        data = await self._post(
            "signInWithIdp",
            {
                "postBody": urlencode(post_body),
                "requestUri": self._request_uri,
                "returnIdpCredential": True,
                "returnSecureToken": True,
            },
            federated=True,
        )
        if data.get("errorMessage"):
            raise FederatedAuthError(
                f"Federated sign-in rejected: {data['errorMessage']}", code=data["errorMessage"]
            )
        return self._accept_session(data, provider_kind)

    async def sign_out(self) -> None:
        self._id_token = None
        self._refresh_token = None
        self._set_current(None)

    async def update_profile(self, principal: Principal, display_name: str) -> Principal:
        current = self.current_principal
        if self._id_token is None or current is None or current.uid != principal.uid:
            raise CredentialError(
                f"No signed-in session for {principal.uid}", code="INVALID_ID_TOKEN"
            )
        data = await self._post(
            "update",
            {"idToken": self._id_token, "displayName": display_name, "returnSecureToken": False},
        )
        updated = Principal(
            uid=principal.uid,
            email=data.get("email") or principal.email,
            display_name=data.get("displayName") or display_name,
            provider_id=principal.provider_id,
        )
        self._set_current(updated)
        return updated
