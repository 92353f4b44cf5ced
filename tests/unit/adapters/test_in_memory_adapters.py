"""Unit tests for the in-memory identity provider and document store."""
from __future__ import annotations

import pytest

from backend.src.adapters.outbound.firebase.in_memory_identity import (
    DEV_GOOGLE_PRINCIPAL,
    InMemoryIdentityProvider,
)
from backend.src.core.entities.principal import GOOGLE_PROVIDER
from backend.src.core.exceptions import CredentialError, FederatedAuthError


class TestInMemoryIdentityProvider:
    @pytest.mark.asyncio
    async def test_create_account_signs_in(self, identity):
        principal = await identity.create_account("grace@example.com", "validpass1")

        assert principal.email == "grace@example.com"
        assert identity.current_principal == principal

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email,password,code", [
        ("not-an-email", "validpass1", "INVALID_EMAIL"),
        ("grace@example.com", "123", "WEAK_PASSWORD"),
    ])
    async def test_create_account_rejections(self, identity, email, password, code):
        with pytest.raises(CredentialError) as exc_info:
            await identity.create_account(email, password)
        assert exc_info.value.code == code
        assert identity.current_principal is None

    @pytest.mark.asyncio
    async def test_duplicate_email_is_case_insensitive(self, identity):
        identity.add_account("Grace@Example.com", "validpass1")

        with pytest.raises(CredentialError) as exc_info:
            await identity.create_account("grace@example.com", "validpass1")

        assert exc_info.value.code == "EMAIL_EXISTS"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email,password,code", [
        ("nobody@example.com", "whatever", "EMAIL_NOT_FOUND"),
        ("user@example.com", "wrong", "INVALID_PASSWORD"),
    ])
    async def test_sign_in_rejections(self, identity, email, password, code):
        identity.add_account("user@example.com", "correct-horse")

        with pytest.raises(CredentialError) as exc_info:
            await identity.sign_in(email, password)

        assert exc_info.value.code == code

    @pytest.mark.asyncio
    async def test_disabled_account(self, identity):
        identity.add_account("user@example.com", "correct-horse", disabled=True)

        with pytest.raises(CredentialError) as exc_info:
            await identity.sign_in("user@example.com", "correct-horse")

        assert exc_info.value.code == "USER_DISABLED"

    @pytest.mark.asyncio
    async def test_federated_sign_in(self):
        identity = InMemoryIdentityProvider({GOOGLE_PROVIDER: DEV_GOOGLE_PRINCIPAL})

        principal = await identity.sign_in_federated(GOOGLE_PROVIDER)

        assert principal == DEV_GOOGLE_PRINCIPAL
        assert identity.current_principal == DEV_GOOGLE_PRINCIPAL

    @pytest.mark.asyncio
    async def test_federated_dismissed(self, identity):
        with pytest.raises(FederatedAuthError) as exc_info:
            await identity.sign_in_federated(GOOGLE_PROVIDER)
        assert exc_info.value.code == "POPUP_CLOSED_BY_USER"

    @pytest.mark.asyncio
    async def test_update_profile_keeps_same_user(self, identity):
        principal = await identity.create_account("grace@example.com", "validpass1")
        seen = []

        async def listener(p):
            seen.append(p)

        identity.subscribe(listener)
        await identity.drain()

        await identity.update_profile(principal, display_name="Grace")
        await identity.drain()

        assert identity.current_principal.display_name == "Grace"
        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_sign_out_notifies_once(self, identity):
        identity.add_account("user@example.com", "correct-horse")
        seen = []

        async def listener(p):
            seen.append(p.uid if p else None)

        identity.subscribe(listener)
        await identity.sign_in("user@example.com", "correct-horse")
        await identity.sign_out()
        await identity.sign_out()
        await identity.drain()

        assert seen[0] is None
        assert seen[-1] is None
        assert len(seen) == 3

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_stop_others(self, identity):
        seen = []

        async def broken(p):
            raise RuntimeError("listener bug")

        async def listener(p):
            seen.append(p)

        identity.subscribe(broken)
        identity.subscribe(listener)
        await identity.drain()

        assert seen == [None]


class TestInMemoryDocumentStore:
    @pytest.mark.asyncio
    async def test_set_and_get(self, documents):
        await documents.set("users", "uid-ada", {"name": "Ada"})

        assert await documents.get("users", "uid-ada") == {"name": "Ada"}
        assert documents.count("users") == 1

    @pytest.mark.asyncio
    async def test_missing(self, documents):
        assert await documents.get("users", "nobody") is None
        assert documents.count("users") == 0

    @pytest.mark.asyncio
    async def test_returned_documents_are_copies(self, documents):
        value = {"name": "Ada"}
        await documents.set("users", "uid-ada", value)
        value["name"] = "changed"

        fetched = await documents.get("users", "uid-ada")
        fetched["name"] = "also changed"

        assert await documents.get("users", "uid-ada") == {"name": "Ada"}
