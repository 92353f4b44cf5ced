"""Port for the interactive federated consent handshake."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class FederatedCredential:
    provider_id: str
    id_token: str = ""
    access_token: str = ""


@runtime_checkable
class ConsentFlowPort(Protocol):
    async def obtain_credential(self, provider_kind: str) -> FederatedCredential: ...
