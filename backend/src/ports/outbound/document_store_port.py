"""Port for the remote document store."""
from __future__ import annotations
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class DocumentStorePort(Protocol):
    async def get(self, collection: str, key: str) -> Optional[dict]: ...
    async def set(self, collection: str, key: str, value: dict) -> None: ...
