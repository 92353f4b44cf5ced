"""
Profile documents on top of the document store port.
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from backend.src.core.entities.profile_document import ProfileDocument
from backend.src.ports.outbound.document_store_port import DocumentStorePort

logger = logging.getLogger(__name__)


class ProfileRepository:
    """Reads and creates profile documents keyed by principal uid.

    Profile writes issued by credential operations run inside
    :meth:`write_guard`; reads taken through :meth:`get_after_pending_writes`
    wait for those writes to finish first.
    """

    def __init__(self, document_store: DocumentStorePort, collection: str = "users") -> None:
        self._store = document_store
        self._collection = collection
        self._write_lock = asyncio.Lock()

    @property
    def collection(self) -> str:
        return self._collection

    async def get(self, uid: str) -> Optional[ProfileDocument]:
        data = await self._store.get(self._collection, uid)
        if data is None:
            logger.debug("No profile document for %s", uid)
            return None
        return ProfileDocument.from_dict(data)

    async def get_after_pending_writes(self, uid: str) -> Optional[ProfileDocument]:
        async with self._write_lock:
            return await self.get(uid)

    async def create(self, uid: str, profile: ProfileDocument) -> ProfileDocument:
        await self._store.set(self._collection, uid, profile.to_dict())
        logger.info("Profile document created for %s", uid)
        return profile

    @asynccontextmanager
    async def write_guard(self) -> AsyncIterator[None]:
        async with self._write_lock:
            yield
