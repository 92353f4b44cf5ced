"""In-memory implementation of DocumentStorePort for development and tests."""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class InMemoryDocumentStore:
    """Collection -> key -> document dicts.

    Documents are deep-copied on the way in and out so callers can never
    mutate stored state.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict]] = {}
        self._lock = asyncio.Lock()

    # -- DocumentStorePort implementation --------------------------------------

    async def get(self, collection: str, key: str) -> Optional[dict]:
        async with self._lock:
            document = self._collections.get(collection, {}).get(key)
            if document is None:
                logger.debug("Document %s/%s not found", collection, key)
                return None
            return copy.deepcopy(document)

    async def set(self, collection: str, key: str, value: dict) -> None:
        async with self._lock:
            self._collections.setdefault(collection, {})[key] = copy.deepcopy(value)
            logger.debug("Saved document %s/%s", collection, key)

    # -- helpers ---------------------------------------------------------------

    def count(self, collection: str) -> int:
        return len(self._collections.get(collection, {}))
