"""Cloud Firestore adapter implementing DocumentStorePort."""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core import exceptions as google_exceptions

from backend.src.core.exceptions import ProfileSyncError

logger = logging.getLogger(__name__)


class FirestoreDocumentStore:
    """Reads and writes whole documents through the Firebase Admin SDK.

    The SDK client is blocking, so each call runs in the default executor.
    """

    def __init__(self, credentials_path: str = "", project_id: str = "", client=None) -> None:
        if client is None:
            if not firebase_admin._apps:
                cred = (
                    credentials.Certificate(credentials_path)
                    if credentials_path
                    else credentials.ApplicationDefault()
                )
                options = {"projectId": project_id} if project_id else {}
                firebase_admin.initialize_app(cred, options)
                logger.info("Firebase Admin SDK initialized (project=%s)", project_id)
            client = firestore.client()
        self._client = client

    async def get(self, collection: str, key: str) -> Optional[dict]:
        ref = self._client.collection(collection).document(key)
        loop = asyncio.get_running_loop()
        try:
            snapshot = await loop.run_in_executor(None, ref.get)
        except google_exceptions.GoogleAPIError as exc:
            logger.error("Firestore read %s/%s failed: %s", collection, key, exc)
            raise ProfileSyncError(f"Read of {collection}/{key} failed: {exc}") from exc
        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}

    async def set(self, collection: str, key: str, value: dict) -> None:
        ref = self._client.collection(collection).document(key)
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, ref.set, value)
        except google_exceptions.GoogleAPIError as exc:
            logger.error("Firestore write %s/%s failed: %s", collection, key, exc)
            raise ProfileSyncError(f"Write of {collection}/{key} failed: {exc}") from exc
        logger.debug("Wrote %s/%s", collection, key)
