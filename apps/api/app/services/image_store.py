from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class ImageStoreError(Exception):
    pass


class ImageStore:
    """
    Read-only access to base64 images kept in MongoDB.

    The client is created on first lookup and reused for the life of the
    process.
    """

    def __init__(
        self,
        uri: str | None,
        *,
        db_name: str,
        collection: str,
        client_factory: Callable[[str], Any] = AsyncMongoClient,
    ) -> None:
        self._uri = uri
        self._db_name = db_name
        self._collection_name = collection
        self._client_factory = client_factory
        self._client: Any | None = None
        self._lock = asyncio.Lock()

    async def _get_client(self) -> Any:
        if self._client is not None:
            return self._client
        async with self._lock:
            if self._client is None:
                if not self._uri:
                    raise ImageStoreError("MONGODB_URI is not configured")
                client = self._client_factory(self._uri)
                try:
                    await client.aconnect()
                except Exception:
                    await client.close()
                    raise
                self._client = client
        return self._client

    async def _find_image(self, doc_id: str) -> str | None:
        try:
            oid = ObjectId(doc_id)
        except (InvalidId, TypeError) as exc:
            raise ImageStoreError(f"invalid image id {doc_id!r}") from exc

        client = await self._get_client()
        try:
            doc = await client[self._db_name][self._collection_name].find_one(
                {"_id": oid}
            )
        except PyMongoError as exc:
            raise ImageStoreError(str(exc)) from exc

        if not doc:
            return None
        value = doc.get("base64")
        if isinstance(value, str) and value:
            return value
        return None

    async def get_image_base64(self, doc_id: str) -> str | None:
        try:
            return await self._find_image(doc_id)
        except Exception as exc:
            # Store unreachable, missing document or undecodable BSON: no image.
            logger.warning("Image lookup failed for %s: %s", doc_id, exc)
            return None

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
