"""Minimal Pinecone data-plane client - upsert only."""

import httpx
import time
from typing import Any, Optional
from app.config import get_settings
from app.logging_config import get_logger

logger = get_logger('integrations')


class VectorStoreError(Exception):
    """Raised when the vector index returns non-2xx."""
    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"Vector store error ({status}): {body}")


class VectorStoreClient:
    """
    Pinecone index client.

    POST {index_host}/vectors/upsert -> json={"vectors": [{id, values, metadata}], "namespace"}
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        index_host: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.api_key = api_key or settings.pinecone_api_key
        self.index_host = (index_host or settings.pinecone_index_host).rstrip("/")
        self.namespace = settings.pinecone_namespace
        self.timeout = timeout or settings.remote_timeout_seconds
        self.transport = transport

        if not self.api_key:
            raise VectorStoreError(0, "PINECONE_API_KEY not configured")
        if not self.index_host:
            raise VectorStoreError(0, "PINECONE_INDEX_HOST not configured")
        if not self.index_host.startswith("http"):
            self.index_host = f"https://{self.index_host}"

        self.headers = {
            "Api-Key": self.api_key,
            "Accept": "application/json",
        }

    async def upsert(self, record: dict[str, Any]) -> int:
        """Upsert one {id, values, metadata} record. Returns upserted count."""
        start_time = time.time()
        url = f"{self.index_host}/vectors/upsert"
        payload: dict[str, Any] = {"vectors": [record]}
        if self.namespace:
            payload["namespace"] = self.namespace

        logger.info(f"→ VECTOR_UPSERT | id={record.get('id')} | dims={len(record.get('values', []))}")

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.post(url, headers=self.headers, json=payload)

        duration = time.time() - start_time

        if resp.status_code != 200:
            logger.error(f"✗ VECTOR_UPSERT_FAILED | status={resp.status_code} | error={resp.text[:200]} | duration={duration:.3f}s")
            raise VectorStoreError(resp.status_code, resp.text)

        upserted = resp.json().get("upsertedCount", 1)
        logger.info(f"✓ VECTOR_UPSERT_SUCCESS | id={record.get('id')} | upserted={upserted} | duration={duration:.3f}s")
        return upserted
