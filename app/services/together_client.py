"""Minimal Together AI client - embeddings only."""

import httpx
import time
from typing import Optional
from app.config import get_settings
from app.logging_config import get_logger

logger = get_logger('integrations')


class TogetherError(Exception):
    """Raised when the Together API returns non-2xx or an unusable body."""
    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"Together error ({status}): {body}")


class TogetherClient:
    """
    Embedding provider.

    POST /embeddings -> json={"model", "input"}; response data[0].embedding
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.api_key = api_key or settings.together_api_key
        self.base_url = settings.together_base_url.rstrip("/")
        self.model = settings.embedding_model
        self.timeout = timeout or settings.remote_timeout_seconds
        self.transport = transport

        if not self.api_key:
            raise TogetherError(0, "TOGETHER_API_KEY not configured")

        self.headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    async def create_embedding(self, text: str) -> list[float]:
        """Embed a single text. Returns the vector."""
        if not text or not text.strip():
            raise TogetherError(400, "Embedding input cannot be empty")

        start_time = time.time()
        url = f"{self.base_url}/embeddings"
        payload = {"model": self.model, "input": text}

        logger.info(f"→ TOGETHER_EMBEDDING | model={self.model} | input_length={len(text)} chars")

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.post(url, headers=self.headers, json=payload)

        duration = time.time() - start_time

        if resp.status_code != 200:
            logger.error(f"✗ TOGETHER_EMBEDDING_FAILED | status={resp.status_code} | error={resp.text[:200]} | duration={duration:.3f}s")
            raise TogetherError(resp.status_code, resp.text)

        data = resp.json()
        try:
            embedding = data["data"][0]["embedding"]
        except (KeyError, IndexError, TypeError):
            logger.error(f"✗ TOGETHER_EMBEDDING_NO_VECTOR | keys={list(data.keys()) if isinstance(data, dict) else type(data)}")
            raise TogetherError(500, f"No embedding in response: {str(data)[:200]}")

        logger.info(f"✓ TOGETHER_EMBEDDING_SUCCESS | dims={len(embedding)} | duration={duration:.3f}s")
        return embedding
