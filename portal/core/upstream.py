import logging
from dataclasses import dataclass
from typing import Any
import httpx
from portal.core.config import settings

logger = logging.getLogger(__name__)


class UpstreamTransportError(Exception):
    """Raised when no interpretable body came back from the institutional API."""


@dataclass(frozen=True)
class UpstreamReply:
    status_code: int
    payload: Any


class UpstreamClient:
    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = base_url or settings.UPSTREAM_BASE_URL
        self.timeout = timeout or settings.UPSTREAM_TIMEOUT_SECONDS
        self.http: httpx.AsyncClient | None = None

    async def connect(self):
        """Open the pooled client (called on FastAPI startup)."""
        if self.http is None:
            self.http = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)

    async def close(self):
        if self.http is not None:
            await self.http.aclose()
            self.http = None

    async def _send(self, method: str, path: str, *, token: str | None = None, json: dict | None = None) -> UpstreamReply:
        await self.connect()
        headers = {"Content-Type": "application/json", "Cache-Control": "no-store"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        logger.debug(f"Upstream {method} {path} (token {'present' if token else 'absent'})")
        try:
            response = await self.http.request(method, path, headers=headers, json=json)
        except httpx.RequestError as e:
            logger.error(f"Upstream {method} {path} failed: {e}")
            raise UpstreamTransportError(str(e)) from e

        logger.debug(f"Upstream {method} {path} -> HTTP {response.status_code}")
        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Upstream {method} {path} returned a non-JSON body (HTTP {response.status_code})")
            raise UpstreamTransportError(f"HTTP {response.status_code}: non-JSON body") from e
        return UpstreamReply(status_code=response.status_code, payload=payload)

    async def get_json(self, path: str, token: str) -> UpstreamReply:
        return await self._send("GET", path, token=token)

    async def post_json(self, path: str, body: dict) -> UpstreamReply:
        return await self._send("POST", path, json=body)


upstream_client = UpstreamClient()

def get_upstream() -> UpstreamClient:
    return upstream_client
