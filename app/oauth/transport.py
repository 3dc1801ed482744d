import asyncio
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from types import TracebackType
from typing import Any, Protocol, Self

import aiohttp

logger = logging.getLogger(__name__)


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"


class TransportError(Exception):
    """Raised when a request never produced an HTTP response."""


@dataclass
class HttpResponse:
    status_code: int
    text: str = ""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def content_type(self) -> str:
        for key, value in self.headers.items():
            if key.lower() == "content-type":
                return value.split(";", 1)[0].strip().lower()
        return ""

    def json(self) -> Any:
        return json.loads(self.text)


class HttpTransport(Protocol):
    async def request(
        self,
        method: HttpMethod,
        url: str,
        *,
        headers: dict[str, str],
        data: dict[str, str] | None = None,
    ) -> HttpResponse: ...


class AiohttpTransport:
    def __init__(self, timeout: float = 10.0):
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._client: aiohttp.ClientSession | None = None
        logger.debug("AiohttpTransport initialized with timeout=%s", timeout)

    async def __aenter__(self) -> Self:
        await self._get_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def _get_client(self) -> aiohttp.ClientSession:
        if self._client is None or self._client.closed:
            logger.debug("Creating new aiohttp ClientSession")
            self._client = aiohttp.ClientSession(timeout=self._timeout)
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.closed:
            logger.debug("Closing aiohttp ClientSession")
            await self._client.close()
            self._client = None

    async def request(
        self,
        method: HttpMethod,
        url: str,
        *,
        headers: dict[str, str],
        data: dict[str, str] | None = None,
    ) -> HttpResponse:
        client = await self._get_client()
        logger.debug("Making %s request to %s", method.value, url)
        try:
            async with client.request(
                method.value, url, headers=headers, data=data
            ) as response:
                text = await response.text(errors="replace")
                return HttpResponse(
                    status_code=response.status,
                    text=text,
                    headers={k: v for k, v in response.headers.items()},
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("%s request to %s failed: %r", method.value, url, e)
            raise TransportError(str(e) or e.__class__.__name__) from e
