"""HTTP transport implementation using httpx."""

import asyncio
import io
import logging
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import BinaryIO

import httpx

from ..config import DEFAULT_USER_AGENT, CrawlerSettings
from ..errors import InvalidURIError, ResponseClosedError

logger = logging.getLogger(__name__)


def parse_uri(uri: str | httpx.URL) -> httpx.URL:
    """Validate an absolute http(s) URI without touching the network."""
    if uri is None:
        raise InvalidURIError("uri must not be None")
    if not isinstance(uri, (str, httpx.URL)):
        raise InvalidURIError(f"uri must be a str or httpx.URL, got {type(uri).__name__}")

    try:
        url = httpx.URL(uri)
    except httpx.InvalidURL as e:
        raise InvalidURIError(f"malformed uri {uri!r}: {e}") from e

    if url.scheme not in ("http", "https"):
        raise InvalidURIError(f"unsupported scheme in {uri!r}")
    if not url.host:
        raise InvalidURIError(f"missing host in {uri!r}")
    return url


class HttpResponse:
    """Response backed by a streamed httpx response with a buffered body."""

    def __init__(self, response: httpx.Response):
        self._response = response
        self._body: bytes | None = None
        self._closed = False

    async def __aenter__(self) -> "HttpResponse":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    @property
    def url(self) -> str:
        return str(self._response.url)

    @property
    def method(self) -> str:
        return self._response.request.method

    @property
    def status(self) -> int:
        return self._response.status_code

    @property
    def reason(self) -> str:
        return self._response.reason_phrase

    @property
    def http_version(self) -> str:
        return self._response.http_version

    @property
    def headers(self) -> httpx.Headers:
        return self._response.headers

    @property
    def cookies(self) -> dict[str, str]:
        return dict(self._response.cookies)

    @property
    def content_type(self) -> str | None:
        return self._response.headers.get("content-type")

    @property
    def charset(self) -> str | None:
        return self._response.charset_encoding

    @property
    def content_encoding(self) -> str | None:
        return self._response.headers.get("content-encoding")

    @property
    def content_length(self) -> int | None:
        value = self._response.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    @property
    def server(self) -> str | None:
        return self._response.headers.get("server")

    @property
    def last_modified(self) -> datetime | None:
        value = self._response.headers.get("last-modified")
        if not value:
            return None
        try:
            return parsedate_to_datetime(value)
        except (TypeError, ValueError):
            return None

    @property
    def is_closed(self) -> bool:
        return self._closed

    def get_header(self, name: str) -> str | None:
        return self._response.headers.get(name)

    async def _read_body(self) -> bytes:
        if self._closed:
            raise ResponseClosedError(f"response for {self.url} has been released")
        if self._body is None:
            self._body = await self._response.aread()
            logger.debug("Buffered %d bytes from %s", len(self._body), self.url)
        return self._body

    async def get_body_stream(self) -> BinaryIO:
        """Return a new stream over the buffered body, positioned at the start."""
        return io.BytesIO(await self._read_body())

    async def get_text(self) -> str:
        body = await self._read_body()
        try:
            return body.decode(self.charset or "utf-8", errors="replace")
        except LookupError:
            # Unknown charset in Content-Type
            return body.decode("utf-8", errors="replace")

    async def aclose(self):
        """Drop the buffered body and close the underlying response."""
        if self._closed:
            return
        self._closed = True
        self._body = None
        await self._response.aclose()


class HttpRequest:
    """A GET request bound to the transport's client."""

    def __init__(self, transport: "HttpTransport", url: httpx.URL):
        self._transport = transport
        self._url = url
        self.user_agent = transport.user_agent

    @property
    def url(self) -> str:
        return str(self._url)

    async def execute(self) -> HttpResponse:
        """Send the request and return the response with its body still unread."""
        client = await self._transport._get_client()
        request = client.build_request("GET", self._url, headers={"User-Agent": self.user_agent})
        response = await client.send(request, stream=True)
        logger.debug("GET %s -> %d", response.url, response.status_code)
        return HttpResponse(response)


class HttpTransport:
    """Async HTTP transport using httpx with connection reuse."""

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        max_connections: int = 100,
        max_keepalive_connections: int = 20,
        follow_redirects: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = httpx.Timeout(timeout)
        self.user_agent = user_agent
        self.limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
        )
        self.follow_redirects = follow_redirects
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(
        cls,
        settings: CrawlerSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "HttpTransport":
        return cls(
            timeout=settings.timeout,
            user_agent=settings.user_agent,
            max_connections=settings.max_connections,
            max_keepalive_connections=settings.max_keepalive_connections,
            follow_redirects=settings.follow_redirects,
            transport=transport,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client with double-checked locking."""
        if self._client is None:
            async with self._lock:
                if self._client is None:
                    self._client = httpx.AsyncClient(
                        timeout=self.timeout,
                        limits=self.limits,
                        follow_redirects=self.follow_redirects,
                        transport=self._transport,
                    )
        return self._client

    def create_request(self, uri: str | httpx.URL) -> HttpRequest:
        return HttpRequest(self, parse_uri(uri))

    async def aclose(self):
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
