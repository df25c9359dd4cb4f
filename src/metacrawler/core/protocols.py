"""Protocol definitions for crawler components."""

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import BinaryIO, Protocol, runtime_checkable

import httpx

from ..metadata import MetadataItem


@runtime_checkable
class Response(Protocol):
    """A completed HTTP exchange, independent of the transport that produced it."""

    url: str
    method: str
    status: int
    reason: str
    http_version: str
    headers: Mapping[str, str]
    cookies: Mapping[str, str]
    content_type: str | None
    charset: str | None
    content_encoding: str | None
    content_length: int | None
    server: str | None
    last_modified: datetime | None
    is_closed: bool

    def get_header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        ...

    async def get_body_stream(self) -> BinaryIO:
        """
        Return the body as a fresh stream positioned at offset 0.

        The raw body is read from the connection once and buffered; later
        calls are cheap and never disturb streams handed out earlier.
        """
        ...

    async def get_text(self) -> str:
        """Decode the buffered body using the response charset."""
        ...

    async def aclose(self) -> None:
        """Release the buffered body and the connection."""
        ...


class Request(Protocol):
    """A request ready to be sent."""

    url: str
    user_agent: str

    async def execute(self) -> Response:
        """Send the request and return the response."""
        ...


class Transport(Protocol):
    """Creates requests for URIs."""

    def create_request(self, uri: str | httpx.URL) -> Request:
        """Validate uri and build a request. No network I/O happens here."""
        ...

    async def aclose(self) -> None:
        ...


@runtime_checkable
class Extractor(Protocol):
    """
    Pluggable metadata extractor.

    can_handle should only look at cheap response properties (status,
    headers). extract may read the body; returning None is the same as
    returning nothing.
    """

    def can_handle(self, response: Response) -> bool:
        ...

    async def extract(self, response: Response) -> Iterable[MetadataItem] | None:
        ...
