"""Crawler engine: one request, an ordered chain of extractors, merged metadata."""

import logging

import httpx

from .config import settings
from .core import Extractor, HttpTransport, Response, Transport
from .metadata import MetadataCollector, MetadataItem

logger = logging.getLogger(__name__)


class Crawler:
    """
    Fetch a URI and extract metadata from the response with registered extractors.

    Extractors are consulted in the order they were registered. Each one's
    can_handle is called once per fetch; extract is only called when it
    returns True. If more than one extractor produces an item with the same
    name, the first one wins.

    A single fetch runs its extractors sequentially and does no locking.
    Registering extractors while a fetch is in flight has an unspecified
    effect on which extractors that fetch consults.
    """

    def __init__(self, transport: Transport | None = None):
        self.transport = transport if transport is not None else HttpTransport.from_settings(settings)
        self._extractors: list[Extractor] = []

    async def __aenter__(self) -> "Crawler":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    @property
    def extractors(self) -> tuple[Extractor, ...]:
        return tuple(self._extractors)

    def register_extractor(self, extractor: Extractor) -> "Crawler":
        """Append an extractor to the chain. Returns self to allow chaining."""
        if not isinstance(extractor, Extractor):
            raise TypeError(f"{extractor!r} does not implement can_handle/extract")
        self._extractors.append(extractor)
        return self

    async def fetch(self, uri: str | httpx.URL) -> list[MetadataItem]:
        """
        Request uri and return the metadata found by the extractor chain.

        Returns an empty list when there are no extractors or none of them
        found anything. Transport and extractor errors propagate unchanged;
        the response is released before they do.
        """
        request = self.transport.create_request(uri)
        response = await request.execute()

        try:
            collector = await self._run_extractors(response)
        except BaseException:
            await self._release(response, suppress_errors=True)
            raise
        await self._release(response)

        logger.info("Fetched %s: %d metadata items", request.url, len(collector))
        return collector.items()

    async def fetch_dict(self, uri: str | httpx.URL) -> dict[str, str]:
        """Same as fetch, keyed by item name."""
        return {item.name: item.value for item in await self.fetch(uri)}

    async def _run_extractors(self, response: Response) -> MetadataCollector:
        collector = MetadataCollector()
        for extractor in self._extractors:
            name = type(extractor).__name__
            try:
                if not extractor.can_handle(response):
                    logger.debug("%s skipped %s", name, response.url)
                    continue
                kept = collector.extend(await extractor.extract(response))
            except Exception:
                logger.error("Extractor %s failed on %s", name, response.url, exc_info=True)
                raise
            logger.debug("%s contributed %d new items", name, kept)
        return collector

    async def _release(self, response: Response, suppress_errors: bool = False):
        try:
            await response.aclose()
        except Exception:
            if not suppress_errors:
                raise
            logger.warning("Failed to release response for %s", response.url, exc_info=True)

    async def aclose(self):
        """Close the transport."""
        await self.transport.aclose()
