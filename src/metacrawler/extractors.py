"""Generic extractors and plugin loading."""

import importlib
import logging
from collections.abc import Iterable

from .core import Extractor, Response
from .errors import ExtractorLoadError
from .metadata import MetadataItem

logger = logging.getLogger(__name__)


class HeaderExtractor:
    """Emit response headers as metadata items named prefix + lowercased header name."""

    def __init__(self, names: Iterable[str] | None = None, prefix: str = "http:"):
        self.names = [name.lower() for name in names] if names is not None else None
        self.prefix = prefix

    def can_handle(self, response: Response) -> bool:
        return True

    async def extract(self, response: Response) -> list[MetadataItem]:
        if self.names is None:
            pairs = [(key.lower(), value) for key, value in response.headers.items()]
        else:
            pairs = []
            for name in self.names:
                value = response.get_header(name)
                if value is not None:
                    pairs.append((name, value))
        return [MetadataItem(self.prefix + name, value) for name, value in pairs]


class StatusExtractor:
    """Emit the response status code and reason phrase."""

    def __init__(self, prefix: str = "http:"):
        self.prefix = prefix

    def can_handle(self, response: Response) -> bool:
        return True

    async def extract(self, response: Response) -> list[MetadataItem]:
        return [
            MetadataItem(self.prefix + "status", str(response.status)),
            MetadataItem(self.prefix + "reason", response.reason),
        ]


def load_extractor(spec: str) -> Extractor:
    """
    Load an extractor from a "package.module:Name" import string.

    Classes are instantiated without arguments; any other attribute is used
    as-is and must already implement can_handle/extract.
    """
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise ExtractorLoadError(f"expected 'module:Name', got {spec!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ExtractorLoadError(f"cannot import {module_name!r}: {e}") from e

    target = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise ExtractorLoadError(f"{module_name!r} has no attribute {attr!r}") from e

    extractor = target() if isinstance(target, type) else target
    if not isinstance(extractor, Extractor):
        raise ExtractorLoadError(f"{spec!r} is not an extractor")

    logger.debug("Loaded extractor %s", spec)
    return extractor
