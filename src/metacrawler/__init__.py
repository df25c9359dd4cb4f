"""Metadata crawler: fetch a page, run it through an ordered chain of extractors."""

from .crawler import Crawler
from .errors import CrawlerError, ExtractorLoadError, InvalidURIError, ResponseClosedError
from .metadata import MetadataCollector, MetadataItem

__version__ = "0.1.0"

__all__ = [
    "Crawler",
    "CrawlerError",
    "ExtractorLoadError",
    "InvalidURIError",
    "MetadataCollector",
    "MetadataItem",
    "ResponseClosedError",
    "__version__",
]
