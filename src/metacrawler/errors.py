"""Exception hierarchy for the crawler."""


class CrawlerError(Exception):
    """Base class for errors raised by metacrawler itself."""


class InvalidURIError(CrawlerError, ValueError):
    """The URI cannot be turned into a request (raised before any network I/O)."""


class ResponseClosedError(CrawlerError, RuntimeError):
    """The response was already released and its body is no longer available."""


class ExtractorLoadError(CrawlerError, ImportError):
    """An extractor plugin spec could not be resolved to an extractor."""
