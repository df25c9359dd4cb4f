"""Core crawler components."""

from .protocols import Extractor, Request, Response, Transport
from .transport import HttpRequest, HttpResponse, HttpTransport, parse_uri

__all__ = [
    "Extractor",
    "HttpRequest",
    "HttpResponse",
    "HttpTransport",
    "Request",
    "Response",
    "Transport",
    "parse_uri",
]
