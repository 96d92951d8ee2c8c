"""Services for fetching and caching RFCs."""

from .cache import LRUCache
from .rfc_fetcher import (
    FetchedDocument,
    RFCFetcher,
    RFCFetchError,
    RFCTextNotAvailableError,
    RFCXMLNotAvailableError,
    create_http_client,
)
from .rfc_service import ParsedRFCWithSource, RFCService, get_text_source_note

__all__ = [
    "LRUCache",
    "FetchedDocument",
    "RFCFetcher",
    "RFCFetchError",
    "RFCTextNotAvailableError",
    "RFCXMLNotAvailableError",
    "create_http_client",
    "ParsedRFCWithSource",
    "RFCService",
    "get_text_source_note",
]
