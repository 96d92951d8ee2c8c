"""Fetch-and-parse orchestration with caching.

``RFCService`` is the single entry point the tool handlers use to obtain a
parsed RFC. Parsed documents are kept in a bounded LRU cache, and concurrent
requests for the same RFC share one in-flight fetch.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Literal, Protocol

from ..config import settings
from ..engine.core.document import ParsedRFC
from ..engine.parsers import parse_rfc_text, parse_rfc_xml
from ..models.enums import SourceFormat
from .cache import LRUCache
from .rfc_fetcher import FetchedDocument

logger = logging.getLogger(__name__)

SourceNoteContext = Literal[
    "structure",
    "requirements",
    "definitions",
    "sections",
    "checklist",
    "validation",
    "dependencies",
]

_TEXT_SOURCE_NOTES: dict[str, str] = {
    "structure": "Parsed from text format. Accuracy may be limited.",
    "requirements": "Parsed from text format. Requirement extraction accuracy may be limited.",
    "definitions": "Parsed from text format. Definition extraction accuracy may be limited.",
    "sections": "Parsed from text format. Related section accuracy may be limited.",
    "checklist": "Parsed from text format. Checklist accuracy may be limited.",
    "validation": "Parsed from text format. Validation accuracy may be limited.",
    "dependencies": "Parsed from text format. Reference information is not available.",
}


def get_text_source_note(context: SourceNoteContext) -> str:
    """Advisory note attached to results computed from a text-parsed RFC."""
    return f"Warning: {_TEXT_SOURCE_NOTES[context]}"


class DocumentFetcher(Protocol):
    """Anything that can supply raw RFC sources."""

    async def fetch_document(self, rfc_number: int) -> FetchedDocument: ...


@dataclass
class ParsedRFCWithSource:
    data: ParsedRFC
    source: SourceFormat


def parse_document(document: FetchedDocument, rfc_number: int) -> ParsedRFC:
    if document.format == SourceFormat.XML:
        return parse_rfc_xml(document.text)
    return parse_rfc_text(document.text, rfc_number)


class RFCService:
    """Cached access to parsed RFCs.

    Args:
        fetcher: Source supplier, usually an ``RFCFetcher``.
        cache_size: Number of parsed RFCs kept; defaults to settings.
    """

    def __init__(self, fetcher: DocumentFetcher, cache_size: int | None = None):
        self.fetcher = fetcher
        self.cache: LRUCache[int, ParsedRFCWithSource] = LRUCache(
            max_size=cache_size or settings.parse_cache_size, name="parsed-rfc"
        )
        self._in_flight: dict[int, asyncio.Task[ParsedRFCWithSource]] = {}

    async def get_parsed_rfc(self, rfc_number: int) -> ParsedRFCWithSource:
        """Return the parsed RFC, fetching and parsing it on a cache miss.

        Raises:
            RFCXMLNotAvailableError: XML unavailable for an RFC published as XML.
            RFCFetchError: Neither XML nor text could be fetched.
        """
        cached = self.cache.get(rfc_number)
        if cached is not None:
            logger.debug(f"RFC {rfc_number} served from parse cache")
            return cached

        task = self._in_flight.get(rfc_number)
        if task is None:
            task = asyncio.create_task(self._load(rfc_number))
            self._in_flight[rfc_number] = task
            task.add_done_callback(lambda done: self._forget(rfc_number, done))
        # Shielded so one cancelled caller does not cancel the shared fetch
        return await asyncio.shield(task)

    def _forget(self, rfc_number: int, task: asyncio.Task) -> None:
        if self._in_flight.get(rfc_number) is task:
            del self._in_flight[rfc_number]

    async def _load(self, rfc_number: int) -> ParsedRFCWithSource:
        document = await self.fetcher.fetch_document(rfc_number)
        result = ParsedRFCWithSource(
            data=parse_document(document, rfc_number),
            source=document.format,
        )
        self.cache.set(rfc_number, result)
        logger.info(
            f"RFC {rfc_number} parsed from {document.format} "
            f"({len(result.data.sections)} top-level sections)"
        )
        return result

    def clear_cache(self) -> None:
        self.cache.clear()

    @property
    def cached_count(self) -> int:
        return self.cache.size
