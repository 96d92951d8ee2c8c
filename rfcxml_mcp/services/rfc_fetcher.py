"""RFC source fetching.

Downloads RFCXML or plain text from the public IETF mirrors. All mirrors
for a format are requested concurrently; the first response that looks like
the requested format wins and the remaining requests are cancelled.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from ..config import settings
from ..models.enums import SourceFormat

logger = logging.getLogger(__name__)

XML_SOURCES: dict[str, str] = {
    "rfc-editor": "https://www.rfc-editor.org/rfc/rfc{number}.xml",
    "xml2rfc": "https://xml2rfc.ietf.org/public/rfc/rfc{number}.xml",
    "datatracker": "https://datatracker.ietf.org/doc/rfc{number}/xml/",
}

TEXT_SOURCES: dict[str, str] = {
    "rfc-editor": "https://www.rfc-editor.org/rfc/rfc{number}.txt",
    "ietf-tools": "https://tools.ietf.org/rfc/rfc{number}.txt",
}

XML_ACCEPT = "application/xml, text/xml"
TEXT_ACCEPT = "text/plain"


class RFCFetchError(Exception):
    """Base error for RFC retrieval failures."""


class RFCXMLNotAvailableError(RFCFetchError):
    """No mirror returned RFCXML for the RFC.

    ``is_old_rfc`` tells callers whether the RFC predates RFCXML v3
    publication, in which case the plain-text form is worth trying.
    """

    def __init__(self, rfc_number: int, errors: list[str] | None = None):
        self.rfc_number = rfc_number
        self.errors = errors or []
        self.is_old_rfc = rfc_number < settings.xml_available_from

        if self.is_old_rfc:
            reason = f"RFC {rfc_number} predates RFCXML v3 and may not be published as XML"
            self.suggestion = "Use the plain-text version of the RFC instead."
        else:
            reason = "network error"
            self.suggestion = "Check network connectivity and try again."

        message = (
            f"RFC {rfc_number} XML could not be retrieved.\n"
            f"Reason: {reason}\n"
            f"Suggestion: {self.suggestion}"
        )
        if self.errors:
            message += f"\nDetails: {', '.join(self.errors)}"
        super().__init__(message)


class RFCTextNotAvailableError(RFCFetchError):
    """No mirror returned plain text for the RFC."""

    def __init__(self, rfc_number: int, errors: list[str] | None = None):
        self.rfc_number = rfc_number
        self.errors = errors or []
        super().__init__(
            f"Failed to fetch RFC {rfc_number} text from all sources. "
            f"Errors: {', '.join(self.errors) or 'none'}"
        )


@dataclass
class FetchedDocument:
    text: str
    format: SourceFormat


def looks_like_xml(body: str) -> bool:
    return "<?xml" in body or "<rfc" in body


def looks_like_rfc_text(body: str) -> bool:
    return "Request for Comments" in body or "RFC " in body


def create_http_client() -> httpx.AsyncClient:
    """Create the shared HTTP client with timeout and User-Agent from settings."""
    return httpx.AsyncClient(
        timeout=settings.http_timeout_seconds,
        headers={"User-Agent": settings.http_user_agent},
        follow_redirects=True,
    )


class RFCFetcher:
    """Fetches RFC sources from the IETF mirrors.

    Args:
        client: Shared ``httpx.AsyncClient``; the caller owns its lifecycle.
    """

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def _get(self, url: str, accept: str, validate: Callable[[str], bool]) -> str:
        response = await self.client.get(url, headers={"Accept": accept})
        if response.status_code != 200:
            raise RFCFetchError(f"HTTP {response.status_code}")
        body = response.text
        if not validate(body):
            raise RFCFetchError("unexpected content")
        return body

    async def _race(
        self,
        sources: dict[str, str],
        rfc_number: int,
        accept: str,
        validate: Callable[[str], bool],
    ) -> tuple[str | None, list[str]]:
        """Request every source at once and return the first valid body.

        Returns:
            (body or None, error messages of the sources that failed)
        """
        tasks = {
            asyncio.create_task(
                self._get(template.format(number=rfc_number), accept, validate)
            ): name
            for name, template in sources.items()
        }
        errors: list[str] = []
        try:
            while tasks:
                done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
                for task in done:
                    name = tasks.pop(task)
                    error = task.exception()
                    if error is None:
                        logger.info(f"RFC {rfc_number} fetched from {name}")
                        return task.result(), errors
                    errors.append(f"{name}: {str(error) or type(error).__name__}")
                    logger.debug(f"RFC {rfc_number} fetch from {name} failed: {error!r}")
        finally:
            for task in tasks:
                task.cancel()
            if tasks:
                await asyncio.gather(*tasks, return_exceptions=True)
        return None, errors

    async def fetch_xml(self, rfc_number: int) -> str:
        """Fetch RFCXML.

        Raises:
            RFCXMLNotAvailableError: No source returned XML.
        """
        body, errors = await self._race(XML_SOURCES, rfc_number, XML_ACCEPT, looks_like_xml)
        if body is None:
            raise RFCXMLNotAvailableError(rfc_number, errors)
        return body

    async def fetch_text(self, rfc_number: int) -> str:
        """Fetch the plain-text RFC.

        Raises:
            RFCTextNotAvailableError: No source returned RFC text.
        """
        body, errors = await self._race(TEXT_SOURCES, rfc_number, TEXT_ACCEPT, looks_like_rfc_text)
        if body is None:
            raise RFCTextNotAvailableError(rfc_number, errors)
        return body

    async def fetch_document(self, rfc_number: int) -> FetchedDocument:
        """Fetch an RFC, preferring RFCXML.

        RFCs older than the RFCXML v3 cutover fall back to plain text. Newer
        RFCs are always published as XML, so their XML failure is raised
        unchanged.

        Raises:
            RFCXMLNotAvailableError: XML failed for an RFC that should have it.
            RFCFetchError: Both XML and text failed; the message covers both.
        """
        try:
            return FetchedDocument(text=await self.fetch_xml(rfc_number), format=SourceFormat.XML)
        except RFCXMLNotAvailableError as xml_error:
            if not xml_error.is_old_rfc:
                raise
            logger.info(f"RFC {rfc_number}: XML not available, trying text fallback")
            try:
                text = await self.fetch_text(rfc_number)
            except RFCFetchError as text_error:
                raise RFCFetchError(
                    f"Failed to fetch RFC {rfc_number}.\nXML: {xml_error}\nText: {text_error}"
                ) from text_error
            return FetchedDocument(text=text, format=SourceFormat.TEXT)
