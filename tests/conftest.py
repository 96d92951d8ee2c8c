"""
Shared test fixtures
====================

- SAMPLE_XML: small RFCXML v3 document with nested sections, bcp14
  markup, lists, a definition list and split reference containers
- SAMPLE_TEXT: plain-text RFC with a table of contents, page furniture
  and a status-code list that must not become sections
- FakeFetcher: in-memory DocumentFetcher that counts fetches
"""

import asyncio

import pytest

from rfcxml_mcp.models.enums import SourceFormat
from rfcxml_mcp.rfc_engine import RFCEngine
from rfcxml_mcp.services.rfc_fetcher import FetchedDocument, RFCXMLNotAvailableError
from rfcxml_mcp.services.rfc_service import RFCService

XML_RFC_NUMBER = 9999
TEXT_RFC_NUMBER = 1234


# =============================================================================
# Sample documents
# =============================================================================

SAMPLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<rfc xmlns:xi="http://www.w3.org/2001/XInclude" number="9999"
     docName="draft-ietf-test-protocol-05" category="std" version="3">
  <front>
    <title>The Test Protocol</title>
  </front>
  <middle>
    <section anchor="intro" pn="section-1">
      <name>Introduction</name>
      <t>This document defines the Test Protocol. See <xref target="security"/> for security.</t>
      <section anchor="terminology" pn="section-1.1">
        <name>Terminology</name>
        <t>Keywords are interpreted as described in BCP 14 <xref target="RFC2119"/>.</t>
        <dl>
          <dt>Frame</dt>
          <dd>A unit of data sent over a connection.</dd>
          <dt>Endpoint</dt>
          <dd>Either the client or the server of a connection.</dd>
        </dl>
      </section>
    </section>
    <section anchor="framing" pn="section-2">
      <name>Framing</name>
      <t>The client <bcp14>MUST</bcp14> mask all frames that it sends to the server.
      The server <bcp14>MUST NOT</bcp14> mask any frames that it sends to the client.</t>
      <section anchor="masking" pn="section-2.1">
        <name>Masking</name>
        <t>A server <bcp14>SHOULD</bcp14> close the connection if it receives an unmasked frame, as described in Section 2.</t>
        <ul>
          <li>The client <bcp14>MAY</bcp14> choose a new masking key for each frame.</li>
          <li>Implementations <bcp14>SHALL</bcp14> use a strong source of entropy.</li>
        </ul>
      </section>
    </section>
    <section anchor="security" pn="section-3">
      <name>Security Considerations</name>
      <t>Clients <bcp14>MUST NOT</bcp14> send credentials over an unencrypted connection.</t>
      <sourcecode type="abnf">frame = header payload</sourcecode>
    </section>
  </middle>
  <back>
    <references pn="section-4">
      <name>References</name>
      <references pn="section-4.1">
        <name>Normative References</name>
        <reference anchor="RFC2119" target="https://www.rfc-editor.org/info/rfc2119">
          <front>
            <title>Key words for use in RFCs to Indicate Requirement Levels</title>
            <author fullname="S. Bradner"/>
            <date month="March" year="1997"/>
          </front>
          <seriesInfo name="BCP" value="14"/>
          <seriesInfo name="RFC" value="2119"/>
        </reference>
      </references>
      <references pn="section-4.2">
        <name>Informative References</name>
        <reference anchor="RFC6455">
          <front>
            <title>The WebSocket Protocol</title>
            <author fullname="I. Fette"/>
            <date month="December" year="2011"/>
          </front>
          <seriesInfo name="RFC" value="6455"/>
        </reference>
        <reference anchor="I-D.ietf-test-ext">
          <front>
            <title>Test Extensions</title>
          </front>
          <seriesInfo name="Internet-Draft" value="draft-ietf-test-ext-01"/>
        </reference>
      </references>
    </references>
  </back>
</rfc>
"""

SAMPLE_TEXT = """Network Working Group                                          J. Doe
Request for Comments: 1234                                  Example Inc.
Category: Standards Track                                     March 1991


                     The Simple Echo Protocol

Status of this Memo

   This memo specifies a standards track protocol.

Table of Contents

   1. Introduction ....................................................  1
   2. Protocol Specification ..........................................  2
   2.1 Message Format .................................................  2
   3. Security Considerations .........................................  3

1. Introduction

   The Simple Echo Protocol returns every message it receives. It
   updates RFC 862.

2. Protocol Specification

   A server MUST echo every message it receives. A client SHOULD NOT
   send more than one message per second.

   Status codes:

   1001 Connection refused
   1002 Message too large

2.1 Message Format

   Message - A sequence of octets terminated by CRLF.

   The server MAY close idle connections. See Section 2 for details.

   Implementations MUST NOT

Doe                                                             [Page 1]
\f
RFC 1234                  Simple Echo Protocol                March 1991


   reorder messages.

3. Security Considerations

   Echo servers MUST NOT be used for amplification.
"""


# =============================================================================
# Fakes
# =============================================================================


class FakeFetcher:
    """DocumentFetcher serving canned documents and counting fetches."""

    def __init__(self, documents: dict[int, FetchedDocument], delay: float = 0.0):
        self.documents = documents
        self.delay = delay
        self.calls: list[int] = []

    async def fetch_document(self, rfc_number: int) -> FetchedDocument:
        self.calls.append(rfc_number)
        if self.delay:
            await asyncio.sleep(self.delay)
        if rfc_number not in self.documents:
            raise RFCXMLNotAvailableError(rfc_number, ["rfc-editor: HTTP 404"])
        return self.documents[rfc_number]


def sample_documents() -> dict[int, FetchedDocument]:
    return {
        XML_RFC_NUMBER: FetchedDocument(text=SAMPLE_XML, format=SourceFormat.XML),
        TEXT_RFC_NUMBER: FetchedDocument(text=SAMPLE_TEXT, format=SourceFormat.TEXT),
    }


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def sample_xml() -> str:
    return SAMPLE_XML


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_TEXT


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher(sample_documents())


@pytest.fixture
def service(fetcher) -> RFCService:
    return RFCService(fetcher, cache_size=10)


@pytest.fixture
def engine(service) -> RFCEngine:
    return RFCEngine(service)
