"""Document data structures for the RFC engine.

This module contains the common Document Model produced by both the
RFCXML parser and the plain-text parser, plus the derived Requirement
records consumed by the checklist generator and the statement matcher.

Every structure is created fresh per parse call and is not mutated once
the parser returns. ``to_dict()`` renders the camelCase JSON shape exposed
by the MCP tools; optional fields that are unset are omitted.
"""

from dataclasses import dataclass, field
from typing import Any, Union

from ...models.enums import (
    CrossReferenceType,
    ListStyle,
    ReferenceType,
    RequirementLevel,
)


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None."""
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class RequirementMarker:
    """A raw normative keyword occurrence inside a block of text.

    Attributes:
        level: Requirement level of the keyword (longest match)
        position: Character offset of the keyword in the block content
    """

    level: RequirementLevel
    position: int

    def to_dict(self) -> dict[str, Any]:
        return {"level": str(self.level), "position": self.position}


@dataclass
class CrossReference:
    """An in-document reference to a section, figure, table or another RFC."""

    target: str
    type: CrossReferenceType
    section: str | None = None
    display_text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "target": self.target,
                "type": str(self.type),
                "section": self.section,
                "displayText": self.display_text,
            }
        )


@dataclass
class TextBlock:
    """A paragraph of prose."""

    content: str
    requirements: list[RequirementMarker] = field(default_factory=list)
    cross_references: list[CrossReference] = field(default_factory=list)
    type: str = field(default="text", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "content": self.content,
            "requirements": [m.to_dict() for m in self.requirements],
            "crossReferences": [r.to_dict() for r in self.cross_references],
        }


@dataclass
class ListItem:
    """A single list entry; scanned for markers like a paragraph."""

    content: str
    requirements: list[RequirementMarker] = field(default_factory=list)
    cross_references: list[CrossReference] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": self.content,
            "requirements": [m.to_dict() for m in self.requirements],
            "crossReferences": [r.to_dict() for r in self.cross_references],
        }


@dataclass
class ListBlock:
    """An ordered, unordered or hanging (definition) list."""

    style: ListStyle
    items: list[ListItem] = field(default_factory=list)
    type: str = field(default="list", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "style": str(self.style),
            "items": [item.to_dict() for item in self.items],
        }


@dataclass
class SourceCodeBlock:
    """A <sourcecode> block (ABNF, JSON, C, ...)."""

    content: str
    language: str | None = None
    type: str = field(default="sourcecode", init=False)

    def to_dict(self) -> dict[str, Any]:
        return _compact({"type": self.type, "language": self.language, "content": self.content})


@dataclass
class ArtworkBlock:
    """An ASCII-art diagram."""

    content: str
    type: str = field(default="artwork", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": self.content}


@dataclass
class TableBlock:
    """A table flattened to header and row text."""

    headers: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)
    type: str = field(default="table", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "headers": self.headers, "rows": self.rows}


ContentBlock = Union[TextBlock, ListBlock, SourceCodeBlock, ArtworkBlock, TableBlock]


@dataclass
class Section:
    """A section of an RFC.

    Sections form a tree; a section exclusively owns its subsections.

    Attributes:
        title: Section heading text
        anchor: XML anchor (e.g. "section-5.2"), absent for text sources
        number: Section number (dotted decimal or pn such as "section-5.2")
        content: Content blocks in document order
        subsections: Child sections in document order
    """

    title: str
    anchor: str | None = None
    number: str | None = None
    content: list[ContentBlock] = field(default_factory=list)
    subsections: list["Section"] = field(default_factory=list)

    @property
    def identifier(self) -> str:
        """Best available identifier: number, then anchor."""
        return self.number or self.anchor or ""

    def to_dict(self, include_content: bool = True) -> dict[str, Any]:
        data = _compact({"number": self.number, "title": self.title, "anchor": self.anchor})
        if include_content:
            data["content"] = [block.to_dict() for block in self.content]
        if self.subsections:
            data["subsections"] = [s.to_dict(include_content) for s in self.subsections]
        return data


@dataclass
class Reference:
    """A bibliographic reference from the back matter."""

    anchor: str
    type: ReferenceType
    title: str = ""
    rfc_number: int | None = None
    draft_name: str | None = None
    authors: list[str] = field(default_factory=list)
    date: str | None = None
    target: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = _compact(
            {
                "anchor": self.anchor,
                "type": str(self.type),
                "rfcNumber": self.rfc_number,
                "draftName": self.draft_name,
                "title": self.title,
                "date": self.date,
                "target": self.target,
            }
        )
        if self.authors:
            data["authors"] = self.authors
        return data


@dataclass
class Definition:
    """A term definition, tagged with the section it appears in."""

    term: str
    definition: str
    section: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"term": self.term, "definition": self.definition, "section": self.section}


@dataclass
class DocumentMetadata:
    """Front matter of an RFC."""

    title: str
    doc_name: str | None = None
    number: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"title": self.title, "docName": self.doc_name, "number": self.number})


@dataclass
class References:
    """Back matter references split by normative status."""

    normative: list[Reference] = field(default_factory=list)
    informative: list[Reference] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "normative": [r.to_dict() for r in self.normative],
            "informative": [r.to_dict() for r in self.informative],
        }


@dataclass
class ParsedRFC:
    """Root of the Document Model."""

    metadata: DocumentMetadata
    sections: list[Section] = field(default_factory=list)
    references: References = field(default_factory=References)
    definitions: list[Definition] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "metadata": self.metadata.to_dict(),
            "sections": [s.to_dict() for s in self.sections],
            "references": self.references.to_dict(),
            "definitions": [d.to_dict() for d in self.definitions],
        }


@dataclass
class Requirement:
    """A normative requirement extracted from a section.

    Attributes:
        id: ``R-<section>-<ordinal>``, unique within one extraction call
        level: Requirement level keyword
        text: Sentence (or list item) containing the keyword, whitespace collapsed
        section: Identifier of the owning section
        section_title: Title of the owning section
        full_context: Complete paragraph or list item the sentence came from
        subject: Actor preceding the keyword ("client")
        action: Clause following the keyword
        condition: Clause following if/when/unless/where/in case
        exception: Clause following unless/except/excluding
    """

    id: str
    level: RequirementLevel
    text: str
    section: str
    section_title: str
    full_context: str
    subject: str | None = None
    action: str | None = None
    condition: str | None = None
    exception: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "id": self.id,
                "level": str(self.level),
                "text": self.text,
                "subject": self.subject,
                "action": self.action,
                "condition": self.condition,
                "exception": self.exception,
                "section": self.section,
                "sectionTitle": self.section_title,
                "fullContext": self.full_context,
            }
        )
