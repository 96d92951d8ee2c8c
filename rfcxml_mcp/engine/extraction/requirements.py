"""Requirement extraction shared by the XML and text pipelines.

Walks the section tree depth-first and turns every requirement marker in
paragraphs and list items into a ``Requirement`` holding the sentence that
contains the keyword. Optionally splits the sentence into subject, action,
condition and exception clauses.
"""

import itertools
import re
from dataclasses import dataclass

from ...models.enums import RequirementLevel
from ..core.document import ListBlock, RequirementMarker, Requirement, Section, TextBlock
from ..core.patterns import create_requirement_regex
from ..core.section import section_matches
from ..core.text import collapse_whitespace, sentence_bounds

# "The client MUST" -> "client", "If the server sends X, a client MUST" -> "client"
_SUBJECT_PATTERN = re.compile(r"(?:\b(?:the|an?)\s+)?(\w+(?:\s+\w+)?)\s+$", re.IGNORECASE)
_CONDITION_PATTERN = re.compile(r"\b(if|when|unless|where|in case)\s+([^,.]+)", re.IGNORECASE)
_EXCEPTION_PATTERN = re.compile(r"\b(unless|except|excluding)\s+([^,.]+)", re.IGNORECASE)
# Clause after the keyword, up to the first comma or sentence-ending dot
_ACTION_PATTERN = re.compile(r"\s*(.+?)(?:[.,](?=\s|$)|$)", re.DOTALL)


@dataclass
class RequirementFilter:
    """Selection applied while extracting requirements.

    Attributes:
        section: Single section id ("3.5" or "section-3.5")
        sections: Several section ids; a section matching any of them is kept
        include_subsections: Also keep descendants of a matched section
        level: Keep only requirements of this level
    """

    section: str | None = None
    sections: list[str] | None = None
    include_subsections: bool = True
    level: RequirementLevel | None = None

    @property
    def section_ids(self) -> list[str]:
        ids = list(self.sections or [])
        if self.section:
            ids.append(self.section)
        return ids

    def matches_section(self, section: Section, section_id: str) -> bool:
        ids = self.section_ids
        if not ids:
            return True
        candidates = [section_id]
        if section.anchor and section.anchor != section_id:
            candidates.append(section.anchor)
        return any(
            section_matches(candidate, fid, self.include_subsections)
            for candidate in candidates
            for fid in ids
        )


def parse_requirement_components(
    sentence: str, keyword_start: int, keyword_end: int
) -> dict[str, str]:
    """Split a requirement sentence into its clauses.

    Args:
        sentence: Sentence containing the keyword (raw, not collapsed).
        keyword_start: Offset of the keyword in ``sentence``.
        keyword_end: Offset just past the keyword.

    Returns:
        Dict with any of ``subject``, ``action``, ``condition``, ``exception``.
    """
    components: dict[str, str] = {}

    subject = _SUBJECT_PATTERN.search(sentence[:keyword_start])
    if subject:
        components["subject"] = collapse_whitespace(subject.group(1)).lower()

    action = _ACTION_PATTERN.match(sentence[keyword_end:])
    if action and action.group(1).strip():
        components["action"] = collapse_whitespace(action.group(1))

    condition = _CONDITION_PATTERN.search(sentence)
    if condition:
        components["condition"] = collapse_whitespace(condition.group(2))

    exception = _EXCEPTION_PATTERN.search(sentence)
    if exception:
        components["exception"] = collapse_whitespace(exception.group(2))

    return components


def _requirements_from_text(
    content: str,
    markers: list[RequirementMarker],
    section: Section,
    section_id: str,
    level: RequirementLevel | None,
    counter: itertools.count,
    parse_components: bool,
) -> list[Requirement]:
    found = []
    keyword_regex = create_requirement_regex()
    for marker in markers:
        if level is not None and marker.level != level:
            continue

        start, end = sentence_bounds(content, marker.position)
        sentence = content[start:end]
        components: dict[str, str] = {}
        if parse_components:
            keyword = keyword_regex.match(content, marker.position)
            keyword_end = keyword.end() if keyword else marker.position
            components = parse_requirement_components(
                sentence, marker.position - start, keyword_end - start
            )

        found.append(
            Requirement(
                id=f"R-{section_id}-{next(counter)}",
                level=marker.level,
                text=collapse_whitespace(sentence),
                section=section_id,
                section_title=section.title,
                full_context=content,
                **components,
            )
        )
    return found


def extract_requirements(
    sections: list[Section],
    filter: RequirementFilter | None = None,
    parse_components: bool = True,
) -> list[Requirement]:
    """Extract requirements from a section tree.

    Args:
        sections: Root sections of a parsed RFC.
        filter: Optional section/level selection.
        parse_components: Split sentences into subject/action/condition/exception.

    Returns:
        Requirements in document order. Ids are ``R-<section>-<ordinal>`` with
        the ordinal counted from 1 for this call.
    """
    filter = filter or RequirementFilter()
    counter = itertools.count(1)
    requirements: list[Requirement] = []

    def visit(section: Section, fallback_id: str, ancestor_matched: bool) -> None:
        section_id = section.identifier or fallback_id
        matched = (ancestor_matched and filter.include_subsections) or filter.matches_section(
            section, section_id
        )

        if matched:
            for block in section.content:
                if isinstance(block, TextBlock):
                    requirements.extend(
                        _requirements_from_text(
                            block.content,
                            block.requirements,
                            section,
                            section_id,
                            filter.level,
                            counter,
                            parse_components,
                        )
                    )
                elif isinstance(block, ListBlock):
                    for item in block.items:
                        requirements.extend(
                            _requirements_from_text(
                                item.content,
                                item.requirements,
                                section,
                                section_id,
                                filter.level,
                                counter,
                                parse_components,
                            )
                        )

        for index, subsection in enumerate(section.subsections, start=1):
            visit(subsection, f"{section_id}.{index}", matched)

    for index, section in enumerate(sections, start=1):
        visit(section, str(index), False)

    return requirements
