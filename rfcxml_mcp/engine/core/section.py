"""Section lookup and cross-reference helpers.

Section identifiers come in two forms: bare dotted numbers from text
sources ("3.5") and RFCXML pn values or anchors ("section-3.5"). All
comparisons here normalize both forms so they can be used interchangeably.
"""

from collections.abc import Iterator

from ...models.enums import CrossReferenceType
from .document import ListBlock, Section, TextBlock

SECTION_PREFIX = "section-"


def normalize_section_number(section_id: str) -> str:
    """Strip the structural prefix and any trailing dot ("section-3.5." -> "3.5")."""
    normalized = section_id.strip()
    if normalized.startswith(SECTION_PREFIX):
        normalized = normalized[len(SECTION_PREFIX) :]
    return normalized.rstrip(".")


def section_matches(section_id: str, filter_id: str, include_subsections: bool = True) -> bool:
    """Check whether ``section_id`` is selected by ``filter_id``.

    A section matches when its normalized id equals the normalized filter,
    or, with ``include_subsections``, when it is a dotted descendant of it
    ("3.5.1" under "3.5", never "3.50").
    """
    sid = normalize_section_number(section_id)
    fid = normalize_section_number(filter_id)
    if not fid:
        return False
    if sid == fid:
        return True
    return include_subsections and sid.startswith(fid + ".")


def iter_sections(sections: list[Section]) -> Iterator[Section]:
    """Yield every section of the tree depth-first, in document order."""
    for section in sections:
        yield section
        yield from iter_sections(section.subsections)


def find_section(sections: list[Section], target: str) -> Section | None:
    """Find a section by number or anchor, in either identifier form."""
    normalized_target = normalize_section_number(target)
    for section in iter_sections(sections):
        candidates = (section.number, section.anchor)
        for candidate in candidates:
            if candidate is None:
                continue
            if candidate == target or normalize_section_number(candidate) == normalized_target:
                return section
    return None


def collect_cross_references(section: Section) -> list[str]:
    """Collect distinct section cross-reference targets of one section.

    Both paragraphs and list items are scanned; the section's own id is
    excluded. Order of first appearance is preserved.
    """
    own_id = normalize_section_number(section.identifier)
    related: list[str] = []

    def add(refs) -> None:
        for ref in refs:
            if ref.type != CrossReferenceType.SECTION or not ref.section:
                continue
            number = normalize_section_number(ref.section)
            if number and number != own_id and number not in related:
                related.append(number)

    for block in section.content:
        if isinstance(block, TextBlock):
            add(block.cross_references)
        elif isinstance(block, ListBlock):
            for item in block.items:
                add(item.cross_references)

    return related
