"""Text scanning helpers shared by the RFCXML and plain-text parsers."""

import re

from ...models.enums import CrossReferenceType
from .document import CrossReference, RequirementMarker
from .patterns import (
    create_requirement_regex,
    create_rfc_reference_regex,
    create_section_reference_regex,
    normalize_level,
)

_SENTENCE_START = re.compile(r"[.!?]\s")
_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace (including newlines) to single spaces."""
    return _WHITESPACE.sub(" ", text).strip()


def find_requirement_markers(text: str) -> list[RequirementMarker]:
    """Find every requirement keyword occurrence in ``text``.

    Args:
        text: Paragraph or list item content.

    Returns:
        Markers in order of appearance, one per keyword occurrence.
    """
    return [
        RequirementMarker(level=normalize_level(match.group(1)), position=match.start())
        for match in create_requirement_regex().finditer(text)
    ]


def sentence_bounds(text: str, position: int) -> tuple[int, int]:
    """Return ``(start, end)`` slice bounds of the sentence containing ``position``.

    Scans backward to the previous terminator followed by whitespace and
    forward to the next terminator that ends a sentence (followed by
    whitespace or the end of the text), so dots inside "5.2" or "e.g."
    do not cut the sentence short.
    """
    start = position
    while start > 0 and not _SENTENCE_START.match(text, start - 1, start + 1):
        start -= 1

    end = position
    length = len(text)
    while end < length:
        if text[end] in ".!?" and (end + 1 >= length or text[end + 1].isspace()):
            break
        end += 1

    return start, min(end + 1, length)


def extract_sentence(text: str, position: int) -> str:
    """Extract the sentence containing ``position``."""
    start, end = sentence_bounds(text, position)
    return text[start:end].strip()


def extract_cross_references(text: str) -> list[CrossReference]:
    """Find "RFC nnnn" and "Section x.y" mentions in ``text``.

    Duplicate targets within the same text are reported once.
    """
    refs: list[CrossReference] = []
    seen: set[tuple[CrossReferenceType, str]] = set()

    for match in create_rfc_reference_regex().finditer(text):
        target = f"RFC{int(match.group(1))}"
        if (CrossReferenceType.RFC, target) not in seen:
            seen.add((CrossReferenceType.RFC, target))
            refs.append(CrossReference(target=target, type=CrossReferenceType.RFC))

    for match in create_section_reference_regex().finditer(text):
        number = match.group(1).strip(".")
        if not number or (CrossReferenceType.SECTION, number) in seen:
            continue
        seen.add((CrossReferenceType.SECTION, number))
        refs.append(CrossReference(target=number, type=CrossReferenceType.SECTION, section=number))

    return refs


def merge_cross_references(
    explicit: list[CrossReference], detected: list[CrossReference]
) -> list[CrossReference]:
    """Merge pattern-detected references into explicit markup references.

    Explicit references win; a detected reference is added only when no
    reference with the same target is already present.
    """
    merged = list(explicit)
    targets = {ref.target for ref in explicit}
    for ref in detected:
        if ref.target not in targets:
            targets.add(ref.target)
            merged.append(ref)
    return merged
