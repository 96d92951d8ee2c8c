"""BCP 14 keyword registry and RFC text patterns.

Every ``create_*`` factory compiles and returns a new pattern. Scanning code
calls the factory and iterates with ``finditer`` so no scan ever shares
match state with another scan.
"""

import re

from ...models.enums import RequirementLevel

# Longer keywords precede the shorter keywords they start with, so the
# alternation matches "MUST NOT" before "MUST".
REQUIREMENT_KEYWORDS: tuple[RequirementLevel, ...] = (
    RequirementLevel.MUST_NOT,
    RequirementLevel.MUST,
    RequirementLevel.REQUIRED,
    RequirementLevel.SHALL_NOT,
    RequirementLevel.SHALL,
    RequirementLevel.SHOULD_NOT,
    RequirementLevel.SHOULD,
    RequirementLevel.RECOMMENDED,
    RequirementLevel.NOT_RECOMMENDED,
    RequirementLevel.MAY,
    RequirementLevel.OPTIONAL,
)

# Section header: "1.", "3.5", "10.2.1 Title"
SECTION_HEADER_PATTERN = r"^(\d+(?:\.\d+)*\.?)\s+(.+)$"

# "RFC 1234", "RFC1234", "rfc 1234"
RFC_REFERENCE_PATTERN = r"RFC\s*(\d+)"

# "Section 1.2", "section 3.4.5"
SECTION_REFERENCE_PATTERN = r"[Ss]ection\s+([\d.]+)"


def _keyword_alternative(level: RequirementLevel) -> str:
    # Wrapped text can split a two-word keyword across lines
    return r"\s+".join(re.escape(word) for word in str(level).split())


REQUIREMENT_KEYWORD_ALTERNATION = "|".join(
    _keyword_alternative(level) for level in REQUIREMENT_KEYWORDS
)


def create_requirement_regex() -> re.Pattern[str]:
    """Create a fresh pattern matching any requirement keyword.

    Group 1 holds the keyword as written (inner whitespace may be any run of
    whitespace); pass it through ``normalize_level`` to get the enum value.
    """
    return re.compile(rf"\b({REQUIREMENT_KEYWORD_ALTERNATION})\b")


def create_section_header_regex() -> re.Pattern[str]:
    """Create a fresh section header pattern (group 1: number, group 2: title)."""
    return re.compile(SECTION_HEADER_PATTERN)


def create_rfc_reference_regex() -> re.Pattern[str]:
    """Create a fresh case-insensitive RFC reference pattern."""
    return re.compile(RFC_REFERENCE_PATTERN, re.IGNORECASE)


def create_section_reference_regex() -> re.Pattern[str]:
    """Create a fresh section reference pattern."""
    return re.compile(SECTION_REFERENCE_PATTERN)


def normalize_level(raw: str) -> RequirementLevel:
    """Map a matched keyword (possibly line-wrapped) to its RequirementLevel."""
    return RequirementLevel(" ".join(raw.split()).upper())
