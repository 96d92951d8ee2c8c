"""Engine core module.

This module contains core utilities and data structures for the RFC engine:
- Document Model data structures
- BCP 14 keyword registry and text patterns
- Sentence, marker and cross-reference scanning
- Section lookup helpers
"""

from .document import (
    ArtworkBlock,
    ContentBlock,
    CrossReference,
    Definition,
    DocumentMetadata,
    ListBlock,
    ListItem,
    ParsedRFC,
    Reference,
    References,
    Requirement,
    RequirementMarker,
    Section,
    SourceCodeBlock,
    TableBlock,
    TextBlock,
)
from .patterns import (
    REQUIREMENT_KEYWORD_ALTERNATION,
    REQUIREMENT_KEYWORDS,
    create_requirement_regex,
    create_rfc_reference_regex,
    create_section_header_regex,
    create_section_reference_regex,
    normalize_level,
)
from .section import (
    collect_cross_references,
    find_section,
    iter_sections,
    normalize_section_number,
    section_matches,
)
from .text import (
    collapse_whitespace,
    extract_cross_references,
    extract_sentence,
    find_requirement_markers,
    merge_cross_references,
    sentence_bounds,
)

__all__ = [
    # Document structures
    "ArtworkBlock",
    "ContentBlock",
    "CrossReference",
    "Definition",
    "DocumentMetadata",
    "ListBlock",
    "ListItem",
    "ParsedRFC",
    "Reference",
    "References",
    "Requirement",
    "RequirementMarker",
    "Section",
    "SourceCodeBlock",
    "TableBlock",
    "TextBlock",
    # Patterns
    "REQUIREMENT_KEYWORD_ALTERNATION",
    "REQUIREMENT_KEYWORDS",
    "create_requirement_regex",
    "create_rfc_reference_regex",
    "create_section_header_regex",
    "create_section_reference_regex",
    "normalize_level",
    # Sections
    "collect_cross_references",
    "find_section",
    "iter_sections",
    "normalize_section_number",
    "section_matches",
    # Text scanning
    "collapse_whitespace",
    "extract_cross_references",
    "extract_sentence",
    "find_requirement_markers",
    "merge_cross_references",
    "sentence_bounds",
]
