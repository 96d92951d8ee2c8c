"""Plain-text RFC parser.

Fallback for RFCs that are not published as RFCXML. Produces the same
Document Model as the XML parser from line-based heuristics:

- Page furniture (form feeds, "[Page N]" footers, running headers) is
  removed before any analysis.
- Section headers are "<dotted-number> <title>" lines that pass a
  plausibility check and fit the current numbering (a child must sit
  directly under its dotted parent and advance past its previous sibling).
  Rejected candidates stay in the body text.
- References cannot be classified from text, so every RFC mentioned is
  reported as informative.
"""

import logging
import re

from ...models.enums import ReferenceType
from ..core.document import (
    Definition,
    DocumentMetadata,
    ParsedRFC,
    Reference,
    References,
    Section,
    TextBlock,
)
from ..core.patterns import create_rfc_reference_regex, create_section_header_regex
from ..core.text import extract_cross_references, find_requirement_markers

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Metadata extraction
# ---------------------------------------------------------------------------
MAX_TITLE_SCAN_LINES = 30
TITLE_MIN_LENGTH = 10
TITLE_MAX_LENGTH = 100

# Front-page lines that look like titles but never are
TITLE_BOILERPLATE_PREFIXES = (
    "network working group",
    "internet engineering task force",
    "internet architecture board",
    "internet research task force",
    "independent submission",
    "status of this memo",
    "copyright notice",
    "table of contents",
)

# ---------------------------------------------------------------------------
# Section header validation
# ---------------------------------------------------------------------------
MAX_SECTION_DEPTH = 5
MAX_TOP_LEVEL_NUMBER = 99
MIN_TITLE_LENGTH = 3
LOWERCASE_TITLE_MIN_LENGTH = 20
UPPERCASE_TITLE_MIN_LENGTH = 5
# Headers start at the margin; indented numbers are list items or wrapped body text
MAX_HEADER_INDENT = 2

SECTION_KEYWORDS = (
    "introduction",
    "overview",
    "background",
    "requirements",
    "specification",
    "protocol",
    "format",
    "security",
    "considerations",
    "references",
    "acknowledgments",
    "appendix",
    "terminology",
    "definitions",
    "abstract",
    "scope",
    "normative",
    "informative",
    "implementation",
    "examples",
    "error",
    "status",
    "codes",
    "messages",
    "operations",
)

# ---------------------------------------------------------------------------
# Definition extraction
# ---------------------------------------------------------------------------
MIN_TERM_LENGTH = 2
MIN_DEFINITION_LENGTH = 10
DEFINITION_PATTERN = re.compile(r"^\s*([A-Za-z][A-Za-z0-9\s-]*[A-Za-z0-9])\s*[-:]\s+(.+)$")

# ---------------------------------------------------------------------------
# Page furniture and table of contents
# ---------------------------------------------------------------------------
PAGE_FOOTER_PATTERN = re.compile(r"^.*\[Page \d+\]\s*$")
RUNNING_HEADER_PATTERN = re.compile(r"^RFC \d+\s{2,}.*\S\s{2,}\S+ \d{4}\s*$")
TOC_HEADING_PATTERN = re.compile(r"^\s*table of contents\s*$", re.IGNORECASE)
DOT_LEADER_PATTERN = re.compile(r"(?:\.\s?){3,}\s*\d*\s*$")
COLUMN_GAP_PATTERN = re.compile(r"\S\s{3,}\S")
PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


def strip_page_furniture(lines: list[str]) -> list[str]:
    """Remove form feeds, page footers and running headers.

    The blank lines around a page break are dropped too, so a paragraph
    that continues on the next page is joined back together. A blank line
    is kept when the text before the break ended a sentence.
    """
    result: list[str] = []
    in_break = False
    for raw in lines:
        line = raw.replace("\f", "")
        if PAGE_FOOTER_PATTERN.match(line) or RUNNING_HEADER_PATTERN.match(line):
            if not in_break:
                while result and not result[-1].strip():
                    result.pop()
                in_break = True
            continue
        if in_break:
            if not line.strip():
                continue
            in_break = False
            if result and result[-1].rstrip().endswith((".", ":")):
                result.append("")
        result.append(line)
    return result


def extract_text_metadata(lines: list[str], rfc_number: int) -> DocumentMetadata:
    """Pick the first plausible title line from the first page."""
    title = f"RFC {rfc_number}"
    for raw in lines[:MAX_TITLE_SCAN_LINES]:
        line = raw.strip()
        lower = line.lower()
        if not TITLE_MIN_LENGTH < len(line) < TITLE_MAX_LENGTH:
            continue
        if ":" in line or line[0].isdigit():
            continue
        if "request for comments" in lower or lower.startswith(TITLE_BOILERPLATE_PREFIXES):
            continue
        # Two-column front page lines ("Network Working Group      J. Postel")
        if COLUMN_GAP_PATTERN.search(line):
            continue
        title = line
        break
    return DocumentMetadata(title=title, number=rfc_number)


def is_valid_section_header(section_number: str, title: str) -> bool:
    """Plausibility check for a "<number> <title>" candidate line.

    Rejects status codes ("1001 Connection refused"), deep numbering and
    short lowercase list items; accepts known section vocabulary,
    capitalized titles and sub-section numbers.
    """
    parts = section_number.split(".")
    depth = len(parts)
    if depth > MAX_SECTION_DEPTH:
        return False
    if int(parts[0]) > MAX_TOP_LEVEL_NUMBER:
        return False

    title = title.strip()
    if len(title) < MIN_TITLE_LENGTH:
        return False
    if title[0].islower() and len(title) < LOWERCASE_TITLE_MIN_LENGTH:
        return False
    if DOT_LEADER_PATTERN.search(title):
        return False

    lower = title.lower()
    if any(keyword in lower for keyword in SECTION_KEYWORDS):
        return True
    if title[0].isupper() and len(title) >= UPPERCASE_TITLE_MIN_LENGTH:
        return True
    return depth >= 2


class _SectionStack:
    """Open sections from the current root down to the current section.

    Depths on the stack are always 1, 2, ..., n, so the parent of a
    depth-d candidate is the entry at index d - 2.
    """

    def __init__(self, roots: list[Section]):
        self.roots = roots
        self.entries: list[tuple[Section, list[int]]] = []

    def try_push(self, section: Section, parts: list[int]) -> bool:
        depth = len(parts)
        if depth == 1:
            siblings = self.roots
        else:
            if len(self.entries) < depth - 1:
                return False
            parent, parent_parts = self.entries[depth - 2]
            if parent_parts != parts[:-1]:
                return False
            siblings = parent.subsections

        if siblings:
            previous_last = int(siblings[-1].number.split(".")[-1])
            if parts[-1] <= previous_last:
                return False

        siblings.append(section)
        del self.entries[depth - 1 :]
        self.entries.append((section, parts))
        return True


def _paragraph_blocks(body_lines: list[str]) -> list[TextBlock]:
    blocks = []
    text = "\n".join(line.strip() for line in body_lines)
    for paragraph in PARAGRAPH_BREAK.split(text):
        content = paragraph.strip()
        if not content:
            continue
        blocks.append(
            TextBlock(
                content=content,
                requirements=find_requirement_markers(content),
                cross_references=extract_cross_references(content),
            )
        )
    return blocks


def extract_text_sections(lines: list[str]) -> tuple[list[Section], list[Definition]]:
    """Segment lines into a section tree and collect line definitions.

    Returns:
        (root sections, definitions tagged with their section number)
    """
    header_regex = create_section_header_regex()
    roots: list[Section] = []
    stack = _SectionStack(roots)
    bodies: list[tuple[Section, list[str]]] = []
    definitions: list[Definition] = []
    in_toc = False

    for line in lines:
        stripped = line.strip()

        if TOC_HEADING_PATTERN.match(line):
            in_toc = True
            continue

        match = header_regex.match(stripped)
        if match:
            number = match.group(1).rstrip(".")
            title = match.group(2).strip()
            indent = len(line) - len(line.lstrip())
            if in_toc:
                too_indented = indent > 0
            else:
                too_indented = indent > MAX_HEADER_INDENT
            accepted = False
            if is_valid_section_header(number, title) and not too_indented:
                section = Section(title=title, number=number)
                accepted = stack.try_push(section, [int(p) for p in number.split(".")])
                if accepted:
                    in_toc = False
                    bodies.append((section, []))
            if accepted:
                continue

        if not bodies or in_toc:
            continue
        current, body = bodies[-1]
        body.append(line)

        definition = DEFINITION_PATTERN.match(stripped)
        if definition:
            term = definition.group(1).strip()
            text = definition.group(2).strip()
            if len(term) >= MIN_TERM_LENGTH and len(text) >= MIN_DEFINITION_LENGTH:
                definitions.append(Definition(term=term, definition=text, section=current.number))

    for section, body in bodies:
        section.content = _paragraph_blocks(body)

    return roots, definitions


def extract_text_references(text: str, rfc_number: int) -> References:
    """Every distinct RFC mentioned in the text, excluding the document itself."""
    informative: list[Reference] = []
    seen: set[int] = set()
    for match in create_rfc_reference_regex().finditer(text):
        number = int(match.group(1))
        if number == rfc_number or number in seen or number == 0:
            continue
        seen.add(number)
        informative.append(
            Reference(
                anchor=f"RFC{number}",
                type=ReferenceType.INFORMATIVE,
                rfc_number=number,
                title=f"RFC {number}",
            )
        )
    return References(normative=[], informative=informative)


def parse_rfc_text(text: str, rfc_number: int) -> ParsedRFC:
    """Parse plain RFC text into the Document Model.

    Args:
        text: RFC plain text.
        rfc_number: Number of the RFC (title fallback and self-reference filter).

    Returns:
        ParsedRFC; empty input yields no sections and the title "RFC <n>".
    """
    lines = strip_page_furniture(text.replace("\r\n", "\n").split("\n"))
    sections, definitions = extract_text_sections(lines)
    parsed = ParsedRFC(
        metadata=extract_text_metadata(lines, rfc_number),
        sections=sections,
        references=extract_text_references("\n".join(lines), rfc_number),
        definitions=definitions,
    )
    logger.debug(
        f"Parsed RFC {rfc_number} text: {len(sections)} top-level sections, "
        f"{len(parsed.references.informative)} referenced RFCs"
    )
    return parsed
