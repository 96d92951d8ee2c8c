"""RFCXML parser.

Converts RFCXML (v3, with v2 fallbacks) into the common Document Model:
front matter metadata, the <middle> section tree with typed content
blocks, back matter references and <dl> definitions.

Parsing is tolerant. Malformed markup is recovered by lxml, a missing
<rfc> wrapper falls back to the parse root, and missing titles become
placeholders. Any input string yields a ParsedRFC.
"""

import logging
import re

from lxml import etree

from ...models.enums import CrossReferenceType, ListStyle, ReferenceType
from ..core.document import (
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
    Section,
    SourceCodeBlock,
    TableBlock,
    TextBlock,
)
from ..core.patterns import REQUIREMENT_KEYWORD_ALTERNATION
from ..core.section import SECTION_PREFIX
from ..core.text import (
    collapse_whitespace,
    extract_cross_references,
    find_requirement_markers,
    merge_cross_references,
)

logger = logging.getLogger(__name__)

UNTITLED_DOCUMENT = "Untitled"
UNTITLED_SECTION = "Untitled Section"

# Inline markup wrapping a keyword: <bcp14>MUST</bcp14>, <em>SHOULD</em>, ...
_KEYWORD_MARKUP = re.compile(
    rf"<(bcp14|em|strong|b|i)\b[^>]*>\s*({REQUIREMENT_KEYWORD_ALTERNATION})\s*</\1\s*>"
)
_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")

# Elements whose text is rendered with surrounding whitespace
_BLOCK_TAGS = frozenset(
    {"t", "ul", "ol", "dl", "li", "dt", "dd", "list", "sourcecode", "artwork", "figure", "table"}
)
# Inline elements whose content is not part of the running text
_SKIPPED_INLINE_TAGS = frozenset({"iref", "cref", "name"})

_LETTER_LIST_TYPES = frozenset({"a", "A"})


def normalize_keyword_markup(xml: str) -> str:
    """Flatten inline markup that wraps a normative keyword into plain text."""
    return _KEYWORD_MARKUP.sub(r"\2", xml)


def _local(element) -> str | None:
    """Local tag name, or None for comments, PIs and entity nodes."""
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def _children(element, *tags: str) -> list:
    return [child for child in element if _local(child) in tags]


def _first_child(element, tag: str):
    for child in element:
        if _local(child) == tag:
            return child
    return None


def _render_text(element, skip: frozenset[str] = frozenset()) -> str:
    """Render the running text of an element.

    Empty <xref>/<relref> elements render as "[target]" so the reference
    stays visible in the text. Children tagged in ``skip`` are left out
    (their tail text is kept).
    """
    parts: list[str] = []
    if element.text:
        parts.append(element.text)
    for child in element:
        tag = _local(child)
        if tag is not None and tag not in _SKIPPED_INLINE_TAGS and tag not in skip:
            if tag in ("xref", "relref") and not "".join(child.itertext()).strip():
                parts.append(f"[{child.get('target', '')}]")
            elif tag in _BLOCK_TAGS:
                parts.append(f" {_render_text(child)} ")
            else:
                parts.append(_render_text(child))
        if child.tail:
            parts.append(child.tail)
    return "".join(parts)


def element_text(element, skip: frozenset[str] = frozenset()) -> str:
    """Whitespace-collapsed running text of an element ('' for None)."""
    if element is None:
        return ""
    return collapse_whitespace(_render_text(element, skip))


def _raw_text(element) -> str:
    """Verbatim text of a code or artwork element, outer blank lines removed."""
    return "".join(element.itertext()).strip("\n").rstrip()


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


class RFCXMLParser:
    """Single-use parser holding the per-document anchor index.

    Use ``parse_rfc_xml`` instead of instantiating this directly.
    """

    def __init__(self, root):
        self.root = root
        # section element -> section number (pn, or computed for v2 sources)
        self.section_numbers: dict = {}
        # anchor -> resolved cross-reference (without display text)
        self.anchors: dict[str, CrossReference] = {}

    # ============ ENTRY POINT ============

    def parse(self) -> ParsedRFC:
        middle = _first_child(self.root, "middle")
        back = _first_child(self.root, "back")

        if middle is not None:
            self._number_sections(middle, prefix="")
        if back is not None:
            self._index_back_sections(back)
        self._index_anchors()

        return ParsedRFC(
            metadata=self._extract_metadata(),
            sections=self._extract_sections(middle) if middle is not None else [],
            references=self._extract_references(back) if back is not None else References(),
            definitions=self._extract_definitions(),
        )

    # ============ INDEXING ============

    def _number_sections(self, parent, prefix: str) -> None:
        counter = 0
        for section in _children(parent, "section"):
            pn = section.get("pn")
            if pn:
                number = pn
            elif section.get("numbered") == "false":
                number = section.get("anchor") or ""
            else:
                counter += 1
                number = f"{prefix}.{counter}" if prefix else f"{SECTION_PREFIX}{counter}"
            self.section_numbers[section] = number
            self._number_sections(section, prefix=number)

    def _index_back_sections(self, back) -> None:
        for section in back.iter("{*}section"):
            if section not in self.section_numbers:
                self.section_numbers[section] = section.get("pn") or section.get("anchor") or ""

    def _index_anchors(self) -> None:
        for section, number in self.section_numbers.items():
            anchor = section.get("anchor")
            if anchor and number:
                target = number[len(SECTION_PREFIX) :] if number.startswith(SECTION_PREFIX) else number
                self.anchors[anchor] = CrossReference(
                    target=target, type=CrossReferenceType.SECTION, section=target
                )

        for element in self.root.iter():
            tag = _local(element)
            anchor = element.get("anchor") if tag else None
            if not anchor or anchor in self.anchors:
                continue
            if tag == "figure":
                self.anchors[anchor] = CrossReference(target=anchor, type=CrossReferenceType.FIGURE)
            elif tag == "table":
                self.anchors[anchor] = CrossReference(target=anchor, type=CrossReferenceType.TABLE)
            elif tag == "reference":
                rfc_number = self._reference_rfc_number(element)
                if rfc_number is not None:
                    self.anchors[anchor] = CrossReference(
                        target=f"RFC{rfc_number}", type=CrossReferenceType.RFC
                    )
                else:
                    self.anchors[anchor] = CrossReference(
                        target=anchor, type=CrossReferenceType.EXTERNAL
                    )

    def _resolve_xref(self, xref) -> CrossReference | None:
        target = xref.get("target")
        if not target:
            return None
        display = element_text(xref) or None
        resolved = self.anchors.get(target)
        section_attr = xref.get("section")

        if resolved is None:
            if target.startswith(SECTION_PREFIX):
                number = target[len(SECTION_PREFIX) :]
                return CrossReference(
                    target=number,
                    type=CrossReferenceType.SECTION,
                    section=number,
                    display_text=display,
                )
            return CrossReference(
                target=target,
                type=CrossReferenceType.EXTERNAL,
                section=section_attr,
                display_text=display,
            )

        return CrossReference(
            target=resolved.target,
            type=resolved.type,
            section=section_attr or resolved.section,
            display_text=display,
        )

    def _explicit_references(
        self, element, skip: frozenset[str] = frozenset()
    ) -> list[CrossReference]:
        refs: list[CrossReference] = []
        seen: set[str] = set()
        for xref in element.iter("{*}xref", "{*}relref"):
            if skip and any(_local(a) in skip for a in xref.iterancestors() if a is not element):
                continue
            ref = self._resolve_xref(xref)
            if ref is not None and ref.target not in seen:
                seen.add(ref.target)
                refs.append(ref)
        return refs

    # ============ METADATA ============

    def _extract_metadata(self) -> DocumentMetadata:
        front = _first_child(self.root, "front")
        title = element_text(_first_child(front, "title")) if front is not None else ""
        return DocumentMetadata(
            title=title or UNTITLED_DOCUMENT,
            doc_name=self.root.get("docName"),
            number=_parse_int(self.root.get("number")),
        )

    # ============ SECTIONS ============

    def _extract_sections(self, parent) -> list[Section]:
        sections = []
        for element in _children(parent, "section"):
            title = element_text(_first_child(element, "name")) or element.get("title")
            sections.append(
                Section(
                    anchor=element.get("anchor"),
                    number=self.section_numbers.get(element) or None,
                    title=collapse_whitespace(title) if title else UNTITLED_SECTION,
                    content=self._extract_content(element),
                    subsections=self._extract_sections(element),
                )
            )
        return sections

    def _extract_content(self, container) -> list[ContentBlock]:
        blocks: list[ContentBlock] = []
        for child in container:
            tag = _local(child)
            if tag is None or tag in ("name", "section"):
                continue
            if tag == "t":
                # v2 nests <list> inside <t>
                nested_lists = _children(child, "list")
                block = self._text_block(child, skip=frozenset({"list"}) if nested_lists else frozenset())
                if block is not None:
                    blocks.append(block)
                for nested in nested_lists:
                    blocks.append(self._list_block(nested, "list"))
            elif tag in ("ul", "ol", "dl", "list"):
                blocks.append(self._list_block(child, tag))
            elif tag == "sourcecode":
                blocks.append(SourceCodeBlock(content=_raw_text(child), language=child.get("type")))
            elif tag == "artwork":
                blocks.append(ArtworkBlock(content=_raw_text(child)))
            elif tag in ("table", "texttable"):
                blocks.append(self._table_block(child, tag))
            elif tag in ("figure", "aside", "blockquote"):
                blocks.extend(self._extract_content(child))
        return blocks

    def _text_block(self, element, skip: frozenset[str] = frozenset()) -> TextBlock | None:
        content = element_text(element, skip)
        if not content:
            return None
        return TextBlock(
            content=content,
            requirements=find_requirement_markers(content),
            cross_references=merge_cross_references(
                self._explicit_references(element, skip), extract_cross_references(content)
            ),
        )

    def _list_item(self, content: str, element) -> ListItem:
        return ListItem(
            content=content,
            requirements=find_requirement_markers(content),
            cross_references=merge_cross_references(
                self._explicit_references(element), extract_cross_references(content)
            ),
        )

    def _list_block(self, element, tag: str) -> ListBlock:
        if tag == "dl":
            items = []
            term = None
            for child in element:
                child_tag = _local(child)
                if child_tag == "dt":
                    term = element_text(child)
                elif child_tag == "dd":
                    description = element_text(child)
                    content = f"{term}: {description}" if term else description
                    items.append(self._list_item(content, child))
                    term = None
            return ListBlock(style=ListStyle.HANGING, items=items)

        if tag == "list":
            style = self._v2_list_style(element.get("style", ""))
            item_elements = _children(element, "t")
        else:
            style = ListStyle.SYMBOLS
            if tag == "ol":
                list_type = element.get("type", "1")
                if list_type in _LETTER_LIST_TYPES or "%c" in list_type.lower():
                    style = ListStyle.LETTERS
                else:
                    style = ListStyle.NUMBERS
            item_elements = _children(element, "li")

        items = []
        for li in item_elements:
            content = element_text(li)
            if content:
                items.append(self._list_item(content, li))
        return ListBlock(style=style, items=items)

    @staticmethod
    def _v2_list_style(style: str) -> ListStyle:
        if style == "numbers" or style.startswith("format"):
            return ListStyle.NUMBERS
        if style == "letters":
            return ListStyle.LETTERS
        if style == "hanging":
            return ListStyle.HANGING
        return ListStyle.SYMBOLS

    def _table_block(self, element, tag: str) -> TableBlock:
        if tag == "texttable":
            headers = [element_text(col) for col in _children(element, "ttcol")]
            cells = [element_text(c) for c in _children(element, "c")]
            width = max(len(headers), 1)
            rows = [cells[i : i + width] for i in range(0, len(cells), width)]
            return TableBlock(headers=headers, rows=rows)

        headers: list[str] = []
        rows: list[list[str]] = []
        for row in element.iter("{*}tr"):
            cells = _children(row, "th", "td")
            parent = row.getparent()
            in_head = parent is not None and _local(parent) == "thead"
            if not headers and (in_head or all(_local(c) == "th" for c in cells)):
                headers = [element_text(c) for c in cells]
            else:
                rows.append([element_text(c) for c in cells])
        return TableBlock(headers=headers, rows=rows)

    # ============ REFERENCES ============

    def _collect_reference_containers(self, parent) -> list:
        containers = []
        for container in _children(parent, "references"):
            if _children(container, "reference", "referencegroup"):
                containers.append(container)
            containers.extend(self._collect_reference_containers(container))
        return containers

    @staticmethod
    def _is_normative(container) -> bool:
        name = _first_child(container, "name")
        signals = [
            element_text(name),
            container.get("title", ""),
            container.get("anchor", ""),
            container.get("pn", ""),
            name.get("slugifiedName", "") if name is not None else "",
        ]
        return any("normative" in signal.lower() for signal in signals)

    @staticmethod
    def _reference_rfc_number(reference) -> int | None:
        for info in reference.iter("{*}seriesInfo"):
            if info.get("name") == "RFC":
                number = _parse_int(info.get("value"))
                if number is not None:
                    return number
        anchor = reference.get("anchor", "")
        match = re.fullmatch(r"RFC0*(\d+)", anchor, re.IGNORECASE)
        return int(match.group(1)) if match else None

    def _parse_reference(self, reference, ref_type: ReferenceType) -> Reference:
        front = _first_child(reference, "front")
        draft_name = None
        for info in reference.iter("{*}seriesInfo"):
            if info.get("name") == "Internet-Draft":
                draft_name = info.get("value")

        authors: list[str] = []
        date = None
        title = ""
        if front is not None:
            title = element_text(_first_child(front, "title"))
            for author in _children(front, "author"):
                name = author.get("fullname") or author.get("surname")
                if not name:
                    name = element_text(_first_child(author, "organization"))
                if name:
                    authors.append(name)
            date_element = _first_child(front, "date")
            if date_element is not None:
                date = " ".join(
                    part for part in (date_element.get("month"), date_element.get("year")) if part
                ) or None

        return Reference(
            anchor=reference.get("anchor", ""),
            type=ref_type,
            title=title,
            rfc_number=self._reference_rfc_number(reference),
            draft_name=draft_name,
            authors=authors,
            date=date,
            target=reference.get("target"),
        )

    def _extract_references(self, back) -> References:
        result = References()
        for container in self._collect_reference_containers(back):
            normative = self._is_normative(container)
            ref_type = ReferenceType.NORMATIVE if normative else ReferenceType.INFORMATIVE
            bucket = result.normative if normative else result.informative

            for child in container:
                tag = _local(child)
                if tag == "reference":
                    bucket.append(self._parse_reference(child, ref_type))
                elif tag == "referencegroup":
                    for member in _children(child, "reference"):
                        bucket.append(self._parse_reference(member, ref_type))
        return result

    # ============ DEFINITIONS ============

    def _enclosing_section_id(self, element) -> str:
        parent = element.getparent()
        while parent is not None:
            if _local(parent) == "section":
                return self.section_numbers.get(parent) or parent.get("pn") or parent.get("anchor") or ""
            parent = parent.getparent()
        return ""

    def _extract_definitions(self) -> list[Definition]:
        definitions = []
        for dl in self.root.iter("{*}dl"):
            section_id = self._enclosing_section_id(dl)
            term = None
            for child in dl:
                tag = _local(child)
                if tag == "dt":
                    term = element_text(child)
                elif tag == "dd" and term:
                    description = element_text(child)
                    if description:
                        definitions.append(
                            Definition(term=term, definition=description, section=section_id)
                        )
                    term = None
        return definitions


def _empty_document() -> ParsedRFC:
    return ParsedRFC(metadata=DocumentMetadata(title=UNTITLED_DOCUMENT))


def parse_rfc_xml(xml: str) -> ParsedRFC:
    """Parse an RFCXML document into the Document Model.

    Args:
        xml: RFCXML source text.

    Returns:
        ParsedRFC. Unparseable or empty input yields an empty document
        titled "Untitled".
    """
    source = _XML_DECLARATION.sub("", normalize_keyword_markup(xml), count=1)
    if not source.strip():
        return _empty_document()

    parser = etree.XMLParser(
        encoding="utf-8",
        recover=True,
        resolve_entities=False,
        no_network=True,
        huge_tree=True,
        remove_comments=True,
        remove_pis=True,
    )
    try:
        root = etree.fromstring(source.encode("utf-8"), parser)
    except etree.XMLSyntaxError as e:
        logger.warning(f"RFCXML could not be parsed, returning empty document: {e}")
        return _empty_document()
    if root is None:
        return _empty_document()

    rfc = root if _local(root) == "rfc" else None
    if rfc is None:
        rfc = next(root.iter("{*}rfc"), root)

    parsed = RFCXMLParser(rfc).parse()
    logger.debug(
        f"Parsed RFCXML '{parsed.metadata.title}': {len(parsed.sections)} top-level sections, "
        f"{len(parsed.references.normative)} normative / "
        f"{len(parsed.references.informative)} informative references"
    )
    return parsed
