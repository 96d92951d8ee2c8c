"""Tests for the RFCXML parser."""

import pytest

from rfcxml_mcp.engine.core import find_section
from rfcxml_mcp.engine.core.document import ListBlock, SourceCodeBlock, TextBlock
from rfcxml_mcp.engine.parsers import normalize_keyword_markup, parse_rfc_xml
from rfcxml_mcp.models.enums import CrossReferenceType, ListStyle, RequirementLevel


class TestMetadataAndSections:
    """Front matter and the section tree"""

    @pytest.fixture(autouse=True)
    def _parse(self, sample_xml):
        self.parsed = parse_rfc_xml(sample_xml)

    def test_metadata(self):
        metadata = self.parsed.metadata

        assert metadata.title == "The Test Protocol"
        assert metadata.doc_name == "draft-ietf-test-protocol-05"
        assert metadata.number == 9999

    def test_section_tree_uses_pn_numbers(self):
        roots = self.parsed.sections

        assert [s.number for s in roots] == ["section-1", "section-2", "section-3"]
        assert [s.title for s in roots] == ["Introduction", "Framing", "Security Considerations"]
        assert [s.number for s in roots[0].subsections] == ["section-1.1"]
        assert roots[1].subsections[0].anchor == "masking"

    def test_bcp14_markup_is_flattened(self):
        block = self.parsed.sections[1].content[0]

        assert isinstance(block, TextBlock)
        assert "<bcp14>" not in block.content
        assert "The server MUST NOT mask any frames" in block.content
        assert [m.level for m in block.requirements] == [
            RequirementLevel.MUST,
            RequirementLevel.MUST_NOT,
        ]

    def test_content_block_types(self):
        masking = find_section(self.parsed.sections, "2.1")
        security = find_section(self.parsed.sections, "3")

        assert isinstance(masking.content[1], ListBlock)
        assert masking.content[1].style == ListStyle.SYMBOLS
        assert masking.content[1].items[0].requirements[0].level == RequirementLevel.MAY
        assert isinstance(security.content[1], SourceCodeBlock)
        assert security.content[1].language == "abnf"
        assert security.content[1].content == "frame = header payload"

    def test_xref_to_anchor_resolves_to_section_number(self):
        intro = self.parsed.sections[0].content[0]

        assert "[security]" in intro.content
        section_refs = [r for r in intro.cross_references if r.type == CrossReferenceType.SECTION]
        assert [r.section for r in section_refs] == ["3"]

    def test_xref_to_reference_resolves_to_rfc(self):
        terminology = find_section(self.parsed.sections, "1.1")
        refs = terminology.content[0].cross_references

        assert [(r.type, r.target) for r in refs] == [(CrossReferenceType.RFC, "RFC2119")]

    def test_definition_list_items(self):
        terminology = find_section(self.parsed.sections, "1.1")
        block = terminology.content[1]

        assert block.style == ListStyle.HANGING
        assert block.items[0].content == "Frame: A unit of data sent over a connection."

    def test_idempotent(self, sample_xml):
        assert parse_rfc_xml(sample_xml).to_dict() == self.parsed.to_dict()


class TestReferencesAndDefinitions:
    @pytest.fixture(autouse=True)
    def _parse(self, sample_xml):
        self.parsed = parse_rfc_xml(sample_xml)

    def test_nested_reference_containers_are_classified(self):
        refs = self.parsed.references

        assert [r.anchor for r in refs.normative] == ["RFC2119"]
        assert [r.anchor for r in refs.informative] == ["RFC6455", "I-D.ietf-test-ext"]

    def test_reference_details(self):
        rfc2119 = self.parsed.references.normative[0]
        draft = self.parsed.references.informative[1]

        assert rfc2119.rfc_number == 2119
        assert rfc2119.authors == ["S. Bradner"]
        assert rfc2119.date == "March 1997"
        assert rfc2119.target == "https://www.rfc-editor.org/info/rfc2119"
        assert draft.rfc_number is None
        assert draft.draft_name == "draft-ietf-test-ext-01"

    def test_definitions_tagged_with_section(self):
        definitions = self.parsed.definitions

        assert [(d.term, d.section) for d in definitions] == [
            ("Frame", "section-1.1"),
            ("Endpoint", "section-1.1"),
        ]
        assert definitions[1].definition == "Either the client or the server of a connection."


class TestTolerantParsing:
    """Any input yields a document"""

    def test_empty_input(self):
        parsed = parse_rfc_xml("")

        assert parsed.metadata.title == "Untitled"
        assert parsed.sections == []

    def test_garbage_input(self):
        parsed = parse_rfc_xml("this is not xml at all")

        assert parsed.metadata.title == "Untitled"
        assert parsed.sections == []

    def test_missing_titles_get_placeholders(self):
        parsed = parse_rfc_xml("<rfc><middle><section><t>Text.</t></section></middle></rfc>")

        assert parsed.metadata.title == "Untitled"
        assert parsed.sections[0].title == "Untitled Section"
        assert parsed.sections[0].number == "section-1"

    def test_v2_nested_list(self):
        xml = (
            '<rfc><middle><section title="Rules"><t>Steps:'
            '<list style="numbers"><t>The sender MUST retry.</t><t>Stop.</t></list>'
            "</t></section></middle></rfc>"
        )
        section = parse_rfc_xml(xml).sections[0]

        assert section.title == "Rules"
        assert section.content[0].content == "Steps:"
        assert section.content[1].style == ListStyle.NUMBERS
        assert [item.content for item in section.content[1].items] == [
            "The sender MUST retry.",
            "Stop.",
        ]

    def test_normalize_keyword_markup(self):
        assert normalize_keyword_markup("a <bcp14>MUST NOT</bcp14> b") == "a MUST NOT b"
        assert normalize_keyword_markup("<em>SHOULD</em>") == "SHOULD"
        assert normalize_keyword_markup("<em>hello</em>") == "<em>hello</em>"
