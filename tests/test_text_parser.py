"""Tests for the plain-text RFC parser."""

import pytest

from rfcxml_mcp.engine.core import find_section, iter_sections
from rfcxml_mcp.engine.parsers import parse_rfc_text
from rfcxml_mcp.engine.parsers.text_parser import (
    is_valid_section_header,
    strip_page_furniture,
)
from rfcxml_mcp.models.enums import RequirementLevel


class TestTextParser:
    @pytest.fixture(autouse=True)
    def _parse(self, sample_text):
        self.parsed = parse_rfc_text(sample_text, 1234)

    def test_title_skips_front_page_boilerplate(self):
        assert self.parsed.metadata.title == "The Simple Echo Protocol"
        assert self.parsed.metadata.number == 1234

    def test_section_hierarchy(self):
        roots = self.parsed.sections

        assert [s.number for s in roots] == ["1", "2", "3"]
        assert [s.title for s in roots] == [
            "Introduction",
            "Protocol Specification",
            "Security Considerations",
        ]
        assert [s.number for s in roots[1].subsections] == ["2.1"]

    def test_every_subsection_sits_under_its_dotted_parent(self):
        for section in iter_sections(self.parsed.sections):
            for child in section.subsections:
                assert child.number.startswith(section.number + ".")

    def test_status_codes_stay_in_body(self):
        numbers = [s.number for s in iter_sections(self.parsed.sections)]
        protocol = find_section(self.parsed.sections, "2")

        assert "1001" not in numbers
        assert "1001 Connection refused" in protocol.content[1].content

    def test_table_of_contents_is_not_content(self):
        intro = find_section(self.parsed.sections, "1")

        assert all("...." not in block.content for block in intro.content)

    def test_paragraph_continues_across_page_break(self):
        message_format = find_section(self.parsed.sections, "2.1")
        contents = [block.content for block in message_format.content]

        assert "Implementations MUST NOT\nreorder messages." in contents
        assert not any("[Page" in content for content in contents)

    def test_requirement_markers_in_paragraph(self):
        protocol = find_section(self.parsed.sections, "2")
        levels = [m.level for m in protocol.content[0].requirements]

        assert levels == [RequirementLevel.MUST, RequirementLevel.SHOULD_NOT]

    def test_references_exclude_self(self):
        refs = self.parsed.references

        assert refs.normative == []
        assert [r.rfc_number for r in refs.informative] == [862]

    def test_line_definitions(self):
        assert [(d.term, d.section) for d in self.parsed.definitions] == [("Message", "2.1")]

    def test_section_cross_reference(self):
        message_format = find_section(self.parsed.sections, "2.1")
        refs = message_format.content[1].cross_references

        assert [r.section for r in refs] == ["2"]

    def test_idempotent(self, sample_text):
        assert parse_rfc_text(sample_text, 1234).to_dict() == self.parsed.to_dict()


class TestEdgeCases:
    def test_empty_text(self):
        parsed = parse_rfc_text("", 42)

        assert parsed.sections == []
        assert parsed.metadata.title == "RFC 42"

    def test_out_of_order_number_rejected(self):
        text = "1. Introduction\n\n   Text.\n\n3. Security Considerations\n\n2. Protocol Overview\n"
        parsed = parse_rfc_text(text, 42)

        assert [s.number for s in parsed.sections] == ["1", "3"]

    def test_wrapped_line_starting_with_decimal_is_body_text(self):
        text = (
            "1. Introduction\n\n"
            "   A client MUST wait at least\n"
            "   1.5 seconds before retrying the connection to the same server.\n\n"
            "1.1. Requirements Language\n\n   Text.\n\n"
            "1.2. Terminology\n\n   Text.\n\n"
            "2. Protocol Overview\n\n   Text.\n"
        )
        parsed = parse_rfc_text(text, 42)
        numbers = [s.number for s in iter_sections(parsed.sections)]

        assert numbers == ["1", "1.1", "1.2", "2"]
        assert "1.5 seconds before retrying" in parsed.sections[0].content[0].content

    @pytest.mark.parametrize(
        "number, title, expected",
        [
            ("1001", "Connection refused", False),
            ("3", "Security Considerations", True),
            ("4.2", "RTO", True),
            ("4", "RTO", False),
            ("1.2.3.4.5.6", "Too Deep", False),
            ("5", "ab", False),
            ("6", "lowercase item", False),
        ],
    )
    def test_is_valid_section_header(self, number, title, expected):
        assert is_valid_section_header(number, title) is expected

    def test_strip_page_furniture_joins_split_paragraph(self):
        lines = [
            "   The client MUST",
            "",
            "Doe                    Standards Track                    [Page 3]",
            "\f",
            "RFC 1234          Simple Echo Protocol          March 1991",
            "",
            "   retry.",
        ]

        assert strip_page_furniture(lines) == ["   The client MUST", "   retry."]
