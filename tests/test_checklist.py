"""Tests for checklist generation."""

import pytest

from rfcxml_mcp.engine.extraction import (
    classify_requirements,
    extract_requirements,
    filter_by_role,
    generate_checklist,
    generate_checklist_markdown,
    get_checklist_stats,
)
from rfcxml_mcp.engine.parsers import parse_rfc_xml
from rfcxml_mcp.models.enums import Role


@pytest.fixture
def requirements(sample_xml):
    return extract_requirements(parse_rfc_xml(sample_xml).sections)


class TestClassification:
    def test_buckets(self, requirements):
        classified = classify_requirements(requirements)

        assert [r.id for r in classified.must] == [
            "R-section-2-1",
            "R-section-2-2",
            "R-section-2.1-5",
            "R-section-3-6",
        ]
        assert [r.id for r in classified.should] == ["R-section-2.1-3"]
        assert [r.id for r in classified.may] == ["R-section-2.1-4"]


class TestRoleFilter:
    """Requirements naming the other role are dropped; unaddressed ones stay"""

    def test_client(self, requirements):
        kept = filter_by_role(requirements, Role.CLIENT)

        assert [r.subject for r in kept] == ["client", "client", "implementations", "clients"]

    def test_server(self, requirements):
        kept = filter_by_role(requirements, Role.SERVER)

        assert [r.subject for r in kept] == ["server", "server", "implementations"]

    def test_both_keeps_everything(self, requirements):
        assert filter_by_role(requirements, Role.BOTH) == requirements
        assert filter_by_role(requirements) == requirements


class TestChecklist:
    @pytest.mark.parametrize(
        "role, expected",
        [
            (Role.BOTH, {"must": 4, "should": 1, "may": 1, "total": 6}),
            (Role.CLIENT, {"must": 3, "should": 0, "may": 1, "total": 4}),
            (Role.SERVER, {"must": 2, "should": 1, "may": 0, "total": 3}),
        ],
    )
    def test_stats(self, requirements, role, expected):
        checklist = generate_checklist(9999, "The Test Protocol", requirements, role)
        stats = get_checklist_stats(checklist)

        assert stats == expected
        assert stats["total"] == stats["must"] + stats["should"] + stats["may"]

    def test_items_start_unchecked(self, requirements):
        checklist = generate_checklist(9999, "The Test Protocol", requirements)

        assert all(not item.checked for item in checklist.must)
        assert checklist.must[0].id == checklist.must[0].requirement.id

    def test_markdown(self, requirements):
        checklist = generate_checklist(9999, "The Test Protocol", requirements, Role.SERVER)
        markdown = generate_checklist_markdown(checklist)

        assert markdown.startswith("# RFC 9999 Implementation Checklist")
        assert "**The Test Protocol**" in markdown
        assert "Role: server" in markdown
        assert "## Mandatory Requirements (MUST / REQUIRED / SHALL)" in markdown
        assert "## Recommended Requirements (SHOULD / RECOMMENDED)" in markdown
        # no MAY requirement applies to servers
        assert "## Optional Requirements" not in markdown
        assert (
            "- [ ] The server MUST NOT mask any frames that it sends to the client. (section-2)"
            in markdown
        )

    def test_markdown_for_both_roles_omits_role_line(self, requirements):
        markdown = generate_checklist_markdown(
            generate_checklist(9999, "The Test Protocol", requirements)
        )

        assert "Role:" not in markdown
        assert markdown.count("- [ ] ") == 6

    def test_to_dict(self, requirements):
        data = generate_checklist(9999, "The Test Protocol", requirements, Role.CLIENT).to_dict()

        assert data["role"] == "client"
        assert data["may"][0]["requirement"]["level"] == "MAY"
        assert "generatedAt" in data
