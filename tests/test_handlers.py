"""Tests for the tool handlers, driven through RFCEngine."""

import json

import pytest
from pydantic import ValidationError

from rfcxml_mcp.models import ToolName


async def run(engine, tool, **params) -> dict:
    result = await engine.execute(tool, params)
    json.dumps(result.data, default=str)
    assert result.output_tokens > 0
    return result.data


class TestStructureTools:
    async def test_rfc_structure(self, engine):
        data = await run(engine, ToolName.GET_RFC_STRUCTURE, rfc=9999)

        assert data["metadata"]["title"] == "The Test Protocol"
        assert [s["number"] for s in data["sections"]] == ["section-1", "section-2", "section-3"]
        assert "content" not in data["sections"][0]
        assert data["referenceCount"] == {"normative": 1, "informative": 2}
        assert data["_source"] == "xml"
        assert "_sourceNote" not in data

    async def test_rfc_structure_with_content(self, engine):
        data = await run(engine, "get_rfc_structure", rfc=9999, includeContent=True)

        framing = data["sections"][1]
        assert framing["content"][0]["type"] == "text"
        assert framing["subsections"][0]["title"] == "Masking"

    async def test_text_source_adds_note(self, engine):
        data = await run(engine, "get_rfc_structure", rfc=1234)

        assert data["_source"] == "text"
        assert data["_sourceNote"].startswith("Warning:")

    async def test_definitions_search(self, engine):
        data = await run(engine, "get_definitions", rfc=9999, term="FRAME")

        assert data["searchTerm"] == "FRAME"
        assert data["count"] == 1
        assert data["definitions"][0] == {
            "term": "Frame",
            "definition": "A unit of data sent over a connection.",
            "section": "section-1.1",
        }

    async def test_definitions_without_term(self, engine):
        data = await run(engine, "get_definitions", rfc=9999)

        assert "searchTerm" not in data
        assert data["count"] == 2

    async def test_dependencies(self, engine):
        data = await run(engine, "get_rfc_dependencies", rfc=9999)

        assert data["normative"] == [
            {
                "rfcNumber": 2119,
                "title": "Key words for use in RFCs to Indicate Requirement Levels",
                "anchor": "RFC2119",
            }
        ]
        assert [d["rfcNumber"] for d in data["informative"]] == [6455, None]
        assert "referencedBy" not in data

    async def test_dependencies_referenced_by_placeholder(self, engine):
        data = await run(engine, "get_rfc_dependencies", rfc=9999, includeReferencedBy=True)

        assert data["referencedBy"] == []
        assert "not implemented" in data["_note"]

    @pytest.mark.parametrize(
        "section, related",
        [
            ("2.1", [{"number": "2", "title": "Framing"}]),
            ("section-1", [{"number": "3", "title": "Security Considerations"}]),
            ("security", []),
        ],
    )
    async def test_related_sections(self, engine, section, related):
        data = await run(engine, "get_related_sections", rfc=9999, section=section)

        assert data["relatedSections"] == related

    async def test_related_sections_missing(self, engine):
        data = await run(engine, "get_related_sections", rfc=9999, section="9")

        assert data == {"error": "Section 9 not found"}


class TestRequirementTools:
    async def test_requirements_with_level_filter(self, engine):
        data = await run(engine, "get_requirements", rfc=9999, level="MUST NOT")

        assert data["filter"] == {"section": "all", "level": "MUST NOT"}
        assert data["stats"] == {"total": 2, "byLevel": {"MUST NOT": 2}}

    async def test_requirements_section_filter(self, engine):
        nested = await run(engine, "get_requirements", rfc=9999, section="2")
        flat = await run(engine, "get_requirements", rfc=9999, section="2", includeSubsections=False)

        assert nested["stats"]["total"] == 5
        assert flat["stats"]["total"] == 2
        assert flat["requirements"][0]["subject"] == "client"

    async def test_text_requirements_skip_components(self, engine):
        data = await run(engine, "get_requirements", rfc=1234)

        assert data["stats"]["total"] == 5
        assert all("subject" not in r for r in data["requirements"])
        assert data["_sourceNote"].startswith("Warning:")

    async def test_checklist(self, engine):
        data = await run(engine, "generate_checklist", rfc=9999, role="server")

        assert data["role"] == "server"
        assert data["stats"] == {"must": 2, "should": 1, "may": 0, "total": 3}
        assert data["markdown"].startswith("# RFC 9999 Implementation Checklist")

    async def test_checklist_sections(self, engine):
        data = await run(engine, "generate_checklist", rfc=9999, sections=["3"])

        assert data["stats"]["total"] == 1


class TestValidateStatement:
    async def test_conflicting_statement(self, engine):
        data = await run(
            engine,
            "validate_statement",
            rfc=9999,
            statement="A WebSocket client sends unmasked frames to the server",
        )

        assert data["isValid"] is False
        assert data["analysis"] == {"detectedLevel": None, "detectedSubject": "client"}
        assert "R-section-2-1" in [c["requirement"]["id"] for c in data["conflicts"]]
        assert data["matchingRequirements"]
        assert data["_source"] == "xml"

    async def test_unrelated_statement(self, engine):
        data = await run(engine, "validate_statement", rfc=9999, statement="Quantum entanglement")

        assert data["isValid"] is True
        assert data["matchingRequirements"] == []
        assert data["suggestions"][0].startswith("No matching requirements found")


class TestDispatch:
    async def test_unknown_tool(self, engine):
        with pytest.raises(ValueError, match="Unknown tool: nope"):
            await engine.execute("nope", {"rfc": 1})

    @pytest.mark.parametrize(
        "params",
        [
            {},
            {"rfc": 0},
            {"rfc": 100000},
            {"rfc": True},
            {"rfc": "abc"},
        ],
    )
    async def test_invalid_rfc_number(self, engine, params):
        with pytest.raises(ValidationError):
            await engine.execute("get_rfc_structure", params)

    async def test_missing_statement(self, engine):
        with pytest.raises(ValidationError):
            await engine.execute("validate_statement", {"rfc": 9999})
