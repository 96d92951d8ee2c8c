"""Tests for statement scoring and conflict detection."""

import pytest

from rfcxml_mcp.engine.core.document import Requirement
from rfcxml_mcp.engine.scoring import (
    actions_contradict,
    build_suggestions,
    detect_conflicts,
    extract_keywords,
    extract_requirement_level,
    extract_subject,
    match_statement,
)
from rfcxml_mcp.engine.scoring.statement_matcher import primary_forbidden_verb, requirement_subject
from rfcxml_mcp.models.enums import RequirementLevel


def make_requirement(id, level, text, subject=None, action=None) -> Requirement:
    return Requirement(
        id=id,
        level=level,
        text=text,
        section="5.1",
        section_title="Overview",
        full_context=text,
        subject=subject,
        action=action,
    )


@pytest.fixture
def client_must_mask():
    return make_requirement(
        "R-5.1-1",
        RequirementLevel.MUST,
        "A client MUST mask all frames that it sends to the server.",
        subject="client",
        action="mask all frames that it sends to the server",
    )


@pytest.fixture
def server_must_not_mask():
    return make_requirement(
        "R-5.1-2",
        RequirementLevel.MUST_NOT,
        "A server MUST NOT mask any frames that it sends to the client.",
        subject="server",
        action="mask any frames that it sends to the client",
    )


class TestMaskingConflicts:
    """WebSocket masking rules: mandated and forbidden actions"""

    def test_unmasked_frames_contradict_must_mask(self, client_must_mask):
        conflicts = detect_conflicts("A WebSocket client sends unmasked frames", [client_must_mask])

        assert len(conflicts) == 1
        assert conflicts[0].requirement is client_must_mask
        assert "contradicts" in conflicts[0].reason

    def test_masking_client_complies(self, client_must_mask):
        conflicts = detect_conflicts("The client masks all frames before sending", [client_must_mask])

        assert conflicts == []

    def test_masking_server_violates_must_not(self, server_must_not_mask):
        conflicts = detect_conflicts("The server masks all frames", [server_must_not_mask])

        assert len(conflicts) == 1
        assert conflicts[0].requirement_level == RequirementLevel.MUST_NOT
        assert "forbids" in conflicts[0].reason

    def test_unmasked_server_complies(self, server_must_not_mask):
        assert detect_conflicts("The server sends unmasked data", [server_must_not_mask]) == []

    def test_other_actor_is_not_checked(self, client_must_mask):
        assert detect_conflicts("The server sends unmasked frames", [client_must_mask]) == []

    def test_statement_without_actor_has_no_conflicts(self, client_must_mask):
        assert detect_conflicts("Frames are sent unmasked", [client_must_mask]) == []


class TestLevelConflicts:
    def test_may_against_must_not(self, server_must_not_mask):
        conflicts = detect_conflicts("The server MAY mask frames", [server_must_not_mask])

        assert len(conflicts) == 1
        assert conflicts[0].reason == 'Statement uses "MAY" but requirement uses "MUST NOT"'
        assert conflicts[0].statement_level == RequirementLevel.MAY

    def test_matching_level_is_not_a_conflict(self, client_must_mask):
        assert detect_conflicts("The client MUST mask frames", [client_must_mask]) == []


class TestScoring:
    def test_keyword_weights(self):
        keywords = extract_keywords("The client masks the frame header")

        assert keywords == {"client": 3, "masks": 1, "frame": 2, "header": 2}

    def test_short_and_stop_words_dropped(self):
        assert extract_keywords("it is to be used with that") == {}

    def test_level_and_subject_detection(self):
        assert extract_requirement_level("clients must not send it") == RequirementLevel.MUST_NOT
        assert extract_requirement_level("clients send it") is None
        assert extract_subject("Every proxy forwards it") == "proxy"
        assert extract_subject("Nobody does") is None

    def test_requirement_subject_reduced_to_actor(self):
        websocket = make_requirement("R-1", RequirementLevel.MUST, "x", subject="websocket client")
        plural = make_requirement("R-2", RequirementLevel.MUST, "x", subject="clients")
        unparsed = make_requirement("R-3", RequirementLevel.MUST, "The sender MUST retry.")

        assert requirement_subject(websocket) == "client"
        assert requirement_subject(plural) == "client"
        assert requirement_subject(unparsed) == "sender"

    def test_matches_sorted_and_zero_scores_dropped(self, client_must_mask, server_must_not_mask):
        unrelated = make_requirement("R-9", RequirementLevel.SHOULD, "Timers SHOULD be configurable.")

        result = match_statement(
            "The client masks all frames", [server_must_not_mask, unrelated, client_must_mask]
        )

        assert [m.requirement.id for m in result.matches] == ["R-5.1-1", "R-5.1-2"]
        assert result.matches[0].score == 10
        assert result.matches[0].matched_keywords == ["client", "all", "frames"]
        assert result.matches[0].subject_match
        assert result.statement_subject == "client"
        assert result.statement_level is None

    def test_level_bonus(self, client_must_mask):
        plain = match_statement("The client masks frames", [client_must_mask]).matches[0]
        with_level = match_statement("The client MUST mask frames", [client_must_mask]).matches[0]

        assert with_level.level_match
        assert with_level.score > plain.score

    def test_max_results(self, client_must_mask):
        requirements = [client_must_mask] * 15

        assert len(match_statement("client", requirements).matches) == 10
        assert len(match_statement("client", requirements, max_results=3).matches) == 3

    def test_match_to_dict(self, client_must_mask):
        result = match_statement("The client masks all frames", [client_must_mask])
        data = result.matches[0].to_dict()

        assert data["id"] == "R-5.1-1"
        assert data["score"] == 10
        assert data["matchedKeywords"] == ["client", "all", "frames"]


class TestNegationHelpers:
    def test_actions_contradict_both_directions(self):
        assert actions_contradict("sends unmasked frames", "mask all frames")
        assert actions_contradict("mask all frames", "does not mask frames")
        assert not actions_contradict("masks frames", "mask all frames")

    def test_primary_verb_is_the_earliest(self):
        pair = primary_forbidden_verb("mask any frames that it sends to the client")

        assert pair[0] == "mask"

    def test_verbs_far_from_the_start_are_ignored(self):
        action = "use a frame size that is larger than the limit and then close it"

        assert primary_forbidden_verb(action) is None


class TestSuggestions:
    def test_no_matches(self):
        result = match_statement("Completely unrelated words", [])

        assert build_suggestions(result)[0].startswith("No matching requirements found")

    def test_level_without_actor(self, client_must_mask):
        result = match_statement("Frames MUST be masked", [client_must_mask])

        assert any("names no actor" in s for s in build_suggestions(result))

    def test_conflicts_reported(self, client_must_mask):
        result = match_statement("The client sends unmasked frames", [client_must_mask])

        assert build_suggestions(result) == [
            "1 potential conflict(s) found. Review the cited requirements and their "
            "sections before relying on this behavior."
        ]
