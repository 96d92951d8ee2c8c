"""Statement matching and conflict detection for validate_statement.

Scores requirements against a free-form implementation statement using
weighted keyword overlap, then looks for two kinds of conflict between the
statement and requirements addressed to the same actor:

- Level conflicts: the statement relaxes or inverts the requirement level
  ("MAY send" against "MUST NOT send").
- Semantic conflicts: the statement negates a mandated action ("sends
  unmasked frames" against "MUST mask") or performs a forbidden one.

Everything here is keyword heuristics; results are advisory.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from ...models.enums import RequirementLevel
from ..core.document import Requirement
from ..core.patterns import create_requirement_regex, normalize_level
from .constants import (
    CONFLICTING_LEVELS,
    DEFAULT_MAX_RESULTS,
    LEVEL_MATCH_BONUS,
    MANDATORY_LEVELS,
    MIN_KEYWORD_LENGTH,
    MIN_OVERLAP_FOR_CONFLICT,
    NEGATION_PAIRS,
    PRIMARY_VERB_WINDOW,
    PROHIBITIVE_LEVELS,
    REGULAR_TERM_WEIGHT,
    SHORT_STATEMENT_THRESHOLD,
    STOP_WORDS,
    SUBJECT_MATCH_BONUS,
    SUBJECT_TERM_WEIGHT,
    SUBJECT_TERMS,
    TECHNICAL_TERM_WEIGHT,
    TECHNICAL_TERMS,
)

logger = logging.getLogger(__name__)

NegationPair = tuple[str, tuple[str, ...]]


@dataclass
class MatchResult:
    """A requirement scored against a statement."""

    requirement: Requirement
    score: int
    matched_keywords: list[str] = field(default_factory=list)
    subject_match: bool = False
    level_match: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.requirement.to_dict(),
            "score": self.score,
            "matchedKeywords": self.matched_keywords,
        }


@dataclass
class ConflictResult:
    """A requirement the statement contradicts."""

    requirement: Requirement
    reason: str
    statement_level: RequirementLevel | None
    requirement_level: RequirementLevel

    def to_dict(self) -> dict[str, Any]:
        return {
            "requirement": self.requirement.to_dict(),
            "reason": self.reason,
            "statementLevel": self.statement_level,
            "requirementLevel": self.requirement_level,
        }


@dataclass
class StatementMatch:
    matches: list[MatchResult]
    conflicts: list[ConflictResult]
    statement_level: RequirementLevel | None
    statement_subject: str | None


# ============ KEYWORDS ============


def extract_keywords(text: str) -> dict[str, int]:
    """Extract weighted keywords from a statement.

    Tokens are lowercased and stripped of punctuation; tokens shorter than
    three characters and stop words are dropped. Each occurrence adds the
    token's weight (actor terms 3, technical terms 2, anything else 1).

    Returns:
        Mapping of keyword to accumulated weight, in order of first use.
    """
    keywords: dict[str, int] = {}
    for word in text.lower().split():
        cleaned = "".join(ch for ch in word if ch.isascii() and ch.isalnum())
        if len(cleaned) < MIN_KEYWORD_LENGTH or cleaned in STOP_WORDS:
            continue

        if cleaned in SUBJECT_TERMS:
            weight = SUBJECT_TERM_WEIGHT
        elif cleaned in TECHNICAL_TERMS:
            weight = TECHNICAL_TERM_WEIGHT
        else:
            weight = REGULAR_TERM_WEIGHT
        keywords[cleaned] = keywords.get(cleaned, 0) + weight
    return keywords


def extract_requirement_level(text: str) -> RequirementLevel | None:
    """Detect the first requirement keyword in ``text``, ignoring case."""
    match = create_requirement_regex().search(text.upper())
    return normalize_level(match.group(1)) if match else None


def extract_subject(text: str) -> str | None:
    """Return the first actor term ("client", "server", ...) in ``text``."""
    for word in text.lower().split():
        cleaned = "".join(ch for ch in word if "a" <= ch <= "z")
        if cleaned in SUBJECT_TERMS:
            return cleaned
    return None


def requirement_subject(requirement: Requirement) -> str | None:
    """Actor a requirement is addressed to.

    A parsed subject phrase such as "websocket client" or "clients" is
    reduced to its actor term so it compares equal to statement subjects.
    Without a parsed subject the requirement text is scanned instead.
    """
    if not requirement.subject:
        return extract_subject(requirement.text)

    subject = requirement.subject.lower()
    for word in reversed(subject.split()):
        if word in SUBJECT_TERMS:
            return word
        if word.endswith("s") and word[:-1] in SUBJECT_TERMS:
            return word[:-1]
    return subject


# ============ SCORING ============


def score_requirement_match(
    requirement: Requirement,
    statement_keywords: dict[str, int],
    statement_subject: str | None,
    statement_level: RequirementLevel | None,
) -> MatchResult:
    haystack = f"{requirement.text} {requirement.full_context or ''}".lower()

    matched = [keyword for keyword in statement_keywords if keyword in haystack]
    score = sum(statement_keywords[keyword] for keyword in matched)

    subject_match = statement_subject is not None and (
        requirement_subject(requirement) == statement_subject
    )
    if subject_match:
        score += SUBJECT_MATCH_BONUS

    level_match = statement_level is not None and requirement.level == statement_level
    if level_match:
        score += LEVEL_MATCH_BONUS

    return MatchResult(
        requirement=requirement,
        score=score,
        matched_keywords=matched,
        subject_match=subject_match,
        level_match=level_match,
    )


# ============ CONFLICTS ============


def has_negative_action(text: str, pair: NegationPair) -> bool:
    lower = text.lower()
    return any(negative in lower for negative in pair[1])


def has_positive_action(text: str, pair: NegationPair) -> bool:
    """True when ``text`` uses the positive verb and none of its negations.

    "masks" counts as positive, "unmasked" does not.
    """
    if has_negative_action(text, pair):
        return False
    return pair[0] in text.lower()


def actions_contradict(first: str, second: str) -> bool:
    """True when one text performs an action the other negates."""
    for pair in NEGATION_PAIRS:
        if has_positive_action(first, pair) and has_negative_action(second, pair):
            return True
        if has_negative_action(first, pair) and has_positive_action(second, pair):
            return True
    return False


def primary_forbidden_verb(forbidden_action: str) -> NegationPair | None:
    """Pick the negation pair whose verb opens the forbidden action.

    Verbs further than a few words in are incidental mentions
    ("mask any frames that it sends" forbids masking, not sending).
    """
    lower = forbidden_action.lower()
    best: NegationPair | None = None
    best_index = PRIMARY_VERB_WINDOW + 1
    for pair in NEGATION_PAIRS:
        index = lower.find(pair[0])
        if index != -1 and index < best_index:
            best, best_index = pair, index
    return best


def _strip_prohibition(action: str) -> str:
    lower = action.lower()
    for keyword in ("must not", "shall not"):
        while keyword in lower:
            index = lower.index(keyword)
            action = action[:index] + action[index + len(keyword) :]
            lower = action.lower()
    return action.strip()


def detect_conflicts(statement: str, requirements: list[Requirement]) -> list[ConflictResult]:
    """Find requirements addressed to the statement's actor that it contradicts.

    Without a detectable actor in the statement no conflict can be
    attributed and the result is empty.
    """
    statement_subject = extract_subject(statement)
    if statement_subject is None:
        return []

    statement_level = extract_requirement_level(statement)
    statement_keywords = extract_keywords(statement)
    statement_lower = statement.lower()
    conflicting_levels = CONFLICTING_LEVELS.get(statement_level, frozenset())

    conflicts: list[ConflictResult] = []
    for req in requirements:
        if requirement_subject(req) != statement_subject:
            continue

        if req.level in conflicting_levels:
            req_text = req.text.lower()
            overlap = sum(1 for keyword in statement_keywords if keyword in req_text)
            if (
                overlap >= MIN_OVERLAP_FOR_CONFLICT
                or len(statement_keywords) <= SHORT_STATEMENT_THRESHOLD
            ):
                conflicts.append(
                    ConflictResult(
                        requirement=req,
                        reason=f'Statement uses "{statement_level}" but requirement uses "{req.level}"',
                        statement_level=statement_level,
                        requirement_level=req.level,
                    )
                )
                continue

        action = req.action or req.text

        if req.level in MANDATORY_LEVELS and actions_contradict(statement_lower, action):
            conflicts.append(
                ConflictResult(
                    requirement=req,
                    reason=f'Statement action contradicts "{req.level}" requirement: "{action}"',
                    statement_level=statement_level,
                    requirement_level=req.level,
                )
            )
            continue

        if req.level in PROHIBITIVE_LEVELS:
            forbidden = _strip_prohibition(action)
            pair = primary_forbidden_verb(forbidden)
            if pair is not None and has_positive_action(statement_lower, pair):
                conflicts.append(
                    ConflictResult(
                        requirement=req,
                        reason=f'Statement does what "{req.level}" forbids: "{forbidden}"',
                        statement_level=statement_level,
                        requirement_level=req.level,
                    )
                )

    return conflicts


# ============ ENTRY POINT ============


def match_statement(
    statement: str,
    requirements: list[Requirement],
    max_results: int = DEFAULT_MAX_RESULTS,
) -> StatementMatch:
    """Score requirements against a statement and detect conflicts.

    Args:
        statement: Free-form implementation statement.
        requirements: Candidate requirements (usually every requirement of an RFC).
        max_results: Maximum number of matches returned.

    Returns:
        StatementMatch with matches sorted by descending score (zero scores
        dropped), conflicts, and the level and subject detected in the statement.
    """
    statement_keywords = extract_keywords(statement)
    statement_subject = extract_subject(statement)
    statement_level = extract_requirement_level(statement)

    scored = [
        score_requirement_match(req, statement_keywords, statement_subject, statement_level)
        for req in requirements
    ]
    matches = sorted((m for m in scored if m.score > 0), key=lambda m: m.score, reverse=True)
    conflicts = detect_conflicts(statement, requirements)

    logger.debug(
        f"Statement matched {len(matches)} of {len(requirements)} requirements, "
        f"{len(conflicts)} conflicts (subject={statement_subject}, level={statement_level})"
    )

    return StatementMatch(
        matches=matches[:max_results],
        conflicts=conflicts,
        statement_level=statement_level,
        statement_subject=statement_subject,
    )


def build_suggestions(result: StatementMatch) -> list[str]:
    """Advisory hints for refining a statement. Empty when nothing stands out."""
    suggestions = []
    if not result.matches:
        suggestions.append(
            "No matching requirements found. Try rephrasing the statement with "
            "terms used in the RFC."
        )
    if result.statement_level is not None and result.statement_subject is None:
        suggestions.append(
            f'The statement uses "{result.statement_level}" but names no actor. '
            "Mention who performs the action (client, server, sender, ...) to "
            "enable conflict detection."
        )
    if result.conflicts:
        suggestions.append(
            f"{len(result.conflicts)} potential conflict(s) found. Review the cited "
            "requirements and their sections before relying on this behavior."
        )
    return suggestions
