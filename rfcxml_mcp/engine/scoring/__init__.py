"""Statement scoring for validate_statement.

Modules:
- constants: Weights, vocabularies and conflict tables
- statement_matcher: Keyword scoring and conflict detection
"""

from .statement_matcher import (
    ConflictResult,
    MatchResult,
    StatementMatch,
    actions_contradict,
    build_suggestions,
    detect_conflicts,
    extract_keywords,
    extract_requirement_level,
    extract_subject,
    match_statement,
    score_requirement_match,
)

__all__ = [
    "ConflictResult",
    "MatchResult",
    "StatementMatch",
    "actions_contradict",
    "build_suggestions",
    "detect_conflicts",
    "extract_keywords",
    "extract_requirement_level",
    "extract_subject",
    "match_statement",
    "score_requirement_match",
]
