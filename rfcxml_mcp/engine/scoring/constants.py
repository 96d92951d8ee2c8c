"""Constants for statement matching and conflict detection.

This module contains the vocabularies and tables used by the statement matcher:
- Keyword weights and matching limits
- Stop words, technical terms and actor (subject) terms
- Conflicting requirement level table
- Verb negation pairs for semantic conflicts
"""

from ...models.enums import RequirementLevel

# ---------------------------------------------------------------------------
# Weights and limits
# ---------------------------------------------------------------------------
REGULAR_TERM_WEIGHT = 1
TECHNICAL_TERM_WEIGHT = 2
SUBJECT_TERM_WEIGHT = 3
SUBJECT_MATCH_BONUS = 5
LEVEL_MATCH_BONUS = 3

MIN_KEYWORD_LENGTH = 3
MIN_OVERLAP_FOR_CONFLICT = 2
# Statements with this many keywords or fewer skip the overlap check
SHORT_STATEMENT_THRESHOLD = 3
DEFAULT_MAX_RESULTS = 10
# Only verbs this close to the start of a forbidden action count as its primary verb
PRIMARY_VERB_WINDOW = 20

# ---------------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------------
STOP_WORDS = frozenset(
    {
        "the",
        "this",
        "that",
        "with",
        "from",
        "have",
        "been",
        "will",
        "when",
        "where",
        "what",
        "which",
        "there",
        "their",
        "they",
        "them",
        "than",
        "then",
        "each",
        "other",
        "some",
        "such",
        "only",
        "also",
        "more",
        "most",
        "case",
        "does",
        "into",
        "over",
        "used",
        "same",
        "after",
        "before",
        "about",
        "being",
        "could",
        "would",
        "should",
    }
)

TECHNICAL_TERMS = frozenset(
    {
        # Protocol
        "client",
        "server",
        "sender",
        "receiver",
        "endpoint",
        "connection",
        "request",
        "response",
        "message",
        "packet",
        "segment",
        "frame",
        "header",
        "payload",
        "handshake",
        # Transport
        "port",
        "socket",
        "stream",
        "timeout",
        "retransmit",
        "acknowledgment",
        "sequence",
        "congestion",
        # HTTP
        "method",
        "status",
        "resource",
        "cache",
        "proxy",
        "origin",
        # Security
        "authentication",
        "authorization",
        "certificate",
        "encryption",
        "signature",
        "token",
        # General
        "implementation",
        "specification",
        "protocol",
        "algorithm",
        "parameter",
        "field",
        "value",
        "error",
        "failure",
        "valid",
        "invalid",
    }
)

# Actors a requirement can be addressed to
SUBJECT_TERMS = frozenset(
    {
        "client",
        "server",
        "sender",
        "receiver",
        "endpoint",
        "implementation",
        "peer",
        "host",
        "proxy",
        "application",
        "user",
        "agent",
    }
)

# ---------------------------------------------------------------------------
# Conflict tables
# ---------------------------------------------------------------------------
_L = RequirementLevel

CONFLICTING_LEVELS: dict[RequirementLevel, frozenset[RequirementLevel]] = {
    _L.MAY: frozenset({_L.MUST, _L.MUST_NOT, _L.SHALL, _L.SHALL_NOT}),
    _L.OPTIONAL: frozenset({_L.MUST, _L.MUST_NOT, _L.REQUIRED, _L.SHALL, _L.SHALL_NOT}),
    _L.SHOULD: frozenset({_L.MUST_NOT, _L.SHALL_NOT}),
    _L.SHOULD_NOT: frozenset({_L.MUST, _L.SHALL, _L.REQUIRED}),
    _L.RECOMMENDED: frozenset({_L.MUST_NOT, _L.SHALL_NOT}),
    _L.NOT_RECOMMENDED: frozenset({_L.MUST, _L.SHALL, _L.REQUIRED}),
}

MANDATORY_LEVELS = frozenset({_L.MUST, _L.SHALL, _L.REQUIRED})
PROHIBITIVE_LEVELS = frozenset({_L.MUST_NOT, _L.SHALL_NOT})

# (positive verb, surface forms that negate or oppose it)
NEGATION_PAIRS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("mask", ("unmask", "unmasked", "not mask", "without mask", "without masking")),
    (
        "encrypt",
        ("unencrypt", "unencrypted", "not encrypt", "without encrypt", "without encryption"),
    ),
    (
        "validate",
        (
            "not validate",
            "skip validation",
            "skips validation",
            "without validation",
            "no validation",
        ),
    ),
    ("verify", ("not verify", "unverified", "without verification", "skip verification")),
    (
        "authenticate",
        (
            "unauthenticated",
            "not authenticate",
            "without authentication",
            "skip authentication",
        ),
    ),
    ("send", ("not send", "never send", "block")),
    ("receive", ("not receive", "reject", "ignore")),
    ("accept", ("reject", "not accept", "refuse")),
    ("include", ("exclude", "omit", "not include")),
    ("support", ("not support", "unsupported")),
    ("allow", ("disallow", "not allow", "forbid", "prohibit")),
    ("enable", ("disable", "not enable")),
    ("close", ("not close", "keep open")),
    ("open", ("not open", "close")),
)
