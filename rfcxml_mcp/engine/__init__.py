"""RFC parsing, extraction and matching engine."""
