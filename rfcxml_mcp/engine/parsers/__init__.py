"""Parsers producing the common Document Model.

- xml_parser: RFCXML v3 (and v2) via lxml
- text_parser: plain-text fallback for RFCs without RFCXML
"""

from .text_parser import parse_rfc_text
from .xml_parser import normalize_keyword_markup, parse_rfc_xml

__all__ = [
    "parse_rfc_xml",
    "parse_rfc_text",
    "normalize_keyword_markup",
]
