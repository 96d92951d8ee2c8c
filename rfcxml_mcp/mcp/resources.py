"""MCP resources served through resources/list and resources/read."""

import json

SCHEMA_RESOURCE_URI = "rfcxml://schema"

RESOURCE_DEFINITIONS: list[dict] = [
    {
        "uri": SCHEMA_RESOURCE_URI,
        "name": "RFCXML Schema Information",
        "description": "Structure and schema of the RFCXML v3 vocabulary",
        "mimeType": "application/json",
    }
]

SCHEMA_INFO = {
    "version": "v3",
    "spec": "RFC 7991 (superseded by rfc7991bis)",
    "documentation": "https://authors.ietf.org/rfcxml-vocabulary",
    "keyElements": {
        "bcp14": "Marks up BCP 14 keywords (MUST, SHOULD, MAY, ...)",
        "xref": "Internal and external cross-references",
        "reference": "Bibliographic reference",
        "section": "Section structure",
        "t": "Text paragraph",
        "dl": "Definition list",
        "sourcecode": "Source code",
    },
}


class UnknownResourceError(KeyError):
    """Raised for a resources/read URI that is not served."""


def read_resource(uri: str) -> dict:
    """Build the resources/read result for ``uri``.

    Raises:
        UnknownResourceError: The URI is not one of RESOURCE_DEFINITIONS.
    """
    if uri != SCHEMA_RESOURCE_URI:
        raise UnknownResourceError(uri)
    return {
        "contents": [
            {
                "uri": uri,
                "mimeType": "application/json",
                "text": json.dumps(SCHEMA_INFO, indent=2),
            }
        ]
    }
