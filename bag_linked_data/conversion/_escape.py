"""Literal escaping for markup embedded in a double-quoted literal."""

from __future__ import annotations

QUOTE = '"'
ESCAPED_QUOTE = '\\"'


def escape_literal(raw: str) -> str:
    """Precede every double quote in ``raw`` with a backslash.

    Only the quote character is escaped, so markup cannot terminate the
    enclosing literal. Backslashes already present pass through unchanged.

    >>> escape_literal('<gml:Point srsName="EPSG:4326"/>')
    '<gml:Point srsName=\\\\"EPSG:4326\\\\"/>'
    """
    return raw.replace(QUOTE, ESCAPED_QUOTE)
