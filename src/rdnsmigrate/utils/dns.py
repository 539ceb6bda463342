from __future__ import annotations

from typing import Any, Dict


WILDCARD_PREFIX = "*."
# Route 53 and the legacy store both keep "*" as the octal escape \052.
ESCAPED_WILDCARD_PREFIX = "\\052."


def is_escaped_wildcard(fqdn: str) -> bool:
    return fqdn.startswith(ESCAPED_WILDCARD_PREFIX)


def bare_name(fqdn: str) -> str:
    """Return the part of ``fqdn`` after the first ``\\052.`` marker.

    ``"\\052.example.com"`` gives ``"example.com"``. Names that do not
    start with the marker are rejected.
    """
    if not is_escaped_wildcard(fqdn):
        raise ValueError(f"not an escaped wildcard name: {fqdn!r}")
    return fqdn.split(ESCAPED_WILDCARD_PREFIX)[1]


def strip_trailing_dot(name: str) -> str:
    if name.endswith("."):
        return name[:-1]
    return name


def matches_wildcard_of(record_name: str, bare: str) -> bool:
    name = strip_trailing_dot(record_name)
    return name in (WILDCARD_PREFIX + bare, ESCAPED_WILDCARD_PREFIX + bare)


def rename_record_set(record_set: Dict[str, Any], name: str) -> Dict[str, Any]:
    renamed = dict(record_set)
    renamed["Name"] = name
    return renamed
