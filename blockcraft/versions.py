"""Protocol versions and picking one from a server's status response."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Mapping
from enum import Enum
from typing import Any


class ProtocolVersion(Enum):
    """Supported game versions, valued by their protocol number."""

    MINECRAFT_1_10_2 = 210
    MINECRAFT_1_11_0 = 315
    MINECRAFT_1_11_2 = 316
    MINECRAFT_1_12_0 = 335
    MINECRAFT_1_12_1 = 338
    MINECRAFT_1_12_2 = 340
    MINECRAFT_1_13_2 = 404
    MINECRAFT_1_19_3 = 761


DEFAULT_VERSION = ProtocolVersion.MINECRAFT_1_19_3

_ORDERED = sorted(ProtocolVersion, key=lambda version: version.value)
_NUMBERS = [version.value for version in _ORDERED]


def version_for_protocol(protocol: int) -> ProtocolVersion | None:
    """Return the first supported version whose protocol is at least ``protocol``.

    Returns None when the protocol is newer than every supported version.
    """
    position = bisect_left(_NUMBERS, protocol)
    if position == len(_ORDERED):
        return None
    return _ORDERED[position]


def version_from_ping(node: Any) -> ProtocolVersion | None:
    """Pick the version matching a parsed status response, or None."""
    if not isinstance(node, Mapping):
        return None
    version_node = node.get("version")
    if not isinstance(version_node, Mapping):
        return None
    protocol = version_node.get("protocol")
    if not isinstance(protocol, int) or isinstance(protocol, bool):
        return None
    return version_for_protocol(protocol)