"""Split a command line into its keyword and raw fields."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .types import CommandKind, CommandPayload

# Built once at import; read-only afterwards.
KEYWORDS: Mapping[str, CommandKind] = MappingProxyType({kind.value: kind for kind in CommandKind})


def tokenize(line: str) -> CommandPayload | None:
    """Return the command payload for one line, or None for a blank line.

    Raises:
        ValueError: if the first word is not a known command keyword
    """
    words = line.split()
    if not words:
        return None
    kind = KEYWORDS.get(words[0])
    if kind is None:
        raise ValueError(f"unknown command keyword: {words[0]!r}")
    return {"kind": kind, "fields": words[1:]}
