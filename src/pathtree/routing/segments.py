"""Segment descriptors and the pattern parser.

A pattern such as ``/wiki/{title}/{lang:en}`` is split on ``/`` and each
piece becomes one descriptor::

    "wiki"       -> Literal("wiki")
    "{title}"    -> Wildcard("title")
    "{lang:en}"  -> NamedFixed("lang", "en")

Runtime paths go through the same ``normalize_path`` so that patterns and
paths always agree on segment boundaries.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from pathtree.errors import ConfigurationError

# {name}, {name:literal}, and the reserved {+name} / {/name} modifier forms
_CAPTURE_RE = re.compile(r"^\{([+/])?([a-zA-Z0-9_]+)(?::([^}]+))?\}$")


@dataclass(frozen=True, slots=True)
class Literal:
    """Matches exactly ``text``."""

    text: str


@dataclass(frozen=True, slots=True)
class NamedFixed:
    """Matches exactly ``pattern`` and binds ``name`` to it."""

    name: str
    pattern: str


@dataclass(frozen=True, slots=True)
class Wildcard:
    """Matches any single non-empty segment and binds ``name`` to it."""

    name: str


type Segment = Literal | NamedFixed | Wildcard


def normalize_path(path: str | Sequence[str]) -> list[str]:
    """Split a path into segments.

    Strings lose a single leading ``/`` and are split on ``/``; lists and
    tuples are taken as already split::

        "/a/b"  -> ["a", "b"]
        "a/b"   -> ["a", "b"]
        "/a/"   -> ["a", ""]
        "/"     -> [""]
    """
    if isinstance(path, str):
        return path.removeprefix("/").split("/")
    if isinstance(path, (list, tuple)):
        return list(path)
    msg = f"Invalid path: {path!r}"
    raise ConfigurationError(msg)


def _parse_segment(bit: str) -> Segment:
    m = _CAPTURE_RE.match(bit)
    if m is None:
        if "{" in bit or "}" in bit:
            msg = (
                f"Malformed capture segment {bit!r}. "
                "Use {name} or {name:literal} with a name of letters, digits and '_'."
            )
            raise ConfigurationError(msg)
        return Literal(bit)

    modifier, name, pattern = m.groups()
    if modifier:
        msg = f"Pattern modifiers are not supported: {bit!r}"
        raise ConfigurationError(msg)
    if pattern is not None:
        return NamedFixed(name, pattern)
    return Wildcard(name)


def parse_pattern(pattern: str | Sequence[str | Segment]) -> list[Segment]:
    """Parse a path pattern into segment descriptors.

    Raises ``ConfigurationError`` on malformed captures and on the
    ``{+name}`` / ``{/name}`` modifier forms.
    """
    if isinstance(pattern, (list, tuple)):
        bits = list(pattern)
    else:
        bits = normalize_path(pattern)

    # "{/name}" is cut in two by the split; glue it back together
    i = 0
    while i < len(bits) - 1:
        bit, following = bits[i], bits[i + 1]
        if bit == "{" and isinstance(following, str) and following.endswith("}"):
            bits[i : i + 2] = ["{/" + following]
        i += 1

    return [_parse_segment(bit) if isinstance(bit, str) else bit for bit in bits]


def format_segment(segment: Segment) -> str:
    """Render a descriptor back into pattern syntax."""
    match segment:
        case Literal(text):
            return text
        case NamedFixed(name, pattern):
            return f"{{{name}:{pattern}}}"
        case Wildcard(name):
            return f"{{{name}}}"
