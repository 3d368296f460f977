"""One level of the routing tree.

A node fans out either to literal children, keyed by exact segment text,
or to a single wildcard child, never both. The empty-string key is the
one exception: it marks a trailing slash and may sit next to a wildcard.

Every captured segment on one level shares the level's capture name, so
``{lang:en}`` and ``{lang:de}`` may be siblings but ``{lang:en}`` and
``{locale:de}`` may not.
"""

from typing import Any

from pathtree.errors import ConfigurationError
from pathtree.routing.segments import Literal, NamedFixed, Segment, Wildcard, format_segment


class Node:
    """A vertex of the routing tree.

    Published nodes are never written to: the router copies a node before
    changing it and shares everything it does not touch.
    """

    __slots__ = ("capture_name", "children", "fixed_keys", "registered", "value", "wildcard")

    def __init__(self, value: Any = None) -> None:
        # Terminal payload for a path ending on this node
        self.value = value
        # Descriptors of the registration that set value
        self.registered: tuple[Segment, ...] | None = None
        # Literal children: "users" -> node, "" -> trailing slash
        self.children: dict[str, Node] = {}
        # Literal keys registered as {name:literal}; they bind capture_name
        self.fixed_keys: set[str] = set()
        # Single wildcard child
        self.wildcard: Node | None = None
        # Parameter bound by the wildcard and the fixed keys
        self.capture_name: str | None = None

    def __repr__(self) -> str:
        return (
            f"Node(value={self.value!r}, keys={sorted(self.children)!r}, "
            f"wildcard={self.wildcard is not None}, capture_name={self.capture_name!r})"
        )

    # -- construction -------------------------------------------------------

    def _check_name(self, name: str) -> None:
        if self.capture_name is not None and self.capture_name != name:
            msg = (
                f"Captured pattern parameter {name!r} does not match "
                f"existing name {self.capture_name!r}"
            )
            raise ConfigurationError(msg)

    def _check_literal(self, segment: Segment, key: str) -> None:
        if key and self.wildcard is not None:
            msg = (
                f"Can't register {format_segment(segment)!r} next to the wildcard "
                f"{{{self.capture_name}}} on the same path level"
            )
            raise ConfigurationError(msg)

    def claim(self, segment: NamedFixed) -> None:
        """Mark an existing literal key as captured under the segment's name."""
        self._check_name(segment.name)
        self.capture_name = segment.name
        self.fixed_keys.add(segment.pattern)

    def set(self, segment: Segment, child: "Node") -> None:
        """Attach ``child`` under ``segment``, replacing any existing entry.

        Raises ``ConfigurationError`` when the segment would mix literal and
        wildcard children or conflicts with the level's capture name.
        """
        match segment:
            case Literal(text):
                self._check_literal(segment, text)
                self.children[text] = child
            case NamedFixed(_, pattern):
                self._check_literal(segment, pattern)
                self.claim(segment)
                self.children[pattern] = child
            case Wildcard(name):
                literal_keys = sorted(key for key in self.children if key)
                if literal_keys:
                    msg = (
                        f"Can't register {format_segment(segment)!r} in a path level "
                        f"that already has literal segments {literal_keys!r}"
                    )
                    raise ConfigurationError(msg)
                self._check_name(name)
                self.capture_name = name
                self.wildcard = child

    def child(self, segment: Segment) -> "Node | None":
        """Structural lookup by descriptor, used only while building the tree."""
        match segment:
            case Literal(text):
                return self.children.get(text)
            case NamedFixed(name, pattern):
                if self.capture_name not in (None, name):
                    return None
                return self.children.get(pattern)
            case Wildcard(name):
                if name != self.capture_name:
                    return None
                return self.wildcard
        return None

    def relink(self, segment: Segment, child: "Node") -> None:
        """Point the existing slot for ``segment`` at ``child`` without re-validating."""
        match segment:
            case Literal(key) | NamedFixed(_, key):
                self.children[key] = child
            case Wildcard():
                self.wildcard = child

    def unmark(self, key: str) -> None:
        """Stop binding the capture name for ``key``."""
        self.fixed_keys.discard(key)
        if not self.fixed_keys and self.wildcard is None:
            self.capture_name = None

    def discard(self, segment: Segment) -> None:
        """Drop the child stored under ``segment``."""
        match segment:
            case Literal(key) | NamedFixed(_, key):
                self.children.pop(key, None)
                self.unmark(key)
            case Wildcard():
                self.wildcard = None
                if not self.fixed_keys:
                    self.capture_name = None

    def copy(self) -> "Node":
        """Copy this node alone. Children are shared with the original."""
        clone = Node(self.value)
        clone.registered = self.registered
        clone.capture_name = self.capture_name
        clone.fixed_keys = set(self.fixed_keys)
        clone.children = dict(self.children)
        clone.wildcard = self.wildcard
        return clone

    # -- resolution ---------------------------------------------------------

    def get(self, segment: str, params: dict[str, Any]) -> "Node | None":
        """Match one runtime path segment, binding the capture name on success.

        An empty segment only matches a literal ``""`` entry, never the
        wildcard, and binds nothing.
        """
        if not segment:
            return self.children.get("")

        child = self.children.get(segment)
        if child is not None:
            if segment in self.fixed_keys:
                params[self.capture_name] = segment
            return child

        if self.wildcard is not None and self.capture_name is not None:
            params[self.capture_name] = segment
        return self.wildcard

    def has_children(self) -> bool:
        return bool(self.children) or self.wildcard is not None

    def keys(self) -> list[str]:
        """Sorted literal child names for directory listings.

        ``""`` is listed only when it leads somewhere (``/double//slash``).
        Wildcard levels have no listing.
        """
        if self.wildcard is not None:
            return []
        return sorted(key for key, node in self.children.items() if key or node.has_children())
