"""Router with tree-based path matching.

Specs are merged into a shared prefix tree: registrations with a common
prefix walk the same nodes and only graft new structure where they
diverge. Lookups walk the tree one segment at a time and collect captured
parameters.

Writers never touch the published tree. ``add_spec`` and ``del_spec``
work on a draft under a lock: each node on a changed path is copied before
it is written, untouched subtrees stay shared, and the new root is
published with a single assignment. Concurrent lookups always see a
complete tree and a failed registration leaves no trace.
"""

import logging
import threading
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from pathtree.config import RouterConfig
from pathtree.errors import ConfigurationError
from pathtree.routing.node import Node
from pathtree.routing.route import PathMatch
from pathtree.routing.segments import (
    NamedFixed,
    Segment,
    format_segment,
    normalize_path,
    parse_pattern,
)

logger = logging.getLogger("pathtree.router")


def _spec_paths(spec: Any) -> Mapping[str, Any]:
    if spec is None:
        msg = "No spec given."
        raise ConfigurationError(msg)
    if isinstance(spec, Mapping):
        paths = spec.get("paths")
    else:
        paths = getattr(spec, "paths", None)
    if not isinstance(paths, Mapping):
        msg = f"No paths defined in spec {spec!r}."
        raise ConfigurationError(msg)
    return paths


def _build_tree(segments: Sequence[Segment], start: int, value: Any) -> Node:
    """Build a fresh chain of nodes for ``segments[start:]`` ending in ``value``."""
    node = Node(value)
    node.registered = tuple(segments)
    for segment in reversed(segments[start:]):
        parent = Node()
        parent.set(segment, node)
        node = parent
    return node


def _captures_through(node: Node, depth: int) -> bool:
    """True if a registration below ``node`` used ``{name:literal}`` at ``depth``."""
    stack = [node]
    while stack:
        current = stack.pop()
        registered = current.registered
        if registered is not None and isinstance(registered[depth], NamedFixed):
            return True
        stack.extend(current.children.values())
        if current.wildcard is not None:
            stack.append(current.wildcard)
    return False


class _Draft:
    """Writable view of a published tree.

    Nodes are copied on first write; everything else is shared with the
    published tree, so one pattern costs O(depth).
    """

    __slots__ = ("_owned", "root")

    def __init__(self, root: Node) -> None:
        self._owned: dict[int, Node] = {}
        self.root = self._own(root)

    def _own(self, node: Node) -> Node:
        if self._owned.get(id(node)) is node:
            return node
        clone = node.copy()
        self._owned[id(clone)] = clone
        return clone

    def _descend(self, parent: Node, segment: Segment, child: Node) -> Node:
        owned = self._own(child)
        if owned is not child:
            parent.relink(segment, owned)
        return owned

    def extend(self, segments: Sequence[Segment], value: Any) -> bool:
        """Walk existing nodes along ``segments`` and graft the rest.

        Returns True when an existing terminal value was overwritten.
        """
        node = self.root
        trail: list[tuple[Node, Segment]] = []
        for i, segment in enumerate(segments):
            child = node.child(segment)
            if child is None:
                # Extension point
                node.set(segment, _build_tree(segments, i + 1, value))
                return False
            if isinstance(segment, NamedFixed):
                node.claim(segment)
            trail.append((node, segment))
            node = self._descend(node, segment, child)

        previous = node.registered
        node.value = value
        node.registered = tuple(segments)
        if previous is None:
            return False
        self._release(trail, previous)
        return True

    def remove(self, segments: Sequence[Segment]) -> bool:
        """Clear the value registered for ``segments`` and prune dead branches."""
        node = self.root
        path: list[Node] = []
        for segment in segments:
            found = node.child(segment)
            if found is None:
                return False
            path.append(found)
            node = found
        if node.value is None:
            return False

        # Only copy the path once the pattern is known to be registered
        node = self.root
        trail: list[tuple[Node, Segment]] = []
        for segment, child in zip(segments, path, strict=True):
            trail.append((node, segment))
            node = self._descend(node, segment, child)

        previous = node.registered
        node.value = None
        node.registered = None

        # Prune bottom-up until a node still carries a value or other branches
        for parent, segment in reversed(trail):
            if node.value is not None or node.has_children():
                break
            parent.discard(segment)
            node = parent

        if previous is not None:
            self._release(trail, previous)
        return True

    @staticmethod
    def _release(trail: list[tuple[Node, Segment]], previous: tuple[Segment, ...]) -> None:
        """Unmark fixed keys that no remaining registration captures through."""
        for depth, (parent, _) in enumerate(trail):
            segment = previous[depth]
            if not isinstance(segment, NamedFixed) or segment.pattern not in parent.fixed_keys:
                continue
            child = parent.children.get(segment.pattern)
            if child is None or not _captures_through(child, depth):
                parent.unmark(segment.pattern)


class Router:
    """Path router over a prefix tree of patterns.

    Usage::

        router = Router()
        router.add_spec(Spec(paths={"/wiki/{title}": handler}))
        match = router.lookup("/wiki/Main_Page")
        # PathMatch(value=handler, params={"title": "Main_Page"})
    """

    __slots__ = ("_config", "_lock", "_root")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self._config = config or RouterConfig()
        self._root = Node()
        self._lock = threading.Lock()

    @property
    def config(self) -> RouterConfig:
        return self._config

    # -- registration -------------------------------------------------------

    def add_spec(self, spec: Any, prefix: str | Sequence[str] = ()) -> None:
        """Register every pattern in ``spec.paths``, each prefixed with ``prefix``.

        Raises ``ConfigurationError`` on a missing spec, malformed patterns
        or conflicting tree shapes. Nothing is registered when any pattern
        in the spec fails.
        """
        paths = _spec_paths(spec)
        prefix_segments = parse_pattern(prefix or ())

        with self._lock:
            draft = _Draft(self._root)
            for pattern, value in paths.items():
                if value is None:
                    msg = f"Pattern {pattern!r} has no value to register."
                    raise ConfigurationError(msg)
                segments = prefix_segments + parse_pattern(pattern)
                if draft.extend(segments, value):
                    logger.debug("Replaced value for pattern %r", pattern)
                else:
                    logger.debug("Registered pattern %r", pattern)
            self._root = draft.root

    def del_spec(self, spec: Any, prefix: str | Sequence[str] = ()) -> int:
        """Unregister every pattern in ``spec.paths`` and prune dead branches.

        Returns the number of patterns removed. Patterns that are not
        registered are skipped.
        """
        paths = _spec_paths(spec)
        prefix_segments = parse_pattern(prefix or ())
        removed = 0

        with self._lock:
            draft = _Draft(self._root)
            for pattern in paths:
                if draft.remove(prefix_segments + parse_pattern(pattern)):
                    logger.debug("Removed pattern %r", pattern)
                    removed += 1
                else:
                    logger.debug("Pattern %r is not registered, nothing to remove", pattern)
            self._root = draft.root
        return removed

    # -- resolution ---------------------------------------------------------

    def lookup(self, path: str | Sequence[str]) -> PathMatch | None:
        """Resolve ``path`` to the registered value and captured params.

        Returns ``None`` when nothing matches. When the path ends in an
        empty segment (``/docs/``) the sorted child names of the last
        directory are added to ``params`` under ``config.listing_key``.
        """
        normalizer = self._config.normalizer
        if normalizer is not None and isinstance(path, str):
            segments = normalizer(path)
        else:
            segments = normalize_path(path)

        node: Node | None = self._root
        prev_node: Node | None = None
        params: dict[str, Any] = {}
        for segment in segments:
            if node is None:
                return None
            prev_node = node
            node = node.get(segment, params)

        if node is None or node.value is None:
            return None
        if prev_node is not None and segments[-1] == "":
            params[self._config.listing_key] = prev_node.keys()
        return PathMatch(value=node.value, params=params)

    # -- introspection ------------------------------------------------------

    def patterns(self) -> list[tuple[str, Any]]:
        """Return every registered ``(pattern, value)`` pair.

        Each pattern is rendered from the descriptors it was registered
        with, prefix included. Literal children are visited in sorted
        order, the wildcard last. A value registered on the root through an
        empty segment sequence renders as ``""``; no pattern string parses
        back to zero segments, so re-register that one as ``[]``.
        """
        return list(self._walk(self._root))

    @staticmethod
    def _walk(root: Node) -> Iterator[tuple[str, Any]]:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.registered is not None:
                rendered = [format_segment(segment) for segment in node.registered]
                yield ("/" + "/".join(rendered) if rendered else "", node.value)

            if node.wildcard is not None:
                stack.append(node.wildcard)
            stack.extend(node.children[key] for key in sorted(node.children, reverse=True))
