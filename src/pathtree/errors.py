"""pathtree exception hierarchy.

Shared across the parser, the tree nodes and the router so every module
raises and catches the same types. A lookup miss is not an error: the
router returns ``None`` for it.
"""


class PathTreeError(Exception):
    """Base for all pathtree-specific errors."""


class ConfigurationError(PathTreeError):
    """Raised when a pattern or spec cannot be registered.

    Covers malformed capture syntax, unsupported modifiers, conflicting
    capture names on one tree level, mixing wildcard and literal children,
    and spec objects without a path mapping.
    """
