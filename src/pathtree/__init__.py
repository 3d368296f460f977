"""pathtree — URL path pattern matching on a shared prefix tree.

Resolves request paths to the value registered for the matching pattern
and extracts named parameters along the way.

Basic usage::

    from pathtree import Router, Spec

    router = Router()
    router.add_spec(Spec(paths={
        "/wiki/{title}": "page",
        "/{lang:en}/docs/": "docs-index",
    }))

    match = router.lookup("/wiki/Main_Page")
    match.value   # "page"
    match.params  # {"title": "Main_Page"}

    router.lookup("/nowhere")  # None
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "PathMatch",
    "PathTreeError",
    "Router",
    "RouterConfig",
    "Spec",
    "parse_pattern",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import pathtree`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from pathtree.routing.router import Router

        return Router

    if name == "RouterConfig":
        from pathtree.config import RouterConfig

        return RouterConfig

    if name in ("PathMatch", "Spec"):
        from pathtree.routing import route as _route

        return getattr(_route, name)

    if name == "parse_pattern":
        from pathtree.routing.segments import parse_pattern

        return parse_pattern

    if name in ("ConfigurationError", "PathTreeError"):
        from pathtree import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
