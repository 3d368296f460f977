"""Router configuration.

RouterConfig is a frozen dataclass, immutable after creation.
"""

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    Override what you need::

        config = RouterConfig(listing_key="__listing__")
    """

    # Params key holding the directory listing for paths ending in "/"
    listing_key: str = "_ls"

    # Splits runtime path strings into segments (defaults to normalize_path)
    normalizer: Callable[[str], list[str]] | None = None
