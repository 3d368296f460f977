"""Spec and PathMatch frozen dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Spec:
    """A bulk registration unit: path pattern -> opaque value.

    The router also accepts any object with a ``paths`` attribute, or a
    parsed API document mapping with a ``"paths"`` key.
    """

    paths: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class PathMatch:
    """Result of a successful lookup."""

    value: Any
    params: dict[str, Any]
