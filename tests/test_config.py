"""Tests for pathtree.config — RouterConfig frozen dataclass."""

import pytest

from pathtree.config import RouterConfig


class TestRouterConfig:
    def test_defaults(self) -> None:
        cfg = RouterConfig()

        assert cfg.listing_key == "_ls"
        assert cfg.normalizer is None

    def test_override(self) -> None:
        cfg = RouterConfig(listing_key="__ls__", normalizer=str.split)

        assert cfg.listing_key == "__ls__"
        assert cfg.normalizer is str.split

    def test_frozen(self) -> None:
        cfg = RouterConfig()
        with pytest.raises(AttributeError):
            cfg.listing_key = "other"  # type: ignore[misc]
