"""Tests for pathtree.errors — exception hierarchy."""

import pytest

from pathtree.errors import ConfigurationError, PathTreeError
from pathtree.routing.route import Spec
from pathtree.routing.router import Router


class TestHierarchy:
    def test_configuration_error_is_pathtree_error(self) -> None:
        assert issubclass(ConfigurationError, PathTreeError)

    def test_pathtree_error_is_exception(self) -> None:
        assert issubclass(PathTreeError, Exception)


class TestRaisedByRouter:
    def test_catchable_as_base(self) -> None:
        r = Router()
        with pytest.raises(PathTreeError):
            r.add_spec(Spec(paths={"/{+path}": "V"}))

    def test_miss_is_not_an_error(self) -> None:
        r = Router()
        r.add_spec(Spec(paths={"/a": "A"}))
        assert r.lookup("/b") is None
