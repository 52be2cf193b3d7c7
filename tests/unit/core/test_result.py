"""
Unit tests for ResolutionResult.
"""

import pytest

from pubscope.core.result import ResolutionResult
from pubscope.core.types import Coordinate, Scope


def c(notation: str) -> Coordinate:
    return Coordinate.parse(notation)


@pytest.fixture
def result():
    return ResolutionResult.from_scope_map(
        {
            Scope.RELOCATE: (c("com.example:app-util:1.0.0"), c("lib:base:1.0")),
            Scope.COMPILE: (c("lib:x:2.0.0"),),
            Scope.PROVIDED: (c("lib:y"),),
        },
        relocated=frozenset({c("com.example:app-util:1.0.0"), c("lib:base:1.0"), c("lib:helper:2.0")}),
        aliases={c("com.example:util:1.0.0"): c("com.example:app-util:1.0.0")},
    )


class TestResolutionResult:

    def test_missing_scopes_are_empty(self, result):
        assert result.coordinates(Scope.RUNTIME) == ()
        assert len(result) == 4

    def test_relocated_holds_base_coordinates(self, result):
        assert c("lib:helper") in result.relocated
        assert c("lib:helper:2.0") not in result.relocated

    def test_should_relocate_ignores_version(self, result):
        assert result.should_relocate(c("lib:base:0.1"))
        assert result.should_relocate(c("lib:helper"))
        assert not result.should_relocate(c("lib:x:2.0.0"))

    def test_should_relocate_follows_aliases(self, result):
        assert result.should_relocate(c("com.example:util:1.0.0"))

    def test_find(self, result):
        assert result.find(c("lib:x")) == (Scope.COMPILE, c("lib:x:2.0.0"))
        assert result.scope_of(c("com.example:util")) is Scope.RELOCATE
        assert result.find(c("lib:unknown")) is None

    def test_all_coordinates_in_priority_order(self, result):
        assert [str(x) for x in result.all_coordinates()] == [
            "com.example:app-util:1.0.0",
            "lib:base:1.0",
            "lib:x:2.0.0",
            "lib:y",
        ]

    def test_immutable(self, result):
        with pytest.raises(TypeError):
            result.scopes[Scope.COMPILE] = ()
        with pytest.raises(AttributeError):
            result.relocated = frozenset()

    def test_to_dict(self, result):
        data = result.to_dict()
        assert data["scopes"]["compile"] == ["lib:x:2.0.0"]
        assert data["scopes"]["runtime"] == []
        assert data["relocated"] == ["com.example:app-util", "lib:base", "lib:helper"]
        assert data["aliases"] == {"com.example:util:1.0.0": "com.example:app-util:1.0.0"}

    def test_should_relocate_checks_both_names(self):
        only_original = ResolutionResult.from_scope_map(
            {},
            relocated=frozenset({c("com.example:util")}),
            aliases={c("com.example:util:1.0.0"): c("com.example:app-util:1.0.0")},
        )
        assert only_original.should_relocate(c("com.example:util:1.0.0"))
        assert not only_original.should_relocate(c("lib:other"))

    def test_resolved_modules_default_empty(self, result):
        assert result.resolved_modules == ()
