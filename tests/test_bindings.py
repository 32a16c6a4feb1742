"""Tests for immutable binding environments."""

from __future__ import annotations

import pytest

from backchain import BindingError, Bindings, Constant, Function, Variable
from backchain.terms import X, Y

# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestBindings:
    def test_empty(self):
        b = Bindings()
        assert len(b) == 0
        assert b.lookup(X) is None
        assert X not in b

    def test_extend_returns_new_environment(self):
        empty = Bindings()
        b1 = empty.extend(X, Constant("tom"))

        assert b1[X] == Constant("tom")
        assert X not in empty
        assert len(empty) == 0

    def test_extend_bound_variable_raises(self):
        b = Bindings().extend(X, Constant("a"))
        with pytest.raises(BindingError):
            b.extend(X, Constant("b"))

    def test_siblings_do_not_share_bindings(self):
        parent = Bindings().extend(X, Constant("a"))
        left = parent.extend(Y, Constant("b"))
        right = parent.extend(Y, Constant("c"))
        assert left[Y] == Constant("b")
        assert right[Y] == Constant("c")
        assert Y not in parent

    def test_lookup_is_one_level(self):
        b = Bindings({X: Y, Y: Constant("a")})
        assert b.lookup(X) == Y
        assert b.resolve(X) == Constant("a")

    def test_resolve_unbound_is_the_variable(self):
        assert Bindings().resolve(X) == X

    def test_resolve_inside_functions(self):
        b = Bindings({X: Function("f", Y), Y: Constant("a")})
        assert b.resolve(X) == Function("f", "a")

    def test_as_dict(self):
        renamed = Variable("Y", 2)
        b = Bindings({X: renamed, renamed: Constant("a")})
        assert b.as_dict() == {"X": Constant("a"), "Y_2": Constant("a")}
        assert b.as_dict(resolved=False)["X"] == renamed

    def test_mapping_equality(self):
        b = Bindings().extend(X, Constant("a"))
        assert b == {X: Constant("a")}

    def test_initial_mapping_is_copied(self):
        source = {X: Constant("a")}
        b = Bindings(source)
        source[Y] = Constant("b")
        assert Y not in b
