"""Tests for the term model: constants, variables, functions, literals, rules."""

from __future__ import annotations

import pytest

from backchain import (
    Constant,
    FreshVariables,
    Function,
    Literal,
    Rule,
    Variable,
    free_variables,
    func,
    lit,
    rule,
    substitute,
)
from backchain.terms import X, Y, Z

# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_raw_arguments_become_constants(self):
        literal = Literal("age", "tom", 42)
        assert literal.args == (Constant("tom"), Constant(42))

    def test_terms_are_kept_as_is(self):
        f = Function("father", X)
        assert f.args == (X,)
        assert f.arity == 1

    def test_constants_compare_by_symbol(self):
        assert Constant("a") == Constant("a")
        assert Constant("a") != Constant("b")
        assert hash(Constant("a")) == hash(Constant("a"))

    def test_constants_compare_by_symbol_type(self):
        assert Constant(1) != Constant(True)
        assert Constant(1) != Constant(1.0)
        assert Constant(1) != Constant("1")
        assert len({Constant(1), Constant(True), Constant(1.0)}) == 3

    def test_variables_compare_by_name_and_serial(self):
        assert Variable("X") == X
        assert Variable("X", 3) != X

    def test_rule_antecedents_stored_as_tuple(self):
        r = Rule(Literal("q", X), [Literal("p", X)])
        assert r.antecedents == (Literal("p", X),)

    def test_helpers(self):
        assert func("f", "a") == Function("f", Constant("a"))
        assert lit("p", X) == Literal("p", X)
        assert rule(lit("q", X), lit("p", X)) == Rule(Literal("q", X), (Literal("p", X),))


# ---------------------------------------------------------------------------
# Groundness and variables
# ---------------------------------------------------------------------------


class TestVariables:
    def test_ground_literal(self):
        assert Literal("parent", "tom", Function("f", "bob")).is_ground()

    def test_non_ground_literal(self):
        assert not Literal("parent", "tom", Function("f", X)).is_ground()

    def test_variables_of_nested_function(self):
        term = Function("f", X, Function("g", Y, "a"))
        assert term.variables() == {X, Y}

    def test_rule_variables_span_head_and_body(self):
        r = rule(lit("ancestor", X, Z), lit("parent", X, Y), lit("ancestor", Y, Z))
        assert r.variables() == {X, Y, Z}

    def test_free_variables_of_sequence(self):
        assert free_variables([Literal("p", X), Function("f", Y)]) == {X, Y}
        assert free_variables(Constant("a")) == set()


# ---------------------------------------------------------------------------
# Substitution
# ---------------------------------------------------------------------------


class TestSubstitute:
    def test_unbound_variable_stays(self):
        assert substitute(X, {}) is X

    def test_follows_variable_chains(self):
        bindings = {X: Y, Y: Z, Z: Constant("a")}
        assert substitute(X, bindings) == Constant("a")

    def test_applies_inside_functions_and_literals(self):
        bindings = {X: Constant("tom")}
        assert substitute(Function("f", X, Y), bindings) == Function("f", "tom", Y)
        assert substitute(Literal("p", X), bindings) == Literal("p", "tom")

    def test_rejects_non_terms(self):
        with pytest.raises(TypeError):
            substitute("tom", {})


# ---------------------------------------------------------------------------
# Standardizing apart
# ---------------------------------------------------------------------------


class TestStandardizeApart:
    def test_renames_consistently(self):
        r = rule(lit("ancestor", X, Z), lit("parent", X, Y), lit("ancestor", Y, Z))
        renamed = r.standardize_apart(FreshVariables())

        x1, z1 = renamed.consequent.args
        assert x1 == Variable("X", 1)
        assert z1 == Variable("Z", 1)
        assert renamed.antecedents[0].args == (Variable("X", 1), Variable("Y", 1))
        assert renamed.antecedents[1].args == (Variable("Y", 1), Variable("Z", 1))

    def test_each_call_draws_a_new_serial(self):
        fresh = FreshVariables()
        r = rule(lit("q", X), lit("p", X))
        first = r.standardize_apart(fresh)
        second = r.standardize_apart(fresh)
        assert first.variables().isdisjoint(second.variables())
        assert r.variables().isdisjoint(first.variables())

    def test_source_rule_untouched(self):
        r = rule(lit("q", X), lit("p", X))
        r.standardize_apart(FreshVariables())
        assert r.variables() == {X}

    def test_ground_rule_is_unchanged(self):
        r = rule(lit("q", "a"), lit("p", "a"))
        assert r.standardize_apart(FreshVariables()) == r

    def test_fresh_source_is_deterministic(self):
        assert FreshVariables(5).next_serial() == 5
        assert FreshVariables(5).next_serial() == 5

    def test_skip_past_moves_counter_forward_only(self):
        fresh = FreshVariables(3)
        fresh.skip_past(10)
        assert fresh.next_serial() == 11
        fresh.skip_past(4)
        assert fresh.next_serial() == 12

    def test_rule_with_serials_is_renamed_above_them(self):
        x4 = Variable("X", 4)
        r = rule(lit("q", x4), lit("p", x4))
        renamed = r.standardize_apart(FreshVariables(4))
        assert renamed.consequent.args == (Variable("X", 5),)
        assert renamed.antecedents[0].args == (Variable("X", 5),)

    def test_same_name_with_different_serials_stays_distinct(self):
        r = rule(lit("q", Variable("X", 1)), lit("p", Variable("X", 2)))
        renamed = r.standardize_apart(FreshVariables())
        assert renamed == rule(lit("q", Variable("X", 3)), lit("p", Variable("X", 4)))

    def test_fresh_source_rejects_zero(self):
        with pytest.raises(ValueError):
            FreshVariables(0)


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------


class TestRepr:
    def test_term_repr(self):
        assert repr(Constant("tom")) == "tom"
        assert repr(X) == "?X"
        assert repr(Variable("X", 3)) == "?X_3"
        assert repr(Function("f", X, "a")) == "f(?X, a)"

    def test_literal_and_rule_repr(self):
        assert repr(Literal("rains")) == "rains"
        assert repr(rule(lit("q", X), lit("p", X))) == "q(?X) :- p(?X)."
        assert repr(rule(lit("q", "a"))) == "q(a)."
