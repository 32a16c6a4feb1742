"""
backchain/unification.py - Unification Algorithm

Computes the most general unifier of two terms, two literals, or two term
lists, starting from a given binding environment. Every successful call
returns a binding environment that extends the input (it may be the input
itself when no new binding was needed); failure is None.

Key operations:
- unify(x, y, bindings): MGU for literal, list or term pairs
- substitute(t, bindings): Apply bindings to term
- occurs_check(var, term, bindings): Check for circular references

The occurs check is always performed when binding a variable to a
function term.
"""
from __future__ import annotations

from collections.abc import Sequence

from .bindings import Bindings
from .terms import Constant, Function, Literal, TermLike, Variable, substitute

__all__ = [
    "unify",
    "unify_terms",
    "unify_literals",
    "unify_lists",
    "occurs_check",
    "substitute",
]


def unify(x, y, bindings: Bindings | None = None) -> Bindings | None:
    """Unify two literals, two term sequences, or two terms.

    Args:
        x: First literal, term, or sequence of terms
        y: Second operand of the same kind
        bindings: Starting environment (default: empty)

    Returns:
        Extended bindings, or None if unification fails

    Example:
        # f(X, a) against f(b, Y)
        theta = unify(Function("f", X, "a"), Function("f", "b", Y))
        # theta == {X: b, Y: a}
    """
    if bindings is None:
        bindings = Bindings()

    if isinstance(x, Literal) and isinstance(y, Literal):
        return unify_literals(x, y, bindings)
    if _is_term_sequence(x) and _is_term_sequence(y):
        return unify_lists(x, y, bindings)
    if _is_term(x) and _is_term(y):
        return unify_terms(x, y, bindings)

    raise TypeError(
        f"Cannot unify {type(x).__name__} with {type(y).__name__}"
    )


def unify_literals(lit1: Literal, lit2: Literal, bindings: Bindings) -> Bindings | None:
    """Literals unify only if they share a predicate and their arguments unify."""
    if lit1.predicate != lit2.predicate:
        return None
    return unify_lists(lit1.args, lit2.args, bindings)


def unify_lists(
    terms1: Sequence[TermLike],
    terms2: Sequence[TermLike],
    bindings: Bindings | None,
) -> Bindings | None:
    """Unify two term lists pairwise, left to right.

    Empty lists unify with each other; running out of terms on one side
    first is a mismatch. The first failing pair fails the whole list.
    """
    if bindings is None:
        return None

    for position in range(max(len(terms1), len(terms2))):
        if position >= len(terms1) or position >= len(terms2):
            return None
        bindings = unify_terms(terms1[position], terms2[position], bindings)
        if bindings is None:
            return None

    return bindings


def unify_terms(t1: TermLike, t2: TermLike, bindings: Bindings) -> Bindings | None:
    """Unify two terms under bindings."""
    # Constant cases
    if isinstance(t1, Constant):
        if isinstance(t2, Constant):
            return bindings if t1 == t2 else None
        if isinstance(t2, Variable):
            return _unify_variable(t2, t1, bindings)
        return None

    # Variable cases
    if isinstance(t1, Variable):
        return _unify_variable(t1, t2, bindings)

    # Function cases
    if isinstance(t1, Function):
        if isinstance(t2, Variable):
            return _unify_variable(t2, t1, bindings)
        if isinstance(t2, Function):
            if t1.functor != t2.functor:
                return None
            return unify_lists(t1.args, t2.args, bindings)
        return None

    raise TypeError(f"Not a term: {t1!r}")


def _unify_variable(var: Variable, term: TermLike, bindings: Bindings) -> Bindings | None:
    """Unify a variable with any term."""
    if var == term:
        return bindings

    # Already bound - compare its value instead
    bound = bindings.lookup(var)
    if bound is not None:
        return unify_terms(term, bound, bindings)

    if isinstance(term, Variable):
        bound_other = bindings.lookup(term)
        if bound_other is not None:
            return unify_terms(var, bound_other, bindings)
        return bindings.extend(var, term)

    # Occurs check - prevent infinite terms like X = f(X)
    if isinstance(term, Function) and occurs_check(var, term, bindings):
        return None

    return bindings.extend(var, term)


def occurs_check(var: Variable, term: TermLike, bindings: Bindings) -> bool:
    """Check if variable occurs in term once bindings are applied.

    Returns True if var appears in term, which would create a circular
    reference like X = f(X).
    """
    return var in substitute(term, bindings).variables()


def _is_term(value) -> bool:
    return isinstance(value, (Constant, Variable, Function))


def _is_term_sequence(value) -> bool:
    return isinstance(value, (list, tuple))
