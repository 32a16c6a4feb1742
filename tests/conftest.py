"""
Pytest fixtures for backchain tests.

Provides small family-tree knowledge bases shared across modules.
"""

import pytest

from backchain import KnowledgeBase, Literal
from backchain.terms import X, Y, Z


# =============================================================================
# KNOWLEDGE BASE FIXTURES
# =============================================================================


@pytest.fixture
def parent_kb() -> KnowledgeBase:
    """parent(tom, bob) and ancestor(X, Y) :- parent(X, Y)."""
    kb = KnowledgeBase()
    kb.add_fact(Literal("parent", "tom", "bob"))
    kb.add_rule(Literal("ancestor", X, Y), Literal("parent", X, Y))
    return kb


@pytest.fixture
def chain_kb() -> KnowledgeBase:
    """Parent chain a -> b -> c with base and recursive ancestor rules."""
    kb = KnowledgeBase()
    kb.add_fact(Literal("parent", "a", "b"))
    kb.add_fact(Literal("parent", "b", "c"))
    kb.add_rule(Literal("ancestor", X, Y), Literal("parent", X, Y))
    kb.add_rule(
        Literal("ancestor", X, Z),
        Literal("parent", X, Y),
        Literal("ancestor", Y, Z),
    )
    return kb
