"""
backchain - Backward Chaining Inference Core

Prolog-style goal proving over Horn clauses.

This module implements:
- First-order terms (constants, variables, function terms) and literals
- Immutable binding environments
- Unification with occurs check
- Ordered knowledge base of ground facts and rules
- Depth-first, first-match backward chaining with a proof witness

Example:
    from backchain import BackwardChainer, KnowledgeBase, Literal, Variable

    X, Y = Variable("X"), Variable("Y")

    kb = KnowledgeBase()
    kb.add_fact(Literal("parent", "tom", "bob"))
    kb.add_rule(Literal("ancestor", X, Y), Literal("parent", X, Y))

    theta = BackwardChainer(kb).ask(Literal("ancestor", "tom", Variable("Who")))
    print(theta.resolve(Variable("Who")))  # bob
"""

from .bindings import Bindings
from .config import ResolverConfig, load_config
from .errors import BindingError, DepthLimitExceeded, KnowledgeBaseError, ReasoningError
from .inference import BackwardChainer, ProofNode, ProofTree, backward_chain
from .knowledge_base import KnowledgeBase
from .terms import (
    Constant,
    FreshVariables,
    Function,
    Literal,
    Rule,
    Variable,
    const,
    free_variables,
    func,
    lit,
    rule,
    var,
)
from .unification import occurs_check, substitute, unify

__all__ = [
    # Terms
    "Constant",
    "Variable",
    "Function",
    "Literal",
    "Rule",
    "FreshVariables",
    "free_variables",
    "const",
    "var",
    "func",
    "lit",
    "rule",
    # Bindings
    "Bindings",
    # Unification
    "unify",
    "substitute",
    "occurs_check",
    # Knowledge Base
    "KnowledgeBase",
    # Inference
    "BackwardChainer",
    "backward_chain",
    "ProofTree",
    "ProofNode",
    # Configuration
    "ResolverConfig",
    "load_config",
    # Errors
    "ReasoningError",
    "BindingError",
    "KnowledgeBaseError",
    "DepthLimitExceeded",
]
