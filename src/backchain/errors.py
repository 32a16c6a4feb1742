"""
backchain/errors.py - Exceptions raised by the reasoning core

A failed proof or unification is never an exception: those return None.
The classes below cover programming errors, malformed knowledge-base input
and the optional recursion guard.
"""
from __future__ import annotations

from typing import Any


class ReasoningError(Exception):
    """Base class for backchain errors."""


class BindingError(ReasoningError):
    """Raised when extending bindings with a variable that is already bound."""


class KnowledgeBaseError(ReasoningError, ValueError):
    """Raised when a knowledge base cannot be built from its input."""


class DepthLimitExceeded(ReasoningError):
    """Raised when proof search nests deeper than the configured max_depth."""

    def __init__(self, depth: int, goal: Any):
        self.depth = depth
        self.goal = goal
        super().__init__(f"proof depth limit {depth} exceeded at goal {goal!r}")
