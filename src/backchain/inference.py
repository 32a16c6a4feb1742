"""
backchain/inference.py - Backward Chaining Inference

Goal-driven proof search over a KnowledgeBase:

    1. Try the facts, in stored order. The first fact that unifies with
       the goal closes it; no other fact is ever tried for that goal.
    2. Otherwise try the rules, in stored order. Each candidate whose
       consequent has the goal's predicate is standardized apart, its
       consequent unified with the goal, and its antecedents proved left
       to right. The first rule whose antecedents are all proved wins.
    3. Otherwise the goal fails.

The search is depth-first and keeps one solution per goal, so it is
incomplete: the order of facts and rules decides which proofs it can
find, and a rule set that never bottoms out in facts recurses without
end unless ResolverConfig.max_depth is set.

Failure is always None. Bindings are immutable, so abandoning a branch
needs no undo.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from .bindings import Bindings
from .config import ResolverConfig
from .errors import DepthLimitExceeded
from .knowledge_base import KnowledgeBase
from .terms import FreshVariables, Literal, Rule, free_variables, max_serial, substitute
from .unification import unify_literals

logger = logging.getLogger(__name__)

Goal = Union[Literal, Sequence[Literal]]


@dataclass
class ProofNode:
    """One proved goal.

    Either ``fact`` is the fact that closed the goal, or ``rule_used`` is
    the standardized-apart rule whose antecedents were proved by
    ``children``.
    """

    goal: Literal
    fact: Literal | None = None
    rule_used: Rule | None = None
    children: list[ProofNode] = field(default_factory=list)
    depth: int = 0

    @property
    def is_leaf(self) -> bool:
        """True if no subgoals were proved under this goal."""
        return len(self.children) == 0

    def __repr__(self) -> str:
        return f"[✓] {self.goal}"


@dataclass
class ProofTree:
    """Outcome of a query: the bindings witness plus the goals proved."""

    query: tuple[Literal, ...]
    bindings: Bindings | None
    nodes: list[ProofNode] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True if the proof succeeded."""
        return self.bindings is not None

    def get_answer(self) -> tuple[Literal, ...] | None:
        """Get the instantiated query with bindings applied."""
        if self.bindings is None:
            return None
        return tuple(substitute(goal, self.bindings) for goal in self.query)

    def to_dict(self) -> dict[str, Any]:
        """Export proof tree to dictionary."""
        return {
            "query": [str(goal) for goal in self.query],
            "valid": self.is_valid,
            "bindings": (
                {k: str(v) for k, v in self.bindings.as_dict().items()}
                if self.bindings is not None
                else None
            ),
            "tree": [self._node_to_dict(n) for n in self.nodes],
        }

    def _node_to_dict(self, node: ProofNode) -> dict[str, Any]:
        return {
            "goal": str(node.goal),
            "depth": node.depth,
            "fact": str(node.fact) if node.fact else None,
            "rule": str(node.rule_used) if node.rule_used else None,
            "children": [self._node_to_dict(c) for c in node.children],
        }


class BackwardChainer:
    """Depth-first, first-match backward chaining resolver.

    Args:
        kb: Knowledge base to prove goals from (never modified)
        config: Search settings (default: unbounded depth)
        fresh: Source of fresh variable serials for standardizing apart

    Example:
        chainer = BackwardChainer(kb)
        theta = chainer.ask(Literal("ancestor", "tom", Variable("Who")))
        if theta is not None:
            print(theta.resolve(Variable("Who")))
    """

    def __init__(
        self,
        kb: KnowledgeBase,
        config: ResolverConfig | None = None,
        fresh: FreshVariables | None = None,
    ):
        self.kb = kb
        self.config = config or ResolverConfig()
        self.fresh = fresh or FreshVariables(self.config.fresh_start)

    def ask(self, goal: Goal, bindings: Bindings | None = None) -> Bindings | None:
        """Prove a goal literal or a conjunction of goal literals.

        Args:
            goal: Literal, or sequence of literals proved left to right
            bindings: Starting environment (default: empty)

        Returns:
            Bindings witnessing the first proof found, or None
        """
        return self.prove(goal, bindings).bindings

    def ask_facts(self, goal: Literal, bindings: Bindings | None = None) -> Bindings | None:
        """Unify goal with the first matching fact only."""
        return self.kb.ask_facts(goal, bindings)

    def prove(self, goal: Goal, bindings: Bindings | None = None) -> ProofTree:
        """Like ask, but return a ProofTree recording how each goal was closed."""
        if bindings is None:
            bindings = Bindings()
        goals = (goal,) if isinstance(goal, Literal) else tuple(goal)

        # Renamed rule variables must not reuse a serial the caller already has in play
        in_play = free_variables(goals) | set(bindings) | free_variables(bindings.values())
        self.fresh.skip_past(max_serial(in_play))

        solved = self._solve_all(goals, bindings, 0)
        if solved is None:
            logger.debug("No proof for %s", list(goals))
            return ProofTree(query=goals, bindings=None)

        result, nodes = solved
        return ProofTree(query=goals, bindings=result, nodes=nodes)

    def _solve_all(
        self, goals: Sequence[Literal], bindings: Bindings, depth: int
    ) -> tuple[Bindings, list[ProofNode]] | None:
        """Prove goals left to right, threading bindings through."""
        nodes = []
        for goal in goals:
            solved = self._solve(goal, bindings, depth)
            if solved is None:
                return None
            bindings, node = solved
            nodes.append(node)
        return bindings, nodes

    def _solve(
        self, goal: Literal, bindings: Bindings, depth: int
    ) -> tuple[Bindings, ProofNode] | None:
        """Prove a single goal: facts first, then rules in order."""
        max_depth = self.config.max_depth
        if max_depth is not None and depth > max_depth:
            raise DepthLimitExceeded(max_depth, substitute(goal, bindings))

        logger.debug("Goal %s at depth %d", goal, depth)

        matched = self.kb.match_fact(goal, bindings)
        if matched is not None:
            fact, result = matched
            logger.debug("Goal %s closed by fact %s", goal, fact)
            return result, ProofNode(goal=goal, fact=fact, depth=depth)

        for candidate in self.kb.rules:
            if candidate.consequent.predicate != goal.predicate:
                continue

            renamed = candidate.standardize_apart(self.fresh)
            unified = unify_literals(goal, renamed.consequent, bindings)
            if self.config.trace:
                logger.debug(
                    "Goal %s vs rule %s: %s",
                    goal,
                    renamed,
                    "unified" if unified is not None else "no match",
                )
            if unified is None:
                continue

            solved = self._solve_all(renamed.antecedents, unified, depth + 1)
            if solved is not None:
                result, children = solved
                return result, ProofNode(
                    goal=goal, rule_used=renamed, children=children, depth=depth
                )

        logger.debug("Goal %s failed at depth %d", goal, depth)
        return None


def backward_chain(
    kb: KnowledgeBase, goal: Goal, config: ResolverConfig | None = None
) -> ProofTree:
    """Prove goal against kb with a fresh resolver.

    Args:
        kb: Knowledge base with facts and rules
        goal: Goal literal or conjunction of literals
        config: Search settings

    Returns:
        ProofTree showing derivation (valid or not)
    """
    return BackwardChainer(kb, config).prove(goal)
