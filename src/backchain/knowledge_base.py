"""
backchain/knowledge_base.py - Knowledge Base for Backward Chaining

The knowledge base stores ground facts and Horn-clause rules as two
ordered sequences. Order matters: it is the order in which proof search
tries candidates, and with a first-match policy it decides which proofs
can be found at all.

Features:
- Ordered fact and rule storage (no indexing)
- First-match fact query
- Persistence support (JSON/YAML)

The resolver only reads a knowledge base; it is built once, up front.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from typing import Any, Union

import yaml

from .bindings import Bindings
from .errors import KnowledgeBaseError
from .terms import Constant, Function, Literal, Rule, TermLike, Variable
from .unification import unify_literals

logger = logging.getLogger(__name__)

Clause = Union[Literal, Rule]


class KnowledgeBase:
    """Ordered collection of facts and rules.

    Example:
        kb = KnowledgeBase()

        # Add facts
        kb.add_fact(Literal("parent", "tom", "bob"))

        # Add rules
        kb.add_rule(
            Literal("ancestor", Variable("X"), Variable("Y")),
            Literal("parent", Variable("X"), Variable("Y")),
        )

        # Query facts
        kb.ask_facts(Literal("parent", Variable("P"), "bob"))  # {P: tom}
    """

    def __init__(self, facts=(), rules=()):
        self._facts: list[Literal] = []
        self._rules: list[Rule] = []
        # Facts and rules in insertion order (for iteration)
        self._clauses: list[Clause] = []

        for fact in facts:
            self.add_fact(fact)
        for rule in rules:
            self.add_clause(rule)

    def add_fact(self, fact: Literal) -> None:
        """Append a ground fact.

        Raises:
            KnowledgeBaseError: if fact contains variables
        """
        if not isinstance(fact, Literal):
            raise KnowledgeBaseError(f"Fact must be a Literal, got: {fact!r}")
        if not fact.is_ground():
            raise KnowledgeBaseError(f"Fact must be ground, got: {fact!r}")
        self._facts.append(fact)
        self._clauses.append(fact)

    def add_rule(self, consequent: Literal, *antecedents: Literal) -> None:
        """Append a rule: consequent :- antecedents."""
        rule = Rule(consequent, antecedents)
        self._rules.append(rule)
        self._clauses.append(rule)

    def add_clause(self, clause: Clause) -> None:
        """Add a fact (Literal) or a rule (Rule)."""
        if isinstance(clause, Rule):
            self.add_rule(clause.consequent, *clause.antecedents)
        else:
            self.add_fact(clause)

    def ask_facts(self, literal: Literal, bindings: Bindings | None = None) -> Bindings | None:
        """Unify literal with the first matching fact.

        Facts are scanned in stored order and the first unifier wins;
        no later fact is ever tried once one matches.

        Args:
            literal: Goal literal (may contain variables)
            bindings: Starting environment (default: empty)

        Returns:
            Extended bindings for the first matching fact, or None
        """
        matched = self.match_fact(literal, bindings)
        return matched[1] if matched is not None else None

    def match_fact(
        self, literal: Literal, bindings: Bindings | None = None
    ) -> tuple[Literal, Bindings] | None:
        """Like ask_facts, but also return the fact that matched."""
        if bindings is None:
            bindings = Bindings()

        for fact in self._facts:
            mgu = unify_literals(literal, fact, bindings)
            if mgu is not None:
                return fact, mgu
        return None

    @property
    def facts(self) -> tuple[Literal, ...]:
        return tuple(self._facts)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    @property
    def fact_count(self) -> int:
        return len(self._facts)

    @property
    def rule_count(self) -> int:
        return len(self._rules)

    def __len__(self) -> int:
        """Total number of clauses."""
        return len(self._clauses)

    def __iter__(self) -> Iterator[Clause]:
        """Iterate over facts and rules in insertion order."""
        return iter(self._clauses)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Export to dictionary."""
        return {
            "facts": [_literal_to_dict(f) for f in self._facts],
            "rules": [
                {
                    "consequent": _literal_to_dict(r.consequent),
                    "antecedents": [_literal_to_dict(a) for a in r.antecedents],
                }
                for r in self._rules
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> KnowledgeBase:
        """Import from dictionary."""
        if not isinstance(data, dict):
            raise KnowledgeBaseError(
                f"Knowledge base document must be a mapping, got {type(data).__name__}"
            )
        kb = cls()

        try:
            for fact_data in data.get("facts") or []:
                kb.add_fact(_dict_to_literal(fact_data))

            for rule_data in data.get("rules") or []:
                consequent = _dict_to_literal(rule_data["consequent"])
                antecedents = [_dict_to_literal(a) for a in rule_data.get("antecedents", [])]
                kb.add_rule(consequent, *antecedents)
        except (AttributeError, KeyError, TypeError) as exc:
            raise KnowledgeBaseError(f"Malformed knowledge base document: {exc!r}") from exc

        logger.info("Loaded knowledge base: %d facts, %d rules", kb.fact_count, kb.rule_count)
        return kb

    def to_json(self, path: str) -> None:
        """Save to JSON file."""
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_json(cls, path: str) -> KnowledgeBase:
        """Load from JSON file."""
        with open(path) as f:
            return cls.from_dict(json.load(f))

    def to_yaml(self, path: str) -> None:
        """Save to YAML file."""
        with open(path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_yaml(cls, path: str) -> KnowledgeBase:
        """Load from YAML file."""
        with open(path) as f:
            return cls.from_dict(yaml.safe_load(f))


def _literal_to_dict(literal: Literal) -> dict[str, Any]:
    return {
        "predicate": literal.predicate,
        "args": [_term_to_dict(arg) for arg in literal.args],
    }


def _dict_to_literal(data: dict[str, Any]) -> Literal:
    args = [_dict_to_term(arg) for arg in data.get("args", [])]
    return Literal(data["predicate"], *args)


def _term_to_dict(term: TermLike) -> dict[str, Any]:
    """Convert term to dictionary."""
    if isinstance(term, Variable):
        data: dict[str, Any] = {"type": "var", "name": term.name}
        if term.serial:
            data["serial"] = term.serial
        return data
    elif isinstance(term, Constant):
        return {"type": "const", "symbol": term.symbol}
    elif isinstance(term, Function):
        return {
            "type": "func",
            "functor": term.functor,
            "args": [_term_to_dict(arg) for arg in term.args],
        }
    raise KnowledgeBaseError(f"Unknown term type: {type(term)}")


def _dict_to_term(data: dict[str, Any]) -> TermLike:
    """Convert dictionary to term."""
    t = data["type"]
    if t == "var":
        return Variable(data["name"], data.get("serial", 0))
    elif t == "const":
        return Constant(data["symbol"])
    elif t == "func":
        args = [_dict_to_term(arg) for arg in data.get("args", [])]
        return Function(data["functor"], *args)
    raise KnowledgeBaseError(f"Unknown term type: {t}")
