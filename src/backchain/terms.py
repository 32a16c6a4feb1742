"""
backchain/terms.py - Term Algebra for Backward Chaining

Implements the term structures the reasoning core operates on:
- Constant: Ground atomic values (e.g., "tom", 42)
- Variable: Logical variables (e.g., X, Parent)
- Function: Compound terms with functor and arguments (e.g., father(X))
- Literal: Predicate symbol applied to argument terms
- Rule: Horn clause, antecedents imply a single consequent

Variables carry a serial number next to their name. Variables written by
users have serial 0; standardizing a rule apart gives every variable in it a
fresh positive serial, so renamed variables never collide with variables
already in play.
"""
from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union


class TermBase(ABC):
    """Base class for all term types."""

    @abstractmethod
    def is_ground(self) -> bool:
        """Return True if term contains no variables."""

    @abstractmethod
    def variables(self) -> set[Variable]:
        """Return set of variables occurring in term."""


@dataclass(frozen=True, eq=False)
class Constant(TermBase):
    """Ground atomic constant.

    Two constants are the same term iff their symbols have the same type
    and compare equal, so Constant(1), Constant(1.0) and Constant(True)
    are three different constants.

    Example:
        tom = Constant("tom")
        answer = Constant(42)
    """
    symbol: Any

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Constant):
            return NotImplemented
        return type(self.symbol) is type(other.symbol) and self.symbol == other.symbol

    def __hash__(self) -> int:
        return hash((type(self.symbol), self.symbol))

    def is_ground(self) -> bool:
        return True

    def variables(self) -> set[Variable]:
        return set()

    def __repr__(self) -> str:
        return str(self.symbol)


@dataclass(frozen=True)
class Variable(TermBase):
    """Logical variable.

    By convention, variable names start with uppercase (X, Parent).
    ``serial`` distinguishes standardized-apart copies of the same name.

    Example:
        X = Variable("X")
    """
    name: str
    serial: int = 0

    def is_ground(self) -> bool:
        return False

    def variables(self) -> set[Variable]:
        return {self}

    def __repr__(self) -> str:
        if self.serial:
            return f"?{self.name}_{self.serial}"
        return f"?{self.name}"


@dataclass(frozen=True)
class Function(TermBase):
    """Compound term: a functor applied to an ordered argument tuple.

    Functor and arity together decide whether two functions can unify.

    Example:
        # father(X)
        term = Function("father", Variable("X"))
    """
    functor: str
    args: tuple[TermLike, ...] = field(default_factory=tuple)

    def __init__(self, functor: str, *args: TermLike | str | int | float):
        object.__setattr__(self, "functor", functor)
        object.__setattr__(self, "args", _as_terms(args))

    @property
    def arity(self) -> int:
        return len(self.args)

    def is_ground(self) -> bool:
        return all(arg.is_ground() for arg in self.args)

    def variables(self) -> set[Variable]:
        return _collect_variables(self.args)

    def __repr__(self) -> str:
        args_str = ", ".join(repr(arg) for arg in self.args)
        return f"{self.functor}({args_str})"


# Type alias for any term value
TermLike = Union[Constant, Variable, Function]


@dataclass(frozen=True)
class Literal:
    """Predicate symbol applied to an ordered list of argument terms.

    Example:
        # parent(tom, bob)
        fact = Literal("parent", "tom", "bob")

        # ancestor(X, Y)
        goal = Literal("ancestor", Variable("X"), Variable("Y"))
    """
    predicate: str
    args: tuple[TermLike, ...] = field(default_factory=tuple)

    def __init__(self, predicate: str, *args: TermLike | str | int | float):
        object.__setattr__(self, "predicate", predicate)
        object.__setattr__(self, "args", _as_terms(args))

    @property
    def arity(self) -> int:
        return len(self.args)

    def is_ground(self) -> bool:
        return all(arg.is_ground() for arg in self.args)

    def variables(self) -> set[Variable]:
        return _collect_variables(self.args)

    def __repr__(self) -> str:
        if not self.args:
            return self.predicate
        args_str = ", ".join(repr(arg) for arg in self.args)
        return f"{self.predicate}({args_str})"


@dataclass(frozen=True)
class Rule:
    """Horn clause: consequent :- antecedents.

    The antecedents are a left-to-right conjunction. A rule with no
    antecedents is logically a fact, but facts and rules are stored
    separately in the knowledge base.

    Example:
        # ancestor(X, Z) :- parent(X, Y), ancestor(Y, Z)
        r = Rule(
            Literal("ancestor", X, Z),
            (Literal("parent", X, Y), Literal("ancestor", Y, Z)),
        )
    """
    consequent: Literal
    antecedents: tuple[Literal, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "antecedents", tuple(self.antecedents))

    def variables(self) -> set[Variable]:
        """All variables in the rule."""
        result = self.consequent.variables()
        for antecedent in self.antecedents:
            result.update(antecedent.variables())
        return result

    def standardize_apart(self, fresh: FreshVariables) -> Rule:
        """Create a copy whose variables are all fresh.

        Every occurrence of a variable is renamed consistently across
        consequent and antecedents. One serial is drawn per call and shared
        by all variable names; a name that already occurs with several
        serials draws one more serial per extra variable. New serials are
        always above every serial already used in this rule.
        """
        variables = sorted(self.variables(), key=lambda v: (v.name, v.serial))
        fresh.skip_past(max_serial(variables))
        serial = fresh.next_serial()
        renaming: dict[Variable, Variable] = {}
        names: set[str] = set()
        for v in variables:
            if v.name in names:
                renaming[v] = Variable(v.name, fresh.next_serial())
            else:
                renaming[v] = Variable(v.name, serial)
                names.add(v.name)
        return Rule(
            _rename_literal(self.consequent, renaming),
            tuple(_rename_literal(a, renaming) for a in self.antecedents),
        )

    def __repr__(self) -> str:
        if not self.antecedents:
            return f"{self.consequent!r}."
        body_str = ", ".join(repr(a) for a in self.antecedents)
        return f"{self.consequent!r} :- {body_str}."


class FreshVariables:
    """Monotonic source of serial numbers for standardizing rules apart.

    Inject one per resolver so renaming is deterministic and testable.
    Serials already present in goals or rules are skipped with
    ``skip_past``, so a drawn serial is never one that is in play.
    """

    def __init__(self, start: int = 1):
        if start < 1:
            raise ValueError(f"fresh variable serials start at 1 or above, got {start}")
        self._counter = itertools.count(start)
        self._upcoming = start

    def next_serial(self) -> int:
        serial = next(self._counter)
        self._upcoming = serial + 1
        return serial

    def skip_past(self, serial: int) -> None:
        """Make every later serial greater than serial."""
        if serial >= self._upcoming:
            self._counter = itertools.count(serial + 1)
            self._upcoming = serial + 1


def max_serial(variables: Iterable[Variable]) -> int:
    """Largest serial among variables, 0 if there are none."""
    return max((v.serial for v in variables), default=0)


def _rename_term(term: TermLike, renaming: Mapping[Variable, Variable]) -> TermLike:
    """Apply a variable renaming one level deep, without following chains."""
    if isinstance(term, Variable):
        return renaming.get(term, term)
    if isinstance(term, Function):
        return Function(term.functor, *(_rename_term(arg, renaming) for arg in term.args))
    return term


def _rename_literal(literal: Literal, renaming: Mapping[Variable, Variable]) -> Literal:
    return Literal(literal.predicate, *(_rename_term(arg, renaming) for arg in literal.args))


def substitute(term, bindings: Mapping[Variable, TermLike]):
    """Apply bindings to a term or literal.

    Replaces every bound variable with its value, following chains of
    variables bound to variables. Unbound variables are left in place.
    """
    if isinstance(term, Variable):
        value = bindings.get(term)
        if value is None:
            return term
        return substitute(value, bindings)

    elif isinstance(term, Constant):
        return term

    elif isinstance(term, Function):
        return Function(term.functor, *(substitute(arg, bindings) for arg in term.args))

    elif isinstance(term, Literal):
        return Literal(term.predicate, *(substitute(arg, bindings) for arg in term.args))

    raise TypeError(f"Cannot substitute into {type(term).__name__}")


def free_variables(item) -> set[Variable]:
    """Variables occurring in a term, literal, rule or sequence of those."""
    if isinstance(item, (TermBase, Literal, Rule)):
        return item.variables()
    return _collect_variables(item)


def _collect_variables(items: Iterable) -> set[Variable]:
    result: set[Variable] = set()
    for item in items:
        result.update(item.variables())
    return result


def _as_terms(args: Iterable) -> tuple[TermLike, ...]:
    """Wrap raw values as constants."""
    return tuple(
        arg if isinstance(arg, (Constant, Variable, Function)) else Constant(arg)
        for arg in args
    )


# Convenience constructors
def const(symbol: Any) -> Constant:
    return Constant(symbol)


def var(name: str) -> Variable:
    return Variable(name)


def func(functor: str, *args: TermLike | str | int | float) -> Function:
    return Function(functor, *args)


def lit(predicate: str, *args: TermLike | str | int | float) -> Literal:
    return Literal(predicate, *args)


def rule(consequent: Literal, *antecedents: Literal) -> Rule:
    """Create a rule from a consequent and its antecedents."""
    return Rule(consequent, antecedents)


# Common variable shortcuts
X = Variable("X")
Y = Variable("Y")
Z = Variable("Z")
