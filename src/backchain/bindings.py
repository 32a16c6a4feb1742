"""
backchain/bindings.py - Immutable Binding Environments

A binding environment maps variables to terms. It is never modified after
construction: extending it yields a new environment that contains every
binding of its parent plus one more. Abandoning a failed proof branch
therefore needs no rollback, because sibling branches never share a
mutable environment.
"""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from .errors import BindingError
from .terms import TermLike, Variable, substitute


class Bindings(Mapping[Variable, TermLike]):
    """Read-only mapping from variables to the terms they are bound to.

    Lookup is one level deep: a variable bound to another variable looks up
    as that variable. Use ``resolve`` (or ``substitute``) for the full value.

    Example:
        empty = Bindings()
        b1 = empty.extend(Variable("X"), Constant("tom"))
        b1[Variable("X")]      # tom
        Variable("X") in empty  # False
    """

    __slots__ = ("_map",)

    def __init__(self, initial: Mapping[Variable, TermLike] | None = None):
        self._map: dict[Variable, TermLike] = dict(initial or {})

    def lookup(self, variable: Variable) -> TermLike | None:
        """Return the term directly bound to variable, or None if unbound."""
        return self._map.get(variable)

    def extend(self, variable: Variable, term: TermLike) -> Bindings:
        """Return new bindings with variable bound to term.

        Raises:
            BindingError: if variable is already bound here
        """
        if variable in self._map:
            raise BindingError(
                f"{variable!r} is already bound to {self._map[variable]!r}"
            )
        extended = Bindings.__new__(Bindings)
        extended._map = {**self._map, variable: term}
        return extended

    def resolve(self, variable: Variable) -> TermLike:
        """Fully substituted value of variable (the variable itself if unbound)."""
        return substitute(variable, self)

    def as_dict(self, resolved: bool = True) -> dict[str, Any]:
        """Snapshot keyed by variable display name.

        Args:
            resolved: Substitute chained bindings before returning values
        """
        return {
            repr(v).lstrip("?"): self.resolve(v) if resolved else t
            for v, t in self._map.items()
        }

    def __getitem__(self, variable: Variable) -> TermLike:
        return self._map[variable]

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{v!r}: {t!r}" for v, t in self._map.items())
        return f"Bindings({{{pairs}}})"
