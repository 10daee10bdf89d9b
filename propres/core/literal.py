"""
Literals: an atom together with a polarity.

    Positive("rain")   ->  rain
    Negative("rain")   ->  (not rain)

A literal is one of two tagged values, so every function that looks at
polarity dispatches on the type instead of poking at a sign field.

Canonical order (used to sort every clause):
    negative literals come before positive ones;
    within the same polarity, literals compare by atom name.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Positive:
    """An atom asserted true."""
    atom: str

    def __str__(self):
        return self.atom

    def __repr__(self):
        return f"Positive({self.atom!r})"


@dataclass(frozen=True)
class Negative:
    """An atom asserted false."""
    atom: str

    def __str__(self):
        return f"(not {self.atom})"

    def __repr__(self):
        return f"Negative({self.atom!r})"


Literal = Union[Positive, Negative]


def negated(lit: Literal) -> bool:
    """Is this a negative literal?"""
    return isinstance(lit, Negative)


def negate(lit: Literal) -> Literal:
    """Flip the polarity. Always builds a new literal."""
    if isinstance(lit, Negative):
        return Positive(lit.atom)
    if isinstance(lit, Positive):
        return Negative(lit.atom)
    raise TypeError(f"not a literal: {lit!r}")


def literal_key(lit: Literal) -> tuple:
    """Sort key for the canonical order: negatives first, then by atom."""
    return (0 if negated(lit) else 1, lit.atom)


def literal_lessp(a: Literal, b: Literal) -> bool:
    """Strict comparison in the canonical order."""
    return literal_key(a) < literal_key(b)
