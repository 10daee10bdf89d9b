"""
Clauses and their normal form.

A Clause is an ordered tuple of literals read as a disjunction. Two
clauses are the same clause when their literal tuples are equal; the
source/step bookkeeping never takes part in equality or hashing.

Normal form (standardize):
    1. sort the literals in the canonical order (see literal.py)
    2. clean the sorted sequence, left to right:
         - first literal has its complement further on:
               drop every copy of the literal and of its complement
         - first literal repeats further on:
               keep one copy, drop the rest
         - otherwise keep it

Note the complementary case. A clause holding both p and (not p) is
NOT discarded as a tautology: the pair is stripped and whatever is left
stays a clause. [A, (not A), B] normalizes to [B]. This departs from
textbook CNF simplification and is kept on purpose; downstream results
depend on it.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .literal import Literal, literal_key, negate


@dataclass
class Clause:
    """
    A disjunction of literals.

    The empty clause (literals == ()) is a contradiction. It never
    survives into a knowledge base or a saturated set.
    """
    literals: tuple = ()
    source: tuple = ()
    step: int = 0

    def __post_init__(self):
        self.literals = tuple(self.literals)

    @classmethod
    def of(cls, *literals: Literal) -> "Clause":
        return cls(literals=literals)

    @property
    def name(self):
        if not self.literals:
            return "()"
        return " ".join(str(lit) for lit in self.literals)

    @property
    def is_empty(self):
        return len(self.literals) == 0

    def __iter__(self):
        return iter(self.literals)

    def __len__(self):
        return len(self.literals)

    def __hash__(self):
        return hash(self.literals)

    def __eq__(self, other):
        return isinstance(other, Clause) and self.literals == other.literals

    def __repr__(self):
        return f"Clause({self.name})"


def clean(literals: Iterable[Literal]) -> tuple:
    """
    Remove duplicates and complementary pairs from a sorted literal sequence.

    Single left-to-right pass. `remaining` counts the copies of each
    literal not yet consumed or removed; a literal is still ahead of the
    cursor iff its count is non-zero.
    """
    literals = list(literals)
    remaining = Counter(literals)
    kept = []
    for lit in literals:
        if not remaining[lit]:
            continue
        comp = negate(lit)
        if remaining[comp]:
            remaining[comp] = 0
        else:
            kept.append(lit)
        remaining[lit] = 0
    return tuple(kept)


def standardize(clause: Clause) -> Clause:
    """Sort then clean. Idempotent. Keeps source and step."""
    return Clause(
        literals=clean(sorted(clause.literals, key=literal_key)),
        source=clause.source,
        step=clause.step,
    )


def standardize_kb(
    kb: Iterable[Clause],
    on_empty: Optional[Callable] = None,
) -> list:
    """
    Normalize a knowledge base: standardize each clause, drop empty
    clauses, drop duplicates (first occurrence wins).

    Empty clauses are dropped silently unless on_empty is given, in
    which case it is called once per empty clause met.
    """
    seen = set()
    result = []
    for clause in kb:
        clause = standardize(clause)
        if clause.is_empty:
            if on_empty:
                on_empty(clause)
            continue
        if clause in seen:
            continue
        seen.add(clause)
        result.append(clause)
    return result
