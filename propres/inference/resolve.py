"""
Binary resolution on propositional clauses.

Given two clauses, every pair of positions (i, j) where the left
literal is the complement of the right literal yields one resolvent:
the left clause without position i joined with the right clause
without position j, then standardized.

All matching pairs are tried, so one pair of clauses can give several
resolvents. An empty resolvent (a contradiction) is returned like any
other; deciding what to do with it is the caller's business.
"""

from ..core.clause import Clause, standardize
from ..core.literal import negate


def resolve(c1: Clause, c2: Clause) -> list:
    """
    Binary resolution between two clauses.

    Returns a list of standardized resolvents, one per complementary
    literal pair. Neither input is modified.
    """
    lits1 = c1.literals
    lits2 = c2.literals

    results = []

    for i, lit1 in enumerate(lits1):
        comp = negate(lit1)
        for j, lit2 in enumerate(lits2):
            if lit2 != comp:
                continue

            remaining1 = lits1[:i] + lits1[i + 1:]
            remaining2 = lits2[:j] + lits2[j + 1:]

            results.append(standardize(Clause(
                literals=remaining1 + remaining2,
                source=(c1.name, c2.name),
            )))

    return results


def clause_subsumes(c1: Clause, c2: Clause) -> bool:
    """Every literal of c1 occurs in c2, and c2 has some literal c1 lacks."""
    return set(c1.literals) < set(c2.literals)


def subsumed_clauses(clauses: list) -> list:
    """
    The clauses made redundant by a strictly smaller clause in the same list.

    Reporting only: the saturation loop keeps subsumed clauses.
    """
    return [c for c in clauses if any(clause_subsumes(d, c) for d in clauses)]
