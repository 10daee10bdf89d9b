"""
propres: propositional resolution closure.

Takes a knowledge base of clauses (CNF) and derives every clause that
binary resolution can reach from it, stopping at the fixpoint.

Usage:
    python -m propres kb.txt
    python -m propres kb.txt --verbose --history
    python -m propres kb.txt --max-rounds 5 --dot closure.dot
"""

__version__ = "0.1.0"

from .core.literal import Positive, Negative, Literal, negated, negate, literal_key, literal_lessp
from .core.clause import Clause, clean, standardize, standardize_kb
from .core.clause_set import ClauseSet
from .core.engine import myopic, saturate, make_inferences
from .inference.resolve import resolve, clause_subsumes, subsumed_clauses
from .syntax import ClauseSyntaxError, parse_clause, parse_kb, load_kb_file
from .visualization import format_clause, print_clauses, print_history, export_dot

__all__ = [
    "__version__",
    "Positive", "Negative", "Literal",
    "negated", "negate", "literal_key", "literal_lessp",
    "Clause", "clean", "standardize", "standardize_kb",
    "ClauseSet",
    "myopic", "saturate", "make_inferences",
    "resolve", "clause_subsumes", "subsumed_clauses",
    "ClauseSyntaxError", "parse_clause", "parse_kb", "load_kb_file",
    "format_clause", "print_clauses", "print_history", "export_dot",
]
