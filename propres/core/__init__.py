from .literal import Positive, Negative, Literal, negated, negate, literal_key, literal_lessp
from .clause import Clause, clean, standardize, standardize_kb
from .clause_set import ClauseSet
from .engine import myopic, saturate, make_inferences

__all__ = [
    "Positive", "Negative", "Literal",
    "negated", "negate", "literal_key", "literal_lessp",
    "Clause", "clean", "standardize", "standardize_kb",
    "ClauseSet",
    "myopic", "saturate", "make_inferences",
]
