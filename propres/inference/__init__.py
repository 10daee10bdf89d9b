from .resolve import resolve, clause_subsumes, subsumed_clauses

__all__ = ["resolve", "clause_subsumes", "subsumed_clauses"]
