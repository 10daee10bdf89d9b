"""
ClauseSet: the membership index over normalized clauses.

Grows only. A clause inserted twice is stored once, and the first
representative inserted is the one kept, so the source/step of its
earliest derivation survives. Iteration follows insertion order.

Serializable for checkpoints:

    {"clauses": [{"literals": [["+", "A"], ["-", "B"]],
                  "source": [...], "step": 3}, ...]}
"""

import json
import logging
from typing import Iterable

from .clause import Clause
from .literal import Negative, Positive

logger = logging.getLogger(__name__)


class ClauseSet:

    def __init__(self, clauses: Iterable[Clause] = ()):
        self._clauses = {}
        for clause in clauses:
            self.insert(clause)

    @classmethod
    def from_list(cls, clauses: Iterable[Clause]) -> "ClauseSet":
        return cls(clauses)

    def insert(self, clause: Clause) -> bool:
        """Add a clause. Returns True if it was not already present."""
        if clause in self._clauses:
            return False
        self._clauses[clause] = clause
        return True

    def contains(self, clause: Clause) -> bool:
        return clause in self._clauses

    def get(self, clause: Clause):
        """The stored representative of clause (with its provenance), or None."""
        return self._clauses.get(clause)

    def to_list(self) -> list:
        return list(self._clauses.values())

    def __contains__(self, clause):
        return clause in self._clauses

    def __iter__(self):
        return iter(self._clauses.values())

    def __len__(self):
        return len(self._clauses)

    def __repr__(self):
        return f"ClauseSet({len(self)} clauses)"

    # ── Serialization ─────────────────────────────────────────────────────

    def to_dict(self):
        def serialize_literal(lit):
            return ["-" if isinstance(lit, Negative) else "+", lit.atom]

        return {
            "clauses": [
                {"literals": [serialize_literal(lit) for lit in c.literals],
                 "source": list(c.source), "step": c.step}
                for c in self
            ],
        }

    @classmethod
    def from_dict(cls, d):
        def deserialize_literal(parts):
            sign, atom = parts
            if sign == "-":
                return Negative(atom)
            if sign == "+":
                return Positive(atom)
            raise ValueError(f"bad literal sign {sign!r} in {parts!r}")

        return cls(
            Clause(tuple(deserialize_literal(p) for p in data["literals"]),
                   tuple(data.get("source", ())), data.get("step", 0))
            for data in d["clauses"]
        )

    def save(self, path="propres_state.json"):
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.debug("Saved %d clauses to %s", len(self), path)

    @classmethod
    def load(cls, path="propres_state.json"):
        with open(path) as f:
            clauses = cls.from_dict(json.load(f))
        logger.debug("Loaded %d clauses from %s", len(clauses), path)
        return clauses
