"""
The saturation loop.

One round (a "myopic" pass) resolves every knowledge-base clause
against every clause known so far and keeps the resolvents that are
not known yet. Rounds repeat, folding their results into the known
set, until a round produces nothing new: the fixpoint.

The known set has a single owner at a time. saturate() takes it, grows
it in place, and hands it back; nothing else touches it during a run.
The knowledge base itself is never modified.

Termination: the atoms are fixed by the knowledge base, so only
finitely many normalized clauses exist, and every non-final round adds
at least one. The bound is exponential in the number of atoms; use
max_rounds or stop_fn to cut a run short.
"""

import logging
import sys
from typing import Callable, Optional

from .clause import standardize_kb
from .clause_set import ClauseSet
from ..inference.resolve import resolve

logger = logging.getLogger(__name__)


def myopic(kb: list, known: ClauseSet, on_empty: Optional[Callable] = None) -> list:
    """
    One inference round: resolve each clause of kb with each clause in
    known, returning the resolvents not already in known.

    The result may hold the same clause more than once when different
    pairs derive it. known is only read.

    Empty resolvents are never returned. on_empty, if given, is called
    with each one (its source names the two parents).
    """
    new_clauses = []
    for cl in kb:
        for key in known:
            for resolvent in resolve(cl, key):
                if resolvent.is_empty:
                    if on_empty:
                        on_empty(resolvent)
                    continue
                if resolvent in known:
                    continue
                new_clauses.append(resolvent)
    return new_clauses


def _absorb(new_clauses: list, known: ClauseSet, round_no: int) -> list:
    """Insert a round's clauses; those actually added are stamped with the round and returned."""
    added = []
    for clause in new_clauses:
        if known.insert(clause):
            clause.step = round_no
            added.append(clause)
    return added


def _trace(msg: str):
    print(msg, file=sys.stderr)


def saturate(
    kb: list,
    known: ClauseSet,
    max_rounds: Optional[int] = None,
    on_empty: Optional[Callable] = None,
    stop_fn: Optional[Callable] = None,
    history: Optional[list] = None,
    first_round: int = 1,
    verbose: bool = False,
) -> ClauseSet:
    """
    Run myopic rounds until nothing new appears. Returns known, grown.

    Args:
        kb:           normalized knowledge base (read only)
        known:        clauses known so far; taken over by this call
        max_rounds:   safety limit on the number of rounds; the partial
                      set is returned when it is hit
        on_empty:     on_empty(clause) for each contradiction derived
        stop_fn:      stop_fn(known) -> bool, checked before every round
        history:      if a list, one dict per round is appended to it
        first_round:  number given to the first round (used as step stamp)
        verbose:      print a round-by-round trace on stderr
    """
    round_no = first_round
    rounds_run = 0
    while True:
        if max_rounds is not None and rounds_run >= max_rounds:
            if verbose:
                _trace(f"  [round limit] stopped after {rounds_run} rounds")
            logger.info("Round limit %d reached with %d clauses", max_rounds, len(known))
            break
        if stop_fn and stop_fn(known):
            if verbose:
                _trace("  [stopped] stop condition met")
            logger.info("Stop condition met before round %d", round_no)
            break

        if verbose:
            _trace(f"\n--- Round {round_no}: {len(known)} known ---")

        new_clauses = myopic(kb, known, on_empty)
        rounds_run += 1
        if not new_clauses:
            if verbose:
                _trace(f"  [fixpoint] nothing new in round {round_no}")
            logger.debug("Fixpoint at round %d: %d clauses", round_no, len(known))
            if history is not None:
                history.append({"round": round_no, "produced": [], "known_size": len(known)})
            break

        added = _absorb(new_clauses, known, round_no)
        if verbose:
            for clause in added:
                _trace(f"  [new] {clause.name} (from {clause.source[0]} + {clause.source[1]})")
        logger.debug("Round %d: %d new clauses, %d known", round_no, len(added), len(known))
        if history is not None:
            history.append({
                "round": round_no,
                "produced": [c.name for c in added],
                "known_size": len(known),
            })
        round_no += 1

    return known


def make_inferences(
    kb: list,
    max_rounds: Optional[int] = None,
    on_empty: Optional[Callable] = None,
    stop_fn: Optional[Callable] = None,
    history: Optional[list] = None,
    verbose: bool = False,
) -> list:
    """
    Compute the resolution closure of kb.

    Returns every clause of the normalized kb followed by every derived
    clause, as a list. Keyword arguments are passed on to saturate();
    max_rounds counts the initial pass against the knowledge base too.
    """
    kb = standardize_kb(kb, on_empty)
    seed = ClauseSet.from_list(kb)
    logger.debug("Knowledge base: %d clauses", len(kb))

    if max_rounds is not None and max_rounds <= 0:
        return seed.to_list()

    if verbose:
        _trace(f"\n--- Round 1: {len(seed)} known ---")
    initial = myopic(kb, seed, on_empty)

    known = ClauseSet.from_list(kb)
    added = _absorb(initial, known, 1)
    if verbose:
        for clause in added:
            _trace(f"  [new] {clause.name} (from {clause.source[0]} + {clause.source[1]})")
    if history is not None:
        history.append({
            "round": 1,
            "produced": [c.name for c in added],
            "known_size": len(known),
        })

    if initial:
        known = saturate(
            kb, known,
            max_rounds=None if max_rounds is None else max_rounds - 1,
            on_empty=on_empty,
            stop_fn=stop_fn,
            history=history,
            first_round=2,
            verbose=verbose,
        )
    elif verbose:
        _trace("  [fixpoint] nothing new in round 1")

    logger.info("Closure: %d clauses (%d in knowledge base)", len(known), len(kb))
    return known.to_list()
