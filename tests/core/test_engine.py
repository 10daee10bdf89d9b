"""
Property-based and unit tests for the saturation engine.

Core invariants:
    - myopic never returns a clause already known, and never an empty clause
    - myopic only reads the known set
    - After saturate returns, another myopic round finds nothing (fixpoint)
    - make_inferences returns the knowledge base followed by everything derived
    - max_rounds and stop_fn cut a run short; history records each round
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from propres.core.literal import Positive, Negative
from propres.core.clause import Clause, standardize, standardize_kb
from propres.core.clause_set import ClauseSet
from propres.core.engine import myopic, saturate, make_inferences, _absorb


A, B, C, D, Q = (Positive(x) for x in "ABCDQ")
nA, nB, nC, nD, nQ = (Negative(x) for x in "ABCDQ")


# ── Helpers ──────────────────────────────────────────────────────────────────

def chain_kb() -> list:
    """A -> B -> C -> D -> Q as clauses."""
    return [
        Clause.of(nA, B),
        Clause.of(nB, C),
        Clause.of(nC, D),
        Clause.of(nD, Q),
    ]


def saturated(kb: list) -> ClauseSet:
    kb = standardize_kb(kb)
    return saturate(kb, ClauseSet.from_list(kb))


# ── myopic ───────────────────────────────────────────────────────────────────

class TestMyopic:
    def test_first_round_of_chain(self):
        kb = chain_kb()
        new = myopic(kb, ClauseSet.from_list(kb))
        assert set(new) == {Clause.of(nA, C), Clause.of(nB, D), Clause.of(nC, Q)}

    def test_repeats_allowed_within_a_round(self):
        """Both orders of the same pair derive (not A) C."""
        kb = chain_kb()
        new = myopic(kb, ClauseSet.from_list(kb))
        assert new.count(Clause.of(nA, C)) == 2

    def test_known_set_not_mutated(self):
        kb = chain_kb()
        known = ClauseSet.from_list(kb)
        myopic(kb, known)
        assert known.to_list() == kb

    def test_known_clauses_filtered(self):
        kb = chain_kb()
        known = ClauseSet.from_list(kb + [Clause.of(nA, C)])
        assert Clause.of(nA, C) not in myopic(kb, known)

    def test_empty_resolvent_dropped(self):
        kb = [Clause.of(A), Clause.of(nA)]
        assert myopic(kb, ClauseSet.from_list(kb)) == []

    def test_on_empty_called(self):
        kb = [Clause.of(A), Clause.of(nA)]
        seen = []
        myopic(kb, ClauseSet.from_list(kb), on_empty=seen.append)
        assert len(seen) == 2
        assert all(c.is_empty for c in seen)
        assert {c.source for c in seen} == {("A", "(not A)"), ("(not A)", "A")}

    def test_only_kb_clauses_on_the_left(self):
        """Two known-but-not-kb clauses are never resolved with each other."""
        kb = [Clause.of(C)]
        known = ClauseSet.from_list([Clause.of(C), Clause.of(nA, B), Clause.of(A, D)])
        assert myopic(kb, known) == []


# ── saturate ─────────────────────────────────────────────────────────────────

class TestSaturate:
    def test_chain_closure(self):
        known = saturated(chain_kb())
        for clause in (Clause.of(nA, C), Clause.of(nA, D), Clause.of(nA, Q)):
            assert clause in known

    def test_returns_same_set(self):
        kb = chain_kb()
        known = ClauseSet.from_list(kb)
        assert saturate(kb, known) is known

    def test_fixpoint_unchanged(self):
        kb = [Clause.of(A, B), Clause.of(C, D)]
        known = ClauseSet.from_list(kb)
        assert saturate(kb, known).to_list() == kb

    def test_steps_stamped_by_round(self):
        kb = chain_kb()
        known = saturate(kb, ClauseSet.from_list(kb))
        assert known.get(Clause.of(nA, B)).step == 0
        assert known.get(Clause.of(nA, C)).step == 1
        assert known.get(Clause.of(nA, D)).step == 2
        assert known.get(Clause.of(nA, Q)).step == 3

    def test_max_rounds(self):
        kb = chain_kb()
        known = saturate(kb, ClauseSet.from_list(kb), max_rounds=1)
        assert Clause.of(nA, C) in known
        assert Clause.of(nA, D) not in known

    def test_zero_rounds(self):
        kb = chain_kb()
        assert len(saturate(kb, ClauseSet.from_list(kb), max_rounds=0)) == len(kb)

    def test_stop_fn(self):
        kb = chain_kb()
        known = saturate(kb, ClauseSet.from_list(kb),
                         stop_fn=lambda s: Clause.of(nA, C) in s)
        assert Clause.of(nA, C) in known
        assert Clause.of(nA, D) not in known

    def test_only_inserted_clauses_stamped(self):
        """Repeats inside one round are rejected by the set and keep step 0."""
        kb = chain_kb()
        known = ClauseSet.from_list(kb)
        new = myopic(kb, known)
        added = _absorb(new, known, 7)
        assert len(added) == 3
        assert all(c.step == 7 for c in added)
        rejected = [c for c in new if not any(c is a for a in added)]
        assert len(rejected) == 3
        assert all(c.step == 0 for c in rejected)

    def test_history(self):
        kb = chain_kb()
        history = []
        saturate(kb, ClauseSet.from_list(kb), history=history)
        assert [h["round"] for h in history] == list(range(1, len(history) + 1))
        assert history[-1]["produced"] == []
        assert all(h["produced"] for h in history[:-1])
        assert "(not A) C" in history[0]["produced"]

    def test_verbose_trace_on_stderr(self, capsys):
        kb = chain_kb()
        saturate(kb, ClauseSet.from_list(kb), verbose=True)
        out, err = capsys.readouterr()
        assert out == ""
        assert "Round 1" in err
        assert "[new] (not A) C" in err
        assert "[fixpoint]" in err


# ── make_inferences ──────────────────────────────────────────────────────────

class TestMakeInferences:
    def test_empty_kb(self):
        assert make_inferences([]) == []

    def test_chain(self):
        closure = make_inferences(chain_kb())
        for clause in (Clause.of(nA, C), Clause.of(nA, D), Clause.of(nA, Q)):
            assert clause in closure

    def test_chain_closure_exact(self):
        closure = set(make_inferences(chain_kb()))
        atoms = "ABCDQ"
        expected = {
            Clause.of(Negative(atoms[i]), Positive(atoms[j]))
            for i in range(5) for j in range(i + 1, 5)
        }
        assert closure == expected

    def test_no_complementary_literals(self):
        kb = [Clause.of(A, B), Clause.of(C, D)]
        assert make_inferences(kb) == kb

    def test_kb_normalized_and_deduplicated(self):
        kb = [Clause.of(B, A), Clause.of(A, B, B), Clause.of(D, C), Clause()]
        closure = make_inferences(kb)
        assert closure == [Clause.of(A, B), Clause.of(C, D)]

    def test_kb_comes_first(self):
        kb = chain_kb()
        closure = make_inferences(kb)
        assert closure[:len(kb)] == kb
        assert len(closure) == len(set(closure))

    def test_contradiction_silently_dropped(self):
        closure = make_inferences([Clause.of(A), Clause.of(nA)])
        assert closure == [Clause.of(A), Clause.of(nA)]

    def test_contradiction_hook(self):
        seen = []
        make_inferences([Clause.of(nA, B), Clause.of(A), Clause.of(nB)],
                        on_empty=seen.append)
        assert seen
        assert all(c.is_empty for c in seen)

    def test_max_rounds_counts_initial_pass(self):
        closure = make_inferences(chain_kb(), max_rounds=1)
        assert Clause.of(nA, C) in closure
        assert Clause.of(nA, D) not in closure

    def test_max_rounds_zero(self):
        assert make_inferences(chain_kb(), max_rounds=0) == chain_kb()

    def test_history_starts_at_round_one(self):
        history = []
        make_inferences(chain_kb(), history=history)
        assert [h["round"] for h in history] == list(range(1, len(history) + 1))
        assert history[-1]["produced"] == []

    def test_input_untouched(self):
        kb = [Clause.of(B, nA), Clause.of(nB, C)]
        make_inferences(kb)
        assert kb == [Clause.of(B, nA), Clause.of(nB, C)]
        assert kb[0].literals == (B, nA)


# ── Property-based tests ─────────────────────────────────────────────────────

atoms = st.sampled_from(["A", "B", "C"])
literals = st.one_of(st.builds(Positive, atoms), st.builds(Negative, atoms))
clauses = st.lists(literals, min_size=1, max_size=3).map(lambda ls: Clause(tuple(ls)))
kbs = st.lists(clauses, max_size=5)


class TestEngineProperties:

    @settings(deadline=None)
    @given(kbs, st.lists(clauses, max_size=4))
    def test_myopic_returns_only_unknown(self, kb, extra):
        kb = standardize_kb(kb)
        known = ClauseSet.from_list(kb + standardize_kb(extra))
        for clause in myopic(kb, known):
            assert clause not in known
            assert not clause.is_empty

    @settings(deadline=None)
    @given(kbs)
    def test_saturate_reaches_fixpoint(self, kb):
        kb = standardize_kb(kb)
        known = saturate(kb, ClauseSet.from_list(kb))
        assert myopic(kb, known) == []

    @settings(deadline=None)
    @given(kbs)
    def test_closure_contains_kb(self, kb):
        closure = make_inferences(kb)
        assert set(standardize_kb(kb)) <= set(closure)

    @settings(deadline=None)
    @given(kbs)
    def test_closure_is_normalized(self, kb):
        for clause in make_inferences(kb):
            assert not clause.is_empty
            assert standardize(clause).literals == clause.literals

    @settings(deadline=None)
    @given(kbs)
    def test_make_inferences_matches_plain_saturate(self, kb):
        assert set(make_inferences(kb)) == set(saturated(kb))
