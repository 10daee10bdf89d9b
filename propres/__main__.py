"""
CLI entry point. Run as: python -m propres KB_FILE

Writes every clause of the resolution closure (knowledge base clauses
first) to stdout, one per line. Progress, history and warnings go to
stderr.
"""

import argparse
import logging
import sys

from . import __version__
from .core.clause_set import ClauseSet
from .core.engine import make_inferences
from .inference.resolve import subsumed_clauses
from .syntax import ClauseSyntaxError, load_kb_file
from .visualization import print_clauses, print_history, export_dot


def _describe_empty(clause) -> str:
    return f"empty clause from {clause.source[0]} + {clause.source[1]}"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="propres",
        description="Propositional resolution closure of a clause knowledge base",
    )
    parser.add_argument("kb", help="Knowledge base file, one (clause) per line")
    parser.add_argument("--max-rounds", type=int, default=None,
                        help="Stop after this many inference rounds (default: run to fixpoint)")
    parser.add_argument("--verbose", action="store_true",
                        help="Trace each round on stderr")
    parser.add_argument("--history", action="store_true",
                        help="Print a per-round summary on stderr")
    parser.add_argument("--report-empty", action="store_true",
                        help="Warn on stderr when a contradiction (empty clause) is derived")
    parser.add_argument("--stop-on-empty", action="store_true",
                        help="Halt after the round in which a contradiction is derived")
    parser.add_argument("--report-subsumed", action="store_true",
                        help="List closure clauses subsumed by a shorter closure clause on stderr")
    parser.add_argument("--save", type=str, default=None,
                        help="Save the closure with provenance as JSON")
    parser.add_argument("--dot", type=str, default=None,
                        help="Export the derivation graph as a DOT file")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level for stderr (default: WARNING)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), stream=sys.stderr,
                        format="%(levelname)s %(name)s: %(message)s")

    load_empties = []
    contradictions = []

    report = args.report_empty or args.stop_on_empty

    try:
        kb = load_kb_file(args.kb, on_empty=load_empties.append if report else None)
    except ClauseSyntaxError as e:
        print(f"Error: {args.kb}: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # only contradictions derived by resolution halt the run
    stop_fn = (lambda known: bool(contradictions)) if args.stop_on_empty else None
    history = [] if args.history else None

    closure = make_inferences(
        kb,
        max_rounds=args.max_rounds,
        on_empty=contradictions.append if report else None,
        stop_fn=stop_fn,
        history=history,
        verbose=args.verbose,
    )

    print_clauses(closure, sys.stdout)

    if history is not None:
        print_history(history, sys.stderr)

    if args.report_empty:
        if load_empties:
            print(f"Warning: {len(load_empties)} clause(s) in {args.kb} normalized "
                  f"to the empty clause and were dropped", file=sys.stderr)
        if contradictions:
            print(f"Warning: contradiction derived ({_describe_empty(contradictions[0])}); "
                  f"empty clauses are not part of the output", file=sys.stderr)

    if args.report_subsumed:
        subsumed = subsumed_clauses(closure)
        print(f"Subsumed: {len(subsumed)} of {len(closure)} clauses", file=sys.stderr)
        for clause in subsumed:
            print(f"  {clause.name}", file=sys.stderr)

    if args.dot:
        export_dot(closure, args.dot)
        print(f"Graph exported to {args.dot}", file=sys.stderr)

    if args.save:
        ClauseSet.from_list(closure).save(args.save)
        print(f"Closure saved to {args.save}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
