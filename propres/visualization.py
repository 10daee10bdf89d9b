"""
Printing and reporting utilities.
"""

import sys

from .core.clause import Clause


def format_clause(clause: Clause) -> str:
    """One line: the literals separated by single spaces."""
    return " ".join(str(lit) for lit in clause.literals)


def print_clauses(clauses, file=None):
    """Write each clause on its own line."""
    out = file if file is not None else sys.stdout
    for clause in clauses:
        out.write(format_clause(clause) + "\n")


def print_history(history: list, file=None):
    """Print the per-round summary collected by saturate()."""
    out = file if file is not None else sys.stderr
    print(f"\n{'='*60}", file=out)
    print("Saturation history:", file=out)
    print(f"{'='*60}", file=out)
    for entry in history:
        produced = ", ".join(entry["produced"]) if entry["produced"] else "(nothing new)"
        print(f"  Round {entry['round']} [{entry['known_size']} known]: {produced}", file=out)


def _dot_quote(text: str) -> str:
    return '"' + text.replace('"', '\\"') + '"'


def export_dot(clauses, path="propres_graph.dot"):
    """
    Export the derivation graph as a DOT file for Graphviz.

    Knowledge-base clauses are grey, derived clauses blue. Each
    parent -> child edge is written once, however many times it recurs.
    """
    edges = []
    seen = set()
    for clause in clauses:
        for parent in clause.source:
            edge = (parent, clause.name)
            if edge not in seen:
                seen.add(edge)
                edges.append(edge)

    lines = ["digraph propres {", "  rankdir=BT;", "  node [shape=box, style=rounded];"]
    for clause in clauses:
        color = "lightgray" if clause.step == 0 else "lightblue"
        lines.append(f"  {_dot_quote(clause.name)} [fillcolor={color}, style=filled];")
    for parent, child in edges:
        lines.append(f"  {_dot_quote(parent)} -> {_dot_quote(child)};")
    lines.append("}")

    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
