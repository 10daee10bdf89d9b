"""
Reading clauses from text.

One clause per line, written as a parenthesized list of literals. A
literal is a bare atom name (positive) or ``(not atom)`` (negative):

    (rain (not umbrella) wet)
    ((not wet))
    ()

Blank lines and lines starting with ``;`` are ignored. Atom names are
any run of characters other than whitespace, parentheses and ``;``;
they are case-sensitive. The keyword ``not`` is matched in any case.

Every parsed clause is standardized and the whole list then goes
through standardize_kb, so the loader hands back a normalized
knowledge base.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable, Iterable, Optional

from .core.clause import Clause, standardize, standardize_kb
from .core.literal import Literal, Negative, Positive

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\s*(?:(\()|(\))|([^\s();]+))")


class ClauseSyntaxError(ValueError):
    """A line of a knowledge base file is not a well-formed clause."""

    def __init__(self, message: str, lineno: int | None = None, line: str = "") -> None:
        self.lineno = lineno
        self.line = line
        where = f"line {lineno}: " if lineno is not None else ""
        super().__init__(f"{where}{message}: {line.strip()!r}")


def _tokenize(text: str) -> list[str]:
    tokens = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None or m.end() == pos:
            raise ValueError(f"unexpected character {text[pos:].lstrip()[:1]!r}")
        tokens.append(m.group(m.lastindex))
        pos = m.end()
    return tokens


def _parse_literal(tokens: list[str], i: int) -> tuple[Literal, int]:
    """Parse one literal starting at tokens[i]; return it and the next index."""
    tok = tokens[i]
    if tok == ")":
        raise ValueError("unbalanced ')'")
    if tok != "(":
        return Positive(tok), i + 1
    rest = tokens[i + 1 : i + 4]
    if (len(rest) < 3 or rest[0].lower() != "not"
            or rest[1] in ("(", ")") or rest[2] != ")"):
        raise ValueError("nested list must have the form (not atom)")
    return Negative(rest[1]), i + 4


def parse_clause(text: str) -> Clause:
    """
    Parse one clause written as ``(lit lit ...)``.

    The result is standardized. Raises ValueError on malformed input.
    """
    tokens = _tokenize(text)
    if not tokens or tokens[0] != "(":
        raise ValueError("clause must start with '('")
    if tokens[-1] != ")":
        raise ValueError("clause must end with ')'")

    literals = []
    i = 1
    end = len(tokens) - 1
    while i < end:
        lit, i = _parse_literal(tokens, i)
        literals.append(lit)
    if i != end:
        raise ValueError("unbalanced parentheses")
    return standardize(Clause(literals=tuple(literals)))


def parse_kb(
    lines: Iterable[str],
    on_empty: Optional[Callable] = None,
) -> list[Clause]:
    """Parse clause lines into a normalized knowledge base."""
    clauses = []
    for lineno, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(";"):
            continue
        try:
            clauses.append(parse_clause(stripped))
        except ValueError as e:
            raise ClauseSyntaxError(str(e), lineno, line) from e
    kb = standardize_kb(clauses, on_empty)
    logger.debug("Parsed %d clauses, %d after normalization", len(clauses), len(kb))
    return kb


def _decode_lines(raw_lines: Iterable[bytes]):
    """Decode UTF-8 lines one at a time so a bad byte is reported with its line."""
    for lineno, raw in enumerate(raw_lines, start=1):
        try:
            yield raw.decode("utf-8-sig" if lineno == 1 else "utf-8")
        except UnicodeDecodeError as e:
            raise ClauseSyntaxError(
                f"not valid UTF-8 (byte {e.start})", lineno,
                raw.decode("utf-8", errors="replace"),
            ) from e


def load_kb_file(
    path: str | Path,
    on_empty: Optional[Callable] = None,
) -> list[Clause]:
    """
    Load a UTF-8 knowledge base file.

    OSError from opening or reading it propagates as is; undecodable
    bytes raise ClauseSyntaxError naming the line.
    """
    with open(path, "rb") as f:
        kb = parse_kb(_decode_lines(f), on_empty)
    logger.debug("Loaded knowledge base from %s", path)
    return kb
