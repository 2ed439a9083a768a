"""Evaluators — pure predicates over a single path segment.

An evaluator answers one question: does this segment satisfy the type
or the constraint? Every evaluator has the signature::

    def evaluator(segment: str) -> bool: ...

Base evaluators decide whether a segment belongs to a type at all.
Constraint evaluators are produced by builders closing over literal
arguments (``min(5)`` returns an evaluator that remembers ``5``).

Evaluators are shared by every request matched against a route, so
they must stay stateless. None of them raise: a segment that cannot be
parsed simply does not match.
"""

import re
from collections.abc import Callable, Iterable

from pathmacro.errors import ConfigurationError

# Type alias for an evaluator function
type Evaluator = Callable[[str], bool]

_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"[0-9]+")

_BOOL_LITERALS: dict[str, bool] = {
    "1": True,
    "t": True,
    "T": True,
    "TRUE": True,
    "true": True,
    "True": True,
    "0": False,
    "f": False,
    "F": False,
    "FALSE": False,
    "false": False,
    "False": False,
}


# ---------------------------------------------------------------------------
# Regular expressions
# ---------------------------------------------------------------------------


def _compile(expr: str) -> re.Pattern[str]:
    try:
        return re.compile(expr)
    except re.error as exc:
        msg = f"Invalid regular expression {expr!r}: {exc}"
        raise ConfigurationError(msg) from exc


def evaluator_from_regexp(expr: str) -> Evaluator:
    """Evaluator that reports whether *expr* is found in the segment.

    The expression is compiled once, here. Anchoring is up to the
    expression itself (``^`` / ``$``), the search is unanchored.

    Raises ``ConfigurationError`` if *expr* does not compile.
    """
    compiled = _compile(expr)

    def evaluate(segment: str) -> bool:
        return compiled.search(segment) is not None

    return evaluate


def evaluator_from_pattern(expr: str) -> Evaluator:
    """Evaluator that requires *expr* to match the whole segment.

    Used for the builtin ``^...$`` patterns: ``$`` alone would accept
    a trailing newline.
    """
    compiled = _compile(expr)

    def evaluate(segment: str) -> bool:
        return compiled.fullmatch(segment) is not None

    return evaluate


# ---------------------------------------------------------------------------
# Strict parsing
# ---------------------------------------------------------------------------


def _magnitude(digits: str, bits: int) -> int | None:
    """Convert ASCII *digits*, or ``None`` if they can't fit in *bits* bits.

    Leading zeros are dropped and over-long inputs rejected before
    ``int()`` runs, so its digit limit is never reached.
    """
    significant = digits.lstrip("0")
    if len(significant) > len(str(1 << bits)):
        return None
    return int(significant or "0")


def parse_int(value: str, bits: int = 64) -> int | None:
    """Parse a decimal signed integer that fits in *bits* bits.

    Accepts an optional ``+`` or ``-`` followed by ASCII digits, nothing
    else (no whitespace, no underscores). Returns ``None`` on failure.
    """
    if not _SIGNED_RE.fullmatch(value):
        return None
    magnitude = _magnitude(value.lstrip("+-"), bits)
    if magnitude is None:
        return None
    n = -magnitude if value[0] == "-" else magnitude
    limit = 1 << (bits - 1)
    if n < -limit or n >= limit:
        return None
    return n


def parse_uint(value: str, bits: int = 64) -> int | None:
    """Parse a decimal unsigned integer that fits in *bits* bits.

    ASCII digits only, no sign. Returns ``None`` on failure.
    """
    if not _UNSIGNED_RE.fullmatch(value):
        return None
    n = _magnitude(value, bits)
    if n is None or n >= 1 << bits:
        return None
    return n


def parse_bool(value: str) -> bool | None:
    """Parse one of the canonical boolean literals, or return ``None``."""
    return _BOOL_LITERALS.get(value)


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def compose(base: Evaluator, constraints: Iterable[Evaluator] = ()) -> Evaluator:
    """AND a base evaluator with constraint evaluators.

    Constraints run in the given order and only after *base* accepted
    the segment. The first ``False`` stops evaluation.
    """
    checks = (base, *constraints)
    if len(checks) == 1:
        return base

    def evaluate(segment: str) -> bool:
        return all(check(segment) for check in checks)

    return evaluate
