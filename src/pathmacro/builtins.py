"""Builtin path-parameter types.

=============  =======  ======  ========  ==================================
indent         alias    master  trailing  accepts
=============  =======  ======  ========  ==================================
string                                    any single segment
number         int      yes               ``^-?[0-9]+$``
int64          long                       number, fits a signed 64-bit int
uint8                                     0 to 255, no sign
uint64                                    number, fits an unsigned 64-bit int
bool           boolean                    ``1 t T TRUE true True 0 f ...``
alphabetical                              letters and spaces
file                                      letters, digits, ``_ - .``
path                            yes       anything, rest of the path
=============  =======  ======  ========  ==================================

``defaults()`` builds a fresh ``MacroSet`` of every type above except
``file``, which applications add themselves::

    macros = defaults()
    macros.add(file_macro())
    macros.freeze()

Each call creates new ``Macro`` objects, so customizing one set never
leaks into another.
"""

from collections.abc import Callable

from pathmacro.errors import ArityOrTypeMismatch
from pathmacro.evaluators import (
    Evaluator,
    evaluator_from_pattern,
    evaluator_from_regexp,
    parse_bool,
    parse_int,
    parse_uint,
)
from pathmacro.macro import Macro
from pathmacro.macros import MacroSet

NUMBER_PATTERN = r"^-?[0-9]+$"
UINT8_PATTERN = r"^([0-9]|[1-8][0-9]|9[0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])$"
ALPHABETICAL_PATTERN = r"^[a-zA-Z ]+$"
FILE_PATTERN = r"^[a-zA-Z0-9_.-]*$"

_is_number = evaluator_from_pattern(NUMBER_PATTERN)


def _anything(segment: str) -> bool:
    return True


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------


def _regexp(expr: str) -> Evaluator:
    return evaluator_from_regexp(expr)


def _prefix(prefix: str) -> Evaluator:
    def evaluate(segment: str) -> bool:
        return segment.startswith(prefix)

    return evaluate


def _suffix(suffix: str) -> Evaluator:
    def evaluate(segment: str) -> bool:
        return segment.endswith(suffix)

    return evaluate


def _contains(s: str) -> Evaluator:
    def evaluate(segment: str) -> bool:
        return s in segment

    return evaluate


def _byte_length(segment: str) -> int:
    # surrogatepass: lone surrogates from undecodable URLs count, never raise
    return len(segment.encode("utf-8", "surrogatepass"))


def _min_length(n: int) -> Evaluator:
    def evaluate(segment: str) -> bool:
        return _byte_length(segment) >= n

    return evaluate


def _max_length(n: int) -> Evaluator:
    def evaluate(segment: str) -> bool:
        return _byte_length(segment) <= n

    return evaluate


def string_macro() -> Macro:
    """``string``: any single path segment.

    ``min`` and ``max`` bound the UTF-8 byte length of the segment.
    """
    return (
        Macro("string", "", False, False, _anything)
        .register_func("regexp", _regexp)
        .register_func("prefix", _prefix)
        .register_func("suffix", _suffix)
        .register_func("contains", _contains)
        .register_func("min", _min_length)
        .register_func("max", _max_length)
    )


# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------


def _register_bounds(
    macro: Macro,
    parse: Callable[[str], int | None],
    low: int,
    high: int,
) -> Macro:
    """Attach ``min``, ``max`` and ``range`` builders to an integer macro.

    *parse* returns ``None`` for segments outside the type; those never
    satisfy a bound. Builder arguments must lie within ``[low, high]``.
    """

    def check(func: str, **bounds: int) -> None:
        for name, value in bounds.items():
            if not low <= value <= high:
                msg = (
                    f"{macro.indent}.{func}(): {name}={value} is outside "
                    f"the {macro.indent} range [{low}, {high}]"
                )
                raise ArityOrTypeMismatch(msg)

    def min_(min: int) -> Evaluator:  # noqa: A002
        check("min", min=min)

        def evaluate(segment: str) -> bool:
            n = parse(segment)
            return n is not None and n >= min

        return evaluate

    def max_(max: int) -> Evaluator:  # noqa: A002
        check("max", max=max)

        def evaluate(segment: str) -> bool:
            n = parse(segment)
            return n is not None and n <= max

        return evaluate

    def range_(min: int, max: int) -> Evaluator:  # noqa: A002
        check("range", min=min, max=max)

        def evaluate(segment: str) -> bool:
            n = parse(segment)
            return n is not None and min <= n <= max

        return evaluate

    return macro.register_func("min", min_).register_func("max", max_).register_func("range", range_)


def _int64(segment: str) -> int | None:
    return parse_int(segment, 64)


def _uint8(segment: str) -> int | None:
    return parse_uint(segment, 8)


def _uint64(segment: str) -> int | None:
    return parse_uint(segment, 64)


def _is_int64(segment: str) -> bool:
    return _is_number(segment) and _int64(segment) is not None


def _is_uint64(segment: str) -> bool:
    # Negative numbers pass the number pattern and fail the unsigned parse
    return _is_number(segment) and _uint64(segment) is not None


_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def number_macro() -> Macro:
    """``number`` (alias ``int``): optional ``-`` and digits. The master type."""
    macro = Macro("number", "int", True, False, _is_number)
    return _register_bounds(macro, _int64, _INT64_MIN, _INT64_MAX)


def int64_macro() -> Macro:
    """``int64`` (alias ``long``): -9223372036854775808 to 9223372036854775807."""
    macro = Macro("int64", "long", False, False, _is_int64)
    return _register_bounds(macro, _int64, _INT64_MIN, _INT64_MAX)


def uint8_macro() -> Macro:
    """``uint8``: 0 to 255."""
    macro = Macro("uint8", "", False, False, evaluator_from_pattern(UINT8_PATTERN))
    return _register_bounds(macro, _uint8, 0, 255)


def uint64_macro() -> Macro:
    """``uint64``: 0 to 18446744073709551615."""
    macro = Macro("uint64", "", False, False, _is_uint64)
    return _register_bounds(macro, _uint64, 0, (1 << 64) - 1)


# ---------------------------------------------------------------------------
# Other types
# ---------------------------------------------------------------------------


def _is_bool(segment: str) -> bool:
    return parse_bool(segment) is not None


def bool_macro() -> Macro:
    """``bool`` (alias ``boolean``)."""
    return Macro("bool", "boolean", False, False, _is_bool)


def alphabetical_macro() -> Macro:
    """``alphabetical``: upper and lowercase letters and spaces."""
    return Macro("alphabetical", "", False, False, evaluator_from_pattern(ALPHABETICAL_PATTERN))


def file_macro() -> Macro:
    """``file``: letters, digits, underscore, dash and dot. May be empty."""
    return Macro("file", "", False, False, evaluator_from_pattern(FILE_PATTERN))


def path_macro() -> Macro:
    """``path``: anything. Only valid as the last segment of a route."""
    return Macro("path", "", False, True, _anything)


# ---------------------------------------------------------------------------
# Default set
# ---------------------------------------------------------------------------

BUILTIN_FACTORIES: tuple[Callable[[], Macro], ...] = (
    string_macro,
    number_macro,
    int64_macro,
    uint8_macro,
    uint64_macro,
    bool_macro,
    alphabetical_macro,
    path_macro,
)


def defaults() -> MacroSet:
    """A new, unfrozen set holding the builtin types."""
    return MacroSet(factory() for factory in BUILTIN_FACTORIES)
