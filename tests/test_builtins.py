"""Tests for pathmacro.builtins — builtin types and their constraint builders."""

import pytest

from pathmacro.builtins import BUILTIN_FACTORIES, defaults, file_macro
from pathmacro.errors import ArityOrTypeMismatch, ConfigurationError
from pathmacro.macro import Macro
from pathmacro.macros import MacroSet


@pytest.fixture
def macros() -> MacroSet:
    return defaults()


def _macro(macros: MacroSet, name: str) -> Macro:
    m = macros.get(name)
    assert m is not None
    return m


def _base(macros: MacroSet, name: str, segment: str) -> bool:
    evaluator = _macro(macros, name).evaluator
    assert evaluator is not None
    return evaluator(segment)


class TestDefaultSet:
    def test_names(self, macros: MacroSet) -> None:
        assert macros.names() == [
            "string",
            "number",
            "int64",
            "uint8",
            "uint64",
            "bool",
            "alphabetical",
            "path",
        ]

    def test_names_and_aliases_unique(self, macros: MacroSet) -> None:
        indents = [m.indent for m in macros]
        aliases = [m.alias for m in macros if m.alias]
        assert len(set(indents)) == len(indents)
        assert len(set(aliases)) == len(aliases)
        assert not set(indents) & set(aliases)

    def test_single_master_is_number(self, macros: MacroSet) -> None:
        masters = [m for m in macros if m.master]
        assert len(masters) == 1
        assert macros.get_master() is _macro(macros, "number")

    def test_single_trailing_is_path(self, macros: MacroSet) -> None:
        assert [m.indent for m in macros.get_trailings()] == ["path"]

    def test_aliases(self, macros: MacroSet) -> None:
        assert _macro(macros, "int").indent == "number"
        assert _macro(macros, "long").indent == "int64"
        assert _macro(macros, "boolean").indent == "bool"

    def test_empty_key(self, macros: MacroSet) -> None:
        assert macros.get("") is None

    def test_fresh_set_per_call(self) -> None:
        a = defaults()
        b = defaults()
        a.unregister("string")
        assert "string" not in a
        assert "string" in b
        assert a.get("number") is not b.get("number")

    def test_not_frozen(self, macros: MacroSet) -> None:
        assert macros.frozen is False

    def test_file_not_included(self, macros: MacroSet) -> None:
        assert "file" not in macros
        assert len(BUILTIN_FACTORIES) == len(macros)

    def test_file_can_be_added(self, macros: MacroSet) -> None:
        assert macros.add(file_macro()) is True


class TestBaseEvaluators:
    @pytest.mark.parametrize(
        ("name", "segment", "expected"),
        [
            ("string", "anything at all", True),
            ("string", "", True),
            ("number", "123", True),
            ("number", "-5", True),
            ("number", "12a", False),
            ("number", "", False),
            ("number", "+5", False),
            ("number", "99999999999999999999999", True),
            ("int64", "9223372036854775807", True),
            ("int64", "-9223372036854775808", True),
            ("int64", "9223372036854775808", False),
            ("int64", "1.0", False),
            ("uint8", "0", True),
            ("uint8", "255", True),
            ("uint8", "256", False),
            ("uint8", "-1", False),
            ("uint8", "007", False),
            ("uint64", "18446744073709551615", True),
            ("uint64", "18446744073709551616", False),
            ("uint64", "-1", False),
            ("uint64", "abc", False),
            ("bool", "True", True),
            ("bool", "0", True),
            ("bool", "FALSE", True),
            ("bool", "yes", False),
            ("bool", "", False),
            ("alphabetical", "Hello World", True),
            ("alphabetical", "abc1", False),
            ("alphabetical", "", False),
            ("path", "a/b/c", True),
            ("path", "", True),
        ],
    )
    def test_table(self, macros: MacroSet, name: str, segment: str, expected: bool) -> None:
        assert _base(macros, name, segment) is expected

    @pytest.mark.parametrize(
        ("segment", "expected"),
        [("report_v1.2-final.pdf", True), ("", True), ("with space", False), ("a/b", False)],
    )
    def test_file(self, segment: str, expected: bool) -> None:
        evaluator = file_macro().evaluator
        assert evaluator is not None
        assert evaluator(segment) is expected


class TestStringFuncs:
    def test_regexp(self, macros: MacroSet) -> None:
        evaluate = _macro(macros, "string").build("regexp", "^[a-z]+$")
        assert evaluate("abc") is True
        assert evaluate("abc1") is False

    def test_regexp_invalid(self, macros: MacroSet) -> None:
        with pytest.raises(ConfigurationError):
            _macro(macros, "string").build("regexp", "[")

    def test_prefix_suffix_contains(self, macros: MacroSet) -> None:
        string = _macro(macros, "string")
        assert string.build("prefix", "img_")("img_01") is True
        assert string.build("prefix", "img_")("01_img") is False
        assert string.build("suffix", ".png")("a.png") is True
        assert string.build("suffix", ".png")("a.jpg") is False
        assert string.build("contains", "ab")("xaby") is True
        assert string.build("contains", "ab")("xbay") is False

    def test_length_bounds_inclusive(self, macros: MacroSet) -> None:
        string = _macro(macros, "string")
        assert string.build("min", 3)("abc") is True
        assert string.build("min", 3)("ab") is False
        assert string.build("max", 3)("abc") is True
        assert string.build("max", 3)("abcd") is False

    def test_length_counts_utf8_bytes(self, macros: MacroSet) -> None:
        string = _macro(macros, "string")
        assert string.build("max", 1)("é") is False
        assert string.build("max", 2)("é") is True
        assert string.build("min", 2)("é") is True
        assert string.build("min", 4)("日本") is True
        assert string.build("max", 5)("日本") is False

    def test_length_with_lone_surrogate(self, macros: MacroSet) -> None:
        string = _macro(macros, "string")
        assert string.build("max", 3)("\udcff") is True
        assert string.build("max", 2)("\udcff") is False

    def test_length_needs_int(self, macros: MacroSet) -> None:
        with pytest.raises(ArityOrTypeMismatch):
            _macro(macros, "string").build("min", "3")


class TestNumericFuncs:
    def test_number_min_max(self, macros: MacroSet) -> None:
        number = _macro(macros, "number")
        assert number.build("min", 1)("1") is True
        assert number.build("min", 1)("0") is False
        assert number.build("max", 100)("100") is True
        assert number.build("max", 100)("101") is False

    def test_number_overflow_fails_closed(self, macros: MacroSet) -> None:
        assert _macro(macros, "number").build("min", 0)("99999999999999999999") is False

    def test_number_range(self, macros: MacroSet) -> None:
        evaluate = _macro(macros, "number").build("range", 1, 10)
        assert evaluate("1") is True
        assert evaluate("10") is True
        assert evaluate("0") is False
        assert evaluate("11") is False
        assert evaluate("x") is False

    @pytest.mark.parametrize(
        ("segment", "expected"),
        [("-10", True), ("0", True), ("10", True), ("11", False), ("-11", False), ("abc", False)],
    )
    def test_int64_range(self, macros: MacroSet, segment: str, expected: bool) -> None:
        evaluate = _macro(macros, "int64").build("range", -10, 10)
        assert evaluate(segment) is expected

    def test_int64_bounds_must_fit(self, macros: MacroSet) -> None:
        with pytest.raises(ArityOrTypeMismatch, match="outside"):
            _macro(macros, "int64").build("min", 1 << 63)

    def test_uint8(self, macros: MacroSet) -> None:
        uint8 = _macro(macros, "uint8")
        assert uint8.build("min", 10)("10") is True
        assert uint8.build("min", 10)("9") is False
        assert uint8.build("max", 200)("201") is False
        assert uint8.build("range", 5, 6)("6") is True
        assert uint8.build("range", 5, 6)("300") is False

    def test_uint8_bounds_must_fit(self, macros: MacroSet) -> None:
        uint8 = _macro(macros, "uint8")
        with pytest.raises(ArityOrTypeMismatch):
            uint8.build("max", 256)
        with pytest.raises(ArityOrTypeMismatch):
            uint8.build("range", -1, 10)

    def test_uint64(self, macros: MacroSet) -> None:
        uint64 = _macro(macros, "uint64")
        assert uint64.build("min", 18446744073709551614)("18446744073709551615") is True
        assert uint64.build("max", 5)("-1") is False
        assert uint64.build("range", 0, 5)("5") is True

    def test_inverted_range_never_matches(self, macros: MacroSet) -> None:
        evaluate = _macro(macros, "number").build("range", 10, 1)
        assert evaluate("5") is False

    def test_range_arity(self, macros: MacroSet) -> None:
        with pytest.raises(ArityOrTypeMismatch):
            _macro(macros, "number").build("range", 1)

    def test_bool_has_no_funcs(self, macros: MacroSet) -> None:
        assert dict(_macro(macros, "bool").funcs) == {}


class TestHostileSegments:
    """Evaluators return False for any string, whatever its size or script."""

    HUGE = "9" * 5000

    @pytest.mark.parametrize("name", ["int64", "uint64", "uint8", "bool", "alphabetical"])
    @pytest.mark.parametrize(
        "segment",
        [HUGE, "-" + HUGE, "0" * 5000 + "1x", "١٢٣", "１２３", "é", "日本", "\udcff"],
    )
    def test_base_rejects(self, macros: MacroSet, name: str, segment: str) -> None:
        assert _base(macros, name, segment) is False

    def test_number_base_accepts_long_digits(self, macros: MacroSet) -> None:
        assert _base(macros, "number", self.HUGE) is True
        assert _base(macros, "number", "١٢٣") is False

    def test_leading_zeros_parse(self, macros: MacroSet) -> None:
        assert _base(macros, "int64", "0" * 5000 + "42") is True
        assert _macro(macros, "int64").build("max", 42)("0" * 5000 + "42") is True
        assert _base(macros, "uint64", "0" * 5000) is True

    @pytest.mark.parametrize("name", ["number", "int64", "uint64", "uint8"])
    @pytest.mark.parametrize(
        ("func", "args"),
        [("min", (1,)), ("max", (200,)), ("range", (0, 200))],
    )
    @pytest.mark.parametrize("segment", [HUGE, "-" + HUGE, "١٢٣", "日本"])
    def test_constraints_fail_closed(
        self,
        macros: MacroSet,
        name: str,
        func: str,
        args: tuple[int, ...],
        segment: str,
    ) -> None:
        m = _macro(macros, name)
        assert m.build(func, *args)(segment) is False
        assert m.matcher(m.build(func, *args))(segment) is False

    @pytest.mark.parametrize("segment", ["9" * 5000, "日本", "\udcff", ""])
    def test_string_funcs_never_raise(self, macros: MacroSet, segment: str) -> None:
        string = _macro(macros, "string")
        for func, args in [
            ("regexp", ("^[0-9]+$",)),
            ("prefix", ("9",)),
            ("suffix", ("本",)),
            ("contains", ("x",)),
            ("min", (1,)),
            ("max", (10,)),
        ]:
            assert isinstance(string.build(func, *args)(segment), bool)


class TestComposition:
    def test_base_failure_short_circuits(self, macros: MacroSet) -> None:
        uint8 = _macro(macros, "uint8")
        evaluate = uint8.matcher(uint8.build("min", 0))
        assert evaluate("256") is False
        assert evaluate("abc") is False
        assert evaluate("0") is True
