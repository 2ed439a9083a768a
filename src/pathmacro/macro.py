"""Macro — a named path-parameter type.

A macro pairs an identity (``indent`` plus an optional ``alias``) and two
structural flags with a base evaluator and a table of named evaluator
builders::

    positive = (
        Macro("positive", "pos", evaluator=is_positive)
        .register_func("max", lambda n: ...)
        .register_func("even", lambda: ...)
    )

Builders receive literal arguments that the route-pattern parser has
already converted to Python values and return an ``Evaluator``.
"""

import inspect
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from pathmacro.errors import ArityOrTypeMismatch, UnknownFunction
from pathmacro.evaluators import Evaluator, compose

# Builder: user-defined function with variable signature returning an Evaluator
type EvaluatorBuilder = Callable[..., Evaluator]


class Macro:
    """A path-parameter type definition.

    Construction does no validation, so a macro works standalone (for
    example in tests). A ``MacroSet`` checks the invariants when the
    macro is added.

    ``master`` marks the type assumed for parameters declared without a
    type. ``trailing`` marks a type that may only appear as the last
    segment of a route and consumes the rest of the path.
    """

    __slots__ = ("_alias", "_evaluator", "_funcs", "_indent", "_master", "_trailing")

    def __init__(
        self,
        indent: str,
        alias: str = "",
        master: bool = False,
        trailing: bool = False,
        evaluator: Evaluator | None = None,
    ) -> None:
        self._indent = indent
        self._alias = alias
        self._master = master
        self._trailing = trailing
        self._evaluator = evaluator
        self._funcs: dict[str, EvaluatorBuilder] = {}

    @property
    def indent(self) -> str:
        """Primary type name."""
        return self._indent

    @property
    def alias(self) -> str:
        """Secondary type name, ``""`` when there is none."""
        return self._alias

    @property
    def master(self) -> bool:
        return self._master

    @property
    def trailing(self) -> bool:
        return self._trailing

    @property
    def evaluator(self) -> Evaluator | None:
        """Base evaluator. A ``MacroSet`` refuses macros without one."""
        return self._evaluator

    @property
    def funcs(self) -> Mapping[str, EvaluatorBuilder]:
        """Read-only view of the function table."""
        return MappingProxyType(self._funcs)

    def register_func(self, name: str, builder: EvaluatorBuilder) -> "Macro":
        """Attach *builder* under *name* and return the macro.

        An existing builder with the same name is replaced.
        """
        self._funcs[name] = builder
        return self

    def get_func(self, name: str) -> EvaluatorBuilder | None:
        return self._funcs.get(name)

    def build(self, name: str, *args: Any) -> Evaluator:
        """Call the builder registered under *name* with typed *args*.

        Raises ``UnknownFunction`` if no such builder exists.
        Raises ``ArityOrTypeMismatch`` if *args* don't fit the builder's
        signature or the builder doesn't return a callable.
        """
        builder = self._funcs.get(name)
        if builder is None:
            raise UnknownFunction(self._indent, name)

        _check_arguments(self._indent, name, builder, args)
        evaluator = builder(*args)
        if not callable(evaluator):
            msg = (
                f"{self._indent}.{name}() returned {type(evaluator).__name__}, "
                f"expected an evaluator"
            )
            raise ArityOrTypeMismatch(msg)
        return evaluator

    def matcher(self, *constraints: Evaluator) -> Evaluator:
        """The base evaluator AND-ed with *constraints*, in order."""
        if self._evaluator is None:
            msg = f"Macro {self._indent!r} has no base evaluator"
            raise TypeError(msg)
        return compose(self._evaluator, constraints)

    def __repr__(self) -> str:
        flags = [f for f, on in (("master", self._master), ("trailing", self._trailing)) if on]
        alias = f"/{self._alias}" if self._alias else ""
        extra = f" [{', '.join(flags)}]" if flags else ""
        return f"<Macro {self._indent}{alias}{extra} funcs={sorted(self._funcs)}>"


def _check_arguments(
    indent: str,
    name: str,
    builder: EvaluatorBuilder,
    args: tuple[Any, ...],
) -> None:
    """Bind *args* to *builder*'s signature and check plain-class annotations."""
    try:
        sig = inspect.signature(builder)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures: let the call decide
        return

    try:
        bound = sig.bind(*args)
    except TypeError as exc:
        msg = f"{indent}.{name}(): {exc}"
        raise ArityOrTypeMismatch(msg) from exc

    for param_name, value in bound.arguments.items():
        annotation = sig.parameters[param_name].annotation
        if not isinstance(annotation, type) or annotation is inspect.Parameter.empty:
            continue
        if sig.parameters[param_name].kind is inspect.Parameter.VAR_POSITIONAL:
            values = value
        else:
            values = (value,)
        for v in values:
            if not _accepts(annotation, v):
                msg = (
                    f"{indent}.{name}(): argument {param_name!r} expects "
                    f"{annotation.__name__}, got {type(v).__name__}"
                )
                raise ArityOrTypeMismatch(msg)


def _accepts(annotation: type, value: Any) -> bool:
    if annotation is int:
        return isinstance(value, int) and not isinstance(value, bool)
    if annotation is float:
        return isinstance(value, int | float) and not isinstance(value, bool)
    return isinstance(value, annotation)
