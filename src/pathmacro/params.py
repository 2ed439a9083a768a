"""Path parameter descriptors and their compiled evaluators.

The route-pattern parser turns ``{id:number min(1) max(100)}`` into::

    Param(
        name="id",
        type=TypedParam("number"),
        funcs=(ParamFunc("min", (1,)), ParamFunc("max", (100,))),
    )

Literal arguments arrive already converted to Python values. This
module only resolves the type against a ``MacroSet`` and composes the
evaluators.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pathmacro.errors import ConfigurationError
from pathmacro.evaluators import Evaluator

if TYPE_CHECKING:
    from pathmacro.macros import MacroSet


@runtime_checkable
class ParamType(Protocol):
    """What the parser knows about a parameter's declared type.

    Any object with ``indent`` and ``alias`` satisfies this. ``alias`` is
    ``""`` when the parser has no alternative name for the type.
    """

    @property
    def indent(self) -> str: ...

    @property
    def alias(self) -> str: ...


def has_alias(param_type: ParamType) -> str | None:
    """The alias declared by *param_type*, or ``None``."""
    alias = getattr(param_type, "alias", "")
    return alias or None


@dataclass(frozen=True, slots=True)
class TypedParam:
    """A parameter type as written in a route pattern."""

    indent: str
    alias: str = ""


@dataclass(frozen=True, slots=True)
class ParamFunc:
    """A constraint call, e.g. ``range(1, 10)`` -> ``ParamFunc("range", (1, 10))``."""

    name: str
    args: tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class Param:
    """A declared path parameter.

    ``type`` is ``None`` when the pattern gives no type (``{id}``); the
    set's master macro applies then.
    """

    name: str
    type: ParamType | None = None
    funcs: tuple[ParamFunc, ...] = ()


def compile_param(macros: "MacroSet", param: Param) -> Evaluator:
    """Build the evaluator deciding whether a segment matches *param*.

    The macro's base evaluator runs first, then each constraint in the
    order the pattern declares them.

    Raises ``ConfigurationError`` if the type is unknown or the set has
    no master macro for an untyped parameter. Builder errors
    (``UnknownFunction``, ``ArityOrTypeMismatch``) propagate unchanged.
    """
    if param.type is None:
        macro = macros.get_master()
        if macro is None:
            msg = f"Parameter {param.name!r} has no type and no master macro is registered"
            raise ConfigurationError(msg)
    else:
        macro = macros.lookup(param.type)
        if macro is None:
            msg = f"Parameter {param.name!r} has unknown type {param.type.indent!r}"
            raise ConfigurationError(msg)

    constraints = [macro.build(func.name, *func.args) for func in param.funcs]
    return macro.matcher(*constraints)
