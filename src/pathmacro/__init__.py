"""pathmacro — typed constraints for route path parameters.

A route such as ``/item/{id:number min(1) max(100)}`` resolves ``number``
in a ``MacroSet``, builds the ``min`` and ``max`` constraints and ANDs
them with the type's base evaluator::

    from pathmacro import Param, ParamFunc, TypedParam, compile_param, defaults

    macros = defaults()
    macros.freeze()

    matches = compile_param(
        macros,
        Param("id", TypedParam("number"), (ParamFunc("min", (1,)), ParamFunc("max", (100,)))),
    )
    matches("42")   # True
    matches("420")  # False
"""

__version__ = "0.1.0"
__all__ = [
    "ArityOrTypeMismatch",
    "ConfigurationError",
    "Evaluator",
    "Macro",
    "MacroError",
    "MacroSet",
    "Param",
    "ParamFunc",
    "ParamType",
    "TypedParam",
    "UnknownFunction",
    "compile_param",
    "compose",
    "defaults",
    "evaluator_from_regexp",
]

# name -> module that defines it
_LAZY_IMPORTS: dict[str, str] = {
    "ArityOrTypeMismatch": "pathmacro.errors",
    "ConfigurationError": "pathmacro.errors",
    "MacroError": "pathmacro.errors",
    "UnknownFunction": "pathmacro.errors",
    "Evaluator": "pathmacro.evaluators",
    "compose": "pathmacro.evaluators",
    "evaluator_from_regexp": "pathmacro.evaluators",
    "Macro": "pathmacro.macro",
    "MacroSet": "pathmacro.macros",
    "Param": "pathmacro.params",
    "ParamFunc": "pathmacro.params",
    "ParamType": "pathmacro.params",
    "TypedParam": "pathmacro.params",
    "compile_param": "pathmacro.params",
    "defaults": "pathmacro.builtins",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import pathmacro`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
