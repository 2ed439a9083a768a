"""pathmacro exception hierarchy.

Shared across Macro, MacroSet and the builtin library so every module
raises and catches the same types.

Registration refusals are *not* exceptions: ``MacroSet.register()``
returns ``None`` and ``MacroSet.add()`` returns ``False``. The types
below cover programming and configuration mistakes that should stop
an application at startup.
"""


class MacroError(Exception):
    """Base for all pathmacro-specific errors."""


class ConfigurationError(MacroError):
    """Raised when a macro or a constraint is configured incorrectly.

    Typically surfaces while routes are compiled at startup, e.g. a
    ``regexp(...)`` argument that does not compile or a parameter whose
    type is not registered.
    """


class ArityOrTypeMismatch(MacroError, TypeError):  # noqa: N818
    """Arguments passed to an evaluator builder do not fit its signature.

    Raised by ``Macro.build()`` when the literal arguments cannot be bound
    to the builder, or by a builtin builder when a bound does not fit the
    type's width (``uint8`` ``min(300)``).
    """


class UnknownFunction(MacroError, LookupError):  # noqa: N818
    """No builder is registered under the requested function name."""

    def __init__(self, macro: str, name: str) -> None:
        self.macro = macro
        self.name = name
        super().__init__(f"Macro {macro!r} has no function {name!r}")
