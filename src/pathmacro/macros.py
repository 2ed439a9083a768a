"""MacroSet — the ordered registry of path-parameter types.

The set is configured during application setup and frozen before the
router starts serving::

    macros = defaults()
    macros.register("slug", "", False, False, is_slug)
    macros.freeze()

Reads (``get``, ``lookup``, ``get_master``, ``get_trailings``) take no
lock. Mutating a frozen set raises ``RuntimeError``.
"""

import logging
from collections.abc import Iterable, Iterator

from pathmacro.errors import ConfigurationError
from pathmacro.evaluators import Evaluator
from pathmacro.macro import Macro
from pathmacro.params import ParamType, has_alias

logger = logging.getLogger("pathmacro")


class MacroSet:
    """An ordered collection of macros with unique names.

    Invariants, checked whenever a macro is added:

    - ``indent`` is non-empty and unique, and no other macro uses it
      as an alias.
    - a non-empty ``alias`` equals no other macro's ``indent`` or ``alias``.
    - at most one macro is ``master``.
    - every macro has a base evaluator.

    Insertion order only affects iteration; lookups are by name.
    """

    __slots__ = ("_frozen", "_macros")

    def __init__(self, macros: Iterable[Macro] = ()) -> None:
        self._macros: list[Macro] = []
        self._frozen = False
        for macro in macros:
            reason = self._refusal(macro)
            if reason is not None:
                msg = f"Cannot add macro {macro.indent!r}: {reason}"
                raise ConfigurationError(msg)
            self._macros.append(macro)

    # -- Registration --

    def register(
        self,
        indent: str,
        alias: str,
        master: bool,
        trailing: bool,
        evaluator: Evaluator | None,
    ) -> Macro | None:
        """Create a macro and add it to the set.

        Returns the new macro, or ``None`` if it would break one of the
        set's invariants. Nothing is added in that case.
        """
        macro = Macro(indent, alias, master, trailing, evaluator)
        if self.add(macro):
            return macro
        return None

    def add(self, macro: Macro) -> bool:
        """Add an existing macro. Returns ``False`` if it was refused."""
        self._check_mutable()
        reason = self._refusal(macro)
        if reason is not None:
            logger.warning("Refused macro %r: %s", macro.indent, reason)
            return False

        self._macros.append(macro)
        logger.debug("Registered macro %r", macro)
        return True

    def unregister(self, indent: str) -> bool:
        """Remove the macro whose ``indent`` is *indent*.

        Aliases are not considered. Returns whether a macro was removed.
        """
        self._check_mutable()
        for i, m in enumerate(self._macros):
            if m.indent == indent:
                del self._macros[i]
                logger.debug("Unregistered macro %r", indent)
                return True
        return False

    def _refusal(self, macro: Macro) -> str | None:
        """Why *macro* can't join the set, or ``None`` if it can."""
        if not macro.indent:
            return "empty name"
        if macro.evaluator is None:
            return "no base evaluator"

        for m in self._macros:
            if macro.indent == m.indent:
                return f"name already registered ({m.indent!r})"
            if macro.indent == m.alias:
                return f"name is an alias of {m.indent!r}"
            if macro.alias and macro.alias in (m.indent, m.alias):
                return f"alias {macro.alias!r} already used by {m.indent!r}"
            if macro.master and m.master:
                return f"{m.indent!r} is already the master type"
        return None

    # -- Lifecycle --

    def freeze(self) -> None:
        """End the configuration phase. No more registrations or removals."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            msg = "Cannot modify a frozen MacroSet."
            raise RuntimeError(msg)

    def copy(self) -> "MacroSet":
        """An unfrozen set holding the same macros, in the same order."""
        return MacroSet(self._macros)

    # -- Lookup --

    def lookup(self, param_type: ParamType) -> Macro | None:
        """Resolve a parsed parameter type by its name, then by its alias."""
        if (m := self.get(param_type.indent)) is not None:
            return m

        alias = has_alias(param_type)
        if alias is not None:
            return self.get(alias)
        return None

    def get(self, indent_or_alias: str) -> Macro | None:
        """The macro named *indent_or_alias* by indent or alias."""
        if not indent_or_alias:
            return None

        for m in self._macros:
            if indent_or_alias in (m.indent, m.alias):
                return m
        return None

    def get_master(self) -> Macro | None:
        """The macro assumed for untyped parameters, if any."""
        for m in self._macros:
            if m.master:
                return m
        return None

    def get_trailings(self) -> list[Macro]:
        """All trailing macros in set order. Empty when there are none."""
        return [m for m in self._macros if m.trailing]

    def names(self) -> list[str]:
        return [m.indent for m in self._macros]

    # -- Container protocol --

    def __iter__(self) -> Iterator[Macro]:
        return iter(tuple(self._macros))

    def __len__(self) -> int:
        return len(self._macros)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __repr__(self) -> str:
        state = " frozen" if self._frozen else ""
        return f"<MacroSet{state} {self.names()}>"
