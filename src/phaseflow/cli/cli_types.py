# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : cli_types.py
#   file_relpath : src/phaseflow/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Custom Click parameter types for the PhaseFlow CLI.

* [`EnumChoiceParam`][phaseflow.cli.cli_types.EnumChoiceParam]: case-insensitive
  conversion of a string to a member of a string-valued ``Enum``.
* [`KeyValueParam`][phaseflow.cli.cli_types.KeyValueParam]: ``key=value`` pairs
  for request parameters (``--param id=42``).
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Generic, Iterable, NoReturn, Protocol, TypeVar, cast

import click

if TYPE_CHECKING:
    from click.shell_completion import CompletionItem as ClickCompletionItem

    class ParamTypeBase(Protocol):
        """Typed base to avoid subclassing Any when Click lacks stubs."""

        name: str

else:
    # At runtime, subclass the real Click type
    ParamTypeBase = click.ParamType  # type: ignore[assignment]

E = TypeVar("E", bound=Enum)

__all__: list[str] = [
    "EnumChoiceParam",
    "KeyValueParam",
]


def _fail_noreturn(
    message: str,
    param: click.Parameter | None,
    ctx: click.Context | None,
) -> NoReturn:
    """Raise a BadParameter with a NoReturn signature (clear to type checkers)."""
    raise click.BadParameter(message, param=param, ctx=ctx)


class EnumChoiceParam(ParamTypeBase, Generic[E]):
    """A Click parameter type that converts a string to a member of a given Enum."""

    enum_cls: type[E]
    name: str
    choices: list[str]

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self.name = self.enum_cls.__name__.lower()
        self.choices = [cast("str", getattr(e, "value", str(e))) for e in self.enum_cls]

    def convert(
        self,
        value: str | E | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E | None:
        """Convert a string to a member of the Enum (case-insensitive)."""
        if value is None or isinstance(value, self.enum_cls):
            return value

        lookup: dict[str, E] = {
            cast("str", getattr(choice, "value", str(choice))).lower(): choice
            for choice in cast("Iterable[E]", self.enum_cls)
        }
        key: str = str(value).lower()
        if key in lookup:
            return lookup[key]

        _fail_noreturn(
            f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
            param,
            ctx,
        )

    def shell_complete(
        self,
        ctx: click.Context,  # pylint: disable=unused-argument
        param: click.Parameter,  # pylint: disable=unused-argument
        incomplete: str,
    ) -> list["ClickCompletionItem"]:
        """Tab completion for Click.

        Bash: `eval "$(_PHASEFLOW_COMPLETE=bash_source phaseflow)"`
        """
        from click.shell_completion import CompletionItem as RuntimeCompletionItem

        prefix: str = (incomplete or "").lower()
        return [
            RuntimeCompletionItem(str(getattr(e, "value", e)))
            for e in cast("Iterable[E]", self.enum_cls)
            if str(getattr(e, "value", e)).lower().startswith(prefix)
        ]

    def __repr__(self) -> str:
        return f"EnumParam({self.enum_cls.__name__})"


class KeyValueParam(ParamTypeBase):
    """A Click parameter type that parses ``key=value`` into a ``(key, value)`` tuple.

    The value is kept as a string; only the first ``=`` separates key and value,
    so ``q=a=b`` yields ``("q", "a=b")``.
    """

    name = "key=value"

    def convert(
        self,
        value: str | tuple[str, str],
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> tuple[str, str]:
        if isinstance(value, tuple):
            return value
        key, sep, val = value.partition("=")
        key = key.strip()
        if not sep or not key:
            _fail_noreturn(f"Expected KEY=VALUE, got '{value}'", param, ctx)
        return key, val

    def __repr__(self) -> str:
        return "KeyValueParam()"
