"""Modifier kinds and resolution of their loosely-shaped arguments.

Every modifier (``skip``, ``fixme``, ``slow``, ``flaky``, ``fail``) accepts the
same arguments: nothing at all, a condition with an optional description, or
a single description string meaning "always apply, here is why".
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class ModifierKind(str, Enum):
    """Kinds of modifiers that can be applied to tests and suites."""

    SKIP = "skip"
    FIXME = "fixme"
    SLOW = "slow"
    FLAKY = "flaky"
    FAIL = "fail"


@dataclass(frozen=True)
class NoArgs:
    """Modifier called without arguments."""


@dataclass(frozen=True)
class DescriptionOnly:
    """Modifier called with a single description string."""

    description: str


@dataclass(frozen=True)
class Condition:
    """Modifier called with a condition and an optional description."""

    value: bool
    description: Optional[str] = None


ModifierArgs = Union[NoArgs, DescriptionOnly, Condition]


@dataclass(frozen=True)
class ResolvedModifier:
    """Whether a modifier application is live, and why."""

    live: bool
    description: Optional[str] = None


def parse_modifier_args(condition: Any = None, description: Optional[str] = None) -> ModifierArgs:
    """Normalise raw modifier arguments into a ``ModifierArgs`` variant."""
    if condition is None and description is None:
        return NoArgs()
    if isinstance(condition, str):
        return DescriptionOnly(condition)
    return Condition(bool(condition), description)


def resolve_modifier_args(args: ModifierArgs) -> ResolvedModifier:
    """Decide whether a modifier application takes effect."""
    if isinstance(args, NoArgs):
        return ResolvedModifier(live=True)
    if isinstance(args, DescriptionOnly):
        return ResolvedModifier(live=True, description=args.description)
    return ResolvedModifier(live=args.value, description=args.description)
