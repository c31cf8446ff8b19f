# model/context.py

"""
ContextObject
=============

Data-flow annotation attached to a transition by the route-to-net compiler.
It records which dataset the step reads, writes or erases, which context tags
it requires, and whether the step is an application step or control glue.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, Optional


class TransitionKind(Enum):
    """Role of a transition inside a route."""

    APP = "APP"
    CONTROL = "CONTROL"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class ContextObject:
    required_context: FrozenSet[str] = field(default_factory=frozenset)
    read: Optional[str] = None
    write: Optional[str] = None
    erase: Optional[str] = None
    kind: TransitionKind = TransitionKind.APP

    def __post_init__(self) -> None:
        # accept any iterable of tags, store it frozen
        tags: Iterable[str] = self.required_context or ()
        object.__setattr__(self, "required_context", frozenset(tags))
        if not isinstance(self.kind, TransitionKind):
            object.__setattr__(self, "kind", TransitionKind(str(self.kind).upper()))

    def reads(self, tag: str) -> bool:
        """Return True if this step reads dataset `tag`."""
        return self.read == tag

    def writes(self, tag: str) -> bool:
        """Return True if this step writes dataset `tag`."""
        return self.write == tag

    def erases(self, tag: str) -> bool:
        """Return True if this step erases dataset `tag`."""
        return self.erase == tag

    def requires(self, tag: str) -> bool:
        """Return True if `tag` is part of the required context."""
        return tag in self.required_context

    def __str__(self) -> str:
        parts = [str(self.kind)]
        if self.required_context:
            parts.append("ctx=" + "|".join(sorted(self.required_context)))
        for name in ("read", "write", "erase"):
            value = getattr(self, name)
            if value is not None:
                parts.append(f"{name}={value}")
        return ", ".join(parts)
