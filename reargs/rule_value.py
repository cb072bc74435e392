# Reargs Argument Matcher — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Result state models for the Reargs matching engine.

A parameter rule's value can be a scalar (a plain boolean flag or whatever scalar
default the rule declares) or a mapping of capture group names to captured text.
`RuleValue` keeps that shape explicit with a `ValueKind` tag instead of relying on
runtime type inspection of the payload.

Contents:
- `ValueKind`: Tag of a `RuleValue`.
- `RuleValue`: Tagged value of a rule after reset or parsing.
- `MatchSpan`: Region of the working string consumed by one pattern kind.
- `RuleState`: Value plus the spans recorded during the latest match attempt.
"""
from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class ValueKind(Enum):
    """
    Shape of a rule value.

    Members:
        SCALAR: A single value, `False`/`True` for plain flags.
        CAPTURES: A mapping of capture group name to a string, `None`, or a list
            of those when occurrences accumulate.
    """

    SCALAR = "scalar"
    CAPTURES = "captures"

    def __str__(self) -> str:
        return self.value


@dataclass
class RuleValue:
    """Tagged rule value."""

    kind: ValueKind
    payload: Any

    @classmethod
    def scalar(cls, value: Any) -> RuleValue:
        return cls(ValueKind.SCALAR, value)

    @classmethod
    def captures(cls, values: Mapping[str, Any] | None = None) -> RuleValue:
        return cls(ValueKind.CAPTURES, dict(values or {}))

    @classmethod
    def from_default(cls, default: Any) -> RuleValue:
        """Deep copy a rule default so results never share state with the rule."""
        if isinstance(default, Mapping):
            return cls.captures(deepcopy(dict(default)))
        return cls.scalar(deepcopy(default))

    @property
    def is_captures(self) -> bool:
        return self.kind is ValueKind.CAPTURES

    def get(self, capture: str, default: Any = None) -> Any:
        """Return a single capture, or `default` when the value has no such capture."""
        if self.kind is ValueKind.CAPTURES:
            return deepcopy(self.payload.get(capture, default))
        return default

    def export(self) -> Any:
        """Return a copy of the payload, safe to hand out to callers."""
        return deepcopy(self.payload)


@dataclass
class MatchSpan:
    """Half-open `[start, end)` region of the working string consumed by a match."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass
class RuleState:
    """Per-rule result entry owned by the matching engine."""

    value: RuleValue
    spans: list[MatchSpan] = field(default_factory=list)

    @property
    def first_span(self) -> MatchSpan | None:
        """Leftmost span recorded by the latest match attempt."""
        if not self.spans:
            return None
        return min(self.spans, key=lambda span: span.start)
