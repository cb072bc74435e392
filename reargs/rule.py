# Reargs Argument Matcher — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the parameter rule models used by `RuleRegistry` and `MatchingEngine`.

A rule starts as a `RuleDefinition`, the pydantic model validating what the caller
wrote (in Python or in a YAML/TOML config), and ends up as a `Rule`, the
normalized dataclass holding compiled patterns and display metadata.

Patterns are written against the command line as the user types it:
- a space matches the boundary between two tokens, and so does `\\s`,
- `(?<name>...)` is accepted as an alias of Python's `(?P<name>...)`,
- unless a `capture_multiple` pattern is set, the pattern must cover whole tokens.

Internally tokens are joined with `SEPARATOR`, a character that can never appear in
a token. Precompiled `re.Pattern` objects go through the same translation, keep
their flags and are never wrapped to whole tokens.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Mapping

from pydantic import BaseModel, ConfigDict

from reargs.rule_value import RuleValue

SEPARATOR = "\x00"
UNGROUPED = "_"

_ALT_NAMED_GROUP = re.compile(r"\(\?<(?=[A-Za-z_])")
_HUMAN_NAMED_GROUP = re.compile(r"\(\?P?<(\w+)>[^)]*\)")


class PatternKind(Enum):
    """Primary pattern slots of a rule, in matching order."""

    SHORT = "short"
    LONG = "long"

    def __str__(self) -> str:
        return self.value


class RuleDefinition(BaseModel):
    """Raw parameter rule as written by the caller."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    short: Any = None
    long: Any = None
    capture_multiple: Any = None
    group: Any = UNGROUPED
    multiple: bool = False
    stop_parse: bool = False
    hidden: bool = False
    values: Any = False
    human_readable: str | None = None
    help: str = ""


@dataclass
class Rule:
    """
    Normalized parameter rule.

    Attributes:
        rule_id (str): Name of the rule, key of its value in results.
        short (re.Pattern | None): Compiled short form.
        long (re.Pattern | None): Compiled long form.
        capture_multiple (re.Pattern | None): Secondary pattern re-applied to the
            text following the primary match to capture several occurrences.
        group (str): Display group, `UNGROUPED` by default.
        multiple (bool): Accumulate repeated matches instead of overwriting.
        stop_parse (bool): A match truncates the command line.
        hidden (bool): Excluded from rendered help.
        values (Any): Default value, a scalar or a mapping of capture defaults.
        human_readable (str): Display form used in help.
        help (str): Description used in help.
    """

    rule_id: str
    short: re.Pattern[str] | None = None
    long: re.Pattern[str] | None = None
    capture_multiple: re.Pattern[str] | None = None
    group: str = UNGROUPED
    multiple: bool = False
    stop_parse: bool = False
    hidden: bool = False
    values: Any = False
    human_readable: str = ""
    help: str = ""

    @property
    def accumulates(self) -> bool:
        """True when captured values are appended to lists."""
        return self.multiple or self.capture_multiple is not None

    def patterns(self) -> Iterator[tuple[PatternKind, re.Pattern[str]]]:
        for kind in PatternKind:
            pattern = getattr(self, kind.value)
            if pattern is not None:
                yield kind, pattern

    def capture_defaults(self) -> Mapping[str, Any]:
        if isinstance(self.values, Mapping):
            return self.values
        return {}

    def initial_value(self) -> RuleValue:
        """Value of the rule right after a reset."""
        if self.accumulates:
            return RuleValue.captures()
        return RuleValue.from_default(self.values)


def to_python_regex(source: str, verbose: bool = False) -> str:
    """
    Rewrite a pattern for Python's `re` and the `SEPARATOR` joined working string.

    `(?<name>` becomes `(?P<name>`, a space (escaped or not) becomes `SEPARATOR`,
    `\\s` also matches `SEPARATOR` and `\\S` never does. Unescaped spaces of
    verbose patterns are left alone.
    """
    source = _ALT_NAMED_GROUP.sub("(?P<", source)
    parts: list[str] = []
    in_class = False
    index = 0
    while index < len(source):
        char = source[index]
        if char == "\\" and index + 1 < len(source):
            escaped = source[index + 1]
            index += 2
            if escaped == "s":
                parts.append(f"\\s{SEPARATOR}" if in_class else f"[\\s{SEPARATOR}]")
            elif escaped == "S" and not in_class:
                parts.append(f"[^\\s{SEPARATOR}]")
            elif escaped == " ":
                parts.append(SEPARATOR)
            else:
                parts.append(char + escaped)
            continue

        index += 1
        if char == " " and not verbose:
            parts.append(SEPARATOR)
        elif in_class:
            parts.append(char)
            in_class = char != "]"
        elif char == "[":
            in_class = True
            parts.append(char)
            # a "]" right after "[" or "[^" is a literal
            if source.startswith("^", index):
                parts.append("^")
                index += 1
            if source.startswith("]", index):
                parts.append("]")
                index += 1
        else:
            parts.append(char)
    return "".join(parts)


def compile_pattern(source: str, bounded: bool = True, flags: int = 0) -> re.Pattern[str]:
    """
    Compile a user pattern.

    Args:
        source (str): Pattern as written in the rule definition, or the source of a
            precompiled pattern.
        bounded (bool): Wrap the pattern so it starts at the beginning of a token
            and ends at the end of one.
        flags (int): `re` flags, those of the precompiled pattern if any.

    Raises:
        re.error: If the pattern is not a valid regular expression.
    """
    body = to_python_regex(source, verbose=bool(flags & re.VERBOSE))
    if bounded:
        body = f"(?:^|{SEPARATOR})(?:{body})(?:{SEPARATOR}|$)"
    return re.compile(body, flags)


def human_readable_form(source: str) -> str:
    """Turn a pattern source into a display string: named groups become `<name>`."""
    return _HUMAN_NAMED_GROUP.sub(r"<\1>", source).replace("/", "")
