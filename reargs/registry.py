# Reargs Argument Matcher — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Rule registry for Reargs.

`RuleRegistry` validates and normalizes parameter rule definitions, compiles their
patterns and builds the display groups consumed by help rendering.

Registration never raises on a bad rule: the reason is recorded in `error` and
`set()` / `setup()` return `False`, leaving it to the caller (`Reargs`) to abort.

Groups are discovered as rules are registered and keep insertion order. Each group
tracks the `padding` needed to align the human readable forms of its parameters and
the `prepadding` indent taken from the options.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from pydantic import ValidationError

from reargs.exceptions import InvalidParameterError
from reargs.logger import logger
from reargs.options import ReargsOptions
from reargs.rule import (
    UNGROUPED,
    PatternKind,
    Rule,
    RuleDefinition,
    compile_pattern,
    human_readable_form,
)


@dataclass
class ParamDisplay:
    """Display record of a parameter inside its group."""

    help: str
    human_readable: str
    hidden: bool = False


@dataclass
class ParamGroup:
    """Ordered display records of a group plus alignment metadata."""

    prepadding: int = 0
    padding: int = 0
    params: list[ParamDisplay] = field(default_factory=list)

    def __iter__(self) -> Iterator[ParamDisplay]:
        return iter(self.params)

    def __len__(self) -> int:
        return len(self.params)

    def __getitem__(self, index: int) -> ParamDisplay:
        return self.params[index]

    def add(self, display: ParamDisplay) -> None:
        """Append a display record and widen the padding if needed."""
        self.params.append(display)
        lines = display.human_readable.split("\n")
        max_length = len(lines[0])
        if len(lines) > 1 and len(lines[1]) > len(lines[0]):
            max_length = len(lines[1])
        if self.padding < max_length:
            self.padding = max_length + 1


class RuleRegistry:
    """
    Normalizes and stores parameter rules.

    Attributes:
        opts (ReargsOptions): Options used for display metadata.
        rules (dict[str, Rule]): Normalized rules by id, in registration order.
        groups (dict[str, ParamGroup]): Display groups, in discovery order.
        error (str | None): Reason of the latest failed registration.
    """

    def __init__(self, opts: ReargsOptions | None = None) -> None:
        self.opts: ReargsOptions = opts or ReargsOptions()
        self.rules: dict[str, Rule] = {}
        self.groups: dict[str, ParamGroup] = {}
        self.error: str | None = None

    def setup(self, params: Any) -> bool:
        """
        Register every rule of `params`, stopping at the first failure.

        Args:
            params (Mapping[str, Mapping]): Rule definitions by rule id.

        Returns:
            bool: True if every rule was registered.
        """
        if not isinstance(params, Mapping):
            self.error = f"Parameters must be set by a mapping, got: {params!r}"
            return False

        for rule_id, definition in params.items():
            if not self.set(rule_id, definition):
                return False
        return True

    def set(self, rule_id: str, definition: Any) -> bool:
        """
        Normalize one rule definition and register it under `rule_id`.

        Returns:
            bool: True on success, False with `error` set otherwise.
        """
        try:
            rule = self._normalize(rule_id, definition)
        except InvalidParameterError as error:
            self.error = str(error)
            logger.debug("[%s] Rejected parameter rule: %s", rule_id, self.error)
            return False

        group = self.groups.get(rule.group)
        if group is None:
            group = ParamGroup(prepadding=self.opts.pre_padding_spaces)
            self.groups[rule.group] = group
        group.add(
            ParamDisplay(
                help=rule.help,
                human_readable=rule.human_readable,
                hidden=rule.hidden,
            )
        )

        if rule_id in self.rules:
            logger.warning("[%s] Overriding existing parameter rule", rule_id)
        self.rules[rule_id] = rule
        return True

    def _normalize(self, rule_id: str, definition: Any) -> Rule:
        if not isinstance(definition, Mapping):
            raise InvalidParameterError(
                f"Parameter '{rule_id}' must be set by a mapping ! We got: {definition!r}"
            )
        try:
            raw = RuleDefinition.model_validate(dict(definition))
        except ValidationError as error:
            raise InvalidParameterError(
                f"Parameter '{rule_id}' is invalid: {error}"
            ) from error

        if raw.short is None and raw.long is None:
            raise InvalidParameterError(
                f"Parameter '{rule_id}' must have at least 'short' or 'long' "
                f"properties set ! We got: {dict(definition)!r}"
            )

        capture_multiple = self._compile(rule_id, "capture_multiple", raw.capture_multiple)
        bounded = capture_multiple is None

        compiled: dict[PatternKind, re.Pattern[str] | None] = {}
        human_readable_parts: list[str] = []
        for kind in PatternKind:
            value = getattr(raw, kind.value)
            if value is None:
                compiled[kind] = None
                continue
            pattern = self._compile(rule_id, str(kind), value, bounded=bounded)
            source = value if isinstance(value, str) else value.pattern
            human_readable = human_readable_form(source)
            human_readable_parts.append(human_readable)
            compiled[kind] = pattern
            logger.debug(
                "[%s] %s of type %s | pattern: %r | human readable: %r",
                rule_id,
                kind,
                type(value).__name__,
                pattern.pattern,
                human_readable,
            )

        human_readable = raw.human_readable
        if human_readable is None:
            human_readable = self.opts.long_short_delimiter.join(human_readable_parts)
        if raw.short is None:
            human_readable = " " * self.opts.align_long_if_no_short + human_readable

        group = raw.group if isinstance(raw.group, str) else UNGROUPED

        return Rule(
            rule_id=rule_id,
            short=compiled[PatternKind.SHORT],
            long=compiled[PatternKind.LONG],
            capture_multiple=capture_multiple,
            group=group,
            multiple=raw.multiple,
            stop_parse=raw.stop_parse,
            hidden=raw.hidden,
            values=raw.values,
            human_readable=human_readable,
            help=raw.help,
        )

    def _compile(
        self, rule_id: str, kind: str, value: Any, bounded: bool = False
    ) -> re.Pattern[str] | None:
        if value is None:
            return None
        if isinstance(value, re.Pattern):
            if not isinstance(value.pattern, str):
                raise InvalidParameterError(
                    f"Parameter {rule_id} has a bytes pattern for {kind} property !"
                )
            source, flags, bounded = value.pattern, value.flags, False
        elif isinstance(value, str):
            source, flags = value, 0
        else:
            raise InvalidParameterError(
                f"Parameter {rule_id} has an unsupported type for {kind} property, "
                f"we got: '{type(value).__name__}' !"
            )
        try:
            return compile_pattern(source, bounded=bounded, flags=flags)
        except re.error as error:
            raise InvalidParameterError(
                f"Parameter {rule_id} has an invalid {kind} pattern {source!r}: {error}"
            ) from error

    def rule_ids(self, group: str | None = None) -> list[str]:
        """Ids of the rules in `group`, or of every rule when `group` is None."""
        if group is None:
            return list(self.rules)
        return [rule_id for rule_id, rule in self.rules.items() if rule.group == group]
