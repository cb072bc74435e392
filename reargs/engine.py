# Reargs Argument Matcher — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Matching engine for Reargs.

`MatchingEngine` matches the normalized rules of a `RuleRegistry` against a list of
argument tokens and owns the per-rule result state.

Parsing works on a single working string: the tokens joined with `SEPARATOR`.

1. Every rule value is reset to its default.
2. Stop rules are searched anywhere in the working string. The leftmost match wins:
   everything after it becomes `remain`, everything before it is parsed further.
   With `exit_on_stop`, only the leftmost stop rule keeps its value and parsing
   ends there.
3. Normal rules are tried in registration order against the start of the working
   string, and consumed text is cut out. Passes repeat until one pass leaves the
   working string unchanged.

What is left is returned as the unparsed text, still joined with `SEPARATOR`.
"""
from __future__ import annotations

import re
from copy import deepcopy
from typing import Any, Sequence

from reargs.exceptions import InvalidArgumentsError
from reargs.logger import logger
from reargs.registry import RuleRegistry
from reargs.rule import SEPARATOR, Rule
from reargs.rule_value import MatchSpan, RuleState, RuleValue, ValueKind


def search_at_most(pattern: re.Pattern[str], text: str, limit: int) -> re.Match[str] | None:
    """Return the leftmost match of `pattern` in `text` if it starts at or before `limit`."""
    match = pattern.search(text)
    if match is None or match.start() > limit:
        return None
    return match


def remove_spans(text: str, spans: Sequence[MatchSpan]) -> str:
    """Cut every span out of `text`, overlapping spans included."""
    kept: list[str] = []
    position = 0
    for span in sorted(spans, key=lambda span: span.start):
        if span.start > position:
            kept.append(text[position : span.start])
        position = max(position, span.end)
    kept.append(text[position:])
    return "".join(kept)


class MatchingEngine:
    """
    Matches registered rules against argument tokens.

    Attributes:
        registry (RuleRegistry): Source of the normalized rules.
        results (dict[str, RuleState]): Result state by rule id, rebuilt by `reset()`.
        remain (str): Text following the leftmost stop rule match.
    """

    def __init__(self, registry: RuleRegistry) -> None:
        self.registry: RuleRegistry = registry
        self.results: dict[str, RuleState] = {}
        self.remain: str = ""

    @property
    def exit_on_stop(self) -> bool:
        return self.registry.opts.exit_on_stop

    def reset(self) -> None:
        """Reset every rule value to its default and clear `remain`."""
        self.remain = ""
        self.results = {
            rule_id: RuleState(value=rule.initial_value())
            for rule_id, rule in self.registry.rules.items()
        }

    def _store_captures(
        self, state: RuleState, rule: Rule, match: re.Match[str], first_round: bool
    ) -> None:
        if state.value.kind is not ValueKind.CAPTURES or (
            first_round and not rule.multiple
        ):
            state.value = RuleValue.captures()

        captures: dict[str, Any] = state.value.payload
        defaults = rule.capture_defaults()
        for name, captured in match.groupdict().items():
            value = captured or defaults.get(name)
            if not rule.accumulates:
                captures[name] = value
                continue
            existing = captures.get(name)
            if existing is None:
                captures[name] = [value]
            elif isinstance(existing, list):
                existing.append(value)
            else:
                captures[name] = [existing, value]

    def check_rule(self, text: str, rule_id: str, limit: int = 0) -> bool:
        """
        Try to match rule `rule_id` against `text` and store what it captures.

        Both the short and the long pattern are tried, independently. The region
        consumed by each of them is recorded in the rule's `spans`.

        Args:
            text (str): Working string.
            rule_id (str): Id of a registered rule.
            limit (int): Highest accepted start index of a match. 0 means the match
                must start the working string.

        Returns:
            bool: True if at least one pattern consumed text, or matched an empty
                working string.
        """
        rule = self.registry.rules[rule_id]
        state = self.results[rule_id]
        state.spans = []

        for kind, pattern in rule.patterns():
            current = pattern
            offset = 0
            remaining = text
            first_round = True
            span: MatchSpan | None = None

            while True:
                match = search_at_most(current, remaining, limit)
                logger.debug(
                    "[%s] %s: %r against %r -> %r",
                    rule_id,
                    kind,
                    current.pattern,
                    remaining,
                    match.group(0) if match else None,
                )
                if match is None:
                    break
                # an empty match consumes nothing unless there is nothing to consume
                if match.end() == match.start() and text:
                    break

                if span is None:
                    span = MatchSpan(offset + match.start(), offset + match.end())
                else:
                    span.end = offset + match.end()

                if current.groupindex:
                    self._store_captures(state, rule, match, first_round)
                    first_round = False
                elif rule.capture_multiple is None:
                    state.value = RuleValue.scalar(True)

                if rule.capture_multiple is None or match.end() == 0:
                    break
                offset += match.end()
                remaining = remaining[match.end() :]
                current = rule.capture_multiple

            if span is not None:
                state.spans.append(span)

        return bool(state.spans)

    def _apply_stop_rules(self, text: str) -> tuple[str, bool]:
        """Truncate `text` at the leftmost stop rule match. Returns (text, stopped)."""
        min_index = len(text)
        stop_length = 0
        stop_rule_id: str | None = None
        snapshot: dict[str, RuleState] | None = None

        for rule_id, rule in self.registry.rules.items():
            if not rule.stop_parse:
                continue
            if not self.check_rule(text, rule_id, limit=len(text)):
                continue
            span = self.results[rule_id].first_span
            assert span is not None, "a matching rule records a span"
            if span.start < min_index:
                min_index = span.start
                stop_length = span.length
                stop_rule_id = rule_id
                if self.exit_on_stop:
                    snapshot = deepcopy(self.results)
                    self.reset()

        if stop_rule_id is None:
            return text, False

        logger.debug("[%s] Stop rule matched at index %d", stop_rule_id, min_index)
        remain = text[min_index + stop_length :]
        text = text[:min_index]
        if self.exit_on_stop:
            assert snapshot is not None
            self.results = snapshot
        self.remain = remain
        return text, self.exit_on_stop

    def parse(self, args: Sequence[str]) -> str:
        """
        Parse a list of argument tokens.

        Args:
            args (Sequence[str]): Tokens, typically `sys.argv[1:]`.

        Returns:
            str: Tokens no rule matched, joined with `SEPARATOR`.

        Raises:
            InvalidArgumentsError: If `args` is not a list or tuple of strings, or if
                a token contains `SEPARATOR`.
        """
        if not isinstance(args, (list, tuple)):
            raise InvalidArgumentsError(
                f"Given arguments list is not a list ! We got: {args!r}"
            )
        for token in args:
            if not isinstance(token, str):
                raise InvalidArgumentsError(
                    f"Every argument must be a string ! We got: {token!r}"
                )
            if SEPARATOR in token:
                raise InvalidArgumentsError(
                    f"Arguments cannot contain the separator character: {token!r}"
                )

        text = SEPARATOR.join(args)
        self.reset()

        text, stopped = self._apply_stop_rules(text)
        if stopped:
            return text

        last_round = text
        while True:
            for rule_id, rule in self.registry.rules.items():
                if rule.stop_parse:
                    continue
                if self.check_rule(text, rule_id):
                    spans = self.results[rule_id].spans
                    logger.debug("[%s] Removing %d span(s) from %r", rule_id, len(spans), text)
                    text = remove_spans(text, spans)

            text = text.strip(SEPARATOR)
            if text == last_round:
                break
            last_round = text

        return text
