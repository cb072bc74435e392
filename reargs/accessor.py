# Reargs Argument Matcher — (c) 2025 rtj.dev LLC — MIT Licensed
"""Read-only views over the result state of a `MatchingEngine`."""
from __future__ import annotations

from typing import Any

from reargs.engine import MatchingEngine
from reargs.logger import logger
from reargs.rule_value import ValueKind


class ValueAccessor:
    """
    Exposes parsed values without letting callers mutate the engine state.

    Every returned container is a copy.
    """

    def __init__(self, engine: MatchingEngine) -> None:
        self.engine: MatchingEngine = engine

    def get_value(self, rule_id: str | None = None, capture: str | None = None) -> Any:
        """
        Get the value of a rule, or of one of its capture groups.

        Args:
            rule_id (str | None): Rule name.
            capture (str | None): Capture group name.

        Returns:
            Any: `None` for an unknown rule. Without `capture`, the rule value (a
            scalar or a mapping of captures). With `capture`, the captured value, or
            `None` if the rule holds no such capture.
        """
        state = self.engine.results.get(rule_id) if rule_id is not None else None
        if state is None:
            return None
        if capture is None:
            return state.value.export()
        return state.value.get(capture)

    def get_group_values(self, group: str | None = None) -> dict[str, Any]:
        """
        Get all values of a group of rules, defaults included.

        Capture mappings are merged key by key, later rules winning on collisions.
        Scalar values are stored under the rule id.

        Args:
            group (str | None): Group name, `UNGROUPED` for rules without a group or
                `None` for every rule.

        Returns:
            dict[str, Any]: Merged values, empty for an unknown group.
        """
        result: dict[str, Any] = {}
        for rule_id in self.engine.registry.rule_ids(group):
            state = self.engine.results.get(rule_id)
            if state is None:
                continue
            value = state.value
            logger.debug("[%s] %s value: %r", rule_id, value.kind, value.payload)
            if value.kind is ValueKind.CAPTURES:
                result.update(value.export())
            else:
                result[rule_id] = value.export()
        return result

    def get_all_values(self) -> dict[str, Any]:
        """Get every value, defaults included."""
        return self.get_group_values(None)
