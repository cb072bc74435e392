# Reargs Argument Matcher — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `Reargs`, a declarative, regular expression driven matcher
for command line arguments.

Each parameter rule describes a short and/or a long pattern. Named capture groups
become values, defaults fill empty captures, rules can be grouped for help, repeat
(`multiple`), capture several key/value pairs from one argument
(`capture_multiple`) or stop parsing (`stop_parse`).

Public Interface:
- `parse(args)`: Match a list of tokens, return what no rule matched.
- `remain`: Text found after the leftmost stop rule match.
- `get_value(rule_id, capture)`: Value of one rule or one of its captures.
- `get_group_values(group)` / `get_all_values()`: Merged values, defaults included.
- `generate_help(context, template)`: Render help with Jinja2.
- `print_help(context, template)`: Print help through Rich.

Example Usage:
    reargs = Reargs(
        {
            "debug": {"short": "-d", "long": "--debug", "help": "Debug mode"},
            "subset": {
                "short": "-u[=| ](?<subset>[\\w/]+)",
                "values": {"subset": "me"},
            },
            "double_dash": {"short": "--", "hidden": True, "stop_parse": True},
        }
    )
    unparsed = reargs.parse(["-d", "-u", "foo", "--", "bar"])

    # unparsed == ""
    # reargs.remain == "bar"
    # reargs.get_all_values() == {"debug": True, "subset": "foo", "double_dash": True}
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from rich.console import Console

from reargs.accessor import ValueAccessor
from reargs.console import console as default_console
from reargs.engine import MatchingEngine
from reargs.exceptions import InvalidHelpContextError, InvalidParameterError
from reargs.help import DEFAULT_HELP_CONTEXT, render_help
from reargs.logger import logger
from reargs.options import ReargsOptions, resolve_options
from reargs.registry import ParamGroup, RuleRegistry
from reargs.rule import Rule


class Reargs:
    """
    Declarative command line argument matcher.

    Args:
        params (Mapping[str, Mapping] | None): Rule definitions by rule id.
        opts (ReargsOptions | Mapping | None): Options, see `ReargsOptions`.
        context (Mapping | None): Default help context (name, version, ...).
        console (Console | None): Rich console used by `print_help()`.

    Raises:
        InvalidParameterError: If `params` is not a mapping or a rule is invalid.
        InvalidOptionsError: If `opts` is not a mapping.
        InvalidHelpContextError: If `context` is not a mapping.
    """

    def __init__(
        self,
        params: Mapping[str, Any] | None = None,
        opts: ReargsOptions | Mapping[str, Any] | None = None,
        *,
        context: Mapping[str, Any] | None = None,
        console: Console | None = None,
    ) -> None:
        self.opts: ReargsOptions = resolve_options(opts)
        self.registry: RuleRegistry = RuleRegistry(self.opts)
        self.engine: MatchingEngine = MatchingEngine(self.registry)
        self.accessor: ValueAccessor = ValueAccessor(self.engine)
        self.console: Console = console or default_console
        self.context: dict[str, Any] = self._validate_context(context)
        self.args: list[str] = []

        if not self.setup({} if params is None else params):
            raise InvalidParameterError(self.error)

    @property
    def params(self) -> dict[str, Rule]:
        return self.registry.rules

    @property
    def groups(self) -> dict[str, ParamGroup]:
        return self.registry.groups

    @property
    def error(self) -> str | None:
        return self.registry.error

    @property
    def remain(self) -> str:
        return self.engine.remain

    def setup(self, params: Any) -> bool:
        """Register more rules. Returns False, with `error` set, on the first bad rule."""
        success = self.registry.setup(params)
        self.engine.reset()
        return success

    def set(self, rule_id: str, definition: Any) -> bool:
        """Register or override a single rule."""
        success = self.registry.set(rule_id, definition)
        self.engine.reset()
        return success

    def reset(self) -> None:
        """Reset every value to its default."""
        self.engine.reset()

    def parse(self, args: Sequence[str]) -> str:
        """
        Parse command line arguments.

        Args:
            args (Sequence[str]): Argument tokens, typically `sys.argv[1:]`.

        Returns:
            str: Tokens no rule matched, joined with `SEPARATOR`. Text found after a
            stop rule is available in `remain`.
        """
        self.args = list(args) if isinstance(args, (list, tuple)) else []
        return self.engine.parse(args)

    def get_value(self, rule_id: str | None = None, capture: str | None = None) -> Any:
        return self.accessor.get_value(rule_id, capture)

    def get_group_values(self, group: str | None = None) -> dict[str, Any]:
        return self.accessor.get_group_values(group)

    def get_all_values(self) -> dict[str, Any]:
        return self.accessor.get_all_values()

    def _validate_context(self, context: Any) -> dict[str, Any]:
        if context is None:
            return {}
        if not isinstance(context, Mapping):
            raise InvalidHelpContextError(
                f"Help context must be a mapping if set ! We got: {context!r}"
            )
        return dict(context)

    def generate_help(
        self, context: Mapping[str, Any] | None = None, template: str | None = None
    ) -> str:
        """
        Generate help from a Jinja2 template.

        Args:
            context (Mapping | None): Values overriding the default context
                (`name`, `version`, `description`, `author`).
            template (str | None): Template source, `DEFAULT_HELP_TEMPLATE` if None.

        Returns:
            str: Rendered help.
        """
        help_context = {
            **DEFAULT_HELP_CONTEXT,
            **self.context,
            **self._validate_context(context),
            "params": self.params,
            "opts": self.opts,
            "groups": self.groups,
        }
        logger.debug("Help context: %r", help_context)
        return render_help(help_context, template)

    def print_help(
        self, context: Mapping[str, Any] | None = None, template: str | None = None
    ) -> None:
        """Print generated help through the Rich console."""
        self.console.print(self.generate_help(context, template), markup=False)

    def __str__(self) -> str:
        stop_rules = sum(1 for rule in self.params.values() if rule.stop_parse)
        return (
            f"Reargs(rules={len(self.params)}, groups={len(self.groups)}, "
            f"stop_rules={stop_rules})"
        )

    def __repr__(self) -> str:
        return str(self)
