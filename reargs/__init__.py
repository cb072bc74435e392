"""
Reargs Argument Matcher

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .exceptions import (
    InvalidArgumentsError,
    InvalidHelpContextError,
    InvalidOptionsError,
    InvalidParameterError,
    ReargsError,
)
from .help import DEFAULT_HELP_TEMPLATE
from .logger import logger
from .options import ReargsOptions
from .reargs import Reargs
from .rule import SEPARATOR, UNGROUPED
from .rule_value import RuleValue, ValueKind
from .utils import setup_logging

__all__ = [
    "Reargs",
    "ReargsOptions",
    "RuleValue",
    "ValueKind",
    "SEPARATOR",
    "UNGROUPED",
    "DEFAULT_HELP_TEMPLATE",
    "ReargsError",
    "InvalidParameterError",
    "InvalidOptionsError",
    "InvalidArgumentsError",
    "InvalidHelpContextError",
    "logger",
    "setup_logging",
]
