# Reargs Argument Matcher — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by Reargs.

Every exception signals a contract violation made by the caller (bad rule
definitions, bad options, a bad argument list or a bad help context). Unmatched
command line input is never an error: it is returned as the unparsed remainder.

All exceptions inherit from `ReargsError`. The concrete classes also inherit from
`TypeError` so callers can treat them as plain type errors.

Exception Hierarchy:
- ReargsError
    ├── InvalidParameterError
    ├── InvalidOptionsError
    ├── InvalidArgumentsError
    └── InvalidHelpContextError
"""


class ReargsError(Exception):
    """Base exception for Reargs."""


class InvalidParameterError(ReargsError, TypeError):
    """Exception raised when the parameter rules cannot be set up."""


class InvalidOptionsError(ReargsError, TypeError):
    """Exception raised when the options are not a mapping."""


class InvalidArgumentsError(ReargsError, TypeError):
    """Exception raised when parse() is given something else than a list of tokens."""


class InvalidHelpContextError(ReargsError, TypeError):
    """Exception raised when the help context is not a mapping."""
