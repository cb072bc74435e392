# Reargs Argument Matcher — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Options controlling how Reargs lays out help and how it reacts to stop rules.

`ReargsOptions` is a pydantic model so options can come from keyword arguments,
a plain mapping or a configuration file. Unknown keys are kept and exposed to help
templates as `opts.<key>`.

Options:
- `long_short_delimiter`: Joins the short and long human readable forms.
- `param_description_spacer`: Fill character between a parameter and its help.
- `pre_padding_spaces`: Left indent of every parameter line in help.
- `align_long_if_no_short`: Extra indent of long-only parameters.
- `exit_on_stop`: Only evaluate the leftmost stop rule and skip normal parsing.
"""
from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from reargs.exceptions import InvalidOptionsError


class ReargsOptions(BaseModel):
    """Options shared by the rule registry, the matching engine and help rendering."""

    model_config = ConfigDict(extra="allow")

    long_short_delimiter: str = "\n"
    param_description_spacer: str = "."
    pre_padding_spaces: int = Field(2, ge=0)
    align_long_if_no_short: int = Field(4, ge=0)
    exit_on_stop: bool = False


def resolve_options(opts: ReargsOptions | Mapping[str, Any] | None) -> ReargsOptions:
    """
    Build a `ReargsOptions` instance from what the caller handed to `Reargs`.

    Args:
        opts: `None` for defaults, a mapping of option overrides or a ready model.

    Raises:
        InvalidOptionsError: If `opts` is not a mapping or does not validate.
    """
    if opts is None:
        return ReargsOptions()
    if isinstance(opts, ReargsOptions):
        return opts.model_copy(deep=True)
    if not isinstance(opts, Mapping):
        raise InvalidOptionsError(f"Given options is not a mapping ! We got: {opts!r}")
    try:
        return ReargsOptions.model_validate(dict(opts))
    except ValidationError as error:
        raise InvalidOptionsError(f"Given options are invalid: {error}") from error
