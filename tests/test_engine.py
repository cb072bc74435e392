import re

import pytest

from reargs import SEPARATOR, InvalidArgumentsError, Reargs
from reargs.engine import MatchingEngine, remove_spans, search_at_most
from reargs.registry import RuleRegistry
from reargs.rule_value import MatchSpan, RuleValue, ValueKind


def test_search_at_most():
    pattern = re.compile("b+")
    assert search_at_most(pattern, "bbc", 0).group(0) == "bb"
    assert search_at_most(pattern, "abb", 0) is None
    assert search_at_most(pattern, "abb", 1).span() == (1, 3)
    assert search_at_most(pattern, "aaa", 3) is None


def test_remove_spans():
    assert remove_spans("abcdef", [MatchSpan(0, 2)]) == "cdef"
    assert remove_spans("abcdef", [MatchSpan(4, 6), MatchSpan(0, 1)]) == "bcd"
    assert remove_spans("abcdef", [MatchSpan(1, 4), MatchSpan(2, 5)]) == "af"
    assert remove_spans("abcdef", []) == "abcdef"


def test_reset_builds_tagged_values():
    registry = RuleRegistry()
    registry.setup(
        {
            "flag": {"short": "-f"},
            "subset": {"short": "-u (?<subset>\\w+)", "values": {"subset": "me"}},
            "many": {"short": "-m (?<item>\\w+)", "multiple": True},
        }
    )
    engine = MatchingEngine(registry)
    engine.reset()

    assert engine.results["flag"].value == RuleValue(ValueKind.SCALAR, False)
    assert engine.results["subset"].value == RuleValue(ValueKind.CAPTURES, {"subset": "me"})
    assert engine.results["many"].value == RuleValue(ValueKind.CAPTURES, {})
    assert engine.remain == ""


def test_results_never_share_state_with_defaults():
    defaults = {"subset": ["me"]}
    reargs = Reargs({"subset": {"short": "-u (?<subset>\\w+)", "values": defaults}})

    reargs.parse([])
    reargs.get_value("subset", "subset").append("you")
    reargs.engine.results["subset"].value.payload["subset"].append("them")

    assert defaults == {"subset": ["me"]}
    reargs.reset()
    assert reargs.get_value("subset") == {"subset": ["me"]}


def test_parse_is_idempotent():
    reargs = Reargs({"flag": {"short": "-f"}, "name": {"long": "--name=(?<name>\\w+)"}})

    first = reargs.parse(["--name=foo", "-f", "bar"])
    first_values = reargs.get_all_values()
    second = reargs.parse(["--name=foo", "-f", "bar"])

    assert first == second == "bar"
    assert reargs.get_all_values() == first_values == {"flag": True, "name": "foo"}


def test_rules_only_match_at_the_start():
    reargs = Reargs({"flag": {"short": "-f"}})

    assert reargs.parse(["foo", "-f"]) == f"foo{SEPARATOR}-f"
    assert reargs.get_value("flag") is False


def test_patterns_only_match_whole_tokens():
    reargs = Reargs({"flag": {"short": "-f"}})

    assert reargs.parse(["-foo"]) == "-foo"
    assert reargs.get_value("flag") is False


def test_short_and_long_accumulate_in_order():
    reargs = Reargs(
        {"x": {"short": "-x(?<v>\\d)", "long": "--x=(?<v>\\d)", "multiple": True}}
    )

    assert reargs.parse(["-x1", "--x=2", "-x3"]) == ""
    assert reargs.get_value("x", "v") == ["1", "2", "3"]


def test_repeated_rule_without_multiple_keeps_last_value():
    reargs = Reargs({"name": {"short": "-n (?<name>\\w+)"}})

    assert reargs.parse(["-n", "foo", "-n", "bar"]) == ""
    assert reargs.get_value("name", "name") == "bar"


def test_empty_primary_match_consumes_nothing():
    reargs = Reargs({"list": {"short": "(?<first>)", "capture_multiple": "(?<item>a?)"}})

    assert reargs.parse(["b"]) == "b"
    assert reargs.get_value("list") == {}
    assert reargs.engine.check_rule("b", "list") is False
    assert reargs.engine.results["list"].spans == []


def test_empty_match_counts_on_an_empty_command_line():
    reargs = Reargs({"list": {"short": "(?<first>)", "capture_multiple": "(?<item>a?)"}})

    assert reargs.parse([]) == ""
    assert reargs.get_value("list") == {"first": [None]}


def test_empty_secondary_match_ends_the_captures():
    reargs = Reargs({"list": {"short": "-l ", "capture_multiple": "(?<item>a?)"}})

    assert reargs.parse(["-l", "b"]) == "b"
    assert reargs.get_value("list") == {}

    assert reargs.parse(["-l", "aa"]) == ""
    assert reargs.get_value("list", "item") == ["a", "a"]


@pytest.mark.parametrize(
    "args",
    ["-f", ("-f", 1), ["-f", None], {"-f": True}],
)
def test_invalid_arguments(args):
    reargs = Reargs({"flag": {"short": "-f"}})
    with pytest.raises(InvalidArgumentsError):
        reargs.parse(args)


def test_separator_in_argument_is_rejected():
    reargs = Reargs({"flag": {"short": "-f"}})
    with pytest.raises(TypeError, match="separator"):
        reargs.parse([f"-f{SEPARATOR}"])


def test_tuple_arguments_are_accepted():
    reargs = Reargs({"flag": {"short": "-f"}})
    assert reargs.parse(("-f", "x")) == "x"
    assert reargs.args == ["-f", "x"]


MIXED_RULES = {
    "debug": {"short": "-d", "group": "option"},
    "subset": {"short": "-u (?<apiSubset>\\w+)", "group": "option", "values": {"apiSubset": "me"}},
    "list": {"short": "ls", "group": "command"},
    "verbose": {"short": "-v", "values": "quiet"},
}


def test_defaults_after_reset_and_empty_parse():
    reargs = Reargs(MIXED_RULES)
    reset_values = reargs.get_all_values()

    assert reset_values == {"debug": False, "apiSubset": "me", "list": False, "verbose": "quiet"}
    reargs.parse([])
    assert reargs.get_all_values() == reset_values
    reargs.parse([])
    assert reargs.get_all_values() == reset_values


@pytest.mark.parametrize(
    "args",
    [[], ["-d"], ["ls", "-u", "foo"], ["-v", "unknown", "-d"]],
)
def test_all_values_is_the_union_of_group_values(args):
    reargs = Reargs(MIXED_RULES)
    reargs.parse(args)

    merged = {}
    for group in reargs.groups:
        merged.update(reargs.get_group_values(group))
    assert reargs.get_all_values() == merged


def test_empty_capture_falls_back_to_default():
    reargs = Reargs({"level": {"short": "-l(?<level>\\d*)", "values": {"level": "1"}}})

    reargs.parse(["-l"])
    assert reargs.get_value("level", "level") == "1"
    reargs.parse(["-l3"])
    assert reargs.get_value("level", "level") == "3"


def test_whitespace_class_matches_between_tokens():
    reargs = Reargs({"user": {"short": r"-u\s(?<x>\w+)"}})

    assert reargs.parse(["-u", "foo"]) == ""
    assert reargs.get_value("user", "x") == "foo"


def test_non_whitespace_class_stays_inside_a_token():
    reargs = Reargs({"name": {"short": r"--name=(?<name>\S+)"}})

    assert reargs.parse(["--name=a", "b"]) == "b"
    assert reargs.get_value("name", "name") == "a"
