import pytest

from reargs import Reargs

KV_RULES = {
    "kv1": {
        "help": "set key value pairs one at a time",
        "short": r"-e (?<key>[\w]+)?:(?<value>[\w]+)?",
        "human_readable": "-e key:value",
        "multiple": True,
        "values": {"key": "defaultKey", "value": "defaultValue"},
    },
    "kv2": {
        "help": "set key value pairs all together",
        "short": "-a ",
        "human_readable": "-a key:value,key:value,...",
        "capture_multiple": r"(?<key2>[\w]+)?:(?<value2>[\w]+)?,?",
        "values": {"key2": "defaultKey2", "value2": "defaultValue2"},
    },
    "kv3": {
        "group": "kv3",
        "help": "set key value pairs all together ... multiple times !",
        "short": "-b ",
        "human_readable": "-b key:value,key:value,...",
        "capture_multiple": r"(?<key3>[\w]+)?:(?<value3>[\w]+)?,?",
        "multiple": True,
        "values": {"key3": "defaultKey3", "value3": "defaultValue3"},
    },
}


@pytest.fixture
def reargs():
    return Reargs(KV_RULES, {"long_short_delimiter": ", ", "param_description_spacer": " "})


def test_accumulating_rules_start_empty(reargs):
    assert reargs.parse([]) == ""
    assert reargs.get_all_values() == {}
    assert reargs.get_value("kv1") == {}


def test_multiple_occurrences(reargs):
    unparsed = reargs.parse(
        ["-e", "key1:value1", "-e", "key2:value2", "-e", "key3:", "-e", ":value4"]
    )

    assert unparsed == ""
    assert reargs.remain == ""
    assert reargs.get_all_values() == {
        "key": ["key1", "key2", "key3", "defaultKey"],
        "value": ["value1", "value2", "defaultValue", "value4"],
    }


def test_capture_multiple_keeps_last_occurrence(reargs):
    unparsed = reargs.parse(
        ["-a", "key0:value0,key1:value2", "-a", "key1:value1,key2:value2,key3:,:value4"]
    )

    assert unparsed == ""
    assert reargs.remain == ""
    assert reargs.get_all_values() == {
        "key2": ["key1", "key2", "key3", "defaultKey2"],
        "value2": ["value1", "value2", "defaultValue2", "value4"],
    }


def test_capture_multiple_with_multiple_accumulates(reargs):
    unparsed = reargs.parse(
        ["-b", "key0:value0,key1:value2", "-b", "key1:value1,key2:value2,key3:,:value4"]
    )

    assert unparsed == ""
    assert reargs.get_all_values() == {
        "key3": ["key0", "key1", "key1", "key2", "key3", "defaultKey3"],
        "value3": ["value0", "value2", "value1", "value2", "defaultValue3", "value4"],
    }


def test_mixed_occurrences(reargs):
    unparsed = reargs.parse(
        [
            "-e", "key1:value1",
            "-a", "key0:value0,key1:value2",
            "-e", "key2:value2",
            "-b", "key0:value0,key1:value2",
            "-e", "key3:",
            "-b", "key1:value1,key2:value2,key3:,:value4",
            "-e", ":value4",
            "-a", "key1:value1,key2:value2,key3:,:value4",
        ]
    )

    assert unparsed == ""
    assert reargs.remain == ""
    assert reargs.get_all_values() == {
        "key": ["key1", "key2", "key3", "defaultKey"],
        "value": ["value1", "value2", "defaultValue", "value4"],
        "key2": ["key1", "key2", "key3", "defaultKey2"],
        "value2": ["value1", "value2", "defaultValue2", "value4"],
        "key3": ["key0", "key1", "key1", "key2", "key3", "defaultKey3"],
        "value3": ["value0", "value2", "value1", "value2", "defaultValue3", "value4"],
    }
    assert reargs.get_value("kv1", "key") == ["key1", "key2", "key3", "defaultKey"]
    assert reargs.get_value("kv2") == {
        "key2": ["key1", "key2", "key3", "defaultKey2"],
        "value2": ["value1", "value2", "defaultValue2", "value4"],
    }
    assert reargs.get_group_values("kv3") == {
        "key3": ["key0", "key1", "key1", "key2", "key3", "defaultKey3"],
        "value3": ["value0", "value2", "value1", "value2", "defaultValue3", "value4"],
    }


def test_returned_lists_are_copies(reargs):
    reargs.parse(["-e", "key1:value1"])
    keys = reargs.get_value("kv1", "key")
    keys.append("intruder")
    assert reargs.get_value("kv1", "key") == ["key1"]


def test_unmatched_pair_is_left_unparsed(reargs):
    assert reargs.parse(["-e", "key1:value1", "-e", "novalue"]) == "-e\x00novalue"
    assert reargs.get_value("kv1") == {"key": ["key1"], "value": ["value1"]}
