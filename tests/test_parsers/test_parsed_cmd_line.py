from enum import Enum

import pytest
from rich.console import Console

from cmdline.parser import FLAG_PRESENT, CmdLineParser, Option, OptionGroup, ParsedCmdLine


class Level(Enum):
    LOW = "low"
    HIGH = "high"


@pytest.fixture
def parser():
    parser = CmdLineParser()
    parser.add_option("-v", "--verbose")
    parser.add_option("-p", "--port", nargs=1)
    parser.add_option("--tags", nargs="+", separator=",")
    parser.add_option("--level", nargs=1)
    parser.add_group(Option("json"), Option("xml"), name="format")
    return parser


def test_empty_result():
    parsed = ParsedCmdLine()
    assert len(parsed) == 0
    assert parsed.options() == []
    assert parsed.unknown_tokens() == []
    assert parsed.values("anything") is None
    assert parsed.get_value("anything") is None
    assert not parsed.has_option("anything")


def test_absent_flag_and_valued_are_distinguishable(parser):
    parsed = parser.parse(["-v", "--port", "8080"])

    assert parsed.values("tags") is None
    assert parsed.get_value("tags") is None

    assert parsed.values("verbose") == []
    assert parsed.get_value("verbose") == FLAG_PRESENT
    assert parsed.get_value("verbose") is not None

    assert parsed.values("port") == ["8080"]
    assert parsed.get_value("port") == "8080"


@pytest.mark.parametrize("key", ["port", "p", "--port", "-p"])
def test_name_lookup_uses_exact_matching(parser, key):
    parsed = parser.parse(["-p", "1"])
    assert parsed.has_option(key)
    assert parsed.get_value(key) == "1"


def test_name_lookup_is_not_fuzzy(parser):
    parsed = parser.parse(["--port", "1"])
    assert not parsed.has_option("por")
    assert not parsed.has_option("Port")
    assert not parsed.has_option("")
    assert not parsed.has_option(None)


def test_lookup_by_option_identity(parser):
    port = parser.get_option("port")
    parsed = parser.parse(["--port", "9"])
    assert parsed.has_option(port)
    assert parsed.values(port) == ["9"]
    assert not parsed.has_option(parser.get_option("verbose"))


def test_group_identity_is_never_a_lookup_key(parser):
    group = parser.groups[0]
    parsed = parser.parse(["--xml"])
    assert not parsed.has_option(group)
    assert not parsed.has_option("format")
    assert parsed.has_option("xml")
    assert not parsed.has_option("json")


def test_values_are_defensive_copies(parser):
    parsed = parser.parse(["--tags=a,b"])
    values = parsed.values("tags")
    values.append("mutated")
    parsed["tags"].clear()
    assert parsed.values("tags") == ["a", "b"]

    unknown = parser.parse(["stray"]).unknown_tokens()
    unknown.append("more")
    assert parser.parse(["stray"]).unknown_tokens() == ["stray"]


def test_mapping_sugar(parser):
    parsed = parser.parse(["--port", "80", "-v"])
    assert "port" in parsed
    assert "tags" not in parsed
    assert 42 not in parsed
    assert parsed["port"] == ["80"]
    with pytest.raises(KeyError):
        parsed["tags"]
    assert len(parsed) == 2
    assert [option.name for option in parsed] == ["port", "verbose"]


def test_insertion_order_is_first_encounter(parser):
    parsed = parser.parse(["--tags", "a", "-v", "--tags", "b", "--port", "1"])
    assert [option.name for option in parsed.options()] == ["tags", "verbose", "port"]
    assert parsed.as_dict() == {"tags": ["a", "b"], "verbose": [], "port": ["1"]}


def test_typed_getters(parser):
    parsed = parser.parse(["--port", "8080", "--tags=1,2,3", "--level", "high"])
    assert parsed.get_as("port", int) == 8080
    assert parsed.values_as("tags", int) == [1, 2, 3]
    assert parsed.get_as("level", Level) is Level.HIGH
    assert parsed.get_as("verbose", bool, default=False) is False
    assert parsed.values_as("verbose", int) is None


def test_typed_getter_on_flag_returns_default(parser):
    parsed = parser.parse(["-v"])
    assert parsed.get_as("verbose", int, default=-1) == -1


def test_typed_getter_failure(parser):
    parsed = parser.parse(["--port", "http"])
    with pytest.raises(ValueError):
        parsed.get_as("port", int)


def test_equality_and_str(parser):
    first = parser.parse(["-v", "x"])
    second = parser.parse(["-v", "x"])
    assert first == second
    assert first != parser.parse(["-v"])
    assert first != "ParsedCmdLine"
    assert "--verbose=[]" in str(first)
    assert "'x'" in repr(first)


def test_summary_renders_table(parser):
    console = Console(record=True, width=100)
    parsed = parser.parse(["--tags=a,b", "-v", "leftover"])
    parsed.summary(console=console)
    output = console.export_text()
    assert "Parsed Command Line" in output
    assert "--tags" in output
    assert "a, b" in output
    assert "(flag)" in output
    assert "leftover" in output


def test_group_members_recorded_under_member():
    json_option = Option("json")
    group = OptionGroup((json_option, Option("xml")), required=True)
    parsed = CmdLineParser([group]).parse(["--json"])
    assert parsed.options() == [json_option]
