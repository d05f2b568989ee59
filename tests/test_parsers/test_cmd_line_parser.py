import pytest

from cmdline.exceptions import (
    ConfigurationError,
    InsufficientValues,
    MissingRequiredOption,
    ParseError,
    TooManyValues,
    UnrecognizedOption,
)
from cmdline.parser import CmdLineParser, Option, OptionGroup, ParsedCmdLine


def build_parser(config, **kwargs):
    parser = CmdLineParser(**kwargs)
    config(parser)
    return parser


def test_none_and_empty_tokens():
    parser = CmdLineParser([Option("verbose")])
    for tokens in (None, [], ()):
        parsed = parser.parse(tokens)
        assert isinstance(parsed, ParsedCmdLine)
        assert len(parsed) == 0
        assert parsed.unknown_tokens() == []


def test_unknown_tokens_are_collected():
    parser = CmdLineParser([Option("verbose")])
    parsed = parser.parse(["foo", "--verbose", "bar"])
    assert parsed.unknown_tokens() == ["foo", "bar"]
    assert parsed.has_option("verbose")
    assert parsed.values("verbose") == []


def test_unknown_option_shaped_tokens_do_not_abort():
    parser = CmdLineParser([Option("verbose")])
    parsed = parser.parse(["--nope", "-x", "--verbose", "-", "--"])
    assert parsed.unknown_tokens() == ["--nope", "-x", "-", "--"]
    assert parsed.has_option("verbose")


def test_positional_token_equal_to_option_name_is_unknown():
    parser = CmdLineParser([Option("verbose")])
    parsed = parser.parse(["verbose"])
    assert not parsed.has_option("verbose")
    assert parsed.unknown_tokens() == ["verbose"]


def test_values_consumed_in_encounter_order():
    def config(parser):
        parser.add_option("-a", "--alpha", nargs=2)
        parser.add_option("-b", "--beta", nargs=1)

    parser = build_parser(config)
    parsed = parser.parse(["-b", "one", "--alpha", "x", "y", "tail"])
    assert parsed.values("alpha") == ["x", "y"]
    assert parsed.values("beta") == ["one"]
    assert parsed.unknown_tokens() == ["tail"]


def test_collection_stops_at_maximum():
    parser = CmdLineParser([Option("name", min_values=1, max_values=1)])
    parsed = parser.parse(["--name", "first", "second"])
    assert parsed.values("name") == ["first"]
    assert parsed.unknown_tokens() == ["second"]


def test_optional_value_option():
    def config(parser):
        parser.add_option("--level", nargs="?")
        parser.add_option("-v", "--verbose")

    parser = build_parser(config)

    parsed = parser.parse(["--level", "-v"])
    assert parsed.values("level") == []
    assert parsed.has_option("verbose")

    parsed = parser.parse(["--level"])
    assert parsed.values("level") == []

    parsed = parser.parse(["--level", "3"])
    assert parsed.values("level") == ["3"]


def test_unbounded_option_collects_until_next_option():
    def config(parser):
        parser.add_option("--files", nargs="+")
        parser.add_option("-v", "--verbose")

    parser = build_parser(config)
    parsed = parser.parse(["--files", "a", "b", "c", "-v", "d"])
    assert parsed.values("files") == ["a", "b", "c"]
    assert parsed.unknown_tokens() == ["d"]


def test_unbounded_option_stops_at_any_option_shaped_token():
    parser = CmdLineParser([Option("files", min_values=1, max_values=None)])
    parsed = parser.parse(["--files", "a", "--unknown", "b"])
    assert parsed.values("files") == ["a"]
    assert parsed.unknown_tokens() == ["--unknown", "b"]


def test_unrecognized_option_shaped_value_is_consumed_before_minimum():
    parser = CmdLineParser([Option("range", min_values=2, max_values=2)])
    parsed = parser.parse(["--range", "-5", "-1"])
    assert parsed.values("range") == ["-5", "-1"]


def test_bounded_option_consumes_unknown_option_shaped_value():
    parser = CmdLineParser([Option("offset", min_values=0, max_values=1)])
    parsed = parser.parse(["--offset", "-3"])
    assert parsed.values("offset") == ["-3"]


def test_repeated_option_appends_values():
    parser = CmdLineParser([Option("tag", alias="t", min_values=1, max_values=1)])
    parsed = parser.parse(["--tag", "a", "-t", "b", "--tag=c"])
    assert parsed.values("tag") == ["a", "b", "c"]


def test_repeated_flag_stays_present_without_values():
    parser = CmdLineParser([Option("verbose", alias="v")])
    parsed = parser.parse(["-v", "-v", "--verbose"])
    assert parsed.values("verbose") == []
    assert len(parsed) == 1


def test_insufficient_values_at_end_of_stream():
    parser = CmdLineParser([Option("pair", min_values=2, max_values=2)])
    with pytest.raises(InsufficientValues) as excinfo:
        parser.parse(["--pair", "one"])
    assert excinfo.value.needed == 2
    assert excinfo.value.got == 1
    assert excinfo.value.option.name == "pair"


def test_insufficient_values_before_next_recognized_option():
    parser = CmdLineParser(
        [Option("pair", min_values=2, max_values=2), Option("verbose")]
    )
    with pytest.raises(InsufficientValues) as excinfo:
        parser.parse(["--pair", "one", "--verbose"])
    assert (excinfo.value.needed, excinfo.value.got) == (2, 1)


def test_insufficient_values_with_no_values():
    parser = CmdLineParser([Option("files", min_values=1, max_values=None)])
    with pytest.raises(InsufficientValues) as excinfo:
        parser.parse(["--files"])
    assert excinfo.value.got == 0


def test_value_equal_to_option_name_ends_collection_once_minimum_met():
    parser = CmdLineParser(
        [Option("names", min_values=1, max_values=3), Option("verbose")]
    )
    parsed = parser.parse(["--names", "a", "--verbose", "b"])
    assert parsed.values("names") == ["a"]
    assert parsed.has_option("verbose")
    assert parsed.unknown_tokens() == ["b"]


def test_value_equal_to_option_name_fails_before_minimum():
    parser = CmdLineParser(
        [Option("names", min_values=2, max_values=3), Option("verbose")]
    )
    with pytest.raises(InsufficientValues):
        parser.parse(["--names", "a", "--verbose", "b"])


def test_bare_value_equal_to_option_name_is_a_value():
    parser = CmdLineParser(
        [Option("names", min_values=1, max_values=2), Option("verbose")]
    )
    parsed = parser.parse(["--names", "verbose"])
    assert parsed.values("names") == ["verbose"]
    assert not parsed.has_option("verbose")


def test_inline_values_with_separator():
    parser = CmdLineParser()
    parser.add_option("--tags", nargs="+", separator=",")
    parsed = parser.parse(["--tags=a,b,c"])
    assert parsed.values("tags") == ["a", "b", "c"]


def test_inline_value_without_separator_is_single_value():
    parser = CmdLineParser()
    parser.add_option("-o", "--output", nargs=1)
    parsed = parser.parse(["--output=a,b=c", "-o=x"])
    assert parsed.values("output") == ["a,b=c", "x"]


def test_inline_value_does_not_start_collection():
    parser = CmdLineParser()
    parser.add_option("--tags", nargs="+", separator=",")
    parsed = parser.parse(["--tags=a", "b"])
    assert parsed.values("tags") == ["a"]
    assert parsed.unknown_tokens() == ["b"]


def test_inline_too_many_values():
    parser = CmdLineParser()
    parser.add_option("--pair", nargs=2, separator=":")
    with pytest.raises(TooManyValues) as excinfo:
        parser.parse(["--pair=a:b:c"])
    assert excinfo.value.max_values == 2
    assert excinfo.value.got == 3


def test_inline_value_on_flag_is_too_many():
    parser = CmdLineParser([Option("verbose")])
    with pytest.raises(TooManyValues) as excinfo:
        parser.parse(["--verbose=yes"])
    assert (excinfo.value.max_values, excinfo.value.got) == (0, 1)


def test_inline_insufficient_values():
    parser = CmdLineParser()
    parser.add_option("--pair", nargs=2, separator=":")
    with pytest.raises(InsufficientValues):
        parser.parse(["--pair=a"])


def test_unknown_inline_option_is_kept_whole():
    parser = CmdLineParser([Option("verbose")])
    parsed = parser.parse(["--color=auto"])
    assert parsed.unknown_tokens() == ["--color=auto"]


def test_required_option_missing():
    parser = CmdLineParser()
    parser.add_option("--env", nargs=1, required=True)
    with pytest.raises(MissingRequiredOption) as excinfo:
        parser.parse(["--other"])
    assert excinfo.value.option.name == "env"
    assert "--env" in str(excinfo.value)


def test_required_option_present():
    parser = CmdLineParser()
    parser.add_option("--env", nargs=1, required=True)
    assert parser.parse(["--env", "prod"]).get_value("env") == "prod"


def test_parse_errors_share_base_class():
    parser = CmdLineParser([Option("env", required=True, min_values=1, max_values=1)])
    with pytest.raises(ParseError):
        parser.parse([])


def test_non_string_token_is_rejected():
    parser = CmdLineParser([Option("verbose")])
    with pytest.raises(TypeError):
        parser.parse(["--verbose", 3])


def test_parse_is_idempotent_and_reusable():
    def config(parser):
        parser.add_option("-v", "--verbose")
        parser.add_option("--tags", nargs="*", separator=",")

    parser = build_parser(config)
    tokens = ["x", "-v", "--tags", "a", "b"]
    first = parser.parse(tokens)
    second = parser.parse(tokens)
    assert first is not second
    assert first == second
    assert first.values("tags") == second.values("tags") == ["a", "b"]
    assert first.unknown_tokens() == second.unknown_tokens() == ["x"]
    assert tokens == ["x", "-v", "--tags", "a", "b"]

    other = parser.parse(["--tags=z"])
    assert other.values("tags") == ["z"]
    assert first.values("tags") == ["a", "b"]


def test_first_declared_option_wins_for_abbreviations():
    parser = CmdLineParser(allow_abbreviations=True)
    parser.add_option("--verbose")
    parser.add_option("--version")
    parsed = parser.parse(["--ver"])
    assert parsed.has_option("verbose")
    assert not parsed.has_option("version")


def test_exact_match_beats_abbreviation():
    parser = CmdLineParser(allow_abbreviations=True)
    parser.add_option("--verbose")
    parser.add_option("--ver", nargs=1)
    parsed = parser.parse(["--ver", "1"])
    assert parsed.values("ver") == ["1"]
    assert not parsed.has_option("verbose")


def test_abbreviations_disabled_by_default():
    parser = CmdLineParser([Option("verbose")])
    parsed = parser.parse(["--verb"])
    assert not parsed.has_option("verbose")
    assert parsed.unknown_tokens() == ["--verb"]


def test_abbreviation_with_inline_value():
    parser = CmdLineParser(allow_abbreviations=True)
    parser.add_option("--output", nargs=1)
    parsed = parser.parse(["--out=file.txt", "-o"])
    assert parsed.values("output") == ["file.txt"]
    assert parsed.unknown_tokens() == ["-o"]


def test_add_option_returns_registered_option():
    parser = CmdLineParser()
    option = parser.add_option("-v", "--verbose", description="Chatty output")
    assert option == Option("verbose", alias="v")
    assert option.description == "Chatty output"
    assert parser.get_option("-v") is option
    assert parser.get_option("--missing") is None


@pytest.mark.parametrize(
    "first,second",
    [
        (Option("verbose"), Option("verbose")),
        (Option("verbose", alias="v"), Option("version", alias="v")),
        (Option("v"), Option("verbose", alias="v")),
    ],
)
def test_duplicate_names_are_rejected(first, second):
    parser = CmdLineParser([first])
    with pytest.raises(ConfigurationError):
        parser.register(second)


def test_option_cannot_be_standalone_and_grouped():
    json_option = Option("json")
    parser = CmdLineParser([json_option])
    with pytest.raises(ConfigurationError):
        parser.register(OptionGroup((json_option, Option("xml"))))


def test_option_cannot_join_two_groups():
    json_option = Option("json")
    parser = CmdLineParser([OptionGroup((json_option, Option("xml")))])
    with pytest.raises(ConfigurationError):
        parser.register(OptionGroup((json_option, Option("yaml"))))


def test_failed_registration_leaves_parser_untouched():
    parser = CmdLineParser([Option("xml")])
    with pytest.raises(ConfigurationError):
        parser.add_group(Option("json"), Option("xml"))
    assert [option.name for option in parser.options] == ["xml"]
    assert parser.groups == []


def test_register_rejects_other_types():
    with pytest.raises(ConfigurationError):
        CmdLineParser(["--verbose"])


def test_introspection():
    parser = CmdLineParser()
    verbose = parser.add_option("-v", "--verbose")
    group = parser.add_group(Option("json"), Option("xml"), required=True)
    assert parser.declarations == [verbose, group]
    assert [option.name for option in parser.options] == ["verbose", "json", "xml"]
    assert parser.groups == [group]
    assert parser.group_of(parser.get_option("xml")) is group
    assert parser.group_of(verbose) is None
    assert str(parser) == (
        "CmdLineParser(options=3, groups=1, required=0, abbreviations=False)"
    )


def test_raise_for_unknown_suggests_flags():
    parser = CmdLineParser()
    parser.add_option("-v", "--verbose")
    parser.add_option("--version")
    parsed = parser.parse(["--verb", "--ver"])
    with pytest.raises(UnrecognizedOption) as excinfo:
        parser.raise_for_unknown(parsed)
    assert excinfo.value.token == "--verb"
    assert excinfo.value.suggestions == ["--verbose"]
    assert "Did you mean" in str(excinfo.value)


def test_raise_for_unknown_positional_policy():
    parser = CmdLineParser([Option("verbose")])
    parsed = parser.parse(["file.txt", "--verbose"])
    parser.raise_for_unknown(parsed, allow_positional=True)
    with pytest.raises(UnrecognizedOption) as excinfo:
        parser.raise_for_unknown(parsed)
    assert excinfo.value.suggestions == []


def test_raise_for_unknown_is_silent_without_unknowns():
    parser = CmdLineParser([Option("verbose")])
    parser.raise_for_unknown(parser.parse(["--verbose"]))


def test_suggest_next():
    parser = CmdLineParser()
    parser.add_option("-v", "--verbose")
    parser.add_option("--tags", nargs="+")
    parser.add_group(Option("json"), Option("xml"))

    assert parser.suggest_next([], cursor_at_end_of_token=True) == [
        "--verbose",
        "-v",
        "--tags",
        "--json",
        "--xml",
    ]
    assert parser.suggest_next(["-v", "--json"], cursor_at_end_of_token=True) == [
        "--tags"
    ]
    assert parser.suggest_next(["--t"]) == ["--tags"]
    assert parser.suggest_next(["--verbose", "--"]) == ["--tags", "--json", "--xml"]
    assert parser.suggest_next(["--bogus", "'unbalanced"]) == []
