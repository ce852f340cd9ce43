import pytest

from argresolve.exceptions import SpecError
from argresolve.parser import (
    Arity,
    CommandParser,
    CommandSpec,
    DiagnosticKind,
    Failure,
    ParameterSpec,
    ParserConfig,
    ReaderRegistry,
    Success,
    TypeReader,
)


def make_run() -> CommandSpec:
    return CommandSpec(
        "run",
        doc="Run the thing.",
        parameters=[
            ParameterSpec("foo", short="f", doc="What to run."),
            ParameterSpec("my-num", type_tag="int", default=2, doc="How many times."),
            ParameterSpec("bool", is_flag=True, doc="Be loud."),
        ],
    )


def parse(args, *parameters, **options):
    parser = CommandParser(CommandSpec("cmd", parameters=parameters), **options)
    return parser.parse(args)


def test_every_required_parameter_by_long_name():
    outcome = CommandParser(make_run()).parse(["--foo", "x", "--my-num", "5", "--bool"])
    assert isinstance(outcome, Success)
    assert outcome.values == {"foo": "x", "my_num": 5, "bool": True}
    assert outcome["my_num"] == 5
    assert outcome.ok


def test_short_reference_and_defaults():
    outcome = CommandParser(make_run()).parse(["-f", "x"])
    assert outcome.values == {"foo": "x", "my_num": 2, "bool": False}


def test_inline_values():
    outcome = CommandParser(make_run()).parse(["--foo=a=b", "--my-num=-3"])
    assert outcome.values == {"foo": "a=b", "my_num": -3, "bool": False}


def test_negative_number_value():
    outcome = CommandParser(make_run()).parse(["-f", "x", "--my-num", "-42"])
    assert outcome.values["my_num"] == -42


def test_flag_never_reads_following_value():
    outcome = CommandParser(make_run()).parse(["--bool", "-f", "x"])
    assert outcome.values == {"foo": "x", "my_num": 2, "bool": True}


def test_flag_followed_by_bare_value_is_unknown():
    outcome = CommandParser(make_run()).parse(["-f", "x", "--bool", "yes"])
    assert isinstance(outcome, Failure)
    assert outcome.kinds() == [DiagnosticKind.UNKNOWN_ARGUMENT]
    assert outcome.diagnostics[0].token == "yes"


@pytest.mark.parametrize("token, expected", [("--bool=false", False), ("--bool=on", True)])
def test_flag_inline_value(token, expected):
    outcome = CommandParser(make_run()).parse(["-f", "x", token])
    assert outcome.values["bool"] is expected


def test_flag_invalid_inline_value():
    outcome = CommandParser(make_run()).parse(["-f", "x", "--bool=maybe"])
    assert outcome.kinds() == [DiagnosticKind.CONVERSION_ERROR]


def test_wrong_flag_reports_missing_and_unknown():
    outcome = CommandParser(make_run()).parse(["--wrong-flag"])
    assert isinstance(outcome, Failure)
    assert outcome.kinds() == [
        DiagnosticKind.UNKNOWN_ARGUMENT,
        DiagnosticKind.MISSING_ARGUMENT,
    ]
    unknown, missing = outcome.diagnostics
    assert unknown.token == "--wrong-flag"
    assert missing.parameter.name == "foo"
    assert outcome.command.name == "run"


def test_unknown_inline_value_is_skipped():
    outcome = CommandParser(make_run()).parse(["--nope=1", "-f", "x"])
    assert outcome.kinds() == [DiagnosticKind.UNKNOWN_ARGUMENT]
    assert outcome.diagnostics[0].token == "--nope=1"


def test_bundled_short_flags_are_unknown():
    outcome = parse(
        ["-ab"],
        ParameterSpec("a", is_flag=True),
        ParameterSpec("b", is_flag=True),
    )
    assert outcome.kinds() == [DiagnosticKind.UNKNOWN_ARGUMENT]
    assert outcome.diagnostics[0].token == "-ab"


def test_missing_parameters_in_declaration_order():
    outcome = parse([], ParameterSpec("alpha"), ParameterSpec("beta"))
    assert outcome.kinds() == [
        DiagnosticKind.MISSING_ARGUMENT,
        DiagnosticKind.MISSING_ARGUMENT,
    ]
    assert [d.parameter.name for d in outcome.diagnostics] == ["alpha", "beta"]


def test_single_missing_parameter():
    outcome = parse(["--beta", "b"], ParameterSpec("alpha"), ParameterSpec("beta"))
    assert len(outcome.diagnostics) == 1
    assert outcome.diagnostics[0].parameter.name == "alpha"


@pytest.mark.parametrize("args", [["--foo"], ["--foo", "--bool"], ["--foo", "-f", "x"]])
def test_missing_value(args):
    outcome = CommandParser(make_run()).parse(args)
    assert isinstance(outcome, Failure)
    assert DiagnosticKind.MISSING_VALUE in outcome.kinds()
    assert DiagnosticKind.MISSING_ARGUMENT not in outcome.kinds()
    diagnostic = outcome.diagnostics[outcome.kinds().index(DiagnosticKind.MISSING_VALUE)]
    assert diagnostic.parameter.name == "foo"
    assert diagnostic.token == "--foo"


def test_duplicate_argument():
    outcome = CommandParser(make_run()).parse(["--foo", "a", "--foo", "b"])
    assert isinstance(outcome, Failure)
    assert outcome.kinds() == [DiagnosticKind.DUPLICATE_ARGUMENT]
    assert outcome.diagnostics[0].parameter.name == "foo"
    assert outcome.diagnostics[0].token == "b"


def test_duplicate_reported_per_extra_occurrence():
    outcome = CommandParser(make_run()).parse(["-f", "a", "--foo", "b", "-f", "c"])
    assert outcome.kinds() == [
        DiagnosticKind.DUPLICATE_ARGUMENT,
        DiagnosticKind.DUPLICATE_ARGUMENT,
    ]
    assert [d.token for d in outcome.diagnostics] == ["b", "c"]


def test_duplicate_flag():
    outcome = CommandParser(make_run()).parse(["-f", "a", "--bool", "--bool"])
    assert outcome.kinds() == [DiagnosticKind.DUPLICATE_ARGUMENT]
    assert outcome.diagnostics[0].token == "--bool"


def test_duplicate_flag_names_typed_token():
    outcome = CommandParser(make_run()).parse(["-f", "a", "--bool", "--bool=no"])
    assert outcome.diagnostics[0].token == "--bool=no"


def test_allow_repeats_keeps_last_value():
    parser = CommandParser(make_run(), allow_repeats=True)
    outcome = parser.parse(["--foo", "a", "--foo", "b", "--my-num", "1", "--my-num", "9"])
    assert outcome.values == {"foo": "b", "my_num": 9, "bool": False}


def test_allow_repeats_skips_conversion_of_discarded_values():
    parser = CommandParser(make_run(), allow_repeats=True)
    outcome = parser.parse(["-f", "a", "--my-num", "oops", "--my-num", "4"])
    assert outcome.values["my_num"] == 4


@pytest.mark.parametrize("k", [0, 1, 2, 5])
def test_repeatable_parameter(k):
    args = []
    for i in range(k):
        args.extend(["--num", str(i)])
    outcome = parse(args, ParameterSpec("num", type_tag="int", arity=Arity.REPEATABLE))
    assert outcome.values == {"num": list(range(k))}


def test_repeatable_default():
    outcome = parse([], ParameterSpec("tag", arity="*", default=["latest"]))
    assert outcome.values == {"tag": ["latest"]}


def test_repeatable_conversion_error():
    outcome = parse(
        ["--num", "1", "--num", "x"],
        ParameterSpec("num", type_tag="int", arity=Arity.REPEATABLE),
    )
    assert outcome.kinds() == [DiagnosticKind.CONVERSION_ERROR]
    assert outcome.diagnostics[0].tokens == ("1", "x")


def test_always_repeatable_reader():
    outcome = parse(["--n", "1", "--n", "2"], ParameterSpec("n", type_tag="list[int]"))
    assert outcome.values == {"n": [1, 2]}
    assert parse([], ParameterSpec("n", type_tag="list[int]")).values == {"n": []}


def test_optional_parameter():
    spec = ParameterSpec("name", arity=Arity.OPTIONAL)
    assert parse([], spec).values == {"name": None}
    assert parse(["--name", "x"], spec).values == {"name": "x"}


def test_default_is_copied():
    default = ["a"]
    spec = ParameterSpec("items", arity="*", default=default)
    outcome = parse([], spec)
    outcome.values["items"].append("b")
    assert default == ["a"]


def test_default_that_cannot_be_copied(tmp_path):
    with open(tmp_path / "out.txt", "w", encoding="UTF-8") as stream:
        spec = ParameterSpec("out", type_tag="path", default=stream)
        outcome = CommandParser(CommandSpec("cat", parameters=[spec])).parse([])
    assert isinstance(outcome, Success)
    assert outcome.values["out"] is stream


def test_allow_empty_reader():
    registry = ReaderRegistry()
    registry.register(
        "maybe",
        TypeReader(
            short_label="maybe",
            convert=lambda tokens: tokens[0] if tokens else "nothing",
            allow_empty=True,
        ),
    )
    parser = CommandParser(
        CommandSpec("cmd", parameters=[ParameterSpec("value", type_tag="maybe")]),
        registry=registry,
    )
    assert parser.parse([]).values == {"value": "nothing"}
    assert parser.parse(["--value", "x"]).values == {"value": "x"}


def test_positional_and_named_are_equivalent():
    parser = CommandParser(make_run(), allow_positional=True)
    named = parser.parse(["-f", "hello", "--my-num", "3", "--bool"])
    positional = parser.parse(["hello", "3", "--bool"])
    assert isinstance(named, Success)
    assert named.values == positional.values == {
        "foo": "hello",
        "my_num": 3,
        "bool": True,
    }


def test_positional_skips_parameters_bound_by_name():
    parser = CommandParser(make_run(), allow_positional=True)
    outcome = parser.parse(["--foo", "x", "7"])
    assert outcome.values == {"foo": "x", "my_num": 7, "bool": False}


def test_positional_disabled_rejects_bare_values():
    outcome = CommandParser(make_run()).parse(["hello"])
    assert outcome.kinds() == [
        DiagnosticKind.UNKNOWN_ARGUMENT,
        DiagnosticKind.MISSING_ARGUMENT,
    ]
    assert outcome.diagnostics[0].token == "hello"


def test_too_many_positional_values():
    parser = CommandParser(make_run(), allow_positional=True)
    outcome = parser.parse(["a", "1", "extra"])
    assert outcome.kinds() == [DiagnosticKind.UNKNOWN_ARGUMENT]
    assert outcome.diagnostics[0].token == "extra"


def test_positional_parameter_without_allow_positional():
    outcome = parse(
        ["--verbose", "notes.txt"],
        ParameterSpec("path", type_tag="path", positional=True),
        ParameterSpec("verbose", is_flag=True),
    )
    assert str(outcome.values["path"]) == "notes.txt"
    assert outcome.values["verbose"] is True


def test_repeatable_positional_collects_remaining_values():
    outcome = parse(
        ["a.txt", "b.txt", "c.txt"],
        ParameterSpec("files", arity=Arity.REPEATABLE, positional=True),
    )
    assert outcome.values == {"files": ["a.txt", "b.txt", "c.txt"]}


def test_end_of_options_marker():
    parser = CommandParser(make_run(), allow_positional=True)
    outcome = parser.parse(["--bool", "--", "-f"])
    assert outcome.values == {"foo": "-f", "my_num": 2, "bool": True}


def test_diagnostic_order():
    outcome = CommandParser(make_run()).parse(["--my-num", "abc", "--what", "-x"])
    assert outcome.kinds() == [
        DiagnosticKind.UNKNOWN_ARGUMENT,
        DiagnosticKind.UNKNOWN_ARGUMENT,
        DiagnosticKind.MISSING_ARGUMENT,
        DiagnosticKind.CONVERSION_ERROR,
    ]
    assert [d.token for d in outcome.diagnostics[:2]] == ["--what", "-x"]
    conversion = outcome.diagnostics[-1]
    assert conversion.parameter.name == "my-num"
    assert conversion.tokens == ("abc",)
    assert "invalid literal" in conversion.message


def test_conversion_errors_are_all_collected():
    outcome = parse(
        ["--a", "x", "--b", "y"],
        ParameterSpec("a", type_tag="int"),
        ParameterSpec("b", type_tag="float"),
    )
    assert outcome.kinds() == [
        DiagnosticKind.CONVERSION_ERROR,
        DiagnosticKind.CONVERSION_ERROR,
    ]
    assert [d.parameter.name for d in outcome.diagnostics] == ["a", "b"]


def test_shared_group_parameters():
    common = CommandSpec(
        "common",
        parameters=[
            ParameterSpec("verbose", short="v", is_flag=True),
            ParameterSpec("config", default="app.toml"),
        ],
    )
    build = CommandSpec("build", parameters=[ParameterSpec("target"), common])
    parser = CommandParser(build, allow_positional=True)
    outcome = parser.parse(["-v", "web", "dev.toml"])
    assert outcome.values == {"target": "web", "verbose": True, "config": "dev.toml"}


def test_config_object_and_overrides():
    config = ParserConfig(allow_positional=True)
    parser = CommandParser(make_run(), config=config, allow_repeats=True)
    assert parser.config.allow_positional
    assert parser.config.allow_repeats
    assert not config.allow_repeats


def test_unknown_type_tag_is_rejected_at_construction():
    with pytest.raises(SpecError):
        CommandParser(CommandSpec("cmd", parameters=[ParameterSpec("id", type_tag="uuid")]))


def test_no_commands():
    with pytest.raises(SpecError):
        CommandParser([])


def test_parse_none_is_empty():
    outcome = parse(None, ParameterSpec("name", arity="optional"))
    assert outcome.values == {"name": None}


def test_parser_is_reusable():
    parser = CommandParser(make_run())
    assert isinstance(parser.parse(["--foo"]), Failure)
    assert parser.parse(["--foo", "x"]).values["foo"] == "x"


def test_str():
    parser = CommandParser(make_run(), allow_positional=True)
    assert str(parser) == (
        "CommandParser(commands=1, parameters=3, "
        "allow_positional=True, allow_repeats=False)"
    )
    assert repr(parser) == str(parser)
