import pytest

from argresolve.exceptions import SpecError
from argresolve.parser import (
    CommandParser,
    CommandSpec,
    DiagnosticKind,
    Failure,
    ParameterSpec,
    Success,
)


@pytest.fixture
def parser() -> CommandParser:
    foo = CommandSpec("foo", doc="Say foo.", parameters=[ParameterSpec("name", default="x")])
    bar = CommandSpec("bar", parameters=[ParameterSpec("i", type_tag="int")])
    return CommandParser([foo, bar])


def test_selects_command_by_first_token(parser):
    outcome = parser.parse(["bar", "-i", "10"])
    assert isinstance(outcome, Success)
    assert outcome.command.name == "bar"
    assert outcome.values == {"i": 10}


def test_one_letter_name_accepts_long_spelling(parser):
    assert parser.parse(["bar", "--i", "7"]).values == {"i": 7}


def test_other_command(parser):
    outcome = parser.parse(["foo"])
    assert outcome.command.name == "foo"
    assert outcome.values == {"name": "x"}


def test_missing_command(parser):
    outcome = parser.parse([])
    assert isinstance(outcome, Failure)
    assert outcome.kinds() == [DiagnosticKind.MISSING_COMMAND]
    assert outcome.diagnostics[0].commands == ("foo", "bar")
    assert outcome.command is None


@pytest.mark.parametrize("selector", ["baz", "Foo", "--foo", "-i"])
def test_unknown_command(parser, selector):
    outcome = parser.parse([selector, "-i", "1"])
    assert outcome.kinds() == [DiagnosticKind.UNKNOWN_COMMAND]
    assert outcome.diagnostics[0].token == selector
    assert outcome.diagnostics[0].commands == ("foo", "bar")
    assert outcome.command is None


def test_errors_are_scoped_to_selected_command(parser):
    outcome = parser.parse(["foo", "-i", "1"])
    assert outcome.command.name == "foo"
    assert outcome.kinds() == [
        DiagnosticKind.UNKNOWN_ARGUMENT,
        DiagnosticKind.UNKNOWN_ARGUMENT,
    ]


def test_single_command_takes_every_token():
    run = CommandSpec("run", parameters=[ParameterSpec("what", positional=True)])
    outcome = CommandParser(run).parse(["run"])
    assert outcome.values == {"what": "run"}


def test_command_lookup(parser):
    assert parser.command_names == ["foo", "bar"]
    assert parser.get_command("bar").name == "bar"
    assert parser.get_command("baz") is None
    assert len(parser.commands) == 2


def test_duplicate_command_names():
    with pytest.raises(SpecError):
        CommandParser([CommandSpec("a"), CommandSpec("a")])


def test_rejects_non_command():
    with pytest.raises(SpecError):
        CommandParser([CommandSpec("a"), ParameterSpec("b")])
