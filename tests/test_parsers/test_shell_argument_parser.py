import pytest

from argparse_sh.exceptions import DefinitionError, UserError
from argparse_sh.parser import HelpResult, ParseResult, ShellArgumentParser
from argparse_sh.settings import Settings
from argparse_sh.signals import HelpSignal


@pytest.fixture
def parser():
    parser = ShellArgumentParser(Settings(prefix="DEMO_", auto_help=True))
    parser.add_definition("string", "--given-name", ordinal=0, required=True)
    parser.add_definition("integer", "--age", "-a", default="0")
    parser.add_definition(
        "choice", "--gender", options=["male", "female"], mappings={"boy": "male"}
    )
    parser.add_definition("boolean", "--verbose", negative_flags=["--quiet"])
    parser.add_definition("string", "--quote", name="QUOTES", repeated=True, catch_all=True)
    return parser


def test_str():
    parser = ShellArgumentParser(Settings(prefix="P_"))
    parser.add_definition("string", "--name")
    assert str(parser) == (
        "ShellArgumentParser(DefinitionSet(args=1, flags=1, ordinals=0, "
        "catch_alls=0, required=0), prefix='P_')"
    )
    assert repr(parser) == str(parser)


def test_parse_args(parser):
    result = parser.parse_args(
        ["Alice", "-a", "+032", "--gender", "boy", "--verbose", "Be kind.", "Be brave."]
    )
    assert isinstance(result, ParseResult)
    assert result.as_dict("DEMO_") == {
        "DEMO_GIVEN_NAME": "Alice",
        "DEMO_AGE": "32",
        "DEMO_GENDER": "male",
        "DEMO_VERBOSE": "true",
        "DEMO_QUOTES": "2",
        "DEMO_QUOTES_0": "Be kind.",
        "DEMO_QUOTES_1": "Be brave.",
    }


def test_absent_values(parser):
    result = parser.parse_args(["Alice"])
    assert result.as_dict() == {"GIVEN_NAME": "Alice", "AGE": "0", "QUOTES": "0"}


def test_negative_flag(parser):
    assert parser.parse_args(["Alice", "--quiet"]).as_dict()["VERBOSE"] == "false"


def test_repeated_default_is_one_value():
    parser = ShellArgumentParser()
    parser.add_definition("string", "--tag", repeated=True, default="latest")
    assert parser.parse_args([]).as_dict() == {"TAG": "1", "TAG_0": "latest"}


def test_user_errors(parser):
    with pytest.raises(UserError, match="Value for argument GIVEN_NAME is missing"):
        parser.parse_args([])
    with pytest.raises(UserError, match="Non-integer value 'old'"):
        parser.parse_args(["Alice", "--age", "old"])
    with pytest.raises(UserError, match="not recognized for argument GENDER"):
        parser.parse_args(["Alice", "--gender", "robot"])


def test_help_signal_and_run(parser):
    with pytest.raises(HelpSignal):
        parser.parse_args(["--help"])

    result = parser.run(["Alice", "--help", "--age", "oops"])
    assert isinstance(result, HelpResult)
    assert not result.is_error
    assert result.lines[0] == "OPTIONS"
    assert "       --given-name <given_name>" in result.lines


def test_run_returns_parse_result(parser):
    assert isinstance(parser.run(["Alice"]), ParseResult)


def test_definitions_are_sealed_after_parse(parser):
    parser.parse_args(["Alice"])
    with pytest.raises(DefinitionError, match="sealed"):
        parser.add_definition("string", "--late")


def test_parse_is_repeatable(parser):
    first = parser.parse_args(["Alice", "-a", "7"])
    second = parser.parse_args(["Alice", "-a", "7"])
    assert first == second


def test_render_help(parser, capsys):
    parser.settings.program_name = "demo"
    parser.render_help()
    captured = capsys.readouterr()
    assert "NAME" in captured.err
    assert "--gender <gender>" in captured.err
