import pytest

from argparse_sh.definition_stream import parse_definition_stream
from argparse_sh.exceptions import DefinitionError
from argparse_sh.parser import ArgumentType, ChoiceOption


def test_full_stream():
    result = parse_definition_stream(
        [
            "--string", "given-name", "first-name", "--ordinal", "0", "--required",
            "--description", "Name given to you.",
            "--int", "age", "--flag", "-a", "--default", "0",
            "--choice", "gender",
            "--option", "male", "Person identifies as male",
            "--option", "female",
            "--map", "boy", "male",
            "--bool", "verbose", "v", "--negative", "quiet",
            "--prefix", "DEMO_", "--auto-help", "--columns", "60",
            "--",
            "Alice", "--age", "32",
        ]
    )
    definitions = result.definitions
    assert [d.name for d in definitions] == ["GIVEN_NAME", "AGE", "GENDER", "VERBOSE"]

    given_name, age, gender, verbose = definitions
    assert given_name.flags == ("--given-name", "--first-name")
    assert given_name.ordinal == 0
    assert given_name.required
    assert given_name.description == "Name given to you."
    assert age.kind is ArgumentType.INTEGER
    assert age.flags == ("--age", "-a")
    assert age.default == "0"
    assert gender.options == (
        ChoiceOption("male", "Person identifies as male"),
        ChoiceOption("female"),
    )
    assert gender.mappings == {"boy": "male"}
    assert verbose.flags == ("--verbose", "--v")
    assert verbose.negative_flags == ("--quiet",)

    assert result.settings.prefix == "DEMO_"
    assert result.settings.auto_help
    assert result.settings.columns == 60
    assert result.user_tokens == ["Alice", "--age", "32"]


def test_user_tokens_keep_later_separators():
    result = parse_definition_stream(["--string", "name", "--", "a", "--", "b"])
    assert result.user_tokens == ["a", "--", "b"]


def test_no_separator_means_no_user_tokens():
    result = parse_definition_stream(["--string", "name"])
    assert result.user_tokens == []


def test_repeated_catch_all_from_stream():
    result = parse_definition_stream(
        ["--string", "name", "--repeated", "--catch-all", "--", "Bob", "Carol"]
    )
    (definition,) = result.definitions
    assert definition.name == "NAME"
    assert definition.repeated and definition.catch_all
    assert result.user_tokens == ["Bob", "Carol"]


def test_explicit_name_and_aliases():
    result = parse_definition_stream(
        ["--str", "nickname", "--name", "NICKNAMES", "--repeat", "--secret",
         "--number", "ratio", "--pick", "size", "--option", "s", "--desc", "Size"]
    )
    nickname, ratio, size = result.definitions
    assert nickname.name == "NICKNAMES"
    assert nickname.repeated and nickname.secret
    assert ratio.kind is ArgumentType.FLOAT
    assert size.kind is ArgumentType.CHOICE
    assert size.options == (ChoiceOption("s"),)
    assert size.description == "Size"


def test_option_help_not_taken_from_dash_token():
    result = parse_definition_stream(
        ["--choice", "mode", "--option", "fast", "--option", "slow", "Careful"]
    )
    (mode,) = result.definitions
    assert mode.options == (ChoiceOption("fast"), ChoiceOption("slow", "Careful"))


def test_runtime_options():
    result = parse_definition_stream(
        [
            "--export", "--debug", "--autohelp",
            "--help-function", "print_help",
            "--cols", "100",
            "--program-name", "demo",
            "--program-summary", "Summary",
            "--program-description", "Description",
        ]
    )
    settings = result.settings
    assert settings.export and settings.debug and settings.auto_help
    assert settings.help_function == "print_help"
    assert settings.columns == 100
    assert settings.program_name == "demo"
    assert settings.program_summary == "Summary"
    assert settings.program_description == "Description"


@pytest.mark.parametrize(
    "tokens, message",
    [
        (["--unknown"], "Unrecognized option: --unknown"),
        (["--prefix"], "prefix must be provided after --prefix"),
        (["--string", "name", "--default"], "default must be provided after --default"),
        (["--int", "n", "--ordinal", "x"], "Non-numeric value 'x'"),
        (["--int", "n", "--ordinal", "70000"], "between 0 and 65,535"),
        (["--int", "n", "--ordinal", "1", "--ord", "2"], "more than once"),
        (["--columns", "0"], "between 1 and 10,000"),
        (["--string", "n", "--negative", "no-n"], "only allowed on boolean"),
        (["--choice", "c", "--map", "a"], "pair of values"),
        (["--string", "a", "--string", "a"], "already used"),
        (["--boolean", "b", "--default", "true"], "does not accept --default"),
        (["--choice", "c"], "at least one --option"),
        (["--config", "a.yaml", "--config", "b.yaml"], "only be given once"),
        (["--prefix", "A B"], "--prefix must be a valid shell identifier"),
        (["--prefix", "1X_"], "--prefix must be a valid shell identifier"),
        (["--help-function", "print-help"], "--help-function must be a valid shell identifier"),
    ],
)
def test_definition_errors(tokens, message):
    with pytest.raises(DefinitionError, match=message):
        parse_definition_stream(tokens)


def test_option_outside_choice_ends_definition():
    with pytest.raises(DefinitionError, match="Unrecognized option: --option"):
        parse_definition_stream(["--string", "name", "--option", "a"])


def test_config_file_definitions_come_first(tmp_path):
    config = tmp_path / "args.yaml"
    config.write_text(
        "prefix: FILE_\n"
        "columns: 50\n"
        "arguments:\n"
        "  - type: string\n"
        "    flags: [from-file]\n"
    )
    result = parse_definition_stream(
        ["--config", str(config), "--prefix", "CLI_", "--int", "count"]
    )
    assert [d.name for d in result.definitions] == ["FROM_FILE", "COUNT"]
    assert result.settings.prefix == "CLI_"
    assert result.settings.columns == 50


def test_empty_prefix_is_allowed():
    result = parse_definition_stream(["--prefix", "", "--string", "name"])
    assert result.settings.prefix == ""


def test_stream_flag_conflicts_with_config_file(tmp_path):
    config = tmp_path / "args.toml"
    config.write_text('[[arguments]]\ntype = "string"\nflags = ["name"]\n')
    with pytest.raises(DefinitionError, match="Name 'NAME' is already used"):
        parse_definition_stream(["--config", str(config), "--string", "name"])
