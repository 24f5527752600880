import math

import pytest

from argparse_sh.exceptions import UserError
from argparse_sh.parser import (
    ArgumentType,
    Definition,
    DefinitionSet,
    Resolver,
    TokenMatcher,
    format_value,
    validate_resolved,
    validate_value,
)


def make(kind, **kwargs):
    return Definition(kind, flags=("--value",), **kwargs)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("42", 42),
        ("-7", -7),
        ("+007", 7),
        ("9223372036854775807", 2**63 - 1),
        ("-9223372036854775808", -(2**63)),
    ],
)
def test_integer_valid(raw, expected):
    assert validate_value(make(ArgumentType.INTEGER), raw) == expected


@pytest.mark.parametrize(
    "raw", ["", "1.5", "abc", " 1", "1_000", "9223372036854775808", "0x10"]
)
def test_integer_invalid(raw):
    with pytest.raises(UserError, match="Non-integer value"):
        validate_value(make(ArgumentType.INTEGER), raw)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1.5", 1.5),
        ("-2", -2.0),
        (".5", 0.5),
        ("1e3", 1000.0),
        ("inf", math.inf),
        ("-Infinity", -math.inf),
    ],
)
def test_float_valid(raw, expected):
    assert validate_value(make(ArgumentType.FLOAT), raw) == expected


def test_float_nan():
    assert math.isnan(validate_value(make(ArgumentType.FLOAT), "NaN"))


@pytest.mark.parametrize("raw", ["", "abc", "1,5", "1.2.3", "e5"])
def test_float_invalid(raw):
    with pytest.raises(UserError, match="Non-numeric value"):
        validate_value(make(ArgumentType.FLOAT), raw)


def test_string_is_unchanged():
    assert validate_value(make(ArgumentType.STRING), "  spaced  ") == "  spaced  "


def test_boolean_values():
    definition = Definition(ArgumentType.BOOLEAN, flags=("--verbose",))
    assert validate_value(definition, "true") is True
    assert validate_value(definition, "false") is False
    with pytest.raises(UserError, match="Non-boolean value"):
        validate_value(definition, "yes")


def test_choice_alias_is_not_chained():
    definition = make(
        ArgumentType.CHOICE,
        options=(),
        mappings={"tiny": "little", "little": "small"},
    )
    assert validate_value(definition, "tiny") == "little"
    assert validate_value(definition, "little") == "small"


def test_choice_invalid_lists_options():
    definition = Definition(
        ArgumentType.CHOICE,
        flags=("--gender",),
        options=(),
        mappings={"boy": "male"},
    )
    with pytest.raises(
        UserError,
        match=r"Value 'robot' not recognized for argument GENDER; must be one of \{boy\}",
    ):
        validate_value(definition, "robot")


@pytest.mark.parametrize(
    "kind, raw, expected",
    [
        (ArgumentType.INTEGER, "+007", "7"),
        (ArgumentType.FLOAT, "2.0", "2"),
        (ArgumentType.FLOAT, "2.50", "2.5"),
        (ArgumentType.FLOAT, "inf", "inf"),
        (ArgumentType.FLOAT, "-inf", "-inf"),
        (ArgumentType.FLOAT, "nan", "NaN"),
        (ArgumentType.FLOAT, "1e20", "100000000000000000000"),
        (ArgumentType.FLOAT, "1e-7", "0.0000001"),
        (ArgumentType.FLOAT, "-0.0", "-0"),
        (ArgumentType.FLOAT, "0.1", "0.1"),
        (ArgumentType.FLOAT, "-12.50", "-12.5"),
        (ArgumentType.STRING, "text", "text"),
    ],
)
def test_format_value(kind, raw, expected):
    definition = make(kind)
    assert format_value(definition, validate_value(definition, raw)) == expected


@pytest.mark.parametrize(
    "kind, raw",
    [
        (ArgumentType.INTEGER, "-0042"),
        (ArgumentType.FLOAT, "1.25e2"),
        (ArgumentType.STRING, "hello"),
    ],
)
def test_conversion_is_idempotent(kind, raw):
    definition = make(kind)
    once = format_value(definition, validate_value(definition, raw))
    twice = format_value(definition, validate_value(definition, once))
    assert once == twice


def test_validate_resolved_copies_defaults_untouched():
    definitions = DefinitionSet()
    definitions.add_definition("integer", "--age", default="not-a-number")
    definitions.add_definition("integer", "--count")
    definitions.seal()
    resolved = Resolver(definitions).resolve(
        TokenMatcher(definitions).match(["--count", "+3"])
    )

    validate_resolved(resolved)

    assert resolved["AGE"].values == ["not-a-number"]
    assert resolved["COUNT"].values == [3]


def test_validate_resolved_stops_at_first_error():
    definitions = DefinitionSet()
    definitions.add_definition("integer", "--first")
    definitions.add_definition("float", "--second")
    definitions.seal()
    resolved = Resolver(definitions).resolve(
        TokenMatcher(definitions).match(["--second", "x", "--first", "y"])
    )

    with pytest.raises(UserError, match="Non-integer value 'y'"):
        validate_resolved(resolved)


def test_choice_conversion_is_deterministic():
    definition = make(
        ArgumentType.CHOICE,
        options=(),
        mappings={"tiny": "little", "little": "small"},
    )
    first = validate_value(definition, "tiny")
    second = validate_value(definition, "tiny")
    assert first == second == "little"
