import sys

import pytest

from argparse_sh.__main__ import main


def test_main_assigns_variables(capsys):
    code = main(
        [
            "--string", "given-name", "--ordinal", "0", "--required",
            "--int", "age", "--flag", "-a",
            "--prefix", "DEMO_", "--export",
            "--",
            "Alice", "--age", "32",
        ]
    )
    assert code == 0
    assert capsys.readouterr().out.splitlines() == [
        'export DEMO_GIVEN_NAME="Alice"',
        'export DEMO_AGE="32"',
    ]


def test_main_reads_sys_argv(monkeypatch, capsys):
    monkeypatch.setattr(
        sys, "argv", ["argparse-sh", "--string", "name", "--repeated", "--catch-all",
                      "--", "Bob", "Carol"]
    )
    assert main() == 0
    assert capsys.readouterr().out.splitlines() == [
        'NAME="2"',
        'NAME_0="Bob"',
        'NAME_1="Carol"',
    ]


def test_main_definition_error(capsys):
    assert main(["--string", "name", "--bogus"]) == 2
    out = capsys.readouterr().out
    assert 'echo "!!! ArgParse-sh Error: Unrecognized option: --bogus !!!"' in out
    assert out.endswith("( exit 2 )\n")


def test_main_user_error(capsys):
    assert main(["--int", "age", "--", "--age", "old"]) == 3
    out = capsys.readouterr().out
    assert "Non-integer value 'old' provided for argument AGE" in out
    assert out.endswith("( exit 3 )\n")


def test_main_help(capsys):
    code = main(
        ["--string", "name", "--auto-help", "--program-name", "demo", "--", "--help"]
    )
    assert code == 1
    out = capsys.readouterr().out
    assert "${bold}NAME${unbold}" in out
    assert "       demo" in out
    assert "       --name <name>" in out
    assert out.endswith("( exit 1 )\n")


def test_main_help_function(capsys):
    code = main(
        ["--string", "name", "--help-function", "print_help", "--", "--name", "x"]
    )
    assert code == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == 'NAME="x"'
    assert lines[1] == "print_help () {"
    assert lines[-1] == "}"


def test_main_debug_echoes_trace(capsys):
    code = main(["--string", "name", "--debug", "--prefix", "P_", "--", "--name", "Al"])
    assert code == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == 'echo "[ArgParse] ArgParse debugging enabled with --debug flag"'
    assert 'echo "[ArgParse] All variables will be prefixed with \'P_\'"' in lines
    assert 'echo "[ArgParse] Definition - type: String; name: NAME; flags: --name"' in lines
    assert (
        'echo "[ArgParse] Parsed argument NAME = \'Al\' [flag: \'--name\']"' in lines
    )
    assert 'P_NAME="Al"' in lines
    assert lines[-1] == 'echo "[ArgParse] ArgParse completed successfully"'


def test_main_debug_handler_is_removed(capsys):
    main(["--string", "name", "--debug", "--", "--name", "Al"])
    capsys.readouterr()
    main(["--string", "name", "--", "--name", "Al"])
    assert capsys.readouterr().out == 'NAME="Al"\n'


@pytest.mark.parametrize("argv", [[], ["--"]])
def test_main_without_definitions(argv, capsys):
    assert main(argv) == 0
    assert capsys.readouterr().out == ""


def test_main_auto_help_and_help_function(capsys):
    argv = ["--string", "name", "--auto-help", "--help-function", "print_help", "--"]
    assert main([*argv, "--help"]) == 1
    assert "print_help () {" not in capsys.readouterr().out

    assert main([*argv, "--name", "x"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[:2] == ['NAME="x"', "print_help () {"]
