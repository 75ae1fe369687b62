##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Tests for the `argparse_main.py` file.
"""

import pytest
from _pytest.capture import CaptureFixture
from pytest_mock import MockerFixture

from entitydao import VERSION
from entitydao.cli.argparse_main import HelpParser, build_main_parser


def test_help_parser_error(mocker: MockerFixture, capsys: CaptureFixture):
    """
    Test that HelpParser.error prints the error and the help and exits with code 2.

    Args:
        mocker: PyTest mocker fixture.
        capsys: PyTest capsys fixture.
    """
    mocker.patch("sys.exit", side_effect=SystemExit(2))

    parser = HelpParser(prog="test")
    with pytest.raises(SystemExit) as excinfo:
        parser.error("test error")

    assert excinfo.value.code == 2
    captured = capsys.readouterr()
    assert "error: test error" in captured.err
    assert "usage: test" in captured.out


def test_build_main_parser_defaults():
    """
    Test the global options of the main parser.
    """
    parser = build_main_parser()
    args = parser.parse_args(["entities"])
    assert args.level is None
    assert args.config is None
    assert args.subparsers == "entities"


def test_build_main_parser_commands():
    """
    Test that every command is available with its arguments.
    """
    parser = build_main_parser()

    args = parser.parse_args(["-lvl", "DEBUG", "-c", "app.yaml", "find", "user", "7"])
    assert (args.level, args.config, args.entity, args.id) == ("DEBUG", "app.yaml", "user", ["7"])

    args = parser.parse_args(["search", "user", "--cond", "status=active", "--count", "5", "--ids-only"])
    assert args.cond == ["status=active"]
    assert args.count == 5
    assert args.offset == 0
    assert args.ids_only is True


def test_version(capsys: CaptureFixture):
    """
    Test that `--version` prints the version.

    Args:
        capsys: PyTest capsys fixture.
    """
    with pytest.raises(SystemExit):
        build_main_parser().parse_args(["--version"])
    assert VERSION in capsys.readouterr().out


def test_command_is_required(capsys: CaptureFixture):
    """
    Test that a command must be given.

    Args:
        capsys: PyTest capsys fixture.
    """
    with pytest.raises(SystemExit) as excinfo:
        build_main_parser().parse_args(["-lvl", "DEBUG"])
    assert excinfo.value.code == 2
    assert "the following arguments are required" in capsys.readouterr().err
