##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Tests for the `find.py` file of the `cli/commands/` folder.
"""

import pytest
from _pytest.capture import CaptureFixture
from pytest_mock import MockerFixture

from entitydao.cli.commands.find import FindCommand
from entitydao.exceptions import NotFoundError


def test_find_by_id(create_parser, cli_config: str, capsys: CaptureFixture):
    """
    Test that `find` prints the visible values of one entity.

    Args:
        create_parser: A fixture to help create a parser.
        cli_config: Path to the CLI test configuration file.
        capsys: PyTest capsys fixture.
    """
    command = FindCommand()
    args = create_parser(command).parse_args(["-c", cli_config, "find", "user", "2"])
    command.process_command(args)

    output = capsys.readouterr().out
    assert "user02@example.com" in output
    assert "name" in output
    assert "secret" not in output


def test_find_compound_key(create_parser, cli_config: str, capsys: CaptureFixture):
    """
    Test that compound keys are given as column=value pairs.

    Args:
        create_parser: A fixture to help create a parser.
        cli_config: Path to the CLI test configuration file.
        capsys: PyTest capsys fixture.
    """
    command = FindCommand()
    args = create_parser(command).parse_args(["-c", cli_config, "find", "membership", "group_id=3", "user_id=7"])
    command.process_command(args)
    assert "admin" in capsys.readouterr().out


def test_find_missing(create_parser, cli_config: str):
    """
    Test that a missing row raises a `NotFoundError`.

    Args:
        create_parser: A fixture to help create a parser.
        cli_config: Path to the CLI test configuration file.
    """
    command = FindCommand()
    args = create_parser(command).parse_args(["-c", cli_config, "find", "user", "99"])
    with pytest.raises(NotFoundError):
        command.process_command(args)


def test_find_closes_connection(create_parser, mocker: MockerFixture):
    """
    Test that the connection is closed after the entity was printed.

    Args:
        create_parser: A fixture to help create a parser.
        mocker: PyTest mocker fixture.
    """
    mocker.patch("entitydao.cli.commands.command_entry_point.load_cli_config")
    mock_open = mocker.patch("entitydao.cli.commands.command_entry_point.open_connection")
    mock_registry = mocker.patch("entitydao.cli.commands.find.entity_registry")
    mock_registry.create_entity.return_value.find.return_value.get_values.return_value = {"id": 5}

    command = FindCommand()
    command.process_command(create_parser(command).parse_args(["find", "tag", "5"]))

    mock_registry.create_entity.assert_called_once_with("tag", mock_open.return_value)
    mock_registry.create_entity.return_value.find.assert_called_once_with(5)
    mock_open.return_value.close.assert_called_once()
