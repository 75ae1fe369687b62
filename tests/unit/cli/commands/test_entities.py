##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Tests for the `entities.py` file of the `cli/commands/` folder.
"""

from argparse import Namespace

from _pytest.capture import CaptureFixture
from pytest_mock import MockerFixture

from entitydao.cli.commands.entities import EntitiesCommand


def test_entities(cli_config: str, capsys: CaptureFixture):
    """
    Test that registered entities are listed with their class and table.

    Args:
        cli_config: Path to the CLI test configuration file.
        capsys: PyTest capsys fixture.
    """
    EntitiesCommand().process_command(Namespace(config=cli_config))

    output = capsys.readouterr().out
    assert "Entity" in output.splitlines()[0]
    assert "tests.sample_entities.UserDao" in output
    assert "memberships" in output


def test_no_entities(mocker: MockerFixture, capsys: CaptureFixture):
    """
    Test that nothing is printed when no entity is registered.

    Args:
        mocker: PyTest mocker fixture.
        capsys: PyTest capsys fixture.
    """
    mocker.patch("entitydao.cli.commands.entities.load_cli_config")
    mock_registry = mocker.patch("entitydao.cli.commands.entities.entity_registry")
    mock_registry.list_available.return_value = []

    EntitiesCommand().process_command(Namespace(config=None))

    assert capsys.readouterr().out == ""
