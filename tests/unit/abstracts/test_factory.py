##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other entitydao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to entitydao.
##############################################################################

"""
Tests for the `abstracts/factory.py` module.
"""

from typing import Any

import pytest
from pytest_mock import MockerFixture

from entitydao.abstracts.factory import BaseFactory


class Widget:
    """Base class of the components managed by the test factory."""

    def __init__(self, size: int = 1):
        self.size = size


class SmallWidget(Widget):
    """A built-in widget."""


class LargeWidget(Widget):
    """A widget registered by a test."""


class WidgetFactory(BaseFactory):
    """A minimal concrete factory."""

    def _register_builtins(self):
        self.register("small", SmallWidget, aliases=["tiny"])

    def _validate_component(self, component_class: Any):
        if not issubclass(component_class, Widget):
            raise TypeError(f"{component_class} must inherit from Widget")

    def _entry_point_group(self) -> str:
        return "entitydao.test_widgets"


@pytest.fixture
def widget_factory(mocker: MockerFixture) -> WidgetFactory:
    """
    A `WidgetFactory` whose plugin discovery finds nothing.

    Args:
        mocker: PyTest mocker fixture.

    Returns:
        A `WidgetFactory` instance.
    """
    mocker.patch("entitydao.abstracts.factory.entry_points", return_value=[])
    return WidgetFactory()


class TestBaseFactory:
    """
    Tests for the `BaseFactory` class.
    """

    def test_builtins_are_registered(self, widget_factory: WidgetFactory):
        """
        Test that the built-in components are available right after creation.

        Args:
            widget_factory: A `WidgetFactory` instance.
        """
        assert widget_factory.list_available() == ["small"]

    def test_create_by_name_and_alias(self, widget_factory: WidgetFactory):
        """
        Test that components can be created by canonical name or alias, with or without config.

        Args:
            widget_factory: A `WidgetFactory` instance.
        """
        assert isinstance(widget_factory.create("small"), SmallWidget)
        tiny = widget_factory.create("tiny", {"size": 3})
        assert isinstance(tiny, SmallWidget)
        assert tiny.size == 3

    def test_register_rejects_invalid_components(self, widget_factory: WidgetFactory):
        """
        Test that registration runs the component validation.

        Args:
            widget_factory: A `WidgetFactory` instance.
        """
        with pytest.raises(TypeError, match="must inherit from Widget"):
            widget_factory.register("bogus", dict)

    def test_unknown_component(self, widget_factory: WidgetFactory):
        """
        Test that requesting an unknown component raises a ValueError listing the available ones.

        Args:
            widget_factory: A `WidgetFactory` instance.
        """
        with pytest.raises(ValueError, match="Component 'huge' is not supported. Available components: small"):
            widget_factory.create("huge")

    def test_create_wraps_instantiation_errors(self, widget_factory: WidgetFactory):
        """
        Test that errors raised while instantiating a component are wrapped in a ValueError.

        Args:
            widget_factory: A `WidgetFactory` instance.
        """
        with pytest.raises(ValueError, match="Failed to create component 'small'"):
            widget_factory.create("small", {"colour": "red"})

    def test_get_class(self, widget_factory: WidgetFactory):
        """
        Test that `get_class` resolves aliases without instantiating anything.

        Args:
            widget_factory: A `WidgetFactory` instance.
        """
        widget_factory.register("large", LargeWidget, aliases=["big"])
        assert widget_factory.get_class("big") is LargeWidget

    def test_get_component_info(self, widget_factory: WidgetFactory):
        """
        Test the introspection metadata of a registered component.

        Args:
            widget_factory: A `WidgetFactory` instance.
        """
        info = widget_factory.get_component_info("tiny")
        assert info == {
            "name": "small",
            "class": "SmallWidget",
            "module": SmallWidget.__module__,
            "description": "A built-in widget.",
        }

    def test_plugins_are_discovered_once(self, mocker: MockerFixture):
        """
        Test that entry point plugins are loaded on first use only, and that a
        failing plugin is skipped.

        Args:
            mocker: PyTest mocker fixture.
        """
        good_plugin = mocker.MagicMock()
        good_plugin.name = "large"
        good_plugin.load.return_value = LargeWidget
        bad_plugin = mocker.MagicMock()
        bad_plugin.name = "broken"
        bad_plugin.load.side_effect = ImportError("missing dependency")
        mock_entry_points = mocker.patch(
            "entitydao.abstracts.factory.entry_points", return_value=[good_plugin, bad_plugin]
        )

        factory = WidgetFactory()
        assert factory.list_available() == ["small", "large"]
        assert isinstance(factory.create("large"), LargeWidget)
        mock_entry_points.assert_called_once_with(group="entitydao.test_widgets")
