"""Test helpers module for shared test utilities."""

from tests.helpers.factories import D, components

__all__ = ["D", "components"]
