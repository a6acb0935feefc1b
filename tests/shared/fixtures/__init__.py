"""Shared pytest fixtures and factories."""

from tests.shared.fixtures.factories import TestUserFactory, make_directory

__all__ = [
    "TestUserFactory",
    "make_directory",
]
