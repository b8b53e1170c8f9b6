"""Shared pytest configuration for the allocation test suite."""

pytest_plugins = ["allocation.testing.fixtures"]
