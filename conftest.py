"""Shared pytest configuration."""

pytest_plugins = ["event_chain.testing.fixtures"]
