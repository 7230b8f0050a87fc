"""Register shared fixtures for the test suite."""

pytest_plugins = ["tests.fixtures.robot_fixtures"]
