"""Shared fixtures for FilterFlow unit tests."""

import pytest

from filterflow.filters.registry import FilterRegistry
from filterflow.logger import logger
from filterflow.value import as_value


@pytest.fixture(autouse=True)
def fresh_registry():
    """Give every test its own FilterRegistry with only the built-in filters."""
    FilterRegistry._instance = None
    yield
    FilterRegistry._instance = None


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep user environment variables and file logging out of the tests."""
    monkeypatch.delenv("FILTERFLOW_SETTINGS", raising=False)
    monkeypatch.delenv("FILTERFLOW_SETTINGS_LOG_LEVEL", raising=False)
    monkeypatch.delenv("FILTERFLOW_SETTINGS_LOCAL_FILTERS", raising=False)
    yield
    logger.disable_file_logging()


@pytest.fixture
def registry():
    """Provide the current FilterRegistry instance."""
    return FilterRegistry()


@pytest.fixture
def double_filter():
    """A filter multiplying its input by two."""

    def double(in_value, param, bind):
        return as_value(in_value.integer() * 2)

    return double


@pytest.fixture
def neg_filter():
    """A filter negating its input."""

    def neg(in_value, param, bind):
        return as_value(-in_value.integer())

    return neg


@pytest.fixture
def custom_filters_dir(tmp_path):
    """Create a directory with a custom filters module."""
    filters_dir = tmp_path / "filters"
    filters_dir.mkdir()
    (filters_dir / "my_filters.py").write_text(
        '''
from filterflow.value import as_value


def shout(in_value, param, bind):
    """Uppercase the value and add an exclamation mark."""
    return as_value(in_value.string().upper() + "!")


def greet(in_value, param, bind):
    """Greet the value."""
    return as_value("Hello, " + in_value.string())


def _private(in_value, param, bind):
    return in_value


def not_a_filter(value):
    return value
'''
    )
    (filters_dir / "__init__.py").write_text("")
    return filters_dir
