"""Pytest configuration and fixtures for hmi api declaration generator tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from hmi_api_typegen.schema import RootObject, load_schema

# Test directory structure
TESTS_DIR = Path(__file__).parent
SCHEMAS_DIR = TESTS_DIR / "schemas"

# Schema subdirectories
BASIC_SCHEMAS_DIR = SCHEMAS_DIR / "basic"
SAMPLE_SCHEMA = BASIC_SCHEMAS_DIR / "sample_api.xml"


@pytest.fixture(scope="session")
def sample_schema_path() -> Path:
    """Provide path to the sample interface description."""
    return SAMPLE_SCHEMA


@pytest.fixture(scope="session")
def sample_schema(sample_schema_path) -> RootObject:
    """Provide the parsed sample interface description."""
    return load_schema(sample_schema_path)


def wrap_interfaces(body: str) -> str:
    """Wrap interface elements into a complete document.

    Args:
        body: The XML of one or more <interface> elements

    Returns:
        The interface description document
    """
    return f'<?xml version="1.0"?>\n<interfaces name="test">{body}</interfaces>'
