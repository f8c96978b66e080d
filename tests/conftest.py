"""Pytest configuration and fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from storegen.config import DEFAULT_CONFIG

FIXTURES = Path(__file__).parent / "fixtures" / "app_config"


@pytest.fixture
def make_project(tmp_path) -> Callable[[str | None], Path]:
    """Factory fixture that creates a project tree with an app_config.py.

    Args:
        fixture: Name of a file in tests/fixtures/app_config (without .py),
            or None for a project without a configuration module

    Returns:
        Project root path
    """

    def _make(fixture: str | None) -> Path:
        root = tmp_path / "project"
        package = DEFAULT_CONFIG.package_dir(root)
        package.mkdir(parents=True, exist_ok=True)
        if fixture is not None:
            source = (FIXTURES / f"{fixture}.py").read_bytes()
            DEFAULT_CONFIG.config_path(root).write_bytes(source)
        return root

    return _make

