"""Pytest configuration and fixtures."""

import logging
import os
from pathlib import Path

import pytest
import structlog

from scriptline.config import ScriptlineSettings, reset_settings, set_settings

# Import CLI fixtures to make them available globally
from tests.cli_fixtures import clean_runner, cli_invoke  # noqa: F401

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "fountain"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line(
        "markers", "integration: mark test as exercising several modules together"
    )


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Give every test default settings unaffected by the host environment.

    Config files in the user's home directory or the working directory would
    otherwise leak into tests through get_settings().
    """
    for var in [k for k in os.environ if k.startswith("SCRIPTLINE_")]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)

    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers.copy()
    original_level = root_logger.level

    reset_settings()
    set_settings(ScriptlineSettings(_env_file=None))
    # Module loggers cache the config on first use; keep it routed to stdlib
    original_config = structlog.get_config()
    yield
    reset_settings()
    structlog.configure(**original_config)

    # CLI runs point handlers at streams that are closed once the run ends
    for handler in root_logger.handlers.copy():
        if handler not in original_handlers:
            root_logger.removeHandler(handler)
    for handler in original_handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(original_level)


@pytest.fixture
def fixtures_dir():
    """Directory holding sample Fountain files."""
    return FIXTURES_DIR


@pytest.fixture
def sample_script_path(tmp_path):
    """Copy of the sample screenplay, safe to modify."""
    target = tmp_path / "coffee_shop.fountain"
    target.write_text(
        (FIXTURES_DIR / "coffee_shop.fountain").read_text(encoding="utf-8"),
        encoding="utf-8",
    )
    return target
