"""Shared test fixtures for composebake tests."""
from pathlib import Path

import pytest

from composebake.core.config import BakeConfig
from composebake.services.docker_compose import ComposeTranslator, EnvironmentResolver


@pytest.fixture
def config():
    """Default configuration, independent of the test process environment."""
    return BakeConfig()


@pytest.fixture
def translator(config):
    """Create translator instance."""
    return ComposeTranslator(config)


@pytest.fixture
def translate(translator, tmp_path):
    """Translate a compose document with a synthetic environment."""
    def _translate(document, environ=None):
        return translator.translate_bytes(document, environ or {}, tmp_path)
    return _translate


@pytest.fixture
def resolver(tmp_path):
    """Resolver over a small synthetic process environment."""
    return EnvironmentResolver({'FOO': 'bar', 'EMPTY': ''}, tmp_path)


@pytest.fixture
def env_file(tmp_path):
    """Create an env file next to the compose project."""
    def _write(content: str, name: str = ".env") -> Path:
        path = tmp_path / name
        path.write_text(content)
        return path
    return _write
