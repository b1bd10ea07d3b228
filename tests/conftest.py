"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

import config
from plugins.github.gate import ChannelGate
from plugins.github.models import RepositoryInfo
from plugins.github.notifier import LinkNotifier


SAMPLE_REPO = {
    "full_name": "octo/tool",
    "description": "A tool",
    "fork": False,
    "language": None,
    "watchers": 5,
    "stargazers_count": 5,
    "forks": 2,
    "pushed_at": "2020-01-02T03:04:05Z",
    "has_issues": False,
    "open_issues": 0,
    "homepage": None,
    "html_url": "https://github.com/octo/tool",
}


class MemoryStore(dict):
    """In-memory stand-in for config.PluginData that counts saves."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.saves = 0

    def save(self):
        self.saves += 1


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def gate(store):
    return ChannelGate(store)


@pytest.fixture
def repo_info():
    return RepositoryInfo.from_api(SAMPLE_REPO)


@pytest.fixture
def github_client(repo_info):
    client = MagicMock()
    client.lookup = AsyncMock(return_value=repo_info)
    return client


@pytest.fixture
def notice():
    return AsyncMock()


@pytest.fixture
def notifier(gate, github_client, notice):
    return LinkNotifier(gate, github_client, notice)


@pytest.fixture
def config_file(tmp_path):
    """Write a config.toml pointing plugin data into tmp_path and load it."""
    path = tmp_path / "config.toml"
    data_file = (tmp_path / "data" / "github.yml").as_posix()
    path.write_text(
        '[main]\n'
        'plugins = ["github"]\n'
        'superusers = [10001]\n'
        '\n'
        '[github]\n'
        'token = "secret"\n'
        f'data_file = "{data_file}"\n',
        encoding="utf-8",
    )
    config.load(path)
    yield path
    config._config_data = None
