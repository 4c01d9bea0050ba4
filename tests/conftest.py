"""
Pytest configuration and fixtures for tokenmsg tests.
"""

import json
import os

import pytest
import yaml

from cli import config as cli_config
from tokenmsg.schema import InstantiateMsg


@pytest.fixture
def valid_msg_data():
    """Raw instantiate message as it arrives on the wire."""
    return {
        "name": "test_token",
        "symbol": "TNT",
        "decimals": 6,
        "initial_balances": [],
        "mint": {
            "minter": "minter0000",
            "cap": "1"
        },
        "marketing": None
    }


@pytest.fixture
def make_msg(valid_msg_data):
    """Build an InstantiateMsg from the valid message with overrides."""
    def _make(**overrides):
        data = dict(valid_msg_data)
        data.update(overrides)
        return InstantiateMsg.model_validate(data)
    return _make


@pytest.fixture
def valid_msg(make_msg):
    return make_msg()


@pytest.fixture
def write_msg_file(tmp_path):
    """Write a raw message to a JSON or YAML file and return its path."""
    def _write(data, name="msg.json"):
        path = tmp_path / name
        with open(path, 'w', encoding='utf-8') as f:
            if path.suffix in ('.yml', '.yaml'):
                yaml.safe_dump(data, f)
            else:
                json.dump(data, f)
        return str(path)
    return _write


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep tests away from user config files and TOKENMSG_ variables."""

    for key in list(os.environ):
        if key.startswith(cli_config.ENV_PREFIX):
            monkeypatch.delenv(key)
    monkeypatch.setattr(cli_config, "CONFIG_SEARCH_PATHS", [tmp_path / ".tokenmsg.yml"])
