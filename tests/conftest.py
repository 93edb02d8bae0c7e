"""Shared test fixtures for the scconf test suite."""

import json
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def server_schema() -> dict[str, Any]:
    """A small raw schema with leaves, a nested branch and a computed node."""
    return {
        "server": {
            "protocol": {
                "description": "Socket protocol",
                "default": "ws",
                "values": ["ws", "wss"],
                "envVar": "SERVER_PROTOCOL",
                "commandLineArg": "protocol",
            },
            "host": {"default": "localhost", "commandLineArg": "host"},
            "port": {
                "default": 8081,
                "envVar": "SERVER_PORT",
                "envVarParser": int,
                "commandLineArg": "port",
            },
            "fullUrl": lambda scope: f"{scope['protocol']}://{scope['host']}:{scope['port']}",
        },
        "features": {
            "default": [],
            "envVar": "FEATURES",
            "envVarParser": ",",
        },
    }


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Factory fixture writing a JSON document under tmp_path.

    Usage:
        def test_something(write_json):
            path = write_json("deploy.json", {"server": {"port": 9000}})
    """

    def _write(name: str, content: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(content))
        return path

    return _write


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache before and after each test.

    This ensures test isolation for configuration tests.
    """
    from scconf.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
