"""Shared test fixtures for pluginlist tests."""

import copy
import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from pluginlist.remote import FetchResponse, FetchTransportError

NPM_PLUGIN: dict[str, Any] = {
    "name": "plugin-example-npm",
    "type": "npm",
    "description": "Example plugin published to npm",
    "time": "2025-01-19 10:00:00",
    "home": "https://github.com/example-org/plugin-example-npm",
    "license": {
        "name": "MIT",
        "url": "https://github.com/example-org/plugin-example-npm/blob/main/LICENSE",
    },
    "author": [{"name": "alice", "home": "https://github.com/alice"}],
    "repo": [
        {
            "type": "npm",
            "url": "https://www.npmjs.com/package/plugin-example-npm",
            "branch": "",
        }
    ],
}

GIT_PLUGIN: dict[str, Any] = {
    "name": "plugin-example-git",
    "type": "git",
    "description": "Example plugin installed from git",
    "time": "2025-01-20 08:30:00",
    "home": "https://github.com/example-org/plugin-example-git",
    "license": {"name": "GPL-3.0", "url": "https://www.gnu.org/licenses/gpl-3.0.html"},
    "author": [
        {"name": "bob", "home": "https://github.com/bob"},
        {"name": "carol", "home": "https://gitee.com/carol"},
    ],
    "repo": [
        {
            "type": "github",
            "url": "https://github.com/example-org/plugin-example-git",
            "branch": "main",
        },
        {
            "type": "gitee",
            "url": "https://gitee.com/example-org/plugin-example-git",
            "branch": "master",
        },
    ],
}

APP_PLUGIN: dict[str, Any] = {
    "name": "plugin-example-app",
    "type": "app",
    "description": "Example single-file app plugin",
    "time": "2025-02-01 23:59:59",
    "home": "https://gitcode.com/example-org/plugin-example-app",
    "license": {"name": "Apache-2.0", "url": "https://www.apache.org/licenses/LICENSE-2.0"},
    "author": [{"name": "dave", "home": "https://gitcode.com/dave"}],
    "repo": [
        {
            "type": "gitcode",
            "url": "https://gitcode.com/example-org/plugin-example-app",
            "branch": "main",
        }
    ],
    "files": [
        "https://gitcode.com/example-org/plugin-example-app/raw/main/hello.js",
        "https://gitcode.com/example-org/plugin-example-app/raw/main/goodbye.js",
    ],
}


def make_plugin(base: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    """Return a deep copy of base with top-level keys overridden.

    An override value of None removes the key.
    """
    plugin = copy.deepcopy(base)
    for key, value in overrides.items():
        if value is None:
            plugin.pop(key, None)
        else:
            plugin[key] = value
    return plugin


def example_plugins() -> list[dict[str, Any]]:
    """The three-record example registry: one npm, one git, one app plugin."""
    return [copy.deepcopy(NPM_PLUGIN), copy.deepcopy(GIT_PLUGIN), copy.deepcopy(APP_PLUGIN)]


def write_registry(path: Path, plugins: list[dict[str, Any]]) -> Path:
    """Write a plugins.json file and return its path.

    If path is a directory, plugins.json is created inside it.
    """
    if path.is_dir():
        path = path / "plugins.json"
    path.write_text(json.dumps({"plugins": plugins}, indent=2))
    return path


def descriptor_response(name: str = "plugin", version: str = "1.0.0") -> FetchResponse:
    """A 200 response carrying a package.json body."""
    body = json.dumps({"name": name, "version": version}).encode()
    return FetchResponse(status=200, reason="OK", body=body)


class FakeFetcher:
    """Fetcher returning canned responses and recording requested URLs.

    URLs without a canned response get a valid package.json.
    """

    def __init__(self, responses: dict[str, FetchResponse | str] | None = None) -> None:
        self.responses = responses or {}
        self.requested: list[str] = []

    def fetch(self, url: str) -> FetchResponse:
        self.requested.append(url)
        response = self.responses.get(url, descriptor_response())
        if isinstance(response, str):
            raise FetchTransportError(url, response)
        return response


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def registry_file(tmp_path: Path) -> Path:
    """A plugins.json holding the three-record example registry."""
    return write_registry(tmp_path, example_plugins())
