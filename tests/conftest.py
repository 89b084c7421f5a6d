"""Pytest configuration and shared fixtures."""

import json
from unittest.mock import Mock

import pytest
import requests
import yaml

from grafana_admin.core.client import AdminAPIClient


def make_response(status_code: int, body) -> requests.Response:
    """
    Build a real requests.Response.

    Args:
        status_code: HTTP status code
        body: JSON-serializable object, or a str sent as-is
    """
    response = requests.Response()
    response.status_code = status_code
    text = body if isinstance(body, str) else json.dumps(body)
    response._content = text.encode()
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "application/json"
    return response


@pytest.fixture
def session():
    """A fake transport; set session.request.return_value to the response to serve."""
    return Mock(spec=requests.Session)


@pytest.fixture
def client(session):
    return AdminAPIClient(session, "https://grafana.example.com/", token="")


@pytest.fixture
def config_home(monkeypatch, tmp_path):
    """
    Point HOME at a temp dir and return a helper writing the grafanactl config.

    Usage:
        config_file = config_home({"contexts": {...}})
    """
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("XDG_CONFIG_DIRS", raising=False)
    monkeypatch.setenv("HOME", str(home_dir))

    def write(config_data: dict):
        config_file = home_dir / ".config" / "grafanactl" / "config.yaml"
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, "w") as f:
            yaml.dump(config_data, f)
        return config_file

    return write


@pytest.fixture
def dashboards_structure(tmp_path):
    """Create a dashboards directory with src and build subdirectories."""
    dashboards_base = tmp_path / "dashboards"
    src_dir = dashboards_base / "src"
    build_dir = dashboards_base / "build"

    src_dir.mkdir(parents=True)
    build_dir.mkdir(parents=True)

    return {
        "base": dashboards_base,
        "src": src_dir,
        "build": build_dir,
    }


@pytest.fixture
def serve(session):
    """
    Make the fake transport answer every request with the given status and body.

    Usage:
        serve(200, [{"id": 1, "uid": "abc", "title": "Team A"}])
    """

    def respond(status_code: int, body):
        session.request.return_value = make_response(status_code, body)
        return session

    return respond


@pytest.fixture
def http_response():
    """The make_response helper, for tests that queue several responses."""
    return make_response
