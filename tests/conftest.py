"""Shared pytest fixtures for all test modules."""

import os
import subprocess
import sys
from unittest.mock import MagicMock, patch

import pytest


PROJECT_ROOT = os.path.normpath(os.path.join(os.path.dirname(__file__), ".."))


@pytest.fixture(scope="session")
def project_root():
    """Absolute path to the project root directory."""
    return PROJECT_ROOT


@pytest.fixture(scope="session")
def run_cli(project_root):
    """Return a callable that invokes the hcloud-machine CLI as a subprocess.

    HCLOUD_* variables are stripped so the host environment cannot leak a
    real token into the tests.
    """
    env = {k: v for k, v in os.environ.items() if not k.startswith("HCLOUD_")}

    def _run(*args):
        result = subprocess.run(
            [sys.executable, "-m", "hcloud_machine.hcloud_machine", *args],
            capture_output=True,
            text=True,
            cwd=project_root,
            env=env,
        )
        return result.returncode, result.stdout, result.stderr

    return _run


# ── Unit-test fixtures ──────────────────────────────────────────────


@pytest.fixture
def make_action():
    """Return a factory for fake hcloud actions.

    *statuses* is the sequence of statuses the action reports: the first one
    initially, the next one after each ``reload()``.
    """

    def _make(command="create_server", statuses=("success",), error=None):
        remaining = iter(statuses)
        action = MagicMock()
        action.command = command
        action.status = next(remaining)
        action.progress = 0 if action.status == "running" else 100
        action.error = error

        def _reload():
            action.status = next(remaining)
            action.progress = 50 if action.status == "running" else 100

        action.reload.side_effect = _reload
        return action

    return _make


@pytest.fixture
def make_server():
    """Return a factory for fake hcloud servers."""

    def _make(server_id=42, ip="203.0.113.9", status="running"):
        server = MagicMock()
        server.id = server_id
        server.status = status
        server.public_net.ipv4.ip = ip
        return server

    return _make


@pytest.fixture
def hcloud_client():
    """Patch hcloud.Client in the driver module; yields the client instance."""
    with patch("hcloud_machine.driver.hetzner.Client") as client_cls:
        yield client_cls.return_value


@pytest.fixture(autouse=True)
def no_sleep():
    """Action polling never really sleeps in tests."""
    with patch("hcloud_machine.driver.actions.time.sleep") as sleep:
        yield sleep
