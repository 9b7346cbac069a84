"""Shared fixtures for CLI tests."""

from argparse import Namespace

import pytest

from swimlane.cli import board as board_cli
from swimlane.cli import card as card_cli
from swimlane.cli import check as check_cli
from swimlane.cli import column as column_cli
from swimlane.sync import SyncClient


@pytest.fixture
def config_file(tmp_path):
    """A config file pointing at board 1 on the fake server."""
    path = tmp_path / "config.yaml"
    path.write_text("api-url: http://board.test\nboard: 1\n")
    return path


@pytest.fixture
def backend(service, monkeypatch):
    """Route every CLI client to the in-memory board service."""

    def _build(config):
        return SyncClient.from_config(config, transport=service.transport())

    for module in (board_cli, card_cli, check_cli, column_cli):
        monkeypatch.setattr(module, "build_client", _build)
    return service


def _args(config_file, **kwargs):
    """Namespace with the common options filled in."""
    values = {"config": str(config_file), "url": None, "board": None, "json": False, "verbose": False}
    values.update(kwargs)
    return Namespace(**values)
