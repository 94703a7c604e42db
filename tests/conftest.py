"""
Shared pytest fixtures for appium-launcher tests.

- fake_install: a node executable and main.js laid out under tmp_path
- builder: an AppiumServiceBuilder pointed at the fake install
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from appium_launcher.core.bootstrap import reset as reset_bootstrap
from appium_launcher.core.models.config import ServerConfig
from appium_launcher.services.discovery import sources
from appium_launcher.services.discovery.executables import APPIUM_PATH, NODE_PATH
from appium_launcher.services.server import AppiumServiceBuilder


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep tests independent of the host setup and of each other."""
    monkeypatch.delenv(NODE_PATH, raising=False)
    monkeypatch.delenv(APPIUM_PATH, raising=False)
    monkeypatch.setenv("APPIUM_LAUNCHER_LOGGING__FILE", "false")
    sources._process_properties.clear()
    reset_bootstrap()
    yield
    sources._process_properties.clear()
    reset_bootstrap()


@pytest.fixture
def fake_install(tmp_path: Path) -> tuple[Path, Path]:
    """
    Create a fake node binary and a global node_modules tree.

    Returns:
        (node executable, main.js) paths
    """
    node = tmp_path / "bin" / "node"
    node.parent.mkdir(parents=True)
    node.write_text("#!/bin/sh\n")
    node.chmod(0o755)

    main_js = tmp_path / "node_modules" / "appium" / "build" / "lib" / "main.js"
    main_js.parent.mkdir(parents=True)
    main_js.write_text("// appium\n")

    return node, main_js


@pytest.fixture
def builder(fake_install) -> AppiumServiceBuilder:
    """Builder with default server settings and explicit node/main.js paths."""
    node, main_js = fake_install
    return (
        AppiumServiceBuilder(server_config=ServerConfig(), logger=MagicMock())
        .using_driver_executable(node)
        .with_appium_js(main_js)
    )
