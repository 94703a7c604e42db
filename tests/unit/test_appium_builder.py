"""
Unit tests for AppiumServiceBuilder.

Covers argument list construction, flag interception, base path
sanitizing, capabilities and the build sequence.
"""

import json
import os
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from appium_launcher.core.exceptions import InvalidArgumentError, InvalidServerInstanceError
from appium_launcher.core.interfaces.service import IDriverService, ServerArgument
from appium_launcher.core.models.capabilities import Capabilities
from appium_launcher.core.models.config import ServerConfig
from appium_launcher.services.discovery.executables import ExecutableLocator
from appium_launcher.services.server import (
    AppiumLocalService,
    AppiumServiceBuilder,
    GeneralServerFlag,
    sanitize_base_path,
)

BUILDER_MODULE = "appium_launcher.services.server.appium_builder"


class TestDefaultArguments:
    """Tests for the fixed leading part of the argument list."""

    def test_defaults(self, builder, fake_install):
        """Main script, default port and broadcast address come first."""
        _, main_js = fake_install

        args = builder.build_arguments()

        assert args == [str(main_js.absolute()), "--port", "4723", "--address", "0.0.0.0"]

    def test_configured_address_is_used(self, builder):
        args = builder.with_ip_address("127.0.0.1").build_arguments()

        idx = args.index("--address")
        assert args[idx + 1] == "127.0.0.1"

    @pytest.mark.parametrize("address", ["", None])
    def test_empty_address_falls_back_to_broadcast(self, builder, address):
        """An unset address is replaced by 0.0.0.0 at build time."""
        args = builder.with_ip_address(address).build_arguments()

        idx = args.index("--address")
        assert args[idx + 1] == "0.0.0.0"
        assert builder.ip_address == "0.0.0.0"

    def test_log_file_is_absolute(self, builder, tmp_path, monkeypatch):
        """--log is followed by the absolute path of a relative log file."""
        monkeypatch.chdir(tmp_path)

        args = builder.with_log_file("logs/appium.log").build_arguments()

        idx = args.index("--log")
        assert args[idx + 1] == str(tmp_path / "logs" / "appium.log")

    def test_no_log_flag_without_log_file(self, builder):
        assert "--log" not in builder.build_arguments()

    def test_negative_port_rejected(self, builder):
        with pytest.raises(InvalidArgumentError):
            builder.using_port(-1)


class TestServerArguments:
    """Tests for generic server flags."""

    def test_boolean_flag_emits_only_the_name(self, builder):
        args = builder.with_argument(GeneralServerFlag.RELAXED_SECURITY).build_arguments()

        assert args[-1] == "--relaxed-security"
        assert builder.server_arguments["--relaxed-security"] == ""

    def test_boolean_flag_is_not_followed_by_a_value(self, builder):
        args = (
            builder.with_argument("--session-override")
            .with_argument("--log-level", "debug")
            .build_arguments()
        )

        idx = args.index("--session-override")
        assert args[idx + 1] == "--log-level"
        assert args[idx + 2] == "debug"

    def test_flags_keep_insertion_order(self, builder):
        args = (
            builder.with_argument("--log-level", "info")
            .with_argument(GeneralServerFlag.USE_DRIVERS, "uiautomator2")
            .with_argument("--allow-cors")
            .build_arguments()
        )

        assert args[5:] == ["--log-level", "info", "--use-drivers", "uiautomator2", "--allow-cors"]

    def test_custom_server_argument(self, builder):
        class PluginFlag:
            @property
            def argument(self) -> str:
                return "--use-plugins"

        assert isinstance(PluginFlag(), ServerArgument)

        args = builder.with_argument(PluginFlag(), "images").build_arguments()

        assert args[-2:] == ["--use-plugins", "images"]

    def test_empty_flag_name_is_skipped(self, builder):
        args = builder.with_argument("", "value").build_arguments()

        assert "value" not in args
        assert len(args) == 5

    def test_flag_value_overrides_previous(self, builder):
        builder.with_argument("--log-level", "info").with_argument("--log-level", "error")

        assert builder.server_arguments == {"--log-level": "error"}


class TestFlagInterception:
    """Tests for flags routed to dedicated fields."""

    @pytest.mark.parametrize("flag", ["-p", "--port"])
    def test_port_flag_matches_using_port(self, fake_install, flag):
        node, main_js = fake_install
        via_flag = AppiumServiceBuilder(server_config=ServerConfig()).with_appium_js(main_js)
        direct = AppiumServiceBuilder(server_config=ServerConfig()).with_appium_js(main_js)

        via_flag.with_argument(flag, "4444")
        direct.using_port(4444)

        assert via_flag.build_arguments() == direct.build_arguments()
        assert via_flag.port == 4444
        assert via_flag.server_arguments == {}

    def test_port_flag_rejects_non_integer(self, builder):
        with pytest.raises(InvalidArgumentError):
            builder.with_argument("--port", "abc")

    @pytest.mark.parametrize("flag", ["-a", "--address"])
    def test_address_flag(self, builder, flag):
        builder.with_argument(flag, "192.168.1.5")

        assert builder.ip_address == "192.168.1.5"
        assert builder.server_arguments == {}

    @pytest.mark.parametrize("flag", ["-g", "--log"])
    def test_log_flag(self, builder, tmp_path, flag):
        log = tmp_path / "server.log"

        args = builder.with_argument(flag, str(log)).build_arguments()

        assert builder.log_file == log
        assert args.count("--log") == 1
        assert args[args.index("--log") + 1] == str(log)

    def test_presence_only_port_flag_is_stored_as_is(self, builder):
        """Without a value the flag is a switch, even for dedicated flags."""
        builder.with_argument("--port")

        assert builder.port == 4723
        assert builder.server_arguments == {"--port": ""}


class TestBasePath:
    """Tests for --base-path sanitizing."""

    def test_adds_trailing_slash(self, builder):
        builder.with_argument(GeneralServerFlag.BASEPATH, "foo")

        assert builder.server_arguments["--base-path"] == "foo/"

    def test_keeps_existing_trailing_slash(self, builder):
        builder.with_argument("--base-path", "foo/")

        assert builder.server_arguments["--base-path"] == "foo/"

    def test_trims_whitespace(self):
        assert sanitize_base_path("  /wd/hub ") == "/wd/hub/"

    @pytest.mark.parametrize("value", ["", "  ", "\t\n"])
    def test_blank_rejected(self, builder, value):
        with pytest.raises(InvalidArgumentError) as exc_info:
            builder.with_argument("--base-path", value)

        assert "base path" in str(exc_info.value)
        assert isinstance(exc_info.value, ValueError)

    def test_from_server_config(self, fake_install):
        builder = AppiumServiceBuilder(server_config=ServerConfig(base_path="/wd/hub"))

        assert builder.server_arguments == {"--base-path": "/wd/hub/"}


class TestCapabilities:
    """Tests for --default-capabilities."""

    def test_capabilities_come_last(self, builder):
        args = (
            builder.with_capabilities({"platformName": "Android"})
            .with_argument("--relaxed-security")
            .build_arguments()
        )

        assert args[-2] == "--default-capabilities"
        assert json.loads(args[-1]) == {"platformName": "Android"}

    def test_no_flag_without_capabilities(self, builder):
        assert "--default-capabilities" not in builder.build_arguments()

    def test_capabilities_are_merged(self, builder):
        builder.with_capabilities(Capabilities(platformName="Android", deviceName="a"))
        builder.with_capabilities({"deviceName": "b", "appium:noReset": True})

        assert builder.capabilities.as_dict() == {
            "platformName": "Android",
            "deviceName": "b",
            "appium:noReset": True,
        }

    def test_quoted_on_windows(self, builder):
        builder.with_capabilities({"platformName": "Android"}, True)

        with patch(f"{BUILDER_MODULE}.is_windows", return_value=True):
            args = builder.build_arguments()

        assert args[-1] == '{\\"platformName\\": \\"Android\\"}'

    def test_quote_flag_ignored_off_windows(self, builder):
        builder.with_capabilities({"platformName": "Android"}, True)

        with patch(f"{BUILDER_MODULE}.is_windows", return_value=False):
            args = builder.build_arguments()

        assert args[-1] == '{"platformName":"Android"}'

    def test_later_call_without_flag_keeps_quoting(self, builder):
        builder.with_capabilities({"platformName": "Android"}, True)
        builder.with_capabilities({"deviceName": "emulator-5554"})

        with patch(f"{BUILDER_MODULE}.is_windows", return_value=True):
            args = builder.build_arguments()

        assert args[-1].startswith('{\\"')


class TestScore:
    """Tests for score()."""

    def test_empty(self, builder):
        assert builder.score({}) == 0

    def test_platform_name(self, builder):
        assert builder.score({"platformName": "iOS"}) == 1

    @pytest.mark.parametrize("browser", ["chrome", "Android", "SAFARI"])
    def test_mobile_browser(self, builder, browser):
        assert builder.score({"platformName": "Android", "browserName": browser}) == 2

    def test_other_browser(self, builder):
        assert builder.score(Capabilities(browserName="firefox")) == 0


class TestBuild:
    """Tests for the build sequence."""

    def test_returns_service(self, builder, fake_install):
        node, main_js = fake_install

        service = builder.with_argument("--base-path", "/wd/hub").build()

        assert isinstance(service, AppiumLocalService)
        assert isinstance(service, IDriverService)
        assert service.command[0] == str(node)
        assert service.command[1] == str(main_js.absolute())
        assert service.base_path == "/wd/hub/"
        assert service.url == "http://127.0.0.1:4723/wd/hub/"

    def test_base_path_alias(self, builder):
        service = builder.with_argument("-pa", "/alias/").build()

        assert service.base_path == "/alias/"

    def test_environment_defaults_to_process_environment(self, fake_install, monkeypatch):
        monkeypatch.setenv("ANDROID_HOME", "/opt/android-sdk")
        node, main_js = fake_install

        builder = (
            AppiumServiceBuilder(server_config=ServerConfig())
            .using_driver_executable(node)
            .with_appium_js(main_js)
        )
        service = builder.build()

        assert service._environment["ANDROID_HOME"] == "/opt/android-sdk"
        assert builder.environment is not os.environ

        monkeypatch.setenv("ANDROID_HOME", "/changed")
        assert builder.environment["ANDROID_HOME"] == "/opt/android-sdk"

    def test_custom_environment(self, builder):
        service = builder.with_environment({"ANDROID_HOME": "/sdk"}).build()

        assert service._environment == {"ANDROID_HOME": "/sdk"}

    def test_any_free_port(self, builder):
        with patch(
            "appium_launcher.services.server.driver_service.find_free_port",
            return_value=50123,
        ):
            service = builder.using_any_free_port().build()

        assert service.port == 50123
        assert "50123" in service.command

    def test_missing_node_fails_before_arguments(self, builder, tmp_path):
        builder.using_driver_executable(tmp_path / "missing-node")

        with (
            patch.object(builder, "build_arguments") as mock_args,
            patch.object(builder, "instantiate_service") as mock_instantiate,
        ):
            with pytest.raises(InvalidServerInstanceError, match="NodeJS executable does not exist"):
                builder.build()

        mock_args.assert_not_called()
        mock_instantiate.assert_not_called()

    def test_missing_script_fails_before_service_creation(self, fake_install):
        """No explicit path, no override and npm unavailable: nothing is launched."""
        node, _ = fake_install
        builder = AppiumServiceBuilder(
            server_config=ServerConfig(),
            locator=ExecutableLocator(logger=MagicMock()),
        ).using_driver_executable(node)

        with (
            patch("appium_launcher.services.discovery.executables.shutil.which", return_value=None),
            patch.object(builder, "instantiate_service") as mock_instantiate,
        ):
            with pytest.raises(InvalidServerInstanceError, match="npm"):
                builder.build()

        mock_instantiate.assert_not_called()

    def test_executable_is_resolved_once_built(self, fake_install):
        node, main_js = fake_install
        builder = AppiumServiceBuilder(server_config=ServerConfig()).with_appium_js(main_js)

        with patch(
            "appium_launcher.services.discovery.executables.shutil.which",
            return_value=str(node),
        ):
            builder.build()

        assert builder.executable == node
        assert builder.main_script == main_js

    def test_main_script_from_environment(self, fake_install, monkeypatch):
        node, main_js = fake_install
        monkeypatch.setenv("APPIUM_BINARY_PATH", str(main_js))
        builder = AppiumServiceBuilder(server_config=ServerConfig()).using_driver_executable(node)

        args = builder.build_arguments()

        assert args[0] == str(Path(main_js).absolute())
