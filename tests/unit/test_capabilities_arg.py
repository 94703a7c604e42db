"""
Unit tests for capability serialization.
"""

import json

import pytest

from appium_launcher.core.models.capabilities import Capabilities
from appium_launcher.services.server.capabilities_arg import (
    capabilities_to_cmdline_arg,
    to_json_arg,
    to_quoted_arg,
)

WINDOWS_APP_CAPS = {"platformName": "Android", "appPackage": "C:\\apps\\a.apk"}


class TestJsonArg:
    """Tests for the default JSON form."""

    def test_plain_json_keeps_backslashes(self):
        out = to_json_arg(WINDOWS_APP_CAPS)

        assert '\\"' not in out
        assert '"platformName":"Android"' in out
        assert json.loads(out) == WINDOWS_APP_CAPS

    def test_nulls_are_kept(self):
        out = to_json_arg({"platformName": "iOS", "udid": None})

        assert out == '{"platformName":"iOS","udid":null}'

    def test_no_html_or_unicode_escaping(self):
        out = to_json_arg({"appium:webviewName": "<main>&co", "deviceName": "Pixel ñ"})

        assert "<main>&co" in out
        assert "Pixel ñ" in out

    def test_nested_values(self):
        caps = Capabilities({"appium:settings": {"waitForIdleTimeout": 0}, "appium:otherApps": ["a", "b"]})

        assert json.loads(to_json_arg(caps)) == caps.as_dict()


class TestQuotedArg:
    """Tests for the escape-quoted Windows form."""

    def test_keys_and_values_are_escape_quoted(self):
        out = to_quoted_arg(WINDOWS_APP_CAPS)

        assert out == '{\\"platformName\\": \\"Android\\", \\"appPackage\\": \\"C:/apps/a.apk\\"}'

    @pytest.mark.parametrize(
        "name",
        ["app", "appPackage", "chromedriverExecutable", "keystorePath", "appium:app", "appium:appPackage"],
    )
    def test_path_capabilities_use_forward_slashes(self, name):
        out = to_quoted_arg({name: "C:\\tools\\file"})

        assert "C:/tools/file" in out
        assert "\\" not in out.replace('\\"', "")

    def test_other_values_keep_backslashes(self):
        out = to_quoted_arg({"appium:customValue": "a\\b"})

        assert out == '{\\"appium:customValue\\": \\"a\\b\\"}'

    def test_nulls_are_skipped(self):
        out = to_quoted_arg({"platformName": "iOS", "udid": None})

        assert out == '{\\"platformName\\": \\"iOS\\"}'

    def test_non_string_values_are_not_quoted(self):
        out = to_quoted_arg({"appium:noReset": True, "appium:newCommandTimeout": 120})

        assert out == '{\\"appium:noReset\\": true, \\"appium:newCommandTimeout\\": 120}'

    def test_collections_use_plain_text_form(self):
        out = to_quoted_arg(
            {
                "appium:otherApps": ["a", "b"],
                "appium:chromeOptions": {"w3c": False, "args": ["--headless"], "binary": None},
            }
        )

        assert out == (
            '{\\"appium:otherApps\\": [a, b], '
            '\\"appium:chromeOptions\\": {w3c=false, args=[--headless], binary=null}}'
        )

    def test_empty(self):
        assert to_quoted_arg({}) == "{}"
        assert to_quoted_arg(None) == "{}"


class TestFormSelection:
    """The quoted form needs both the flag and a Windows host."""

    @pytest.mark.parametrize(
        ("auto_quote", "on_windows", "quoted"),
        [
            (True, True, True),
            (True, False, False),
            (False, True, False),
            (False, False, False),
        ],
    )
    def test_selection(self, auto_quote, on_windows, quoted):
        out = capabilities_to_cmdline_arg(WINDOWS_APP_CAPS, auto_quote, on_windows)

        assert out.startswith('{\\"') is quoted
