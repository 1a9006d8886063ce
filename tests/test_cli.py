"""Tests for the intlphone command line."""

from unittest.mock import MagicMock, patch

import pytest
import requests  # type: ignore[import-untyped]

from intlphone import __version__, cli


@pytest.fixture(autouse=True)
def quiet_cli(monkeypatch, tmp_path):
    """Keep CLI runs from attaching log handlers or touching ~/.intlphone."""
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)
    monkeypatch.setenv("INTLPHONE_LOG_PATH", str(tmp_path / "logs"))


def _lines(capsys):
    return capsys.readouterr().out.strip().splitlines()


class TestCli:
    """Argument handling and exit codes."""

    def test_version(self, capsys):
        assert cli.main(["--version"]) == cli.EXIT_OK
        assert __version__ in capsys.readouterr().out

    def test_no_arguments_prints_help(self, capsys):
        assert cli.main([]) == cli.EXIT_OK
        assert "usage:" in capsys.readouterr().out

    def test_normalize_valid_numbers(self, capsys):
        code = cli.main(["(555) 123-4567", "9171234567"])
        assert code == cli.EXIT_OK
        assert _lines(capsys) == [
            "(555) 123-4567\t+15551234567\tvalid",
            "9171234567\t+639171234567\tvalid",
        ]

    def test_no_location(self, capsys):
        assert cli.main(["--no-location", "639171234567"]) == cli.EXIT_OK
        assert _lines(capsys) == ["639171234567\t+639171234567\tvalid"]

    def test_invalid_number_exit_code(self, capsys):
        assert cli.main(["--no-location", "abc"]) == cli.EXIT_INVALID
        assert _lines(capsys) == ["abc\t\tinvalid"]

    def test_display_column(self, capsys):
        cli.main(["--display", "5551234567"])
        assert _lines(capsys) == ["5551234567\t+15551234567\tvalid\t+1 (555) 123-4567"]

    def test_fallback_option(self, capsys):
        cli.main(["--no-location", "--fallback", "+44", "12345"])
        assert _lines(capsys) == ["12345\t+4412345\tvalid"]

    def test_detect(self, capsys):
        assert cli.main(["--detect", "639171234567", "12345"]) == cli.EXIT_OK
        assert _lines(capsys) == ["639171234567\t+63", "12345\t-"]

    def test_bad_configuration(self, monkeypatch, capsys):
        monkeypatch.setenv("INTLPHONE_LOCATION_TIMEOUT", "soon")
        assert cli.main(["5551234567"]) == cli.EXIT_CONFIG
        assert "Configuration error" in capsys.readouterr().out

    def test_status_ok(self, capsys):
        assert cli.main(["--status"]) == cli.EXIT_OK
        out = capsys.readouterr().out
        assert "Fallback calling code: +1" in out
        assert "Location lookups:      disabled" in out

    def test_status_reports_issues(self, monkeypatch, capsys):
        monkeypatch.setenv("INTLPHONE_FALLBACK_CALLING_CODE", "63")
        assert cli.main(["--status"]) == cli.EXIT_CONFIG
        assert "Configuration issues (1)" in capsys.readouterr().out

    def test_status_without_location_skips_reachability(self, capsys):
        cli.main(["--status"])
        assert "Location service" not in capsys.readouterr().out

    def test_status_reports_reachable_service(self, monkeypatch, capsys):
        monkeypatch.setenv("INTLPHONE_LOCATION_ENABLED", "true")
        response = MagicMock(status_code=200)
        with patch("intlphone.integrations.web_location.requests.get", return_value=response):
            assert cli.main(["--status"]) == cli.EXIT_OK
        assert "Location service:      reachable" in capsys.readouterr().out

    def test_status_reports_unreachable_service(self, monkeypatch, capsys):
        monkeypatch.setenv("INTLPHONE_LOCATION_ENABLED", "true")
        with patch(
            "intlphone.integrations.web_location.requests.get",
            side_effect=requests.ConnectionError("down"),
        ):
            cli.main(["--status"])
        assert "Location service:      unreachable" in capsys.readouterr().out
