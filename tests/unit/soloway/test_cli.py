"""Unit tests for the soloway command-line front end."""

from datetime import date
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from soloway_sdk.cli import build_parser, main, run
from soloway_sdk.client import SolowayAPIError
from soloway_sdk.schemas import AccountInfo, PlacementsInfo, PlacementsStatByDay


@pytest.fixture
def console():
    return Console(record=True, width=120)


@pytest.fixture
def client():
    client = MagicMock()
    client.whoami.return_value = AccountInfo.model_validate({"username": "adv", "client": {"guid": "cg"}})
    return client


class TestParser:
    """Tests for argument parsing."""

    def test_placements_stat_args(self):
        args = build_parser().parse_args(
            ["placements-stat", "p1", "p2", "--start", "2024-01-01", "--stop", "2024-01-31", "--with-archived"]
        )

        assert args.placement_ids == ["p1", "p2"]
        assert args.start == date(2024, 1, 1)
        assert args.stop == date(2024, 1, 31)
        assert args.with_archived is True

    def test_invalid_date_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["stat-by-day", "p1", "--start", "01.01.2024", "--stop", "2024-01-31"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestRun:
    """Tests for command execution."""

    def test_whoami(self, client, console):
        run(build_parser().parse_args(["whoami"]), client, console)

        client.login.assert_called_once()
        assert "adv" in console.export_text()
        assert "cg" in console.export_text()

    def test_placements_table(self, client, console):
        client.get_placements.return_value = PlacementsInfo.model_validate(
            {"list": [{"guid": "p-1", "doc": {"name": "Main banner"}}]}
        )

        run(build_parser().parse_args(["placements"]), client, console)

        client.whoami.assert_called_once()
        output = console.export_text()
        assert "p-1" in output
        assert "Main banner" in output

    def test_placements_stat(self, client, console):
        args = build_parser().parse_args(["placements-stat", "p1", "--start", "2024-01-01", "--stop", "2024-01-02"])

        run(args, client, console)

        client.get_placements_stat.assert_called_once_with(
            ["p1"], date(2024, 1, 1), date(2024, 1, 2), with_archived=False
        )

    def test_stat_by_day_skips_whoami(self, client, console):
        client.get_placement_stat_by_day.return_value = PlacementsStatByDay.model_validate(
            {"list": [{"date": "2024-01-01", "exposures": 100, "clicks": 3, "cost": 1.5}]}
        )
        args = build_parser().parse_args(["stat-by-day", "p9", "--start", "2024-01-01", "--stop", "2024-01-01"])

        run(args, client, console)

        client.whoami.assert_not_called()
        output = console.export_text()
        assert "2024-01-01" in output
        assert "1.50" in output


class TestMain:
    """Tests for the console entry point."""

    def test_missing_credentials_exit_code(self, monkeypatch):
        monkeypatch.delenv("SOLOWAY_USERNAME", raising=False)
        monkeypatch.delenv("SOLOWAY_PASSWORD", raising=False)

        assert main(["whoami"]) == 1

    @patch("soloway_sdk.cli.SolowayClient")
    def test_api_error_exit_code(self, mock_client_cls, monkeypatch):
        monkeypatch.setenv("SOLOWAY_USERNAME", "user")
        monkeypatch.setenv("SOLOWAY_PASSWORD", "secret")
        client = mock_client_cls.from_config.return_value.__enter__.return_value
        client.login.side_effect = SolowayAPIError("401 Unauthorized", status_code=401)

        assert main(["whoami"]) == 1

    @patch("soloway_sdk.cli.SolowayClient")
    def test_success_exit_code(self, mock_client_cls, monkeypatch):
        monkeypatch.setenv("SOLOWAY_USERNAME", "user")
        monkeypatch.setenv("SOLOWAY_PASSWORD", "secret")
        client = mock_client_cls.from_config.return_value.__enter__.return_value
        client.whoami.return_value = AccountInfo.model_validate({"username": "adv", "client": {"guid": "cg"}})

        assert main(["whoami"]) == 0
        mock_client_cls.from_config.return_value.__exit__.assert_called_once()
