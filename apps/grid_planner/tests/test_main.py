"""Tests for grid_planner main entry point."""

from unittest.mock import patch

import pytest
import yaml

from grid_planner.main import main, cli
from grid_planner.planner import PlanOutcome


def _write_config(tmp_path, plans, available_balance=None):
    data = {"plans": plans}
    if available_balance is not None:
        data["available_balance"] = available_balance
    config_file = tmp_path / "plans.yaml"
    config_file.write_text(yaml.dump(data))
    return str(config_file)


class TestMain:
    """Test main() entry point."""

    @patch("grid_planner.main.save_json")
    @patch("grid_planner.main.print_console")
    @patch("grid_planner.main.load_config")
    def test_config_not_found_returns_1(self, mock_load, mock_print, mock_save):
        mock_load.side_effect = FileNotFoundError("no config")

        assert main(config_path="/no/such/file") == 1
        mock_print.assert_not_called()
        mock_save.assert_not_called()

    @patch("grid_planner.main.save_json")
    @patch("grid_planner.main.print_console")
    @patch("grid_planner.main.load_config")
    def test_invalid_config_returns_1(self, mock_load, mock_print, mock_save):
        mock_load.side_effect = ValueError("bad config")

        assert main(config_path="plans.yaml") == 1

    @patch("grid_planner.main.save_json")
    @patch("grid_planner.main.print_console")
    def test_all_accepted_returns_0(self, mock_print, mock_save, tmp_path, plan_data):
        config_path = _write_config(tmp_path, [plan_data])

        assert main(config_path=config_path, output_dir=str(tmp_path)) == 0

        outcomes = mock_print.call_args[0][0]
        assert len(outcomes) == 1
        assert isinstance(outcomes[0], PlanOutcome)
        mock_save.assert_called_once_with(outcomes, str(tmp_path))

    @patch("grid_planner.main.save_json")
    @patch("grid_planner.main.print_console")
    def test_rejection_returns_1(self, mock_print, mock_save, tmp_path, plan_data):
        config_path = _write_config(tmp_path, [plan_data], available_balance="300")

        assert main(config_path=config_path) == 1

    @patch("grid_planner.main.save_json")
    @patch("grid_planner.main.print_console")
    def test_no_save(self, mock_print, mock_save, tmp_path, plan_data):
        config_path = _write_config(tmp_path, [plan_data])

        assert main(config_path=config_path, save=False) == 0
        mock_save.assert_not_called()

    def test_writes_json_end_to_end(self, tmp_path, plan_data):
        config_path = _write_config(tmp_path, [plan_data])
        out_dir = tmp_path / "out"

        assert main(config_path=config_path, output_dir=str(out_dir)) == 0
        assert len(list(out_dir.glob("grid_plan_*.json"))) == 1


class TestCli:
    """Test CLI argument handling."""

    def test_exit_code_propagated(self, monkeypatch, tmp_path, plan_data):
        config_path = _write_config(tmp_path, [plan_data])
        monkeypatch.setattr("sys.argv", ["grid_planner", "--config", config_path, "--no-save"])

        with pytest.raises(SystemExit) as exc_info:
            cli()

        assert exc_info.value.code == 0

    def test_unknown_argument_rejected(self, monkeypatch):
        monkeypatch.setattr("sys.argv", ["grid_planner", "--bogus"])
        with pytest.raises(SystemExit, match="2"):
            cli()
