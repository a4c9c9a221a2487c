# tests/test_cli.py
"""
Tests for the questlog command-line host.

Drives the interactive menu with scripted input and checks the one-shot
show/record commands and main() exit codes.
"""

import io
import json

import pytest

from questlog.cli import GoalShell, cmd_record, cmd_show, create_parser, main
from questlog.config import QuestLogConfig
from questlog.ledger import GoalLedger


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path, reset_logging_manager):
    """Keep CLI runs away from the real home directory and environment."""
    import os

    for key in list(os.environ):
        if key.startswith("QUESTLOG_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


def run_shell(ledger, *lines, config=None):
    """Run the menu with the given input lines; return (exit code, output)."""
    stdin = io.StringIO("".join(line + "\n" for line in lines))
    stdout = io.StringIO()
    code = GoalShell(ledger, config=config, stdin=stdin, stdout=stdout).run()
    return code, stdout.getvalue()


class TestGoalShell:
    def test_quit(self, ledger):
        code, out = run_shell(ledger, "7")
        assert code == 0
        assert "You have 0 points." in out
        assert "You are currently at Level 1!" in out

    def test_end_of_input_quits(self, ledger):
        code, _ = run_shell(ledger)
        assert code == 0

    def test_create_and_list(self, ledger):
        code, out = run_shell(
            ledger,
            "1", "3", "Temple", "Attend the temple", "50", "10", "500",
            "2",
            "3",
            "7",
        )
        assert code == 0
        assert "Goal created successfully!" in out
        assert "1. Temple" in out
        assert "1. [ ] Temple (Attend the temple) -- Currently completed: [" in out
        assert len(ledger) == 1

    def test_create_checklist_by_name(self, ledger):
        code, out = run_shell(
            ledger,
            "1", "checklist", "Temple", "Attend the temple", "50", "10", "500",
            "7",
        )
        assert code == 0
        assert "Goal created successfully!" in out
        assert ledger.goals[0].target == 10
        assert ledger.goals[0].bonus == 500

    def test_unknown_kind_reported(self, ledger):
        code, out = run_shell(ledger, "1", "weekly", "7")
        assert code == 0
        assert "Error: Invalid value for 'kind'" in out
        assert len(ledger) == 0

    def test_invalid_creation_reported(self, ledger):
        code, out = run_shell(ledger, "1", "1", "Run", "Go running", "lots", "7")
        assert code == 0
        assert "Error: Invalid value for 'base_points'" in out
        assert len(ledger) == 0

    def test_record_event(self, populated_ledger):
        code, out = run_shell(populated_ledger, "6", "2", "7")
        assert "Congratulations! You have earned 100 points!" in out
        assert "Keep going." in out
        assert populated_ledger.score == 1350
        assert "You have 1350 points." in out

    def test_record_event_out_of_range(self, populated_ledger):
        _, out = run_shell(populated_ledger, "6", "9", "7")
        assert "Error: Goal index out of range." in out
        assert populated_ledger.score == 1250

    def test_record_event_not_a_number(self, populated_ledger):
        _, out = run_shell(populated_ledger, "6", "two", "7")
        assert "Invalid selection." in out

    def test_record_with_no_goals(self, ledger):
        _, out = run_shell(ledger, "6", "7")
        assert "No goals available to record." in out

    def test_empty_listings(self, ledger):
        _, out = run_shell(ledger, "2", "3", "7")
        assert out.count("You have no goals yet.") == 2

    def test_invalid_choice(self, ledger):
        _, out = run_shell(ledger, "9", "7")
        assert "Invalid choice. Please try again." in out

    def test_save_and_load(self, populated_ledger, quote_source, save_path):
        run_shell(populated_ledger, "4", str(save_path), "7")
        assert save_path.exists()

        fresh = GoalLedger(quote_source=quote_source)
        _, out = run_shell(fresh, "5", str(save_path), "7")
        assert "Goals loaded successfully!" in out
        assert fresh.goals == populated_ledger.goals
        assert "You have 1250 points." in out

    def test_default_save_path(self, ledger, tmp_path):
        config = QuestLogConfig(save_path=str(tmp_path / "default.txt"))
        run_shell(ledger, "4", "", "7", config=config)
        assert (tmp_path / "default.txt").read_text(encoding="utf-8") == "0\n"

    def test_load_missing_file(self, ledger, tmp_path):
        _, out = run_shell(ledger, "5", str(tmp_path / "missing.txt"), "7")
        assert "Error: Goal file not found." in out

    def test_save_to_directory_keeps_menu_running(self, populated_ledger, tmp_path):
        target = tmp_path / "adir"
        target.mkdir()

        code, out = run_shell(populated_ledger, "4", str(target), "2", "7")

        assert code == 0
        assert "Error: Could not save goals" in out
        assert "1. Marathon" in out
        assert len(populated_ledger) == 3
        assert not (tmp_path / "adir.tmp").exists()


class TestOneShotCommands:
    def test_show(self, populated_ledger, save_path):
        populated_ledger.save(save_path)
        out = io.StringIO()

        assert cmd_show(str(save_path), QuestLogConfig(), stdout=out) == 0

        text = out.getvalue()
        assert "Score: 1250  Level: 3" in text
        assert "1. [X] Marathon (Run a marathon)" in text
        assert "2. [ ] Scripture (Read scriptures)" in text

    def test_show_json(self, populated_ledger, save_path):
        populated_ledger.save(save_path)
        out = io.StringIO()

        cmd_show(str(save_path), QuestLogConfig(), json_output=True, stdout=out)

        payload = json.loads(out.getvalue())
        assert payload["score"] == 1250
        assert payload["level"] == 3
        assert [g["index"] for g in payload["goals"]] == [1, 2, 3]
        assert payload["goals"][0]["completed"] is True

    def test_record(self, populated_ledger, save_path, quote_source):
        populated_ledger.save(save_path)
        out = io.StringIO()

        assert cmd_record(str(save_path), 3, QuestLogConfig(), stdout=out) == 0

        assert "You have earned 50 points!" in out.getvalue()
        restored = GoalLedger(quote_source=quote_source)
        restored.load(save_path)
        assert restored.score == 1300
        assert restored.goals[2].progress == 2


class TestMain:
    def test_parser_commands(self):
        parser = create_parser()
        parsed = parser.parse_args(["record", "goals.txt", "2"])
        assert parsed.command == "record"
        assert parsed.index == 2

    def test_show_missing_file(self, tmp_path, capsys):
        code = main(["show", str(tmp_path / "missing.txt")])
        assert code == 1
        assert "Goal file not found" in capsys.readouterr().err

    def test_record_out_of_range(self, populated_ledger, save_path, capsys):
        populated_ledger.save(save_path)
        before = save_path.read_text(encoding="utf-8")

        assert main(["record", str(save_path), "5"]) == 1

        assert save_path.read_text(encoding="utf-8") == before
        assert "out of range" in capsys.readouterr().err

    def test_bad_config_file(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "nope.toml"), "show", "x"]) == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_menu_with_initial_file(self, populated_ledger, save_path, monkeypatch, capsys):
        populated_ledger.save(save_path)
        monkeypatch.setattr("sys.stdin", io.StringIO("7\n"))

        assert main(["menu", "--file", str(save_path)]) == 0

        assert "You have 1250 points." in capsys.readouterr().out
