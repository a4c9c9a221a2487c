# src/questlog/cli.py
"""
Command-line host for questlog.

Two ways in:

- ``questlog`` / ``questlog menu``: the interactive text menu (create, list,
  save, load, record, quit), showing score and level before each prompt.
- ``questlog show FILE`` and ``questlog record FILE INDEX``: one-shot
  commands for scripts.

Every menu item maps to one ``GoalLedger`` call. Errors from the ledger are
reported and the menu continues; one-shot commands exit with status 1.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional, TextIO

from .config import QuestLogConfig, load_config
from .exceptions import QuestLogError
from .goals import GoalKind
from .ledger import GoalLedger, resolve_kind
from .logging_config import configure_logging, enable_console_logging, log_display

logger = logging.getLogger(__name__)


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

class OutputFormatter:
    """Formats CLI output, with ANSI color when writing to a terminal."""

    def __init__(self, stream: TextIO, use_color: bool = True):
        self.use_color = use_color and stream.isatty()

    def _color(self, text: str, color: str) -> str:
        if not self.use_color:
            return text

        colors = {
            'green': '\033[92m',
            'red': '\033[91m',
            'bold': '\033[1m',
            'reset': '\033[0m'
        }
        return f"{colors.get(color, '')}{text}{colors['reset']}"

    def success(self, text: str) -> str:
        return self._color(text, 'green')

    def error(self, text: str) -> str:
        return self._color(f"Error: {text}", 'red')

    def header(self, text: str) -> str:
        return self._color(text, 'bold')


def format_details(ledger: GoalLedger) -> List[str]:
    """Render ``list_details()`` as ``1. [X] name (description)`` lines."""
    return [
        f"{index}. {'[X]' if completed else '[ ]'} {details}"
        for index, completed, details in ledger.list_details()
    ]


# =============================================================================
# INTERACTIVE MENU
# =============================================================================

MENU = """Menu Options:
1. Create New Goal
2. List Goal Names
3. List Goal Details
4. Save Goals
5. Load Goals
6. Record Event
7. Quit"""

GOAL_TYPES = """The types of Goals are:
1. Simple Goal
2. Eternal Goal
3. Checklist Goal"""


class GoalShell:
    """
    Interactive menu driving a ``GoalLedger``.

    Args:
        ledger: The ledger to operate on.
        config: Supplies the default save path.
        stdin: Input stream (defaults to ``sys.stdin``).
        stdout: Output stream (defaults to ``sys.stdout``).
    """

    def __init__(
        self,
        ledger: GoalLedger,
        config: Optional[QuestLogConfig] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.ledger = ledger
        self.config = config or QuestLogConfig()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.formatter = OutputFormatter(self.stdout)
        self._actions = {
            "1": self.create_goal,
            "2": self.list_goal_names,
            "3": self.list_goal_details,
            "4": self.save_goals,
            "5": self.load_goals,
            "6": self.record_event,
        }

    def _print(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def _ask(self, prompt: str) -> str:
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return line.rstrip("\r\n")

    def run(self) -> int:
        """Run the menu loop until the user quits or input ends."""
        while True:
            self.display_info()
            self._print(MENU)
            try:
                choice = self._ask("Select a choice from the menu: ").strip()
            except EOFError:
                self._print()
                return 0

            if choice == "7":
                return 0

            action = self._actions.get(choice)
            if action is None:
                self._print("Invalid choice. Please try again.")
                continue

            try:
                action()
            except QuestLogError as e:
                self._print(self.formatter.error(str(e)))
                logger.debug("Menu action %s failed: %s", choice, e)
            except EOFError:
                self._print()
                return 0
            self._print()

    def display_info(self) -> None:
        self._print(f"You have {self.ledger.score} points.")
        self._print(f"You are currently at Level {self.ledger.current_level()}!")
        self._print()

    def create_goal(self) -> None:
        self._print(GOAL_TYPES)
        kind = self._ask("Which type of goal would you like to create? ")
        name = self._ask("What is the name of your goal? ")
        description = self._ask("What is a short description of it? ")
        points = self._ask("What is the amount of points associated with this goal? ")

        target = bonus = None
        if resolve_kind(kind) is GoalKind.CHECKLIST:
            target = self._ask("How many times does this goal need to be accomplished for a bonus? ")
            bonus = self._ask("What is the bonus for accomplishing it that many times? ")

        self.ledger.create_goal(kind, name, description, points, target=target, bonus=bonus)
        self._print(self.formatter.success("Goal created successfully!"))

    def list_goal_names(self) -> None:
        names = self.ledger.list_names()
        if not names:
            self._print("You have no goals yet.")
            return
        self._print("The goals are:")
        for index, name in names:
            self._print(f"{index}. {name}")

    def list_goal_details(self) -> None:
        if not len(self.ledger):
            self._print("You have no goals yet.")
            return
        self._print("The goals are:")
        for line in format_details(self.ledger):
            self._print(line)

    def save_goals(self) -> None:
        path = self._ask(f"Enter filename to save to [{self.config.save_path}]: ").strip()
        path = path or self.config.save_path
        self.ledger.save(path)
        self._print(self.formatter.success("Goals saved successfully!"))

    def load_goals(self) -> None:
        path = self._ask(f"Enter filename to load from [{self.config.save_path}]: ").strip()
        path = path or self.config.save_path
        self.ledger.load(path)
        self._print(self.formatter.success("Goals loaded successfully!"))

    def record_event(self) -> None:
        if not len(self.ledger):
            self._print("No goals available to record. Please create a goal first.")
            return

        self._print("Which goal did you accomplish?")
        self.list_goal_names()
        raw = self._ask("Enter the number of the goal: ").strip()
        try:
            index = int(raw)
        except ValueError:
            self._print("Invalid selection.")
            return
        receipt = self.ledger.record_event(index)
        self._print(receipt.message)


# =============================================================================
# ONE-SHOT COMMANDS
# =============================================================================

def cmd_show(path: str, config: QuestLogConfig, json_output: bool = False,
             stdout: Optional[TextIO] = None) -> int:
    """Load a goal file and print its goals, score and level."""
    out = stdout or sys.stdout
    ledger = GoalLedger.from_config(config)
    ledger.load(path)

    if json_output:
        payload = ledger.get_status_summary()
        payload["goals"] = [
            {"index": index, "completed": completed, "details": details}
            for index, completed, details in ledger.list_details()
        ]
        out.write(json.dumps(payload, indent=2) + "\n")
        return 0

    formatter = OutputFormatter(out)
    out.write(formatter.header(f"Score: {ledger.score}  Level: {ledger.current_level()}") + "\n")
    for line in format_details(ledger):
        out.write(line + "\n")
    return 0


def cmd_record(path: str, index: int, config: QuestLogConfig,
               stdout: Optional[TextIO] = None) -> int:
    """Load a goal file, record one event, and save it back."""
    out = stdout or sys.stdout
    ledger = GoalLedger.from_config(config)
    ledger.load(path)
    receipt = ledger.record_event(index)
    ledger.save(path)
    out.write(receipt.message + "\n")
    log_display(logger, logging.INFO, "Score is now %d (level %d)",
                ledger.score, ledger.current_level())
    return 0


# =============================================================================
# MAIN CLI ENTRY POINT
# =============================================================================

def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the questlog CLI."""
    parser = argparse.ArgumentParser(
        prog="questlog",
        description="Track goals, record progress and level up"
    )
    parser.add_argument(
        "--config", "-c",
        help="Path to configuration file",
        default=None
    )
    parser.add_argument(
        "--verbose", "-v",
        help="Show log messages on the console",
        action="store_true"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    menu_parser = subparsers.add_parser("menu", help="Interactive goal menu (default)")
    menu_parser.add_argument(
        "--file", "-f",
        help="Goal file to load before showing the menu",
        default=None
    )

    show_parser = subparsers.add_parser("show", help="Show goals in a saved file")
    show_parser.add_argument("file", help="Goal file to read")
    show_parser.add_argument(
        "--json",
        help="Output in JSON format",
        action="store_true"
    )

    record_parser = subparsers.add_parser("record", help="Record an event and save")
    record_parser.add_argument("file", help="Goal file to update")
    record_parser.add_argument("index", type=int, help="1-based goal number")

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for the questlog CLI.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    try:
        config = load_config(parsed.config)
    except QuestLogError as e:
        sys.stderr.write(f"Error: {e}\n")
        return 1

    log_file = configure_logging(app_name="questlog", config=config.logging)
    if parsed.verbose:
        enable_console_logging("DEBUG")
        logging.getLogger("questlog").setLevel(logging.DEBUG)
    if log_file:
        logger.debug("Writing log file to %s", log_file)

    try:
        if parsed.command == "show":
            return cmd_show(parsed.file, config, json_output=parsed.json)
        if parsed.command == "record":
            return cmd_record(parsed.file, parsed.index, config)

        ledger = GoalLedger.from_config(config)
        initial_file = getattr(parsed, "file", None)
        if initial_file:
            ledger.load(initial_file)
        return GoalShell(ledger, config).run()
    except QuestLogError as e:
        sys.stderr.write(f"Error: {e}\n")
        return 1


if __name__ == "__main__":
    sys.exit(main())
