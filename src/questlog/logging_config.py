# src/questlog/logging_config.py
"""
Logging configuration for questlog hosts.

Library modules only call ``logging.getLogger(__name__)``. A host (the
``questlog`` CLI, or an embedding application) calls ``configure_logging``
once at startup to decide where those records go.

The interactive menu owns the terminal, so the console stays quiet by
default: only records logged through ``log_display`` (which marks them
with ``extra={"display": True}``) get through. ``-v`` opens the console to
every record. File logging is off unless ``file_enabled`` is set, and then
goes to ``<file_directory>/<app>.log`` through a ``RotatingFileHandler``.

Usage:
    from questlog.logging_config import configure_logging, log_display

    configure_logging(app_name="questlog", config={"file_enabled": True})

    logger = logging.getLogger("questlog.cli")
    log_display(logger, logging.INFO, "Saved %d goals", count)
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

DEFAULT_LOGGING_CONFIG: dict[str, Any] = {
    "console_enabled": False,
    "console_level": "WARNING",
    "console_format": "%(levelname)s - %(message)s",
    "file_enabled": False,
    "file_level": "DEBUG",
    "file_directory": "~/.local/share/questlog/logs",
    "file_name": "{app}.log",
    "file_format": "%(asctime)s [%(levelname)-8s] %(name)s - %(message)s",
    "rotation_max_bytes": 1024 * 1024,
    "rotation_backup_count": 3,
    "display_min_level": "INFO",
    "components": {
        "questlog": "INFO",
    },
}


def _resolve_level(value: str | int, default: int) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).upper())
    return level if isinstance(level, int) else default


class DisplayFilter(logging.Filter):
    """
    Console gate.

    With ``verbose`` set every record passes. Otherwise only records flagged
    ``display=True`` at or above ``display_min_level`` reach the terminal.
    """

    def __init__(self, verbose: bool = False, display_min_level: int = logging.INFO) -> None:
        super().__init__()
        self.verbose = verbose
        self.display_min_level = display_min_level

    def filter(self, record: logging.LogRecord) -> bool:
        if self.verbose:
            return True
        return bool(getattr(record, "display", False)) and record.levelno >= self.display_min_level


class UnifiedLoggingManager:
    """
    Process-wide logging setup, applied at most once.

    Use ``get_instance()``; the console can be opened later with
    ``enable_console`` (the CLI does this for ``-v``).
    """

    _instance: Optional["UnifiedLoggingManager"] = None

    def __init__(self) -> None:
        self.configured = False
        self.log_file_path: Path | None = None
        self._console_handler: logging.Handler | None = None
        self._display_filter: DisplayFilter | None = None

    @classmethod
    def get_instance(cls) -> "UnifiedLoggingManager":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def configure(
        self,
        app_name: str = "questlog",
        config: dict[str, Any] | None = None,
        force_reconfigure: bool = False,
    ) -> Path | None:
        """
        Install the console (and optional file) handlers on the root logger.

        Args:
            app_name: Used in the log file name.
            config: Logging section, merged over ``DEFAULT_LOGGING_CONFIG``.
            force_reconfigure: Replace an earlier configuration.

        Returns:
            The log file path, or None when file logging is off.
        """
        if self.configured and not force_reconfigure:
            return self.log_file_path

        settings = {**DEFAULT_LOGGING_CONFIG, **(config or {})}

        root = logging.getLogger()
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        root.setLevel(logging.DEBUG)

        verbose = bool(settings["console_enabled"])
        self._display_filter = DisplayFilter(
            verbose=verbose,
            display_min_level=_resolve_level(settings["display_min_level"], logging.INFO),
        )
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter(settings["console_format"]))
        # While quiet, the filter alone decides what is shown.
        console.setLevel(
            _resolve_level(settings["console_level"], logging.WARNING) if verbose else logging.DEBUG
        )
        console.addFilter(self._display_filter)
        root.addHandler(console)
        self._console_handler = console

        self.log_file_path = None
        if settings["file_enabled"]:
            file_handler = self._create_file_handler(settings, app_name)
            if file_handler is not None:
                root.addHandler(file_handler)

        for component, level in settings["components"].items():
            logging.getLogger(component).setLevel(_resolve_level(level, logging.INFO))

        self.configured = True
        return self.log_file_path

    def _create_file_handler(
        self, settings: dict[str, Any], app_name: str
    ) -> logging.Handler | None:
        log_dir = Path(os.path.expanduser(settings["file_directory"]))
        try:
            filename = settings["file_name"].format(app=app_name)
        except (KeyError, ValueError):
            filename = f"{app_name}.log"
        log_file = log_dir / filename

        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                log_file,
                maxBytes=settings["rotation_max_bytes"],
                backupCount=settings["rotation_backup_count"],
                encoding="utf-8",
            )
        except OSError as e:
            sys.stderr.write(f"Warning: Cannot open log file {log_file}: {e}\n")
            return None

        handler.setLevel(_resolve_level(settings["file_level"], logging.DEBUG))
        handler.setFormatter(logging.Formatter(settings["file_format"]))
        self.log_file_path = log_file
        return handler

    def enable_console(self, level: str | int = "WARNING") -> None:
        """Let every record at or above ``level`` reach the console."""
        if self._console_handler is None or self._display_filter is None:
            return
        self._display_filter.verbose = True
        self._console_handler.setLevel(_resolve_level(level, logging.WARNING))


def configure_logging(
    app_name: str = "questlog",
    config: dict[str, Any] | None = None,
    force_reconfigure: bool = False,
) -> Path | None:
    """Configure logging once for a questlog host; returns the log file path, if any."""
    return UnifiedLoggingManager.get_instance().configure(
        app_name=app_name,
        config=config,
        force_reconfigure=force_reconfigure,
    )


def log_display(
    logger: logging.Logger,
    level: int,
    msg: str,
    *args: Any,
    **kwargs: Any,
) -> None:
    """Log a record that reaches the console even while it is quiet."""
    extra = kwargs.pop("extra", None) or {}
    extra["display"] = True
    kwargs["extra"] = extra
    logger.log(level, msg, *args, **kwargs)


def enable_console_logging(level: str | int = "WARNING") -> None:
    """Show all console records at or above ``level``."""
    UnifiedLoggingManager.get_instance().enable_console(level)
