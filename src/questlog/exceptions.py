# src/questlog/exceptions.py
"""
Custom exceptions for the questlog library.

This module defines a hierarchy of custom exception classes so that a host
(the CLI menu, a test, another application) can tell apart bad user input,
bad goal selections and unreadable save files, and recover from each.
"""


class QuestLogError(Exception):
    """Base class for all questlog specific errors."""
    def __init__(self, message: str = "An unspecified error occurred in questlog."):
        super().__init__(message)


class ConfigError(QuestLogError):
    """Raised for errors related to configuration loading or validation."""
    def __init__(self, message: str = "Configuration error."):
        super().__init__(message)


class InvalidInputError(QuestLogError):
    """Raised when goal creation parameters are missing or malformed."""
    def __init__(self, field: str = "unknown", message: str = "Invalid input."):
        self.field = field
        super().__init__(f"Invalid value for '{field}': {message}")


class OutOfRangeError(QuestLogError):
    """Raised when an event is recorded against a goal position that does not exist."""
    def __init__(self, index: object = None, size: int = 0, message: str = "Goal index out of range."):
        self.index = index
        self.size = size
        super().__init__(f"{message} Index: {index!r}, valid range: 1..{size}.")


class CorruptDataError(QuestLogError):
    """
    Raised when a persisted goal stream cannot be parsed.

    ``line_number`` is 1-based and refers to the physical line of the stream
    (line 1 is the score line).
    """
    def __init__(self, line_number: int = 0, message: str = "Corrupt goal data."):
        self.line_number = line_number
        super().__init__(f"{message} (line {line_number})")


class GoalNotFoundError(QuestLogError):
    """Raised when a load source does not exist."""
    def __init__(self, source: object = None, message: str = "Goal file not found."):
        self.source = source
        super().__init__(f"{message} Source: '{source}'")


class GoalStorageError(QuestLogError):
    """Raised when a goal file cannot be written or read (permissions, directories, disk)."""
    def __init__(self, path: object = None, message: str = "Goal file could not be accessed."):
        self.path = path
        super().__init__(f"{message} Path: '{path}'")
