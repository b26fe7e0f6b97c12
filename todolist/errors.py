"""Error types raised by the task list.

Every failure the core can report is a ``TodoError``; callers catch that one
type and decide how to present it.
"""

from typing import Optional


class TodoError(Exception):
    """Base class for all task list errors.

    Args:
        message: Human-readable description shown to the user
        cause: Optional low-level exception this error wraps
    """

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class IoError(TodoError):
    """Store could not be read or written"""

    def __init__(self, cause: Exception):
        super().__init__(f"IO Error: {cause}", cause)


class ParseError(TodoError):
    """Store content is malformed"""

    def __init__(self, cause: Exception):
        super().__init__(f"Parse Error: {cause}", cause)


class InvalidCommand(TodoError):
    def __init__(self, command: str, detail: Optional[str] = None):
        self.command = command
        if detail:
            message = f"Invalid command '{command}': {detail}."
        else:
            message = f"Unknown command '{command}'. Run with no arguments for usage."
        super().__init__(message)


class MissingArgument(TodoError):
    def __init__(self, argument: str):
        self.argument = argument
        super().__init__(f"Missing argument: {argument}. Run with no arguments for usage.")


class InvalidId(TodoError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid task ID '{value}'. Please provide a task ID from 'list'.")


class TaskNotFound(TodoError):
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"No task found with ID {task_id}.")
