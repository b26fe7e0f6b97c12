"""
TODOLIST - Command Execution State Machine
==========================================
Runs one command through its pipeline: mutate -> save -> completed.

Every mutating state leaves only through SAVING, so a successful mutation is
always followed by a persistence attempt before a result is returned. A failed
save does not roll the in-memory mutation back.

Transitions:

    LIST        -> COMPLETED
    ADD         -> SAVING -> COMPLETED
    COMPLETE    -> SAVING -> COMPLETED   (TaskNotFound aborts before SAVING)
    UNCOMPLETE  -> SAVING -> COMPLETED
    DELETE      -> SAVING -> COMPLETED
    EDIT        -> SAVING -> COMPLETED
    VERSION     -> COMPLETED
"""

from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple
import logging

from pydantic import BaseModel, ConfigDict

from ._version import __version__
from .errors import IoError, ParseError
from .operations import add_task, complete_task, delete_task, edit_task, uncomplete_task
from .schema import (
    AddCommand, Command, CommandResult, CompleteCommand, DeleteCommand,
    EditCommand, ListCommand, MessageResult, Task, TasksResult,
    UncompleteCommand, VersionCommand,
)
from .storage import TaskGateway

logger = logging.getLogger("todolist")


class StateKind(str, Enum):
    """Pipeline stages"""
    IDLE = "idle"               # Before any dispatch
    LIST = "list"
    ADD = "add"
    COMPLETE = "complete"
    UNCOMPLETE = "uncomplete"
    DELETE = "delete"
    EDIT = "edit"
    SAVING = "saving"           # Persist, then report the pending message
    COMPLETED = "completed"     # Terminal
    VERSION = "version"


class MachineState(BaseModel):
    """One machine state plus the data its stage needs"""
    model_config = ConfigDict(frozen=True)

    kind: StateKind
    task_id: Optional[str] = None
    description: Optional[str] = None
    message: Optional[str] = None  # Confirmation carried into SAVING

    @property
    def is_terminal(self) -> bool:
        return self.kind == StateKind.COMPLETED


IDLE = MachineState(kind=StateKind.IDLE)
COMPLETED = MachineState(kind=StateKind.COMPLETED)

Step = Tuple[MachineState, Optional[CommandResult]]


def _saving(message: str) -> MachineState:
    return MachineState(kind=StateKind.SAVING, message=message)


# ========================================
# STATE HANDLERS
# ========================================

def _handle_noop(state: MachineState, context: "AppContext") -> Step:
    return COMPLETED, MessageResult(text="")


def _handle_list(state: MachineState, context: "AppContext") -> Step:
    snapshot = [task.model_copy() for task in context.tasks]
    return COMPLETED, TasksResult(tasks=snapshot)


def _handle_add(state: MachineState, context: "AppContext") -> Step:
    add_task(context.tasks, state.description)
    return _saving("Task added."), None


def _handle_complete(state: MachineState, context: "AppContext") -> Step:
    complete_task(context.tasks, state.task_id)
    return _saving("Task marked as complete."), None


def _handle_uncomplete(state: MachineState, context: "AppContext") -> Step:
    uncomplete_task(context.tasks, state.task_id)
    return _saving("Task marked as incomplete."), None


def _handle_delete(state: MachineState, context: "AppContext") -> Step:
    delete_task(context.tasks, state.task_id)
    return _saving("Task deleted."), None


def _handle_edit(state: MachineState, context: "AppContext") -> Step:
    edit_task(context.tasks, state.task_id, state.description)
    return _saving("Task updated."), None


def _handle_saving(state: MachineState, context: "AppContext") -> Step:
    try:
        context.gateway.save(context.tasks)
    except OSError as e:
        raise IoError(e) from e
    except (TypeError, ValueError) as e:
        raise ParseError(e) from e
    return COMPLETED, MessageResult(text=state.message or "")


def _handle_version(state: MachineState, context: "AppContext") -> Step:
    return COMPLETED, MessageResult(text=__version__)


_HANDLERS: Dict[StateKind, Callable[[MachineState, "AppContext"], Step]] = {
    StateKind.IDLE: _handle_noop,
    StateKind.LIST: _handle_list,
    StateKind.ADD: _handle_add,
    StateKind.COMPLETE: _handle_complete,
    StateKind.UNCOMPLETE: _handle_uncomplete,
    StateKind.DELETE: _handle_delete,
    StateKind.EDIT: _handle_edit,
    StateKind.SAVING: _handle_saving,
    StateKind.COMPLETED: _handle_noop,
    StateKind.VERSION: _handle_version,
}


def step(state: MachineState, context: "AppContext") -> Step:
    """
    Run one state's logic against the context.

    Returns the next state and the result this step produced, if any.
    Errors from task operations or the gateway propagate unchanged.
    """
    return _HANDLERS[state.kind](state, context)


def dispatch(command: Command) -> MachineState:
    """Entry state for a command"""
    if isinstance(command, ListCommand):
        return MachineState(kind=StateKind.LIST)
    if isinstance(command, AddCommand):
        return MachineState(kind=StateKind.ADD, description=command.description)
    if isinstance(command, CompleteCommand):
        return MachineState(kind=StateKind.COMPLETE, task_id=command.task_id)
    if isinstance(command, UncompleteCommand):
        return MachineState(kind=StateKind.UNCOMPLETE, task_id=command.task_id)
    if isinstance(command, DeleteCommand):
        return MachineState(kind=StateKind.DELETE, task_id=command.task_id)
    if isinstance(command, EditCommand):
        return MachineState(
            kind=StateKind.EDIT,
            task_id=command.task_id,
            description=command.description,
        )
    if isinstance(command, VersionCommand):
        return MachineState(kind=StateKind.VERSION)
    raise TypeError(f"Unsupported command: {command!r}")


class AppContext:
    """
    Execution context: the live task collection plus the current machine state.

    Not internally synchronized. Callers sharing one context across threads
    must serialize every execute() call.
    """

    def __init__(self, tasks: List[Task], gateway: TaskGateway):
        self.tasks = tasks
        self.gateway = gateway
        self.state: MachineState = IDLE

    def transition_to(self, state: MachineState) -> None:
        logger.debug(f"State: {self.state.kind.value} -> {state.kind.value}")
        self.state = state

    def execute(self, command: Command) -> CommandResult:
        """
        Run one command to a terminal state and return its result.

        Raises:
            TodoError: TaskNotFound from id-addressed commands, IoError or
                ParseError when saving fails
        """
        self.transition_to(dispatch(command))

        result: Optional[CommandResult] = None
        while not self.state.is_terminal:
            next_state, produced = step(self.state, self)
            if produced is not None:
                result = produced
            self.transition_to(next_state)

        return result
