"""Background task helpers for github-release.

Runs callables on their own threads and captures their outcome so a
caller can start many tasks and later wait on all of them.
"""

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, List, Optional, TypeVar


T = TypeVar("T")


class TaskStatus(Enum):
    """Status of a background task."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class TaskResult(Generic[T]):
    """Result of a background task."""
    status: TaskStatus
    result: Optional[T] = None
    error: Optional[Exception] = None


class ThreadedTask(Generic[T]):
    """
    Runs a callable in a background thread.

    Usage:
        tasks = [ThreadedTask(upload, args=(url, path)) for path in paths]
        for task in tasks:
            task.start()

        results = [task.get_result() for task in tasks]
    """

    def __init__(
        self,
        target: Callable[..., T],
        args: tuple = (),
        kwargs: Optional[dict] = None,
        name: Optional[str] = None,
        on_complete: Optional[Callable[[TaskResult[T]], None]] = None
    ):
        """
        Initialize a threaded task.

        Args:
            target: Callable to run in background
            args: Positional arguments for target
            kwargs: Keyword arguments for target
            name: Optional thread name
            on_complete: Callback when task finishes (called from worker thread)
        """
        self._target = target
        self._args = args
        self._kwargs = kwargs or {}
        self._name = name
        self._on_complete = on_complete

        self._thread: Optional[threading.Thread] = None
        self._result: Optional[TaskResult[T]] = None
        self._status = TaskStatus.PENDING

    @property
    def status(self) -> TaskStatus:
        """Current task status."""
        return self._status

    @property
    def is_running(self) -> bool:
        """True if task is currently running."""
        return self._status == TaskStatus.RUNNING

    def start(self) -> None:
        """Start the background task."""
        if self._status != TaskStatus.PENDING:
            raise RuntimeError("Task already started")

        self._status = TaskStatus.RUNNING
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        """Internal method that runs in the background thread."""
        try:
            result = self._target(*self._args, **self._kwargs)
            self._result = TaskResult(status=TaskStatus.COMPLETED, result=result)
            self._status = TaskStatus.COMPLETED
        except Exception as e:
            self._result = TaskResult(status=TaskStatus.FAILED, error=e)
            self._status = TaskStatus.FAILED

        if self._on_complete:
            self._on_complete(self._result)

    def get_result(self, timeout: Optional[float] = None) -> TaskResult[T]:
        """
        Wait for task completion and return result.

        Args:
            timeout: Maximum time to wait (None = forever)

        Returns:
            TaskResult with status and result/error

        Raises:
            TimeoutError: If timeout expires before task completes
        """
        if self._thread:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                raise TimeoutError("Task did not complete within timeout")

        return self._result or TaskResult(status=TaskStatus.PENDING)


def run_all(tasks: List[ThreadedTask[T]]) -> List[TaskResult[T]]:
    """
    Start every task at once and wait for all of them.

    Args:
        tasks: Tasks that have not been started yet

    Returns:
        One TaskResult per task, in the order given
    """
    for task in tasks:
        task.start()
    return [task.get_result() for task in tasks]
