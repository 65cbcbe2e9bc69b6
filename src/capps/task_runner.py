"""Concurrent task batches with progress display.

A batch is a list of named Tasks. ProgressTaskRunner starts every task at
once on its own worker thread, shows one progress line per task, and
returns only after every task has finished. A failing task never stops its
siblings; its exception is captured in the returned TaskOutcome.

Example Usage:
    >>> runner = ProgressTaskRunner()
    >>> outcomes = runner.run([Task("api", lambda: poller.result())])
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

logger = logging.getLogger(__name__)


@dataclass
class Task:
    """A named unit of work in a batch."""

    title: str
    action: Callable[[], Any]


@dataclass
class TaskOutcome:
    """Result of running one Task."""

    title: str
    success: bool
    error: Exception | None = None


class TaskBatchRunner(ABC):
    """Run a batch of tasks and wait for all of them."""

    @abstractmethod
    def run(self, tasks: list[Task]) -> list[TaskOutcome]:
        """Run tasks, returning one outcome per task in task order."""


class ProgressTaskRunner(TaskBatchRunner):
    """Run every task concurrently with a Rich progress line per task."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def run(self, tasks: list[Task]) -> list[TaskOutcome]:
        if not tasks:
            return []

        outcomes: dict[int, TaskOutcome] = {}

        with (
            Progress(
                SpinnerColumn(),
                TextColumn("{task.description}"),
                TimeElapsedColumn(),
                console=self.console,
            ) as progress,
            ThreadPoolExecutor(max_workers=len(tasks)) as executor,
        ):
            future_to_index = {}
            progress_ids = []
            for idx, task in enumerate(tasks):
                progress_ids.append(progress.add_task(escape(task.title), total=1))
                future_to_index[executor.submit(task.action)] = idx

            for future in as_completed(future_to_index):
                idx = future_to_index[future]
                title = tasks[idx].title
                try:
                    future.result()
                    outcomes[idx] = TaskOutcome(title=title, success=True)
                    description = f"[green]✓[/green] {escape(title)}"
                except Exception as e:
                    logger.debug(f"Task {title} failed: {e}")
                    outcomes[idx] = TaskOutcome(title=title, success=False, error=e)
                    description = f"[red]✗[/red] {escape(title)}: {escape(str(e))}"
                progress.update(progress_ids[idx], completed=1, description=description)

        return [outcomes[idx] for idx in range(len(tasks))]


__all__ = ["ProgressTaskRunner", "Task", "TaskBatchRunner", "TaskOutcome"]
