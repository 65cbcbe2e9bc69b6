"""Container App lifecycle control for stop/start/restart.

This module provides batch lifecycle management for Container Apps:
- Stop every app matching a glob
- Start every app matching a glob
- Restart: a full stop batch, then a full start batch

Each batch re-lists the matching apps, issues every operation at once and
waits for all of them. A failure on one app is recorded in the summary and
does not stop the others. Nothing is retried.
"""

import logging
from dataclasses import dataclass

import click

from capps.app_enumerator import ContainerAppEnumerator, ContainerAppRecord
from capps.session import CappsSession
from capps.task_runner import ProgressTaskRunner, Task, TaskBatchRunner

logger = logging.getLogger(__name__)


class RemoteOperationError(Exception):
    """Raised when a control-plane operation fails for one app."""

    pass


@dataclass
class LifecycleResult:
    """Result from a lifecycle operation (stop/start) on one app."""

    app_name: str
    success: bool
    message: str
    operation: str  # 'stop', 'start'

    def __repr__(self) -> str:
        status = "SUCCESS" if self.success else "FAILED"
        return f"[{status}] {self.app_name}: {self.message}"


@dataclass
class LifecycleSummary:
    """Summary of a batch lifecycle operation."""

    total: int
    succeeded: int
    failed: int
    results: list[LifecycleResult]
    operation: str  # 'stop' or 'start'

    @property
    def all_succeeded(self) -> bool:
        """Check if all operations succeeded."""
        return self.failed == 0

    def get_failed_apps(self) -> list[str]:
        """Get list of apps that failed."""
        return [r.app_name for r in self.results if not r.success]

    def get_succeeded_apps(self) -> list[str]:
        """Get list of apps that succeeded."""
        return [r.app_name for r in self.results if r.success]


class ContainerAppLifecycleController:
    """Stop, start and restart Container Apps in batches."""

    OPERATIONS = {
        "stop": ("begin_stop", "Stopping", "stopped"),
        "start": ("begin_start", "Starting", "started"),
    }

    def __init__(
        self,
        session: CappsSession,
        enumerator: ContainerAppEnumerator | None = None,
        runner: TaskBatchRunner | None = None,
    ):
        self.session = session
        self.enumerator = enumerator or ContainerAppEnumerator(session)
        self.runner = runner or ProgressTaskRunner()

    def stop_apps(self, name_glob: str = "*", subscription_glob: str = "*") -> LifecycleSummary:
        """Stop every matching app and wait for all stops to finish."""
        return self._run_batch("stop", name_glob, subscription_glob)

    def start_apps(self, name_glob: str = "*", subscription_glob: str = "*") -> LifecycleSummary:
        """Start every matching app and wait for all starts to finish."""
        return self._run_batch("start", name_glob, subscription_glob)

    def restart_apps(
        self, name_glob: str = "*", subscription_glob: str = "*"
    ) -> list[LifecycleSummary]:
        """Stop every matching app, then start them once all stops are done.

        Returns:
            [stop summary, start summary]
        """
        stop_summary = self.stop_apps(name_glob, subscription_glob)
        start_summary = self.start_apps(name_glob, subscription_glob)
        return [stop_summary, start_summary]

    def _run_batch(
        self, operation: str, name_glob: str, subscription_glob: str
    ) -> LifecycleSummary:
        method_name, verb, past = self.OPERATIONS[operation]
        records = self.enumerator.list_apps(name_glob, subscription_glob)

        tasks = [
            Task(title=record.parts.name, action=self._make_action(record, method_name))
            for record in records
        ]

        click.echo(f"{verb} {len(tasks)} apps")
        logger.info(f"{verb} {len(tasks)} apps matching '{name_glob}'")
        outcomes = self.runner.run(tasks)

        results = []
        for outcome in outcomes:
            if outcome.success:
                message = f"App {past} successfully"
            else:
                message = str(outcome.error)
                logger.error(f"App {outcome.title}: {message}")
            results.append(
                LifecycleResult(
                    app_name=outcome.title,
                    success=outcome.success,
                    message=message,
                    operation=operation,
                )
            )

        succeeded = sum(1 for r in results if r.success)
        return LifecycleSummary(
            total=len(results),
            succeeded=succeeded,
            failed=len(results) - succeeded,
            results=results,
            operation=operation,
        )

    def _make_action(self, record: ContainerAppRecord, method_name: str):
        parts = record.parts
        client = self.session.get_client(record.subscription)
        begin = getattr(client.container_apps, method_name)

        def action():
            try:
                return begin(parts.resource_group_name, parts.name).result()
            except Exception as e:
                raise RemoteOperationError(
                    f"Failed to {method_name.removeprefix('begin_')} {parts.name}: {e}"
                ) from e

        return action


__all__ = [
    "ContainerAppLifecycleController",
    "LifecycleResult",
    "LifecycleSummary",
    "RemoteOperationError",
]
