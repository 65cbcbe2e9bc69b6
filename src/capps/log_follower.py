"""Follow the logs of a single Container App.

Resolves exactly one app from a glob, asking the user to pick by index when
several match, then hands the terminal to
`az containerapp logs show --follow` until the user presses Ctrl+C.
"""

import logging
from collections.abc import Callable

import click

from capps.app_display import ContainerAppDisplay
from capps.app_enumerator import ContainerAppEnumerator, ContainerAppRecord
from capps.azure_cli import stream_az
from capps.session import CappsSession

logger = logging.getLogger(__name__)


def build_log_command(record: ContainerAppRecord) -> list[str]:
    """Build the az arguments that stream an app's console logs."""
    parts = record.parts
    return [
        "containerapp",
        "logs",
        "show",
        "--name",
        parts.name,
        "--resource-group",
        parts.resource_group_name,
        "--subscription",
        parts.subscription_id,
        "--follow",
        "--format",
        "text",
    ]


class LogFollower:
    """Resolve one app and stream its logs."""

    def __init__(
        self,
        session: CappsSession,
        enumerator: ContainerAppEnumerator | None = None,
        display: ContainerAppDisplay | None = None,
        prompt: Callable[[str], str] = input,
    ):
        self.session = session
        self.enumerator = enumerator or ContainerAppEnumerator(session)
        self.display = display or ContainerAppDisplay()
        self.prompt = prompt

    def resolve_app(
        self, name_glob: str, subscription_glob: str = "*"
    ) -> ContainerAppRecord | None:
        """Pick the single app to follow.

        Returns:
            The selected app, or None when nothing matched or the selection was invalid
        """
        records = self.enumerator.list_apps(name_glob, subscription_glob)

        if not records:
            click.echo("No apps found")
            return None

        if len(records) == 1:
            return records[0]

        self.display.display(records, with_index=True)
        try:
            idx = int(self.prompt("Select app index: ").strip())
        except (ValueError, EOFError):
            idx = -1
        if not 0 <= idx < len(records):
            click.echo("Invalid index")
            return None
        return records[idx]

    def follow_logs(self, name_glob: str, subscription_glob: str = "*") -> int:
        """Stream logs for the app matching name_glob.

        Returns:
            Exit code of the log stream (0 when no stream was started)
        """
        record = self.resolve_app(name_glob, subscription_glob)
        if record is None:
            return 0

        logger.info(f"Following logs for {record.name}")
        return stream_az(build_log_command(record), az_command=self.session.config.az_command)


__all__ = ["LogFollower", "build_log_command"]
