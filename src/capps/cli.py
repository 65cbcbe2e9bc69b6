"""Command-line interface for capps.

Modes, in priority order when several flags are given:
    --logs  >  --stop  >  --start  >  --restart  >  --list (default)

Every mutating mode shows the matching apps first and asks for
confirmation; anything other than "y" cancels.
"""

import logging
import sys

import click
from azure.core.exceptions import AzureError

from capps import __version__
from capps.app_display import ContainerAppDisplay
from capps.app_enumerator import ContainerAppEnumerator
from capps.azure_cli import ExternalToolError
from capps.config_manager import ConfigError, ConfigManager
from capps.credential_factory import CredentialFactoryError
from capps.lifecycle_control import ContainerAppLifecycleController, LifecycleSummary
from capps.log_follower import LogFollower
from capps.resource_id import InvalidResourceIdError
from capps.session import CappsSession

logger = logging.getLogger(__name__)


def confirm(verb: str) -> bool:
    """Ask before a mutating operation. Only an exact "y" confirms."""
    try:
        answer = input(f"Are you sure you want to {verb} these apps? [y/N]: ")
    except EOFError:
        return False
    return answer == "y"


def _report(summaries: list[LifecycleSummary]) -> bool:
    """Print batch summaries, returning True when every operation succeeded."""
    all_ok = True
    for summary in summaries:
        click.echo(
            f"{summary.operation.capitalize()}: {summary.succeeded}/{summary.total} succeeded"
        )
        for result in summary.results:
            if not result.success:
                click.echo(f"  {result!r}", err=True)
        all_ok = all_ok and summary.all_succeeded
    return all_ok


@click.command(context_settings={"help_option_names": ["--help", "-h"]})
@click.option("--list", "-l", "list_mode", is_flag=True, help="List matching apps (default)")
@click.option("--stop", "-t", "stop_mode", is_flag=True, help="Stop matching apps")
@click.option("--start", "-s", "start_mode", is_flag=True, help="Start matching apps")
@click.option(
    "--restart", "-r", "restart_mode", is_flag=True, help="Stop, then start matching apps"
)
@click.option("--logs", "-fl", "logs_glob", metavar="GLOB", help="Follow logs of the matching app")
@click.option("--glob", "-g", "name_glob", metavar="PATTERN", help="App name filter [default: *]")
@click.option(
    "--tenant",
    "-te",
    "subscription_glob",
    metavar="PATTERN",
    help="Subscription name filter [default: *]",
)
@click.option("--config", help="Config file path", type=click.Path())
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.version_option(version=__version__)
def main(
    list_mode: bool,
    stop_mode: bool,
    start_mode: bool,
    restart_mode: bool,
    logs_glob: str | None,
    name_glob: str | None,
    subscription_glob: str | None,
    config: str | None,
    verbose: bool,
) -> None:
    """capps - list, start, stop and restart Azure Container Apps.

    Operates on every enabled subscription visible to the logged-in Azure
    CLI user, skipping subscriptions with "Test" in their name.

    \b
    Examples:
        capps                       List all apps
        capps -g 'api-*'            List apps whose name starts with api-
        capps --stop -g 'worker?'   Stop worker1, worker2, ...
        capps --restart -te 'Prod*' Restart every app in Prod subscriptions
        capps --logs 'api-*'        Follow logs, picking one app if several match

    \b
    CONFIGURATION:
        Config file: ~/.capps/config.toml
        Set defaults: default_glob, default_tenant, excluded_subscription_marker
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING, format="%(message)s"
    )

    try:
        settings = ConfigManager.load_config(config)
        name_glob = name_glob or settings.default_glob
        subscription_glob = subscription_glob or settings.default_tenant

        session = CappsSession(config=settings)
        enumerator = ContainerAppEnumerator(session)
        display = ContainerAppDisplay()

        if logs_glob is not None:
            exit_code = LogFollower(session, enumerator=enumerator, display=display).follow_logs(
                logs_glob, subscription_glob
            )
            if exit_code:
                sys.exit(exit_code)
            return

        if not (stop_mode or start_mode or restart_mode):
            display.display(enumerator.list_apps(name_glob, subscription_glob))
            return

        verb = "stop" if stop_mode else "start" if start_mode else "restart"
        display.display(enumerator.list_apps(name_glob, subscription_glob))
        if not confirm(verb):
            return

        controller = ContainerAppLifecycleController(session, enumerator=enumerator)
        if stop_mode:
            summaries = [controller.stop_apps(name_glob, subscription_glob)]
        elif start_mode:
            summaries = [controller.start_apps(name_glob, subscription_glob)]
        else:
            summaries = controller.restart_apps(name_glob, subscription_glob)

        if not _report(summaries):
            sys.exit(1)

    except (
        ConfigError,
        ExternalToolError,
        CredentialFactoryError,
        InvalidResourceIdError,
        AzureError,
    ) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nCancelled by user.")
        sys.exit(130)


__all__ = ["confirm", "main"]
