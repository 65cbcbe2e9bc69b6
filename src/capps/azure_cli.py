"""Azure CLI invocation helpers.

Provides a single place where capps shells out to the Azure CLI:
- run_az_json: run an `az` command and parse its JSON output
- stream_az: run an `az` command attached to the current terminal

Every failure mode of the CLI (not installed, not logged in, timed out,
non-JSON output) is surfaced as ExternalToolError.

Security:
- No shell=True
- Arguments passed as a list
"""

import json
import logging
import subprocess
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_AZ_COMMAND = "az"
DEFAULT_TIMEOUT = 60


class ExternalToolError(Exception):
    """Raised when the Azure CLI is missing, unauthenticated, or misbehaves."""

    pass


def run_az_json(
    args: list[str],
    az_command: str = DEFAULT_AZ_COMMAND,
    timeout: int = DEFAULT_TIMEOUT,
) -> Any:
    """Run an Azure CLI command and return its parsed JSON output.

    Args:
        args: Arguments after the `az` executable, e.g. ["account", "list"]
        az_command: Azure CLI executable name or path
        timeout: Subprocess timeout in seconds

    Returns:
        Decoded JSON value

    Raises:
        ExternalToolError: If the command cannot run, fails, or prints non-JSON
    """
    cmd = [az_command, *args]
    logger.debug(f"Running: {' '.join(cmd)}")

    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout, check=True)
    except FileNotFoundError as e:
        raise ExternalToolError(
            f"Azure CLI '{az_command}' not found. Install it and run 'az login'."
        ) from e
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        if "az login" in stderr:
            raise ExternalToolError(
                f"Azure CLI is not logged in. Run 'az login'. ({stderr})"
            ) from e
        raise ExternalToolError(f"Azure CLI command failed: {stderr or e}") from e
    except subprocess.TimeoutExpired as e:
        raise ExternalToolError(f"Azure CLI command timed out after {timeout}s") from e

    try:
        return json.loads(result.stdout)
    except json.JSONDecodeError as e:
        raise ExternalToolError("Failed to parse Azure CLI output as JSON") from e


def stream_az(args: list[str], az_command: str = DEFAULT_AZ_COMMAND) -> int:
    """Run an Azure CLI command with output streamed to the terminal.

    Blocks until the command exits or the user presses Ctrl+C.

    Returns:
        Process exit code (130 on KeyboardInterrupt)

    Raises:
        ExternalToolError: If the Azure CLI executable cannot be started
    """
    cmd = [az_command, *args]
    logger.debug(f"Streaming: {' '.join(cmd)}")

    try:
        process = subprocess.Popen(cmd, text=True)
    except FileNotFoundError as e:
        raise ExternalToolError(
            f"Azure CLI '{az_command}' not found. Install it and run 'az login'."
        ) from e

    try:
        return process.wait()
    except KeyboardInterrupt:
        process.terminate()
        process.wait()
        return 130


__all__ = ["DEFAULT_AZ_COMMAND", "DEFAULT_TIMEOUT", "ExternalToolError", "run_az_json", "stream_az"]
