"""Subscription listing via the Azure CLI.

Enumerates every subscription visible to the logged-in Azure CLI user and
keeps the ones capps should operate on:
- id and tenantId present
- state exactly "Enabled"
- name not containing the excluded marker (default "Test")

The filtered list is fetched once per SubscriptionLister and reused for the
rest of the run.
"""

import logging
from dataclasses import dataclass
from typing import Any

from capps.azure_cli import DEFAULT_AZ_COMMAND, DEFAULT_TIMEOUT, ExternalToolError, run_az_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Subscription:
    """An Azure subscription as reported by `az account list`."""

    id: str
    name: str
    subscription_id: str
    tenant_id: str
    state: str

    @classmethod
    def from_cli(cls, data: dict[str, Any]) -> "Subscription":
        """Create from one entry of `az account list --output json`."""
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            subscription_id=data["id"],
            tenant_id=data["tenantId"],
            state=data.get("state") or "",
        )


def is_selectable(data: dict[str, Any], excluded_marker: str = "Test") -> bool:
    """Check whether a raw subscription entry should be operated on."""
    if not data.get("id") or not data.get("tenantId"):
        return False
    if data.get("state") != "Enabled":
        return False
    return not (excluded_marker and excluded_marker in (data.get("name") or ""))


class SubscriptionLister:
    """List enabled, non-test subscriptions, memoized after the first call."""

    def __init__(
        self,
        az_command: str = DEFAULT_AZ_COMMAND,
        timeout: int = DEFAULT_TIMEOUT,
        excluded_marker: str = "Test",
    ):
        self.az_command = az_command
        self.timeout = timeout
        self.excluded_marker = excluded_marker
        self._cached: list[Subscription] | None = None

    def list_subscriptions(self) -> list[Subscription]:
        """Get subscriptions to operate on.

        Returns:
            Filtered subscriptions in the order the CLI reported them

        Raises:
            ExternalToolError: If the Azure CLI fails or returns unexpected output
        """
        if self._cached is not None:
            return self._cached

        raw = run_az_json(
            ["account", "list", "--all", "--output", "json"],
            az_command=self.az_command,
            timeout=self.timeout,
        )
        if not isinstance(raw, list) or not all(isinstance(s, dict) for s in raw):
            raise ExternalToolError("Unexpected output from 'az account list': expected a list")

        subscriptions = [
            Subscription.from_cli(s) for s in raw if is_selectable(s, self.excluded_marker)
        ]
        logger.debug(f"Using {len(subscriptions)} of {len(raw)} subscriptions")

        self._cached = subscriptions
        return subscriptions


__all__ = ["Subscription", "SubscriptionLister", "is_selectable"]
