"""Container App enumeration across subscriptions.

For every selected subscription whose name matches the subscription glob,
lists the Container Apps in that subscription and keeps the ones whose name
matches the app glob. Results keep subscription order, then the order the
API returned them in.

Pattern matching uses shell-style globs via fnmatch:
- *      any run of characters, including none
- ?      exactly one character
- [seq]  one character from seq

Example Usage:
    >>> enumerator = ContainerAppEnumerator(session)
    >>> for record in enumerator.list_apps("api-*", subscription_glob="Prod*"):
    ...     print(record.name, record.parts.resource_group_name)
"""

import logging
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Any

from capps.resource_id import ResourceIdParts, parse_container_app_id
from capps.session import CappsSession
from capps.subscription_lister import Subscription

logger = logging.getLogger(__name__)


class GlobMatcher:
    """Case-sensitive shell-style glob matching."""

    def match(self, pattern: str, name: str) -> bool:
        """Check whether name matches pattern."""
        return fnmatchcase(name, pattern)


@dataclass
class ContainerAppRecord:
    """A listed Container App and the subscription it was listed from."""

    app: Any
    subscription: Subscription

    @property
    def name(self) -> str:
        """App name, empty string if the API omitted it."""
        return self.app.name or ""

    @property
    def parts(self) -> ResourceIdParts:
        """Parsed resource ID.

        Raises:
            InvalidResourceIdError: If the app has no well-formed ID
        """
        return parse_container_app_id(self.app.id)


class ContainerAppEnumerator:
    """List Container Apps matching name and subscription globs."""

    def __init__(self, session: CappsSession, matcher: GlobMatcher | None = None):
        self.session = session
        self.matcher = matcher or GlobMatcher()

    def list_apps(
        self, name_glob: str = "*", subscription_glob: str = "*"
    ) -> list[ContainerAppRecord]:
        """List matching Container Apps.

        Args:
            name_glob: Glob applied to app names
            subscription_glob: Glob applied to subscription names

        Returns:
            Matching apps grouped by subscription, in listing order

        Raises:
            ExternalToolError: If subscriptions cannot be listed
        """
        records: list[ContainerAppRecord] = []

        for subscription in self.session.list_subscriptions():
            if not self.matcher.match(subscription_glob, subscription.name):
                logger.debug(f"Skipping subscription {subscription.name}")
                continue

            client = self.session.get_client(subscription)
            for app in client.container_apps.list_by_subscription():
                if not self.matcher.match(name_glob, app.name or ""):
                    continue
                records.append(ContainerAppRecord(app=app, subscription=subscription))

        logger.debug(f"Found {len(records)} apps matching '{name_glob}'")
        return records


__all__ = ["ContainerAppEnumerator", "ContainerAppRecord", "GlobMatcher"]
