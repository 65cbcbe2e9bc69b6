"""Per-run session context.

A CappsSession bundles the collaborators every command needs: the
configuration, the memoized subscription list, the credential factory and
the Container Apps client factory. It is created once by the CLI and passed
to each component, so the subscription cache lives exactly as long as the
command run.
"""

import logging
from collections.abc import Callable
from typing import Any

from azure.mgmt.appcontainers import ContainerAppsAPIClient

from capps.config_manager import CappsConfig
from capps.credential_factory import CredentialFactory
from capps.subscription_lister import Subscription, SubscriptionLister

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Any, str], Any]


class CappsSession:
    """Shared state for one capps invocation."""

    def __init__(
        self,
        config: CappsConfig | None = None,
        subscription_lister: SubscriptionLister | None = None,
        credential_factory: CredentialFactory | None = None,
        client_factory: ClientFactory = ContainerAppsAPIClient,
    ):
        self.config = config or CappsConfig()
        self.subscription_lister = subscription_lister or SubscriptionLister(
            az_command=self.config.az_command,
            timeout=self.config.cli_timeout,
            excluded_marker=self.config.excluded_subscription_marker,
        )
        self.credential_factory = credential_factory or CredentialFactory()
        self.client_factory = client_factory
        self._clients: dict[str, Any] = {}

    def list_subscriptions(self) -> list[Subscription]:
        """Get the memoized subscription list."""
        return self.subscription_lister.list_subscriptions()

    def get_client(self, subscription: Subscription) -> Any:
        """Get a Container Apps management client for a subscription."""
        if subscription.subscription_id not in self._clients:
            credential = self.credential_factory.get_credential(subscription.tenant_id)
            logger.debug(f"Opening Container Apps client for {subscription.name}")
            self._clients[subscription.subscription_id] = self.client_factory(
                credential, subscription.subscription_id
            )
        return self._clients[subscription.subscription_id]


__all__ = ["CappsSession", "ClientFactory"]
