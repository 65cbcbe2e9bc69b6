"""Credential factory for Azure authentication.

capps delegates authentication to the Azure CLI's logged-in session. One
AzureCliCredential is created per tenant so subscriptions living in
different tenants each get a token issued by their own tenant.

Security:
- No token storage - delegates to Azure Identity SDK
"""

import logging

from azure.identity import AzureCliCredential

logger = logging.getLogger(__name__)


class CredentialFactoryError(Exception):
    """Raised when credential creation fails."""

    pass


class CredentialFactory:
    """Create and reuse Azure CLI credentials keyed by tenant."""

    def __init__(self) -> None:
        self._credentials: dict[str | None, AzureCliCredential] = {}

    def get_credential(self, tenant_id: str | None = None) -> AzureCliCredential:
        """Get the Azure CLI credential for a tenant.

        Args:
            tenant_id: Tenant to request tokens from (None for the CLI default)

        Returns:
            AzureCliCredential: Credential that uses Azure CLI

        Raises:
            CredentialFactoryError: If the credential cannot be created
        """
        if tenant_id not in self._credentials:
            try:
                self._credentials[tenant_id] = AzureCliCredential(tenant_id=tenant_id or "")
            except Exception as e:
                raise CredentialFactoryError(
                    f"Failed to create Azure CLI credential. "
                    f"Is Azure CLI installed and authenticated? Error: {e}"
                ) from e
            logger.debug(f"Created Azure CLI credential for tenant {tenant_id or '<default>'}")
        return self._credentials[tenant_id]


__all__ = ["CredentialFactory", "CredentialFactoryError"]
