"""Container App resource ID parsing.

Splits a fully-qualified Azure resource ID of the form

    /subscriptions/{sub}/resourceGroups/{rg}/providers/Microsoft.App/containerApps/{name}

into its subscription, resource group and app name. Matching is
case-insensitive because ARM returns the provider segments with mixed casing.
"""

import re
from dataclasses import dataclass

CONTAINER_APP_ID_PATTERN = re.compile(
    r"^/subscriptions/([^/\s]+)/resourceGroups/([^/\s]+)"
    r"/providers/Microsoft\.App/containerApps/([^/\s]+)$",
    re.IGNORECASE,
)


class InvalidResourceIdError(ValueError):
    """Raised when a string is not a Container App resource ID."""

    pass


@dataclass(frozen=True)
class ResourceIdParts:
    """Components of a Container App resource ID."""

    subscription_id: str
    resource_group_name: str
    name: str

    @property
    def short_subscription(self) -> str:
        """Last hyphen-delimited segment of the subscription ID."""
        return self.subscription_id.split("-")[-1]


def parse_container_app_id(resource_id: str | None) -> ResourceIdParts:
    """Parse a Container App resource ID.

    Args:
        resource_id: Resource ID as returned by the ARM API

    Returns:
        ResourceIdParts with the captured segments

    Raises:
        InvalidResourceIdError: If the ID does not match the expected layout
    """
    match = CONTAINER_APP_ID_PATTERN.fullmatch(resource_id or "")
    if not match:
        raise InvalidResourceIdError(f"Invalid Container App resource ID: {resource_id!r}")
    return ResourceIdParts(
        subscription_id=match.group(1),
        resource_group_name=match.group(2),
        name=match.group(3),
    )


__all__ = ["InvalidResourceIdError", "ResourceIdParts", "parse_container_app_id"]
