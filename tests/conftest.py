"""
Shared test fixtures and configuration for capps tests.

This module provides common fixtures used across all test types:
- Fake Container Apps SDK objects and clients
- Sample subscriptions as returned by `az account list`
- Sessions wired to fakes instead of Azure
"""

from io import StringIO
from types import SimpleNamespace
from unittest.mock import Mock

import pytest
from rich.console import Console

from capps.config_manager import CappsConfig
from capps.session import CappsSession
from capps.subscription_lister import Subscription
from fakes import PROD_SUB_ID, STAGING_SUB_ID, TENANT_ID, FakeContainerApps, make_app


@pytest.fixture
def events():
    """Shared ordered log of fake control-plane calls."""
    return []


@pytest.fixture
def raw_subscriptions():
    """Subscriptions as printed by `az account list --all --output json`."""
    return [
        {"id": PROD_SUB_ID, "name": "Prod", "tenantId": TENANT_ID, "state": "Enabled"},
        {"id": "33333333-3333-3333-3333-cccccccccccc", "name": "Test-Sandbox",
         "tenantId": TENANT_ID, "state": "Enabled"},
        {"id": STAGING_SUB_ID, "name": "Staging", "tenantId": TENANT_ID, "state": "Enabled"},
        {"id": "44444444-4444-4444-4444-dddddddddddd", "name": "Old",
         "tenantId": TENANT_ID, "state": "Disabled"},
    ]


@pytest.fixture
def subscriptions():
    """Filtered subscriptions in CLI order."""
    return [
        Subscription(PROD_SUB_ID, "Prod", PROD_SUB_ID, TENANT_ID, "Enabled"),
        Subscription(STAGING_SUB_ID, "Staging", STAGING_SUB_ID, TENANT_ID, "Enabled"),
    ]


@pytest.fixture
def fake_clients(events):
    """One fake client per subscription, keyed by subscription ID."""
    return {
        PROD_SUB_ID: SimpleNamespace(
            container_apps=FakeContainerApps(
                [
                    make_app("api-orders", images=["myacr.azurecr.io/team/orders:1.2"]),
                    make_app("worker-1", resource_group="jobs-rg", running_status="Stopped"),
                    make_app("api-users", images=["nginx:latest", "ghcr.io/acme/sidecar:3"]),
                ],
                events,
            )
        ),
        STAGING_SUB_ID: SimpleNamespace(
            container_apps=FakeContainerApps(
                [make_app("api-orders", subscription_id=STAGING_SUB_ID, resource_group="stg-rg")],
                events,
            )
        ),
    }


@pytest.fixture
def session(subscriptions, fake_clients):
    """Session wired to fake subscriptions and clients."""
    lister = Mock()
    lister.list_subscriptions.return_value = subscriptions
    credential_factory = Mock()
    return CappsSession(
        config=CappsConfig(),
        subscription_lister=lister,
        credential_factory=credential_factory,
        client_factory=lambda credential, subscription_id: fake_clients[subscription_id],
    )


@pytest.fixture
def quiet_console():
    """Rich console writing to an in-memory buffer."""
    return Console(file=StringIO(), width=200, force_terminal=False)
