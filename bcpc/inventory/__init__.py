# SPDX-License-Identifier: Apache-2.0

"""Inventory search clients."""

from bcpc.config import Config
from .base import BaseInventoryClient
from .netbox_client import NetBoxInventoryClient
from .query import NodeQuery
from .static import StaticInventoryClient

__all__ = [
    "BaseInventoryClient",
    "NetBoxInventoryClient",
    "NodeQuery",
    "StaticInventoryClient",
    "create_inventory_client",
]


def create_inventory_client(config: Config) -> BaseInventoryClient:
    """Create the inventory client selected by the configuration."""
    if config.inventory_backend == "netbox":
        return NetBoxInventoryClient(config)
    return StaticInventoryClient(config.inventory_file)
