# SPDX-License-Identifier: Apache-2.0

"""Inventory search backed by NetBox devices."""

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from loguru import logger

from bcpc.config import Config
from bcpc.exceptions import InventoryAPIError
from .base import BaseInventoryClient
from .connection import ConnectionManager
from .query import NodeQuery

ENVIRONMENT_FIELD = "chef_environment"
RECIPE_TAG_PREFIX = "recipe-"


def device_to_node(device: Any) -> Dict[str, Any]:
    """Convert a NetBox device into a node record.

    The device config context provides the node attributes. Recipes are
    taken from tags whose slug starts with "recipe-", using the tag name
    (e.g. "bcpc::ceph-work").

    Args:
        device: NetBox device object

    Returns:
        Node record
    """
    node = dict(device.config_context or {})
    custom_fields = device.custom_fields or {}
    tags = device.tags or []

    node["hostname"] = device.name
    node["chef_environment"] = custom_fields.get(ENVIRONMENT_FIELD)
    # NetBox releases before 4.0 name the attribute device_role
    role = getattr(device, "role", None) or getattr(device, "device_role", None)
    node["roles"] = [role.name] if role else []
    node["recipes"] = [
        tag.name for tag in tags if tag.slug.startswith(RECIPE_TAG_PREFIX)
    ]
    return node


class NetBoxInventoryClient(BaseInventoryClient):
    """Searches node records in NetBox."""

    def __init__(self, config: Config, connection_manager: Optional[ConnectionManager] = None):
        self.config = config
        self._connection_manager = connection_manager or ConnectionManager(config)
        self.api = None
        self._connected = False

    def connect(self) -> None:
        """Establish connection to NetBox."""
        self.api = self._connection_manager.connect()
        self._connected = True

    def disconnect(self) -> None:
        """Close connection to NetBox."""
        self._connection_manager.disconnect()
        self._connected = False
        self.api = None

    @contextmanager
    def api_operation(self, operation_name: str):
        """Context manager for API operations with error handling.

        Args:
            operation_name: Name of the operation for logging

        Raises:
            InventoryAPIError: If API operation fails
        """
        if not self._connected:
            self.connect()

        try:
            logger.debug(f"Starting {operation_name}")
            yield
            logger.debug(f"Completed {operation_name}")
        except Exception as e:
            logger.error(f"Failed {operation_name}: {e}")
            raise InventoryAPIError(f"Failed {operation_name}: {e}") from e

    def search(self, query: NodeQuery) -> List[Dict[str, Any]]:
        with self.api_operation(f"search '{query}'"):
            devices = self.api.dcim.devices.filter(
                **{f"cf_{ENVIRONMENT_FIELD}": query.environment}
            )
            nodes = [device_to_node(device) for device in devices]
            results = [node for node in nodes if query.matches(node)]
            logger.debug(f"Search '{query}' returned {len(results)} nodes")
            return results

    def close(self) -> None:
        if self._connected:
            self.disconnect()
