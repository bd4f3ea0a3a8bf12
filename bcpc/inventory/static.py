# SPDX-License-Identifier: Apache-2.0

"""Inventory of node records read from a YAML file."""

from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger
import yaml

from bcpc.exceptions import InventoryAPIError
from .base import BaseInventoryClient
from .query import NodeQuery


class StaticInventoryClient(BaseInventoryClient):
    """Serves node records from a YAML file.

    The file holds either a list of node records or a mapping with a
    "nodes" key containing that list.
    """

    def __init__(
        self, path: Optional[Path] = None, nodes: Optional[List[Dict[str, Any]]] = None
    ):
        self.path = Path(path) if path else None
        self._nodes = nodes

    @property
    def nodes(self) -> List[Dict[str, Any]]:
        if self._nodes is None:
            self._nodes = self._load()
        return self._nodes

    def _load(self) -> List[Dict[str, Any]]:
        if self.path is None:
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise InventoryAPIError(f"Inventory file {self.path} not found") from e
        except yaml.YAMLError as e:
            raise InventoryAPIError(
                f"Failed to parse inventory file {self.path}: {e}"
            ) from e

        if isinstance(data, dict):
            data = data.get("nodes")
        if data is None:
            data = []
        if not isinstance(data, list):
            raise InventoryAPIError(
                f"Inventory file {self.path} must contain a list of nodes"
            )

        logger.debug(f"Loaded {len(data)} nodes from {self.path}")
        return data

    def search(self, query: NodeQuery) -> List[Dict[str, Any]]:
        results = [node for node in self.nodes if query.matches(node)]
        logger.debug(f"Search '{query}' returned {len(results)} nodes")
        return results
