# SPDX-License-Identifier: Apache-2.0

"""Node lookups and configuration access for BCPC recipes."""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence
from urllib.parse import urlparse

from loguru import logger

from bcpc.attributes import extract_attributes
from bcpc.config import Config
from bcpc.config_store import ConfigStore, ConfigValue
from bcpc.current_node import CurrentNode
from bcpc.inventory import BaseInventoryClient, NodeQuery
from bcpc.keys import join_host
from bcpc.reconcile import by_hostname, reconcile_nodes, replace_current_node

HEADNODE_ROLE = "BCPC-Headnode"
CEPH_OSD_RECIPE = "ceph-work"
DEFAULT_COOKBOOK = "bcpc"


class NodeHelper:
    """Helper functions bound to the current node.

    Args:
        config: Helper configuration
        inventory: Inventory search client
        current_node: Live record of the node running the helpers
        config_store: Store for named configuration values, built from
            the configuration on first use when not given
    """

    def __init__(
        self,
        config: Config,
        inventory: BaseInventoryClient,
        current_node: CurrentNode,
        config_store: Optional[ConfigStore] = None,
    ):
        self.config = config
        self.inventory = inventory
        self.node = current_node
        self._config_store = config_store

    @property
    def config_store(self) -> ConfigStore:
        if self._config_store is None:
            self._config_store = ConfigStore.from_config(self.config)
        return self._config_store

    @property
    def environment(self) -> str:
        return self.node.chef_environment or self.config.environment

    def _search(self, **kwargs) -> List[Dict[str, Any]]:
        query = NodeQuery(environment=self.environment, **kwargs)
        logger.debug(f"Searching nodes with '{query}'")
        return self.inventory.search(query)

    def _reconcile(self, results: Sequence[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
        return reconcile_nodes(
            results, self.node.record, self.node.hostname, key=by_hostname
        )

    # Configuration values

    def make_config(self, key: str, value: Any) -> Any:
        return self.config_store.make_config(key, value)

    def get_config(self, key: str) -> ConfigValue:
        return self.config_store.get_config(key)

    def require_config(self, key: str) -> Any:
        return self.config_store.require_config(key)

    # Node searches

    def get_all_nodes(self) -> List[Mapping[str, Any]]:
        """Get all nodes of this environment."""
        return self._reconcile(self._search())

    def get_ceph_osd_nodes(self) -> List[Mapping[str, Any]]:
        """Get all nodes running the Ceph OSD recipe."""
        return self._reconcile(
            self._search(recipe=CEPH_OSD_RECIPE, cookbook=DEFAULT_COOKBOOK)
        )

    def get_head_nodes(self) -> List[Mapping[str, Any]]:
        """Get all head nodes.

        The current node is only added when the search finds no head node
        at all, which happens on the first run of the first head node.
        """
        results = replace_current_node(
            self._search(role=HEADNODE_ROLE), self.node.record, self.node.hostname
        )
        if not results:
            return [self.node.record]
        return sorted(results, key=by_hostname)

    def get_nodes_for(
        self, recipe: str, cookbook: str = DEFAULT_COOKBOOK
    ) -> List[Mapping[str, Any]]:
        """Get all nodes running cookbook::recipe.

        The current node is included if its run list contains the recipe,
        even when the inventory does not know about it yet.
        """
        results = replace_current_node(
            self._search(recipe=recipe, cookbook=cookbook),
            self.node.record,
            self.node.hostname,
        )
        present = any(r.get("hostname") == self.node.hostname for r in results)
        if self.node.has_recipe(f"{cookbook}::{recipe}") and not present:
            results.append(self.node.record)
        return sorted(results, key=by_hostname)

    def get_node_attributes(
        self, srch_keys: Mapping[str, str], recipe: str, cookbook: str = DEFAULT_COOKBOOK
    ) -> List[Dict[str, Any]]:
        """Get attributes of all nodes running cookbook::recipe."""
        return self.get_req_node_attributes(self.get_nodes_for(recipe, cookbook), srch_keys)

    @staticmethod
    def get_req_node_attributes(
        nodes: Sequence[Mapping[str, Any]], srch_keys: Mapping[str, str]
    ) -> List[Dict[str, Any]]:
        return extract_attributes(nodes, srch_keys)

    def get_cached_head_node_names(self) -> List[str]:
        """Read the head node names cached on this host.

        Returns:
            Sorted names, empty on the first run when the file is missing
        """
        return read_head_node_names(self.config.headnodes_file)

    # Host names and URLs

    def get_binary_server_url(self) -> str:
        if self.config.binary_server_url:
            return self.config.binary_server_url
        return f"http://{urlparse(self.config.chef_server_url).hostname}/"

    def _has_floating_ip(self) -> bool:
        return self.node.management_ip != self.node.floating_ip

    def float_host(self, *parts: str) -> str:
        return join_host("f-" if self._has_floating_ip() else "", *parts)

    def storage_host(self, *parts: str) -> str:
        return join_host("s-" if self._has_floating_ip() else "", *parts)


def read_head_node_names(path: Path) -> List[str]:
    headnodes = []
    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#"):
                    headnodes.append(line)
    except FileNotFoundError:
        logger.debug(f"{path} does not exist, assuming first run")
    return sorted(headnodes)
