# SPDX-License-Identifier: Apache-2.0

"""Reconciliation of inventory search results with the live current node.

The inventory may return a stale snapshot of the node running the helpers
(for instance before its latest attributes have been saved). The in-memory
record of the current node is authoritative and replaces that snapshot.
"""

from typing import Any, Callable, List, Mapping, Sequence

NodeRecord = Mapping[str, Any]


def by_hostname(record: NodeRecord) -> str:
    """Sort key ordering node records by hostname."""
    return str(record.get("hostname", ""))


def replace_current_node(
    search_results: Sequence[NodeRecord],
    current_node: NodeRecord,
    current_hostname: str,
) -> List[NodeRecord]:
    """Replace search results matching the current hostname with the live node.

    Args:
        search_results: Node records returned by the inventory
        current_node: Live record of the current node
        current_hostname: Hostname of the current node

    Returns:
        New list with matching records replaced, in input order
    """
    return [
        current_node if record.get("hostname") == current_hostname else record
        for record in search_results
    ]


def reconcile_nodes(
    search_results: Sequence[NodeRecord],
    current_node: NodeRecord,
    current_hostname: str,
    key: Callable[[NodeRecord], Any],
) -> List[NodeRecord]:
    """Merge the live current node into a list of inventory search results.

    Records whose hostname matches the current hostname are replaced by the
    current node. If there is no such record the current node is appended.

    Args:
        search_results: Node records returned by the inventory
        current_node: Live record of the current node
        current_hostname: Hostname of the current node
        key: Sort key for the result, e.g. by_hostname

    Returns:
        New sorted list of node records, never empty
    """
    if any(record.get("hostname") == current_hostname for record in search_results):
        results = replace_current_node(search_results, current_node, current_hostname)
    else:
        results = list(search_results) + [current_node]
    return sorted(results, key=key)
