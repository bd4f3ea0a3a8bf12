# SPDX-License-Identifier: Apache-2.0

"""Helpers for BCPC node inventory lookups and configuration values."""

from bcpc.attributes import (
    HOSTNAME_MGMT_IP_ATTR_SRCH_KEYS,
    MGMT_IP_GRAPHITE_WEBPORT_ATTR_SRCH_KEYS,
    NOT_FOUND,
    extract_attributes,
    get_attribute,
)
from bcpc.reconcile import by_hostname, reconcile_nodes, replace_current_node
from bcpc.reverse_zone import compute_reverse_zone

__all__ = [
    "HOSTNAME_MGMT_IP_ATTR_SRCH_KEYS",
    "MGMT_IP_GRAPHITE_WEBPORT_ATTR_SRCH_KEYS",
    "NOT_FOUND",
    "by_hostname",
    "compute_reverse_zone",
    "extract_attributes",
    "get_attribute",
    "reconcile_nodes",
    "replace_current_node",
]
