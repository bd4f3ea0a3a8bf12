# SPDX-License-Identifier: Apache-2.0

"""Projection of node records onto flat attribute dictionaries."""

from typing import Any, Dict, List, Mapping, Sequence

from loguru import logger

from bcpc.exceptions import MissingAttribute

# Search specifications map a key of the result record to a node attribute.
# Nested attributes are expressed as a dot separated path.
HOSTNAME_MGMT_IP_ATTR_SRCH_KEYS = {"hostname": "hostname", "mgmt_ip": "bcpc.management.ip"}
MGMT_IP_GRAPHITE_WEBPORT_ATTR_SRCH_KEYS = {
    "mgmt_ip": "bcpc.management.ip",
    "graphite_webport": "bcpc.graphite.web_port",
}


class _NotFound:
    """Marker for attribute paths that do not resolve."""

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


NOT_FOUND = _NotFound()


def _lookup(value: Any, segment: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(segment, NOT_FOUND)
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        try:
            return value[int(segment)]
        except (ValueError, IndexError):
            return NOT_FOUND
    return NOT_FOUND


def _resolve(record: Mapping[str, Any], path: str):
    value: Any = record
    for segment in path.split("."):
        value = _lookup(value, segment)
        if value is NOT_FOUND:
            return NOT_FOUND, segment
    return value, None


def get_attribute(record: Mapping[str, Any], path: str) -> Any:
    """Get a nested attribute of a node record.

    Args:
        record: Node record
        path: Dot separated attribute path, e.g. "bcpc.management.ip".
            Integer segments index into lists.

    Returns:
        The attribute value or NOT_FOUND if any segment does not resolve
    """
    value, _ = _resolve(record, path)
    return value


def extract_attributes(
    records: Sequence[Mapping[str, Any]], srch_keys: Mapping[str, str]
) -> List[Dict[str, Any]]:
    """Retrieve the requested attributes from a list of node records.

    Args:
        records: Node records
        srch_keys: Mapping of result key to attribute path, see
            HOSTNAME_MGMT_IP_ATTR_SRCH_KEYS

    Returns:
        One dictionary per record, in input order, e.g.
        [{"hostname": "node1", "mgmt_ip": "10.0.0.5"}, ...]

    Raises:
        MissingAttribute: If an attribute path does not resolve on a record
    """
    result = []
    for record in records:
        temp = {}
        for name, path in srch_keys.items():
            value, segment = _resolve(record, path)
            if value is NOT_FOUND:
                hostname = record.get("hostname") if isinstance(record, Mapping) else None
                logger.error(f"Attribute '{path}' missing on node {hostname}")
                raise MissingAttribute(path, segment, hostname)
            temp[name] = value
        result.append(temp)
    return result
