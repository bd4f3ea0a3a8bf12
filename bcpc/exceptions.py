# SPDX-License-Identifier: Apache-2.0

"""Custom exceptions for the BCPC helpers."""


class BcpcException(Exception):
    """Base exception for BCPC helper errors."""

    pass


class InvalidAddress(BcpcException, ValueError):
    """Raised when the address portion of a CIDR is not a valid IPv4 address."""

    def __init__(self, cidr: str):
        self.cidr = cidr
        super().__init__(f"Invalid IPv4 address in CIDR {cidr}")


class InvalidNetmask(BcpcException, ValueError):
    """Raised when the netmask portion of a CIDR is missing or unusable."""

    def __init__(self, cidr: str):
        self.cidr = cidr
        super().__init__(f"Couldn't find netmask portion of CIDR in {cidr}")


class MissingAttribute(BcpcException, KeyError):
    """Raised when a dotted attribute path does not resolve on a node record."""

    def __init__(self, path: str, segment: str, hostname=None):
        self.path = path
        self.segment = segment
        self.hostname = hostname
        where = f" on node {hostname}" if hostname else ""
        super().__init__(f"Attribute '{path}' not found{where} (at '{segment}')")

    def __str__(self) -> str:
        return self.args[0]


class ConfigStoreError(BcpcException):
    """Raised when the configuration store cannot be read or written."""

    pass


class ConfigValueNotFound(BcpcException):
    """Raised when a required configuration value is absent."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Failed to find value for {key}!")


class InventoryConnectionError(BcpcException):
    """Raised when connection to the inventory service fails."""

    pass


class InventoryAPIError(BcpcException):
    """Raised when the inventory service returns an error."""

    pass
