# SPDX-License-Identifier: Apache-2.0

"""Reverse DNS zone calculation for IPv4 networks."""

import ipaddress

from loguru import logger

from bcpc.exceptions import InvalidAddress, InvalidNetmask

REVERSE_SUFFIX = "in-addr.arpa"
BITS_PER_LABEL = 8


def compute_reverse_zone(cidr: str) -> str:
    """Calculate the reverse DNS zone of an IPv4 CIDR block.

    The zone keeps one label per complete octet of the prefix, e.g. for
    192.168.100.0:

        /8  => 192.in-addr.arpa
        /16 => 168.192.in-addr.arpa
        /24 => 100.168.192.in-addr.arpa

    Prefixes that are not octet aligned are truncated, so /20 yields the
    same zone as /16.

    Args:
        cidr: Network in the form "a.b.c.d/n"

    Returns:
        Reverse zone name

    Raises:
        InvalidAddress: If the address portion is not a valid IPv4 address
        InvalidNetmask: If the netmask portion is missing, not a number,
            not positive or longer than 32 bits
    """
    address, _, netmask = cidr.partition("/")

    try:
        ip = ipaddress.IPv4Address(address)
    except ipaddress.AddressValueError as e:
        raise InvalidAddress(cidr) from e

    if not (netmask.isascii() and netmask.isdigit()):
        raise InvalidNetmask(cidr)
    prefixlen = int(netmask)
    if prefixlen <= 0 or prefixlen > ip.max_prefixlen:
        raise InvalidNetmask(cidr)

    labels = ip.reverse_pointer.split(".")
    drop = max(0, 4 - prefixlen // BITS_PER_LABEL)
    zone = ".".join(labels[drop:])

    logger.debug(f"Reverse zone for {cidr} is {zone}")
    return zone
