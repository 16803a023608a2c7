# iplog/processing/address_range.py

from __future__ import annotations
import ipaddress
from typing import Optional

from iplog.errors import ArgumentError, InvalidMaskError
from iplog.models import Address, AddressRange


def parse_address(text: str, flag: str = "address") -> Address:
    """
    Parse an IPv4 or IPv6 literal into its packed byte form.

    Raises ArgumentError naming `flag` when the literal is invalid.
    """
    try:
        return ipaddress.ip_address(text.strip()).packed
    except ValueError:
        raise ArgumentError(f"Invalid IP address format for {flag}: {text}") from None


def format_address(address: Address) -> str:
    return str(ipaddress.ip_address(address))


def max_address(width: int) -> Address:
    """All-ones address of the given byte width (255.255.255.255 for IPv4)."""
    return b"\xff" * width


def derive_end(start: Address, mask: Address) -> Address:
    """
    Upper bound of the block `start/mask`: end[i] = start[i] | ~mask[i].

    >>> format_address(derive_end(bytes([192, 168, 1, 10]), bytes([255, 255, 255, 0])))
    '192.168.1.255'
    """
    if len(mask) != len(start):
        raise InvalidMaskError(
            f"Mask length ({len(mask)} bytes) does not match address length ({len(start)} bytes)"
        )
    return bytes(s | (~m & 0xFF) for s, m in zip(start, mask))


def build_range(start: Address, mask: Optional[Address] = None) -> AddressRange:
    """Range from a start address and optional mask; no mask means up to all-ones."""
    end = derive_end(start, mask) if mask is not None else max_address(len(start))
    return AddressRange(start=start, end=end)


def contains(rng: AddressRange, candidate: Address) -> bool:
    """
    Byte-wise corridor test, most significant byte first.

    The lower bound applies only while every previous byte equalled start's,
    the upper bound only while every previous byte equalled end's. For
    addresses of equal width this agrees with big-endian integer comparison
    start <= candidate <= end; a width mismatch is never contained.
    """
    if len(candidate) != len(rng.start) or len(rng.end) != len(rng.start):
        return False

    lower_tight = upper_tight = True
    for value, low, high in zip(candidate, rng.start, rng.end):
        if not (lower_tight or upper_tight):
            break
        if lower_tight and value < low:
            return False
        if upper_tight and value > high:
            return False
        if value != low:
            lower_tight = False
        if value != high:
            upper_tight = False

    return True
