"""IP addresses, their textual forms and cached reverse DNS lookups."""

from __future__ import annotations

import socket
from dataclasses import dataclass
from enum import IntFlag

__all__ = [
    "AddressError",
    "CacheMode",
    "Address",
    "guess_family",
    "clear_hostname_cache",
]


class AddressError(ValueError):
    """Raised when an address cannot be built, parsed or converted."""


class CacheMode(IntFlag):
    """How :meth:`Address.resolve` uses the shared hostname cache."""

    DISABLED = 0
    WRITE = 1
    READ = 2
    ENABLED = READ | WRITE


_SIZES = {socket.AF_INET: 4, socket.AF_INET6: 16}

_hostname_cache: dict["Address", str] = {}


def _pack(family: int, text: str) -> bytes | None:
    try:
        return socket.inet_pton(family, text.split("%", 1)[0])
    except (OSError, ValueError):
        return None


@dataclass(frozen=True)
class Address:
    """An IPv4 or IPv6 address stored in binary (network order) form."""

    family: int
    ip: bytes

    def __post_init__(self) -> None:
        expected = _SIZES.get(self.family)
        if expected is None:
            raise AddressError(f"address family not supported (family = {self.family})")
        if len(self.ip) != expected:
            raise AddressError(
                f"an address of family {self.family} holds {expected} bytes, got {len(self.ip)}"
            )

    @classmethod
    def from_string(cls, family: int, hostname: str) -> "Address":
        """Build an address from an IP string or a host name of the given family."""
        if family not in _SIZES:
            raise AddressError(f"invalid family (family = {family})")

        packed = _pack(family, hostname)
        if packed is not None:
            return cls(family, packed)

        try:
            infos = socket.getaddrinfo(hostname, None, family)
        except (socket.gaierror, UnicodeError) as exc:
            raise AddressError(f"cannot resolve {hostname!r}: {exc}") from exc
        if not infos:
            raise AddressError(f"cannot resolve {hostname!r}: no result")

        chosen = next((info for info in infos if info[0] == family), infos[0])
        if chosen[0] != family:
            raise AddressError(f"{hostname!r} has no address of family {family}")
        packed = _pack(family, chosen[4][0])
        if packed is None:
            raise AddressError(f"unexpected address {chosen[4][0]!r} for {hostname!r}")
        return cls(family, packed)

    def size(self) -> int:
        """Size in bytes of the binary IP address."""
        return _SIZES[self.family]

    def compare(self, other: "Address") -> int:
        """Negative, zero or positive as self sorts before, with or after other.

        Addresses of different families are compared on their family only.
        """
        if self.family != other.family:
            return -1 if self.family < other.family else 1
        for mine, theirs in zip(self.ip, other.ip):
            if mine != theirs:
                return mine - theirs
        return 0

    def __str__(self) -> str:
        try:
            return socket.inet_ntop(self.family, self.ip)
        except (OSError, ValueError):
            return "???"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self.compare(other) < 0

    def resolve(self, cache_mode: CacheMode = CacheMode.ENABLED) -> str | None:
        """Return the host name of this address, or None if the lookup fails."""
        mode = CacheMode(cache_mode)
        if CacheMode.READ in mode:
            cached = _hostname_cache.get(self)
            if cached is not None:
                return cached

        try:
            hostname = socket.gethostbyaddr(str(self))[0]
        except (OSError, UnicodeError):
            return None

        if CacheMode.WRITE in mode:
            _hostname_cache[self] = hostname
        return hostname


def guess_family(text: str) -> int:
    """Return the family of the first address that ``text`` resolves to."""
    for family in _SIZES:
        if _pack(family, text) is not None:
            return family
    try:
        infos = socket.getaddrinfo(
            text, None, socket.AF_UNSPEC, socket.SOCK_DGRAM, 0, socket.AI_PASSIVE
        )
    except (socket.gaierror, UnicodeError) as exc:
        raise AddressError(f"Invalid address ({text}): {exc}") from exc
    if not infos:
        raise AddressError(f"Invalid address ({text}): no result")
    return infos[0][0]


def clear_hostname_cache() -> None:
    """Forget every cached reverse lookup."""
    _hostname_cache.clear()