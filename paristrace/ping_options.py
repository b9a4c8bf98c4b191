"""Options, event types and reply classification of the ping algorithm."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from .address import Address

__all__ = [
    "MAX_TTL_DEFAULT",
    "PACKET_SIZE_DEFAULT",
    "SHOW_TIMESTAMP_DEFAULT",
    "IS_QUIET_DEFAULT",
    "COUNT_DEFAULT",
    "DO_RESOLV_DEFAULT",
    "INTERVAL_DEFAULT",
    "FLOW_LABEL_MAX",
    "HELP",
    "PingEventType",
    "PingOptions",
    "default_ping_options",
    "classify_icmp",
    "error_message",
    "probes_to_schedule",
]

_INT_MAX = 2**31 - 1

MAX_TTL_DEFAULT = 255
PACKET_SIZE_DEFAULT = 56
SHOW_TIMESTAMP_DEFAULT = False
IS_QUIET_DEFAULT = False
COUNT_DEFAULT = _INT_MAX
DO_RESOLV_DEFAULT = True
INTERVAL_DEFAULT = 1.0

FLOW_LABEL_MAX = 1 << 20

HELP = {
    "c": "Stop after sending count ECHO_REQUEST packets. With deadline option, "
    "ping waits for 'count' ECHO_REPLY packets, until the timeout expires.",
    "D": "Print timestamp (unix time + microseconds as in gettimeofday) before each line.",
    "n": "Do not resolve IP addresses to their domain names.",
    "q": "Quiet output. Nothing is displayed except the summary lines at startup "
    "time and when finished.",
    "v": "Verbose output.",
    "t": "Set the IP Time to Live.",
}

# ICMPv4 types and codes.
_ICMP_UNREACH = 3
_ICMP_UNREACH_NET = 0
_ICMP_UNREACH_HOST = 1
_ICMP_UNREACH_PROTOCOL = 2
_ICMP_UNREACH_PORT = 3
_ICMP_REDIRECT = 5
_ICMP_REDIRECT_NET = 0
_ICMP_TIMXCEED = 11
_ICMP_TIMXCEED_INTRANS = 0
_ICMP_TIMXCEED_REASS = 1
_ICMP_PARAMPROB = 12

# ICMPv6 types and codes.
_ICMP6_DST_UNREACH = 1
_ICMP6_DST_UNREACH_NOROUTE = 0
_ICMP6_DST_UNREACH_ADDR = 3
_ICMP6_DST_UNREACH_NOPORT = 4
_ICMP6_TIME_EXCEEDED = 3
_ICMP6_TIME_EXCEED_TRANSIT = 0
_ICMP6_TIME_EXCEED_REASSEMBLY = 1
_ICMP6_PARAM_PROB = 4
_ICMP6_PARAMPROB_HEADER = 0
_ICMP6_PARAMPROB_NEXTHEADER = 1
_ICMP6_PARAMPROB_OPTION = 2
_ND_REDIRECT = 137


class PingEventType(Enum):
    """Events raised by a ping run towards its caller."""

    PROBE_REPLY = 0
    PRINT_STATISTICS = 1
    DST_NET_UNREACHABLE = 2
    DST_HOST_UNREACHABLE = 3
    DST_PROT_UNREACHABLE = 4
    DST_PORT_UNREACHABLE = 5
    TTL_EXCEEDED_TRANSIT = 6
    TIME_EXCEEDED_REASSEMBLY = 7
    REDIRECT = 8
    PARAMETER_PROBLEM = 9
    GEN_ERROR = 10
    TIMEOUT = 11
    ALL_PROBES_SENT = 12


@dataclass
class PingOptions:
    """Parameters of a ping run."""

    max_ttl: int = MAX_TTL_DEFAULT
    count: int = COUNT_DEFAULT
    dst_addr: Address | None = None
    do_resolv: bool = DO_RESOLV_DEFAULT
    interval: float = INTERVAL_DEFAULT
    is_quiet: bool = IS_QUIET_DEFAULT
    show_timestamp: bool = SHOW_TIMESTAMP_DEFAULT

    def __post_init__(self) -> None:
        if not 1 <= self.max_ttl <= 255:
            raise ValueError(f"max_ttl must lie between 1 and 255 (got {self.max_ttl})")
        if not 1 <= self.count <= COUNT_DEFAULT:
            raise ValueError(
                f"count must lie between 1 and {COUNT_DEFAULT} (got {self.count})"
            )
        if self.interval <= 0:
            raise ValueError(f"interval must be positive (got {self.interval})")


def default_ping_options() -> PingOptions:
    """A fresh set of default ping options."""
    return PingOptions()


def _net_unreachable(version: int, icmp_type: int, code: int) -> bool:
    if version == 4:
        return icmp_type == _ICMP_UNREACH and code == _ICMP_UNREACH_HOST
    if version == 6:
        return icmp_type == _ICMP6_DST_UNREACH and code == _ICMP6_DST_UNREACH_ADDR
    return False


def _host_unreachable(version: int, icmp_type: int, code: int) -> bool:
    if version == 4:
        return icmp_type == _ICMP_UNREACH and code == _ICMP_UNREACH_NET
    return icmp_type == _ICMP6_DST_UNREACH and code == _ICMP6_DST_UNREACH_NOROUTE


def _protocol_unreachable(version: int, icmp_type: int, code: int) -> bool:
    if version == 4:
        return icmp_type == _ICMP_UNREACH and code == _ICMP_UNREACH_PROTOCOL
    return icmp_type == _ICMP6_PARAM_PROB and code == _ICMP6_PARAMPROB_NEXTHEADER


def _port_unreachable(version: int, icmp_type: int, code: int) -> bool:
    if version == 4:
        return icmp_type == _ICMP_UNREACH and code == _ICMP_UNREACH_PORT
    return icmp_type == _ICMP6_DST_UNREACH and code == _ICMP6_DST_UNREACH_NOPORT


def _ttl_exceeded(version: int, icmp_type: int, code: int) -> bool:
    if version == 4:
        return icmp_type == _ICMP_TIMXCEED and code == _ICMP_TIMXCEED_INTRANS
    return icmp_type == _ICMP6_TIME_EXCEEDED and code == _ICMP6_TIME_EXCEED_TRANSIT


def _reassembly_exceeded(version: int, icmp_type: int, code: int) -> bool:
    if version == 4:
        return icmp_type == _ICMP_TIMXCEED and code == _ICMP_TIMXCEED_REASS
    return icmp_type == _ICMP6_TIME_EXCEEDED and code == _ICMP6_TIME_EXCEED_REASSEMBLY


def _redirect(version: int, icmp_type: int, code: int) -> bool:
    if version == 4:
        return icmp_type == _ICMP_REDIRECT and code == _ICMP_REDIRECT_NET
    return icmp_type == _ND_REDIRECT


def _parameter_problem(version: int, icmp_type: int, code: int) -> bool:
    if version == 4:
        return icmp_type == _ICMP_PARAMPROB
    return icmp_type == _ICMP6_PARAM_PROB and code in (
        _ICMP6_PARAMPROB_HEADER,
        _ICMP6_PARAMPROB_OPTION,
    )


_CHECKS = (
    (_net_unreachable, PingEventType.DST_NET_UNREACHABLE),
    (_host_unreachable, PingEventType.DST_HOST_UNREACHABLE),
    (_protocol_unreachable, PingEventType.DST_PROT_UNREACHABLE),
    (_port_unreachable, PingEventType.DST_PORT_UNREACHABLE),
    (_ttl_exceeded, PingEventType.TTL_EXCEEDED_TRANSIT),
    (_reassembly_exceeded, PingEventType.TIME_EXCEEDED_REASSEMBLY),
    (_redirect, PingEventType.REDIRECT),
    (_parameter_problem, PingEventType.PARAMETER_PROBLEM),
)


def classify_icmp(version: int, icmp_type: int, code: int) -> PingEventType:
    """Event raised for a reply that did not come from the destination.

    The IP version, ICMP type and code of the reply are checked against each
    known error in turn; a reply matching none of them is a generic error.
    """
    for check, event_type in _CHECKS:
        if check(version, icmp_type, code):
            return event_type
    return PingEventType.GEN_ERROR


_ERROR_MESSAGES = {
    PingEventType.DST_NET_UNREACHABLE: "network unreachable",
    PingEventType.DST_HOST_UNREACHABLE: "host unreachable",
    PingEventType.DST_PROT_UNREACHABLE: "protocol unreachable",
    PingEventType.DST_PORT_UNREACHABLE: "port unreachable",
    PingEventType.TTL_EXCEEDED_TRANSIT: "ttl exceeded in transit",
    PingEventType.TIME_EXCEEDED_REASSEMBLY: "fragment reassembly time exeeded",
    PingEventType.REDIRECT: "redirect",
    PingEventType.PARAMETER_PROBLEM: "parameter problem",
    PingEventType.GEN_ERROR: "packet has not reached its destination",
}


def error_message(event_type: PingEventType) -> str:
    """Text printed for an error event."""
    return _ERROR_MESSAGES.get(event_type, "internal error: unhandled error code")


def probes_to_schedule(timeout: float, interval: float, count: int) -> int:
    """Number of probes to send at start so that no more are in flight than a timeout covers."""
    if interval <= 0:
        raise ValueError(f"interval must be positive (got {interval})")
    return int(min(math.ceil(timeout / interval), count))