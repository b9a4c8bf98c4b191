"""Options and per-instance state of the multipath discovery algorithm."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .address import Address
from .bound import Bound

__all__ = ["MdaOptions", "MdaData", "HELP_B"]

HELP_B = (
    "Multipath tracing  bound: an upper bound on the probability that multipath "
    "tracing will fail to find all of the paths (default 0.05) max_branch: the "
    "maximum number of branching points that can be encountered for the bound "
    "still to hold (default 5)"
)

_INT_MAX = 2**31 - 1


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must lie between {low} and {high} (got {value})")


@dataclass
class MdaOptions:
    """Options of a multipath discovery: confidence percentage and limits."""

    bound: int = 95
    max_branch: int = 5
    max_children: int = 128
    traceroute_options: Any = None

    def __post_init__(self) -> None:
        _check_range("bound", self.bound, 0, 100)
        _check_range("max_branch", self.max_branch, 1, _INT_MAX)
        _check_range("max_children", self.max_children, 1, _INT_MAX)

    def failure_probability(self) -> float:
        """Accepted probability of missing a path, derived from ``bound``."""
        return (100 - self.bound) / 100.0

    def make_bound(self) -> Bound:
        """Stopping-point table matching these options."""
        return Bound(self.failure_probability(), self.max_children, self.max_branch)


@dataclass
class MdaData:
    """State of one multipath discovery run."""

    dst_ip: Address
    bound: Bound
    options: MdaOptions = field(default_factory=MdaOptions)
    last_flow_id: int = 0

    @classmethod
    def from_options(cls, dst_ip: Address, options: MdaOptions | None = None) -> "MdaData":
        """Create the state for a run towards ``dst_ip``."""
        options = MdaOptions() if options is None else options
        return cls(dst_ip=dst_ip, bound=options.make_bound(), options=options)

    def next_flow_id(self) -> int:
        """Allocate and return a new flow identifier."""
        self.last_flow_id += 1
        return self.last_flow_id