"""Stopping points for multipath discovery with a bounded failure probability.

For each hypothesis ``k`` (a hop has ``k`` next hops) the table gives the
number of probes to send before ruling out that a ``k``-th next hop exists,
so that the probability of missing an interface stays under the confidence
assigned to one branching point.
"""

from __future__ import annotations

import argparse
import sys

__all__ = ["Bound", "node_confidence", "main"]

_HSTART = 2
"""The first two hypotheses (0 or 1 interface) are dummy states."""


def node_confidence(graph_confidence: float, max_branch: int) -> float:
    """Failure confidence required at each branching point.

    ``graph_confidence`` is the failure probability accepted for the whole
    graph and ``max_branch`` the number of branching points assumed.
    """
    if max_branch < 1:
        raise ValueError(f"max_branch must be at least 1 (got {max_branch})")
    return 1.0 - (1.0 - graph_confidence) ** (1.0 / max_branch)


class Bound:
    """Table of stopping points computed for hypotheses up to ``max_n``."""

    def __init__(self, confidence: float, max_interfaces: int, max_branch: int) -> None:
        if not 0.0 < confidence < 1.0:
            raise ValueError(f"confidence must lie in ]0, 1[ (got {confidence})")
        if max_interfaces < 0:
            raise ValueError(f"max_interfaces must be positive (got {max_interfaces})")

        self.confidence = node_confidence(confidence, max_branch)
        self.max_n = max_interfaces

        size = max(max_interfaces + 1, _HSTART)
        self.nk_table: list[int] = [0] * size
        self.pk_table: list[float] = [0.0] * size
        self.pr_failure: list[float] = [0.0] * size

        state_size = max(max_interfaces, _HSTART)
        self._first: list[float] = [0.0] * state_size
        self._second: list[float] = [0.0] * state_size

        self.build(self.max_n)

    def _grow(self, end: int) -> None:
        extra = end + 1 - len(self.nk_table)
        if extra > 0:
            self.nk_table.extend([0] * extra)
            self.pk_table.extend([0.0] * extra)
            self.pr_failure.extend([0.0] * extra)
        extra = end - len(self._first)
        if extra > 0:
            self._first.extend([0.0] * extra)
            self._second.extend([0.0] * extra)

    def _keeps_going(self, jstart: int, hypothesis: int, cur_state: float) -> bool:
        """Inverse of the stopping condition for the current hypothesis."""
        if jstart != hypothesis - 1:
            return True
        pr_sum = sum(self.pk_table[: jstart + 1])
        if pr_sum + cur_state <= self.confidence:
            self.pr_failure[hypothesis] = pr_sum + cur_state
            return False
        return True

    def build(self, end: int) -> None:
        """Compute stopping points; hypotheses beyond ``max_n`` extend the table."""
        hypothesis = _HSTART
        if end > self.max_n:
            self._grow(end)
            hypothesis = self.max_n + 1
            self.max_n = end

        nk = self.nk_table
        pk = self.pk_table
        first, second = self._first, self._second

        for h in range(hypothesis, self.max_n + 1):
            # A stopping point left over from an earlier build must not be
            # taken as a reached stopping point of this very hypothesis.
            nk[h] = 0
            for index in range(self.max_n):
                first[index] = 0.0
            second[0] = 0.0
            second[1] = 1.0
            cur_state = 1.0
            jstart = 2
            i = 1

            while self._keeps_going(jstart, h, cur_state):
                for j in range(jstart, h):
                    cur_state = first[j] * (j / h) + second[j - 1] * ((h - j + 1) / h)
                    if i + j - 1 == nk[j + 1]:
                        # Stopping point of a smaller hypothesis: unreachable state.
                        jstart = j + 1
                        second[j] = 0.0
                        first[j] = 0.0
                        pk[j + 1] = cur_state
                    else:
                        second[j] = cur_state
                if i == 1:
                    jstart = 1
                first, second = second, first
                i += 1

            # Probes sent at the last computed state (i - 1, h - 1).
            nk[h] = i + h - 3

        self._first, self._second = first, second

    def nk(self, k: int) -> int:
        """Number of probes to send under hypothesis ``k``; 0 beyond the table."""
        if 0 <= k <= self.max_n:
            return self.nk_table[k]
        return 0

    def stopping_points(self) -> list[int]:
        """Stopping points for every hypothesis from 0 to ``max_n``."""
        return [self.nk(k) for k in range(self.max_n + 1)]

    def failure_lines(self) -> list[str]:
        """Printable lines giving the actual failure probability per hypothesis."""
        lines = ["Expected failure:"]
        lines.extend(f"{k} - {self.pr_failure[k]:.6f}" for k in range(self.max_n + 1))
        return lines


def main(argv: list[str] | None = None) -> int:
    """Print the stopping points and failure probabilities of a bound."""
    parser = argparse.ArgumentParser(description="Print multipath stopping points.")
    parser.add_argument("confidence", nargs="?", type=float, default=0.05)
    parser.add_argument("interfaces", nargs="?", type=int, default=16)
    parser.add_argument("max_branch", nargs="?", type=int, default=1)
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    try:
        bound = Bound(args.confidence, args.interfaces, args.max_branch)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    for k, points in enumerate(bound.stopping_points()):
        print(f"{k} - {points}")
    for line in bound.failure_lines():
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())