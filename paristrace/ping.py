"""State of a ping run, its statistics and the lines it prints."""

from __future__ import annotations

from dataclasses import dataclass, field

from .ping_options import PingEventType, error_message

__all__ = ["PingData", "format_reply_line", "format_error_line"]


@dataclass
class PingData:
    """Counters and round-trip times gathered by a ping run.

    Times are in seconds; round-trip times are in milliseconds.
    """

    num_replies: int = 0
    num_losses: int = 0
    num_probes_in_flight: int = 0
    num_sent: int = 0
    start_time: float = 0.0
    last_time: float = 0.0
    rtt_results: list[float] = field(default_factory=list)

    def record_rtt(self, rtt: float) -> None:
        """Store a round-trip time (ms) for the final statistics."""
        self.rtt_results.append(float(rtt))

    def minimum(self) -> float:
        """Smallest round-trip time, 0 when none was recorded."""
        return min(self.rtt_results, default=0.0)

    def maximum(self) -> float:
        """Largest round-trip time, 0 when none was recorded."""
        return max(self.rtt_results, default=0.0)

    def mean(self) -> float:
        """Average round-trip time, 0 when none was recorded."""
        if not self.rtt_results:
            return 0.0
        return sum(self.rtt_results) / len(self.rtt_results)

    def mean_deviation(self) -> float:
        """Mean absolute deviation of the round-trip times, 0 when none was recorded."""
        if not self.rtt_results:
            return 0.0
        mean = self.mean()
        return sum(abs(rtt - mean) for rtt in self.rtt_results) / len(self.rtt_results)

    def loss_percent(self) -> int:
        """Whole percentage of probes lost, 0 when nothing was answered yet."""
        if not self.num_replies:
            return 0
        return self.num_losses * 100 // self.num_replies

    def format_statistics(self) -> str:
        """The summary printed when the run ends, as three lines."""
        elapsed_ms = int(1000 * (self.last_time - self.start_time))
        return "\n".join(
            (
                "---Ping statistics---",
                f"{self.num_replies} packets transmitted, "
                f"{self.num_replies - self.num_losses} received, "
                f"{self.loss_percent()}% packet loss, time {elapsed_ms}ms",
                f"rtt max/min/avg/mdev = {self.maximum():.3f}/{self.minimum():.3f}/"
                f"{self.mean():.3f}/{self.mean_deviation():.3f} ms",
            )
        )


def format_reply_line(
    size: int,
    host: object,
    seq: int,
    ttl: int | None,
    delay_ms: float,
    timestamp: float | None = None,
) -> str:
    """Line printed for a reply from the destination.

    ``host`` is the discovered address, possibly with its host name; a
    ``timestamp`` is printed first when given.
    """
    prefix = f"[{timestamp:f}] " if timestamp is not None else ""
    ttl_text = f"{ttl:2d}" if ttl is not None else ""
    return (
        f"{prefix}{size} bytes from {host}: seq={seq} ttl={ttl_text}"
        f" time={delay_ms:.2f} ms"
    )


def format_error_line(host: object, seq: int, event_type: PingEventType) -> str:
    """Line printed for a reply reporting an error instead of reaching the destination."""
    return f"From {host} : seq={seq}   {error_message(event_type)}"