# paristrace

Building blocks for route discovery and ping tools: IP address handling
with cached reverse lookups, the options, ICMP reply classification,
statistics and output lines of a ping run, and the probe-count bound and
session state behind the Multipath Detection Algorithm (MDA).

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `paristrace.address`
  - `Address(family, ip)`: an IPv4 or IPv6 address held as packed bytes.
    `Address.from_string(family, hostname)` accepts a literal IP or a host
    name of the given family. Addresses can be compared with `compare`
    (different families are ordered by family only), sorted, and printed
    with `str()`. `size()` gives the byte length of the IP.
  - `Address.resolve(cache_mode)` returns the host name of the address, or
    `None` when the reverse lookup fails. `CacheMode` (`DISABLED`, `READ`,
    `WRITE`, `ENABLED`) controls use of a hostname cache shared by all
    addresses; `clear_hostname_cache()` empties it.
  - `guess_family(text)` returns `socket.AF_INET` or `socket.AF_INET6`.
  - Failures raise `AddressError` (a `ValueError`).
- `paristrace.bound`
  - `Bound(confidence, max_interfaces, max_branch)`: for each hypothesis
    `k` (a hop has `k` next hops), the number of probes to send before a
    `k`-th next hop can be ruled out, keeping the probability of missing
    one under the given graph-wide failure probability. `nk(k)` reads one
    value (0 beyond the table), `stopping_points()` lists them all,
    `build(end)` extends the table and `failure_lines()` gives the failure
    probability actually reached for each hypothesis.
  - `node_confidence(graph_confidence, max_branch)`: the failure
    probability allowed at one branching point.
- `paristrace.mda_data`
  - `MdaOptions(bound=95, max_branch=5, max_children=128)`: `bound` is a
    confidence percentage; `failure_probability()` and `make_bound()`
    derive the matching `Bound`.
  - `MdaData.from_options(dst_ip, options)`: state of one multipath run,
    with `next_flow_id()` handing out increasing flow identifiers.
- `paristrace.ping_options`
  - `PingOptions` (count, interval, TTL, quiet, timestamps, name
    resolution) and `default_ping_options()`.
  - `PingEventType`, `classify_icmp(version, icmp_type, code)` to turn an
    ICMPv4 or ICMPv6 error into the matching event, `error_message()` for
    its text, and `probes_to_schedule(timeout, interval, count)`.
- `paristrace.ping`
  - `PingData`: counters and round-trip times of a run, with `minimum`,
    `maximum`, `mean`, `mean_deviation`, `loss_percent` and
    `format_statistics()`.
  - `format_reply_line(...)` and `format_error_line(...)`: the lines
    printed for a reply and for an error.

## Command

Print the stopping points and the failure probability per hypothesis:

```
paristrace-bound [confidence] [interfaces] [max_branch]
```

The defaults are `0.05 16 1`.

## Examples

```python
import socket
from paristrace.address import Address

a = Address.from_string(socket.AF_INET, "192.0.2.1")
b = Address.from_string(socket.AF_INET, "192.0.2.7")
assert a < b
print(a)  # 192.0.2.1
```

```python
from paristrace.bound import Bound

bound = Bound(0.05, 16, 1)
probes_for_two_hops = bound.nk(2)
```

```python
from paristrace.ping import PingData

data = PingData(num_replies=3)
for rtt in (10.2, 11.0, 9.8):
    data.record_rtt(rtt)
print(data.format_statistics())
```

## What this package does not do

It opens no sockets and sends no probes: it has no ping or traceroute
command, no event loop and no packet crafting. It does not include a
traceroute state machine, nor the MDA bookkeeping of discovered
interfaces, their flows and links, or the printing of a multipath graph.
The only command is `paristrace-bound`.