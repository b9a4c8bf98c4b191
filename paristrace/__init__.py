"""Address handling, ping statistics and ICMP classification, and the MDA probe-count bound."""

__version__ = "0.1.0"