import socket
from unittest.mock import patch

import pytest

from paristrace.address import (
    Address,
    AddressError,
    CacheMode,
    clear_hostname_cache,
    guess_family,
)


@pytest.fixture(autouse=True)
def _empty_cache():
    clear_hostname_cache()
    yield
    clear_hostname_cache()


def test_ipv4_from_string_round_trip():
    addr = Address.from_string(socket.AF_INET, "192.0.2.1")
    assert addr.family == socket.AF_INET
    assert addr.ip == socket.inet_pton(socket.AF_INET, "192.0.2.1")
    assert str(addr) == "192.0.2.1"


def test_ipv6_from_string_round_trip():
    addr = Address.from_string(socket.AF_INET6, "2001:db8::1")
    assert addr.family == socket.AF_INET6
    assert str(addr) == "2001:db8::1"


def test_sizes_follow_family():
    assert Address.from_string(socket.AF_INET, "10.0.0.1").size() == 4
    assert Address.from_string(socket.AF_INET6, "::1").size() == 16


def test_size_matches_stored_bytes():
    for family, text in [(socket.AF_INET, "203.0.113.9"), (socket.AF_INET6, "fe80::2")]:
        addr = Address.from_string(family, text)
        assert addr.size() == len(addr.ip)


def test_compare_equal_and_order():
    a = Address.from_string(socket.AF_INET, "10.0.0.1")
    b = Address.from_string(socket.AF_INET, "10.0.0.2")
    same = Address.from_string(socket.AF_INET, "10.0.0.1")
    assert a.compare(same) == 0
    assert a.compare(b) < 0
    assert b.compare(a) > 0
    assert a < b
    assert not b < a
    assert a == same


def test_compare_different_families_uses_family_only():
    v4 = Address.from_string(socket.AF_INET, "255.255.255.255")
    v6 = Address.from_string(socket.AF_INET6, "::")
    expected = -1 if socket.AF_INET < socket.AF_INET6 else 1
    assert v4.compare(v6) == expected
    assert v6.compare(v4) == -expected


def test_sorting_uses_compare():
    texts = ["10.0.0.3", "10.0.0.1", "10.0.0.2"]
    addrs = [Address.from_string(socket.AF_INET, t) for t in texts]
    assert [str(a) for a in sorted(addrs)] == sorted(texts)


def test_invalid_family_rejected():
    with pytest.raises(AddressError):
        Address.from_string(socket.AF_UNIX, "10.0.0.1")


def test_wrong_length_rejected():
    with pytest.raises(AddressError):
        Address(socket.AF_INET, b"\x01\x02\x03")


def test_lookup_failure_raises():
    with patch("socket.getaddrinfo", side_effect=socket.gaierror("no such host")):
        with pytest.raises(AddressError):
            Address.from_string(socket.AF_INET, "nowhere.example.com")


def test_hostname_picks_first_result_of_family():
    results = [
        (socket.AF_INET6, socket.SOCK_STREAM, 0, "", ("2001:db8::5", 0, 0, 0)),
        (socket.AF_INET, socket.SOCK_STREAM, 0, "", ("198.51.100.7", 0)),
    ]
    with patch("socket.getaddrinfo", return_value=results):
        addr = Address.from_string(socket.AF_INET, "host.example.com")
    assert str(addr) == "198.51.100.7"


def test_guess_family_numeric():
    assert guess_family("192.0.2.33") == socket.AF_INET
    assert guess_family("2001:db8::33") == socket.AF_INET6


def test_guess_family_failure():
    with patch("socket.getaddrinfo", side_effect=socket.gaierror("bad")):
        with pytest.raises(AddressError):
            guess_family("not-an-address.example.com")


def test_resolve_returns_hostname():
    addr = Address.from_string(socket.AF_INET, "192.0.2.50")
    with patch("socket.gethostbyaddr", return_value=("router.example.com", [], [])):
        assert addr.resolve(CacheMode.DISABLED) == "router.example.com"


def test_resolve_failure_returns_none():
    addr = Address.from_string(socket.AF_INET, "192.0.2.51")
    with patch("socket.gethostbyaddr", side_effect=socket.herror("unknown")):
        assert addr.resolve(CacheMode.ENABLED) is None


def test_resolve_cache_is_read_back():
    addr = Address.from_string(socket.AF_INET, "192.0.2.52")
    with patch("socket.gethostbyaddr", return_value=("cached.example.com", [], [])):
        assert addr.resolve(CacheMode.ENABLED) == "cached.example.com"
    with patch("socket.gethostbyaddr", side_effect=socket.herror("down")):
        assert addr.resolve(CacheMode.READ) == "cached.example.com"
        assert addr.resolve(CacheMode.DISABLED) is None


def test_resolve_without_write_does_not_cache():
    addr = Address.from_string(socket.AF_INET, "192.0.2.53")
    with patch("socket.gethostbyaddr", return_value=("once.example.com", [], [])):
        assert addr.resolve(CacheMode.READ) == "once.example.com"
    with patch("socket.gethostbyaddr", side_effect=socket.herror("down")):
        assert addr.resolve(CacheMode.READ) is None


def test_clear_hostname_cache():
    addr = Address.from_string(socket.AF_INET, "192.0.2.54")
    with patch("socket.gethostbyaddr", return_value=("gone.example.com", [], [])):
        addr.resolve(CacheMode.ENABLED)
    clear_hostname_cache()
    with patch("socket.gethostbyaddr", side_effect=socket.herror("down")):
        assert addr.resolve(CacheMode.ENABLED) is None