"""Local and remote IP address helpers."""

from __future__ import annotations

import ipaddress
import socket
from collections.abc import Mapping

import psutil

__all__ = [
    "X_FORWARDED_FOR",
    "X_REAL_IP",
    "X_CLIENT_IP",
    "NoLocalIPError",
    "get_local_ip",
    "get_rpc_register_ip",
    "get_listen_ip",
    "remote_ip",
]

X_FORWARDED_FOR = "X-Forwarded-For"
X_REAL_IP = "X-Real-IP"
X_CLIENT_IP = "x-client-ip"

_PRIVATE_NETWORKS = tuple(
    ipaddress.IPv4Network(net) for net in ("10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16")
)


class NoLocalIPError(OSError):
    """Raised when no usable local IPv4 address is found."""


def _is_private(ip: ipaddress.IPv4Address) -> bool:
    return any(ip in net for net in _PRIVATE_NETWORKS)


def _parse_ipv4(text: str) -> ipaddress.IPv4Address | None:
    try:
        return ipaddress.IPv4Address(text.split("%", 1)[0])
    except ValueError:
        return None


def _interface_is_loopback(stats, addrs) -> bool:
    flags = getattr(stats, "flags", "")
    if isinstance(flags, str) and flags:
        return "loopback" in flags.split(",")
    for addr in addrs:
        if addr.family == socket.AF_INET:
            ip = _parse_ipv4(addr.address)
            if ip is not None and ip.is_loopback:
                return True
    return False


def get_local_ip() -> str:
    """Return a local IPv4 address, preferring private over public ones."""
    addresses = psutil.net_if_addrs()
    statistics = psutil.net_if_stats()
    public_ip = ""
    for name, addrs in addresses.items():
        stats = statistics.get(name)
        if stats is None or not stats.isup or _interface_is_loopback(stats, addrs):
            continue
        for addr in addrs:
            if addr.family != socket.AF_INET:
                continue
            ip = _parse_ipv4(addr.address)
            if ip is None or ip.is_loopback or ip.is_multicast:
                continue
            if not _is_private(ip) and not public_ip:
                public_ip = str(ip)
            else:
                return str(ip)
    if public_ip:
        return public_ip
    raise NoLocalIPError("no suitable local IP address found")


def get_rpc_register_ip(config_ip: str = "") -> str:
    """The configured address, or a detected local one when it is empty."""
    return config_ip or get_local_ip()


def get_listen_ip(config_ip: str = "") -> str:
    return config_ip or "0.0.0.0"


def _header(headers: Mapping[str, str], name: str) -> str:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return ""


def _split_host(address: str) -> str | None:
    """Host part of a "host:port" address, or None if it is not one."""
    if address.startswith("["):
        end = address.find("]")
        if end < 0 or not address[end + 1:].startswith(":"):
            return None
        if ":" in address[end + 2:] or "[" in address[1:end]:
            return None
        return address[1:end]
    if address.count(":") != 1:
        return None
    return address.split(":", 1)[0]


def remote_ip(headers: Mapping[str, str] | None = None, remote_addr: str = "") -> str:
    """Client address of a request, honouring proxy headers before the peer address."""
    headers = headers or {}
    for name in (X_CLIENT_IP, X_REAL_IP):
        value = _header(headers, name)
        if value:
            return value
    forwarded = _header(headers, X_FORWARDED_FOR)
    if forwarded:
        return forwarded.split(",")[0].strip()
    host = _split_host(remote_addr)
    ip = remote_addr if host is None else host
    if ip == "::1":
        return "127.0.0.1"
    return ip